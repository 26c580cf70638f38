"""Integrations domain - Connected third-party integrations and their removal"""

from .router import router

__all__ = ["router"]
