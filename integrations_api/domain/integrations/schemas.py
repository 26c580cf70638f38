"""Integration domain schemas - Pydantic models for validation"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class RemovalAction(str, Enum):
    """Follow-up applied to the user's unpaid bookings when an integration is removed"""

    CANCEL = "cancel"
    REMOVE = "remove"


class IntegrationTypeResponse(BaseModel):
    """One stored integration of the current user"""

    type: str


class DeleteIntegrationRequest(BaseModel):
    """Schema for removing an integration"""

    id: int
    # Free-form on purpose: values other than cancel/remove skip booking cleanup
    action: Optional[str] = None

    @property
    def removal_action(self) -> Optional[RemovalAction]:
        try:
            return RemovalAction(self.action) if self.action is not None else None
        except ValueError:
            return None


class IntegrationMessageResponse(BaseModel):
    message: str
