"""Integration router - FastAPI endpoints for connected integrations"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...config import ZOOM_OAUTH_CONFIG
from ...database import get_db
from ...models import User
from .revocation import ZoomRevocationClient
from .schemas import DeleteIntegrationRequest, IntegrationMessageResponse, IntegrationTypeResponse
from .service import CascadeCleanupError, IntegrationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/integrations", tags=["Integrations"])


def get_revocation_client() -> ZoomRevocationClient:
    """Dependency injection for the Zoom revocation client"""
    return ZoomRevocationClient(ZOOM_OAUTH_CONFIG)


def get_integration_service(
    db: Session = Depends(get_db),
    revocation_client: ZoomRevocationClient = Depends(get_revocation_client),
) -> IntegrationService:
    """Dependency injection for IntegrationService"""
    return IntegrationService(db, revocation_client)


@router.get("", response_model=list[IntegrationTypeResponse])
async def list_integrations(
    current_user: User = Depends(get_current_user),
    service: IntegrationService = Depends(get_integration_service),
):
    """List the integration types connected to the current user"""
    return [
        IntegrationTypeResponse(type=integration_type)
        for integration_type in service.list_integration_types(current_user)
    ]


@router.delete("", response_model=IntegrationMessageResponse)
async def delete_integration(
    data: DeleteIntegrationRequest,
    current_user: User = Depends(get_current_user),
    service: IntegrationService = Depends(get_integration_service),
):
    """Remove an integration, optionally cancelling or settling unpaid bookings"""
    try:
        await service.remove_integration(current_user, data.id, data.removal_action)
    except CascadeCleanupError:
        return JSONResponse(
            status_code=500, content={"message": "Integration could not be deleted"}
        )

    return IntegrationMessageResponse(message="Integration deleted successfully")
