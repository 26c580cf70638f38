"""Integration service - Listing and removal of third-party integrations"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import SCOPE_BOOKING_REFERENCE_CLEANUP
from ...models import User
from .repository import IntegrationRepository
from .revocation import ZoomRevocationClient
from .schemas import RemovalAction

logger = logging.getLogger(__name__)

ZOOM_VIDEO_TYPE = "zoom_video"
AUTOMATION_APP_ID = "zapier"
PAYMENT_PROVIDER_REMOVED_REASON = "Payment provider got removed"


class CascadeCleanupError(Exception):
    """Booking cleanup failed after the credential was already removed"""


class IntegrationService:
    """Service layer for integration business logic"""

    def __init__(
        self,
        db: Session,
        revocation_client: ZoomRevocationClient,
        scope_reference_cleanup: bool = SCOPE_BOOKING_REFERENCE_CLEANUP,
    ):
        self.db = db
        self.repo = IntegrationRepository()
        self.revocation_client = revocation_client
        self.scope_reference_cleanup = scope_reference_cleanup

    def list_integration_types(self, user: User) -> list[str]:
        """Get the type of every integration the user has connected"""
        return self.repo.get_credential_types(self.db, user.id)

    async def remove_integration(
        self, user: User, credential_id: int, action: Optional[RemovalAction] = None
    ) -> None:
        """
        Remove one of the user's integrations.

        The credential delete (with the automation-app API key and webhook cascade)
        is committed before any booking cleanup runs. If the cleanup fails,
        CascadeCleanupError is raised and the credential stays deleted.
        """
        # Read once: commits and rollbacks below expire the user instance
        user_id = user.id

        credential = self.repo.get_credential_for_user(self.db, credential_id, user_id)
        if not credential:
            logger.warning(
                f"⚠️ User {user_id} tried to remove integration {credential_id} they do not own"
            )
            raise HTTPException(status_code=404, detail="Integration not found")

        await self._revoke_video_credential(user_id)

        cascade_app_id = AUTOMATION_APP_ID if credential.app_id == AUTOMATION_APP_ID else None
        self.repo.delete_credential(self.db, credential, user_id, cascade_app_id=cascade_app_id)
        logger.info(
            f"✅ Integration {credential_id} removed for user {user_id}"
            + (f" (with {cascade_app_id} API keys and webhooks)" if cascade_app_id else "")
        )

        if action is not None:
            self._clean_up_bookings(user_id, action)

    async def _revoke_video_credential(self, user_id: int) -> None:
        video_credential = self.repo.get_credential_by_type(self.db, user_id, ZOOM_VIDEO_TYPE)
        access_token = (video_credential.key or {}).get("access_token") if video_credential else None

        if not access_token:
            logger.warning(f"⚠️ No {ZOOM_VIDEO_TYPE} access token for user {user_id}, skipping revoke")
            return

        await self.revocation_client.revoke(access_token)

    def _clean_up_bookings(self, user_id: int, action: RemovalAction) -> None:
        """Settle the user's unpaid bookings that have payments, in one transaction"""
        try:
            booking_ids = self.repo.get_unpaid_booking_ids_with_payments(self.db, user_id)
            accepted_booking_ids = self.repo.get_accepted_booking_ids(
                self.db, user_id if self.scope_reference_cleanup else None
            )

            self.repo.delete_failed_payments(self.db, booking_ids)
            if action == RemovalAction.CANCEL:
                self.repo.cancel_bookings(self.db, booking_ids, PAYMENT_PROVIDER_REMOVED_REASON)
                self.repo.delete_booking_references(self.db, accepted_booking_ids)
            else:
                self.repo.mark_bookings_paid(self.db, booking_ids)

            self.db.commit()
            logger.info(
                f"✅ Booking cleanup ({action.value}) applied to {len(booking_ids)} bookings for user {user_id}"
            )
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Booking cleanup ({action.value}) failed for user {user_id}: {str(e)}")
            raise CascadeCleanupError(str(e)) from e
