"""Integration repository - Database operations for credentials and their dependents"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import (
    ApiKey,
    Booking,
    BookingReference,
    BookingStatus,
    Credential,
    Payment,
    Webhook,
)


class IntegrationRepository:
    """Repository for integration database operations"""

    @staticmethod
    def get_credential_types(db: Session, user_id: int) -> list[str]:
        """Get the type of every credential stored for a user"""
        rows = db.query(Credential.type).filter(Credential.user_id == user_id).all()
        return [row.type for row in rows]

    @staticmethod
    def get_credential_for_user(
        db: Session, credential_id: int, user_id: int
    ) -> Optional[Credential]:
        """Get a specific credential owned by the user"""
        return (
            db.query(Credential)
            .filter(Credential.id == credential_id, Credential.user_id == user_id)
            .first()
        )

    @staticmethod
    def get_credential_by_type(
        db: Session, user_id: int, credential_type: str
    ) -> Optional[Credential]:
        """Get the user's first credential of a given integration type"""
        return (
            db.query(Credential)
            .filter(Credential.user_id == user_id, Credential.type == credential_type)
            .first()
        )

    @staticmethod
    def delete_credential(
        db: Session, credential: Credential, user_id: int, cascade_app_id: Optional[str] = None
    ) -> None:
        """
        Delete a credential. When cascade_app_id is given, the user's API keys and
        webhooks tagged with that app are deleted in the same commit.
        """
        db.delete(credential)

        if cascade_app_id is not None:
            db.query(ApiKey).filter(
                ApiKey.user_id == user_id, ApiKey.app_id == cascade_app_id
            ).delete(synchronize_session=False)
            db.query(Webhook).filter(
                Webhook.user_id == user_id, Webhook.app_id == cascade_app_id
            ).delete(synchronize_session=False)

        db.commit()

    # Booking cleanup methods - these do not commit, the caller owns the transaction
    @staticmethod
    def get_unpaid_booking_ids_with_payments(db: Session, user_id: int) -> list[int]:
        """Get ids of the user's unpaid bookings that have at least one payment"""
        rows = (
            db.query(Booking.id)
            .filter(
                Booking.user_id == user_id,
                Booking.paid.is_(False),
                Booking.payments.any(),
            )
            .all()
        )
        return [row.id for row in rows]

    @staticmethod
    def get_accepted_booking_ids(db: Session, user_id: Optional[int] = None) -> list[int]:
        """Get ids of ACCEPTED bookings, across all users unless user_id is given"""
        query = db.query(Booking.id).filter(Booking.status == BookingStatus.ACCEPTED.value)
        if user_id is not None:
            query = query.filter(Booking.user_id == user_id)
        return [row.id for row in query.all()]

    @staticmethod
    def delete_failed_payments(db: Session, booking_ids: list[int]) -> int:
        return (
            db.query(Payment)
            .filter(Payment.booking_id.in_(booking_ids), Payment.success.is_(False))
            .delete(synchronize_session=False)
        )

    @staticmethod
    def cancel_bookings(db: Session, booking_ids: list[int], rejection_reason: str) -> int:
        return (
            db.query(Booking)
            .filter(Booking.id.in_(booking_ids))
            .update(
                {
                    Booking.status: BookingStatus.CANCELLED.value,
                    Booking.rejection_reason: rejection_reason,
                },
                synchronize_session=False,
            )
        )

    @staticmethod
    def mark_bookings_paid(db: Session, booking_ids: list[int]) -> int:
        return (
            db.query(Booking)
            .filter(Booking.id.in_(booking_ids))
            .update({Booking.paid: True}, synchronize_session=False)
        )

    @staticmethod
    def delete_booking_references(db: Session, booking_ids: list[int]) -> int:
        return (
            db.query(BookingReference)
            .filter(BookingReference.booking_id.in_(booking_ids))
            .delete(synchronize_session=False)
        )
