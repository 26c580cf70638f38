"""
Test fixtures for the integrations API.

Every test gets a fresh in-memory SQLite database. The FastAPI app is wired to
the same session the test uses, and the Zoom revocation client is replaced by
a recording fake.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from integrations_api.auth import create_session_token  # noqa: E402
from integrations_api.database import Base, get_db  # noqa: E402
from integrations_api.domain.integrations.router import get_revocation_client  # noqa: E402
from integrations_api.main import app  # noqa: E402
from integrations_api.models import (  # noqa: E402
    ApiKey,
    Booking,
    BookingReference,
    BookingStatus,
    Credential,
    Payment,
    User,
    Webhook,
)


class FakeRevocationClient:
    """Records revoked tokens instead of calling Zoom"""

    def __init__(self):
        self.revoked_tokens = []

    async def revoke(self, access_token):
        self.revoked_tokens.append(access_token)
        return {"status": "success"}


@pytest.fixture(scope="function")
def db_session() -> Session:
    """Create a database session backed by a fresh in-memory database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()

    yield session

    session.rollback()
    session.close()
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def revocation_client() -> FakeRevocationClient:
    return FakeRevocationClient()


@pytest.fixture
def client(db_session, revocation_client):
    """TestClient sharing the test's database session."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_revocation_client] = lambda: revocation_client

    yield TestClient(app)

    app.dependency_overrides.clear()


# ============================================================================
# DATA FACTORIES
# ============================================================================


def make_user(db: Session, email: str = "owner@example.com") -> User:
    user = User(email=email, name=email.split("@")[0])
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_credential(
    db: Session,
    user: User,
    credential_type: str = "zoom_video",
    app_id=None,
    access_token: str = "zoom-access-token",
) -> Credential:
    credential = Credential(
        user_id=user.id,
        type=credential_type,
        app_id=app_id,
        key={"access_token": access_token, "refresh_token": "refresh"},
    )
    db.add(credential)
    db.commit()
    db.refresh(credential)
    return credential


def make_booking(
    db: Session,
    user: User,
    paid: bool = False,
    status: BookingStatus = BookingStatus.ACCEPTED,
    payments=(),
    reference_count: int = 0,
) -> Booking:
    """Create a booking; payments is a sequence of success flags."""
    booking = Booking(user_id=user.id, title="Consultation", paid=paid, status=status.value)
    db.add(booking)
    db.flush()
    for success in payments:
        db.add(Payment(booking_id=booking.id, amount=50.0, success=success))
    for i in range(reference_count):
        db.add(BookingReference(booking_id=booking.id, type="zoom_video", uid=f"meeting-{booking.id}-{i}"))
    db.commit()
    db.refresh(booking)
    return booking


@pytest.fixture
def user(db_session) -> User:
    return make_user(db_session)


@pytest.fixture
def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_session_token(user.id)}"}


@pytest.fixture
def zapier_user_data(db_session, user):
    """User with a zapier-tagged zoom credential, tagged and untagged API keys and webhooks."""
    credential = make_credential(db_session, user, app_id="zapier")
    tagged_key = ApiKey(user_id=user.id, app_id="zapier", hashed_key="hash-zapier")
    untagged_key = ApiKey(user_id=user.id, app_id=None, hashed_key="hash-plain")
    tagged_hook = Webhook(user_id=user.id, app_id="zapier", subscriber_url="https://hooks.zapier.com/1")
    untagged_hook = Webhook(user_id=user.id, app_id=None, subscriber_url="https://example.com/hook")
    db_session.add_all([tagged_key, untagged_key, tagged_hook, untagged_hook])
    db_session.commit()
    return {
        "credential_id": credential.id,
        "tagged_key_id": tagged_key.id,
        "untagged_key_id": untagged_key.id,
        "tagged_hook_id": tagged_hook.id,
        "untagged_hook_id": untagged_hook.id,
    }
