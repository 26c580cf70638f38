import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./integrations.db")

# Security - CRITICAL: No default secret key in production
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings

    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

# Zoom OAuth Configuration
ZOOM_CLIENT_ID = os.getenv("ZOOM_CLIENT_ID")
ZOOM_CLIENT_SECRET = os.getenv("ZOOM_CLIENT_SECRET")
ZOOM_REVOKE_URL = os.getenv("ZOOM_REVOKE_URL", "https://zoom.us/oauth/revoke")
ZOOM_REVOKE_TIMEOUT_SECONDS = float(os.getenv("ZOOM_REVOKE_TIMEOUT_SECONDS", "10"))

# When true, booking reference cleanup only touches the caller's ACCEPTED bookings
SCOPE_BOOKING_REFERENCE_CLEANUP = (
    os.getenv("SCOPE_BOOKING_REFERENCE_CLEANUP", "false").lower() == "true"
)


@dataclass(frozen=True)
class OAuthClientConfig:
    """OAuth client credentials for a provider, read once at startup"""

    client_id: Optional[str]
    client_secret: Optional[str]
    revoke_url: str
    timeout_seconds: float = 10.0


ZOOM_OAUTH_CONFIG = OAuthClientConfig(
    client_id=ZOOM_CLIENT_ID,
    client_secret=ZOOM_CLIENT_SECRET,
    revoke_url=ZOOM_REVOKE_URL,
    timeout_seconds=ZOOM_REVOKE_TIMEOUT_SECONDS,
)
