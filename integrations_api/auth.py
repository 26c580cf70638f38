import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from .config import SECRET_KEY
from .database import get_db
from .models import User

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
SESSION_TTL = timedelta(days=30)
UNAUTHENTICATED_MESSAGE = "You must be logged in to do this"


class UnauthenticatedError(Exception):
    """No valid session on the request; answered with 401 by the app"""


# auto_error=False so a missing header is answered with our own 401 message
security = HTTPBearer(auto_error=False)


def create_session_token(user_id: int, expires_delta: timedelta = SESSION_TTL) -> str:
    """Issue a signed session token for a user"""
    expire = datetime.now(timezone.utc) + expires_delta
    return jwt.encode({"sub": str(user_id), "exp": expire}, SECRET_KEY, algorithm=ALGORITHM)


def decode_session_token(token: str) -> Optional[int]:
    """Return the user id carried by a session token, or None if it is not valid"""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"⚠️ Session token rejected: {str(e)}")
        return None

    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        logger.warning("⚠️ Session token missing user ID claim")
        return None
    return int(subject)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the signed-in user from the bearer session token"""
    if not credentials:
        raise UnauthenticatedError(UNAUTHENTICATED_MESSAGE)

    user_id = decode_session_token(credentials.credentials)
    if user_id is None:
        raise UnauthenticatedError(UNAUTHENTICATED_MESSAGE)

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        logger.warning(f"⚠️ Session token for unknown user id: {user_id}")
        raise UnauthenticatedError(UNAUTHENTICATED_MESSAGE)

    logger.debug(f"✅ User authenticated: {user.email}")
    return user
