import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.database import get_db
from shared.core.exceptions import UnauthorizedError
from shared.core.schemas import UserToken
from shared.models.users import Users

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_minutes: Optional[int] = None) -> str:
    payload = data.copy()
    minutes = settings.JWT_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    payload['exp'] = datetime.now(timezone.utc) + timedelta(minutes=minutes)

    return jwt.encode(payload, settings.JWT_SECRET,
                      algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verify signature and expiry; any failure is reported as one error."""
    try:
        return jwt.decode(token, settings.JWT_SECRET,
                          algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        logger.debug("Token rejected: %s", exc)
        raise UnauthorizedError("Invalid token")


def validate_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> UserToken:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Not authorized, no token")

    claims = decode_access_token(credentials.credentials)
    if not claims.get("id"):
        raise UnauthorizedError("Invalid token")

    user_data = UserToken(**claims)

    # tokens of deleted users must stop working
    if db.get(Users, user_data.user_id) is None:
        raise UnauthorizedError("User not found")

    return user_data
