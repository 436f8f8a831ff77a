"""JWT issuing and the authenticated-principal dependency."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from giving_server.core.config import get_settings
from giving_server.core.errors import AuthError
from giving_server.schemas import TokenData

security = HTTPBearer(auto_error=False)


def create_access_token(
    user_guid: str,
    charity: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    settings = get_settings()
    expire_delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": user_guid,
        "charity": charity,
        "exp": datetime.now(timezone.utc) + expire_delta,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> TokenData:
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        raise AuthError("Invalid or expired token") from exc

    user_guid = payload.get("sub")
    if not user_guid:
        raise AuthError("Invalid or expired token")
    return TokenData(user_guid=user_guid, charity=payload.get("charity"))


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenData:
    if credentials is None or not credentials.credentials:
        raise AuthError("Authorization token required")
    return decode_access_token(credentials.credentials)


async def get_optional_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[TokenData]:
    """Principal for endpoints open to anonymous callers; a bad token reads as anonymous."""
    if credentials is None or not credentials.credentials:
        return None
    try:
        return decode_access_token(credentials.credentials)
    except AuthError:
        return None


__all__ = [
    "create_access_token",
    "decode_access_token",
    "get_current_principal",
    "get_optional_principal",
]
