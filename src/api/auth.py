"""Request authentication

Resolves the calling user from a Bearer JWT (sub = user id) and then to
an organization through their profile. With AUTH_DISABLED the X-User-Id
header is trusted instead, for local development.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends, Header, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.directory_repository import SqlAlchemyDirectoryRepository
from src.app.use_cases.invoicing.dtos import ActorDTO
from src.app.use_cases.invoicing.resolve_actor import ResolveActor
from src.depends import get_session
from src.api.error import ClientError

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

ACCESS_TOKEN_EXPIRE_MINUTES = 60


def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {"sub": user_id, "type": "access", "exp": expire}
    return jwt.encode(
        payload, ApplicationConfig.JWT_SECRET_KEY, algorithm=ApplicationConfig.JWT_ALGORITHM
    )


def decode_token(token: str) -> dict:
    """Decode and validate a JWT. Returns empty dict on failure."""
    try:
        return jwt.decode(
            token,
            ApplicationConfig.JWT_SECRET_KEY,
            algorithms=[ApplicationConfig.JWT_ALGORITHM],
        )
    except JWTError as e:
        logger.debug(f"Rejected bearer token: {e}")
        return {}


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    x_user_id: Optional[str] = Header(default=None),
) -> Optional[str]:
    if ApplicationConfig.AUTH_DISABLED and x_user_id:
        return x_user_id
    if credentials is None:
        return None
    return decode_token(credentials.credentials).get("sub")


async def get_actor(
    user_id: Optional[str] = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> ActorDTO:
    result = await ResolveActor(SqlAlchemyDirectoryRepository(session)).execute(user_id)

    if result.is_err():
        if result.error.code == "NOT_AUTHENTICATED":
            raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ClientError(result.error, status_code=status.HTTP_403_FORBIDDEN)

    return result.value
