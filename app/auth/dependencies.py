from typing import AsyncGenerator

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from app.auth.schemas import CurrentUser
from app.auth.services import resolve_current_user
from app.core.exceptions import UpstreamError
from app.core.school_api import SchoolApiClient


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


async def get_public_school_api() -> AsyncGenerator[SchoolApiClient, None]:
    """Upstream client without credentials (login only)."""
    async with SchoolApiClient() as api:
        yield api


async def get_school_api(token: str = Depends(oauth2_scheme)) -> AsyncGenerator[SchoolApiClient, None]:
    """Upstream client forwarding the caller's bearer token."""
    async with SchoolApiClient(token=token) as api:
        yield api


async def get_current_user(api: SchoolApiClient = Depends(get_school_api)) -> CurrentUser:
    """Resolve the caller's role and school through the backend's /auth/me."""
    try:
        return await resolve_current_user(api)
    except UpstreamError as e:
        if e.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Could not validate credentials",
                headers={"WWW-Authenticate": "Bearer"},
            )
        raise HTTPException(status_code=e.status_code, detail=e.message)
