import logging
from typing import Any, Dict, Optional

from fastapi import status

from app.auth.schemas import CurrentUser, LoginRequest, LoginResponse, SchoolContext, TokenPair
from app.auth.token_store import TokenStore
from app.core.enums import Role
from app.core.exceptions import ServiceError, UpstreamError
from app.core.school_api import SchoolApiClient

logger = logging.getLogger(__name__)

LANDING_PATHS = {
    Role.SUPERADMIN.value: "/superadmin/dashboard",
    Role.SCHOOL_ADMIN.value: "/schooladmin/dashboard",
    Role.TEACHER.value: "/teacher/dashboard",
}

UNKNOWN_ROLE_MESSAGE = "Unknown role. Please contact admin."
LOGIN_FAILED_MESSAGE = "Login failed. Please check your credentials."


def landing_path(role: Optional[str]) -> str:
    path = LANDING_PATHS.get(role or "")
    if path is None:
        raise ServiceError(UNKNOWN_ROLE_MESSAGE, status.HTTP_403_FORBIDDEN)
    return path


async def login_user(
    api: SchoolApiClient,
    payload: LoginRequest,
    store: Optional[TokenStore] = None,
) -> LoginResponse:
    data: Dict[str, Any] = await api.login(payload.email, payload.password) or {}
    if not data.get("accessToken"):
        raise UpstreamError(LOGIN_FAILED_MESSAGE, status.HTTP_401_UNAUTHORIZED)
    tokens = TokenPair(**data)
    role = (data.get("user") or {}).get("role")
    redirect_to = landing_path(role)
    if store is not None:
        store.save(tokens)
    logger.info("Login succeeded for role %s", role)
    return LoginResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        role=role,
        redirect_to=redirect_to,
    )


def logout(store: TokenStore) -> None:
    store.clear()


async def resolve_current_user(api: SchoolApiClient) -> CurrentUser:
    body = await api.me() or {}
    data = body.get("data") or body
    if not data.get("role"):
        raise UpstreamError("Could not resolve the current session", status.HTTP_401_UNAUTHORIZED)
    return CurrentUser(
        role=data["role"],
        school_id=data.get("schoolId"),
        name=data.get("name"),
        email=data.get("email"),
    )


def school_context(user: CurrentUser, school_id: Optional[str] = None) -> SchoolContext:
    """
    Capability of `user` on a school.

    SUPERADMIN may open and edit any school. SCHOOL_ADMIN edits only its own
    school. TEACHER sees its own school read-only. `school_id=None` means the
    user's own school.
    """
    if user.role == Role.SUPERADMIN.value:
        if not school_id:
            raise ServiceError("School id is required", status.HTTP_400_BAD_REQUEST)
        return SchoolContext(school_id=school_id, role=user.role, can_edit=True)
    if user.role not in (Role.SCHOOL_ADMIN.value, Role.TEACHER.value):
        raise ServiceError(UNKNOWN_ROLE_MESSAGE, status.HTTP_403_FORBIDDEN)
    if not user.school_id:
        raise ServiceError("No school assigned", status.HTTP_403_FORBIDDEN)
    if school_id and school_id != user.school_id:
        raise ServiceError("You do not have access to this school", status.HTTP_403_FORBIDDEN)
    return SchoolContext(
        school_id=user.school_id,
        role=user.role,
        can_edit=user.role == Role.SCHOOL_ADMIN.value,
    )
