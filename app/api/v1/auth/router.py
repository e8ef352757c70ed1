from fastapi import APIRouter, Depends, HTTPException
from fastapi import status as http_status

from app.auth.dependencies import get_current_user, get_public_school_api
from app.auth.schemas import CurrentUser, LoginRequest, LoginResponse
from app.auth.services import login_user
from app.core.exceptions import ServiceError
from app.core.school_api import SchoolApiClient

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=http_status.HTTP_200_OK,
)
async def login(
    payload: LoginRequest,
    api: SchoolApiClient = Depends(get_public_school_api),
) -> LoginResponse:
    """Exchange credentials with the school backend; returns its tokens and the role's landing page."""
    try:
        return await login_user(api, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/me", response_model=CurrentUser)
async def me(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    return current_user
