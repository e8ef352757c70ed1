from fastapi import APIRouter, Depends, HTTPException

from app.auth.dependencies import get_school_api
from app.auth.rbac import get_own_school_context, get_school_context
from app.auth.schemas import SchoolContext
from app.core.exceptions import ServiceError
from app.core.school_api import SchoolApiClient

from .schemas import DashboardResponse
from . import service

router = APIRouter(prefix="/api/v1", tags=["dashboard"])


async def _dashboard(api: SchoolApiClient, context: SchoolContext) -> DashboardResponse:
    try:
        data = await service.load_dashboard(api, context.school_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return DashboardResponse(
        **data.model_dump(),
        can_edit=context.can_edit,
        unassigned_tutor_ids=[t.id for t in service.unassigned_tutors(data)],
    )


@router.get("/me/dashboard", response_model=DashboardResponse)
async def get_own_dashboard(
    context: SchoolContext = Depends(get_own_school_context),
    api: SchoolApiClient = Depends(get_school_api),
) -> DashboardResponse:
    """Dashboard of the caller's own school (school admins and teachers)."""
    return await _dashboard(api, context)


@router.get("/schools/{school_id}/dashboard", response_model=DashboardResponse)
async def get_school_dashboard(
    context: SchoolContext = Depends(get_school_context),
    api: SchoolApiClient = Depends(get_school_api),
) -> DashboardResponse:
    return await _dashboard(api, context)
