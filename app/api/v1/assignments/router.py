from fastapi import APIRouter, Depends, HTTPException, status

from app.auth.dependencies import get_school_api
from app.auth.rbac import require_editable_school
from app.auth.schemas import SchoolContext
from app.core.exceptions import ServiceError
from app.core.inflight import inflight
from app.core.school_api import SchoolApiClient
from app.core.schemas import Grade

from .schemas import AssignmentDraft, AssignmentSaveResult, SubjectTutorAssign
from . import service

router = APIRouter(prefix="/api/v1/schools/{school_id}", tags=["assignments"])


@router.post(
    "/assignment-drafts/save",
    response_model=AssignmentSaveResult,
)
async def save_assignment_draft(
    payload: AssignmentDraft,
    context: SchoolContext = Depends(require_editable_school),
    api: SchoolApiClient = Depends(get_school_api),
) -> AssignmentSaveResult:
    """Create, or fully replace, one tutor's assignment record."""
    try:
        async with inflight.claim(("assignment", context.school_id, payload.tutor_id)):
            return await service.save_assignment_draft(api, context.school_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete(
    "/assignments/tutor/{tutor_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_tutor_assignments(
    tutor_id: str,
    context: SchoolContext = Depends(require_editable_school),
    api: SchoolApiClient = Depends(get_school_api),
) -> None:
    try:
        await service.delete_tutor_assignments(api, context.school_id, tutor_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete(
    "/assignments/{assignment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_assignment(
    assignment_id: str,
    context: SchoolContext = Depends(require_editable_school),
    api: SchoolApiClient = Depends(get_school_api),
) -> None:
    try:
        await service.delete_assignment(api, context.school_id, assignment_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post(
    "/section-subjects/{subject_id}/tutor",
    response_model=AssignmentSaveResult,
    status_code=status.HTTP_201_CREATED,
)
async def assign_tutor_to_subject(
    subject_id: str,
    payload: SubjectTutorAssign,
    context: SchoolContext = Depends(require_editable_school),
    api: SchoolApiClient = Depends(get_school_api),
) -> AssignmentSaveResult:
    try:
        dashboard = await api.get_dashboard(context.school_id) or {}
        grades = [Grade(**g) for g in dashboard.get("grades") or []]
        return await service.assign_tutor_to_subject(
            api, context.school_id, grades, subject_id, payload.tutor_id
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
