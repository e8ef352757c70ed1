from fastapi import APIRouter, Depends, HTTPException, status

from app.auth.dependencies import get_school_api
from app.auth.rbac import require_editable_school
from app.auth.schemas import SchoolContext
from app.core.exceptions import ServiceError
from app.core.inflight import inflight
from app.core.school_api import SchoolApiClient

from .schemas import ClassSaveResult, GradeDraft, SectionSubjectCreate
from . import service

router = APIRouter(prefix="/api/v1/schools/{school_id}", tags=["classes"])


def _save_key(school_id: str, draft: GradeDraft) -> tuple:
    # a new grade is identified by its name until the backend assigns an id
    if draft.id:
        return ("class", school_id, draft.id)
    return ("class", school_id, None, draft.name.strip())


@router.post(
    "/class-drafts/save",
    response_model=ClassSaveResult,
)
async def save_class_draft(
    payload: GradeDraft,
    context: SchoolContext = Depends(require_editable_school),
    api: SchoolApiClient = Depends(get_school_api),
) -> ClassSaveResult:
    """Create a grade, or reconcile an edited one section by section. Stops at the first failing call."""
    try:
        async with inflight.claim(_save_key(context.school_id, payload)):
            return await service.save_grade_draft(api, context.school_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete(
    "/grades/{grade_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_grade(
    grade_id: str,
    context: SchoolContext = Depends(require_editable_school),
    api: SchoolApiClient = Depends(get_school_api),
) -> None:
    try:
        await service.delete_grade(api, context.school_id, grade_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post(
    "/sections/{section_id}/subjects",
    status_code=status.HTTP_201_CREATED,
)
async def add_section_subject(
    section_id: str,
    payload: SectionSubjectCreate,
    context: SchoolContext = Depends(require_editable_school),
    api: SchoolApiClient = Depends(get_school_api),
) -> dict:
    try:
        await service.add_section_subject(api, context.school_id, section_id, payload.name)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return {"message": "Subject added"}


@router.delete(
    "/section-subjects/{subject_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_section_subject(
    subject_id: str,
    context: SchoolContext = Depends(require_editable_school),
    api: SchoolApiClient = Depends(get_school_api),
) -> None:
    try:
        await service.delete_section_subject(api, context.school_id, subject_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
