from fastapi import APIRouter, Depends, HTTPException, status

from app.auth.dependencies import get_school_api
from app.auth.rbac import require_editable_school
from app.auth.schemas import SchoolContext
from app.core.exceptions import ServiceError
from app.core.inflight import inflight
from app.core.school_api import SchoolApiClient

from .schemas import TutorDraft, TutorSaveResult
from . import service

router = APIRouter(prefix="/api/v1/schools/{school_id}", tags=["tutors"])


def _save_key(school_id: str, draft: TutorDraft) -> tuple:
    # a create has no id yet; the email identifies it
    if draft.id:
        return ("tutor", school_id, draft.id)
    return ("new-tutor", school_id, draft.email.strip().lower())


@router.post(
    "/tutor-drafts/save",
    response_model=TutorSaveResult,
)
async def save_tutor_draft(
    payload: TutorDraft,
    context: SchoolContext = Depends(require_editable_school),
    api: SchoolApiClient = Depends(get_school_api),
) -> TutorSaveResult:
    try:
        async with inflight.claim(_save_key(context.school_id, payload)):
            return await service.save_tutor_draft(api, context.school_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete(
    "/tutors/{tutor_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_tutor(
    tutor_id: str,
    context: SchoolContext = Depends(require_editable_school),
    api: SchoolApiClient = Depends(get_school_api),
) -> None:
    try:
        await service.delete_tutor(api, context.school_id, tutor_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
