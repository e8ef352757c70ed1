import logging

from app.core.school_api import SchoolApiClient

from . import editor
from .schemas import TutorDraft, TutorSaveResult

logger = logging.getLogger(__name__)

PASSWORD_PLACEHOLDER = "Check email"


async def save_tutor_draft(api: SchoolApiClient, school_id: str, draft: TutorDraft) -> TutorSaveResult:
    """One create or update call, chosen by the presence of the draft id."""
    editor.validate_tutor_draft(draft)
    if draft.id:
        await api.update_tutor(school_id, draft.id, draft.payload())
        logger.info("School %s: updated tutor %s", school_id, draft.id)
        return TutorSaveResult(created=False, tutor_id=draft.id)

    response = await api.create_tutor(school_id, draft.payload())
    if not isinstance(response, dict):
        response = {}
    tutor = response.get("tutor") if isinstance(response.get("tutor"), dict) else response
    tutor_id = tutor.get("id")
    logger.info("School %s: created tutor %s", school_id, tutor_id)
    return TutorSaveResult(
        created=True,
        tutor_id=str(tutor_id) if tutor_id is not None else None,
        temporary_password=response.get("temporaryPassword") or PASSWORD_PLACEHOLDER,
    )


async def delete_tutor(api: SchoolApiClient, school_id: str, tutor_id: str) -> None:
    await api.delete_tutor(school_id, tutor_id)
    logger.info("School %s: deleted tutor %s", school_id, tutor_id)
