import logging
from typing import List, Optional

from app.core.exceptions import DraftValidationError, PartialSaveError, UpstreamError
from app.core.school_api import SchoolApiClient

from . import editor
from .schemas import SUBJECT_NAME_MAX_LENGTH, ClassSaveResult, GradeDraft, SaveStep

logger = logging.getLogger(__name__)


def _created_grade_id(response) -> Optional[str]:
    if isinstance(response, dict):
        grade = response.get("grade") if isinstance(response.get("grade"), dict) else response
        grade_id = grade.get("id")
        return str(grade_id) if grade_id is not None else None
    return None


async def _apply_step(api: SchoolApiClient, school_id: str, grade_id: Optional[str], step: SaveStep):
    if step.action == "create_grade":
        sections = [{"name": s.name, "subjects": s.subjects} for s in step.sections]
        return await api.create_grade(school_id, step.name, sections)
    if step.action == "rename_grade":
        return await api.rename_grade(school_id, grade_id, step.name)
    if step.action == "delete_section":
        return await api.delete_section(school_id, step.section_id)
    if step.action == "create_section":
        return await api.create_section(school_id, grade_id, step.name, step.subjects)
    if step.action == "replace_subjects":
        return await api.replace_section_subjects(school_id, step.section_id, step.subjects)
    raise ValueError(f"Unknown save step {step.action}")


async def save_grade_draft(api: SchoolApiClient, school_id: str, draft: GradeDraft) -> ClassSaveResult:
    """
    Converge the backend to `draft`.

    Steps run one after another; the first failure stops the sequence. Steps
    already applied stay applied (PartialSaveError lists them).
    """
    steps = editor.plan_save(draft)
    completed: List[str] = []
    grade_id = draft.id
    for step in steps:
        try:
            response = await _apply_step(api, school_id, draft.id, step)
        except UpstreamError as e:
            logger.warning(
                "Saving class %r in school %s stopped at '%s': %s",
                draft.name, school_id, step.describe(), e.message,
            )
            if completed:
                raise PartialSaveError(e, completed) from e
            raise
        if step.action == "create_grade":
            grade_id = _created_grade_id(response)
        completed.append(step.describe())
        logger.info("School %s: %s", school_id, step.describe())
    return ClassSaveResult(created=draft.id is None, grade_id=grade_id, steps=completed)


async def delete_grade(api: SchoolApiClient, school_id: str, grade_id: str) -> None:
    await api.delete_grade(school_id, grade_id)
    logger.info("School %s: deleted grade %s", school_id, grade_id)


async def add_section_subject(
    api: SchoolApiClient,
    school_id: str,
    section_id: str,
    name: str,
) -> None:
    name = name.strip()
    if not name:
        raise DraftValidationError("Please enter a subject name")
    if len(name) > SUBJECT_NAME_MAX_LENGTH:
        raise DraftValidationError(f"Subject name must be at most {SUBJECT_NAME_MAX_LENGTH} characters")
    await api.add_section_subject(school_id, section_id, name)
    logger.info("School %s: added subject %s to section %s", school_id, name, section_id)


async def delete_section_subject(api: SchoolApiClient, school_id: str, subject_id: str) -> None:
    await api.delete_section_subject(school_id, subject_id)
    logger.info("School %s: removed section subject %s", school_id, subject_id)
