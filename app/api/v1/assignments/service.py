import logging
from typing import List

from fastapi import status

from app.core.exceptions import ServiceError
from app.core.school_api import SchoolApiClient
from app.core.schemas import Grade, assignment_key

from app.api.v1.dashboard.service import locate_section_subject

from . import editor
from .schemas import AssignmentDraft, AssignmentSaveResult

logger = logging.getLogger(__name__)


async def save_assignment_draft(
    api: SchoolApiClient,
    school_id: str,
    draft: AssignmentDraft,
) -> AssignmentSaveResult:
    """
    Send the whole draft in one call. Editing replaces the tutor's record in
    full; nothing is diffed against what the backend holds.
    """
    editor.validate_assignment_draft(draft)
    if draft.id:
        await api.replace_assignment(school_id, draft.payload())
        logger.info("School %s: replaced assignments of tutor %s", school_id, draft.tutor_id)
        return AssignmentSaveResult(created=False, tutor_id=draft.tutor_id)
    await api.create_assignment(school_id, draft.payload())
    logger.info("School %s: assigned tutor %s", school_id, draft.tutor_id)
    return AssignmentSaveResult(created=True, tutor_id=draft.tutor_id)


async def delete_assignment(api: SchoolApiClient, school_id: str, assignment_id: str) -> None:
    await api.delete_assignment(school_id, assignment_id)
    logger.info("School %s: deleted assignment %s", school_id, assignment_id)


async def delete_tutor_assignments(api: SchoolApiClient, school_id: str, tutor_id: str) -> None:
    await api.delete_tutor_assignments(school_id, tutor_id)
    logger.info("School %s: removed all assignments of tutor %s", school_id, tutor_id)


async def assign_tutor_to_subject(
    api: SchoolApiClient,
    school_id: str,
    grades: List[Grade],
    subject_id: str,
    tutor_id: str,
) -> AssignmentSaveResult:
    """Make `tutor_id` the tutor of one section subject, identified by its id."""
    if not tutor_id:
        raise ServiceError("Please select a tutor", status.HTTP_400_BAD_REQUEST)
    found = locate_section_subject(grades, subject_id)
    if found is None:
        raise ServiceError("Section not found", status.HTTP_404_NOT_FOUND)
    grade, section, subject = found
    payload = {
        "tutorId": tutor_id,
        "assignments": {assignment_key(grade.name, section.name): [subject.name]},
    }
    await api.create_assignment(school_id, payload)
    logger.info("School %s: tutor %s now teaches %s in %s", school_id, tutor_id, subject.name, grade.name)
    return AssignmentSaveResult(created=True, tutor_id=tutor_id)
