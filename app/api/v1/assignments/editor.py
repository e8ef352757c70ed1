from app.core.exceptions import DraftValidationError
from app.core.schemas import Assignment, assignment_key

from .schemas import AssignmentDraft


def new_assignment_draft() -> AssignmentDraft:
    return AssignmentDraft()


def assignment_draft_from(assignment: Assignment) -> AssignmentDraft:
    return AssignmentDraft(
        id=assignment.id,
        tutor_id=assignment.tutor_id,
        assignments={key: list(subjects) for key, subjects in assignment.assignments.items()},
        class_grade=assignment.class_grade or "",
        class_section=assignment.class_section or "",
    )


def select_tutor(draft: AssignmentDraft, tutor_id: str) -> AssignmentDraft:
    return draft.model_copy(update={"tutor_id": tutor_id}, deep=True)


def toggle_subject(draft: AssignmentDraft, grade_name: str, section_name: str, subject: str) -> AssignmentDraft:
    key = assignment_key(grade_name, section_name)
    updated = draft.model_copy(deep=True)
    current = updated.assignments.get(key, [])
    if subject in current:
        updated.assignments[key] = [s for s in current if s != subject]
    else:
        updated.assignments[key] = current + [subject]
    return updated


def subjects_for_section(draft: AssignmentDraft, grade_name: str, section_name: str) -> list:
    return list(draft.assignments.get(assignment_key(grade_name, section_name), []))


def set_class_tutor(draft: AssignmentDraft, class_grade: str, class_section: str = "") -> AssignmentDraft:
    """Clearing the grade clears the section as well."""
    if not class_grade:
        class_section = ""
    return draft.model_copy(update={"class_grade": class_grade, "class_section": class_section}, deep=True)


def validate_assignment_draft(draft: AssignmentDraft) -> None:
    if not draft.tutor_id:
        raise DraftValidationError("Please select a tutor")
    has_subjects = any(subjects for subjects in draft.assignments.values())
    if not has_subjects and not draft.class_grade:
        raise DraftValidationError("Please assign at least one subject or class tutor role")
