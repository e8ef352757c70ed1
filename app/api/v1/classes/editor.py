"""
Pure transitions of the class/section draft.

Each function returns a new GradeDraft and never touches its argument, so a
rejected action (DraftValidationError) leaves the caller's draft as it was.
"""

from typing import List

from app.core.enums import SECTION_LABELS
from app.core.exceptions import DraftValidationError
from app.core.schemas import Grade

from .schemas import GradeDraft, SaveStep, SectionFormData


def new_grade_draft() -> GradeDraft:
    return GradeDraft()


def grade_draft_from(grade: Grade) -> GradeDraft:
    sections = [
        SectionFormData(id=s.id, name=s.name, subjects=s.subject_names(), is_new=False, to_delete=False)
        for s in grade.sections
    ]
    draft = GradeDraft(id=grade.id, name=grade.name, original_name=grade.name)
    if sections:
        draft.sections_data = sections
    return draft


def _active_index(draft: GradeDraft, index: int) -> SectionFormData:
    if index < 0 or index >= len(draft.sections_data) or draft.sections_data[index].to_delete:
        raise DraftValidationError("Section not found")
    return draft.sections_data[index]


def next_section_label(draft: GradeDraft) -> str:
    used = {s.name for s in draft.active_sections()}
    for label in SECTION_LABELS:
        if label not in used:
            return label
    raise DraftValidationError(f"Maximum {len(SECTION_LABELS)} sections (A-H) allowed")


def add_section(draft: GradeDraft) -> GradeDraft:
    label = next_section_label(draft)
    updated = draft.model_copy(deep=True)
    updated.sections_data.append(SectionFormData(name=label, is_new=True))
    return updated


def remove_section(draft: GradeDraft, index: int) -> GradeDraft:
    section = _active_index(draft, index)
    if len(draft.active_sections()) <= 1:
        raise DraftValidationError("At least one section is required")
    updated = draft.model_copy(deep=True)
    if section.is_new:
        del updated.sections_data[index]
    else:
        updated.sections_data[index].to_delete = True
    return updated


def toggle_section_subject(draft: GradeDraft, index: int, subject: str) -> GradeDraft:
    _active_index(draft, index)
    updated = draft.model_copy(deep=True)
    section = updated.sections_data[index]
    if subject in section.subjects:
        section.subjects = [s for s in section.subjects if s != subject]
    else:
        section.subjects = section.subjects + [subject]
    return updated


def add_custom_subject(draft: GradeDraft, index: int, subject: str) -> GradeDraft:
    """Blank names are ignored; a subject already selected is not added twice."""
    _active_index(draft, index)
    name = subject.strip()
    updated = draft.model_copy(deep=True)
    section = updated.sections_data[index]
    if name and name not in section.subjects:
        section.subjects = section.subjects + [name]
    return updated


def remove_section_subject(draft: GradeDraft, index: int, subject: str) -> GradeDraft:
    _active_index(draft, index)
    updated = draft.model_copy(deep=True)
    section = updated.sections_data[index]
    section.subjects = [s for s in section.subjects if s != subject]
    return updated


def rename_section(draft: GradeDraft, index: int, new_name: str) -> GradeDraft:
    """The subject selection stays with the section under its new name."""
    current = _active_index(draft, index)
    name = new_name.strip()
    if not name:
        raise DraftValidationError("Section name cannot be empty")
    if name == current.name:
        return draft.model_copy(deep=True)
    if any(s.name == name for i, s in enumerate(draft.sections_data) if i != index and not s.to_delete):
        raise DraftValidationError(f"Section {name} already exists in this class")
    updated = draft.model_copy(deep=True)
    updated.sections_data[index].name = name
    return updated


def validate_for_save(draft: GradeDraft) -> None:
    if not draft.name.strip():
        raise DraftValidationError("Please enter a class name")
    active = draft.active_sections()
    if not active:
        raise DraftValidationError("Please add at least one section")
    names = [s.name for s in active]
    if len(set(names)) != len(names):
        raise DraftValidationError("Section names must be unique within a class")


def plan_save(draft: GradeDraft) -> List[SaveStep]:
    """
    Upstream calls that bring the backend to the draft, in order.

    Creating sends the whole grade in one call. Editing renames the grade when
    its name changed, then walks the sections in draft order: flagged persisted
    sections are deleted, new ones created, the rest get their subject list
    replaced wholesale.
    """
    validate_for_save(draft)
    name = draft.name.strip()
    if draft.id is None:
        sections = [
            SectionFormData(name=s.name, subjects=list(s.subjects), is_new=True)
            for s in draft.active_sections()
        ]
        return [SaveStep(action="create_grade", name=name, sections=sections)]

    steps: List[SaveStep] = []
    if name != draft.original_name:
        steps.append(SaveStep(action="rename_grade", name=name))
    for section in draft.sections_data:
        if section.to_delete:
            if section.id:
                steps.append(SaveStep(action="delete_section", name=section.name, section_id=section.id))
        elif section.is_new or not section.id:
            steps.append(SaveStep(action="create_section", name=section.name, subjects=list(section.subjects)))
        else:
            steps.append(
                SaveStep(
                    action="replace_subjects",
                    name=section.name,
                    section_id=section.id,
                    subjects=list(section.subjects),
                )
            )
    return steps
