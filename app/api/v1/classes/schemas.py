from typing import List, Optional

from pydantic import BaseModel, Field


class SectionFormData(BaseModel):
    """
    One section in a class draft.

    `id` is set for sections that already exist upstream. Removing a persisted
    section only flags `to_delete`; the delete call is issued on save.
    """

    id: Optional[str] = None
    name: str = Field(..., max_length=50)
    subjects: List[str] = Field(default_factory=list)
    is_new: bool = Field(False, alias="isNew")
    to_delete: bool = Field(False, alias="toDelete")

    class Config:
        populate_by_name = True


def _default_sections() -> List[SectionFormData]:
    return [SectionFormData(name="A", is_new=True)]


class GradeDraft(BaseModel):
    """Local edit state of one grade (class). `id` is None while creating."""

    id: Optional[str] = None
    name: str = ""
    original_name: Optional[str] = Field(None, alias="originalName", description="Name as loaded, for rename detection")
    sections_data: List[SectionFormData] = Field(default_factory=_default_sections, alias="sectionsData")

    class Config:
        populate_by_name = True

    def active_sections(self) -> List[SectionFormData]:
        return [s for s in self.sections_data if not s.to_delete]


class SaveStep(BaseModel):
    """One upstream call of a class save, in execution order."""

    action: str = Field(..., description="create_grade | rename_grade | delete_section | create_section | replace_subjects")
    name: Optional[str] = None
    section_id: Optional[str] = None
    subjects: List[str] = Field(default_factory=list)
    sections: List[SectionFormData] = Field(default_factory=list)

    def describe(self) -> str:
        if self.action == "create_grade":
            return f"create grade {self.name}"
        if self.action == "rename_grade":
            return f"rename grade to {self.name}"
        return f"{self.action.replace('_', ' ')} {self.name}"


class ClassSaveResult(BaseModel):
    created: bool
    grade_id: Optional[str] = None
    steps: List[str] = Field(default_factory=list)


SUBJECT_NAME_MAX_LENGTH = 100


class SectionSubjectCreate(BaseModel):
    name: str = Field(..., max_length=SUBJECT_NAME_MAX_LENGTH)
