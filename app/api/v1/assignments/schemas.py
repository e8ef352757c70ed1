from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class AssignmentDraft(BaseModel):
    """
    Assignment form: which subjects the tutor teaches per "<grade>-<section>"
    key, plus an optional class-tutor role. `id` is set when editing.
    """

    id: Optional[str] = None
    tutor_id: str = Field("", alias="tutorId")
    assignments: Dict[str, List[str]] = Field(default_factory=dict)
    class_grade: str = Field("", alias="classGrade")
    class_section: str = Field("", alias="classSection")

    class Config:
        populate_by_name = True

    def payload(self) -> Dict[str, Any]:
        """
        Request body. A replace (draft with `id`) always carries both class
        fields, empty when the class-tutor role was cleared.
        """
        body: Dict[str, Any] = {
            "tutorId": self.tutor_id,
            "assignments": {key: list(subjects) for key, subjects in self.assignments.items()},
        }
        if self.id or self.class_grade:
            body["classGrade"] = self.class_grade
        if self.id or self.class_section:
            body["classSection"] = self.class_section
        return body


class AssignmentSaveResult(BaseModel):
    created: bool
    tutor_id: str


class SubjectTutorAssign(BaseModel):
    tutor_id: str = Field(..., alias="tutorId")

    class Config:
        populate_by_name = True

