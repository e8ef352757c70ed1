from typing import List, Optional

from pydantic import BaseModel, Field

from app.core.enums import DEFAULT_SUBJECTS
from app.core.schemas import Assignment, DashboardStats, Grade, School, Tutor


class DashboardData(BaseModel):
    """Read model of one school as republished to the editors."""

    school: Optional[School] = None
    stats: DashboardStats = Field(default_factory=DashboardStats)
    grades: List[Grade] = Field(default_factory=list)
    tutors: List[Tutor] = Field(default_factory=list)
    assignments: List[Assignment] = Field(default_factory=list)
    subjects: List[str] = Field(default_factory=lambda: list(DEFAULT_SUBJECTS))


class DashboardResponse(DashboardData):
    can_edit: bool
    unassigned_tutor_ids: List[str] = Field(default_factory=list)
