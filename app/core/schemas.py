"""Read model of the school backend. The portal holds transient copies only."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class TutorRef(BaseModel):
    """Weak reference to a tutor, as embedded in sections and subjects."""

    id: str
    name: str


class Tutor(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None


class SectionSubject(BaseModel):
    id: str
    name: str
    tutor: Optional[TutorRef] = None


class Section(BaseModel):
    id: str
    name: str
    class_tutor: Optional[TutorRef] = Field(None, alias="classTutor")
    subjects: List[SectionSubject] = Field(default_factory=list)

    class Config:
        populate_by_name = True

    def subject_names(self) -> List[str]:
        return [s.name for s in self.subjects]


class Grade(BaseModel):
    id: str
    name: str
    order: int = 0
    sections: List[Section] = Field(default_factory=list)


class School(BaseModel):
    id: str
    name: str
    code: str = ""
    district: Optional[str] = None
    is_chained_school: bool = Field(False, alias="isChainedSchool")
    student_count: Optional[int] = Field(None, alias="studentCount")

    class Config:
        populate_by_name = True


class Assignment(BaseModel):
    """What one tutor teaches where. Keys of `assignments` are "<gradeName>-<sectionName>"."""

    id: str
    tutor_id: str = Field(..., alias="tutorId")
    tutor_name: str = Field("", alias="tutorName")
    tutor_email: Optional[str] = Field(None, alias="tutorEmail")
    assignments: Dict[str, List[str]] = Field(default_factory=dict)
    class_grade: Optional[str] = Field(None, alias="classGrade")
    class_section: Optional[str] = Field(None, alias="classSection")

    class Config:
        populate_by_name = True


class DashboardStats(BaseModel):
    total_classes: int = Field(0, alias="totalClasses")
    total_sections: int = Field(0, alias="totalSections")
    total_tutors: int = Field(0, alias="totalTutors")

    class Config:
        populate_by_name = True


def assignment_key(grade_name: str, section_name: str) -> str:
    return f"{grade_name}-{section_name}"
