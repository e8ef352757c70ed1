"""
Dashboard loader: fetch one school's grades, tutors and assignments and expose
the read-only queries the editors need.
"""

import logging
from typing import List, Optional, Tuple

from app.core.enums import DEFAULT_SUBJECTS
from app.core.exceptions import UpstreamError
from app.core.school_api import SchoolApiClient
from app.core.schemas import Assignment, DashboardStats, Grade, School, Section, SectionSubject, Tutor

from .schemas import DashboardData

logger = logging.getLogger(__name__)


def _computed_stats(grades: List[Grade], tutors: List[Tutor]) -> DashboardStats:
    return DashboardStats(
        total_classes=len(grades),
        total_sections=sum(len(g.sections) for g in grades),
        total_tutors=len(tutors),
    )


async def load_tutors(api: SchoolApiClient, school_id: str, fallback: List[Tutor]) -> List[Tutor]:
    """Full tutor list, then the `simple` listing, then the dashboard summary."""
    try:
        return [Tutor(**t) for t in await api.list_tutors(school_id)]
    except UpstreamError as e:
        logger.warning("Full tutor list for school %s unavailable (%s), trying simple list", school_id, e.message)
    try:
        return [Tutor(**t) for t in await api.list_tutors(school_id, simple=True)]
    except UpstreamError as e:
        logger.warning("Simple tutor list for school %s unavailable (%s)", school_id, e.message)
    return fallback


async def load_assignments(api: SchoolApiClient, school_id: str) -> List[Assignment]:
    try:
        return [Assignment(**a) for a in await api.list_assignments(school_id)]
    except UpstreamError as e:
        logger.warning("Assignments for school %s unavailable (%s)", school_id, e.message)
        return []


async def load_dashboard(api: SchoolApiClient, school_id: str) -> DashboardData:
    """Raises UpstreamError only when the dashboard itself cannot be fetched."""
    data = await api.get_dashboard(school_id) or {}
    grades = [Grade(**g) for g in data.get("grades") or []]
    summary = [Tutor(**t) for t in data.get("tutors") or []]
    tutors = await load_tutors(api, school_id, summary)
    assignments = await load_assignments(api, school_id)
    stats = DashboardStats(**data["stats"]) if data.get("stats") else _computed_stats(grades, tutors)
    logger.info(
        "Loaded school %s: %d grades, %d tutors, %d assignments",
        school_id, len(grades), len(tutors), len(assignments),
    )
    return DashboardData(
        school=School(**data["school"]) if data.get("school") else None,
        stats=stats,
        grades=grades,
        tutors=tutors,
        assignments=assignments,
        subjects=data.get("subjects") or list(DEFAULT_SUBJECTS),
    )


def is_tutor_assigned(dashboard: DashboardData, tutor_id: str) -> bool:
    return any(a.tutor_id == tutor_id for a in dashboard.assignments)


def unassigned_tutors(dashboard: DashboardData) -> List[Tutor]:
    assigned = {a.tutor_id for a in dashboard.assignments}
    return [t for t in dashboard.tutors if t.id not in assigned]


def selectable_tutors(dashboard: DashboardData, editing: bool) -> List[Tutor]:
    """Tutors offered by the assignment editor. An edit keeps the current holder selectable."""
    if editing:
        return list(dashboard.tutors)
    return unassigned_tutors(dashboard)


def find_grade(dashboard: DashboardData, grade_id: str) -> Optional[Grade]:
    return next((g for g in dashboard.grades if g.id == grade_id), None)


def sections_for_grade(dashboard: DashboardData, grade_name: str) -> List[str]:
    grade = next((g for g in dashboard.grades if g.name == grade_name), None)
    return [s.name for s in grade.sections] if grade else []


def locate_section_subject(
    grades: List[Grade], subject_id: str
) -> Optional[Tuple[Grade, Section, SectionSubject]]:
    for grade in grades:
        for section in grade.sections:
            for subject in section.subjects:
                if subject.id == subject_id:
                    return grade, section, subject
    return None
