import pytest

from app.api.v1.dashboard import service
from app.core.enums import DEFAULT_SUBJECTS
from app.core.exceptions import UpstreamError

from tests.fakes import SCHOOL_ID, FakeSchoolBackend


@pytest.mark.asyncio
async def test_load_dashboard(school_api, backend: FakeSchoolBackend) -> None:
    data = await service.load_dashboard(school_api, SCHOOL_ID)

    assert data.school.name == "Green Valley School"
    assert [g.name for g in data.grades] == ["Grade 1", "Grade 2"]
    assert data.grades[0].sections[1].class_tutor.id == "t2"
    assert data.tutors[0].email == "asha@greenvalley.edu"
    assert data.assignments[0].tutor_id == "t2"
    assert (data.stats.total_classes, data.stats.total_sections, data.stats.total_tutors) == (2, 2, 2)
    assert data.subjects == DEFAULT_SUBJECTS


@pytest.mark.asyncio
async def test_backend_stats_and_subjects_win(school_api, backend: FakeSchoolBackend) -> None:
    backend.on(
        "GET",
        f"/schools/{SCHOOL_ID}/dashboard",
        json={"school": None, "grades": [], "stats": {"totalClasses": 7}, "subjects": ["Latin"]},
    )
    data = await service.load_dashboard(school_api, SCHOOL_ID)
    assert data.stats.total_classes == 7
    assert data.subjects == ["Latin"]


@pytest.mark.asyncio
async def test_tutors_fall_back_to_simple_list(school_api, backend: FakeSchoolBackend) -> None:
    backend.on("GET", f"/schools/{SCHOOL_ID}/tutors", status=500, json={})
    backend.on("GET", f"/schools/{SCHOOL_ID}/tutors?simple=true", json=[{"id": "t5", "name": "Simple"}])

    data = await service.load_dashboard(school_api, SCHOOL_ID)

    assert [t.id for t in data.tutors] == ["t5"]


@pytest.mark.asyncio
async def test_tutors_fall_back_to_dashboard_summary(school_api, backend: FakeSchoolBackend) -> None:
    backend.on("GET", f"/schools/{SCHOOL_ID}/tutors", status=500, json={})
    data = await service.load_dashboard(school_api, SCHOOL_ID)
    assert [t.name for t in data.tutors] == ["Asha Rao", "Ravi Kumar"]
    assert data.tutors[0].email is None


@pytest.mark.asyncio
async def test_missing_assignments_are_empty(school_api, backend: FakeSchoolBackend) -> None:
    backend.on("GET", f"/schools/{SCHOOL_ID}/assignments", status=503, json={})
    data = await service.load_dashboard(school_api, SCHOOL_ID)
    assert data.assignments == []


@pytest.mark.asyncio
async def test_dashboard_failure_raises(school_api, backend: FakeSchoolBackend) -> None:
    backend.on("GET", f"/schools/{SCHOOL_ID}/dashboard", status=500, json={})
    with pytest.raises(UpstreamError) as exc:
        await service.load_dashboard(school_api, SCHOOL_ID)
    assert exc.value.message == "Failed to load school data"


@pytest.mark.asyncio
async def test_tutor_queries(school_api) -> None:
    data = await service.load_dashboard(school_api, SCHOOL_ID)

    assert service.is_tutor_assigned(data, "t2") is True
    assert service.is_tutor_assigned(data, "t1") is False
    assert [t.id for t in service.unassigned_tutors(data)] == ["t1"]
    assert [t.id for t in service.selectable_tutors(data, editing=False)] == ["t1"]
    assert [t.id for t in service.selectable_tutors(data, editing=True)] == ["t1", "t2"]


@pytest.mark.asyncio
async def test_grade_queries(school_api) -> None:
    data = await service.load_dashboard(school_api, SCHOOL_ID)

    assert service.sections_for_grade(data, "Grade 1") == ["A", "B"]
    assert service.sections_for_grade(data, "Grade 9") == []
    assert service.find_grade(data, "g2").name == "Grade 2"
    grade, section, subject = service.locate_section_subject(data.grades, "sub2")
    assert (grade.id, section.id, subject.name) == ("g1", "s1", "Maths")
    assert service.locate_section_subject(data.grades, "missing") is None
