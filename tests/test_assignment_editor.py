import pytest

from app.api.v1.assignments import editor, service
from app.api.v1.assignments.schemas import AssignmentDraft
from app.core.exceptions import DraftValidationError, ServiceError
from app.core.schemas import Assignment, Grade

from tests.fakes import ASSIGNMENTS, DASHBOARD, SCHOOL_ID, FakeSchoolBackend


def test_toggle_creates_entry_and_is_an_involution() -> None:
    draft = editor.new_assignment_draft()
    once = editor.toggle_subject(draft, "Grade 1", "A", "English")
    assert once.assignments == {"Grade 1-A": ["English"]}
    twice = editor.toggle_subject(once, "Grade 1", "A", "English")
    assert twice.assignments == {"Grade 1-A": []}
    assert draft.assignments == {}


def test_submit_without_tutor_always_fails() -> None:
    draft = editor.toggle_subject(editor.new_assignment_draft(), "Grade 1", "A", "English")
    draft = editor.set_class_tutor(draft, "Grade 1", "B")
    with pytest.raises(DraftValidationError) as exc:
        editor.validate_assignment_draft(draft)
    assert exc.value.message == "Please select a tutor"


def test_submit_needs_subject_or_class_tutor_role() -> None:
    draft = editor.select_tutor(editor.new_assignment_draft(), "t1")
    draft = editor.toggle_subject(draft, "Grade 1", "A", "English")
    draft = editor.toggle_subject(draft, "Grade 1", "A", "English")
    with pytest.raises(DraftValidationError) as exc:
        editor.validate_assignment_draft(draft)
    assert exc.value.message == "Please assign at least one subject or class tutor role"

    editor.validate_assignment_draft(editor.set_class_tutor(draft, "Grade 1", "B"))


def test_clearing_class_grade_clears_section() -> None:
    draft = editor.set_class_tutor(editor.new_assignment_draft(), "Grade 1", "B")
    cleared = editor.set_class_tutor(draft, "", "B")
    assert (cleared.class_grade, cleared.class_section) == ("", "")


def test_draft_from_assignment_copies_mapping() -> None:
    assignment = Assignment(
        id="as1",
        tutorId="t2",
        tutorName="Ravi Kumar",
        assignments={"Grade 1-A": ["Maths"]},
        classGrade=None,
    )
    draft = editor.assignment_draft_from(assignment)
    assert (draft.id, draft.tutor_id, draft.class_grade) == ("as1", "t2", "")
    draft = editor.toggle_subject(draft, "Grade 1", "A", "Art")
    assert assignment.assignments == {"Grade 1-A": ["Maths"]}
    assert editor.subjects_for_section(draft, "Grade 1", "A") == ["Maths", "Art"]


@pytest.mark.asyncio
async def test_new_assignment_is_one_post(school_api, backend: FakeSchoolBackend) -> None:
    draft = editor.select_tutor(editor.new_assignment_draft(), "t1")
    draft = editor.toggle_subject(draft, "Grade 1", "A", "English")
    draft = editor.toggle_subject(draft, "Grade 1", "A", "Maths")
    draft = editor.set_class_tutor(draft, "Grade 1", "B")

    result = await service.save_assignment_draft(school_api, SCHOOL_ID, draft)

    assert [(c.method, c.path, c.json) for c in backend.writes()] == [
        (
            "POST",
            f"/schools/{SCHOOL_ID}/assignments",
            {
                "tutorId": "t1",
                "assignments": {"Grade 1-A": ["English", "Maths"]},
                "classGrade": "Grade 1",
                "classSection": "B",
            },
        )
    ]
    assert result.created is True


@pytest.mark.asyncio
async def test_edit_replaces_whole_record(school_api, backend: FakeSchoolBackend) -> None:
    draft = AssignmentDraft(id="as1", tutor_id="t2", assignments={"Grade 1-B": ["Science"]})

    result = await service.save_assignment_draft(school_api, SCHOOL_ID, draft)

    assert [(c.method, c.path, c.json) for c in backend.writes()] == [
        (
            "PUT",
            f"/schools/{SCHOOL_ID}/assignments",
            {"tutorId": "t2", "assignments": {"Grade 1-B": ["Science"]}, "classGrade": "", "classSection": ""},
        ),
    ]
    assert result.created is False


@pytest.mark.asyncio
async def test_edit_can_clear_class_tutor_role(school_api, backend: FakeSchoolBackend) -> None:
    draft = editor.assignment_draft_from(Assignment(**ASSIGNMENTS[0]))
    draft = editor.set_class_tutor(draft, "")

    await service.save_assignment_draft(school_api, SCHOOL_ID, draft)

    assert backend.writes()[0].json == {
        "tutorId": "t2",
        "assignments": {"Grade 1-A": ["Maths"]},
        "classGrade": "",
        "classSection": "",
    }


@pytest.mark.asyncio
async def test_invalid_assignment_makes_no_calls(school_api, backend: FakeSchoolBackend) -> None:
    with pytest.raises(DraftValidationError):
        await service.save_assignment_draft(school_api, SCHOOL_ID, AssignmentDraft(tutor_id="t1"))
    assert backend.calls == []


@pytest.mark.asyncio
async def test_assign_tutor_to_single_subject(school_api, backend: FakeSchoolBackend) -> None:
    grades = [Grade(**g) for g in DASHBOARD["grades"]]

    await service.assign_tutor_to_subject(school_api, SCHOOL_ID, grades, "sub3", "t1")

    assert [(c.method, c.path, c.json) for c in backend.writes()] == [
        ("POST", f"/schools/{SCHOOL_ID}/assignments", {"tutorId": "t1", "assignments": {"Grade 1-B": ["Science"]}}),
    ]


@pytest.mark.asyncio
async def test_assign_tutor_to_unknown_subject(school_api, backend: FakeSchoolBackend) -> None:
    grades = [Grade(**g) for g in DASHBOARD["grades"]]
    with pytest.raises(ServiceError) as exc:
        await service.assign_tutor_to_subject(school_api, SCHOOL_ID, grades, "nope", "t1")
    assert exc.value.status_code == 404
    assert backend.writes() == []
