import pytest

from app.api.v1.tutors import editor, service
from app.api.v1.tutors.schemas import TutorDraft
from app.core.exceptions import DraftValidationError, UpstreamError
from app.core.schemas import Tutor

from tests.fakes import SCHOOL_ID, FakeSchoolBackend


@pytest.mark.parametrize(
    "draft, message",
    [
        (TutorDraft(email="a@b.c", phone="1"), "Please enter tutor name"),
        (TutorDraft(name="Asha", email="  ", phone="1"), "Please enter tutor email"),
        (TutorDraft(name="Asha", email="a@b.c"), "Please enter tutor phone"),
    ],
)
def test_every_field_is_required(draft: TutorDraft, message: str) -> None:
    with pytest.raises(DraftValidationError) as exc:
        editor.validate_tutor_draft(draft)
    assert exc.value.message == message


def test_draft_from_tutor_fills_missing_contact_with_blanks() -> None:
    draft = editor.tutor_draft_from(Tutor(id="t1", name="Asha Rao"))
    assert draft == TutorDraft(id="t1", name="Asha Rao", email="", phone="")


@pytest.mark.asyncio
async def test_create_returns_temporary_password(school_api, backend: FakeSchoolBackend) -> None:
    backend.on(
        "POST",
        f"/schools/{SCHOOL_ID}/tutors",
        status=201,
        json={"tutor": {"id": "t9"}, "temporaryPassword": "Xy7!pq"},
    )
    draft = TutorDraft(name=" Meena ", email="meena@gv.edu", phone="9000000009")

    result = await service.save_tutor_draft(school_api, SCHOOL_ID, draft)

    assert (result.created, result.tutor_id, result.temporary_password) == (True, "t9", "Xy7!pq")
    assert backend.writes()[0].json == {"name": "Meena", "email": "meena@gv.edu", "phone": "9000000009"}


@pytest.mark.asyncio
async def test_create_without_password_points_to_email(school_api, backend: FakeSchoolBackend) -> None:
    backend.on("POST", f"/schools/{SCHOOL_ID}/tutors", status=201, json={"id": "t9"})
    result = await service.save_tutor_draft(
        school_api, SCHOOL_ID, TutorDraft(name="Meena", email="m@gv.edu", phone="1")
    )
    assert result.temporary_password == "Check email"


@pytest.mark.asyncio
async def test_update_is_one_put(school_api, backend: FakeSchoolBackend) -> None:
    draft = TutorDraft(id="t1", name="Asha R", email="asha@gv.edu", phone="1")
    result = await service.save_tutor_draft(school_api, SCHOOL_ID, draft)
    assert [(c.method, c.path) for c in backend.writes()] == [("PUT", f"/schools/{SCHOOL_ID}/tutors/t1")]
    assert result.temporary_password is None


@pytest.mark.asyncio
async def test_backend_message_is_surfaced(school_api, backend: FakeSchoolBackend) -> None:
    backend.on("POST", f"/schools/{SCHOOL_ID}/tutors", status=409, json={"error": "Email already registered"})
    with pytest.raises(UpstreamError) as exc:
        await service.save_tutor_draft(school_api, SCHOOL_ID, TutorDraft(name="A", email="a@b.c", phone="1"))
    assert exc.value.message == "Email already registered"
    assert exc.value.status_code == 409
