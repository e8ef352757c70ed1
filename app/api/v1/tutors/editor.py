from app.core.exceptions import DraftValidationError
from app.core.schemas import Tutor

from .schemas import TutorDraft


def new_tutor_draft() -> TutorDraft:
    return TutorDraft()


def tutor_draft_from(tutor: Tutor) -> TutorDraft:
    return TutorDraft(id=tutor.id, name=tutor.name, email=tutor.email or "", phone=tutor.phone or "")


def validate_tutor_draft(draft: TutorDraft) -> None:
    for field in ("name", "email", "phone"):
        if not getattr(draft, field).strip():
            raise DraftValidationError(f"Please enter tutor {field}")
