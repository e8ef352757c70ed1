from typing import Optional

from pydantic import BaseModel


class TutorDraft(BaseModel):
    """Tutor form. `id` is set when editing an existing tutor."""

    id: Optional[str] = None
    name: str = ""
    email: str = ""
    phone: str = ""

    def payload(self) -> dict:
        return {"name": self.name.strip(), "email": self.email.strip(), "phone": self.phone.strip()}


class TutorSaveResult(BaseModel):
    created: bool
    tutor_id: Optional[str] = None
    # shown once to the admin on creation; never stored by the portal
    temporary_password: Optional[str] = None

