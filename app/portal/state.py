"""
Page view-model of a school dashboard.

One explicit struct holds the read model, the three editors, the pending
delete confirmation and the toast queue. Transitions are pure functions that
return a new PortalState; closing an editor always resets all of its fields.
"""

from typing import Generic, List, Optional, TypeVar

from fastapi import status
from pydantic import BaseModel, Field

from app.api.v1.assignments.schemas import AssignmentDraft
from app.api.v1.classes.schemas import GradeDraft
from app.api.v1.dashboard.schemas import DashboardData
from app.api.v1.tutors.schemas import TutorDraft
from app.core.enums import DeleteTarget, EditorKind, EditorStatus, ToastType
from app.core.exceptions import EditorBusyError, ServiceError

DraftT = TypeVar("DraftT")


class EditorState(BaseModel, Generic[DraftT]):
    status: EditorStatus = EditorStatus.CLOSED
    draft: DraftT
    editing_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None


class Toast(BaseModel):
    id: int
    message: str
    type: ToastType = ToastType.SUCCESS


class DeleteConfirm(BaseModel):
    target: DeleteTarget
    id: str
    name: str


_FRESH_DRAFTS = {
    EditorKind.CLASS: GradeDraft,
    EditorKind.TUTOR: TutorDraft,
    EditorKind.ASSIGNMENT: AssignmentDraft,
}

_FIELDS = {
    EditorKind.CLASS: "class_editor",
    EditorKind.TUTOR: "tutor_editor",
    EditorKind.ASSIGNMENT: "assignment_editor",
}


class PortalState(BaseModel):
    school_id: str
    can_edit: bool = True
    loading: bool = False
    dashboard: DashboardData = Field(default_factory=DashboardData)
    class_editor: EditorState[GradeDraft] = Field(
        default_factory=lambda: EditorState[GradeDraft](draft=GradeDraft())
    )
    tutor_editor: EditorState[TutorDraft] = Field(
        default_factory=lambda: EditorState[TutorDraft](draft=TutorDraft())
    )
    assignment_editor: EditorState[AssignmentDraft] = Field(
        default_factory=lambda: EditorState[AssignmentDraft](draft=AssignmentDraft())
    )
    pending_delete: Optional[DeleteConfirm] = None
    toasts: List[Toast] = Field(default_factory=list)
    next_toast_id: int = 0

    def editor(self, kind: EditorKind) -> EditorState:
        return getattr(self, _FIELDS[kind])


def _with_editor(state: PortalState, kind: EditorKind, editor: EditorState) -> PortalState:
    return state.model_copy(update={_FIELDS[kind]: editor})


def _fresh_editor(kind: EditorKind, **fields) -> EditorState:
    draft_type = _FRESH_DRAFTS[kind]
    fields.setdefault("draft", draft_type())
    return EditorState[draft_type](**fields)


def with_dashboard(state: PortalState, dashboard: DashboardData) -> PortalState:
    return state.model_copy(update={"dashboard": dashboard})


def set_loading(state: PortalState, loading: bool) -> PortalState:
    return state.model_copy(update={"loading": loading})


def open_editor(state: PortalState, kind: EditorKind, draft=None, editing_id: Optional[str] = None) -> PortalState:
    editor = _fresh_editor(kind, status=EditorStatus.OPEN, editing_id=editing_id)
    if draft is not None:
        editor.draft = draft
    return _with_editor(state, kind, editor)


def update_draft(state: PortalState, kind: EditorKind, draft) -> PortalState:
    """Replace the draft of an open editor and clear its inline error."""
    editor = state.editor(kind)
    if editor.status != EditorStatus.OPEN:
        raise ServiceError("Editor is not open", status.HTTP_409_CONFLICT)
    return _with_editor(state, kind, editor.model_copy(update={"draft": draft, "error": None}))


def editor_error(state: PortalState, kind: EditorKind, message: str) -> PortalState:
    editor = state.editor(kind)
    return _with_editor(state, kind, editor.model_copy(update={"error": message}))


def begin_submit(state: PortalState, kind: EditorKind) -> PortalState:
    editor = state.editor(kind)
    if editor.status == EditorStatus.SUBMITTING:
        raise EditorBusyError()
    if editor.status != EditorStatus.OPEN:
        raise ServiceError("Editor is not open", status.HTTP_409_CONFLICT)
    return _with_editor(
        state, kind, editor.model_copy(update={"status": EditorStatus.SUBMITTING, "error": None})
    )


def submit_failed(state: PortalState, kind: EditorKind, message: str) -> PortalState:
    editor = state.editor(kind)
    return _with_editor(
        state, kind, editor.model_copy(update={"status": EditorStatus.OPEN, "error": message})
    )


def close_editor(state: PortalState, kind: EditorKind) -> PortalState:
    return _with_editor(state, kind, _fresh_editor(kind))


def push_toast(state: PortalState, message: str, toast_type: ToastType = ToastType.SUCCESS) -> PortalState:
    toast = Toast(id=state.next_toast_id, message=message, type=toast_type)
    return state.model_copy(
        update={"toasts": state.toasts + [toast], "next_toast_id": state.next_toast_id + 1}
    )


def dismiss_toast(state: PortalState, toast_id: int) -> PortalState:
    return state.model_copy(update={"toasts": [t for t in state.toasts if t.id != toast_id]})


def request_delete(state: PortalState, target: DeleteTarget, target_id: str, name: str) -> PortalState:
    return state.model_copy(
        update={"pending_delete": DeleteConfirm(target=target, id=target_id, name=name)}
    )


def cancel_delete(state: PortalState) -> PortalState:
    return state.model_copy(update={"pending_delete": None})
