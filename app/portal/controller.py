"""
SchoolPortal: the role-agnostic dashboard page.

Wraps PortalState with the asynchronous actions of one school dashboard. The
same class serves every role; a portal opened read-only refuses all writes.
Draft edits are local only. Only the save/delete actions talk to the backend,
and every successful write is followed by a reload of the read model.
"""

import logging
from typing import Callable, List, Optional

from fastapi import status

from app.api.v1.assignments import editor as assignment_editor
from app.api.v1.assignments import service as assignments_service
from app.api.v1.assignments.schemas import AssignmentSaveResult
from app.api.v1.classes import editor as class_editor
from app.api.v1.classes import service as classes_service
from app.api.v1.classes.schemas import ClassSaveResult
from app.api.v1.dashboard import service as dashboard_service
from app.api.v1.tutors import editor as tutor_editor
from app.api.v1.tutors import service as tutors_service
from app.api.v1.tutors.schemas import TutorSaveResult
from app.auth.services import resolve_current_user, school_context
from app.core.enums import DeleteTarget, EditorKind, EditorStatus, ToastType
from app.core.exceptions import DraftValidationError, ServiceError, UpstreamError
from app.core.school_api import GENERIC_FAILURE, SchoolApiClient
from app.core.schemas import Assignment, Grade, Tutor

from . import state as transitions
from .state import PortalState

logger = logging.getLogger(__name__)

_DELETE_LABELS = {
    DeleteTarget.CLASS: "Class deleted successfully",
    DeleteTarget.TUTOR: "Tutor deleted successfully",
    DeleteTarget.ASSIGNMENT: "Assignments removed successfully",
}


class SchoolPortal:
    def __init__(self, api: SchoolApiClient, school_id: str, can_edit: bool = True) -> None:
        self.api = api
        self.state = PortalState(school_id=school_id, can_edit=can_edit)

    @classmethod
    async def for_session(cls, api: SchoolApiClient, school_id: Optional[str] = None) -> "SchoolPortal":
        """Portal for the logged-in user; `school_id` is required for superadmins only."""
        user = await resolve_current_user(api)
        context = school_context(user, school_id)
        return cls(api, context.school_id, context.can_edit)

    # ----- read model -----

    async def load(self) -> bool:
        self.state = transitions.set_loading(self.state, True)
        try:
            data = await dashboard_service.load_dashboard(self.api, self.state.school_id)
        except UpstreamError:
            self._toast("Failed to load school data", ToastType.ERROR)
            return False
        finally:
            self.state = transitions.set_loading(self.state, False)
        self.state = transitions.with_dashboard(self.state, data)
        return True

    @property
    def grades(self) -> List[Grade]:
        return self.state.dashboard.grades

    def selectable_tutors(self) -> List[Tutor]:
        editing = self.state.assignment_editor.is_editing
        return dashboard_service.selectable_tutors(self.state.dashboard, editing)

    def is_tutor_assigned(self, tutor_id: str) -> bool:
        return dashboard_service.is_tutor_assigned(self.state.dashboard, tutor_id)

    # ----- shared plumbing -----

    def _toast(self, message: str, toast_type: ToastType = ToastType.SUCCESS) -> None:
        self.state = transitions.push_toast(self.state, message, toast_type)

    def _require_edit(self) -> None:
        if not self.state.can_edit:
            raise ServiceError("Read-only access to this school", status.HTTP_403_FORBIDDEN)

    def _open(self, kind: EditorKind, draft, editing_id: Optional[str] = None) -> None:
        self._require_edit()
        self.state = transitions.open_editor(self.state, kind, draft, editing_id)

    def _mutate(self, kind: EditorKind, change: Callable, *args) -> bool:
        """Apply a pure draft transition. A rejected change becomes the editor's inline error."""
        editor = self.state.editor(kind)
        if editor.status != EditorStatus.OPEN:
            raise ServiceError("Editor is not open", status.HTTP_409_CONFLICT)
        try:
            draft = change(editor.draft, *args)
        except DraftValidationError as e:
            self.state = transitions.editor_error(self.state, kind, e.message)
            return False
        self.state = transitions.update_draft(self.state, kind, draft)
        return True

    async def _submit(self, kind: EditorKind, save: Callable, success_message: Callable):
        self._require_edit()
        # raises EditorBusyError while a save of this editor is running
        self.state = transitions.begin_submit(self.state, kind)
        draft = self.state.editor(kind).draft
        try:
            result = await save(self.api, self.state.school_id, draft)
        except ServiceError as e:
            logger.info("%s editor save failed: %s", kind.value, e.message)
            self.state = transitions.submit_failed(self.state, kind, e.message)
            return None
        except Exception:
            # the editor must leave SUBMITTING whatever went wrong
            logger.exception("%s editor save failed unexpectedly", kind.value)
            self.state = transitions.submit_failed(self.state, kind, GENERIC_FAILURE)
            return None
        self.state = transitions.close_editor(self.state, kind)
        self._toast(success_message(result))
        await self.load()
        return result

    def close_editor(self, kind: EditorKind) -> None:
        self.state = transitions.close_editor(self.state, kind)

    def dismiss_toast(self, toast_id: int) -> None:
        self.state = transitions.dismiss_toast(self.state, toast_id)

    # ----- class editor -----

    def open_class_editor(self, grade: Optional[Grade] = None) -> None:
        if grade is None:
            self._open(EditorKind.CLASS, class_editor.new_grade_draft())
        else:
            self._open(EditorKind.CLASS, class_editor.grade_draft_from(grade), grade.id)

    def add_section(self) -> bool:
        return self._mutate(EditorKind.CLASS, class_editor.add_section)

    def remove_section(self, index: int) -> bool:
        return self._mutate(EditorKind.CLASS, class_editor.remove_section, index)

    def toggle_class_subject(self, index: int, subject: str) -> bool:
        return self._mutate(EditorKind.CLASS, class_editor.toggle_section_subject, index, subject)

    def add_custom_subject(self, index: int, subject: str) -> bool:
        return self._mutate(EditorKind.CLASS, class_editor.add_custom_subject, index, subject)

    def remove_class_subject(self, index: int, subject: str) -> bool:
        return self._mutate(EditorKind.CLASS, class_editor.remove_section_subject, index, subject)

    def rename_section(self, index: int, new_name: str) -> bool:
        return self._mutate(EditorKind.CLASS, class_editor.rename_section, index, new_name)

    def set_class_name(self, name: str) -> bool:
        return self._mutate(EditorKind.CLASS, lambda draft: draft.model_copy(update={"name": name}))

    async def save_class(self) -> Optional[ClassSaveResult]:
        return await self._submit(
            EditorKind.CLASS,
            classes_service.save_grade_draft,
            lambda r: "Class created successfully" if r.created else "Class updated successfully",
        )

    # ----- tutor editor -----

    def open_tutor_editor(self, tutor: Optional[Tutor] = None) -> None:
        if tutor is None:
            self._open(EditorKind.TUTOR, tutor_editor.new_tutor_draft())
        else:
            self._open(EditorKind.TUTOR, tutor_editor.tutor_draft_from(tutor), tutor.id)

    def set_tutor_field(self, field: str, value: str) -> bool:
        if field not in ("name", "email", "phone"):
            raise ValueError(f"Unknown tutor field {field}")
        return self._mutate(EditorKind.TUTOR, lambda draft: draft.model_copy(update={field: value}))

    async def save_tutor(self) -> Optional[TutorSaveResult]:
        def message(result: TutorSaveResult) -> str:
            if result.created:
                return f"Tutor created! Password: {result.temporary_password}"
            return "Tutor updated successfully"

        return await self._submit(EditorKind.TUTOR, tutors_service.save_tutor_draft, message)

    # ----- assignment editor -----

    def open_assignment_editor(self, assignment: Optional[Assignment] = None) -> None:
        if assignment is None:
            self._open(EditorKind.ASSIGNMENT, assignment_editor.new_assignment_draft())
        else:
            self._open(
                EditorKind.ASSIGNMENT,
                assignment_editor.assignment_draft_from(assignment),
                assignment.id,
            )

    def select_tutor(self, tutor_id: str) -> bool:
        return self._mutate(EditorKind.ASSIGNMENT, assignment_editor.select_tutor, tutor_id)

    def toggle_assignment_subject(self, grade_name: str, section_name: str, subject: str) -> bool:
        return self._mutate(
            EditorKind.ASSIGNMENT, assignment_editor.toggle_subject, grade_name, section_name, subject
        )

    def set_class_tutor(self, class_grade: str, class_section: str = "") -> bool:
        return self._mutate(EditorKind.ASSIGNMENT, assignment_editor.set_class_tutor, class_grade, class_section)

    async def save_assignment(self) -> Optional[AssignmentSaveResult]:
        return await self._submit(
            EditorKind.ASSIGNMENT,
            assignments_service.save_assignment_draft,
            lambda r: "Tutor assigned successfully" if r.created else "Assignment updated successfully",
        )

    # ----- deletes -----

    def request_delete(self, target: DeleteTarget, target_id: str, name: str) -> None:
        self._require_edit()
        self.state = transitions.request_delete(self.state, target, target_id, name)

    def cancel_delete(self) -> None:
        self.state = transitions.cancel_delete(self.state)

    async def confirm_delete(self) -> bool:
        """Run the pending delete. Assignment deletes remove every record of the tutor."""
        pending = self.state.pending_delete
        if pending is None:
            return False
        self._require_edit()
        school_id = self.state.school_id
        try:
            if pending.target == DeleteTarget.CLASS:
                await classes_service.delete_grade(self.api, school_id, pending.id)
            elif pending.target == DeleteTarget.TUTOR:
                await tutors_service.delete_tutor(self.api, school_id, pending.id)
            else:
                await assignments_service.delete_tutor_assignments(self.api, school_id, pending.id)
        except ServiceError as e:
            self._toast(e.message or "Delete failed", ToastType.ERROR)
            return False
        self.state = transitions.cancel_delete(self.state)
        self._toast(_DELETE_LABELS[pending.target])
        await self.load()
        return True

    # ----- direct section subject operations -----

    async def _direct(self, action: Callable, success_message: str) -> bool:
        self._require_edit()
        try:
            await action()
        except ServiceError as e:
            self._toast(e.message, ToastType.ERROR)
            return False
        self._toast(success_message)
        await self.load()
        return True

    async def add_section_subject(self, section_id: str, name: str) -> bool:
        return await self._direct(
            lambda: classes_service.add_section_subject(
                self.api, self.state.school_id, section_id, name
            ),
            "Subject added",
        )

    async def delete_section_subject(self, subject_id: str) -> bool:
        return await self._direct(
            lambda: classes_service.delete_section_subject(self.api, self.state.school_id, subject_id),
            "Subject removed",
        )

    async def assign_tutor_to_subject(self, subject_id: str, tutor_id: str) -> bool:
        return await self._direct(
            lambda: assignments_service.assign_tutor_to_subject(
                self.api, self.state.school_id, self.grades, subject_id, tutor_id
            ),
            "Tutor assigned to subject",
        )
