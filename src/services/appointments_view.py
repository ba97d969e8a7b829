"""
Appointments View - State container and event handlers for the appointments page

Provides the component's operations:
- mount: load the full appointment list
- handle_delete: confirm, delete, drop the row
- start_edit / change_field / cancel_edit / save_edit: per-row edit-in-place
- unmount: cancel pending success-message clears

Every transition replaces ViewState with a new value; nothing mutates
the current state in place.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional

from src.config.settings import Settings, get_settings
from src.models.appointment import Doctor, EditForm
from src.models.view_models import PageView
from src.models.view_state import ViewState
from src.services.message_scheduler import ScheduledCall, Scheduler, ThreadingScheduler
from src.services.renderer import render_view
from src.workers.appointments_worker import AppointmentsAPIError, AppointmentsClient

logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = "Are you sure you want to remove this appointment?"

DEFAULT_DELETE_SUCCESS = "Appointment deleted successfully."
DEFAULT_UPDATE_SUCCESS = "Appointment updated successfully."
DEFAULT_DELETE_FAILURE = "Delete failed"
DEFAULT_UPDATE_FAILURE = "Update failed"

ConfirmPrompt = Callable[[str], bool]


class AppointmentsView:
    """
    Appointments list with delete and edit-in-place

    Examples:
        view = AppointmentsView()
        view.mount()

        view.start_edit(7)
        view.change_field("status", "Completed")
        view.save_edit(7)

        view.handle_delete(7, confirm=lambda prompt: True)
        page = view.render()
    """

    def __init__(
        self,
        client: Optional[AppointmentsClient] = None,
        scheduler: Optional[Scheduler] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize view

        Args:
            client: Backend client (built from settings if not provided)
            scheduler: Delayed-call scheduler for success-message clears
            settings: Settings to use (defaults to cached application settings)
        """
        self.settings = settings or get_settings()
        self.client = client or AppointmentsClient(self.settings)
        self.scheduler = scheduler or ThreadingScheduler()

        self.state = ViewState()
        self.mounted = False

        self._lock = threading.RLock()
        self._pending_clear: Optional[ScheduledCall] = None
        self._success_token = 0

    # State plumbing

    def _set_state(self, **changes: Any) -> None:
        with self._lock:
            self.state = self.state.model_copy(update=changes)

    def _update_state(self, changes: Callable[[ViewState], Dict[str, Any]]) -> None:
        """Read-modify-write against the latest state"""
        with self._lock:
            self.state = self.state.model_copy(update=changes(self.state))

    def _succeed(self, changes: Callable[[ViewState], Dict[str, Any]], message: str) -> None:
        """Apply a successful mutation and show a self-clearing success message"""
        with self._lock:
            update = changes(self.state)
            update["success"] = message
            self.state = self.state.model_copy(update=update)

            if self._pending_clear is not None:
                self._pending_clear.cancel()

            self._success_token += 1
            token = self._success_token
            self._pending_clear = self.scheduler.call_later(
                self.settings.success_message_ttl_seconds,
                lambda: self._clear_success(token),
            )

    def _clear_success(self, token: int) -> None:
        with self._lock:
            if token != self._success_token:
                return
            self._pending_clear = None
            self.state = self.state.model_copy(update={"success": None})
        logger.debug("Success message cleared")

    # Lifecycle

    def mount(self) -> None:
        """Load the full appointment list"""
        with self._lock:
            self.mounted = True
            self.state = ViewState()

        try:
            appointments = self.client.list_appointments()
        except AppointmentsAPIError as e:
            logger.error(f"Failed to load appointments: {e.message}")
            self._set_state(error=e.message, loading=False)
            return

        self._set_state(appointments=appointments, loading=False)
        logger.info(f"Loaded {len(appointments)} appointment(s)")

    def unmount(self) -> None:
        """Cancel any pending success-message clear"""
        with self._lock:
            self.mounted = False
            if self._pending_clear is not None:
                self._pending_clear.cancel()
                self._pending_clear = None
            # Invalidate a clear that may already be running
            self._success_token += 1

    # Deleter

    def handle_delete(self, appointment_id: int, confirm: ConfirmPrompt) -> None:
        """
        Delete an appointment after user confirmation

        Args:
            appointment_id: Appointment to delete
            confirm: Blocking prompt; receives the question, returns the answer
        """
        if not confirm(DELETE_CONFIRMATION):
            logger.info(f"Delete of appointment {appointment_id} declined")
            return

        try:
            reply = self.client.delete_appointment(appointment_id)
        except AppointmentsAPIError as e:
            logger.error(f"Failed to delete appointment {appointment_id}: {e.message}")
            self._set_state(error=e.message)
            return

        if not reply.succeeded:
            message = reply.message or DEFAULT_DELETE_FAILURE
            logger.error(f"Backend refused delete of appointment {appointment_id}: {message}")
            self._set_state(error=message)
            return

        def drop_row(state: ViewState) -> Dict[str, Any]:
            update: Dict[str, Any] = {
                "appointments": [a for a in state.appointments if a.id != appointment_id],
                "error": None,
            }
            if state.editing == appointment_id:
                update.update(editing=None, edit_form=None, doctor_options=[])
            return update

        self._succeed(drop_row, reply.message or DEFAULT_DELETE_SUCCESS)

    # Editor

    def start_edit(self, appointment_id: int) -> None:
        """
        Put one row into edit mode

        Any other row's unsaved edits are discarded.

        Raises:
            LookupError: If the appointment is not in the list
        """
        appointment = self.state.find(appointment_id)
        if appointment is None:
            raise LookupError(f"Appointment {appointment_id} not found")

        self._set_state(
            editing=appointment_id,
            edit_form=EditForm.from_appointment(appointment),
            doctor_options=[],
        )

        options = self._load_doctor_options(appointment.department)
        if options:
            self._update_state(
                lambda state: {"doctor_options": options}
                if state.editing == appointment_id
                else {}
            )

    def _load_doctor_options(self, department: Optional[str]) -> List[Doctor]:
        """
        Best-effort doctor lookup; failures never surface as view errors

        Offers the department's available doctors, or every doctor when
        the row has no department or the department has none available.
        """
        if department:
            try:
                doctors = self.client.list_doctors_by_department(department)
            except AppointmentsAPIError as e:
                logger.warning(f"Could not load doctors for {department}: {e.message}")
                return []
            if doctors:
                return doctors

        try:
            return self.client.list_doctors()
        except AppointmentsAPIError as e:
            logger.warning(f"Could not load doctors: {e.message}")
            return []

    def change_field(self, name: str, value: str) -> None:
        """
        Replace one edit-form field

        Raises:
            ValueError: No row is being edited, or the field/value is invalid
        """
        with self._lock:
            form = self.state.edit_form
            if form is None:
                raise ValueError("No appointment is being edited")
            self.state = self.state.model_copy(update={"edit_form": form.with_field(name, value)})

    def change_fields(self, values: Mapping[str, str]) -> None:
        """
        Replace several edit-form fields at once

        Either every field is applied or, on the first invalid one,
        none are.

        Raises:
            ValueError: No row is being edited, or a field/value is invalid
        """
        with self._lock:
            form = self.state.edit_form
            if form is None:
                raise ValueError("No appointment is being edited")
            self.state = self.state.model_copy(update={"edit_form": form.with_fields(values)})

    def cancel_edit(self) -> None:
        """Leave edit mode without saving"""
        self._set_state(editing=None, edit_form=None, doctor_options=[])

    def save_edit(self, appointment_id: int) -> None:
        """
        Submit the edit form for the row being edited

        On failure the row stays in edit mode with the form intact.

        Raises:
            ValueError: If that row is not being edited
        """
        state = self.state
        if state.editing != appointment_id or state.edit_form is None:
            raise ValueError(f"Appointment {appointment_id} is not being edited")

        form = state.edit_form

        try:
            reply = self.client.update_appointment(appointment_id, form)
        except AppointmentsAPIError as e:
            logger.error(f"Failed to update appointment {appointment_id}: {e.message}")
            self._set_state(error=e.message or DEFAULT_UPDATE_FAILURE)
            return

        if not reply.succeeded:
            message = reply.message or DEFAULT_UPDATE_FAILURE
            logger.error(f"Backend refused update of appointment {appointment_id}: {message}")
            self._set_state(error=message)
            return

        def merge_row(state: ViewState) -> Dict[str, Any]:
            return {
                "appointments": [
                    a.merged_with(form) if a.id == appointment_id else a
                    for a in state.appointments
                ],
                "editing": None,
                "edit_form": None,
                "doctor_options": [],
                "error": None,
            }

        self._succeed(merge_row, reply.message or DEFAULT_UPDATE_SUCCESS)

    # Renderer

    def render(self) -> PageView:
        """Project the current state to a page view model"""
        return render_view(self.state)
