"""
Renderer - Pure projection of ViewState to a page view model

Precedence: loading, then error, then the list. Any non-empty error
hides the whole list, including errors raised by delete or update on a
populated list. That precedence is kept as-is and is a known UX wart.
"""

from typing import List

from src.models.appointment import APPOINTMENT_STATUSES, Appointment, Doctor
from src.models.view_models import (
    EditRow,
    ErrorView,
    ListView,
    LoadingView,
    PageView,
    Row,
    ViewRow,
)
from src.models.view_state import ViewState


def _view_row(appointment: Appointment) -> ViewRow:
    return ViewRow(
        id=appointment.id,
        full_name=appointment.full_name or "",
        department=appointment.department or "",
        appointment_date=appointment.appointment_date or "",
        appointment_time=appointment.appointment_time or "",
        status=appointment.status or "",
        doctor_name=appointment.doctor_name,
    )


def _doctor_choices(appointment: Appointment, state: ViewState) -> List[Doctor]:
    """Offered doctors, with the currently selected one always present"""
    options = list(state.doctor_options)
    selected = state.edit_form.doctor if state.edit_form else None

    if selected is not None and all(d.id != selected.id for d in options):
        current_name = None
        if appointment.doctor is not None and appointment.doctor.id == selected.id:
            current_name = appointment.doctor.full_name
        options.insert(0, Doctor(id=selected.id, full_name=current_name))

    return options


def _row(appointment: Appointment, state: ViewState) -> Row:
    if state.editing == appointment.id and state.edit_form is not None:
        return EditRow(
            id=appointment.id,
            form=state.edit_form,
            status_choices=list(APPOINTMENT_STATUSES),
            doctor_options=_doctor_choices(appointment, state),
        )
    return _view_row(appointment)


def render_view(state: ViewState) -> PageView:
    """
    Render the page for a given state

    Args:
        state: Current view state

    Returns:
        LoadingView, ErrorView or ListView
    """
    if state.loading:
        return LoadingView()

    if state.error:
        return ErrorView(message=state.error)

    return ListView(
        success=state.success or None,
        rows=[_row(appointment, state) for appointment in state.appointments],
    )
