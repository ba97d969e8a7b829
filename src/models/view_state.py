"""
View State Model - Working state of the appointments view

ViewState is treated as an immutable value: every transition builds a
new instance, so two snapshots can be compared for equality.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from src.models.appointment import Appointment, Doctor, EditForm


class ViewState(BaseModel):
    """State shared by the list loader, deleter, editor and renderer"""

    model_config = ConfigDict(frozen=True)

    # Server order, never re-sorted client-side
    appointments: List[Appointment] = Field(default_factory=list)

    # True only until the initial fetch settles
    loading: bool = True

    error: Optional[str] = None
    success: Optional[str] = None

    # At most one row is editable at a time
    editing: Optional[int] = None
    edit_form: Optional[EditForm] = None
    doctor_options: List[Doctor] = Field(default_factory=list)

    def find(self, appointment_id: int) -> Optional[Appointment]:
        for appointment in self.appointments:
            if appointment.id == appointment_id:
                return appointment
        return None
