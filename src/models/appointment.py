"""
Appointment data models

Wire-level shapes exchanged with the appointments backend:
- Appointment: a booking as returned by appointments/list
- Doctor / DoctorSummary: doctor records and the summary embedded in appointments
- EditForm: the editable projection of one appointment sent on update
"""

from typing import Any, Dict, List, Literal, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field


AppointmentStatus = Literal["Scheduled", "Completed", "Cancelled"]

APPOINTMENT_STATUSES: List[str] = ["Scheduled", "Completed", "Cancelled"]


class DoctorRef(BaseModel):
    """Doctor reference reduced to its identifier"""

    id: int


class DoctorSummary(BaseModel):
    """Doctor as embedded in an appointment"""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[int] = None
    full_name: Optional[str] = Field(None, alias="fullName")


class Doctor(BaseModel):
    """Doctor record from the doctors endpoints"""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    full_name: Optional[str] = Field(None, alias="fullName")
    department: Optional[str] = None
    status: Optional[str] = None


class Appointment(BaseModel):
    """
    Appointment record owned by the backend

    Unknown fields sent by the backend are kept so that merging
    an edit never drops server data.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int = Field(..., description="Server-assigned identifier")
    full_name: Optional[str] = Field(None, alias="fullName")
    phone: Optional[str] = None
    department: Optional[str] = None
    appointment_date: Optional[str] = Field(
        None, alias="appointmentDate", description="Calendar date, YYYY-MM-DD"
    )
    appointment_time: Optional[str] = Field(
        None, alias="appointmentTime", description="Time of day, HH:mm"
    )
    status: Optional[str] = Field(None, description="Server status, shown as sent")
    doctor: Optional[DoctorSummary] = None

    @property
    def doctor_name(self) -> str:
        if self.doctor and self.doctor.full_name:
            return self.doctor.full_name
        return "N/A"

    def merged_with(self, form: "EditForm") -> "Appointment":
        """
        Shallow-merge submitted form fields into this appointment

        The doctor's display name is kept even when the submitted
        doctor id differs; it stays stale until the next full reload.
        """
        data = self.model_dump(by_alias=True)
        submitted = form.to_payload()

        doctor_ref = submitted.pop("doctor")
        if doctor_ref is None:
            data["doctor"] = None
        else:
            previous = data.get("doctor") or {}
            data["doctor"] = {**previous, "id": doctor_ref["id"]}

        data.update(submitted)
        return Appointment.model_validate(data)


# Wire names accepted by EditForm.with_field, mapped to attribute names
EDIT_FIELDS: Dict[str, str] = {
    "fullName": "full_name",
    "phone": "phone",
    "department": "department",
    "appointmentDate": "appointment_date",
    "appointmentTime": "appointment_time",
    "status": "status",
}

DOCTOR_FIELD = "doctorId"


def _editable_status(status: Optional[str]) -> str:
    """Status preselected in the form; values outside the select fall back to Scheduled"""
    return status if status in APPOINTMENT_STATUSES else "Scheduled"


class EditForm(BaseModel):
    """Transient editable projection of one appointment"""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    full_name: str = Field("", alias="fullName")
    phone: str = ""
    department: str = ""
    appointment_date: str = Field("", alias="appointmentDate")
    appointment_time: str = Field("", alias="appointmentTime")
    status: AppointmentStatus = "Scheduled"
    doctor: Optional[DoctorRef] = None

    @classmethod
    def from_appointment(cls, appointment: Appointment) -> "EditForm":
        """Copy the editable fields of an appointment, blanks for missing values"""
        doctor = None
        if appointment.doctor is not None and appointment.doctor.id is not None:
            doctor = DoctorRef(id=appointment.doctor.id)

        return cls(
            full_name=appointment.full_name or "",
            phone=appointment.phone or "",
            department=appointment.department or "",
            appointment_date=appointment.appointment_date or "",
            appointment_time=appointment.appointment_time or "",
            status=_editable_status(appointment.status),
            doctor=doctor,
        )

    def with_field(self, name: str, value: str) -> "EditForm":
        """
        Return a copy with exactly one field replaced

        Args:
            name: Wire field name (fullName, phone, ..., or doctorId)
            value: Raw value captured from the form

        Raises:
            ValueError: Unknown field name, invalid status or doctor id
        """
        if name == DOCTOR_FIELD:
            value = (value or "").strip()
            if not value:
                return self.model_copy(update={"doctor": None})
            try:
                doctor = DoctorRef(id=int(value))
            except ValueError:
                raise ValueError(f"Invalid doctor id: {value!r}")
            return self.model_copy(update={"doctor": doctor})

        if name not in EDIT_FIELDS:
            raise ValueError(f"Unknown edit field: {name}")

        if name == "status" and value not in APPOINTMENT_STATUSES:
            raise ValueError(f"Invalid status: {value!r}")

        return self.model_copy(update={EDIT_FIELDS[name]: value})

    def with_fields(self, values: Mapping[str, str]) -> "EditForm":
        """
        Return a copy with several fields replaced, all or nothing

        Raises:
            ValueError: On the first invalid field; self is never modified
        """
        form = self
        for name, value in values.items():
            form = form.with_field(name, value)
        return form

    def to_payload(self) -> Dict[str, Any]:
        """JSON body for the update request"""
        return self.model_dump(by_alias=True, mode="json")
