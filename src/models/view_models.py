"""
View models produced by the renderer

Tagged unions keyed on `kind` so templates and JSON consumers can
branch on a single field:
- page level: LoadingView | ErrorView | ListView
- row level: ViewRow | EditRow
"""

from typing import List, Literal, Optional, Union
from pydantic import BaseModel, Field, computed_field

from src.models.appointment import Doctor, EditForm


class ViewRow(BaseModel):
    """Read-only summary of one appointment"""

    kind: Literal["view"] = "view"
    id: int
    full_name: str
    department: str
    appointment_date: str
    appointment_time: str
    status: str
    doctor_name: str


class EditRow(BaseModel):
    """Edit form for the appointment currently being edited"""

    kind: Literal["edit"] = "edit"
    id: int
    form: EditForm
    status_choices: List[str]
    doctor_options: List[Doctor] = Field(default_factory=list)


Row = Union[ViewRow, EditRow]


class LoadingView(BaseModel):
    kind: Literal["loading"] = "loading"
    message: str = "Loading..."


class ErrorView(BaseModel):
    kind: Literal["error"] = "error"
    message: str


class ListView(BaseModel):
    kind: Literal["list"] = "list"
    title: str = "My Appointments"
    success: Optional[str] = None
    empty_message: str = "No appointments found."
    rows: List[Row] = Field(default_factory=list)

    @computed_field
    @property
    def empty(self) -> bool:
        return not self.rows


PageView = Union[LoadingView, ErrorView, ListView]
