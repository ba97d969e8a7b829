"""
FastAPI server for the Appointments page

Hosts one AppointmentsView and turns browser actions into view handlers.
Everything is rendered server-side with Jinja2; mutating routes redirect
back to the page.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from src.api.middleware.audit_logger import audit_log_middleware
from src.models.appointment import DOCTOR_FIELD, EDIT_FIELDS
from src.services.appointments_view import DELETE_CONFIRMATION, AppointmentsView

logger = logging.getLogger(__name__)

templates_dir = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(templates_dir))

# Form fields accepted by the save route, in the order they are applied
FORM_FIELDS = list(EDIT_FIELDS) + [DOCTOR_FIELD]


def _back_to_page() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


def _is_confirmed(value: Any) -> bool:
    return str(value or "").strip().lower() in ("1", "true", "yes", "on")


def create_app(view: Optional[AppointmentsView] = None) -> FastAPI:
    """
    Create and configure FastAPI application

    Args:
        view: Component instance to host (a new AppointmentsView if not provided)

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Appointments",
        description="List, edit and delete appointments",
        version="1.0.0",
    )
    app.state.view = view or AppointmentsView()

    def get_view() -> AppointmentsView:
        return app.state.view

    # Startup event: load the appointment list
    @app.on_event("startup")
    async def startup_event():
        """Mount the view on application startup"""
        logger.info("Mounting appointments view")
        await run_in_threadpool(get_view().mount)

    # Shutdown event: cancel pending timers
    @app.on_event("shutdown")
    async def shutdown_event():
        """Unmount the view on application shutdown"""
        logger.info("Unmounting appointments view")
        get_view().unmount()

    # Audit logging middleware (logs every request)
    app.middleware("http")(audit_log_middleware)

    @app.get("/", tags=["Page"])
    async def get_page(request: Request):
        """
        Serve the appointments page

        Template variables injected:
        - page: Current page view model (loading, error or list)
        - confirm_prompt: Question asked before deleting
        - current_time: Server timestamp
        """
        page = get_view().render()
        return templates.TemplateResponse(
            request,
            "appointments.html",
            {
                "page": page,
                "confirm_prompt": DELETE_CONFIRMATION,
                "current_time": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            },
        )

    @app.get("/api/view", tags=["Page"])
    async def get_view_model() -> Dict[str, Any]:
        """Current page view model as JSON"""
        return get_view().render().model_dump(mode="json")

    @app.post("/appointments/{appointment_id}/delete", tags=["Appointments"])
    async def delete_appointment(appointment_id: int, request: Request):
        """
        Delete an appointment

        The browser asks for confirmation; the answer arrives as the
        `confirmed` form field. Anything but a truthy value declines.
        """
        form = await request.form()
        confirmed = _is_confirmed(form.get("confirmed"))

        await run_in_threadpool(
            get_view().handle_delete, appointment_id, lambda prompt: confirmed
        )
        return _back_to_page()

    @app.post("/appointments/{appointment_id}/edit", tags=["Appointments"])
    async def start_edit(appointment_id: int):
        """Put one row into edit mode"""
        try:
            await run_in_threadpool(get_view().start_edit, appointment_id)
        except LookupError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return _back_to_page()

    @app.post("/appointments/{appointment_id}/save", tags=["Appointments"])
    async def save_edit(appointment_id: int, request: Request):
        """
        Apply the submitted form fields, then save

        Only fields present in the submission are changed. A submission
        with any invalid field leaves the edit form untouched.
        """
        view = get_view()
        form = await request.form()
        submitted = {name: str(form.get(name)) for name in FORM_FIELDS if name in form}

        try:
            if view.state.editing != appointment_id:
                raise ValueError(f"Appointment {appointment_id} is not being edited")
            view.change_fields(submitted)
            await run_in_threadpool(view.save_edit, appointment_id)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))

        return _back_to_page()

    @app.post("/appointments/cancel-edit", tags=["Appointments"])
    async def cancel_edit():
        """Leave edit mode without saving"""
        get_view().cancel_edit()
        return _back_to_page()

    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Health check endpoint

        Returns:
            Status information including service name and timestamp
        """
        view = get_view()
        return {
            "status": "healthy",
            "service": "appointments-ui",
            "version": "1.0.0",
            "mounted": view.mounted,
            "loading": view.state.loading,
            "timestamp": datetime.now().isoformat(),
        }

    return app
