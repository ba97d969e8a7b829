"""
Appointments API Client - REST operations against the appointments backend

Handles:
- Appointment listing, deletion and update
- Doctor lookups used by the edit form
- Tolerant decoding of mutation replies (JSON object or raw text)
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote
import requests
from pydantic import TypeAdapter, ValidationError
from requests.exceptions import RequestException

from src.config.settings import Settings, get_settings
from src.models.appointment import Appointment, Doctor, EditForm
from src.workers.appointments_worker.response_decoder import (
    MutationReply,
    decode_mutation_response,
)

logger = logging.getLogger(__name__)

_appointment_list = TypeAdapter(List[Appointment])
_doctor_list = TypeAdapter(List[Doctor])


class AppointmentsAPIError(Exception):
    """
    Failure talking to the appointments backend

    Raised for transport errors, non-2xx statuses on read endpoints
    and malformed read payloads. The message is user-presentable.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AppointmentsClient:
    """
    Appointments backend client

    Provides methods to:
    - List all appointments
    - Delete an appointment
    - Update an appointment from an edit form
    - Look up doctors (all, or by department)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize client

        Args:
            settings: Settings to use (defaults to cached application settings)
            session: HTTP session (a new requests.Session if not provided)
        """
        self.settings = settings or get_settings()
        self.base_url = self.settings.api_base_url
        self.timeout = self.settings.request_timeout_seconds
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _send(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        """
        Issue one request

        Raises:
            AppointmentsAPIError: If the request never produced a response
        """
        url = self._url(path)
        logger.debug(f"{method} {url}")

        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except RequestException as e:
            logger.warning(f"Transport error on {method} {url}: {e}")
            raise AppointmentsAPIError(str(e)) from e

    def _get_json(self, path: str) -> Any:
        """GET a JSON document, non-2xx mapped to '<status>::<reason>'"""
        response = self._send("GET", path)

        if not response.ok:
            message = f"{response.status_code}::{response.reason}"
            logger.warning(f"GET {path} failed: {message}")
            raise AppointmentsAPIError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"GET {path} returned invalid JSON: {e}")
            raise AppointmentsAPIError(f"Invalid JSON from {path}: {e}") from e

    def list_appointments(self) -> List[Appointment]:
        """
        Fetch the full appointment collection

        Returns:
            Appointments in server order

        Raises:
            AppointmentsAPIError: Transport failure, non-2xx or malformed payload
        """
        logger.info("Fetching appointments")

        data = self._get_json("appointments/list")
        try:
            appointments = _appointment_list.validate_python(data)
        except ValidationError as e:
            logger.warning(f"Malformed appointments payload: {e}")
            raise AppointmentsAPIError(
                f"Malformed appointments payload ({e.error_count()} error(s))"
            ) from e

        logger.info(f"Fetched {len(appointments)} appointment(s)")
        return appointments

    def delete_appointment(self, appointment_id: int) -> MutationReply:
        """
        Delete one appointment

        Args:
            appointment_id: Appointment identifier

        Returns:
            Decoded reply; a plain-text body counts as success

        Raises:
            AppointmentsAPIError: Transport failure
        """
        logger.info(f"Deleting appointment {appointment_id}")

        response = self._send("DELETE", f"appointments/{appointment_id}")
        reply = decode_mutation_response(response.text)

        logger.info(
            f"Delete appointment {appointment_id}: "
            f"{'success' if reply.succeeded else 'failed'} ({reply.kind} reply)"
        )
        return reply

    def update_appointment(self, appointment_id: int, form: EditForm) -> MutationReply:
        """
        Submit an edit form for one appointment

        Args:
            appointment_id: Appointment identifier
            form: Full current edit form, sent as the JSON body

        Returns:
            Decoded reply; a plain-text body counts as success

        Raises:
            AppointmentsAPIError: Transport failure
        """
        logger.info(f"Updating appointment {appointment_id}")

        headers: Dict[str, str] = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        response = self._send(
            "PUT",
            f"appointments/{appointment_id}",
            json=form.to_payload(),
            headers=headers,
        )
        reply = decode_mutation_response(response.text)

        logger.info(
            f"Update appointment {appointment_id}: "
            f"{'success' if reply.succeeded else 'failed'} ({reply.kind} reply)"
        )
        return reply

    def list_doctors(self) -> List[Doctor]:
        """Fetch every doctor"""
        return self._validate_doctors(self._get_json("doctors/list"), "doctors/list")

    def list_doctors_by_department(self, department: str) -> List[Doctor]:
        """
        Fetch the available doctors of a department

        Args:
            department: Department name (matched case-insensitively by the backend)

        Returns:
            Available doctors of that department
        """
        logger.info(f"Fetching doctors for department: {department}")
        path = f"doctors/department/{quote(department, safe='')}"
        return self._validate_doctors(self._get_json(path), path)

    @staticmethod
    def _validate_doctors(data: Any, path: str) -> List[Doctor]:
        try:
            return _doctor_list.validate_python(data)
        except ValidationError as e:
            logger.warning(f"Malformed doctors payload from {path}: {e}")
            raise AppointmentsAPIError(
                f"Malformed doctors payload ({e.error_count()} error(s))"
            ) from e
