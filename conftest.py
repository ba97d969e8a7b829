"""
Shared pytest fixtures

- FakeSession: stands in for requests.Session, answers from a route table
- ManualScheduler: simulated clock for success-message clears
"""

import json
from http import HTTPStatus
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple, Union

import pytest
import requests

from src.config.settings import Settings
from src.services.appointments_view import AppointmentsView
from src.workers.appointments_worker import AppointmentsClient

BASE_URL = "http://backend.test"

APPOINTMENTS: List[Dict[str, Any]] = [
    {
        "id": 3,
        "fullName": "Ana Lopez",
        "phone": "555-0101",
        "department": "Cardiology",
        "appointmentDate": "2025-03-10",
        "appointmentTime": "09:30",
        "status": "Scheduled",
        "doctor": {"id": 11, "fullName": "Dr. Gregory House"},
    },
    {
        "id": 7,
        "fullName": "Ben Carter",
        "phone": "555-0102",
        "department": "Dermatology",
        "appointmentDate": "2025-03-11",
        "appointmentTime": "14:00",
        "status": "Completed",
        "doctor": None,
    },
    {
        "id": 9,
        "fullName": "Chloe Diaz",
        "phone": "555-0103",
        "department": "Cardiology",
        "appointmentDate": "2025-03-12",
        "appointmentTime": "11:15",
        "status": "Cancelled",
        "doctor": {"id": 12, "fullName": "Dr. Lisa Cuddy"},
    },
]


def make_response(status_code: int = 200, body: Union[str, Any] = "", reason: Optional[str] = None,
                  url: str = BASE_URL) -> requests.Response:
    """Build a real requests.Response with the given status and body"""
    text = body if isinstance(body, str) else json.dumps(body)
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason if reason is not None else HTTPStatus(status_code).phrase
    response.url = url
    response.encoding = "utf-8"
    response._content = text.encode("utf-8")
    return response


class Call(NamedTuple):
    method: str
    path: str
    kwargs: Dict[str, Any]


class FakeSession:
    """
    Route-table stand-in for requests.Session

    Unrouted requests answer 404. A route may also raise, to simulate
    transport failures.
    """

    def __init__(self, base_url: str = BASE_URL):
        self.base_url = base_url.rstrip("/") + "/"
        self.routes: Dict[Tuple[str, str], Callable[[], requests.Response]] = {}
        self.calls: List[Call] = []

    def route(self, method: str, path: str, status: int = 200, body: Union[str, Any] = "",
              reason: Optional[str] = None) -> None:
        self.routes[(method, path)] = lambda: make_response(status, body, reason, self.base_url + path)

    def fail(self, method: str, path: str, error: Exception) -> None:
        def raise_error():
            raise error
        self.routes[(method, path)] = raise_error

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        assert url.startswith(self.base_url), url
        path = url[len(self.base_url):]
        self.calls.append(Call(method, path, kwargs))

        handler = self.routes.get((method, path))
        if handler is None:
            return make_response(404, "", url=url)
        return handler()

    def calls_to(self, method: str) -> List[Call]:
        return [c for c in self.calls if c.method == method]


class ManualCall:
    """Pending call on a ManualScheduler"""

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Simulated clock

    Time only moves when advance() is called; due callbacks run
    synchronously in due order.
    """

    def __init__(self):
        self.now = 0.0
        self._calls: List[ManualCall] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualCall:
        call = ManualCall(self.now + delay, callback)
        self._calls.append(call)
        return call

    @property
    def pending(self) -> List[ManualCall]:
        return [c for c in self._calls if not c.cancelled and not c.fired]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = sorted((c for c in self.pending if c.due <= target), key=lambda c: c.due)
            if not due:
                break
            call = due[0]
            self.now = call.due
            call.fired = True
            call.callback()
        self.now = target


@pytest.fixture
def settings() -> Settings:
    return Settings(APPOINTMENTS_API_URL=BASE_URL)


@pytest.fixture
def session() -> FakeSession:
    fake = FakeSession()
    fake.route("GET", "appointments/list", body=APPOINTMENTS)
    return fake


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def client(settings, session) -> AppointmentsClient:
    return AppointmentsClient(settings=settings, session=session)


@pytest.fixture
def view(client, scheduler, settings) -> AppointmentsView:
    return AppointmentsView(client=client, scheduler=scheduler, settings=settings)


@pytest.fixture
def mounted_view(view) -> AppointmentsView:
    view.mount()
    return view
