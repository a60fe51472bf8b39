import json
import httpx
import pytest
from typing import Any, Dict, List, Optional, Tuple
from app.api.students_client import StudentsAPIClient
from app.client.student_list import StudentListClient

BASE_URL = "http://backend.test/api/v1"


class FakeStudentsBackend:
    """In-memory students API served through httpx.MockTransport."""

    def __init__(self, students: Optional[List[Dict[str, Any]]] = None):
        self.students: Dict[int, Dict[str, Any]] = {}
        self.next_id = 1
        self.requests: List[httpx.Request] = []
        self.failures: Dict[Tuple[str, str], Tuple[int, Dict[str, Any]]] = {}
        self.down = False
        for student in students or []:
            self.add(student)

    def add(self, student: Dict[str, Any]) -> Dict[str, Any]:
        record = dict(student)
        record.setdefault("id", self.next_id)
        self.next_id = max(self.next_id, record["id"]) + 1
        self.students[record["id"]] = record
        return record

    def fail(self, method: str, path: str, status_code: int, **kwargs):
        self.failures[(method, path)] = (status_code, kwargs)

    def calls(self, method: Optional[str] = None) -> List[Tuple[str, str]]:
        return [
            (r.method, r.url.path) for r in self.requests
            if method is None or r.method == method
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.down:
            raise httpx.ConnectError("Connection refused", request=request)

        key = (request.method, request.url.path)
        if key in self.failures:
            status_code, kwargs = self.failures[key]
            return httpx.Response(status_code, **kwargs)

        path = request.url.path
        if path == "/healthcheck":
            return httpx.Response(200, json={"status": "healthy", "database": "connected", "service": "students-api"})

        parts = path.removeprefix("/api/v1/students").strip("/")
        if not parts:
            if request.method == "GET":
                return httpx.Response(200, json=list(self.students.values()))
            if request.method == "POST":
                record = self.add(json.loads(request.content))
                return httpx.Response(201, json=record)
            return httpx.Response(405)

        student_id = int(parts)
        if student_id not in self.students:
            return httpx.Response(404, json={"error": "Student not found"})
        if request.method == "GET":
            return httpx.Response(200, json=self.students[student_id])
        if request.method == "PUT":
            record = dict(json.loads(request.content), id=student_id)
            self.students[student_id] = record
            return httpx.Response(200, json=record)
        if request.method == "DELETE":
            del self.students[student_id]
            return httpx.Response(204)
        return httpx.Response(405)


class FakeClock:
    """Monotonic clock that only moves when a test advances it."""

    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def _make_student(**overrides) -> Dict[str, Any]:
    student = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@stanford.edu",
        "student_id": "S1001",
        "major": "Mathematics",
        "year": 2,
    }
    student.update(overrides)
    return student


@pytest.fixture
def make_student():
    return _make_student


@pytest.fixture
def backend():
    return FakeStudentsBackend()


@pytest.fixture
def api(backend):
    return StudentsAPIClient(base_url=BASE_URL, transport=httpx.MockTransport(backend.handler))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def console(api, clock):
    return StudentListClient(api=api, clock=clock, message_timeout=5.0)
