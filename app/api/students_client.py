import httpx
from pydantic import TypeAdapter
from typing import Optional, List, Dict, Any
from app.config import settings
from app.core.exceptions import StudentsAPIError
from app.models.student import Student, StudentCreate

StudentList = TypeAdapter(List[Student])


class StudentsAPIClient:
    """Client for the students REST backend."""
    
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = (base_url or settings.students_api_base).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._transport = transport
        self._headers = {
            "Accept": "application/json",
            "Content-Type": "application/json"
        }
    
    @property
    def service_root(self) -> str:
        """Backend root URL, where the health check lives."""
        root, sep, _ = self.base_url.rpartition("/api/")
        return root if sep else self.base_url
    
    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=self.timeout)
    
    @staticmethod
    def _check(response: httpx.Response) -> None:
        if not response.is_success:
            raise StudentsAPIError(
                status_code=response.status_code,
                body=response.text,
                path=response.request.url.path
            )
    
    async def list_students(self) -> List[Student]:
        """List every student, in backend order."""
        async with self._client() as client:
            response = await client.get(
                f"{self.base_url}/students",
                headers=self._headers
            )
            self._check(response)
            # an empty collection may come back as null
            return StudentList.validate_python(response.json() or [])
    
    async def get_student(self, student_id: int) -> Student:
        """Get a single student by backend id."""
        async with self._client() as client:
            response = await client.get(
                f"{self.base_url}/students/{student_id}",
                headers=self._headers
            )
            self._check(response)
            return Student.model_validate(response.json())
    
    async def create_student(self, student: StudentCreate) -> httpx.Response:
        """Create a student; the id is assigned by the backend."""
        async with self._client() as client:
            response = await client.post(
                f"{self.base_url}/students",
                headers=self._headers,
                json=student.model_dump(mode="json")
            )
            self._check(response)
            return response
    
    async def update_student(self, student_id: int, student: StudentCreate) -> httpx.Response:
        """Replace every field of an existing student."""
        async with self._client() as client:
            response = await client.put(
                f"{self.base_url}/students/{student_id}",
                headers=self._headers,
                json=student.model_dump(mode="json")
            )
            self._check(response)
            return response
    
    async def delete_student(self, student_id: int) -> None:
        """Delete a student."""
        async with self._client() as client:
            response = await client.delete(
                f"{self.base_url}/students/{student_id}",
                headers=self._headers
            )
            self._check(response)
    
    async def healthcheck(self) -> Dict[str, Any]:
        """Fetch the backend's health report.
        
        The backend answers 503 with the same body when its database is down,
        so the body is returned for any status that carries one.
        """
        async with self._client() as client:
            response = await client.get(
                f"{self.service_root}/healthcheck",
                headers=self._headers
            )
            try:
                return response.json()
            except ValueError:
                self._check(response)
                raise
