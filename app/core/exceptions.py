"""Errors raised by the students API client."""

from typing import Optional

from pydantic import ValidationError

from app.models.student import ErrorResponse


class StudentsAPIError(Exception):
    """The students backend answered with a non-success status."""

    def __init__(self, status_code: int, body: str, path: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        self.path = path
        super().__init__(f"HTTP {status_code} from {path or 'students API'}")

    @property
    def error_message(self) -> str:
        """The backend's ``{"error": ...}`` message, or the raw body."""
        try:
            return ErrorResponse.model_validate_json(self.body).error
        except ValidationError:
            return self.body

