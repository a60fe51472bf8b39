"""Display surface of the roster console: table, form and message region."""
import time
from pydantic import BaseModel
from typing import Callable, Dict, List, Literal, Optional, Tuple
from app.models.student import Student


class StudentRow(BaseModel):
    """One table row rendered from a student record."""
    id: int
    name: str
    email: str
    student_id: str
    major: str
    year: int
    actions: Tuple[str, ...] = ("edit", "delete")

    class Config:
        frozen = True

    @classmethod
    def from_student(cls, student: Student) -> "StudentRow":
        return cls(
            id=student.id,
            name=f"{student.first_name} {student.last_name}",
            email=student.email,
            student_id=student.student_id,
            major=student.major,
            year=student.year
        )


class StudentTable:
    """Rows in response order, with an id index for reuse.

    Rendering keeps the existing row object for every record whose columns
    did not change, so callers can tell which rows were rebuilt.
    """

    def __init__(self):
        self._rows: List[StudentRow] = []
        self._by_id: Dict[int, StudentRow] = {}

    @property
    def rows(self) -> List[StudentRow]:
        return list(self._rows)

    def row(self, student_id: int) -> Optional[StudentRow]:
        return self._by_id.get(student_id)

    def render(self, students: List[Student]) -> List[StudentRow]:
        """Replace the table content with one row per student, in order."""
        rows: List[StudentRow] = []
        by_id: Dict[int, StudentRow] = {}
        for student in students:
            row = StudentRow.from_student(student)
            previous = self._by_id.get(row.id)
            if previous == row:
                row = previous
            rows.append(row)
            by_id.setdefault(row.id, row)
        self._rows = rows
        self._by_id = by_id
        return self.rows


class FormFields(BaseModel):
    """Raw form control values, as typed by the user."""
    id: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    student_id: str = ""
    major: str = ""
    year: str = ""

    @classmethod
    def from_student(cls, student: Student) -> "FormFields":
        return cls(
            id=str(student.id),
            first_name=student.first_name,
            last_name=student.last_name,
            email=student.email,
            student_id=student.student_id,
            major=student.major,
            year=str(student.year)
        )


class FormChrome(BaseModel):
    title: str
    submit_label: str
    cancel_visible: bool

    class Config:
        frozen = True


CREATE_CHROME = FormChrome(title="Add New Student", submit_label="Add Student", cancel_visible=False)
EDIT_CHROME = FormChrome(title="Edit Student", submit_label="Update Student", cancel_visible=True)


class StudentForm:
    """The single create/edit form."""

    def __init__(self):
        self.fields = FormFields()
        self.chrome = CREATE_CHROME
        self.in_view = False

    def fill(self, student: Student) -> None:
        self.fields = FormFields.from_student(student)

    def update(self, **values: str) -> None:
        self.fields = self.fields.model_copy(update=values)

    def clear(self) -> None:
        self.fields = FormFields()

    def bring_into_view(self) -> None:
        self.in_view = True


class Message(BaseModel):
    text: str
    kind: Literal["success", "error"]


Clock = Callable[[], float]


class MessageRegion:
    """Holds at most one transient message.

    A message expires ``delay`` seconds after it was shown. Showing a new
    message replaces the deadline, so it always stays up for the full delay.
    Expiry is checked on read, so it does not depend on any event loop.
    """

    def __init__(self, delay: float, clock: Optional[Clock] = None):
        self.delay = delay
        self._clock = clock or time.monotonic
        self._message: Optional[Message] = None
        self._expires_at: Optional[float] = None

    @property
    def current(self) -> Optional[Message]:
        if self._expires_at is not None and self._clock() >= self._expires_at:
            self.clear()
        return self._message

    def show(self, text: str, kind: str) -> Message:
        self._message = Message(text=text, kind=kind)
        self._expires_at = self._clock() + self.delay
        return self._message

    def clear(self) -> None:
        self._message = None
        self._expires_at = None


class PageSnapshot(BaseModel):
    """Serializable copy of everything on the page."""
    rows: List[StudentRow]
    form: FormFields
    chrome: FormChrome
    form_in_view: bool
    message: Optional[Message] = None
    editing_id: Optional[int] = None
