import logging
import re
import httpx
from typing import Awaitable, Callable, Dict, Optional, Any
from app.api.students_client import StudentsAPIClient
from app.client.state import EditingState, CREATE, start_editing, stop_editing, editing_id
from app.client.view import (
    CREATE_CHROME,
    Clock,
    EDIT_CHROME,
    MessageRegion,
    PageSnapshot,
    StudentForm,
    StudentTable,
)
from app.config import settings
from app.core.exceptions import StudentsAPIError
from app.models.student import StudentCreate
from app.utils.logger import ActivityLogger

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Are you sure you want to delete this student?"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_year(value: str) -> Optional[int]:
    """Leading integer of ``value``, or None when it does not start with one."""
    match = _LEADING_INT.match(value)
    if match is None:
        return None
    return int(match.group(1))


def _deny(prompt: str) -> bool:
    return False


class StudentListClient:
    """Keeps the roster table and the student form in sync with the backend.

    Every operation catches its own failures and reports them through the
    message region; nothing raises out of an operation.
    """

    def __init__(
        self,
        api: Optional[StudentsAPIClient] = None,
        confirm: Optional[Callable[[str], bool]] = None,
        clock: Optional[Clock] = None,
        message_timeout: Optional[float] = None,
        activity: Optional[ActivityLogger] = None
    ):
        self.api = api or StudentsAPIClient()
        self.confirm = confirm or _deny
        self.table = StudentTable()
        self.form = StudentForm()
        self.messages = MessageRegion(
            message_timeout if message_timeout is not None else settings.message_timeout,
            clock
        )
        self.activity = activity
        self.state: EditingState = CREATE
        self._list_seq = 0
        self._actions: Dict[str, Callable[..., Awaitable[None]]] = {
            "edit": self.begin_edit,
            "delete": self.delete,
        }

    @property
    def has_loaded(self) -> bool:
        """Whether a list load was ever started."""
        return self._list_seq > 0

    def _record(self, operation: str, outcome: str, student_id: Optional[int] = None, message: Optional[str] = None):
        if self.activity is not None:
            self.activity.log_activity(operation, outcome, student_id=student_id, message=message)

    async def load_list(self) -> None:
        """Fetch every student and re-render the table."""
        self._list_seq += 1
        seq = self._list_seq
        try:
            students = await self.api.list_students()
        except (httpx.RequestError, StudentsAPIError, ValueError) as e:
            if seq == self._list_seq:
                self.show_message(f"Error loading students: {e}", "error")
            self._record("load_list", "error", message=str(e))
            return

        if seq != self._list_seq:
            logger.debug("Dropping stale student list (request %s, latest %s)", seq, self._list_seq)
            return
        self.table.render(students)
        self._record("load_list", "success", message=f"{len(students)} students")

    async def submit_form(self) -> None:
        """Create or update a student from the current form values."""
        fields = self.form.fields
        candidate = StudentCreate(
            first_name=fields.first_name,
            last_name=fields.last_name,
            email=fields.email,
            student_id=fields.student_id,
            major=fields.major,
            year=parse_year(fields.year)
        )
        target = editing_id(self.state)
        operation = "create" if target is None else "update"

        try:
            if target is None:
                await self.api.create_student(candidate)
            else:
                await self.api.update_student(target, candidate)
        except StudentsAPIError as e:
            self.show_message(f"Error: {e.error_message}", "error")
            self._record(operation, "error", student_id=target, message=e.error_message)
            return
        except httpx.RequestError as e:
            self.show_message(f"Error: {e}", "error")
            self._record(operation, "error", student_id=target, message=str(e))
            return

        if target is None:
            self.show_message("Student added successfully!", "success")
        else:
            self.show_message("Student updated successfully!", "success")
        self._record(operation, "success", student_id=target)
        self.reset_form()
        await self.load_list()

    async def begin_edit(self, student_id: int) -> None:
        """Load a student into the form and switch to edit mode."""
        logger.debug("Edit student clicked, id=%s", student_id)
        try:
            student = await self.api.get_student(student_id)
        except StudentsAPIError as e:
            logger.debug("Edit failed with status %s: %s", e.status_code, e.body)
            self.show_message("Error loading student details", "error")
            self._record("edit", "error", student_id=student_id, message=e.body)
            return
        except (httpx.RequestError, ValueError) as e:
            logger.debug("Edit error: %s", e)
            self.show_message(f"Error: {e}", "error")
            self._record("edit", "error", student_id=student_id, message=str(e))
            return

        logger.debug("Student data: %s", student.model_dump(mode="json"))
        self.form.fill(student)
        self.state = start_editing(student_id)
        self.form.chrome = EDIT_CHROME
        self.form.bring_into_view()
        self._record("edit", "success", student_id=student_id)

    async def delete(self, student_id: int, confirm: Optional[Callable[[str], bool]] = None) -> None:
        """Delete a student once the user confirms.

        ``confirm`` answers the prompt for this call only; it defaults to the
        client's own ``confirm``.
        """
        if not (confirm or self.confirm)(DELETE_PROMPT):
            return

        try:
            await self.api.delete_student(student_id)
        except StudentsAPIError as e:
            self.show_message("Error deleting student", "error")
            self._record("delete", "error", student_id=student_id, message=e.error_message)
            return
        except httpx.RequestError as e:
            self.show_message(f"Error: {e}", "error")
            self._record("delete", "error", student_id=student_id, message=str(e))
            return

        self.show_message("Student deleted successfully!", "success")
        self._record("delete", "success", student_id=student_id)
        await self.load_list()

    def reset_form(self) -> None:
        """Clear the form and go back to create mode."""
        self.form.clear()
        self.state = stop_editing()
        self.form.chrome = CREATE_CHROME
        self.form.in_view = False

    def show_message(self, text: str, kind: str) -> None:
        self.messages.show(text, kind)

    async def dispatch(self, action: str, student_id: int, confirm: Optional[Callable[[str], bool]] = None) -> None:
        """Run a row action (``edit`` or ``delete``) for one student."""
        handler = self._actions[action]
        if action == "delete":
            await handler(student_id, confirm=confirm)
        else:
            await handler(student_id)

    async def check_backend(self) -> Dict[str, Any]:
        """Health report of the backend, or an unhealthy status if unreachable."""
        try:
            return await self.api.healthcheck()
        except (httpx.RequestError, StudentsAPIError, ValueError) as e:
            logger.warning("Backend health check failed: %s", e)
            return {"status": "unhealthy", "error": str(e)}

    def snapshot(self) -> PageSnapshot:
        return PageSnapshot(
            rows=self.table.rows,
            form=self.form.fields,
            chrome=self.form.chrome,
            form_in_view=self.form.in_view,
            message=self.messages.current,
            editing_id=editing_id(self.state)
        )
