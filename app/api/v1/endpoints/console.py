from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import Optional
from app.client.student_list import StudentListClient
from app.client.view import PageSnapshot
from app.utils.logger import ActivityLogger

router = APIRouter()

_console: Optional[StudentListClient] = None


def get_console() -> StudentListClient:
    """The one roster console for the lifetime of the app."""
    global _console
    if _console is None:
        _console = StudentListClient(activity=ActivityLogger())
    return _console


class FormUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    student_id: Optional[str] = None
    major: Optional[str] = None
    year: Optional[str] = None


class RowAction(BaseModel):
    # Answer to the delete confirmation prompt
    confirmed: bool = False


@router.get("/", response_model=PageSnapshot)
async def get_page(console: StudentListClient = Depends(get_console)):
    """Get the current page, loading the table on first visit"""
    if not console.has_loaded:
        await console.load_list()
    return console.snapshot()


@router.post("/refresh", response_model=PageSnapshot)
async def refresh(console: StudentListClient = Depends(get_console)):
    """Reload the student table"""
    await console.load_list()
    return console.snapshot()


@router.put("/form", response_model=PageSnapshot)
async def update_form(form: FormUpdate, console: StudentListClient = Depends(get_console)):
    """Type values into the form"""
    console.form.update(**form.model_dump(exclude_unset=True, exclude_none=True))
    return console.snapshot()


@router.post("/form/submit", response_model=PageSnapshot)
async def submit_form(console: StudentListClient = Depends(get_console)):
    """Create or update a student from the form"""
    await console.submit_form()
    return console.snapshot()


@router.post("/form/reset", response_model=PageSnapshot)
async def reset_form(console: StudentListClient = Depends(get_console)):
    """Cancel editing and clear the form"""
    console.reset_form()
    return console.snapshot()


@router.post("/rows/{student_id}/{action}", response_model=PageSnapshot)
async def row_action(
    student_id: int,
    action: str,
    body: Optional[RowAction] = None,
    console: StudentListClient = Depends(get_console)
):
    """Run a row action (edit or delete)"""
    answer = body.confirmed if body else False
    try:
        await console.dispatch(action, student_id, confirm=lambda prompt: answer)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown action: {action}")
    return console.snapshot()
