from pydantic import BaseModel
from typing import Literal, Optional, Union


class CreateMode(BaseModel):
    """The form creates a new student."""
    kind: Literal["create"] = "create"

    class Config:
        frozen = True


class EditingMode(BaseModel):
    """The form edits the student with backend id ``student_id``."""
    kind: Literal["editing"] = "editing"
    student_id: int

    class Config:
        frozen = True


EditingState = Union[CreateMode, EditingMode]

CREATE = CreateMode()


def start_editing(student_id: int) -> EditingState:
    return EditingMode(student_id=student_id)


def stop_editing() -> EditingState:
    return CREATE


def editing_id(state: EditingState) -> Optional[int]:
    """Id targeted by the form, or None in create mode."""
    if isinstance(state, EditingMode):
        return state.student_id
    return None
