from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class StudentBase(BaseModel):
    first_name: str
    last_name: str
    email: str
    student_id: str
    major: str


class StudentCreate(StudentBase):
    # None is sent when the form's year could not be parsed
    year: Optional[int] = None


class Student(StudentBase):
    id: int
    year: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ErrorResponse(BaseModel):
    error: str
