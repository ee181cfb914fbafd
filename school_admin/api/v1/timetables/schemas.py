from datetime import datetime, time
from typing import List, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from school_admin.api.v1.periods.schemas import format_time_24
from school_admin.core.schemas import MAX_ID


def _blank_to_none(v):
    # Form posts send "" for an untouched select.
    if isinstance(v, str) and not v.strip():
        return None
    return v


class TimetableSlotCreate(BaseModel):
    """Upsert body. Fields are optional here so a missing one is reported as a single 400."""

    period_id: Optional[int] = Field(None, ge=1, le=MAX_ID)
    class_id: Optional[int] = Field(None, ge=1, le=MAX_ID)
    subject_id: Optional[int] = Field(None, ge=1, le=MAX_ID)
    faculty_id: Optional[int] = Field(None, ge=1, le=MAX_ID)

    @field_validator("period_id", "class_id", "subject_id", "faculty_id", mode="before")
    @classmethod
    def blank_is_missing(cls, v):
        return _blank_to_none(v)


class TimetableSlotUpdate(TimetableSlotCreate):
    """Partial update: any subset of the four references."""


class TimetableEntryResponse(BaseModel):
    id: int
    period_id: int
    class_id: int
    subject_id: int
    faculty_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TimetableRow(BaseModel):
    """One timetable cell joined with readable period/class/subject/faculty fields."""

    timetable_id: int
    period_id: int
    class_id: int
    subject_id: int
    faculty_id: int
    day: str
    period_number: int
    start_time: time
    end_time: time
    standard: str
    division: str
    subject_name: str
    f_name: str
    l_name: str

    @field_serializer("start_time", "end_time")
    def serialize_time_24(self, t: time) -> str:
        return format_time_24(t)


class PeriodOption(BaseModel):
    id: int
    day: str
    period_number: int


class ClassOption(BaseModel):
    id: int
    standard: str
    division: str


class SubjectOption(BaseModel):
    id: int
    subject_name: str


class FacultyOption(BaseModel):
    id: int
    f_name: str
    l_name: str


class TimetableFormData(BaseModel):
    """Dropdown data for the assign-period form."""

    periods: List[PeriodOption]
    classes: List[ClassOption]
    subjects: List[SubjectOption]
    faculty: List[FacultyOption]
