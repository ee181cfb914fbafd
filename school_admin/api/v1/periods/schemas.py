from datetime import datetime, time
from typing import Union

from pydantic import BaseModel, Field, field_serializer, field_validator

from school_admin.core.enums import DayOfWeek


def _parse_time_24(v: Union[str, time]) -> time:
    """Parse 24-hour time string (HH:MM or HH:MM:SS) to time."""
    if isinstance(v, time):
        return v
    if isinstance(v, str):
        v = v.strip()
        if len(v) == 5:  # HH:MM
            return datetime.strptime(v, "%H:%M").time()
        return datetime.strptime(v, "%H:%M:%S").time()
    raise ValueError("start_time/end_time must be 24-hour string (e.g. 09:00, 09:45) or time")


def format_time_24(t: time) -> str:
    return t.strftime("%H:%M")


class PeriodCreate(BaseModel):
    day: DayOfWeek = Field(..., description="Monday .. Saturday")
    period_number: int = Field(..., ge=1)
    start_time: Union[str, time] = Field(..., description="24-hour format, e.g. 09:00")
    end_time: Union[str, time] = Field(..., description="24-hour format, e.g. 09:45")

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_time(cls, v: Union[str, time]) -> time:
        return _parse_time_24(v)


class PeriodResponse(BaseModel):
    id: int
    day: DayOfWeek
    period_number: int
    start_time: time
    end_time: time

    class Config:
        from_attributes = True

    @field_serializer("start_time", "end_time")
    def serialize_time_24(self, t: time) -> str:
        return format_time_24(t)
