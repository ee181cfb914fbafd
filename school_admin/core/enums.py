from enum import Enum


class DayOfWeek(str, Enum):
    """School days. There is no Sunday in the timetable."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"


# Monday=1 .. Saturday=6; used for every "order by day".
WEEKDAY_RANK = {day.value: idx for idx, day in enumerate(DayOfWeek, start=1)}
