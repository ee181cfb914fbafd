from school_admin.core.models.period import Period, weekday_rank
from school_admin.core.models.class_model import SchoolClass
from school_admin.core.models.subject import Subject
from school_admin.core.models.faculty import Faculty
from school_admin.core.models.timetable import Timetable

__all__ = [
    "Faculty",
    "Period",
    "SchoolClass",
    "Subject",
    "Timetable",
    "weekday_rank",
]
