"""School-wide period catalog: one row per (day, period_number) teaching slot."""

from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, Time, UniqueConstraint, case

from school_admin.core.enums import WEEKDAY_RANK
from school_admin.db.session import Base


class Period(Base):
    __tablename__ = "periods"
    __table_args__ = (
        UniqueConstraint("day", "period_number", name="uq_period_day_number"),
        CheckConstraint("period_number > 0", name="ck_period_number_positive"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    day = Column(String(10), nullable=False)  # Monday .. Saturday
    period_number = Column(Integer, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)


# Weekday ordering is by rank, never alphabetical.
weekday_rank = case(WEEKDAY_RANK, value=Period.day, else_=len(WEEKDAY_RANK) + 1)
