"""Timetable cell: one (period, class) bound to a subject and a faculty member."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from school_admin.db.session import Base


class Timetable(Base):
    __tablename__ = "timetable"
    __table_args__ = (
        # Upsert key; several classes may share a period.
        UniqueConstraint("period_id", "class_id", name="uq_timetable_period_class"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    period_id = Column(Integer, ForeignKey("periods.id", ondelete="RESTRICT"), nullable=False)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="RESTRICT"), nullable=False)
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="RESTRICT"), nullable=False)
    faculty_id = Column(Integer, ForeignKey("faculty.id", ondelete="RESTRICT"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    period = relationship("Period")
    school_class = relationship("SchoolClass", foreign_keys=[class_id])
    subject = relationship("Subject")
    faculty = relationship("Faculty", foreign_keys=[faculty_id])
