"""Teaching staff. Only referenced by the timetable as the teacher of a cell."""

from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Text

from school_admin.db.session import Base


class Faculty(Base):
    __tablename__ = "faculty"

    id = Column(Integer, primary_key=True, autoincrement=True)
    f_name = Column(String(100), nullable=False)
    l_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    phone = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    role = Column(String(50), nullable=True)
    # Null until the faculty member sets a password.
    password_hash = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
