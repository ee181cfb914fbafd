"""Classes (standard + division, e.g. 10-A). Model named SchoolClass to avoid Python 'class' keyword."""
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint

from school_admin.db.session import Base


class SchoolClass(Base):
    __tablename__ = "classes"
    __table_args__ = (UniqueConstraint("standard", "division", name="uq_class_standard_division"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    standard = Column(String(20), nullable=False)
    division = Column(String(10), nullable=False)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
