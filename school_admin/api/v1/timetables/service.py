"""Timetable cells: upsert keyed on (period, class), partial updates, and joined read views.

A (period_id, class_id) pair has at most one row. The unique constraint on the
timetable table enforces this on every write path; constraint violations are
reported as conflicts instead of being pre-checked with a separate read.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.exceptions import ConflictError, NotFoundError, ValidationError
from school_admin.core.models import Faculty, Period, SchoolClass, Subject, Timetable, weekday_rank

from .schemas import (
    ClassOption,
    FacultyOption,
    PeriodOption,
    SubjectOption,
    TimetableEntryResponse,
    TimetableFormData,
    TimetableRow,
    TimetableSlotCreate,
    TimetableSlotUpdate,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "period_id, class_id, subject_id, and faculty_id are all required."
PERIOD_CLASS_CONFLICT_MESSAGE = "A timetable entry already exists for this period and class."


def _to_response(t: Timetable) -> TimetableEntryResponse:
    return TimetableEntryResponse(
        id=t.id,
        period_id=t.period_id,
        class_id=t.class_id,
        subject_id=t.subject_id,
        faculty_id=t.faculty_id,
        created_at=t.created_at,
        updated_at=t.updated_at,
    )


async def _ensure_references(
    db: AsyncSession,
    period_id: Optional[int] = None,
    class_id: Optional[int] = None,
    subject_id: Optional[int] = None,
    faculty_id: Optional[int] = None,
) -> None:
    """Reject ids that point at no reference row. None means "not being set"."""
    checks = (
        (Period, period_id, "Invalid period"),
        (SchoolClass, class_id, "Invalid class"),
        (Subject, subject_id, "Invalid subject"),
        (Faculty, faculty_id, "Invalid faculty"),
    )
    for model, ref_id, message in checks:
        if ref_id is not None and await db.get(model, ref_id) is None:
            raise ValidationError(message)


async def upsert_timetable_slot(
    db: AsyncSession,
    payload: TimetableSlotCreate,
) -> Tuple[TimetableEntryResponse, bool]:
    """Insert the cell for (period_id, class_id) or overwrite its subject/faculty.

    Returns the row and whether it was newly created.
    """
    if None in (payload.period_id, payload.class_id, payload.subject_id, payload.faculty_id):
        raise ValidationError(REQUIRED_FIELDS_MESSAGE)
    await _ensure_references(
        db,
        period_id=payload.period_id,
        class_id=payload.class_id,
        subject_id=payload.subject_id,
        faculty_id=payload.faculty_id,
    )

    result = await db.execute(
        select(Timetable).where(
            Timetable.period_id == payload.period_id,
            Timetable.class_id == payload.class_id,
        )
    )
    obj = result.scalar_one_or_none()
    created = obj is None
    if created:
        obj = Timetable(
            period_id=payload.period_id,
            class_id=payload.class_id,
            subject_id=payload.subject_id,
            faculty_id=payload.faculty_id,
        )
        db.add(obj)
    else:
        obj.subject_id = payload.subject_id
        obj.faculty_id = payload.faculty_id

    try:
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        # A concurrent request inserted the same (period, class) first.
        await db.rollback()
        logger.warning(
            "Timetable upsert conflict for period_id=%s class_id=%s", payload.period_id, payload.class_id
        )
        raise ConflictError(PERIOD_CLASS_CONFLICT_MESSAGE)

    logger.info(
        "Timetable entry %s (id=%s, period_id=%s, class_id=%s)",
        "created" if created else "updated",
        obj.id,
        obj.period_id,
        obj.class_id,
    )
    return _to_response(obj), created


async def get_timetable_slot(db: AsyncSession, slot_id: int) -> TimetableEntryResponse:
    obj = await db.get(Timetable, slot_id)
    if not obj:
        raise NotFoundError("Timetable entry not found.")
    return _to_response(obj)


async def update_timetable_slot(
    db: AsyncSession,
    slot_id: int,
    payload: TimetableSlotUpdate,
) -> TimetableEntryResponse:
    changes = payload.model_dump(exclude_none=True)
    if not changes:
        raise ValidationError("No fields provided for update.")
    obj = await db.get(Timetable, slot_id)
    if not obj:
        raise NotFoundError("Timetable entry not found.")
    await _ensure_references(db, **changes)

    for field, value in changes.items():
        setattr(obj, field, value)
    # Every PATCH refreshes updated_at, even when no column value changes.
    obj.updated_at = datetime.utcnow()
    try:
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        await db.rollback()
        logger.warning("Timetable update conflict for id=%s with %s", slot_id, changes)
        raise ConflictError(PERIOD_CLASS_CONFLICT_MESSAGE)

    logger.info("Timetable entry updated (id=%s, fields=%s)", slot_id, sorted(changes))
    return _to_response(obj)


async def delete_timetable_slot(db: AsyncSession, slot_id: int) -> TimetableEntryResponse:
    obj = await db.get(Timetable, slot_id)
    if not obj:
        raise NotFoundError("Timetable entry not found.")
    deleted = _to_response(obj)
    await db.delete(obj)
    await db.commit()
    logger.info("Timetable entry deleted (id=%s)", slot_id)
    return deleted


def _timetable_view():
    return (
        select(
            Timetable.id.label("timetable_id"),
            Timetable.period_id,
            Timetable.class_id,
            Timetable.subject_id,
            Timetable.faculty_id,
            Period.day,
            Period.period_number,
            Period.start_time,
            Period.end_time,
            SchoolClass.standard,
            SchoolClass.division,
            Subject.subject_name,
            Faculty.f_name,
            Faculty.l_name,
        )
        .join(Period, Timetable.period_id == Period.id)
        .join(SchoolClass, Timetable.class_id == SchoolClass.id)
        .join(Subject, Timetable.subject_id == Subject.id)
        .join(Faculty, Timetable.faculty_id == Faculty.id)
    )


async def _fetch_rows(db: AsyncSession, stmt) -> List[TimetableRow]:
    result = await db.execute(stmt)
    return [TimetableRow.model_validate(dict(row)) for row in result.mappings().all()]


async def list_timetable(db: AsyncSession) -> List[TimetableRow]:
    """Whole-school timetable, grouped by day and period, then by class."""
    stmt = _timetable_view().order_by(
        weekday_rank,
        Period.period_number,
        SchoolClass.standard,
        SchoolClass.division,
    )
    return await _fetch_rows(db, stmt)


async def list_class_timetable(db: AsyncSession, class_id: int) -> List[TimetableRow]:
    stmt = (
        _timetable_view()
        .where(Timetable.class_id == class_id)
        .order_by(weekday_rank, Period.period_number)
    )
    return await _fetch_rows(db, stmt)


async def list_faculty_timetable(db: AsyncSession, faculty_id: int) -> List[TimetableRow]:
    stmt = (
        _timetable_view()
        .where(Timetable.faculty_id == faculty_id)
        .order_by(weekday_rank, Period.period_number)
    )
    return await _fetch_rows(db, stmt)


async def get_form_data(db: AsyncSession) -> TimetableFormData:
    periods = await db.execute(
        select(Period.id, Period.day, Period.period_number).order_by(weekday_rank, Period.period_number)
    )
    classes = await db.execute(
        select(SchoolClass.id, SchoolClass.standard, SchoolClass.division).order_by(
            SchoolClass.standard, SchoolClass.division
        )
    )
    subjects = await db.execute(select(Subject.id, Subject.subject_name).order_by(Subject.subject_name))
    faculty = await db.execute(
        select(Faculty.id, Faculty.f_name, Faculty.l_name).order_by(Faculty.f_name, Faculty.l_name)
    )
    return TimetableFormData(
        periods=[PeriodOption.model_validate(dict(r)) for r in periods.mappings().all()],
        classes=[ClassOption.model_validate(dict(r)) for r in classes.mappings().all()],
        subjects=[SubjectOption.model_validate(dict(r)) for r in subjects.mappings().all()],
        faculty=[FacultyOption.model_validate(dict(r)) for r in faculty.mappings().all()],
    )
