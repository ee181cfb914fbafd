import logging
from typing import List

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.exceptions import ConflictError, NotFoundError, ValidationError
from school_admin.core.models import Period, Timetable, weekday_rank

from .schemas import PeriodCreate, PeriodResponse

logger = logging.getLogger(__name__)


def _to_response(p: Period) -> PeriodResponse:
    return PeriodResponse(
        id=p.id,
        day=p.day,
        period_number=p.period_number,
        start_time=p.start_time,
        end_time=p.end_time,
    )


def _duplicate_message(payload: PeriodCreate) -> str:
    return f"Period {payload.period_number} on {payload.day.value} already exists."


async def create_period(db: AsyncSession, payload: PeriodCreate) -> PeriodResponse:
    if payload.end_time <= payload.start_time:
        raise ValidationError("end_time must be after start_time")
    existing = await db.execute(
        select(Period.id).where(
            Period.day == payload.day.value,
            Period.period_number == payload.period_number,
        )
    )
    if existing.scalar_one_or_none() is not None:
        raise ConflictError(_duplicate_message(payload))
    try:
        obj = Period(
            day=payload.day.value,
            period_number=payload.period_number,
            start_time=payload.start_time,
            end_time=payload.end_time,
        )
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        # Lost a race with a concurrent insert of the same slot.
        await db.rollback()
        raise ConflictError(_duplicate_message(payload))
    logger.info("Created period %s %s (id=%s)", obj.day, obj.period_number, obj.id)
    return _to_response(obj)


async def list_periods(db: AsyncSession) -> List[PeriodResponse]:
    result = await db.execute(select(Period).order_by(weekday_rank, Period.period_number))
    return [_to_response(p) for p in result.scalars().all()]


async def delete_period(db: AsyncSession, period_id: int) -> PeriodResponse:
    obj = await db.get(Period, period_id)
    if not obj:
        raise NotFoundError("Period not found.")
    used = await db.execute(select(func.count(Timetable.id)).where(Timetable.period_id == period_id))
    if used.scalar_one() > 0:
        raise ValidationError("Cannot delete this period. It is used by timetable entries.")
    deleted = _to_response(obj)
    await db.delete(obj)
    await db.commit()
    logger.info("Deleted period id=%s", period_id)
    return deleted
