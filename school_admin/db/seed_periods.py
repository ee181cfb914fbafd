"""
Seed script to populate the periods table with a default school week.

Creates periods 1..N for Monday through Saturday using one shared bell
schedule. Existing (day, period_number) slots are left untouched, so the
script can be re-run safely.

Usage: python -m school_admin.db.seed_periods [--periods 8] [--start 08:00]
       [--length 45] [--gap 5]
"""
import argparse
import asyncio
import logging
from datetime import datetime, time, timedelta
from typing import List, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.enums import DayOfWeek
from school_admin.core.models import Period
from school_admin.db.session import AsyncSessionLocal

logger = logging.getLogger(__name__)


def build_bell_schedule(
    periods: int,
    first_start: time,
    length_minutes: int,
    gap_minutes: int,
) -> List[Tuple[int, time, time]]:
    """(period_number, start, end) for one day. The whole day must fit before midnight."""
    if periods < 1:
        raise ValueError("At least one period per day is required")
    if length_minutes < 1:
        raise ValueError("Period length must be at least one minute")
    if gap_minutes < 0:
        raise ValueError("Gap between periods cannot be negative")
    schedule = []
    day = datetime.combine(datetime.today(), first_start)
    cursor = day
    for number in range(1, periods + 1):
        end = cursor + timedelta(minutes=length_minutes)
        if cursor.date() != day.date() or end.date() != day.date():
            raise ValueError("Bell schedule runs past midnight")
        schedule.append((number, cursor.time(), end.time()))
        cursor = end + timedelta(minutes=gap_minutes)
    return schedule


async def seed_periods(db: AsyncSession, schedule: List[Tuple[int, time, time]]) -> int:
    result = await db.execute(select(Period.day, Period.period_number))
    existing = {(day, number) for day, number in result.all()}

    created = 0
    for day in DayOfWeek:
        for number, start, end in schedule:
            if (day.value, number) in existing:
                continue
            db.add(Period(day=day.value, period_number=number, start_time=start, end_time=end))
            created += 1
    await db.commit()
    return created


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the default period catalog.")
    parser.add_argument("--periods", type=int, default=8, help="Periods per day")
    parser.add_argument("--start", default="08:00", help="First period start (HH:MM)")
    parser.add_argument("--length", type=int, default=45, help="Period length in minutes")
    parser.add_argument("--gap", type=int, default=5, help="Break between periods in minutes")
    return parser.parse_args()


async def main() -> None:
    """Main entry point for the seed script."""
    logging.basicConfig(level=logging.INFO)
    args = _parse_args()
    schedule = build_bell_schedule(
        args.periods,
        datetime.strptime(args.start, "%H:%M").time(),
        args.length,
        args.gap,
    )
    async with AsyncSessionLocal() as db:
        try:
            created = await seed_periods(db, schedule)
        except Exception:
            logger.exception("Error seeding periods")
            await db.rollback()
            raise
    logger.info("Seeded %d periods (%d per day)", created, len(schedule))


if __name__ == "__main__":
    asyncio.run(main())
