"""Service-level tests calling the timetable functions with a session directly."""

from datetime import datetime

import pytest
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.api.v1.timetables import service
from school_admin.api.v1.timetables.schemas import TimetableSlotCreate, TimetableSlotUpdate
from school_admin.core.exceptions import ConflictError, NotFoundError, ValidationError
from school_admin.core.models import Timetable


def _payload(school, period: int, klass: int, subject: int, faculty: int) -> TimetableSlotCreate:
    return TimetableSlotCreate(
        period_id=school["periods"][period],
        class_id=school["classes"][klass],
        subject_id=school["subjects"][subject],
        faculty_id=school["faculty"][faculty],
    )


@pytest.mark.asyncio
async def test_upsert_reports_created_flag_explicitly(db_session: AsyncSession, school) -> None:
    entry, created = await service.upsert_timetable_slot(db_session, _payload(school, 0, 0, 0, 0))
    assert created is True

    same, created_again = await service.upsert_timetable_slot(db_session, _payload(school, 0, 0, 0, 0))
    assert created_again is False
    assert same.id == entry.id

    changed, created_third = await service.upsert_timetable_slot(db_session, _payload(school, 0, 0, 2, 1))
    assert created_third is False
    assert changed.id == entry.id
    assert (changed.subject_id, changed.faculty_id) == (school["subjects"][2], school["faculty"][1])


@pytest.mark.asyncio
async def test_upsert_requires_all_fields(db_session: AsyncSession, school) -> None:
    with pytest.raises(ValidationError) as exc:
        await service.upsert_timetable_slot(
            db_session, TimetableSlotCreate(period_id=school["periods"][0], class_id=school["classes"][0])
        )
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_update_conflict_and_missing(db_session: AsyncSession, school) -> None:
    first, _ = await service.upsert_timetable_slot(db_session, _payload(school, 0, 0, 0, 0))
    second, _ = await service.upsert_timetable_slot(db_session, _payload(school, 1, 0, 1, 1))

    with pytest.raises(ConflictError):
        await service.update_timetable_slot(
            db_session, second.id, TimetableSlotUpdate(period_id=school["periods"][0])
        )
    reloaded = await service.get_timetable_slot(db_session, second.id)
    assert reloaded.period_id == school["periods"][1]

    # Moving the first entry to another class keeps the pair unique.
    moved = await service.update_timetable_slot(
        db_session, first.id, TimetableSlotUpdate(class_id=school["classes"][1])
    )
    assert moved.class_id == school["classes"][1]

    with pytest.raises(NotFoundError):
        await service.update_timetable_slot(db_session, 9999, TimetableSlotUpdate(subject_id=school["subjects"][0]))
    with pytest.raises(NotFoundError):
        await service.delete_timetable_slot(db_session, 9999)


@pytest.mark.asyncio
async def test_delete_then_list(db_session: AsyncSession, school) -> None:
    first, _ = await service.upsert_timetable_slot(db_session, _payload(school, 0, 0, 0, 0))
    second, _ = await service.upsert_timetable_slot(db_session, _payload(school, 0, 1, 0, 1))

    deleted = await service.delete_timetable_slot(db_session, first.id)
    assert deleted.id == first.id

    rows = await service.list_timetable(db_session)
    assert [r.timetable_id for r in rows] == [second.id]


@pytest.mark.asyncio
async def test_upsert_losing_insert_race_is_a_conflict(db_session: AsyncSession, school, monkeypatch) -> None:
    competitor, _ = await service.upsert_timetable_slot(db_session, _payload(school, 0, 0, 0, 0))

    # The lookup runs before the competing insert becomes visible: it finds nothing,
    # so the insert must be rejected by the (period_id, class_id) constraint on commit.
    real_execute = db_session.execute
    calls = {"n": 0}

    async def execute_missing_first_lookup(statement, *args, **kwargs):
        calls["n"] += 1
        if calls["n"] == 1:
            statement = select(Timetable).where(Timetable.id == -1)
        return await real_execute(statement, *args, **kwargs)

    monkeypatch.setattr(db_session, "execute", execute_missing_first_lookup)
    with pytest.raises(ConflictError) as exc:
        await service.upsert_timetable_slot(db_session, _payload(school, 0, 0, 2, 1))
    monkeypatch.undo()

    assert exc.value.status_code == 409
    total = (await db_session.execute(select(func.count(Timetable.id)))).scalar_one()
    assert total == 1
    kept = await service.get_timetable_slot(db_session, competitor.id)
    assert (kept.subject_id, kept.faculty_id) == (competitor.subject_id, competitor.faculty_id)


@pytest.mark.asyncio
async def test_update_with_unchanged_values_refreshes_updated_at(db_session: AsyncSession, school) -> None:
    entry, _ = await service.upsert_timetable_slot(db_session, _payload(school, 0, 0, 0, 0))
    stale = datetime(2000, 1, 1)
    await db_session.execute(update(Timetable).where(Timetable.id == entry.id).values(updated_at=stale))
    await db_session.commit()

    same = await service.update_timetable_slot(
        db_session, entry.id, TimetableSlotUpdate(subject_id=entry.subject_id)
    )
    assert same.subject_id == entry.subject_id
    assert same.updated_at.replace(tzinfo=None) > stale
