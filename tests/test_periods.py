import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.models import Period


async def _period_count(db_session: AsyncSession) -> int:
    result = await db_session.execute(select(func.count(Period.id)))
    return result.scalar_one()


@pytest.mark.asyncio
async def test_create_period(client: AsyncClient) -> None:
    payload = {"day": "Wednesday", "period_number": 3, "start_time": "10:00", "end_time": "10:45:00"}
    resp = await client.post("/api/v1/periods", json=payload)
    assert resp.status_code == 201
    data = resp.json()
    assert data["day"] == "Wednesday"
    assert data["period_number"] == 3
    assert data["start_time"] == "10:00"
    assert data["end_time"] == "10:45"


@pytest.mark.asyncio
async def test_duplicate_day_and_number_conflicts(client: AsyncClient, db_session: AsyncSession) -> None:
    payload = {"day": "Monday", "period_number": 1, "start_time": "08:00", "end_time": "08:45"}
    assert (await client.post("/api/v1/periods", json=payload)).status_code == 201
    before = await _period_count(db_session)

    dup = dict(payload, start_time="09:00", end_time="09:45")
    resp = await client.post("/api/v1/periods", json=dup)
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Period 1 on Monday already exists."
    assert await _period_count(db_session) == before


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"day": "Sunday", "period_number": 1, "start_time": "08:00", "end_time": "08:45"},
        {"day": "Monday", "period_number": 0, "start_time": "08:00", "end_time": "08:45"},
        {"day": "Monday", "period_number": 1, "start_time": "8am", "end_time": "08:45"},
        {"day": "Monday", "period_number": 1, "end_time": "08:45"},
    ],
)
async def test_invalid_period_is_rejected(client: AsyncClient, db_session: AsyncSession, payload) -> None:
    resp = await client.post("/api/v1/periods", json=payload)
    assert resp.status_code == 400
    assert await _period_count(db_session) == 0


@pytest.mark.asyncio
async def test_end_must_follow_start(client: AsyncClient) -> None:
    payload = {"day": "Monday", "period_number": 1, "start_time": "09:00", "end_time": "08:45"}
    resp = await client.post("/api/v1/periods", json=payload)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "end_time must be after start_time"


@pytest.mark.asyncio
async def test_list_orders_by_weekday_not_alphabet(client: AsyncClient) -> None:
    for day, number in [("Thursday", 1), ("Monday", 2), ("Saturday", 1), ("Monday", 1), ("Friday", 4)]:
        payload = {"day": day, "period_number": number, "start_time": "08:00", "end_time": "08:45"}
        assert (await client.post("/api/v1/periods", json=payload)).status_code == 201

    rows = (await client.get("/api/v1/periods")).json()
    assert [(r["day"], r["period_number"]) for r in rows] == [
        ("Monday", 1),
        ("Monday", 2),
        ("Thursday", 1),
        ("Friday", 4),
        ("Saturday", 1),
    ]


@pytest.mark.asyncio
async def test_delete_period(client: AsyncClient, school) -> None:
    unused = school["periods"][3]
    used = school["periods"][0]
    await client.post(
        "/api/v1/timetable",
        data={
            "period_id": used,
            "class_id": school["classes"][0],
            "subject_id": school["subjects"][0],
            "faculty_id": school["faculty"][0],
        },
    )

    assert (await client.delete(f"/api/v1/periods/{used}")).status_code == 400
    resp = await client.delete(f"/api/v1/periods/{unused}")
    assert resp.status_code == 200
    assert resp.json()["id"] == unused
    assert (await client.delete(f"/api/v1/periods/{unused}")).status_code == 404
