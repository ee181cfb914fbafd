import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import time
from typing import AsyncGenerator, Dict, List

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from school_admin.core.models import Faculty, Period, SchoolClass, Subject
from school_admin.db.session import Base, get_db
from school_admin.main import app


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture()
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory SQLite DB per test; StaticPool keeps the single connection alive."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for a test and override FastAPI dependency."""
    async_session = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:

        async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
            yield session

        app.dependency_overrides[get_db] = override_get_db
        yield session

    app.dependency_overrides.pop(get_db, None)


@pytest.fixture()
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture()
async def school(db_session: AsyncSession) -> Dict[str, List[int]]:
    """Reference data: periods, classes, subjects and faculty. Returns ids by kind.

    Periods are inserted out of weekday order so ordering tests are meaningful:
    ids map to Saturday-1, Monday-2, Monday-1, Friday-1.
    """
    periods = [
        Period(day="Saturday", period_number=1, start_time=time(8, 0), end_time=time(8, 45)),
        Period(day="Monday", period_number=2, start_time=time(8, 50), end_time=time(9, 35)),
        Period(day="Monday", period_number=1, start_time=time(8, 0), end_time=time(8, 45)),
        Period(day="Friday", period_number=1, start_time=time(8, 0), end_time=time(8, 45)),
    ]
    classes = [
        SchoolClass(standard="10", division="B"),
        SchoolClass(standard="10", division="A"),
        SchoolClass(standard="9", division="A"),
    ]
    subjects = [Subject(subject_name="Mathematics"), Subject(subject_name="English"), Subject(subject_name="Science")]
    faculty = [
        Faculty(f_name="Asha", l_name="Rao", email="asha@example.com"),
        Faculty(f_name="Vikram", l_name="Shah", email="vikram@example.com"),
    ]
    rows = periods + classes + subjects + faculty
    db_session.add_all(rows)
    await db_session.commit()
    return {
        "periods": [p.id for p in periods],
        "classes": [c.id for c in classes],
        "subjects": [s.id for s in subjects],
        "faculty": [f.id for f in faculty],
    }
