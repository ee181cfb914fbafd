"""Create all tables. Usage: python -m school_admin.db.init_db"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

# Import models so they are registered on Base.metadata
import school_admin.core.models  # noqa: F401
from school_admin.db.session import Base, engine

logger = logging.getLogger(__name__)


async def create_tables(db_engine: AsyncEngine) -> None:
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables ready: %s", ", ".join(sorted(Base.metadata.tables)))


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    await create_tables(engine)
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
