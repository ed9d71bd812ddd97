from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from .database import get_database_manager


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding an AsyncSession from the DatabaseManager.

    The session commits when the request handler returns and rolls back when
    it raises, so every request is one transaction.
    """
    manager = get_database_manager()
    async with manager.session() as session:
        yield session

