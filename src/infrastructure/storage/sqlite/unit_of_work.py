"""SQLite unit of work built on the pool's ambient transaction."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from src.core.interfaces.storage import IUnitOfWork
from src.infrastructure.storage.sqlite.connection import get_transaction


class SQLiteUnitOfWork(IUnitOfWork):
    """
    Runs every store call inside the block on one pooled connection.

    The stores pick the connection up through get_transaction(), so they
    need no changes to take part.
    """

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        async with get_transaction():
            yield
