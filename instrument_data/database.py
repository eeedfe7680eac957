"""
Connection pool for the instrument database.

Repositories never open transactions; callers use Database.transaction() (or
their own asyncpg connection) and pass the connection into every call.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import asyncpg

from instrument_data.config import Config
from instrument_data.utils.logger import get_logger

logger = get_logger(__name__)


class Database:
    """Process-wide asyncpg pool shared by all callers"""

    _pool: Optional[asyncpg.Pool] = None

    @classmethod
    async def create_pool(cls, config: Config) -> asyncpg.Pool:
        """
        Create the connection pool, or return the existing one.

        Args:
            config: Configuration object

        Returns:
            asyncpg.Pool: Connection pool
        """
        if cls._pool is None:
            logger.info(
                "Connecting to %s:%s/%s",
                config.database.host,
                config.database.port,
                config.database.database,
            )
            cls._pool = await asyncpg.create_pool(
                config.db_dsn,
                min_size=config.database.min_pool_size,
                max_size=config.database.max_pool_size,
                command_timeout=config.database.command_timeout
            )
        return cls._pool

    @classmethod
    async def close_pool(cls):
        """Close the connection pool"""
        if cls._pool is not None:
            await cls._pool.close()
            cls._pool = None

    @classmethod
    @asynccontextmanager
    async def connection(cls, config: Config) -> AsyncIterator[asyncpg.Connection]:
        """Acquire a pooled connection without starting a transaction"""
        pool = await cls.create_pool(config)
        async with pool.acquire() as conn:
            yield conn

    @classmethod
    @asynccontextmanager
    async def transaction(cls, config: Config) -> AsyncIterator[asyncpg.Connection]:
        """Acquire a pooled connection inside a transaction; commits on exit, rolls back on error"""
        async with cls.connection(config) as conn:
            async with conn.transaction():
                yield conn
