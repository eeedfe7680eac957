"""
Base repository - query helpers running on a caller-supplied connection.
"""
import asyncio
from typing import Any, List, Optional

import asyncpg

from instrument_data.config import Config
from instrument_data.errors import MultipleRowsError, ServerError
from instrument_data.utils.logger import get_logger

# Failures raised by the driver or the transport underneath it
STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


class BaseRepository:
    """
    Base repository class.

    Every helper takes the connection to run on, so several repository calls
    can share the caller's transaction. Store failures surface as ServerError.
    """

    def __init__(self, config: Config):
        """
        Initialize repository with configuration.

        Args:
            config: Configuration object
        """
        self.config = config
        self.logger = get_logger(self.__class__.__module__)

    def _server_error(self, error: BaseException) -> ServerError:
        self.logger.error("Database error: %s", error)
        return ServerError.from_error(error)

    async def fetch(self, conn, query: str, *args) -> List[Any]:
        """
        Fetch multiple rows.

        Args:
            conn: Connection (usually inside a transaction)
            query: SQL query
            *args: Query parameters

        Returns:
            List of records
        """
        try:
            return await conn.fetch(query, *args)
        except STORE_ERRORS as e:
            raise self._server_error(e) from e

    async def fetchrow(self, conn, query: str, *args) -> Optional[Any]:
        """
        Fetch a single row.

        Args:
            conn: Connection (usually inside a transaction)
            query: SQL query
            *args: Query parameters

        Returns:
            Single record or None
        """
        try:
            return await conn.fetchrow(query, *args)
        except STORE_ERRORS as e:
            raise self._server_error(e) from e

    async def fetch_unique(self, conn, lookup: str, query: str, *args) -> Optional[Any]:
        """
        Fetch the only row matching a lookup.

        Args:
            conn: Connection (usually inside a transaction)
            lookup: Description of the lookup, used in the error message
            query: SQL query
            *args: Query parameters

        Returns:
            The record, or None when nothing matches

        Raises:
            MultipleRowsError: more than one row matched
        """
        rows = await self.fetch(conn, query, *args)
        if not rows:
            return None
        if len(rows) > 1:
            self.logger.error("Integrity violation: %s matched %s rows", lookup, len(rows))
            raise MultipleRowsError(lookup, len(rows))
        return rows[0]
