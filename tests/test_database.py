import asyncio
from contextlib import asynccontextmanager

import pytest

from instrument_data.database import Database
from instrument_data.repositories.instrument_repository import InstrumentRepository

from fakes import FakeConnection, instrument_row


class TransactionalConnection(FakeConnection):
    def __init__(self, rows=None):
        super().__init__(rows)
        self.events = []

    @asynccontextmanager
    async def _transaction(self):
        self.events.append("begin")
        try:
            yield
        except Exception:
            self.events.append("rollback")
            raise
        self.events.append("commit")

    def transaction(self):
        return self._transaction()


class FakePool:
    def __init__(self, conn):
        self.conn = conn
        self.closed = False

    @asynccontextmanager
    async def _acquire(self):
        yield self.conn

    def acquire(self):
        return self._acquire()

    async def close(self):
        self.closed = True


@pytest.fixture
def pool(monkeypatch):
    created = []
    conn = TransactionalConnection([instrument_row(id=1)])

    async def create_pool(dsn, **kwargs):
        created.append((dsn, kwargs))
        return FakePool(conn)

    monkeypatch.setattr("instrument_data.database.asyncpg.create_pool", create_pool)
    yield conn, created
    asyncio.run(Database.close_pool())


def test_pool_is_created_once(config, pool):
    _, created = pool

    async def body():
        first = await Database.create_pool(config)
        second = await Database.create_pool(config)
        return first, second

    first, second = asyncio.run(body())
    assert first is second
    assert len(created) == 1
    dsn, kwargs = created[0]
    assert dsn == "postgresql://postgres:@localhost:5432/instrument_data_test"
    assert kwargs["min_size"] == config.database.min_pool_size
    assert kwargs["command_timeout"] == config.database.command_timeout


def test_transaction_wraps_several_repository_calls(config, pool):
    conn, _ = pool
    repo = InstrumentRepository(config)

    async def body():
        async with Database.transaction(config) as tx_conn:
            await repo.get_by_id(tx_conn, 1)
            await repo.list_by_product_full(tx_conn, 10)

    asyncio.run(body())
    assert conn.events == ["begin", "commit"]
    assert len(conn.calls) == 2


def test_transaction_rolls_back_on_error(config, pool):
    conn, _ = pool

    async def body():
        async with Database.transaction(config):
            raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        asyncio.run(body())
    assert conn.events == ["begin", "rollback"]


def test_close_pool(config, pool):
    async def body():
        created = await Database.create_pool(config)
        await Database.close_pool()
        return created

    created = asyncio.run(body())
    assert created.closed
    assert Database._pool is None
