"""
Repository SQL and connection-release tests against a scripted pool.
"""

import asyncio
from decimal import Decimal

import asyncpg
import pytest

from core.config import Settings
from core.db import Database
from products.repository import ProductRepository
from tests.fakes import FakePool, ScriptedConnection

WIDGET = {"id": 3, "name": "Widget", "price": Decimal("9.99"), "stock": 5}


def _repo(*results) -> tuple[ProductRepository, FakePool, ScriptedConnection]:
    conn = ScriptedConnection(list(results))
    pool = FakePool(conn)
    database = Database(Settings())
    database._pool = pool
    return ProductRepository(database), pool, conn


class TestQueries:

    def test_list_orders_by_id(self):
        repo, pool, conn = _repo([WIDGET])

        rows = asyncio.run(repo.list_products())

        assert rows == [WIDGET]
        method, sql, args = conn.calls[0]
        assert method == "fetch"
        assert sql.endswith("ORDER BY id ASC")
        assert args == ()
        assert pool.acquired == pool.released == 1

    def test_get_binds_id(self):
        repo, pool, conn = _repo(None)

        assert asyncio.run(repo.get_product(99999)) is None
        assert conn.calls[0][2] == (99999,)
        assert pool.released == 1

    def test_create_inserts_then_reads_back_on_same_connection(self):
        repo, pool, conn = _repo(3, WIDGET)

        row = asyncio.run(repo.create_product(name="Widget", price=Decimal("9.99"), stock=5))

        assert row == WIDGET
        insert, select = conn.calls
        assert insert[1].startswith("INSERT INTO products (name, price, stock)")
        assert insert[2] == ("Widget", Decimal("9.99"), 5)
        assert select[0] == "fetchrow"
        assert select[2] == (3,)
        assert pool.acquired == pool.released == 1

    def test_update_reads_back_when_row_matched(self):
        repo, pool, conn = _repo("UPDATE 1", WIDGET)

        row = asyncio.run(repo.update_product(3, name="Widget", price=Decimal("9.99"), stock=5))

        assert row == WIDGET
        assert conn.calls[0][2] == ("Widget", Decimal("9.99"), 5, 3)
        assert len(conn.calls) == 2
        assert pool.released == 1

    def test_update_missing_row_skips_read_back(self):
        repo, pool, conn = _repo("UPDATE 0")

        assert asyncio.run(repo.update_product(8, name="x", price=Decimal("1"), stock=0)) is None
        assert len(conn.calls) == 1
        assert pool.acquired == pool.released == 1

    @pytest.mark.parametrize("status, expected", [("DELETE 1", True), ("DELETE 0", False)])
    def test_delete_reports_affected_rows(self, status, expected):
        repo, pool, conn = _repo(status)

        assert asyncio.run(repo.delete_product(3)) is expected
        assert conn.calls[0][1] == "DELETE FROM products WHERE id = $1"
        assert pool.released == 1


class TestRelease:

    @pytest.mark.parametrize(
        "call",
        [
            lambda r: r.list_products(),
            lambda r: r.get_product(1),
            lambda r: r.create_product(name="x", price=Decimal("1"), stock=1),
            lambda r: r.update_product(1, name="x", price=Decimal("1"), stock=1),
            lambda r: r.delete_product(1),
        ],
    )
    def test_connection_released_when_query_fails(self, call):
        repo, pool, _ = _repo(asyncpg.InterfaceError("connection was closed"))

        with pytest.raises(asyncpg.InterfaceError):
            asyncio.run(call(repo))

        assert pool.acquired == pool.released == 1

    def test_released_when_read_back_fails(self):
        repo, pool, _ = _repo(4, ConnectionResetError())

        with pytest.raises(ConnectionResetError):
            asyncio.run(repo.create_product(name="x", price=Decimal("1"), stock=1))

        assert pool.acquired == pool.released == 1
