"""
Product persistence (raw SQL).

Each method borrows one pooled connection and returns plain dicts.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from core.db import Database

_SELECT_BY_ID = """
SELECT id, name, price, stock
FROM products
WHERE id = $1
"""


def _affected_rows(status: str) -> int:
    """
    asyncpg returns the command tag, e.g. "UPDATE 1" or "DELETE 0".
    """
    try:
        return int((status or "").rsplit(" ", 1)[-1])
    except ValueError:
        return 0


def _row_to_dict(row: Any) -> dict[str, Any] | None:
    return dict(row) if row is not None else None


class ProductRepository:
    def __init__(self, database: Database) -> None:
        self._db = database

    async def list_products(self) -> list[dict[str, Any]]:
        async with self._db.connection() as conn:
            rows = await conn.fetch(
                """
                SELECT id, name, price, stock
                FROM products
                ORDER BY id ASC
                """
            )
        return [dict(r) for r in rows]

    async def get_product(self, product_id: int) -> dict[str, Any] | None:
        async with self._db.connection() as conn:
            row = await conn.fetchrow(_SELECT_BY_ID, product_id)
        return _row_to_dict(row)

    async def create_product(self, *, name: str, price: Decimal, stock: int) -> dict[str, Any]:
        """
        Insert a product, then read it back by its new id.
        """
        async with self._db.connection() as conn:
            new_id = await conn.fetchval(
                """
                INSERT INTO products (name, price, stock)
                VALUES ($1, $2, $3)
                RETURNING id
                """,
                name,
                price,
                stock,
            )
            if new_id is None:
                raise RuntimeError("Failed to insert product.")
            row = await conn.fetchrow(_SELECT_BY_ID, new_id)

        if row is None:
            raise RuntimeError("Inserted product could not be read back.")
        return dict(row)

    async def update_product(
        self,
        product_id: int,
        *,
        name: str,
        price: Decimal,
        stock: int,
    ) -> dict[str, Any] | None:
        """
        Replace name/price/stock. Returns None when no row has that id.
        """
        async with self._db.connection() as conn:
            status = await conn.execute(
                """
                UPDATE products
                SET name = $1,
                    price = $2,
                    stock = $3
                WHERE id = $4
                """,
                name,
                price,
                stock,
                product_id,
            )
            if _affected_rows(status) == 0:
                return None
            row = await conn.fetchrow(_SELECT_BY_ID, product_id)
        return _row_to_dict(row)

    async def delete_product(self, product_id: int) -> bool:
        async with self._db.connection() as conn:
            status = await conn.execute("DELETE FROM products WHERE id = $1", product_id)
        return _affected_rows(status) > 0
