"""
Table bootstrap run on every startup.
"""

from __future__ import annotations

import logging

from .db import STORE_ERRORS, Database

logger = logging.getLogger(__name__)

PRODUCTS_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS products (
    id SERIAL PRIMARY KEY,
    name VARCHAR(100) NOT NULL,
    price NUMERIC(10, 2) NOT NULL CHECK (price > 0),
    stock INTEGER NOT NULL CHECK (stock >= 0)
)
"""


async def initialize_schema(database: Database) -> bool:
    """
    Create the products table if it is missing. Safe to run repeatedly.

    Returns False (after logging) when the store rejects the statement.
    """
    logger.info("Initializing database...")
    try:
        async with database.connection() as conn:
            await conn.execute(PRODUCTS_TABLE_DDL)
    except STORE_ERRORS:
        logger.exception("schema_initialization_failed table=products")
        return False
    logger.info("products table: READY")
    return True
