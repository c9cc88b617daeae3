"""
Product business logic.

Scope:
- request validation (runs before any connection is borrowed)
- id parsing
- mapping repository results and store failures onto API errors
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from core.db import STORE_ERRORS
from core.errors import NotFoundError, StoreError, ValidationError

from .repository import ProductRepository
from .schemas import ProductPayload

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 100
# products.price is NUMERIC(10, 2).
PRICE_LIMIT = Decimal("100000000")
CENT = Decimal("0.01")
# products.id is a SERIAL (int4) column.
MAX_PRODUCT_ID = 2**31 - 1

_ID_PATTERN = re.compile(r"[0-9]+")

NOT_FOUND_MESSAGE = "Product not found"


@dataclass(frozen=True)
class ProductFields:
    name: str
    price: Decimal
    stock: int


def validate_payload(payload: ProductPayload) -> ProductFields:
    name = (payload.name or "").strip()
    if not name or payload.price is None or payload.stock is None:
        raise ValidationError("All fields are required")

    stock = payload.stock
    if isinstance(stock, float):
        if not stock.is_integer():
            raise ValidationError("Stock must be a whole number")
        stock = int(stock)

    price = Decimal(str(payload.price))
    if not price.is_finite() or price <= 0 or stock < 0:
        raise ValidationError("Price must be positive and stock cannot be negative")

    if price >= PRICE_LIMIT:
        raise ValidationError(f"Price must be less than {PRICE_LIMIT}")

    # Store the value the column will hold; sub-cent prices round to zero.
    price = price.quantize(CENT, rounding=ROUND_HALF_UP)
    if price <= 0:
        raise ValidationError("Price must be positive and stock cannot be negative")

    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(f"Product name must be at most {NAME_MAX_LENGTH} characters")

    return ProductFields(name=name, price=price, stock=stock)


def parse_product_id(raw: str) -> int:
    """
    Turn a path segment into a product id.

    Anything that is not a plain non-negative integer within the column's
    range cannot match a row, so it is reported as not found.
    """
    raw = (raw or "").strip()
    if not _ID_PATTERN.fullmatch(raw):
        raise NotFoundError(NOT_FOUND_MESSAGE)
    product_id = int(raw)
    if product_id > MAX_PRODUCT_ID:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return product_id


def to_product(row: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": int(row["id"]),
        "name": str(row["name"]),
        "price": float(row["price"]),
        "stock": int(row["stock"]),
    }


async def list_products(repo: ProductRepository) -> list[dict[str, Any]]:
    try:
        rows = await repo.list_products()
    except STORE_ERRORS as exc:
        logger.exception("list_products_failed")
        raise StoreError("Error fetching products") from exc
    return [to_product(r) for r in rows]


async def get_product(repo: ProductRepository, raw_id: str) -> dict[str, Any]:
    product_id = parse_product_id(raw_id)
    try:
        row = await repo.get_product(product_id)
    except STORE_ERRORS as exc:
        logger.exception("get_product_failed product_id=%s", product_id)
        raise StoreError("Error fetching product") from exc

    if row is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return to_product(row)


async def create_product(repo: ProductRepository, payload: ProductPayload) -> dict[str, Any]:
    fields = validate_payload(payload)
    try:
        row = await repo.create_product(name=fields.name, price=fields.price, stock=fields.stock)
    except STORE_ERRORS as exc:
        logger.exception("create_product_failed name=%r", fields.name)
        raise StoreError("Error creating product") from exc

    logger.info("product_created product_id=%s", row["id"])
    return to_product(row)


async def update_product(
    repo: ProductRepository,
    raw_id: str,
    payload: ProductPayload,
) -> dict[str, Any]:
    fields = validate_payload(payload)
    product_id = parse_product_id(raw_id)
    try:
        row = await repo.update_product(
            product_id,
            name=fields.name,
            price=fields.price,
            stock=fields.stock,
        )
    except STORE_ERRORS as exc:
        logger.exception("update_product_failed product_id=%s", product_id)
        raise StoreError("Error updating product") from exc

    if row is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    logger.info("product_updated product_id=%s", product_id)
    return to_product(row)


async def delete_product(repo: ProductRepository, raw_id: str) -> None:
    product_id = parse_product_id(raw_id)
    try:
        deleted = await repo.delete_product(product_id)
    except STORE_ERRORS as exc:
        logger.exception("delete_product_failed product_id=%s", product_id)
        raise StoreError("Error deleting product") from exc

    if not deleted:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    logger.info("product_deleted product_id=%s", product_id)
