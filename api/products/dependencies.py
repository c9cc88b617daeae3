"""
Dependencies for product routes.
"""

from __future__ import annotations

from fastapi import Request

from .repository import ProductRepository


def get_repository(request: Request) -> ProductRepository:
    repo = getattr(request.app.state, "products", None)
    if repo is None:
        raise RuntimeError("Product repository is not initialized.")
    return repo
