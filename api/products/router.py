"""
Product CRUD endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from . import schemas, service
from .dependencies import get_repository
from .repository import ProductRepository

router = APIRouter()


@router.get("/products")
async def list_products(repo: ProductRepository = Depends(get_repository)) -> dict:
    products = await service.list_products(repo)
    return {"success": True, "data": products, "count": len(products)}


@router.get("/products/{product_id}")
async def get_product(
    product_id: str,
    repo: ProductRepository = Depends(get_repository),
) -> dict:
    product = await service.get_product(repo, product_id)
    return {"success": True, "data": product}


@router.post("/products", status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: schemas.ProductPayload,
    repo: ProductRepository = Depends(get_repository),
) -> dict:
    product = await service.create_product(repo, payload)
    return {
        "success": True,
        "data": product,
        "message": "Product created successfully",
    }


@router.put("/products/{product_id}")
async def update_product(
    product_id: str,
    payload: schemas.ProductPayload,
    repo: ProductRepository = Depends(get_repository),
) -> dict:
    product = await service.update_product(repo, product_id, payload)
    return {
        "success": True,
        "data": product,
        "message": "Product updated successfully",
    }


@router.delete("/products/{product_id}")
async def delete_product(
    product_id: str,
    repo: ProductRepository = Depends(get_repository),
) -> dict:
    await service.delete_product(repo, product_id)
    return {"success": True, "message": "Product deleted successfully"}
