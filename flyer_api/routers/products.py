# flyer_api/routers/products.py

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status

from flyer_api.routers.dependencies import get_current_identity, get_products_service
from flyer_api.schemas.common import ErrorResponse, MessageResponse
from flyer_api.schemas.products import ProductCreate, ProductRead, ProductUpdate
from flyer_api.services import Identity, ProductsService

router = APIRouter(
    prefix="/products",
    tags=["products"],
    responses={
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)


@router.get(
    "",
    response_model=List[ProductRead],
    summary="List products",
    description="Return all of the caller's products, newest first.",
)
def list_products(
    *,
    identity: Identity = Depends(get_current_identity),
    service: ProductsService = Depends(get_products_service),
) -> List[ProductRead]:
    return service.list_products(identity)


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
    description=(
        "Create a product owned by the caller. A barcode, when given, must not "
        "already be used by another of the caller's products."
    ),
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
def create_product(
    *,
    payload: ProductCreate,
    identity: Identity = Depends(get_current_identity),
    service: ProductsService = Depends(get_products_service),
) -> ProductRead:
    return service.create_product(identity, payload)


@router.get(
    "/search/{query}",
    response_model=List[ProductRead],
    summary="Search products",
    description="Case-insensitive match on name, description or barcode.",
)
def search_products(
    *,
    query: str,
    identity: Identity = Depends(get_current_identity),
    service: ProductsService = Depends(get_products_service),
) -> List[ProductRead]:
    return service.search_products(identity, query)


@router.get(
    "/{product_id}",
    response_model=ProductRead,
    summary="Get a single product",
)
def get_product(
    *,
    product_id: str,
    identity: Identity = Depends(get_current_identity),
    service: ProductsService = Depends(get_products_service),
) -> ProductRead:
    return service.get_product(identity, product_id)


@router.put(
    "/{product_id}",
    response_model=ProductRead,
    summary="Update a product",
    description="Patch the fields present in the body. Existing flyers keep their snapshots.",
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
def update_product(
    *,
    product_id: str,
    payload: ProductUpdate,
    identity: Identity = Depends(get_current_identity),
    service: ProductsService = Depends(get_products_service),
) -> ProductRead:
    return service.update_product(identity, product_id, payload)


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    summary="Delete a product",
)
def delete_product(
    *,
    product_id: str,
    identity: Identity = Depends(get_current_identity),
    service: ProductsService = Depends(get_products_service),
) -> MessageResponse:
    service.delete_product(identity, product_id)
    return MessageResponse(message="Product deleted successfully")
