"""Product catalog API routes."""

import logging

from fastapi import APIRouter, HTTPException, status

from app.core.dependencies import CatalogServiceDep
from app.schemas.catalog import ProductSchema, ReviewSchema
from supportbot.graph import GraphQueryError

logger = logging.getLogger(__name__)

router = APIRouter()


def _unavailable(e: GraphQueryError) -> HTTPException:
    logger.error("Catalog query failed: %s", e)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Failed to retrieve catalog data.",
    )


@router.get("", response_model=list[ProductSchema])
def list_products(service: CatalogServiceDep) -> list[dict]:
    """List all products with their category."""
    try:
        return service.list_products()
    except GraphQueryError as e:
        raise _unavailable(e) from e


@router.get("/{product_id}", response_model=ProductSchema)
def get_product(product_id: str, service: CatalogServiceDep) -> dict:
    """
    Get a single product.

    Raises:
        HTTPException 404: If the product does not exist.
    """
    try:
        product = service.get_product(product_id)
    except GraphQueryError as e:
        raise _unavailable(e) from e

    if product is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
    return product


@router.get("/{product_id}/reviews", response_model=list[ReviewSchema])
def get_reviews(product_id: str, service: CatalogServiceDep) -> list[dict]:
    """List a product's reviews, newest first."""
    try:
        return service.get_reviews(product_id)
    except GraphQueryError as e:
        raise _unavailable(e) from e
