import logging
from typing import Optional
from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pocketgear.api.deps import get_session_identity, get_snapshot, get_store
from pocketgear.database import ProductStore
from pocketgear.errors import ValidationError
from pocketgear.schemas.auth import SessionIdentity
from pocketgear.schemas.product import ErrorResponse, ProductCreatedResponse, ProductResponse
from pocketgear.services.product_service import ProductService
from pocketgear.services.snapshot import SnapshotReader

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.get("", responses={500: {"model": ErrorResponse}})
async def list_products(
    store: ProductStore = Depends(get_store),
    snapshot: SnapshotReader = Depends(get_snapshot),
):
    """List all products, newest first."""
    listing = await ProductService.list_products(store, snapshot)
    logger.info("Listing %d products from %s", len(listing.products), listing.source)
    return JSONResponse(content=jsonable_encoder(listing.products))


@router.get("/{slug}", response_model=ProductResponse, responses={404: {"model": ErrorResponse}})
async def get_product(
    slug: str,
    store: ProductStore = Depends(get_store),
    snapshot: SnapshotReader = Depends(get_snapshot),
):
    """Get a single product by its slug."""
    product = await ProductService.get_product_by_slug(store, snapshot, slug)
    return JSONResponse(content=jsonable_encoder(product))


@router.post("", response_model=ProductCreatedResponse, status_code=201, responses=ERROR_RESPONSES)
async def create_product(
    request: Request,
    store: ProductStore = Depends(get_store),
    identity: Optional[SessionIdentity] = Depends(get_session_identity),
):
    """Create a new product."""
    payload = None
    if identity is not None:
        try:
            payload = await request.json()
        except ValueError:
            raise ValidationError("Request body must be valid JSON")

    _, product = await ProductService.create_product(store, identity, payload)
    return ProductCreatedResponse(
        message="Product added successfully",
        product=ProductResponse(**product),
    )
