"""Product endpoints."""

from fastapi import APIRouter, Query, status

from app.dependencies import DatabaseSession, RequestBody
from app.schemas.products import ProductEnvelope, ProductListResponse, ProductResponse
from app.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])


@router.post(
    "",
    response_model=ProductEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
)
async def create_product(body: RequestBody, db: DatabaseSession) -> ProductEnvelope:
    """Create a product."""
    product = await ProductService(db).create_product(body)
    return ProductEnvelope(
        message="Product created successfully",
        product=ProductResponse.model_validate(product),
    )


@router.get("", response_model=ProductListResponse, summary="List products")
async def list_products(
    db: DatabaseSession,
    name: str | None = Query(None, description="Name substring"),
) -> ProductListResponse:
    """List products, newest first."""
    products = await ProductService(db).list_products(name=name)
    return ProductListResponse(
        message="Products retrieved successfully",
        count=len(products),
        products=[ProductResponse.model_validate(product) for product in products],
    )


@router.get("/{product_id}", response_model=ProductEnvelope, summary="Get product by ID")
async def get_product(product_id: str, db: DatabaseSession) -> ProductEnvelope:
    """Get a specific product."""
    product = await ProductService(db).get_product(product_id)
    return ProductEnvelope(
        message="Product retrieved successfully",
        product=ProductResponse.model_validate(product),
    )


@router.put("/{product_id}", response_model=ProductEnvelope, summary="Update product")
async def update_product(
    product_id: str,
    body: RequestBody,
    db: DatabaseSession,
) -> ProductEnvelope:
    """Partially update a product."""
    product = await ProductService(db).update_product(product_id, body)
    return ProductEnvelope(
        message="Product updated successfully",
        product=ProductResponse.model_validate(product),
    )


@router.delete("/{product_id}", response_model=ProductEnvelope, summary="Delete product")
async def delete_product(product_id: str, db: DatabaseSession) -> ProductEnvelope:
    """Delete a product."""
    product = await ProductService(db).delete_product(product_id)
    return ProductEnvelope(
        message="Product deleted successfully",
        product=ProductResponse.model_validate(product),
    )
