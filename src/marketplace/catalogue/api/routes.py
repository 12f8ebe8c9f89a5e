"""FastAPI endpoints for the Catalogue."""

from fastapi import APIRouter, Depends, Query
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.catalogue.api.schemas import (
    CreateProductRequest,
    ProductListResponse,
    ProductResponse,
    ProductSchema,
    RestockRequest,
    UpdateProductRequest,
)
from marketplace.catalogue.product.listing import CreateProduct
from marketplace.catalogue.product.management import DeactivateProduct, RestockProduct, UpdateProductDetails
from marketplace.catalogue.product.product import Product
from marketplace.catalogue.product.repository import ProductRepository  # noqa: F401  (registers the custom repository)
from marketplace.config import get_settings
from marketplace.shared.access import Caller
from marketplace.shared.errors import AuthorizationError, ProductNotFound
from marketplace.shared.http import current_caller
from marketplace.shared.pagination import paginate
from marketplace.shared.schemas import MessageResponse, PaginationSchema

product_router = APIRouter(prefix="/products", tags=["products"])


def _load(product_id: str) -> Product:
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise ProductNotFound(product_id) from None


@product_router.post("", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest, caller: Caller = Depends(current_caller)) -> ProductResponse:
    command = CreateProduct(
        actor_id=caller.user_id,
        actor_role=caller.role.value,
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        subcategory=body.subcategory,
        quantity=body.inventory.quantity,
        unit=body.inventory.unit,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductResponse(data=ProductSchema.from_product(_load(product_id)))


@product_router.get("", response_model=ProductListResponse)
async def list_products(
    category: str | None = None,
    seller: str | None = None,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
) -> ProductListResponse:
    """Active products, newest first."""
    settings = get_settings()
    products = current_domain.repository_for(Product).find_active(category=category, seller_id=seller)
    result = paginate(products, page=page, limit=limit or settings.page_size, max_limit=settings.max_page_size)
    return ProductListResponse(
        count=result.count,
        data=[ProductSchema.from_product(p) for p in result.items],
        pagination=PaginationSchema.from_page(result),
    )


@product_router.get("/low-stock", response_model=ProductListResponse)
async def low_stock_products(caller: Caller = Depends(current_caller)) -> ProductListResponse:
    """The calling seller's active products that are running out."""
    if not (caller.is_seller or caller.is_admin):
        raise AuthorizationError("Only artisans and sellers have stock to watch")

    threshold = get_settings().low_stock_threshold
    products = current_domain.repository_for(Product).find_low_stock(caller.user_id, threshold)
    return ProductListResponse(count=len(products), data=[ProductSchema.from_product(p) for p in products])


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return ProductResponse(data=ProductSchema.from_product(_load(product_id)))


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str, body: UpdateProductRequest, caller: Caller = Depends(current_caller)
) -> ProductResponse:
    command = UpdateProductDetails(
        product_id=product_id,
        actor_id=caller.user_id,
        actor_role=caller.role.value,
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        subcategory=body.subcategory,
        unit=body.unit,
    )
    current_domain.process(command, asynchronous=False)
    return ProductResponse(data=ProductSchema.from_product(_load(product_id)))


@product_router.put("/{product_id}/inventory", response_model=ProductResponse)
async def restock_product(
    product_id: str, body: RestockRequest, caller: Caller = Depends(current_caller)
) -> ProductResponse:
    command = RestockProduct(
        product_id=product_id,
        actor_id=caller.user_id,
        actor_role=caller.role.value,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return ProductResponse(data=ProductSchema.from_product(_load(product_id)))


@product_router.delete("/{product_id}", response_model=MessageResponse)
async def deactivate_product(product_id: str, caller: Caller = Depends(current_caller)) -> MessageResponse:
    command = DeactivateProduct(product_id=product_id, actor_id=caller.user_id, actor_role=caller.role.value)
    current_domain.process(command, asynchronous=False)
    return MessageResponse(message="Product deactivated")
