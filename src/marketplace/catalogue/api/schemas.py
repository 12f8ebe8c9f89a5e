"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from marketplace.shared.schemas import ApiModel, PaginationSchema

# --- Request Schemas ---


class InventoryRequest(ApiModel):
    quantity: int = Field(..., ge=0)
    unit: str


class CreateProductRequest(ApiModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Wildflower Honey",
                    "description": "Raw honey from hives on the north pasture.",
                    "price": 12.5,
                    "category": "fresh-food",
                    "inventory": {"quantity": 40, "unit": "piece"},
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    description: str = Field(..., max_length=1000)
    price: float = Field(..., ge=0)
    category: str
    subcategory: str | None = Field(None, max_length=50)
    inventory: InventoryRequest


class UpdateProductRequest(ApiModel):
    name: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=1000)
    price: float | None = Field(None, ge=0)
    category: str | None = None
    subcategory: str | None = Field(None, max_length=50)
    unit: str | None = None


class RestockRequest(ApiModel):
    quantity: int = Field(..., ge=0)


# --- Response Schemas ---


class InventorySchema(ApiModel):
    quantity: int
    unit: str
    in_stock: bool


class ProductSchema(ApiModel):
    id: str
    seller_id: str
    name: str
    description: str
    price: float
    category: str
    subcategory: str | None = None
    inventory: InventorySchema
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> ProductSchema:
        return cls(
            id=str(product.id),
            seller_id=str(product.seller_id),
            name=product.name,
            description=product.description,
            price=product.price,
            category=product.category,
            subcategory=product.subcategory,
            inventory=InventorySchema(
                quantity=product.inventory.quantity,
                unit=product.inventory.unit,
                in_stock=product.inventory.in_stock,
            ),
            is_active=product.is_active,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductResponse(ApiModel):
    success: bool = True
    data: ProductSchema


class ProductListResponse(ApiModel):
    success: bool = True
    count: int
    data: list[ProductSchema]
    pagination: PaginationSchema | None = None

