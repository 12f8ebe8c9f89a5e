"""Pydantic request/response schemas for the Ordering API.

These are the external contract; the Protean commands behind them stay
internal.
"""

from datetime import date, datetime

from pydantic import Field

from marketplace.shared.schemas import ApiModel, PaginationSchema


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(ApiModel):
    name: str = Field(..., max_length=100)
    street: str = Field(..., max_length=200)
    city: str = Field(..., max_length=100)
    state: str = Field(..., max_length=100)
    zip_code: str = Field(..., max_length=20)
    country: str = Field(..., max_length=100)
    phone: str | None = Field(None, max_length=30)


class TrackingSchema(ApiModel):
    tracking_number: str | None = None
    carrier: str | None = None
    estimated_delivery: str | None = Field(None, max_length=10)


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class OrderLineRequest(ApiModel):
    product: str
    quantity: int = Field(..., ge=1)


class PaymentRequest(ApiModel):
    method: str
    transaction_id: str | None = None


class PlaceOrderRequest(ApiModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"product": "a1b2c3", "quantity": 2}],
                    "shippingAddress": {
                        "name": "Ada Farmer",
                        "street": "12 Mill Lane",
                        "city": "Fairview",
                        "state": "OR",
                        "zipCode": "97024",
                        "country": "US",
                    },
                    "paymentInfo": {"method": "cash_on_delivery"},
                }
            ]
        }
    }

    items: list[OrderLineRequest]
    shipping_address: AddressSchema
    payment_info: PaymentRequest


class UpdateStatusRequest(ApiModel):
    status: str
    note: str | None = Field(None, max_length=500)
    tracking_info: TrackingSchema | None = None
    estimated_completion_date: date | None = None


class CancelOrderRequest(ApiModel):
    reason: str | None = Field(None, max_length=500)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderItemSchema(ApiModel):
    line_number: int
    product_id: str
    seller_id: str
    product_name: str
    quantity: int
    unit_price: float
    total: float


class PaymentSchema(ApiModel):
    method: str
    transaction_id: str | None = None
    status: str


class SummarySchema(ApiModel):
    subtotal: float
    tax: float
    shipping: float
    total: float


class StatusChangeSchema(ApiModel):
    status: str
    note: str | None = None
    actor_id: str | None = None
    actor_role: str | None = None
    timestamp: datetime


class ArtisanResponseSchema(ApiModel):
    accepted: bool
    accepted_at: datetime
    notes: str | None = None
    estimated_completion_date: str | None = None


class ProductionInfoSchema(ApiModel):
    started_at: datetime
    expected_completion_date: str | None = None


class OrderSchema(ApiModel):
    id: str
    order_number: str
    customer_id: str
    items: list[OrderItemSchema]
    shipping_address: AddressSchema
    payment_info: PaymentSchema
    summary: SummarySchema
    status: str
    status_history: list[StatusChangeSchema]
    tracking: TrackingSchema | None = None
    artisan_response: ArtisanResponseSchema | None = None
    production_info: ProductionInfoSchema | None = None
    notes: str | None = None
    cancellation_reason: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    delivered_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderSchema":
        address = order.shipping_address
        return cls(
            id=str(order.id),
            order_number=order.order_number,
            customer_id=str(order.customer_id),
            items=[
                OrderItemSchema(
                    line_number=item.line_number,
                    product_id=str(item.product_id),
                    seller_id=str(item.seller_id),
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    total=item.total,
                )
                for item in order.lines()
            ],
            shipping_address=AddressSchema(
                name=address.name,
                street=address.street,
                city=address.city,
                state=address.state,
                zip_code=address.zip_code,
                country=address.country,
                phone=address.phone,
            ),
            payment_info=PaymentSchema(
                method=order.payment_info.method,
                transaction_id=order.payment_info.transaction_id,
                status=order.payment_info.status,
            ),
            summary=SummarySchema(
                subtotal=order.summary.subtotal,
                tax=order.summary.tax,
                shipping=order.summary.shipping,
                total=order.summary.total,
            ),
            status=order.status,
            status_history=[
                StatusChangeSchema(
                    status=entry.status,
                    note=entry.note,
                    actor_id=str(entry.actor_id) if entry.actor_id else None,
                    actor_role=entry.actor_role,
                    timestamp=entry.timestamp,
                )
                for entry in order.timeline()
            ],
            tracking=(
                TrackingSchema(
                    tracking_number=order.tracking.tracking_number,
                    carrier=order.tracking.carrier,
                    estimated_delivery=order.tracking.estimated_delivery,
                )
                if order.tracking
                else None
            ),
            artisan_response=(
                ArtisanResponseSchema(
                    accepted=order.artisan_response.accepted,
                    accepted_at=order.artisan_response.accepted_at,
                    notes=order.artisan_response.notes,
                    estimated_completion_date=order.artisan_response.estimated_completion_date,
                )
                if order.artisan_response
                else None
            ),
            production_info=(
                ProductionInfoSchema(
                    started_at=order.production_info.started_at,
                    expected_completion_date=order.production_info.expected_completion_date,
                )
                if order.production_info
                else None
            ),
            notes=order.notes,
            cancellation_reason=order.cancellation_reason,
            created_at=order.created_at,
            updated_at=order.updated_at,
            delivered_at=order.delivered_at,
        )


class OrderResponse(ApiModel):
    success: bool = True
    data: OrderSchema


class OrderListResponse(ApiModel):
    success: bool = True
    count: int
    data: list[OrderSchema]
    pagination: PaginationSchema
