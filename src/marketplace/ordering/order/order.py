"""Order aggregate: line items, status history and the fulfilment state machine.

State machine:
    pending -> confirmed -> artisan-accepted -> in-production ->
    ready-to-ship -> shipped -> out-for-delivery -> delivered
    (forward jumps along this line are allowed, never backwards)
    any of the above before delivered -> cancelled
    delivered -> return-requested -> return-approved -> returned
    cancelled and returned are terminal.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from marketplace.domain import marketplace
from marketplace.ordering.order.events import (
    OrderCancelled,
    OrderPlaced,
    OrderReturned,
    OrderStatusChanged,
)
from marketplace.ordering.order.pricing import line_total, summarize
from marketplace.shared.errors import InvalidTransition


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    ARTISAN_ACCEPTED = "artisan-accepted"
    IN_PRODUCTION = "in-production"
    READY_TO_SHIP = "ready-to-ship"
    SHIPPED = "shipped"
    OUT_FOR_DELIVERY = "out-for-delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    RETURN_REQUESTED = "return-requested"
    RETURN_APPROVED = "return-approved"
    RETURNED = "returned"


class PaymentMethod(Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    PAYPAL = "paypal"
    BANK_TRANSFER = "bank_transfer"
    CASH_ON_DELIVERY = "cash_on_delivery"


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


_MAIN_LINE = [
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.ARTISAN_ACCEPTED,
    OrderStatus.IN_PRODUCTION,
    OrderStatus.READY_TO_SHIP,
    OrderStatus.SHIPPED,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
]

_RETURN_STEPS = {
    OrderStatus.DELIVERED: OrderStatus.RETURN_REQUESTED,
    OrderStatus.RETURN_REQUESTED: OrderStatus.RETURN_APPROVED,
    OrderStatus.RETURN_APPROVED: OrderStatus.RETURNED,
}

# States a customer may still cancel from
CUSTOMER_CANCELLABLE = frozenset({OrderStatus.PENDING, OrderStatus.CONFIRMED})

# Reaching one of these hands the reserved stock back to the catalogue
STOCK_RELEASING = frozenset({OrderStatus.CANCELLED, OrderStatus.RETURNED})

DEFAULT_CANCELLATION_REASON = "Order cancelled by customer"


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    """Whether the state machine allows moving from ``current`` to ``target``."""
    if target is OrderStatus.CANCELLED:
        return current in _MAIN_LINE and current is not OrderStatus.DELIVERED
    if target in _MAIN_LINE:
        return current in _MAIN_LINE and _MAIN_LINE.index(current) < _MAIN_LINE.index(target)
    return _RETURN_STEPS.get(current) is target


def parse_status(value) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value)
    except ValueError:
        raise ValidationError({"status": [f"Invalid status: {value}"]}) from None


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@marketplace.value_object(part_of="Order")
class ShippingAddress:
    """Where the order goes, captured at checkout and never edited afterwards."""

    name = String(required=True, max_length=100)
    street = String(required=True, max_length=200)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    phone = String(max_length=30)


@marketplace.value_object(part_of="Order")
class PaymentInfo:
    method = String(required=True, choices=PaymentMethod)
    transaction_id = String(max_length=100)
    status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)

    @property
    def is_completed(self):
        return self.status == PaymentStatus.COMPLETED.value

    def refunded(self):
        return PaymentInfo(
            method=self.method,
            transaction_id=self.transaction_id,
            status=PaymentStatus.REFUNDED.value,
        )


@marketplace.value_object(part_of="Order")
class OrderSummary:
    """Money owed for the order. Recomputed from the lines, never edited."""

    subtotal = Float(required=True, min_value=0.0)
    tax = Float(required=True, min_value=0.0)
    shipping = Float(required=True, min_value=0.0)
    total = Float(required=True, min_value=0.0)

    @invariant.post
    def total_must_add_up(self):
        if round(self.subtotal + self.tax + self.shipping, 2) != round(self.total, 2):
            raise ValidationError({"summary": ["Total must equal subtotal plus tax plus shipping"]})


@marketplace.value_object(part_of="Order")
class TrackingInfo:
    tracking_number = String(max_length=100)
    carrier = String(max_length=100)
    estimated_delivery = String(max_length=10)  # ISO date

    @classmethod
    def merge(cls, existing, updates):
        """Overlay the non-empty values of ``updates`` (a dict) on ``existing``."""
        merged = {
            "tracking_number": existing.tracking_number if existing else None,
            "carrier": existing.carrier if existing else None,
            "estimated_delivery": existing.estimated_delivery if existing else None,
        }
        merged.update({key: value for key, value in updates.items() if key in merged and value})
        return cls(**merged)


@marketplace.value_object(part_of="Order")
class ArtisanResponse:
    accepted = Boolean(default=True)
    accepted_at = DateTime(required=True)
    notes = String(max_length=500)
    estimated_completion_date = String(max_length=10)  # ISO date


@marketplace.value_object(part_of="Order")
class ProductionInfo:
    started_at = DateTime(required=True)
    expected_completion_date = String(max_length=10)  # ISO date


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@marketplace.entity(part_of="Order")
class OrderItem:
    """One line of the order, with product details frozen at checkout."""

    line_number = Integer(required=True, min_value=1)
    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    product_name = String(required=True, max_length=100)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    total = Float(required=True, min_value=0.0)


@marketplace.entity(part_of="Order")
class StatusChange:
    sequence = Integer(required=True, min_value=1)
    status = String(required=True, choices=OrderStatus)
    note = String(max_length=500)
    actor_id = Identifier()
    actor_role = String(max_length=20)
    timestamp = DateTime(required=True)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@marketplace.aggregate
class Order:
    order_number = String(required=True, max_length=20)
    customer_id = Identifier(required=True)
    items = HasMany(OrderItem)
    history = HasMany(StatusChange)
    shipping_address = ValueObject(ShippingAddress, required=True)
    payment_info = ValueObject(PaymentInfo, required=True)
    summary = ValueObject(OrderSummary, required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    tracking = ValueObject(TrackingInfo)
    artisan_response = ValueObject(ArtisanResponse)
    production_info = ValueObject(ProductionInfo)
    notes = String(max_length=500)
    cancellation_reason = String(max_length=500)
    created_at = DateTime()
    updated_at = DateTime()
    delivered_at = DateTime()

    @invariant.post
    def cancelled_order_must_have_reason(self):
        if self.status == OrderStatus.CANCELLED.value and not self.cancellation_reason:
            raise ValidationError({"cancellation_reason": ["A cancelled order must record why"]})

    @invariant.post
    def subtotal_must_match_lines(self):
        if not self.items or self.summary is None:
            return
        if round(sum(item.total for item in self.items), 2) != round(self.summary.subtotal, 2):
            raise ValidationError({"summary": ["Subtotal must equal the sum of line totals"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, order_number, customer_id, lines, shipping_address, payment_info, policy=None, actor_role=None):
        """Create a pending order.

        Args:
            lines: Dicts with product_id, seller_id, product_name, quantity
                and unit_price, in the order the customer listed them.
            shipping_address: A ``ShippingAddress``.
            payment_info: A ``PaymentInfo``; its status is reset to pending.
            policy: ``PricingPolicy`` for tax and shipping; defaults apply
                when omitted.
        """
        now = datetime.now(UTC)

        items = [
            OrderItem(
                line_number=position,
                product_id=line["product_id"],
                seller_id=line["seller_id"],
                product_name=line["product_name"],
                quantity=line["quantity"],
                unit_price=line["unit_price"],
                total=line_total(line["unit_price"], line["quantity"]),
            )
            for position, line in enumerate(lines, start=1)
        ]

        order = cls(
            order_number=order_number,
            customer_id=customer_id,
            shipping_address=shipping_address,
            payment_info=PaymentInfo(
                method=payment_info.method,
                transaction_id=payment_info.transaction_id,
                status=PaymentStatus.PENDING.value,
            ),
            summary=OrderSummary(**summarize([item.total for item in items], policy)),
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        with atomic_change(order):
            order.add_items(items)
            order._record(OrderStatus.PENDING, "Order placed", customer_id, actor_role, now)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order_number,
                customer_id=str(customer_id),
                item_count=len(items),
                subtotal=order.summary.subtotal,
                total=order.summary.total,
                payment_method=order.payment_info.method,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------
    def lines(self):
        """Line items in checkout order."""
        return sorted(self.items, key=lambda item: item.line_number)

    def timeline(self):
        """Status history, oldest first."""
        return sorted(self.history, key=lambda entry: entry.sequence)

    def seller_ids(self):
        return {str(item.seller_id) for item in self.items}

    def involves_seller(self, seller_id):
        return str(seller_id) in self.seller_ids()

    def stock_lines(self):
        """``(product_id, quantity)`` pairs reserved by this order."""
        return [(str(item.product_id), item.quantity) for item in self.lines()]

    @property
    def holds_stock(self):
        return OrderStatus(self.status) not in STOCK_RELEASING

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def change_status(
        self,
        target,
        actor_id=None,
        actor_role=None,
        note=None,
        tracking=None,
        estimated_completion_date=None,
    ):
        """Move the order to ``target`` and apply that state's side effects.

        Raises ``ValidationError`` for an unknown status and
        ``InvalidTransition`` when the state machine forbids the move; in
        both cases nothing on the order changes.
        """
        target = parse_status(target)
        current = OrderStatus(self.status)
        if not can_transition(current, target):
            raise InvalidTransition(current.value, target.value)

        self._transition(
            current,
            target,
            actor_id,
            actor_role,
            note,
            tracking=tracking,
            estimated_completion_date=estimated_completion_date,
        )

    def cancel(self, actor_id=None, actor_role=None, reason=None):
        """Customer-facing cancellation, only while pending or confirmed."""
        current = OrderStatus(self.status)
        if current not in CUSTOMER_CANCELLABLE:
            raise InvalidTransition(
                current.value,
                OrderStatus.CANCELLED.value,
                reason=f"Order cannot be cancelled once it is {current.value}",
            )

        self._transition(
            current,
            OrderStatus.CANCELLED,
            actor_id,
            actor_role,
            reason or DEFAULT_CANCELLATION_REASON,
        )

    def _transition(self, current, target, actor_id, actor_role, note, tracking=None, estimated_completion_date=None):
        now = datetime.now(UTC)
        refunded = False

        with atomic_change(self):
            self.status = target.value
            self.updated_at = now
            if note:
                self.notes = note

            if target is OrderStatus.ARTISAN_ACCEPTED:
                self.artisan_response = ArtisanResponse(
                    accepted=True,
                    accepted_at=now,
                    notes=note,
                    estimated_completion_date=estimated_completion_date,
                )
            elif target is OrderStatus.IN_PRODUCTION:
                self.production_info = ProductionInfo(
                    started_at=now,
                    expected_completion_date=estimated_completion_date,
                )
            elif target is OrderStatus.DELIVERED:
                self.delivered_at = now
            elif target is OrderStatus.CANCELLED:
                self.cancellation_reason = note or DEFAULT_CANCELLATION_REASON

            if tracking:
                self.tracking = TrackingInfo.merge(self.tracking, tracking)

            if target in STOCK_RELEASING and self.payment_info.is_completed:
                self.payment_info = self.payment_info.refunded()
                refunded = True

            self._record(target, note or f"Status updated to {target.value}", actor_id, actor_role, now)

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                order_number=self.order_number,
                previous_status=current.value,
                new_status=target.value,
                actor_id=str(actor_id) if actor_id else None,
                actor_role=actor_role,
                note=note,
                changed_at=now,
            )
        )
        if target is OrderStatus.CANCELLED:
            self.raise_(
                OrderCancelled(
                    order_id=str(self.id),
                    customer_id=str(self.customer_id),
                    reason=self.cancellation_reason,
                    cancelled_by=str(actor_id) if actor_id else None,
                    refunded=refunded,
                    cancelled_at=now,
                )
            )
        elif target is OrderStatus.RETURNED:
            self.raise_(
                OrderReturned(
                    order_id=str(self.id),
                    customer_id=str(self.customer_id),
                    refunded=refunded,
                    returned_at=now,
                )
            )

    def _record(self, status, note, actor_id, actor_role, timestamp):
        self.add_history(
            StatusChange(
                sequence=len(self.history) + 1,
                status=status.value,
                note=note,
                actor_id=str(actor_id) if actor_id else None,
                actor_role=actor_role,
                timestamp=timestamp,
            )
        )
