"""Checkout: turn a list of requested products into a pending order."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.catalogue.product import stock
from marketplace.config import get_settings
from marketplace.domain import logger, marketplace
from marketplace.ordering.order.numbering import next_order_number
from marketplace.ordering.order.order import Order, PaymentInfo, ShippingAddress
from marketplace.ordering.order.repository import OrderRepository  # noqa: F401  (registers the custom repository)
from marketplace.shared.access import Caller
from marketplace.shared.errors import EmptyCart


@marketplace.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    items = Text(required=True)  # JSON: list of {"product": id, "quantity": n}
    shipping_address = Text(required=True)  # JSON: address dict
    payment_method = String(required=True, max_length=30)
    transaction_id = String(max_length=100)


def load_json(raw, field):
    """Decode a JSON command field, raising ``ValidationError`` on malformed input."""
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError({field: ["Malformed JSON"]}) from None


def requested_lines(raw_items):
    """Parse the ``items`` payload into ``(product_id, quantity)`` pairs."""
    lines = load_json(raw_items, "items")
    if not lines:
        raise EmptyCart()
    if not isinstance(lines, list):
        raise ValidationError({"items": ["Items must be a list"]})

    requested = []
    for position, line in enumerate(lines, start=1):
        if not isinstance(line, dict):
            raise ValidationError({"items": [f"Line {position}: expected an object"]})

        product_id = line.get("product") or line.get("product_id")
        if not product_id:
            raise ValidationError({"items": [f"Line {position}: product is required"]})

        quantity = line.get("quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError({"items": [f"Line {position}: quantity must be a whole number of at least 1"]})

        requested.append((str(product_id), quantity))
    return requested


@marketplace.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        caller = Caller.of(command.customer_id, command.actor_role)
        requested = requested_lines(command.items)

        # Address and payment are validated before any stock moves
        address = load_json(command.shipping_address, "shipping_address")
        if not isinstance(address, dict):
            raise ValidationError({"shipping_address": ["Shipping address is required"]})
        shipping_address = ShippingAddress(**address)
        payment_info = PaymentInfo(method=command.payment_method, transaction_id=command.transaction_id)

        products = stock.reserve(requested)

        lines = [
            {
                "product_id": product_id,
                "seller_id": str(products[product_id].seller_id),
                "product_name": products[product_id].name,
                "quantity": quantity,
                "unit_price": products[product_id].price,
            }
            for product_id, quantity in requested
        ]

        repo = current_domain.repository_for(Order)
        order = Order.place(
            order_number=next_order_number(repo.number_taken),
            customer_id=caller.user_id,
            lines=lines,
            shipping_address=shipping_address,
            payment_info=payment_info,
            policy=get_settings().pricing,
            actor_role=caller.role.value,
        )
        repo.add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            order_number=order.order_number,
            customer_id=caller.user_id,
            total=order.summary.total,
        )
        return str(order.id)
