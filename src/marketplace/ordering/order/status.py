"""Fulfilment status updates by sellers, artisans and admins."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.catalogue.product import stock
from marketplace.domain import logger, marketplace
from marketplace.ordering.order.order import Order
from marketplace.ordering.order.placement import load_json
from marketplace.ordering.order.policies import can_update_status, may_update_status
from marketplace.shared.access import Caller
from marketplace.shared.errors import AuthorizationError, OrderNotFound


@marketplace.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    status = String(required=True, max_length=30)
    note = String(max_length=500)
    tracking = Text()  # JSON: {"tracking_number", "carrier", "estimated_delivery"}
    estimated_completion_date = String(max_length=10)


def load_order(repo, order_id):
    try:
        return repo.get(order_id)
    except ObjectNotFoundError:
        raise OrderNotFound(order_id) from None


def _tracking(raw):
    if not raw:
        return None
    tracking = load_json(raw, "tracking")
    if not isinstance(tracking, dict):
        raise ValidationError({"tracking": ["Tracking info must be an object"]})
    return tracking


@marketplace.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        caller = Caller.of(command.actor_id, command.actor_role)
        if not may_update_status(caller):
            raise AuthorizationError("Customers cannot update order status")

        repo = current_domain.repository_for(Order)
        order = load_order(repo, command.order_id)
        if not can_update_status(caller, order):
            logger.warning("Status update refused", order_id=str(order.id), actor_id=caller.user_id)
            raise AuthorizationError("Not authorized to update this order")

        previous = order.status
        order.change_status(
            command.status,
            actor_id=caller.user_id,
            actor_role=caller.role.value,
            note=command.note,
            tracking=_tracking(command.tracking),
            estimated_completion_date=command.estimated_completion_date,
        )
        if not order.holds_stock:
            stock.release(order.stock_lines())
        repo.add(order)

        logger.info(
            "Order status changed",
            order_id=str(order.id),
            previous_status=previous,
            new_status=order.status,
            actor_id=caller.user_id,
        )
        return order.status
