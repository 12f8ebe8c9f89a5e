"""Customer-initiated cancellation, with stock returned to the catalogue."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.catalogue.product import stock
from marketplace.domain import logger, marketplace
from marketplace.ordering.order.order import Order
from marketplace.ordering.order.policies import can_cancel
from marketplace.ordering.order.status import load_order
from marketplace.shared.access import Caller
from marketplace.shared.errors import AuthorizationError


@marketplace.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    reason = String(max_length=500)


@marketplace.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        caller = Caller.of(command.actor_id, command.actor_role)

        repo = current_domain.repository_for(Order)
        order = load_order(repo, command.order_id)
        if not can_cancel(caller, order):
            logger.warning("Cancellation refused", order_id=str(order.id), actor_id=caller.user_id)
            raise AuthorizationError("Not authorized to cancel this order")

        order.cancel(actor_id=caller.user_id, actor_role=caller.role.value, reason=command.reason)
        stock.release(order.stock_lines())
        repo.add(order)

        logger.info(
            "Order cancelled",
            order_id=str(order.id),
            reason=order.cancellation_reason,
            actor_id=caller.user_id,
        )
