"""Read paths for orders, filtered by what the caller is allowed to see."""

from protean.utils.globals import current_domain

from marketplace.config import get_settings
from marketplace.domain import logger
from marketplace.ordering.order.order import Order, parse_status
from marketplace.ordering.order.policies import can_view
from marketplace.ordering.order.repository import OrderRepository  # noqa: F401  (registers the custom repository)
from marketplace.ordering.order.status import load_order
from marketplace.shared.access import Caller
from marketplace.shared.errors import AuthorizationError
from marketplace.shared.pagination import Page, paginate


def find_order_for(caller: Caller, order_id: str) -> Order:
    """Load one order, raising ``OrderNotFound`` or ``AuthorizationError``."""
    order = load_order(current_domain.repository_for(Order), order_id)
    if not can_view(caller, order):
        logger.warning("Order read refused", order_id=order_id, actor_id=caller.user_id)
        raise AuthorizationError("Not authorized to view this order")
    return order


def list_orders_for(caller: Caller, status: str | None = None, page: int = 1, limit: int | None = None) -> Page:
    """Orders visible to ``caller``, newest first, one page at a time.

    Customers see their own orders, artisans and sellers the orders holding at
    least one of their lines, admins everything.
    """
    settings = get_settings()
    if status:
        status = parse_status(status).value

    repo = current_domain.repository_for(Order)
    if caller.is_customer:
        orders = repo.find_orders(customer_id=caller.user_id, status=status)
    else:
        orders = repo.find_orders(status=status)
        if caller.is_seller:
            orders = [order for order in orders if order.involves_seller(caller.user_id)]

    return paginate(orders, page=page, limit=limit or settings.page_size, max_limit=settings.max_page_size)
