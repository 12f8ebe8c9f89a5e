"""Who may see or change an order."""

from marketplace.shared.access import Caller


def can_view(caller: Caller, order) -> bool:
    return caller.is_admin or str(order.customer_id) == caller.user_id or order.involves_seller(caller.user_id)


def may_update_status(caller: Caller) -> bool:
    """Role gate for status updates, checked before the order is loaded."""
    return caller.is_admin or caller.is_seller


def can_update_status(caller: Caller, order) -> bool:
    return caller.is_admin or (caller.is_seller and order.involves_seller(caller.user_id))


def can_cancel(caller: Caller, order) -> bool:
    return caller.is_admin or str(order.customer_id) == caller.user_id
