import json

import pytest


@pytest.fixture()
def place_order(customer, shipping_address):
    """Factory: check out ``lines`` of ``(product, quantity)`` and return the order id."""
    from protean import current_domain

    from marketplace.ordering.order.placement import PlaceOrder

    def _place(lines, caller=None, payment_method="cash_on_delivery", transaction_id=None):
        caller = caller or customer
        command = PlaceOrder(
            customer_id=caller.user_id,
            actor_role=caller.role.value,
            items=json.dumps([{"product": str(product.id), "quantity": quantity} for product, quantity in lines]),
            shipping_address=json.dumps(shipping_address),
            payment_method=payment_method,
            transaction_id=transaction_id,
        )
        return current_domain.process(command, asynchronous=False)

    return _place


@pytest.fixture()
def load_order():
    from protean import current_domain

    from marketplace.ordering.order.order import Order

    def _load(order_id):
        return current_domain.repository_for(Order).get(order_id)

    return _load
