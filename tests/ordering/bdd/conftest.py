"""Shared BDD fixtures and step definitions for the order lifecycle."""

import json

import pytest
from marketplace.catalogue.product.listing import CreateProduct
from marketplace.catalogue.product.product import Product
from marketplace.ordering.order.order import Order
from marketplace.ordering.order.placement import PlaceOrder
from marketplace.ordering.order.status import UpdateOrderStatus
from marketplace.shared.errors import ConflictError, InvalidTransition
from protean import current_domain
from pytest_bdd import given, parsers, then, when


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def catalogue():
    """Product ids by name, filled in by the Background."""
    return {}


@pytest.fixture()
def context():
    """Container for the order under test and any captured error."""
    return {"order_id": None, "exc": None}


@pytest.fixture()
def checkout(customer, shipping_address, catalogue):
    """Place an order for ``(quantity, product name)`` pairs and return its id."""

    def _checkout(lines):
        command = PlaceOrder(
            customer_id=customer.user_id,
            actor_role=customer.role.value,
            items=json.dumps([{"product": catalogue[name], "quantity": quantity} for quantity, name in lines]),
            shipping_address=json.dumps(shipping_address),
            payment_method="cash_on_delivery",
        )
        return current_domain.process(command, asynchronous=False)

    return _checkout


def _move(context, admin, status):
    current_domain.process(
        UpdateOrderStatus(
            order_id=context["order_id"],
            actor_id=admin.user_id,
            actor_role=admin.role.value,
            status=status,
        ),
        asynchronous=False,
    )


def _order(context):
    return current_domain.repository_for(Order).get(context["order_id"])


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('an artisan has listed "{name}" at {price:f} with {quantity:d} in stock'))
def _(catalogue, artisan, name, price, quantity):
    catalogue[name] = current_domain.process(
        CreateProduct(
            actor_id=artisan.user_id,
            actor_role=artisan.role.value,
            name=name,
            description=f"{name} from the valley",
            price=price,
            category="other",
            quantity=quantity,
            unit="piece",
        ),
        asynchronous=False,
    )


@given(parsers.cfparse('the customer has ordered {quantity:d} "{name}"'))
def _(context, checkout, quantity, name):
    context["order_id"] = checkout([(quantity, name)])


@given(parsers.cfparse('the admin moves the order to "{status}"'))
@when(parsers.cfparse('the admin moves the order to "{status}"'))
def _(context, admin, status):
    _move(context, admin, status)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order is "{status}"'))
def _(context, status):
    assert _order(context).status == status


@then(parsers.cfparse('"{name}" has {quantity:d} in stock'))
def _(catalogue, name, quantity):
    product = current_domain.repository_for(Product).get(catalogue[name])
    assert product.inventory.quantity == quantity
    assert product.inventory.in_stock is (quantity > 0)


@then(parsers.cfparse("the order history has {count:d} entries"))
def _(context, count):
    assert len(_order(context).history) == count


@then(parsers.cfparse('the checkout fails with "{message}"'))
def _(context, message):
    assert isinstance(context["exc"], ConflictError)
    assert context["exc"].messages["items"] == [message]


@then("the request is refused as an invalid transition")
def _(context):
    assert isinstance(context["exc"], InvalidTransition)
