"""Application tests for fulfilment status updates and stock reconciliation."""

import json

import pytest
from marketplace.catalogue.product.product import Product
from marketplace.ordering.order.status import UpdateOrderStatus
from marketplace.shared.errors import AuthorizationError, InvalidTransition, OrderNotFound
from protean import current_domain
from protean.exceptions import ValidationError


def _update(order_id, caller, status, **extra):
    return current_domain.process(
        UpdateOrderStatus(
            order_id=order_id,
            actor_id=caller.user_id,
            actor_role=caller.role.value,
            status=status,
            **extra,
        ),
        asynchronous=False,
    )


def _quantity(product_id):
    return current_domain.repository_for(Product).get(product_id).inventory.quantity


@pytest.fixture()
def order_id(place_order, list_product):
    honey = list_product(name="Honey", quantity=10)
    return place_order([(honey, 2)])


class TestAuthorization:
    def test_seller_of_a_line_may_update(self, order_id, artisan, load_order):
        assert _update(order_id, artisan, "confirmed") == "confirmed"
        assert load_order(order_id).status == "confirmed"

    def test_admin_may_update(self, order_id, admin, load_order):
        _update(order_id, admin, "shipped")
        assert load_order(order_id).status == "shipped"

    def test_unrelated_seller_is_refused(self, order_id, other_seller, load_order):
        with pytest.raises(AuthorizationError):
            _update(order_id, other_seller, "confirmed")
        assert load_order(order_id).status == "pending"

    def test_customer_is_refused(self, order_id, customer, load_order):
        with pytest.raises(AuthorizationError):
            _update(order_id, customer, "confirmed")
        assert load_order(order_id).status == "pending"

    def test_missing_order(self, admin):
        with pytest.raises(OrderNotFound):
            _update("no-such-order", admin, "confirmed")


class TestTransitions:
    def test_confirmed_then_shipped_then_back_is_rejected(self, order_id, admin, load_order):
        _update(order_id, admin, "confirmed")
        _update(order_id, admin, "shipped")

        with pytest.raises(InvalidTransition):
            _update(order_id, admin, "confirmed")

        order = load_order(order_id)
        assert order.status == "shipped"
        assert [entry.status for entry in order.timeline()] == ["pending", "confirmed", "shipped"]

    def test_unknown_status(self, order_id, admin):
        with pytest.raises(ValidationError):
            _update(order_id, admin, "vanished")

    def test_tracking_and_note_are_recorded(self, order_id, admin, load_order):
        _update(
            order_id,
            admin,
            "shipped",
            note="Left the farm",
            tracking=json.dumps({"carrier": "Rural Post", "tracking_number": "RP-77"}),
        )
        order = load_order(order_id)
        assert order.notes == "Left the farm"
        assert order.tracking.carrier == "Rural Post"
        assert order.tracking.tracking_number == "RP-77"

    def test_malformed_tracking_is_rejected(self, order_id, admin, load_order):
        with pytest.raises(ValidationError) as exc:
            _update(order_id, admin, "shipped", tracking="{not json")

        assert exc.value.messages == {"tracking": ["Malformed JSON"]}
        order = load_order(order_id)
        assert order.status == "pending"
        assert len(order.history) == 1

    def test_artisan_acceptance(self, order_id, artisan, load_order):
        _update(order_id, artisan, "artisan-accepted", note="Starting Monday", estimated_completion_date="2026-11-02")
        response = load_order(order_id).artisan_response
        assert response.accepted is True
        assert response.estimated_completion_date == "2026-11-02"


class TestStockReconciliation:
    def test_cancel_restores_stock(self, order_id, admin, load_order):
        product_id = load_order(order_id).lines()[0].product_id
        assert _quantity(product_id) == 8

        _update(order_id, admin, "cancelled", note="Storm damage")

        assert _quantity(product_id) == 10
        order = load_order(order_id)
        assert order.status == "cancelled"
        assert order.cancellation_reason == "Storm damage"

    def test_return_restores_stock(self, order_id, admin, load_order):
        product_id = load_order(order_id).lines()[0].product_id
        for status in ("delivered", "return-requested", "return-approved"):
            _update(order_id, admin, status)
        assert _quantity(product_id) == 8

        _update(order_id, admin, "returned")

        assert _quantity(product_id) == 10

    def test_cancel_skips_deleted_products(self, order_id, admin, load_order):
        product_id = load_order(order_id).lines()[0].product_id
        repo = current_domain.repository_for(Product)
        repo._dao.delete(repo.get(product_id))

        _update(order_id, admin, "cancelled")

        assert load_order(order_id).status == "cancelled"

    def test_forward_moves_leave_stock_alone(self, order_id, admin, load_order):
        product_id = load_order(order_id).lines()[0].product_id
        _update(order_id, admin, "delivered")
        assert _quantity(product_id) == 8
