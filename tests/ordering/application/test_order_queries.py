"""Tests for reading and listing orders per caller."""

import pytest
from marketplace.config import Settings
from marketplace.ordering.order.queries import find_order_for, list_orders_for
from marketplace.ordering.order.status import UpdateOrderStatus
from marketplace.shared.errors import AuthorizationError, OrderNotFound
from protean import current_domain
from protean.exceptions import ValidationError


@pytest.fixture()
def honey(list_product):
    return list_product(name="Honey", quantity=100)


@pytest.fixture()
def scarf(list_product, other_seller):
    return list_product(name="Scarf", quantity=100, seller=other_seller)


class TestFindOrderFor:
    def test_customer_sees_own_order(self, place_order, honey, customer):
        order_id = place_order([(honey, 1)])
        assert str(find_order_for(customer, order_id).id) == order_id

    def test_seller_of_a_line_sees_order(self, place_order, honey, artisan):
        order_id = place_order([(honey, 1)])
        assert find_order_for(artisan, order_id).status == "pending"

    def test_admin_sees_any_order(self, place_order, honey, admin):
        order_id = place_order([(honey, 1)])
        assert find_order_for(admin, order_id) is not None

    def test_stranger_is_refused(self, place_order, honey, other_customer, other_seller):
        order_id = place_order([(honey, 1)])
        with pytest.raises(AuthorizationError):
            find_order_for(other_customer, order_id)
        with pytest.raises(AuthorizationError):
            find_order_for(other_seller, order_id)

    def test_missing_order(self, admin):
        with pytest.raises(OrderNotFound):
            find_order_for(admin, "missing")


class TestListOrdersFor:
    def test_customer_sees_only_own_orders_newest_first(self, place_order, honey, customer, other_customer):
        first = place_order([(honey, 1)])
        place_order([(honey, 1)], caller=other_customer)
        second = place_order([(honey, 2)])

        page = list_orders_for(customer)

        assert [str(order.id) for order in page.items] == [second, first]
        assert page.total == 2

    def test_seller_sees_orders_with_their_lines(self, place_order, honey, scarf, artisan, other_seller):
        mixed = place_order([(honey, 1), (scarf, 1)])
        scarf_only = place_order([(scarf, 1)])

        assert {str(o.id) for o in list_orders_for(artisan).items} == {mixed}
        assert {str(o.id) for o in list_orders_for(other_seller).items} == {mixed, scarf_only}

    def test_admin_sees_everything(self, place_order, honey, admin, other_customer):
        place_order([(honey, 1)])
        place_order([(honey, 1)], caller=other_customer)

        assert list_orders_for(admin).total == 2

    def test_status_filter(self, place_order, honey, admin, customer):
        confirmed = place_order([(honey, 1)])
        place_order([(honey, 1)])
        current_domain.process(
            UpdateOrderStatus(order_id=confirmed, actor_id=admin.user_id, actor_role="admin", status="confirmed"),
            asynchronous=False,
        )

        page = list_orders_for(customer, status="confirmed")
        assert [str(o.id) for o in page.items] == [confirmed]

    def test_unknown_status_filter(self, customer):
        with pytest.raises(ValidationError):
            list_orders_for(customer, status="floating")

    def test_pagination(self, place_order, honey, customer):
        for _ in range(5):
            place_order([(honey, 1)])

        page = list_orders_for(customer, page=2, limit=2)

        assert page.count == 2
        assert (page.page, page.pages, page.total) == (2, 3, 5)

    def test_limit_is_capped(self, place_order, honey, customer):
        place_order([(honey, 1)])
        assert list_orders_for(customer, limit=1000).limit == 100

    def test_newest_orders_survive_the_scan_limit(self, monkeypatch, place_order, honey, admin):
        placed = [place_order([(honey, 1)]) for _ in range(3)]
        monkeypatch.setattr(
            "marketplace.ordering.order.repository.get_settings",
            lambda: Settings(scan_limit=2),
        )

        listed = [str(o.id) for o in list_orders_for(admin).items]

        assert listed == [placed[2], placed[1]]
