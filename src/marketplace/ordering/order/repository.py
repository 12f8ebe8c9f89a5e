"""Repository for the Order aggregate."""

from marketplace.config import get_settings
from marketplace.domain import marketplace
from marketplace.ordering.order.order import Order


@marketplace.repository(part_of=Order)
class OrderRepository:
    def number_taken(self, order_number: str) -> bool:
        return bool(self._dao.query.filter(order_number=order_number).limit(1).all().items)

    def find_orders(self, customer_id: str | None = None, status: str | None = None) -> list[Order]:
        """Orders matching the given filters, newest first."""
        filters = {}
        if customer_id:
            filters["customer_id"] = customer_id
        if status:
            filters["status"] = status

        query = self._dao.query.filter(**filters) if filters else self._dao.query
        return query.order_by("-created_at").limit(get_settings().scan_limit).all().items
