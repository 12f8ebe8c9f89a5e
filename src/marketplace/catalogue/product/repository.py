"""Repository for the Product aggregate."""

from marketplace.catalogue.product.product import Product
from marketplace.config import get_settings
from marketplace.domain import marketplace


@marketplace.repository(part_of=Product)
class ProductRepository:
    """Listing queries on top of the standard CRUD operations.

    Results come back newest first. Filtering on inventory happens in memory
    because the quantity lives inside the embedded ``Inventory`` value object.
    """

    def _fetch(self, **filters) -> list[Product]:
        limit = get_settings().scan_limit
        return self._dao.query.filter(**filters).order_by("-created_at").limit(limit).all().items

    def find_active(self, category: str | None = None, seller_id: str | None = None) -> list[Product]:
        filters = {"is_active": True}
        if category:
            filters["category"] = category
        if seller_id:
            filters["seller_id"] = seller_id
        return self._fetch(**filters)

    def find_low_stock(self, seller_id: str, threshold: int) -> list[Product]:
        """Active products of ``seller_id`` with ``threshold`` units or fewer on hand."""
        products = self._fetch(is_active=True, seller_id=seller_id)
        low = [p for p in products if p.inventory.quantity <= threshold]
        return sorted(low, key=lambda p: p.inventory.quantity)
