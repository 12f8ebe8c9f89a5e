"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state, with no cross-user sharing.
State tracks entity IDs returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class SellerState:
    """Tracks one simulated artisan and the products they listed."""

    seller_id: str | None = None
    product_ids: list[str] = field(default_factory=list)


@dataclass
class OrderState:
    """Tracks one checkout from listing to its final status."""

    seller_id: str | None = None
    customer_id: str | None = None
    product_id: str | None = None
    order_id: str | None = None
    current_status: str = "pending"
