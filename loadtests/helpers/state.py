"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; nothing is shared across
users. State tracks ids returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class SellerState:
    """An artisan profile and the products it has listed."""

    user_id: str | None = None
    artisan_id: str | None = None
    product_ids: list[str] = field(default_factory=list)


@dataclass
class OrderState:
    """Tracks a single order from checkout to review."""

    buyer_id: str | None = None
    seller_id: str | None = None
    product_id: str | None = None
    order_id: str | None = None
    current_status: str = "pending"
    review_id: str | None = None
