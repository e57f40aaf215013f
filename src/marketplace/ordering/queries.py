"""Read-side access to orders, with the same capability checks as commands."""

from protean.utils.globals import current_domain

from marketplace.access import Actor, can_access_order, require
from marketplace.config import get_settings
from marketplace.ordering.order import Order, OrderStatus
from marketplace.utils.pagination import Page


def get_order(order_id, actor: Actor) -> Order:
    """Load an order visible to ``actor``.

    Raises ``ObjectNotFoundError`` when missing and ``AccessDenied`` when the
    actor is neither the buyer, a seller on the order, nor an admin.
    """
    order = current_domain.repository_for(Order).get(order_id)
    require(can_access_order(order, actor))
    return order


def list_customer_orders(actor: Actor, page=None, limit=None) -> Page:
    return current_domain.repository_for(Order).for_customer(actor.user_id, page, limit)


def seller_dashboard(actor: Actor) -> dict:
    """Per-status order counts and totals, plus the most recent orders.

    Covers every order with at least one line item sold by ``actor``.
    """
    require(actor.is_seller or actor.is_admin, "Seller access required")

    orders = current_domain.repository_for(Order).for_seller(actor.user_id)

    grouped = {}
    for order in orders:
        entry = grouped.setdefault(order.status, {"status": order.status, "count": 0, "total_amount": 0.0})
        entry["count"] += 1
        entry["total_amount"] += order.pricing.total_amount

    stats = [grouped[status.value] for status in OrderStatus if status.value in grouped]
    recent = orders[: get_settings().dashboard_recent_orders]
    return {"stats": stats, "recent_orders": recent}
