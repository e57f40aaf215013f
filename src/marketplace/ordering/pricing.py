"""Order pricing: unit prices, tax, totals, and order numbers."""

import random
import time

from marketplace.config import get_settings


def unit_price(product) -> float:
    """The product's discounted price, frozen onto a line item."""
    return round(product.discounted_price, 2)


def subtotal_for(lines: list[dict]) -> float:
    return round(sum(line["unit_price"] * line["quantity"] for line in lines), 2)


def tax_for(subtotal: float, rate: float | None = None) -> float:
    rate = get_settings().tax_rate if rate is None else rate
    return round(subtotal * rate, 2)


def price_order(lines: list[dict], shipping_cost: float = 0.0, discount_amount: float = 0.0) -> dict:
    """Compute the order's pricing summary.

    ``total_amount`` is always ``subtotal + shipping_cost + tax - discount_amount``.
    """
    subtotal = subtotal_for(lines)
    tax = tax_for(subtotal)
    return {
        "subtotal": subtotal,
        "shipping_cost": shipping_cost,
        "tax": tax,
        "discount_amount": discount_amount,
        "total_amount": subtotal + shipping_cost + tax - discount_amount,
    }


def generate_order_number(prefix: str | None = None, now_ms: int | None = None) -> str:
    """``<prefix><last 6 digits of epoch millis><3-digit random>``.

    Collisions are possible and are not retried.
    """
    prefix = get_settings().order_number_prefix if prefix is None else prefix
    now_ms = int(time.time() * 1000) if now_ms is None else now_ms
    return f"{prefix}{str(now_ms)[-6:]}{random.randint(0, 999):03d}"
