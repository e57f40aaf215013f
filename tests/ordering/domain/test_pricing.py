"""Tests for order pricing, shipping policy, and order numbers."""

import re

import pytest

from marketplace.ordering.pricing import generate_order_number, price_order, tax_for
from marketplace.ordering.shipping import (
    FreeShipping,
    ShippingPolicy,
    get_shipping_policy,
    set_shipping_policy,
)


class TestPriceOrder:
    def test_tax_is_eighteen_percent_by_default(self):
        assert tax_for(1000.0) == 180.0

    def test_total_is_subtotal_plus_shipping_plus_tax(self):
        lines = [{"unit_price": 500.0, "quantity": 2}, {"unit_price": 250.0, "quantity": 1}]
        pricing = price_order(lines, shipping_cost=50.0)
        assert pricing["subtotal"] == 1250.0
        assert pricing["tax"] == 225.0
        assert pricing["discount_amount"] == 0.0
        assert pricing["total_amount"] == pytest.approx(1525.0)

    def test_tax_is_rounded_to_paise(self):
        assert tax_for(33.33) == 6.0


class TestShippingPolicy:
    def test_default_is_free(self):
        assert isinstance(get_shipping_policy(), FreeShipping)
        assert get_shipping_policy().cost_for(999.0, [], {}) == 0.0

    def test_policy_can_be_swapped(self):
        class FlatRate(ShippingPolicy):
            def cost_for(self, subtotal, lines, address):
                return 99.0

        set_shipping_policy(FlatRate())
        assert get_shipping_policy().cost_for(100.0, [], {}) == 99.0


class TestOrderNumber:
    def test_format(self):
        number = generate_order_number(now_ms=1718000123456)
        assert re.fullmatch(r"LL123456\d{3}", number)

    def test_prefix_override(self):
        assert generate_order_number(prefix="XX").startswith("XX")
