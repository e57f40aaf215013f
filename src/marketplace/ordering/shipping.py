"""Shipping cost policy (port + default adapter).

Provides get_shipping_policy() / set_shipping_policy() to swap the policy
used when an order is priced. The default ships everything free.
"""

from abc import ABC, abstractmethod


class ShippingPolicy(ABC):
    """Abstract shipping cost calculator."""

    @abstractmethod
    def cost_for(self, subtotal: float, lines: list[dict], address: dict) -> float:
        """Return the shipping cost for an order's priced lines."""
        ...


class FreeShipping(ShippingPolicy):
    def cost_for(self, subtotal: float, lines: list[dict], address: dict) -> float:
        return 0.0


_current_policy: ShippingPolicy | None = None


def get_shipping_policy() -> ShippingPolicy:
    """Return the current shipping policy. Defaults to FreeShipping."""
    global _current_policy
    if _current_policy is None:
        _current_policy = FreeShipping()
    return _current_policy


def set_shipping_policy(policy: ShippingPolicy) -> None:
    """Override the active shipping policy (useful for tests)."""
    global _current_policy
    _current_policy = policy


def reset_shipping_policy() -> None:
    global _current_policy
    _current_policy = None
