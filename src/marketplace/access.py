"""Capability checks shared by command handlers, queries, and the API.

The API resolves an :class:`Actor` from the bearer token; everything below
works on that value and on aggregates, never on HTTP details.
"""

from dataclasses import dataclass
from enum import Enum

from marketplace.exceptions import AccessDenied


class Role(Enum):
    BUYER = "buyer"
    SELLER = "seller"
    ADMIN = "admin"


@dataclass(frozen=True)
class Actor:
    user_id: str
    role: str = Role.BUYER.value

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    @property
    def is_seller(self) -> bool:
        return self.role == Role.SELLER.value


def is_admin(actor: Actor) -> bool:
    return actor.is_admin


def is_order_customer(order, actor: Actor) -> bool:
    return str(order.customer_id) == str(actor.user_id)


def is_order_seller(order, actor: Actor) -> bool:
    return any(str(item.seller_id) == str(actor.user_id) for item in order.items)


def can_access_order(order, actor: Actor) -> bool:
    """Buyer, any seller with a line item in the order, or an admin."""
    return is_order_customer(order, actor) or is_order_seller(order, actor) or actor.is_admin


def can_transition(order, actor: Actor, new_status: str) -> bool:
    """Sellers on the order and admins drive fulfillment status changes.

    The rule is currently the same for every target status.
    """
    return is_order_seller(order, actor) or actor.is_admin


def can_cancel(order, actor: Actor) -> bool:
    """Only the buyer or an admin may cancel an order."""
    return is_order_customer(order, actor) or actor.is_admin


def require(allowed: bool, message: str = "Access denied") -> None:
    """Raise :class:`AccessDenied` unless ``allowed``."""
    if not allowed:
        raise AccessDenied(message)
