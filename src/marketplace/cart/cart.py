"""Shopping Cart aggregate (CQRS) — a buyer's pending selections.

One cart per buyer. Placing an order empties it.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, Text

from marketplace.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from marketplace.domain import marketplace


@marketplace.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    customization = Text()  # JSON: {options: [...], instructions}
    added_at = DateTime()


@marketplace.aggregate
class ShoppingCart:
    customer_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, customer_id):
        now = datetime.now(UTC)
        return cls(customer_id=customer_id, created_at=now, updated_at=now)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def find_item(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def quantity_after_adding(self, product_id, quantity) -> int:
        existing = self.find_item(product_id)
        return (existing.quantity if existing else 0) + quantity

    def add_item(self, product_id, quantity=1, customization=None):
        """Add a product, or increase its quantity if already in the cart."""
        now = datetime.now(UTC)
        existing = self.find_item(product_id)
        if existing:
            existing.quantity = existing.quantity + quantity
        else:
            self.add_items(
                CartItem(
                    product_id=product_id,
                    quantity=quantity,
                    customization=customization,
                    added_at=now,
                )
            )
        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                product_id=str(product_id),
                quantity=quantity,
            )
        )

    def update_item_quantity(self, product_id, quantity):
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        item = self.find_item(product_id)
        if item is None:
            raise ValidationError({"product_id": ["Product not found in cart"]})

        previous = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id):
        item = self.find_item(product_id)
        if item is None:
            return

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=str(product_id)))

    def clear(self):
        count = len(self.items)
        if not count:
            return

        now = datetime.now(UTC)
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = now

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                item_count=count,
                cleared_at=now,
            )
        )
