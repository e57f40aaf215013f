"""Product aggregate (CQRS) — a sellable catalogue item.

A product carries its list price (with an optional percentage discount), its
inventory counters, and the aggregate rating computed from approved reviews.

Inventory is mutated only by the ordering flow (reserve on placement, release
on cancellation) and by restocking. Products are never hard-deleted while
orders reference them; ``deactivate`` withdraws them from sale instead.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from marketplace.catalogue.events import (
    ProductCreated,
    ProductDeactivated,
    ProductPriceUpdated,
    ProductRestocked,
    StockReleased,
    StockReserved,
)
from marketplace.domain import marketplace
from marketplace.exceptions import InsufficientStock, ItemUnavailable


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class ProductCategory(Enum):
    JEWELRY = "jewelry"
    TEXTILES = "textiles"
    POTTERY = "pottery"
    WOODWORK = "woodwork"
    ART = "art"
    METALWORK = "metalwork"
    LEATHER = "leather"
    GLASS = "glass"
    OTHER = "other"


class StockStatus(Enum):
    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@marketplace.value_object(part_of="Product")
class Price:
    """List price with an optional percentage discount (0-100)."""

    amount = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="INR")
    original_price = Float()
    discount = Float(default=0.0)

    @invariant.post
    def discount_must_be_a_percentage(self):
        if self.discount is not None and (self.discount < 0 or self.discount > 100):
            raise ValidationError({"discount": ["Discount must be between 0 and 100"]})

    @property
    def discounted(self) -> float:
        if self.discount and self.discount > 0:
            return self.amount * (1 - self.discount / 100)
        return self.amount


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@marketplace.entity(part_of="Product")
class ProductImage:
    url = String(required=True, max_length=500)
    alt = String(max_length=255)
    is_primary = Boolean(default=False)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@marketplace.aggregate
class Product:
    artisan_id = Identifier(required=True)
    title = String(required=True, max_length=100)
    description = Text(required=True)
    short_description = String(max_length=200)
    category = String(choices=ProductCategory, required=True)
    images = HasMany(ProductImage)
    price = ValueObject(Price, required=True)
    tags = Text()  # JSON array of strings

    # Inventory
    quantity = Integer(default=0)
    track_inventory = Boolean(default=True)
    low_stock_threshold = Integer(default=5)
    total_sold = Integer(default=0)

    # Aggregated from approved reviews
    rating_average = Float(default=0.0)
    rating_count = Integer(default=0)

    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def tracked_quantity_cannot_be_negative(self):
        if self.track_inventory and self.quantity is not None and self.quantity < 0:
            raise ValidationError({"quantity": ["Quantity cannot be negative"]})

    @invariant.post
    def title_must_not_be_empty(self):
        if self.title is not None and len(self.title.strip()) == 0:
            raise ValidationError({"title": ["Product title cannot be empty"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        artisan_id,
        title,
        description,
        category,
        price,
        quantity,
        discount=None,
        currency="INR",
        track_inventory=True,
        low_stock_threshold=5,
        short_description=None,
        tags=None,
        images=None,
    ):
        now = datetime.now(UTC)

        product = cls(
            artisan_id=artisan_id,
            title=title,
            description=description,
            short_description=short_description,
            category=category,
            price=Price(
                amount=price,
                currency=currency,
                original_price=price,
                discount=discount or 0.0,
            ),
            tags=json.dumps(tags) if tags else None,
            quantity=quantity,
            track_inventory=track_inventory,
            low_stock_threshold=low_stock_threshold,
            total_sold=0,
            rating_average=0.0,
            rating_count=0,
            is_active=True,
            created_at=now,
            updated_at=now,
        )

        for index, image in enumerate(images or []):
            product.add_images(
                ProductImage(
                    url=image["url"],
                    alt=image.get("alt"),
                    is_primary=image.get("is_primary", index == 0),
                )
            )

        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                artisan_id=str(artisan_id),
                title=title,
                category=category,
                price=price,
                quantity=quantity,
                created_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def discounted_price(self) -> float:
        return self.price.discounted

    @property
    def stock_status(self) -> str:
        if not self.track_inventory:
            return StockStatus.IN_STOCK.value
        if self.quantity == 0:
            return StockStatus.OUT_OF_STOCK.value
        if self.quantity <= self.low_stock_threshold:
            return StockStatus.LOW_STOCK.value
        return StockStatus.IN_STOCK.value

    @property
    def primary_image(self) -> str | None:
        primary = next((img for img in self.images if img.is_primary), None)
        if primary is None and self.images:
            primary = self.images[0]
        return primary.url if primary else None

    def is_available(self, quantity=1) -> bool:
        if not self.is_active:
            return False
        if not self.track_inventory:
            return True
        return self.quantity >= quantity

    def assert_available(self, quantity=1):
        """Raise the matching domain error when ``quantity`` cannot be sold."""
        if not self.is_active:
            raise ItemUnavailable({"product": [f"Product {self.id} not found or inactive"]})
        if not self.is_available(quantity):
            raise InsufficientStock({"quantity": [f"Insufficient stock for {self.title}"]})

    # -------------------------------------------------------------------
    # Inventory
    # -------------------------------------------------------------------
    def reserve_stock(self, quantity):
        """Take ``quantity`` units out of stock for an order.

        Untracked products have nothing to reserve.
        """
        if not self.track_inventory:
            return
        self.assert_available(quantity)

        now = datetime.now(UTC)
        with atomic_change(self):
            self.quantity = self.quantity - quantity
            self.total_sold = self.total_sold + quantity
            self.updated_at = now

        self.raise_(
            StockReserved(
                product_id=str(self.id),
                quantity=quantity,
                remaining=self.quantity,
                is_low_stock=str(self.stock_status != StockStatus.IN_STOCK.value),
                reserved_at=now,
            )
        )

    def release_stock(self, quantity):
        """Put ``quantity`` units back, undoing :meth:`reserve_stock`."""
        if not self.track_inventory:
            return

        now = datetime.now(UTC)
        with atomic_change(self):
            self.quantity = self.quantity + quantity
            self.total_sold = self.total_sold - quantity
            self.updated_at = now

        self.raise_(
            StockReleased(
                product_id=str(self.id),
                quantity=quantity,
                remaining=self.quantity,
                released_at=now,
            )
        )

    def restock(self, quantity):
        """Set stock to ``quantity``, re-enabling tracking and sale."""
        if quantity < 0:
            raise ValidationError({"quantity": ["Quantity cannot be negative"]})

        previous = self.quantity
        now = datetime.now(UTC)
        with atomic_change(self):
            self.quantity = quantity
            self.track_inventory = True
            self.is_active = True
            self.updated_at = now

        self.raise_(
            ProductRestocked(
                product_id=str(self.id),
                previous_quantity=previous or 0,
                new_quantity=quantity,
                restocked_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Pricing and lifecycle
    # -------------------------------------------------------------------
    def update_price(self, amount, discount=None):
        previous = self.price.discounted
        now = datetime.now(UTC)

        self.price = Price(
            amount=amount,
            currency=self.price.currency,
            original_price=self.price.original_price,
            discount=discount if discount is not None else self.price.discount,
        )
        self.updated_at = now

        self.raise_(
            ProductPriceUpdated(
                product_id=str(self.id),
                previous_price=previous,
                new_price=self.price.discounted,
                discount=self.price.discount,
                updated_at=now,
            )
        )

    def deactivate(self):
        if not self.is_active:
            return

        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now
        self.raise_(ProductDeactivated(product_id=str(self.id), deactivated_at=now))

    def update_rating(self, average, count):
        with atomic_change(self):
            self.rating_average = average
            self.rating_count = count
            self.updated_at = datetime.now(UTC)
