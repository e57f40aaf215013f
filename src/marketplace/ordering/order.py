"""Order aggregate (CQRS) — a buyer's purchase from one or more artisans.

Line item prices and the pricing summary are frozen when the order is placed.
Every status change appends an entry to the order's timeline.

Status flow::

    pending → confirmed → processing → shipped → delivered
    pending/confirmed → cancelled          (terminal)
    delivered → return requested → returned (terminal)
"""

import json
import math
from datetime import UTC, datetime, timedelta
from enum import Enum

from protean import invariant
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

from marketplace.config import get_settings
from marketplace.domain import marketplace
from marketplace.exceptions import InvalidStatus, InvalidTransition
from marketplace.ordering.events import (
    OrderCancelled,
    OrderPlaced,
    OrderStatusChanged,
    PaymentCompleted,
    ReturnRequested,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    RETURNED = "returned"


class PaymentMethod(Enum):
    CARD = "card"
    UPI = "upi"
    NETBANKING = "netbanking"
    WALLET = "wallet"
    COD = "cod"


class PaymentStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class RefundStatus(Enum):
    PENDING = "pending"
    PROCESSED = "processed"
    FAILED = "failed"


class ReturnStatus(Enum):
    REQUESTED = "requested"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"


# Statuses a seller or admin may set through a status update
SETTABLE_STATUSES = {
    OrderStatus.CONFIRMED.value,
    OrderStatus.PROCESSING.value,
    OrderStatus.SHIPPED.value,
    OrderStatus.DELIVERED.value,
    OrderStatus.CANCELLED.value,
}

_CANCELLABLE_STATUSES = {OrderStatus.PENDING.value, OrderStatus.CONFIRMED.value}
_TERMINAL_STATUSES = {OrderStatus.CANCELLED.value, OrderStatus.RETURNED.value}
_SHIPPING_SPENT_STATUSES = {OrderStatus.SHIPPED.value, OrderStatus.DELIVERED.value}


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@marketplace.value_object(part_of="Order")
class ShippingAddress:
    name = String(required=True, max_length=100)
    phone = String(required=True, max_length=20)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(max_length=100, default="India")
    landmark = String(max_length=255)


@marketplace.value_object(part_of="Order")
class BillingAddress:
    name = String(max_length=100)
    phone = String(max_length=20)
    street = String(max_length=255)
    city = String(max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(max_length=100)
    same_as_shipping = Boolean(default=True)


@marketplace.value_object(part_of="Order")
class OrderPricing:
    """Financial summary of an order, locked when the order is placed."""

    subtotal = Float(required=True, min_value=0.0)
    shipping_cost = Float(default=0.0)
    tax = Float(default=0.0)
    discount_amount = Float(default=0.0)
    discount_code = String(max_length=50)
    discount_type = String(max_length=20)
    total_amount = Float(required=True, min_value=0.0)

    @invariant.post
    def total_must_match_components(self):
        expected = (
            (self.subtotal or 0.0) + (self.shipping_cost or 0.0) + (self.tax or 0.0) - (self.discount_amount or 0.0)
        )
        if not math.isclose(self.total_amount, expected, abs_tol=1e-9):
            raise ValidationError({"total_amount": ["Total must equal subtotal + shipping + tax - discount"]})


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@marketplace.entity(part_of="Order")
class OrderItem:
    """A purchased product with its price and display details frozen at order time."""

    product_id = Identifier(required=True)
    artisan_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    title = String(required=True, max_length=100)
    image = String(max_length=500)
    artisan_name = String(max_length=100)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    customization = Text()  # JSON: {options: [...], instructions}

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


@marketplace.entity(part_of="Order")
class TimelineEntry:
    status = String(required=True, max_length=20)
    timestamp = DateTime(required=True)
    note = String(max_length=500)
    updated_by = Identifier()


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@marketplace.aggregate
class Order:
    order_number = String(required=True, max_length=20)
    customer_id = Identifier(required=True)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress, required=True)
    billing_address = ValueObject(BillingAddress)
    pricing = ValueObject(OrderPricing, required=True)

    # Payment
    payment_method = String(choices=PaymentMethod, required=True)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    transaction_id = String(max_length=255)
    paid_at = DateTime()

    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    timeline = HasMany(TimelineEntry)

    # Cancellation
    cancellation_reason = String(max_length=500)
    cancelled_by = Identifier()
    cancelled_at = DateTime()
    refund_status = String(choices=RefundStatus)
    refund_amount = Float()

    # Returns
    return_requested = Boolean(default=False)
    return_reason = String(max_length=500)
    return_status = String(choices=ReturnStatus)
    return_requested_at = DateTime()

    actual_delivery = DateTime()
    seller_ids = Text()  # "|<seller>|<seller>|" lookup key
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        order_number,
        customer_id,
        lines,
        shipping_address,
        payment_method,
        pricing,
        billing_address=None,
    ):
        """Build a new pending order.

        Args:
            lines: dicts with product_id, artisan_id, seller_id, title, image,
                artisan_name, quantity, unit_price and optional customization.
            shipping_address: dict of address fields.
            billing_address: dict of address fields; defaults to the shipping
                address with ``same_as_shipping`` set.
            pricing: dict as produced by ``ordering.pricing.price_order``.
        """
        now = datetime.now(UTC)

        if billing_address:
            billing = BillingAddress(**shipping_address_fields(billing_address), same_as_shipping=False)
        else:
            billing = BillingAddress(**shipping_address_fields(shipping_address), same_as_shipping=True)

        payment_status = (
            PaymentStatus.PENDING.value if payment_method == PaymentMethod.COD.value else PaymentStatus.PROCESSING.value
        )
        sellers = sorted({str(line["seller_id"]) for line in lines})

        order = cls(
            order_number=order_number,
            customer_id=customer_id,
            shipping_address=ShippingAddress(**shipping_address),
            billing_address=billing,
            pricing=OrderPricing(**pricing),
            payment_method=payment_method,
            payment_status=payment_status,
            status=OrderStatus.PENDING.value,
            return_requested=False,
            seller_ids="|" + "|".join(sellers) + "|",
            created_at=now,
            updated_at=now,
        )

        for line in lines:
            order.add_items(
                OrderItem(
                    product_id=line["product_id"],
                    artisan_id=line["artisan_id"],
                    seller_id=line["seller_id"],
                    title=line["title"],
                    image=line.get("image"),
                    artisan_name=line.get("artisan_name"),
                    quantity=line["quantity"],
                    unit_price=line["unit_price"],
                    customization=line.get("customization"),
                )
            )
        order._append_timeline(OrderStatus.PENDING.value, "Order placed", customer_id, now)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order_number,
                customer_id=str(customer_id),
                items=json.dumps(
                    [
                        {
                            "product_id": str(line["product_id"]),
                            "artisan_id": str(line["artisan_id"]),
                            "quantity": line["quantity"],
                            "unit_price": line["unit_price"],
                        }
                        for line in lines
                    ]
                ),
                subtotal=order.pricing.subtotal,
                shipping_cost=order.pricing.shipping_cost,
                tax=order.pricing.tax,
                total_amount=order.pricing.total_amount,
                payment_method=payment_method,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    def items_for_seller(self, seller_id) -> list:
        return [item for item in self.items if str(item.seller_id) == str(seller_id)]

    def find_item(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def can_be_cancelled(self) -> bool:
        return self.status in _CANCELLABLE_STATUSES

    def can_be_returned(self, now: datetime | None = None) -> bool:
        """Delivered orders are returnable within the return window.

        The window is measured from ``actual_delivery``, falling back to
        ``created_at`` for orders delivered before delivery was stamped.
        """
        if self.status != OrderStatus.DELIVERED.value:
            return False
        reference = self.actual_delivery or self.created_at
        if reference is None:
            return False
        now = now or datetime.now(UTC)
        window = timedelta(days=get_settings().return_window_days)
        return _as_utc(now) - _as_utc(reference) <= window

    def calculate_refund_amount(self) -> float:
        if self.payment_status != PaymentStatus.COMPLETED.value:
            return 0.0
        amount = self.pricing.total_amount
        if self.status in _SHIPPING_SPENT_STATUSES:
            amount -= self.pricing.shipping_cost or 0.0
        return max(0.0, amount)

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def _append_timeline(self, status, note, updated_by, timestamp):
        self.add_timeline(
            TimelineEntry(
                status=status,
                timestamp=timestamp,
                note=note,
                updated_by=updated_by,
            )
        )

    def change_status(self, new_status, changed_by, note=None):
        """Move the order to ``new_status``.

        ``cancelled`` is routed through :meth:`cancel` so the cancellation
        guard and refund bookkeeping apply.
        """
        if new_status not in SETTABLE_STATUSES:
            raise InvalidStatus({"status": [f"Invalid status: {new_status}"]})
        if self.status in _TERMINAL_STATUSES:
            raise InvalidTransition({"status": [f"Order is already {self.status}"]})

        if new_status == OrderStatus.CANCELLED.value:
            self.cancel(reason=note, cancelled_by=changed_by)
            return

        previous = self.status
        now = datetime.now(UTC)
        note = note or f"Order status changed to {new_status}"

        self.status = new_status
        if new_status == OrderStatus.DELIVERED.value:
            self.actual_delivery = now
        self.updated_at = now
        self._append_timeline(new_status, note, changed_by, now)

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=new_status,
                changed_by=str(changed_by) if changed_by else None,
                note=note,
                changed_at=now,
            )
        )

    def cancel(self, reason, cancelled_by):
        if not self.can_be_cancelled():
            raise InvalidTransition({"status": ["Order cannot be cancelled at this stage"]})

        now = datetime.now(UTC)
        refund_amount = self.calculate_refund_amount()

        self.status = OrderStatus.CANCELLED.value
        self.cancellation_reason = reason
        self.cancelled_by = cancelled_by
        self.cancelled_at = now
        self.refund_status = RefundStatus.PENDING.value
        self.refund_amount = refund_amount
        self.updated_at = now
        self._append_timeline(
            OrderStatus.CANCELLED.value,
            f"Order cancelled: {reason}" if reason else "Order status changed to cancelled",
            cancelled_by,
            now,
        )

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                reason=reason,
                cancelled_by=str(cancelled_by),
                refund_amount=refund_amount,
                cancelled_at=now,
            )
        )

    def record_payment(self, transaction_id=None):
        if self.status == OrderStatus.CANCELLED.value:
            raise InvalidTransition({"status": ["Cannot record payment for a cancelled order"]})
        if self.payment_status == PaymentStatus.COMPLETED.value:
            raise InvalidTransition({"payment_status": ["Payment is already completed"]})

        now = datetime.now(UTC)
        self.payment_status = PaymentStatus.COMPLETED.value
        self.transaction_id = transaction_id
        self.paid_at = now
        self.updated_at = now

        self.raise_(
            PaymentCompleted(
                order_id=str(self.id),
                transaction_id=transaction_id,
                amount=self.pricing.total_amount,
                paid_at=now,
            )
        )

    def request_return(self, reason, now=None):
        if self.return_requested:
            raise InvalidTransition({"return": ["A return has already been requested"]})
        if not self.can_be_returned(now):
            raise InvalidTransition({"return": ["Order is not eligible for return"]})

        now = now or datetime.now(UTC)
        self.return_requested = True
        self.return_reason = reason
        self.return_status = ReturnStatus.REQUESTED.value
        self.return_requested_at = now
        self.updated_at = now

        self.raise_(
            ReturnRequested(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                reason=reason,
                item_count=self.total_items,
                requested_at=now,
            )
        )


def shipping_address_fields(address: dict) -> dict:
    """The subset of a shipping address that a billing address carries."""
    keys = ("name", "phone", "street", "city", "state", "zip_code", "country")
    return {key: address.get(key) for key in keys if address.get(key) is not None}
