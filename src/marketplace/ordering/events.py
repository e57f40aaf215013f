"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Order")
class OrderPlaced:
    """A buyer placed an order; stock for its items is already reserved."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: [{product_id, artisan_id, quantity, unit_price}]
    subtotal = Float(required=True)
    shipping_cost = Float(required=True)
    tax = Float(required=True)
    total_amount = Float(required=True)
    payment_method = String(required=True)
    placed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_by = Identifier()
    note = String()
    changed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderCancelled:
    __version__ = 1

    order_id = Identifier(required=True)
    reason = String()
    cancelled_by = Identifier(required=True)
    refund_amount = Float(required=True)
    cancelled_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class PaymentCompleted:
    __version__ = 1

    order_id = Identifier(required=True)
    transaction_id = String()
    amount = Float(required=True)
    paid_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class ReturnRequested:
    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    reason = String()
    item_count = Integer(required=True)
    requested_at = DateTime(required=True)
