"""Order cancellation — command and handler.

Cancelling puts the stock of every tracked line item back in the same Unit
of Work as the status change.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.access import Actor, can_cancel, require
from marketplace.catalogue.product import Product
from marketplace.domain import logger, marketplace
from marketplace.ordering.order import Order


@marketplace.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    reason = String(max_length=500)


def restore_stock(order: Order) -> None:
    """Release the reserved quantity of every line item back to its product."""
    quantities = {}
    for item in order.items:
        product_id = str(item.product_id)
        quantities[product_id] = quantities.get(product_id, 0) + item.quantity

    repo = current_domain.repository_for(Product)
    for product_id, quantity in quantities.items():
        try:
            product = repo.get(product_id)
        except ObjectNotFoundError:
            logger.warning("stock_restore_skipped", order_id=str(order.id), product_id=product_id)
            continue
        product.release_stock(quantity)
        repo.add(product)


@marketplace.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        actor = Actor(user_id=str(command.actor_id), role=command.actor_role)
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        require(can_cancel(order, actor), "Only the buyer or an admin can cancel this order")

        order.cancel(reason=command.reason, cancelled_by=actor.user_id)
        restore_stock(order)
        repo.add(order)

        logger.info(
            "order_cancelled",
            order_id=str(order.id),
            cancelled_by=actor.user_id,
            refund_amount=order.refund_amount,
        )
