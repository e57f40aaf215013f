"""Order status updates by sellers and admins."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.access import Actor, can_transition, require
from marketplace.domain import logger, marketplace
from marketplace.exceptions import InvalidStatus
from marketplace.ordering.cancellation import restore_stock
from marketplace.ordering.order import SETTABLE_STATUSES, Order, OrderStatus


@marketplace.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    status = String(required=True, max_length=20)
    note = String(max_length=500)


@marketplace.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        if command.status not in SETTABLE_STATUSES:
            raise InvalidStatus({"status": [f"Invalid status: {command.status}"]})

        actor = Actor(user_id=str(command.actor_id), role=command.actor_role)
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        require(can_transition(order, actor, command.status), "Not authorized to update this order")

        previous = order.status
        order.change_status(command.status, changed_by=actor.user_id, note=command.note)
        if command.status == OrderStatus.CANCELLED.value:
            restore_stock(order)
        repo.add(order)

        logger.info(
            "order_status_changed",
            order_id=str(order.id),
            previous_status=previous,
            new_status=order.status,
            changed_by=actor.user_id,
        )
