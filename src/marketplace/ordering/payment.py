"""Payment confirmation recorded by an admin."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.access import Actor, require
from marketplace.domain import logger, marketplace
from marketplace.ordering.order import Order


@marketplace.command(part_of="Order")
class RecordPayment:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    transaction_id = String(max_length=255)


@marketplace.command_handler(part_of=Order)
class RecordPaymentHandler:
    @handle(RecordPayment)
    def record_payment(self, command):
        actor = Actor(user_id=str(command.actor_id), role=command.actor_role)
        require(actor.is_admin, "Only an admin can record payments")

        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.record_payment(transaction_id=command.transaction_id)
        repo.add(order)

        logger.info("payment_recorded", order_id=str(order.id), transaction_id=command.transaction_id)
