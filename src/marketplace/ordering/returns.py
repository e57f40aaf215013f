"""Return requests for delivered orders."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.access import Actor, is_order_customer, require
from marketplace.domain import marketplace
from marketplace.ordering.order import Order


@marketplace.command(part_of="Order")
class RequestReturn:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    reason = String(required=True, max_length=500)


@marketplace.command_handler(part_of=Order)
class ReturnsHandler:
    @handle(RequestReturn)
    def request_return(self, command):
        actor = Actor(user_id=str(command.actor_id))
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        require(is_order_customer(order, actor), "Only the buyer can request a return")

        order.request_return(reason=command.reason)
        repo.add(order)
