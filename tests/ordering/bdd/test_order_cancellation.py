"""BDD tests for order cancellation and stock restoration."""

from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, when

from marketplace.exceptions import AccessDenied
from marketplace.ordering.cancellation import CancelOrder
from marketplace.ordering.status import UpdateOrderStatus

scenarios("features/order_cancellation.feature")


@given(parsers.cfparse('the seller marks the order "{status}"'))
@when(parsers.cfparse('the seller marks the order "{status}"'))
def seller_marks(order, status):
    current_domain.process(
        UpdateOrderStatus(order_id=str(order.id), actor_id="seller-001", actor_role="seller", status=status),
        asynchronous=False,
    )


@when(parsers.cfparse('"{user_id}" cancels the order'))
def user_cancels(order, error, user_id):
    try:
        current_domain.process(
            CancelOrder(order_id=str(order.id), actor_id=user_id, actor_role="buyer", reason="No longer needed"),
            asynchronous=False,
        )
    except (ValidationError, AccessDenied) as exc:
        error["exc"] = exc
