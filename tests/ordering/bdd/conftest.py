"""Shared BDD fixtures and step definitions for ordering."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

from marketplace.catalogue.product import Product
from marketplace.exceptions import AccessDenied
from marketplace.ordering.order import Order


@pytest.fixture()
def error():
    """Container for a captured business-rule or access failure."""
    return {"exc": None}


@pytest.fixture()
def catalogue():
    """Products created by the scenario, keyed by title."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{title}" priced {price:f} with {quantity:d} in stock'))
def product_in_stock(make_product, catalogue, title, price, quantity):
    catalogue[title] = make_product(title=title, price=price, quantity=quantity)


@given(
    parsers.cfparse('the buyer has placed an order for {quantity:d} of "{title}"'),
    target_fixture="order",
)
def order_already_placed(place_order, catalogue, quantity, title):
    return place_order([(catalogue[title], quantity)])


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{title}" has {quantity:d} in stock'))
def stock_level(catalogue, title, quantity):
    assert current_domain.repository_for(Product).get(catalogue[title].id).quantity == quantity


@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert current_domain.repository_for(Order).get(order.id).status == status


@then("the request fails with a validation error")
def request_fails_validation(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then("the request is denied")
def request_denied(error):
    assert isinstance(error["exc"], AccessDenied)


@then(parsers.cfparse("the buyer has {count:d} orders"))
def buyer_order_count(count):
    orders = current_domain.repository_for(Order)._dao.query.filter(customer_id="buyer-001").all()
    assert orders.total == count
