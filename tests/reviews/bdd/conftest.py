"""Shared BDD fixtures and step definitions for reviews."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

from marketplace.reviews.events import (
    HelpfulVoteRecorded,
    ReviewCreated,
    ReviewEdited,
    ReviewModerated,
    ReviewRemoved,
    SellerResponded,
)
from marketplace.reviews.review import Review

_REVIEW_EVENT_CLASSES = {
    "ReviewCreated": ReviewCreated,
    "ReviewEdited": ReviewEdited,
    "ReviewRemoved": ReviewRemoved,
    "HelpfulVoteRecorded": HelpfulVoteRecorded,
    "SellerResponded": SellerResponded,
    "ReviewModerated": ReviewModerated,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@given(parsers.cfparse("a published review rated {rating:d}"), target_fixture="review")
def published_review(rating):
    review = Review.create(
        product_id="prod-bdd",
        artisan_id="art-bdd",
        seller_id="seller-bdd",
        customer_id="cust-bdd",
        order_id="order-bdd",
        overall_rating=rating,
        comment="Well made and arrived on time",
    )
    review._events.clear()
    return review


@given(parsers.cfparse('user "{user_id}" has voted the review helpful'))
def user_has_voted(review, user_id):
    review.add_vote(user_id, helpful=True)
    review._events.clear()


@then(parsers.cfparse('the review status is "{status}"'))
def review_status_is(review, status):
    assert review.status == status


@then("the review action fails with a validation error")
def review_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("a {event_type} event is raised"))
def review_event_raised(review, event_type):
    event_cls = _REVIEW_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in review._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in review._events]}"


@then(parsers.cfparse("the review helpful count is {count:d}"))
def review_helpful_count(review, count):
    assert review.helpful_votes == count
