"""CreateReview — a buyer reviews a product from one of their delivered orders.

Eligibility and the one-review-per-(buyer, product, order) rule are checked
against the order and existing reviews before the review is created.
"""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import logger, marketplace
from marketplace.exceptions import DuplicateReview, NotEligible
from marketplace.ordering.order import Order, OrderStatus
from marketplace.reviews.rating import refresh_ratings
from marketplace.reviews.review import Review


@marketplace.command(part_of="Review")
class CreateReview:
    customer_id = Identifier(required=True)
    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    overall_rating = Integer(required=True)
    comment = Text(required=True)
    title = String(max_length=100)
    aspects = Text()  # JSON: {quality, craftsmanship, packaging, shipping}
    pros = Text()  # JSON array of strings
    cons = Text()  # JSON array of strings
    would_recommend = Boolean(default=True)


def _purchased_item(command):
    """The delivered order line this review is about, or ``NotEligible``."""
    not_eligible = NotEligible({"review": ["You can only review products from your delivered orders"]})
    try:
        order = current_domain.repository_for(Order).get(command.order_id)
    except ObjectNotFoundError:
        raise not_eligible from None

    if str(order.customer_id) != str(command.customer_id) or order.status != OrderStatus.DELIVERED.value:
        raise not_eligible
    item = order.find_item(command.product_id)
    if item is None:
        raise not_eligible
    return item


@marketplace.command_handler(part_of=Review)
class CreateReviewHandler:
    @handle(CreateReview)
    def create_review(self, command):
        item = _purchased_item(command)

        repo = current_domain.repository_for(Review)
        if repo.active_for_slot(command.customer_id, command.product_id, command.order_id):
            raise DuplicateReview({"review": ["You have already reviewed this product for this order"]})

        review = Review.create(
            product_id=command.product_id,
            artisan_id=item.artisan_id,
            seller_id=item.seller_id,
            customer_id=command.customer_id,
            order_id=command.order_id,
            overall_rating=command.overall_rating,
            comment=command.comment,
            title=command.title,
            aspects=json.loads(command.aspects) if command.aspects else None,
            pros=json.loads(command.pros) if command.pros else None,
            cons=json.loads(command.cons) if command.cons else None,
            would_recommend=command.would_recommend,
        )
        repo.add(review)
        refresh_ratings(review)

        logger.info(
            "review_created",
            review_id=str(review.id),
            product_id=str(review.product_id),
            rating=review.overall_rating,
        )
        return str(review.id)
