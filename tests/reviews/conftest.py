import json

import pytest


@pytest.fixture()
def write_review(delivered_order, product):
    """Submit a review for ``product`` on ``delivered_order`` and return it."""
    from protean import current_domain

    from marketplace.reviews.review import Review
    from marketplace.reviews.submission import CreateReview

    def _write(overall_rating=5, comment="Beautiful work", order=None, product_id=None, customer_id="buyer-001", **extra):
        for key in ("aspects", "pros", "cons"):
            if key in extra and not isinstance(extra[key], str):
                extra[key] = json.dumps(extra[key])
        review_id = current_domain.process(
            CreateReview(
                customer_id=customer_id,
                order_id=str((order or delivered_order).id),
                product_id=str(product_id or product.id),
                overall_rating=overall_rating,
                comment=comment,
                **extra,
            ),
            asynchronous=False,
        )
        return current_domain.repository_for(Review).get(review_id)

    return _write
