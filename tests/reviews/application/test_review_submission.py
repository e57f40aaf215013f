"""Application tests for CreateReview — eligibility, duplicates, and rating refresh."""

import pytest
from protean import current_domain

from marketplace.catalogue.artisan import Artisan
from marketplace.catalogue.product import Product
from marketplace.exceptions import DuplicateReview, NotEligible
from marketplace.ordering.cancellation import CancelOrder


def _product(product):
    return current_domain.repository_for(Product).get(product.id)


class TestCreateReview:
    def test_review_is_published_and_verified(self, write_review, artisan):
        review = write_review(overall_rating=4, title="Gorgeous", pros=["Colour"], aspects={"quality": 5})
        assert review.status == "approved"
        assert review.is_verified_purchase is True
        assert str(review.artisan_id) == str(artisan.id)
        assert str(review.seller_id) == "seller-001"
        assert review.aspects.quality == 5

    def test_product_and_artisan_ratings_updated(self, write_review, product, artisan):
        write_review(overall_rating=4)
        refreshed = _product(product)
        assert refreshed.rating_average == 4.0
        assert refreshed.rating_count == 1

        owner = current_domain.repository_for(Artisan).get(artisan.id)
        assert owner.rating_average == 4.0
        assert owner.rating_count == 1

    def test_ratings_average_across_orders(self, write_review, product, place_order, seller):
        from marketplace.ordering.status import UpdateOrderStatus

        write_review(overall_rating=5)
        second = place_order([(product, 1)])
        current_domain.process(
            UpdateOrderStatus(order_id=str(second.id), actor_id=seller.user_id, actor_role=seller.role, status="delivered"),
            asynchronous=False,
        )
        write_review(overall_rating=4, order=second)

        refreshed = _product(product)
        assert refreshed.rating_average == 4.5
        assert refreshed.rating_count == 2


class TestEligibility:
    def test_duplicate_review_for_same_order(self, write_review):
        write_review()
        with pytest.raises(DuplicateReview):
            write_review(comment="Again")

    def test_undelivered_order(self, write_review, product, place_order):
        pending = place_order([(product, 1)])
        with pytest.raises(NotEligible):
            write_review(order=pending)

    def test_cancelled_order(self, write_review, product, place_order, buyer):
        order = place_order([(product, 1)])
        current_domain.process(
            CancelOrder(order_id=str(order.id), actor_id=buyer.user_id, actor_role=buyer.role, reason="No"),
            asynchronous=False,
        )
        with pytest.raises(NotEligible):
            write_review(order=order)

    def test_someone_elses_order(self, write_review):
        with pytest.raises(NotEligible):
            write_review(customer_id="buyer-002")

    def test_product_not_in_order(self, write_review, make_product):
        other = make_product(title="Terracotta Lamp")
        with pytest.raises(NotEligible):
            write_review(product_id=other.id)

    def test_missing_order(self, write_review):
        class Missing:
            id = "no-such-order"

        with pytest.raises(NotEligible):
            write_review(order=Missing)

    def test_failed_review_leaves_rating_untouched(self, write_review, product):
        with pytest.raises(NotEligible):
            write_review(customer_id="buyer-002")
        assert _product(product).rating_count == 0
