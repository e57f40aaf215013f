"""Application tests for listing reviews by product and artisan."""

from protean import current_domain

from marketplace.ordering.status import UpdateOrderStatus
from marketplace.reviews.moderation import ModerateReview
from marketplace.reviews.queries import list_artisan_reviews, list_product_reviews


def _deliver(order, seller):
    current_domain.process(
        UpdateOrderStatus(order_id=str(order.id), actor_id=seller.user_id, actor_role=seller.role, status="delivered"),
        asynchronous=False,
    )


class TestProductReviews:
    def test_page_and_distribution(self, write_review, product, place_order, seller):
        write_review(overall_rating=5)
        second = place_order([(product, 1)])
        _deliver(second, seller)
        write_review(overall_rating=3, order=second)

        page, distribution = list_product_reviews(product.id, page=1, limit=10)
        assert page.total == 2
        assert distribution == {5: 1, 4: 0, 3: 1, 2: 0, 1: 0}

    def test_filter_by_rating(self, write_review, product, place_order, seller):
        write_review(overall_rating=5)
        second = place_order([(product, 1)])
        _deliver(second, seller)
        write_review(overall_rating=3, order=second)

        page, _ = list_product_reviews(product.id, rating=3)
        assert page.total == 1
        assert page.items[0].overall_rating == 3

    def test_hidden_reviews_are_excluded(self, write_review, product, admin):
        review = write_review(overall_rating=2)
        current_domain.process(
            ModerateReview(review_id=str(review.id), actor_id=admin.user_id, actor_role=admin.role, status="flagged"),
            asynchronous=False,
        )
        page, distribution = list_product_reviews(product.id)
        assert page.total == 0
        assert sum(distribution.values()) == 0


class TestArtisanReviews:
    def test_lists_reviews_across_products(self, write_review, artisan):
        write_review()
        page = list_artisan_reviews(artisan.id)
        assert page.total == 1
        assert str(page.items[0].artisan_id) == str(artisan.id)


class TestFullScans:
    def test_approved_reviews_span_every_batch(self):
        from marketplace.reviews.review import Review

        repo = current_domain.repository_for(Review)
        written = set()
        for i in range(230):
            review = Review.create(
                product_id="prod-bulk",
                artisan_id="artisan-bulk",
                seller_id="seller-001",
                customer_id=f"buyer-{i}",
                order_id=f"order-{i}",
                overall_rating=i % 5 + 1,
                comment="Lovely glaze",
            )
            repo.add(review)
            written.add(str(review.id))

        by_product = repo.approved_for_product("prod-bulk")
        by_artisan = repo.approved_for_artisan("artisan-bulk")

        assert len(by_product) == 230
        assert {str(r.id) for r in by_product} == written
        assert {str(r.id) for r in by_artisan} == written
