"""Repository for the Review aggregate."""

from marketplace.domain import marketplace
from marketplace.reviews.review import Review, ReviewStatus
from marketplace.utils.pagination import fetch_all, paginate


@marketplace.repository(part_of=Review)
class ReviewRepository:
    def active_for_slot(self, customer_id, product_id, order_id) -> list[Review]:
        """Non-removed reviews by the buyer for this product and order."""
        matches = self._dao.query.filter(
            customer_id=str(customer_id),
            product_id=str(product_id),
            order_id=str(order_id),
        ).all()
        return [r for r in matches.items if r.status != ReviewStatus.REMOVED.value]

    def approved_for_product(self, product_id) -> list[Review]:
        return fetch_all(
            self._dao.query.filter(product_id=str(product_id), status=ReviewStatus.APPROVED.value).order_by("id")
        )

    def approved_for_artisan(self, artisan_id) -> list[Review]:
        return fetch_all(
            self._dao.query.filter(artisan_id=str(artisan_id), status=ReviewStatus.APPROVED.value).order_by("id")
        )

    def product_page(self, product_id, page=None, limit=None, rating=None):
        filters = {"product_id": str(product_id), "status": ReviewStatus.APPROVED.value}
        if rating:
            filters["overall_rating"] = rating
        return paginate(self._dao.query.filter(**filters).order_by("-created_at"), page, limit)

    def artisan_page(self, artisan_id, page=None, limit=None):
        queryset = self._dao.query.filter(artisan_id=str(artisan_id), status=ReviewStatus.APPROVED.value)
        return paginate(queryset.order_by("-created_at"), page, limit)
