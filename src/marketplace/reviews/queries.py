"""Read-side access to published reviews."""

from protean.utils.globals import current_domain

from marketplace.reviews.review import Review
from marketplace.utils.pagination import Page


def rating_distribution(reviews) -> dict[int, int]:
    """Count of reviews per star, 5 down to 1."""
    distribution = {star: 0 for star in range(5, 0, -1)}
    for review in reviews:
        distribution[review.overall_rating] = distribution.get(review.overall_rating, 0) + 1
    return distribution


def list_product_reviews(product_id, page=None, limit=None, rating=None) -> tuple[Page, dict[int, int]]:
    """A page of approved reviews for a product, newest first, and its star distribution."""
    repo = current_domain.repository_for(Review)
    reviews_page = repo.product_page(product_id, page, limit, rating)
    distribution = rating_distribution(repo.approved_for_product(product_id))
    return reviews_page, distribution


def list_artisan_reviews(artisan_id, page=None, limit=None) -> Page:
    return current_domain.repository_for(Review).artisan_page(artisan_id, page, limit)
