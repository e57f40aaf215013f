"""Rating aggregation for products and artisans.

Ratings are recomputed from the approved reviews whenever a review command
changes something that affects them. The aggregation itself is a pure
function over a snapshot of reviews.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from protean.utils.globals import current_domain

from marketplace.catalogue.artisan import Artisan
from marketplace.catalogue.product import Product
from marketplace.domain import logger
from marketplace.reviews.review import Review


@dataclass(frozen=True)
class RatingSummary:
    average: float = 0.0
    count: int = 0


def recompute(reviews) -> RatingSummary:
    """Mean ``overall_rating`` rounded half-up to one decimal, and the count.

    Callers pass approved reviews only.
    """
    ratings = [review.overall_rating for review in reviews]
    if not ratings:
        return RatingSummary()
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return RatingSummary(
        average=float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)),
        count=len(ratings),
    )


def _with_changed(reviews: list[Review], changed: Review | None) -> list[Review]:
    """Replace the stored copy of ``changed`` with its in-memory state."""
    if changed is None:
        return reviews
    snapshot = [r for r in reviews if str(r.id) != str(changed.id)]
    if changed.is_approved:
        snapshot.append(changed)
    return snapshot


def recompute_product_rating(product_id, changed: Review | None = None) -> RatingSummary:
    reviews = current_domain.repository_for(Review).approved_for_product(product_id)
    summary = recompute(_with_changed(reviews, changed))

    repo = current_domain.repository_for(Product)
    product = repo.get(product_id)
    product.update_rating(summary.average, summary.count)
    repo.add(product)

    logger.info("product_rating_recomputed", product_id=str(product_id), average=summary.average, count=summary.count)
    return summary


def recompute_artisan_rating(artisan_id, changed: Review | None = None) -> RatingSummary:
    reviews = current_domain.repository_for(Review).approved_for_artisan(artisan_id)
    summary = recompute(_with_changed(reviews, changed))

    repo = current_domain.repository_for(Artisan)
    artisan = repo.get(artisan_id)
    artisan.update_rating(summary.average, summary.count)
    repo.add(artisan)

    logger.info("artisan_rating_recomputed", artisan_id=str(artisan_id), average=summary.average, count=summary.count)
    return summary


def refresh_ratings(review: Review) -> None:
    """Recompute both ratings affected by ``review``."""
    recompute_product_rating(review.product_id, changed=review)
    recompute_artisan_rating(review.artisan_id, changed=review)
