"""DeleteReview — the author withdraws their review.

The review is kept with status ``removed``; it stops counting towards
ratings and no longer blocks a new review for the same product and order.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.exceptions import NotFound
from marketplace.reviews.rating import refresh_ratings
from marketplace.reviews.review import Review


@marketplace.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)
    actor_id = Identifier(required=True)


def load_own_review(review_id, actor_id) -> Review:
    """Load a live review written by ``actor_id``.

    Other users' reviews are reported as missing rather than forbidden.
    """
    try:
        review = current_domain.repository_for(Review).get(review_id)
    except ObjectNotFoundError:
        review = None
    if review is None or review.is_removed or str(review.customer_id) != str(actor_id):
        raise NotFound({"_entity": "Review not found or access denied"})
    return review


@marketplace.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        review = load_own_review(command.review_id, command.actor_id)
        review.remove(removed_by=command.actor_id)
        current_domain.repository_for(Review).add(review)
        refresh_ratings(review)
