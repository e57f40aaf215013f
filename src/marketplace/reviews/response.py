"""RespondToReview — the seller of the reviewed item answers publicly."""

from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from marketplace.access import require
from marketplace.domain import marketplace
from marketplace.exceptions import NotFound
from marketplace.reviews.review import Review


@marketplace.command(part_of="Review")
class RespondToReview:
    review_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    comment = Text(required=True)


@marketplace.command_handler(part_of=Review)
class RespondToReviewHandler:
    @handle(RespondToReview)
    def respond(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        if review.is_removed:
            raise NotFound({"_entity": "Review not found"})

        require(str(review.seller_id) == str(command.actor_id), "Only the seller of this product can respond")

        review.respond(seller_id=command.actor_id, comment=command.comment)
        repo.add(review)
