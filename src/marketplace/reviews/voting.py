"""AddHelpfulVote — one helpful/unhelpful vote per user per review."""

from protean import handle
from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.exceptions import NotFound
from marketplace.reviews.review import Review


@marketplace.command(part_of="Review")
class AddHelpfulVote:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    helpful = Boolean(default=True)


@marketplace.command_handler(part_of=Review)
class AddHelpfulVoteHandler:
    @handle(AddHelpfulVote)
    def add_helpful_vote(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        if review.is_removed:
            raise NotFound({"_entity": "Review not found"})

        review.add_vote(command.user_id, command.helpful if command.helpful is not None else True)
        repo.add(review)
        return review.helpful_votes
