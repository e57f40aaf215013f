"""ModerateReview — admins approve, reject, or flag reviews."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.access import Actor, require
from marketplace.domain import logger, marketplace
from marketplace.reviews.rating import refresh_ratings
from marketplace.reviews.review import Review


@marketplace.command(part_of="Review")
class ModerateReview:
    review_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    status = String(required=True, max_length=20)
    notes = Text()


@marketplace.command_handler(part_of=Review)
class ModerateReviewHandler:
    @handle(ModerateReview)
    def moderate(self, command):
        actor = Actor(user_id=str(command.actor_id), role=command.actor_role)
        require(actor.is_admin, "Admin access required")

        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        review.moderate(command.status, moderator_id=actor.user_id, notes=command.notes)
        repo.add(review)
        refresh_ratings(review)

        logger.info("review_moderated", review_id=str(review.id), status=review.status, moderator_id=actor.user_id)
