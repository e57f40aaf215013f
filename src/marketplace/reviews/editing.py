"""EditReview — the author updates the content of their review."""

import json

from protean import handle
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.reviews.rating import refresh_ratings
from marketplace.reviews.review import Review
from marketplace.reviews.removal import load_own_review


@marketplace.command(part_of="Review")
class EditReview:
    review_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    overall_rating = Integer()
    title = String(max_length=100)
    comment = Text()
    pros = Text()  # JSON array of strings
    cons = Text()  # JSON array of strings
    would_recommend = Boolean()


@marketplace.command_handler(part_of=Review)
class EditReviewHandler:
    @handle(EditReview)
    def edit_review(self, command):
        review = load_own_review(command.review_id, command.actor_id)

        changes = {}
        for name in ("overall_rating", "title", "comment", "would_recommend"):
            value = getattr(command, name)
            if value is not None:
                changes[name] = value
        for name in ("pros", "cons"):
            value = getattr(command, name)
            if value is not None:
                changes[name] = json.loads(value)

        review.edit(**changes)
        current_domain.repository_for(Review).add(review)
        refresh_ratings(review)
