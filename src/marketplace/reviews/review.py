"""Review aggregate (CQRS) — a buyer's rating of a product from a delivered order.

Reviews are published immediately (``approved``). Only approved reviews
count towards product and artisan ratings. Deleting a review marks it
``removed`` rather than erasing it, which frees the buyer's slot for the
same product and order.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from marketplace.domain import marketplace
from marketplace.exceptions import AlreadyVoted, InvalidStatus, InvalidTransition
from marketplace.reviews.events import (
    HelpfulVoteRecorded,
    ReviewCreated,
    ReviewEdited,
    ReviewModerated,
    ReviewRemoved,
    SellerResponded,
)

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


class ReviewStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    FLAGGED = "flagged"
    REMOVED = "removed"


MODERATION_STATUSES = {
    ReviewStatus.APPROVED.value,
    ReviewStatus.REJECTED.value,
    ReviewStatus.FLAGGED.value,
}


def _check_score(field_name, value):
    if value is not None and (value < 1 or value > 5):
        raise ValidationError({field_name: ["Rating must be between 1 and 5"]})


@marketplace.value_object(part_of="Review")
class RatingAspects:
    """Optional per-aspect scores, each 1 to 5."""

    quality = Integer()
    craftsmanship = Integer()
    packaging = Integer()
    shipping = Integer()

    @invariant.post
    def scores_must_be_in_range(self):
        for name in ("quality", "craftsmanship", "packaging", "shipping"):
            _check_score(name, getattr(self, name))


@marketplace.entity(part_of="Review")
class HelpfulVote:
    user_id = Identifier(required=True)
    helpful = Boolean(required=True)
    voted_at = DateTime(required=True)


@marketplace.aggregate
class Review:
    product_id = Identifier(required=True)
    artisan_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    order_id = Identifier(required=True)

    overall_rating = Integer(required=True)
    aspects = ValueObject(RatingAspects)
    title = String(max_length=100)
    comment = Text(required=True)
    pros = Text()  # JSON array of strings
    cons = Text()  # JSON array of strings
    would_recommend = Boolean(default=True)
    is_verified_purchase = Boolean(default=True)

    helpful_votes = Integer(default=0)
    votes = HasMany(HelpfulVote)

    response_comment = Text()
    responded_at = DateTime()
    responded_by = Identifier()

    status = String(choices=ReviewStatus, default=ReviewStatus.APPROVED.value)
    moderation_notes = Text()

    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def overall_rating_must_be_in_range(self):
        _check_score("overall_rating", self.overall_rating)

    @invariant.post
    def comment_length(self):
        if self.comment is not None:
            if len(self.comment.strip()) == 0:
                raise ValidationError({"comment": ["Review comment is required"]})
            if len(self.comment) > 1000:
                raise ValidationError({"comment": ["Review comment cannot be more than 1000 characters"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        product_id,
        artisan_id,
        seller_id,
        customer_id,
        order_id,
        overall_rating,
        comment,
        title=None,
        aspects=None,
        pros=None,
        cons=None,
        would_recommend=True,
    ):
        now = datetime.now(UTC)

        review = cls(
            product_id=product_id,
            artisan_id=artisan_id,
            seller_id=seller_id,
            customer_id=customer_id,
            order_id=order_id,
            overall_rating=overall_rating,
            aspects=RatingAspects(**aspects) if aspects else None,
            title=title,
            comment=comment,
            pros=json.dumps(pros) if pros else None,
            cons=json.dumps(cons) if cons else None,
            would_recommend=would_recommend if would_recommend is not None else True,
            is_verified_purchase=True,
            helpful_votes=0,
            status=ReviewStatus.APPROVED.value,
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            ReviewCreated(
                review_id=str(review.id),
                product_id=str(product_id),
                artisan_id=str(artisan_id),
                customer_id=str(customer_id),
                order_id=str(order_id),
                overall_rating=overall_rating,
                title=title,
                is_verified_purchase=True,
                created_at=now,
            )
        )
        return review

    @property
    def is_approved(self) -> bool:
        return self.status == ReviewStatus.APPROVED.value

    @property
    def is_removed(self) -> bool:
        return self.status == ReviewStatus.REMOVED.value

    # -------------------------------------------------------------------
    # Author actions
    # -------------------------------------------------------------------
    def edit(
        self,
        overall_rating=_UNSET,
        title=_UNSET,
        comment=_UNSET,
        pros=_UNSET,
        cons=_UNSET,
        would_recommend=_UNSET,
    ):
        now = datetime.now(UTC)

        with atomic_change(self):
            if overall_rating is not _UNSET:
                self.overall_rating = overall_rating
            if title is not _UNSET:
                self.title = title
            if comment is not _UNSET:
                self.comment = comment
            if pros is not _UNSET:
                self.pros = json.dumps(pros) if pros else None
            if cons is not _UNSET:
                self.cons = json.dumps(cons) if cons else None
            if would_recommend is not _UNSET:
                self.would_recommend = would_recommend
            self.updated_at = now

        self.raise_(
            ReviewEdited(
                review_id=str(self.id),
                overall_rating=self.overall_rating,
                title=self.title,
                comment=self.comment,
                edited_at=now,
            )
        )

    def remove(self, removed_by):
        if self.is_removed:
            raise InvalidTransition({"status": ["Review is already removed"]})

        now = datetime.now(UTC)
        self.status = ReviewStatus.REMOVED.value
        self.updated_at = now

        self.raise_(
            ReviewRemoved(
                review_id=str(self.id),
                product_id=str(self.product_id),
                removed_by=str(removed_by),
                removed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Community and seller actions
    # -------------------------------------------------------------------
    def has_voted(self, user_id) -> bool:
        return any(str(v.user_id) == str(user_id) for v in self.votes)

    def add_vote(self, user_id, helpful):
        """Record one vote per user. Only helpful votes raise the counter."""
        if self.has_voted(user_id):
            raise AlreadyVoted({"vote": ["You have already voted on this review"]})

        now = datetime.now(UTC)
        self.add_votes(HelpfulVote(user_id=user_id, helpful=bool(helpful), voted_at=now))

        with atomic_change(self):
            if helpful:
                self.helpful_votes = self.helpful_votes + 1
            self.updated_at = now

        self.raise_(
            HelpfulVoteRecorded(
                review_id=str(self.id),
                voter_id=str(user_id),
                helpful=bool(helpful),
                helpful_votes=self.helpful_votes,
                voted_at=now,
            )
        )

    def respond(self, seller_id, comment):
        """Attach the seller's public response, replacing any earlier one."""
        if not comment or not comment.strip():
            raise ValidationError({"comment": ["Response comment is required"]})

        now = datetime.now(UTC)
        self.response_comment = comment
        self.responded_at = now
        self.responded_by = seller_id
        self.updated_at = now

        self.raise_(
            SellerResponded(
                review_id=str(self.id),
                seller_id=str(seller_id),
                comment=comment,
                responded_at=now,
            )
        )

    def moderate(self, status, moderator_id, notes=None):
        if status not in MODERATION_STATUSES:
            raise InvalidStatus({"status": [f"Invalid moderation status: {status}"]})
        if self.is_removed:
            raise InvalidTransition({"status": ["Removed reviews cannot be moderated"]})

        previous = self.status
        now = datetime.now(UTC)
        self.status = status
        self.moderation_notes = notes
        self.updated_at = now

        self.raise_(
            ReviewModerated(
                review_id=str(self.id),
                previous_status=previous,
                new_status=status,
                moderator_id=str(moderator_id),
                notes=notes,
                moderated_at=now,
            )
        )
