"""Domain events for the Review aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Review")
class ReviewCreated:
    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    artisan_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    order_id = Identifier(required=True)
    overall_rating = Integer(required=True)
    title = String()
    is_verified_purchase = Boolean()
    created_at = DateTime(required=True)


@marketplace.event(part_of="Review")
class ReviewEdited:
    __version__ = 1

    review_id = Identifier(required=True)
    overall_rating = Integer(required=True)
    title = String()
    comment = Text()
    edited_at = DateTime(required=True)


@marketplace.event(part_of="Review")
class ReviewRemoved:
    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    removed_by = Identifier(required=True)
    removed_at = DateTime(required=True)


@marketplace.event(part_of="Review")
class HelpfulVoteRecorded:
    __version__ = 1

    review_id = Identifier(required=True)
    voter_id = Identifier(required=True)
    helpful = Boolean(required=True)
    helpful_votes = Integer(required=True)
    voted_at = DateTime(required=True)


@marketplace.event(part_of="Review")
class SellerResponded:
    __version__ = 1

    review_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    comment = Text(required=True)
    responded_at = DateTime(required=True)


@marketplace.event(part_of="Review")
class ReviewModerated:
    __version__ = 1

    review_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    moderator_id = Identifier(required=True)
    notes = Text()
    moderated_at = DateTime(required=True)
