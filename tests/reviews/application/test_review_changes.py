"""Application tests for editing, deleting, voting on, responding to, and moderating reviews."""

import json

import pytest
from protean import current_domain

from marketplace.catalogue.product import Product
from marketplace.exceptions import AccessDenied, AlreadyVoted, NotFound
from marketplace.reviews.editing import EditReview
from marketplace.reviews.moderation import ModerateReview
from marketplace.reviews.removal import DeleteReview
from marketplace.reviews.response import RespondToReview
from marketplace.reviews.review import Review
from marketplace.reviews.voting import AddHelpfulVote


def _reload(review):
    return current_domain.repository_for(Review).get(review.id)


def _product_rating(product):
    refreshed = current_domain.repository_for(Product).get(product.id)
    return refreshed.rating_average, refreshed.rating_count


def _delete(review, actor_id="buyer-001"):
    current_domain.process(DeleteReview(review_id=str(review.id), actor_id=actor_id), asynchronous=False)


def _moderate(review, actor, status, notes=None):
    current_domain.process(
        ModerateReview(review_id=str(review.id), actor_id=actor.user_id, actor_role=actor.role, status=status, notes=notes),
        asynchronous=False,
    )


class TestEditReview:
    def test_edit_recomputes_rating(self, write_review, product):
        review = write_review(overall_rating=5)
        current_domain.process(
            EditReview(review_id=str(review.id), actor_id="buyer-001", overall_rating=2, cons=json.dumps(["Cracked"])),
            asynchronous=False,
        )
        edited = _reload(review)
        assert edited.overall_rating == 2
        assert json.loads(edited.cons) == ["Cracked"]
        assert edited.comment == "Beautiful work"
        assert _product_rating(product) == (2.0, 1)

    def test_other_user_sees_not_found(self, write_review):
        review = write_review()
        with pytest.raises(NotFound):
            current_domain.process(
                EditReview(review_id=str(review.id), actor_id="buyer-002", comment="Hijacked"),
                asynchronous=False,
            )
        assert _reload(review).comment == "Beautiful work"


class TestDeleteReview:
    def test_delete_soft_removes_and_recomputes(self, write_review, product):
        review = write_review(overall_rating=3)
        _delete(review)
        assert _reload(review).status == "removed"
        assert _product_rating(product) == (0.0, 0)

    def test_buyer_can_review_again_after_delete(self, write_review, product):
        review = write_review(overall_rating=3)
        _delete(review)
        write_review(overall_rating=5, comment="Changed my mind, it is great")
        assert _product_rating(product) == (5.0, 1)

    def test_other_user_cannot_delete(self, write_review):
        review = write_review()
        with pytest.raises(NotFound):
            _delete(review, actor_id="buyer-002")
        assert _reload(review).status == "approved"

    def test_deleted_review_is_not_found(self, write_review):
        review = write_review()
        _delete(review)
        with pytest.raises(NotFound):
            _delete(review)


class TestHelpfulVotes:
    def test_vote_returns_running_count(self, write_review):
        review = write_review()
        count = current_domain.process(
            AddHelpfulVote(review_id=str(review.id), user_id="buyer-002", helpful=True), asynchronous=False
        )
        assert count == 1
        assert _reload(review).helpful_votes == 1

    def test_second_vote_rejected(self, write_review):
        review = write_review()
        current_domain.process(AddHelpfulVote(review_id=str(review.id), user_id="buyer-002"), asynchronous=False)
        with pytest.raises(AlreadyVoted):
            current_domain.process(
                AddHelpfulVote(review_id=str(review.id), user_id="buyer-002", helpful=False), asynchronous=False
            )
        assert _reload(review).helpful_votes == 1


class TestSellerResponse:
    def test_seller_responds(self, write_review, seller):
        review = write_review()
        current_domain.process(
            RespondToReview(review_id=str(review.id), actor_id=seller.user_id, comment="Thank you for your support"),
            asynchronous=False,
        )
        assert _reload(review).response_comment == "Thank you for your support"

    def test_other_seller_cannot_respond(self, write_review, other_seller):
        review = write_review()
        with pytest.raises(AccessDenied):
            current_domain.process(
                RespondToReview(review_id=str(review.id), actor_id=other_seller.user_id, comment="Hello"),
                asynchronous=False,
            )
        assert _reload(review).response_comment is None


class TestModeration:
    def test_rejecting_removes_from_rating(self, write_review, product, admin):
        review = write_review(overall_rating=1)
        _moderate(review, admin, "rejected", notes="Abusive")
        moderated = _reload(review)
        assert moderated.status == "rejected"
        assert moderated.moderation_notes == "Abusive"
        assert _product_rating(product) == (0.0, 0)

    def test_reapproving_restores_rating(self, write_review, product, admin):
        review = write_review(overall_rating=4)
        _moderate(review, admin, "flagged")
        _moderate(review, admin, "approved")
        assert _product_rating(product) == (4.0, 1)

    def test_non_admin_cannot_moderate(self, write_review, seller):
        review = write_review()
        with pytest.raises(AccessDenied):
            _moderate(review, seller, "rejected")
