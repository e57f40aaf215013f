"""Integration tests for the review endpoints via TestClient."""


def _review_body(order, product, **overrides):
    body = {
        "productId": str(product.id),
        "orderId": str(order.id),
        "rating": {"overall": 5, "quality": 5, "craftsmanship": 4},
        "title": "Stunning",
        "comment": "The glaze is even more vivid in person.",
        "pros": ["Colour", "Finish"],
    }
    body.update(overrides)
    return body


def _create(client, auth_headers, order, product, **overrides):
    response = client.post("/api/reviews", json=_review_body(order, product, **overrides), headers=auth_headers())
    assert response.status_code == 201, response.text
    return response.json()["data"]["review"]


class TestCreateReviewAPI:
    def test_returns_created_review(self, client, auth_headers, delivered_order, product):
        response = client.post(
            "/api/reviews", json=_review_body(delivered_order, product), headers=auth_headers()
        )
        assert response.status_code == 201
        review = response.json()["data"]["review"]
        assert review["rating"]["overall"] == 5
        assert review["rating"]["craftsmanship"] == 4
        assert review["rating"]["packaging"] is None
        assert review["isVerifiedPurchase"] is True
        assert review["pros"] == ["Colour", "Finish"]
        assert review["status"] == "approved"

    def test_product_rating_reflects_review(self, client, auth_headers, delivered_order, product):
        _create(client, auth_headers, delivered_order, product)
        rating = client.get(f"/api/products/{product.id}").json()["data"]["product"]["rating"]
        assert rating == {"average": 5.0, "count": 1}

    def test_duplicate_is_400(self, client, auth_headers, delivered_order, product):
        _create(client, auth_headers, delivered_order, product)
        response = client.post(
            "/api/reviews", json=_review_body(delivered_order, product), headers=auth_headers()
        )
        assert response.status_code == 400

    def test_undelivered_order_is_400(self, client, auth_headers, product, place_order):
        order = place_order([(product, 1)])
        response = client.post("/api/reviews", json=_review_body(order, product), headers=auth_headers())
        assert response.status_code == 400
        assert "delivered" in response.json()["message"]

    def test_out_of_range_rating_is_400(self, client, auth_headers, delivered_order, product):
        body = _review_body(delivered_order, product, rating={"overall": 6})
        response = client.post("/api/reviews", json=body, headers=auth_headers())
        assert response.status_code == 400


class TestListReviewsAPI:
    def test_product_reviews_with_distribution(self, client, auth_headers, delivered_order, product):
        _create(client, auth_headers, delivered_order, product)
        response = client.get(f"/api/reviews/product/{product.id}")
        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data["reviews"]) == 1
        assert data["pagination"]["totalItems"] == 1
        assert data["ratingDistribution"][0] == {"rating": 5, "count": 1}
        assert [entry["rating"] for entry in data["ratingDistribution"]] == [5, 4, 3, 2, 1]

    def test_artisan_reviews(self, client, auth_headers, delivered_order, product, artisan):
        _create(client, auth_headers, delivered_order, product)
        response = client.get(f"/api/reviews/artisan/{artisan.id}")
        assert response.status_code == 200
        assert len(response.json()["data"]["reviews"]) == 1


class TestChangeReviewAPI:
    def test_edit_own_review(self, client, auth_headers, delivered_order, product):
        review = _create(client, auth_headers, delivered_order, product)
        response = client.put(
            f"/api/reviews/{review['id']}", json={"rating": {"overall": 3}}, headers=auth_headers()
        )
        assert response.status_code == 200
        assert response.json()["data"]["review"]["rating"]["overall"] == 3

    def test_edit_someone_elses_review_is_404(self, client, auth_headers, delivered_order, product):
        review = _create(client, auth_headers, delivered_order, product)
        response = client.put(
            f"/api/reviews/{review['id']}", json={"comment": "Mine now"}, headers=auth_headers("buyer-002")
        )
        assert response.status_code == 404

    def test_delete_review(self, client, auth_headers, delivered_order, product):
        review = _create(client, auth_headers, delivered_order, product)
        response = client.delete(f"/api/reviews/{review['id']}", headers=auth_headers())
        assert response.status_code == 200
        assert response.json()["message"] == "Review deleted successfully"
        listing = client.get(f"/api/reviews/product/{product.id}").json()["data"]
        assert listing["reviews"] == []

    def test_helpful_vote_once(self, client, auth_headers, delivered_order, product):
        review = _create(client, auth_headers, delivered_order, product)
        first = client.post(f"/api/reviews/{review['id']}/helpful", headers=auth_headers("buyer-002"))
        assert first.status_code == 200
        assert first.json()["data"]["helpfulVotes"] == 1

        second = client.post(f"/api/reviews/{review['id']}/helpful", headers=auth_headers("buyer-002"))
        assert second.status_code == 400

    def test_seller_response(self, client, auth_headers, delivered_order, product):
        review = _create(client, auth_headers, delivered_order, product)
        response = client.post(
            f"/api/reviews/{review['id']}/respond",
            json={"comment": "Thank you!"},
            headers=auth_headers("seller-001", "seller"),
        )
        assert response.status_code == 200
        assert response.json()["data"]["review"]["response"]["comment"] == "Thank you!"

    def test_buyer_cannot_respond(self, client, auth_headers, delivered_order, product):
        review = _create(client, auth_headers, delivered_order, product)
        response = client.post(
            f"/api/reviews/{review['id']}/respond", json={"comment": "Me too"}, headers=auth_headers("buyer-002")
        )
        assert response.status_code == 403

    def test_admin_moderation(self, client, auth_headers, delivered_order, product):
        review = _create(client, auth_headers, delivered_order, product)
        response = client.put(
            f"/api/reviews/{review['id']}/moderate",
            json={"status": "flagged", "notes": "Check photos"},
            headers=auth_headers("admin-001", "admin"),
        )
        assert response.status_code == 200
        assert response.json()["data"]["review"]["status"] == "flagged"

        forbidden = client.put(
            f"/api/reviews/{review['id']}/moderate", json={"status": "approved"}, headers=auth_headers()
        )
        assert forbidden.status_code == 403
