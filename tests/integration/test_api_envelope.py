"""Cross-cutting API behaviour: authentication, error envelope, and request ids."""

from datetime import timedelta

import pytest
from jose import jwt

from marketplace.api.auth import create_access_token, decode_token
from marketplace.config import get_settings


class TestAuthentication:
    @pytest.mark.parametrize(
        "method, path",
        [
            ("get", "/api/orders"),
            ("get", "/api/users/cart"),
            ("post", "/api/reviews/some-review/helpful"),
            ("get", "/api/orders/artisan/dashboard"),
        ],
    )
    def test_missing_token_is_401(self, client, method, path):
        response = getattr(client, method)(path)
        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Access token required"}

    def test_garbage_token_is_401(self, client):
        response = client.get("/api/orders", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_expired_token_is_401(self, client):
        token = create_access_token("buyer-001", expires_delta=timedelta(seconds=-1))
        response = client.get("/api/orders", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_token_signed_with_another_key_is_401(self, client):
        token = jwt.encode({"sub": "buyer-001", "role": "admin"}, "not-the-secret", algorithm="HS256")
        response = client.get("/api/orders", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_public_routes_need_no_token(self, client, product):
        assert client.get(f"/api/products/{product.id}").status_code == 200
        assert client.get(f"/api/reviews/product/{product.id}").status_code == 200


class TestTokens:
    def test_round_trip(self):
        actor = decode_token(create_access_token("seller-001", "seller"))
        assert actor.user_id == "seller-001"
        assert actor.is_seller

    def test_unknown_role_is_rejected(self):
        from fastapi import HTTPException

        settings = get_settings()
        token = jwt.encode({"sub": "u1", "role": "superuser"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
        with pytest.raises(HTTPException) as exc_info:
            decode_token(token)
        assert exc_info.value.status_code == 401


class TestErrorEnvelope:
    def test_not_found_shape(self, client):
        response = client.get("/api/products/no-such-product")
        assert response.status_code == 404
        payload = response.json()
        assert payload["success"] is False
        assert isinstance(payload["message"], str)

    def test_request_validation_lists_fields(self, client, auth_headers):
        response = client.post("/api/users/cart", json={"quantity": 0}, headers=auth_headers())
        assert response.status_code == 400
        fields = {error["field"] for error in response.json()["data"]["errors"]}
        assert "body.productId" in fields
        assert "body.quantity" in fields

    def test_business_rule_failure_carries_errors(self, client, auth_headers, make_product):
        product = make_product(quantity=0)
        response = client.post(
            "/api/users/cart", json={"productId": str(product.id)}, headers=auth_headers()
        )
        assert response.status_code == 400
        payload = response.json()
        assert payload["message"] == "Insufficient stock for requested quantity"
        assert payload["data"]["errors"] == {"quantity": ["Insufficient stock for requested quantity"]}
