"""Application tests for cart commands and the cart view."""

import pytest
from protean import current_domain

from marketplace.cart.cart import ShoppingCart
from marketplace.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartItem
from marketplace.cart.queries import get_cart
from marketplace.catalogue.listing import DeactivateProduct
from marketplace.exceptions import InsufficientStock, ItemUnavailable


def _add(product_id, quantity=1, customer_id="buyer-001"):
    return current_domain.process(
        AddToCart(customer_id=customer_id, product_id=str(product_id), quantity=quantity),
        asynchronous=False,
    )


def _cart(customer_id="buyer-001"):
    return current_domain.repository_for(ShoppingCart).find_for_customer(customer_id)


class TestAddToCart:
    def test_creates_cart_on_first_add(self, product):
        _add(product.id, 2)
        assert _cart().item_count == 2

    def test_missing_product_is_unavailable(self):
        with pytest.raises(ItemUnavailable):
            _add("no-such-product")

    def test_inactive_product_is_unavailable(self, product, seller):
        current_domain.process(
            DeactivateProduct(product_id=str(product.id), actor_id=seller.user_id, actor_role=seller.role),
            asynchronous=False,
        )
        with pytest.raises(ItemUnavailable):
            _add(product.id)

    def test_resulting_quantity_must_be_in_stock(self, make_product):
        product = make_product(quantity=3)
        _add(product.id, 2)
        with pytest.raises(InsufficientStock):
            _add(product.id, 2)
        assert _cart().item_count == 2


class TestUpdateAndRemove:
    def test_update_quantity(self, product):
        _add(product.id, 1)
        current_domain.process(
            UpdateCartItem(customer_id="buyer-001", product_id=str(product.id), quantity=4),
            asynchronous=False,
        )
        assert _cart().find_item(product.id).quantity == 4

    def test_update_beyond_stock_fails(self, product):
        _add(product.id, 1)
        with pytest.raises(InsufficientStock):
            current_domain.process(
                UpdateCartItem(customer_id="buyer-001", product_id=str(product.id), quantity=11),
                asynchronous=False,
            )

    def test_remove_item(self, product):
        _add(product.id, 1)
        current_domain.process(RemoveFromCart(customer_id="buyer-001", product_id=str(product.id)), asynchronous=False)
        assert len(_cart().items) == 0

    def test_clear_cart(self, make_product):
        first = make_product(title="Vase")
        second = make_product(title="Bowl")
        _add(first.id)
        _add(second.id)
        current_domain.process(ClearCart(customer_id="buyer-001"), asynchronous=False)
        assert len(_cart().items) == 0


class TestCartView:
    def test_summary(self, make_product):
        vase = make_product(title="Vase", price=500.0)
        bowl = make_product(title="Bowl", price=200.0, discount=50)
        _add(vase.id, 2)
        _add(bowl.id, 1)

        view = get_cart("buyer-001")
        assert view.summary == {
            "item_count": 3,
            "subtotal": 1100.0,
            "estimated_shipping": 0.0,
            "total": 1100.0,
        }

    def test_inactive_products_are_skipped(self, product, seller):
        _add(product.id, 1)
        current_domain.process(
            DeactivateProduct(product_id=str(product.id), actor_id=seller.user_id, actor_role=seller.role),
            asynchronous=False,
        )
        assert get_cart("buyer-001").lines == []

    def test_empty_cart(self):
        assert get_cart("buyer-without-cart").item_count == 0
