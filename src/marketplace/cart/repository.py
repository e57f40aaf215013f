"""Repository for the ShoppingCart aggregate."""

from marketplace.cart.cart import ShoppingCart
from marketplace.domain import marketplace


@marketplace.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def find_for_customer(self, customer_id) -> ShoppingCart | None:
        matches = self._dao.query.filter(customer_id=str(customer_id)).all().items
        return matches[0] if matches else None

    def get_or_create(self, customer_id) -> ShoppingCart:
        cart = self.find_for_customer(customer_id)
        return cart if cart is not None else ShoppingCart.create(customer_id=customer_id)
