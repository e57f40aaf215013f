"""Cart view with live product details and a price summary."""

from dataclasses import dataclass, field

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.cart.cart import ShoppingCart
from marketplace.catalogue.product import Product


@dataclass
class CartLine:
    item: object
    product: Product

    @property
    def line_total(self) -> float:
        return round(self.product.discounted_price * self.item.quantity, 2)


@dataclass
class CartView:
    customer_id: str
    lines: list[CartLine] = field(default_factory=list)

    @property
    def item_count(self) -> int:
        return sum(line.item.quantity for line in self.lines)

    @property
    def subtotal(self) -> float:
        return round(sum(line.line_total for line in self.lines), 2)

    @property
    def summary(self) -> dict:
        # Shipping is estimated as free until an order is priced
        return {
            "item_count": self.item_count,
            "subtotal": self.subtotal,
            "estimated_shipping": 0.0,
            "total": self.subtotal,
        }


def get_cart(customer_id) -> CartView:
    """The buyer's cart, skipping items whose product is gone or inactive."""
    view = CartView(customer_id=str(customer_id))
    cart = current_domain.repository_for(ShoppingCart).find_for_customer(customer_id)
    if cart is None:
        return view

    products = current_domain.repository_for(Product)
    for item in cart.items:
        try:
            product = products.get(item.product_id)
        except ObjectNotFoundError:
            continue
        if product.is_active:
            view.lines.append(CartLine(item=item, product=product))
    return view
