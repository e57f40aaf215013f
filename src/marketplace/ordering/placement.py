"""Order placement — command and handler.

Placement runs in two phases inside the handler's Unit of Work: every
requested product is validated first, and stock is reserved only once all of
them pass. A failure in either phase raises before the Unit of Work commits,
so neither the stock changes nor the order are persisted.
"""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.cart.cart import ShoppingCart
from marketplace.catalogue.artisan import Artisan
from marketplace.catalogue.product import Product
from marketplace.domain import logger, marketplace
from marketplace.exceptions import ItemUnavailable
from marketplace.ordering.order import Order
from marketplace.ordering.pricing import generate_order_number, price_order, subtotal_for, unit_price
from marketplace.ordering.shipping import get_shipping_policy


@marketplace.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: [{product_id, quantity, customization}]
    shipping_address = Text(required=True)  # JSON: address dict
    billing_address = Text()  # JSON: address dict, defaults to shipping address
    payment_method = String(required=True, max_length=20)


def _requested_quantities(items: list[dict]) -> dict:
    """Total requested quantity per product, in request order."""
    totals = {}
    for item in items:
        product_id = str(item["product_id"])
        totals[product_id] = totals.get(product_id, 0) + int(item.get("quantity", 1))
    return totals


def _load_product(product_id) -> Product:
    try:
        product = current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise ItemUnavailable({"product": [f"Product {product_id} not found or inactive"]}) from None
    if not product.is_active:
        raise ItemUnavailable({"product": [f"Product {product_id} not found or inactive"]})
    return product


def _load_artisan(product: Product) -> Artisan:
    try:
        return current_domain.repository_for(Artisan).get(product.artisan_id)
    except ObjectNotFoundError:
        raise ItemUnavailable({"product": [f"Product {product.id} not found or inactive"]}) from None


@marketplace.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items = json.loads(command.items) if isinstance(command.items, str) else command.items
        shipping_address = (
            json.loads(command.shipping_address)
            if isinstance(command.shipping_address, str)
            else command.shipping_address
        )
        billing_address = None
        if command.billing_address:
            billing_address = (
                json.loads(command.billing_address)
                if isinstance(command.billing_address, str)
                else command.billing_address
            )

        if not items:
            raise ValidationError({"items": ["Order must contain at least one item"]})

        # Phase 1: validate every requested product before touching stock
        requested = _requested_quantities(items)
        products = {}
        artisans = {}
        for product_id, quantity in requested.items():
            product = _load_product(product_id)
            product.assert_available(quantity)
            products[product_id] = product
            artisans[product_id] = _load_artisan(product)

        lines = []
        for item in items:
            product_id = str(item["product_id"])
            product = products[product_id]
            artisan = artisans[product_id]
            customization = item.get("customization")
            lines.append(
                {
                    "product_id": product_id,
                    "artisan_id": str(artisan.id),
                    "seller_id": str(artisan.user_id),
                    "title": product.title,
                    "image": product.primary_image,
                    "artisan_name": artisan.business_name,
                    "quantity": int(item.get("quantity", 1)),
                    "unit_price": unit_price(product),
                    "customization": json.dumps(customization) if isinstance(customization, dict) else customization,
                }
            )

        shipping_cost = get_shipping_policy().cost_for(subtotal_for(lines), lines, shipping_address)
        pricing = price_order(lines, shipping_cost=shipping_cost)

        order = Order.place(
            order_number=generate_order_number(),
            customer_id=command.customer_id,
            lines=lines,
            shipping_address=shipping_address,
            billing_address=billing_address,
            payment_method=command.payment_method,
            pricing=pricing,
        )

        # Phase 2: reserve stock for every tracked product
        product_repo = current_domain.repository_for(Product)
        for product_id, quantity in requested.items():
            product = products[product_id]
            product.reserve_stock(quantity)
            product_repo.add(product)

        current_domain.repository_for(Order).add(order)

        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.find_for_customer(command.customer_id)
        if cart is not None and cart.items:
            cart.clear()
            cart_repo.add(cart)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            order_number=order.order_number,
            customer_id=str(command.customer_id),
            items=order.total_items,
            total_amount=order.pricing.total_amount,
        )
        return str(order.id)
