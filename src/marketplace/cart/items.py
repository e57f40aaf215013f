"""Cart item commands — add, update, remove, clear."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from marketplace.cart.cart import ShoppingCart
from marketplace.catalogue.product import Product
from marketplace.domain import marketplace
from marketplace.exceptions import InsufficientStock, ItemUnavailable


@marketplace.command(part_of="ShoppingCart")
class AddToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1)
    customization = Text()  # JSON: {options: [...], instructions}


@marketplace.command(part_of="ShoppingCart")
class UpdateCartItem:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@marketplace.command(part_of="ShoppingCart")
class RemoveFromCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)


@marketplace.command(part_of="ShoppingCart")
class ClearCart:
    customer_id = Identifier(required=True)


def _active_product(product_id) -> Product:
    try:
        product = current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise ItemUnavailable({"product": [f"Product {product_id} not found or inactive"]}) from None
    if not product.is_active:
        raise ItemUnavailable({"product": [f"Product {product_id} not found or inactive"]})
    return product


@marketplace.command_handler(part_of=ShoppingCart)
class CartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        quantity = command.quantity or 1
        product = _active_product(command.product_id)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get_or_create(command.customer_id)

        if not product.is_available(cart.quantity_after_adding(command.product_id, quantity)):
            raise InsufficientStock({"quantity": ["Insufficient stock for requested quantity"]})

        cart.add_item(
            product_id=command.product_id,
            quantity=quantity,
            customization=command.customization,
        )
        repo.add(cart)
        return str(cart.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        product = _active_product(command.product_id)
        if command.quantity >= 1 and not product.is_available(command.quantity):
            raise InsufficientStock({"quantity": ["Insufficient stock"]})

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get_or_create(command.customer_id)
        cart.update_item_quantity(command.product_id, command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for_customer(command.customer_id)
        if cart is None:
            return
        cart.remove_item(command.product_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for_customer(command.customer_id)
        if cart is None:
            return
        cart.clear()
        repo.add(cart)
