"""Product listing management — create, reprice, restock, and deactivate.

Only the seller who owns the product's artisan profile (or an admin) may
change a product.
"""

import json

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.access import Actor, require
from marketplace.catalogue.artisan import Artisan
from marketplace.catalogue.product import Product
from marketplace.domain import logger, marketplace


@marketplace.command(part_of="Product")
class CreateProduct:
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    title = String(required=True, max_length=100)
    description = Text(required=True)
    short_description = String(max_length=200)
    category = String(required=True, max_length=20)
    price = Float(required=True, min_value=0.0)
    discount = Float()
    currency = String(max_length=3, default="INR")
    quantity = Integer(required=True, min_value=0)
    track_inventory = Boolean(default=True)
    low_stock_threshold = Integer(default=5)
    tags = Text()  # JSON array of strings
    images = Text()  # JSON array of {url, alt, is_primary}


@marketplace.command(part_of="Product")
class UpdateProductPrice:
    product_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    amount = Float(required=True, min_value=0.0)
    discount = Float()


@marketplace.command(part_of="Product")
class RestockProduct:
    product_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    quantity = Integer(required=True, min_value=0)


@marketplace.command(part_of="Product")
class DeactivateProduct:
    product_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)


def _load_owned_product(command) -> Product:
    actor = Actor(user_id=str(command.actor_id), role=command.actor_role)
    product = current_domain.repository_for(Product).get(command.product_id)
    if not actor.is_admin:
        artisan = current_domain.repository_for(Artisan).get(product.artisan_id)
        require(str(artisan.user_id) == actor.user_id, "Only the product's artisan can change it")
    return product


@marketplace.command_handler(part_of=Product)
class ProductListingHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        artisan = current_domain.repository_for(Artisan).find_by_user(command.actor_id)
        require(
            artisan is not None and artisan.is_active,
            "An active artisan profile is required to list products",
        )

        product = Product.create(
            artisan_id=artisan.id,
            title=command.title,
            description=command.description,
            short_description=command.short_description,
            category=command.category,
            price=command.price,
            discount=command.discount,
            currency=command.currency or "INR",
            quantity=command.quantity,
            track_inventory=command.track_inventory if command.track_inventory is not None else True,
            low_stock_threshold=command.low_stock_threshold if command.low_stock_threshold is not None else 5,
            tags=json.loads(command.tags) if command.tags else None,
            images=json.loads(command.images) if command.images else None,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProductPrice)
    def update_price(self, command):
        product = _load_owned_product(command)
        product.update_price(amount=command.amount, discount=command.discount)
        current_domain.repository_for(Product).add(product)

    @handle(RestockProduct)
    def restock(self, command):
        product = _load_owned_product(command)
        product.restock(command.quantity)
        current_domain.repository_for(Product).add(product)
        logger.info("product_restocked", product_id=str(product.id), quantity=command.quantity)

    @handle(DeactivateProduct)
    def deactivate(self, command):
        product = _load_owned_product(command)
        product.deactivate()
        current_domain.repository_for(Product).add(product)
