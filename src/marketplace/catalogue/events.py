"""Domain events for the Product and Artisan aggregates."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Product")
class ProductCreated:
    """An artisan listed a new product."""

    __version__ = 1

    product_id = Identifier(required=True)
    artisan_id = Identifier(required=True)
    title = String(required=True)
    category = String(required=True)
    price = Float(required=True)
    quantity = Integer(required=True)
    created_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductPriceUpdated:
    """The product's list price or discount changed."""

    __version__ = 1

    product_id = Identifier(required=True)
    previous_price = Float(required=True)
    new_price = Float(required=True)
    discount = Float()
    updated_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class StockReserved:
    """Units were taken out of stock for an order."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    remaining = Integer(required=True)
    is_low_stock = String(required=True)  # "True"/"False"
    reserved_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class StockReleased:
    """Units reserved for an order went back into stock (order cancelled)."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    remaining = Integer(required=True)
    released_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductRestocked:
    """Stock level was set by a seller or maintenance task."""

    __version__ = 1

    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    restocked_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductDeactivated:
    """The product was withdrawn from sale (soft delete)."""

    __version__ = 1

    product_id = Identifier(required=True)
    deactivated_at = DateTime(required=True)


@marketplace.event(part_of="Artisan")
class ArtisanRegistered:
    """A seller created their artisan profile."""

    __version__ = 1

    artisan_id = Identifier(required=True)
    user_id = Identifier(required=True)
    business_name = String(required=True)
    registered_at = DateTime(required=True)
