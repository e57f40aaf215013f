"""Read-side access to the catalogue."""

from protean.utils.globals import current_domain

from marketplace.catalogue.artisan import Artisan
from marketplace.catalogue.product import Product
from marketplace.exceptions import NotFound
from marketplace.utils.pagination import Page


def get_product(product_id) -> Product:
    """An active product; withdrawn products are reported as missing."""
    product = current_domain.repository_for(Product).get(product_id)
    if not product.is_active:
        raise NotFound({"_entity": "Product not found"})
    return product


def get_artisan(artisan_id) -> Artisan:
    return current_domain.repository_for(Artisan).get(artisan_id)


def list_artisan_products(artisan_id, page=None, limit=None) -> Page:
    return current_domain.repository_for(Product).active_for_artisan(artisan_id, page, limit)
