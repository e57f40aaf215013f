"""Repositories for the catalogue aggregates."""

from marketplace.catalogue.artisan import Artisan
from marketplace.catalogue.product import Product
from marketplace.domain import marketplace
from marketplace.utils.pagination import paginate


@marketplace.repository(part_of=Artisan)
class ArtisanRepository:
    def find_by_user(self, user_id) -> Artisan | None:
        """Return the artisan profile owned by ``user_id``, if any."""
        matches = self._dao.query.filter(user_id=str(user_id)).all().items
        return matches[0] if matches else None


@marketplace.repository(part_of=Product)
class ProductRepository:
    def active_for_artisan(self, artisan_id, page=None, limit=None):
        queryset = self._dao.query.filter(artisan_id=str(artisan_id), is_active=True).order_by("-created_at")
        return paginate(queryset, page, limit)
