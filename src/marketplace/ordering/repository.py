"""Repository for the Order aggregate."""

from marketplace.domain import marketplace
from marketplace.ordering.order import Order
from marketplace.utils.pagination import fetch_all, paginate


@marketplace.repository(part_of=Order)
class OrderRepository:
    def for_customer(self, customer_id, page=None, limit=None):
        """A page of the buyer's orders, newest first."""
        queryset = self._dao.query.filter(customer_id=str(customer_id)).order_by("-created_at")
        return paginate(queryset, page, limit)

    def for_seller(self, seller_id) -> list[Order]:
        """Every order with at least one line item sold by ``seller_id``, newest first."""
        queryset = self._dao.query.filter(seller_ids__contains=f"|{seller_id}|").order_by("-created_at")
        return fetch_all(queryset)
