"""Artisan marketplace bounded context — catalogue, carts, orders, and reviews.

A single Protean domain hosts every aggregate so that one command (for example,
placing an order) can reserve stock on several products, persist the order,
and clear the buyer's cart inside the same Unit of Work.
"""

import structlog
from protean.domain import Domain

marketplace = Domain(name="marketplace")

logger = structlog.get_logger(__name__)
