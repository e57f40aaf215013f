import json
import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def marketplace_bed():
    from marketplace.domain import marketplace

    bed = DomainFixture(marketplace)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(marketplace_bed):
    from marketplace.ordering.shipping import reset_shipping_policy

    with marketplace_bed.domain_context():
        yield
    reset_shipping_policy()


# ---------------------------------------------------------------------------
# Actors
# ---------------------------------------------------------------------------
@pytest.fixture()
def buyer():
    from marketplace.access import Actor

    return Actor(user_id="buyer-001", role="buyer")


@pytest.fixture()
def other_buyer():
    from marketplace.access import Actor

    return Actor(user_id="buyer-002", role="buyer")


@pytest.fixture()
def seller():
    from marketplace.access import Actor

    return Actor(user_id="seller-001", role="seller")


@pytest.fixture()
def other_seller():
    from marketplace.access import Actor

    return Actor(user_id="seller-002", role="seller")


@pytest.fixture()
def admin():
    from marketplace.access import Actor

    return Actor(user_id="admin-001", role="admin")


# ---------------------------------------------------------------------------
# Catalogue and order builders
# ---------------------------------------------------------------------------
SHIPPING_ADDRESS = {
    "name": "Asha Rao",
    "phone": "9876543210",
    "street": "12 Temple Road",
    "city": "Jaipur",
    "state": "Rajasthan",
    "zip_code": "302001",
    "country": "India",
}


@pytest.fixture()
def shipping_address():
    return dict(SHIPPING_ADDRESS)


@pytest.fixture()
def register_artisan():
    from protean import current_domain

    from marketplace.catalogue.artisan import Artisan
    from marketplace.catalogue.registration import RegisterArtisan

    def _register(user_id="seller-001", business_name="Jaipur Blue Pottery"):
        artisan_id = current_domain.process(
            RegisterArtisan(
                user_id=user_id,
                actor_role="seller",
                business_name=business_name,
                description="Hand-painted blue pottery from Jaipur",
                location=json.dumps({"city": "Jaipur", "state": "Rajasthan", "country": "India"}),
                specialties=json.dumps(["pottery"]),
                experience_years=12,
            ),
            asynchronous=False,
        )
        return current_domain.repository_for(Artisan).get(artisan_id)

    return _register


@pytest.fixture()
def artisan(register_artisan):
    return register_artisan()


@pytest.fixture()
def make_product(artisan):
    from protean import current_domain

    from marketplace.catalogue.listing import CreateProduct
    from marketplace.catalogue.product import Product

    def _make(seller_id="seller-001", **overrides):
        fields = {
            "title": "Blue Pottery Vase",
            "description": "A hand-painted vase",
            "category": "pottery",
            "price": 500.0,
            "quantity": 10,
            "images": json.dumps([{"url": "https://cdn.example.com/vase.jpg", "alt": "Vase"}]),
        }
        fields.update(overrides)
        product_id = current_domain.process(
            CreateProduct(actor_id=seller_id, actor_role="seller", **fields),
            asynchronous=False,
        )
        return current_domain.repository_for(Product).get(product_id)

    return _make


@pytest.fixture()
def product(make_product):
    return make_product()


@pytest.fixture()
def place_order():
    from protean import current_domain

    from marketplace.ordering.order import Order
    from marketplace.ordering.placement import PlaceOrder

    def _place(items, customer_id="buyer-001", payment_method="upi", billing_address=None):
        """``items`` is a list of ``(product, quantity)`` pairs."""
        order_id = current_domain.process(
            PlaceOrder(
                customer_id=customer_id,
                items=json.dumps([{"product_id": str(p.id), "quantity": qty} for p, qty in items]),
                shipping_address=json.dumps(SHIPPING_ADDRESS),
                billing_address=json.dumps(billing_address) if billing_address else None,
                payment_method=payment_method,
            ),
            asynchronous=False,
        )
        return current_domain.repository_for(Order).get(order_id)

    return _place


@pytest.fixture()
def delivered_order(product, place_order, seller):
    """A delivered order of two units of ``product`` for buyer-001."""
    from protean import current_domain

    from marketplace.ordering.order import Order
    from marketplace.ordering.status import UpdateOrderStatus

    order = place_order([(product, 2)])
    current_domain.process(
        UpdateOrderStatus(
            order_id=str(order.id),
            actor_id=seller.user_id,
            actor_role=seller.role,
            status="delivered",
        ),
        asynchronous=False,
    )
    return current_domain.repository_for(Order).get(order.id)


# ---------------------------------------------------------------------------
# HTTP API
# ---------------------------------------------------------------------------
@pytest.fixture()
def client():
    from fastapi import FastAPI, Request
    from fastapi.testclient import TestClient

    from marketplace.api.cart import router as cart_router
    from marketplace.api.catalogue import artisan_router, product_router
    from marketplace.api.errors import register_exception_handlers
    from marketplace.api.orders import router as order_router
    from marketplace.api.reviews import router as review_router
    from marketplace.domain import marketplace

    app = FastAPI()

    @app.middleware("http")
    async def domain_context(request: Request, call_next):
        with marketplace.domain_context():
            return await call_next(request)

    for router in (order_router, review_router, artisan_router, product_router, cart_router):
        app.include_router(router)
    register_exception_handlers(app)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def auth_headers():
    from marketplace.api.auth import create_access_token

    def _headers(user_id="buyer-001", role="buyer"):
        return {"Authorization": f"Bearer {create_access_token(user_id, role)}"}

    return _headers
