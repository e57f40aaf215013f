"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the marketplace's validation rules
and use the camelCase field names accepted by the API's request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker("en_IN")

CATEGORIES = ["jewelry", "textiles", "pottery", "woodwork", "art", "metalwork", "leather", "glass", "other"]
PAYMENT_METHODS = ["card", "upi", "netbanking", "wallet", "cod"]


def unique_user_id(role: str = "buyer") -> str:
    """Generate user ids like 'lt-seller-a1b2c3d4'."""
    return f"lt-{role}-{uuid.uuid4().hex[:8]}"


# ---------- Catalogue ----------


def artisan_data() -> dict:
    """Generate a RegisterArtisanRequest payload."""
    return {
        "businessName": f"{fake.last_name()} {random.choice(['Crafts', 'Handlooms', 'Studio', 'Works'])}"[:100],
        "description": fake.paragraph(nb_sentences=3)[:1000],
        "specialties": random.sample(CATEGORIES, k=2),
        "experience": random.randint(1, 40),
        "location": {"city": fake.city()[:100], "state": fake.state()[:100], "country": "India"},
    }


def product_data(quantity: int | None = None) -> dict:
    """Generate a CreateProductRequest payload with enough stock for a few orders."""
    price = round(random.uniform(150.0, 8000.0), 2)
    return {
        "title": f"Handmade {fake.word().title()} {random.choice(['Vase', 'Shawl', 'Bangle', 'Box', 'Lamp'])}"[:100],
        "description": fake.paragraph(nb_sentences=4),
        "shortDescription": fake.sentence()[:200],
        "category": random.choice(CATEGORIES),
        "price": {"amount": price, "discount": random.choice([None, 5, 10, 20])},
        "inventory": {"quantity": quantity if quantity is not None else random.randint(20, 200)},
        "images": [{"url": f"https://cdn.example.com/{uuid.uuid4().hex}.jpg", "isPrimary": True}],
        "tags": [fake.word() for _ in range(3)],
    }


# ---------- Cart and ordering ----------


def cart_item_data(product_id: str, quantity: int | None = None) -> dict:
    return {"productId": product_id, "quantity": quantity or random.randint(1, 3)}


def shipping_address() -> dict:
    return {
        "name": fake.name()[:100],
        "phone": fake.msisdn()[:20],
        "street": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": fake.state()[:100],
        "zipCode": fake.postcode()[:20],
    }


def order_data(product_ids: list[str], quantity: int = 1, payment_method: str | None = None) -> dict:
    """Generate a PlaceOrderRequest payload for the given products."""
    return {
        "items": [{"product": product_id, "quantity": quantity} for product_id in product_ids],
        "shippingAddress": shipping_address(),
        "payment": {"method": payment_method or random.choice(PAYMENT_METHODS)},
    }


# ---------- Reviews ----------


def review_data(product_id: str, order_id: str) -> dict:
    overall = random.choices([5, 4, 3, 2, 1], weights=[50, 30, 10, 5, 5])[0]
    return {
        "productId": product_id,
        "orderId": order_id,
        "rating": {"overall": overall, "quality": random.randint(1, 5), "packaging": random.randint(1, 5)},
        "title": fake.sentence(nb_words=5)[:100],
        "comment": fake.paragraph(nb_sentences=2)[:1000],
        "pros": [fake.word()],
        "wouldRecommend": overall >= 3,
    }
