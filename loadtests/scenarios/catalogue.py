"""Catalogue load test scenarios.

A seller registers an artisan profile, lists products, and maintains them.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import artisan_data, product_data, unique_user_id
from loadtests.helpers.auth import bearer
from loadtests.helpers.response import extract_error_detail, payload
from loadtests.helpers.state import SellerState


def seed_listing(client, state: SellerState, quantity: int | None = None) -> bool:
    """Register a fresh seller with one product. Returns False on failure."""
    state.user_id = unique_user_id("seller")
    headers = bearer(state.user_id, "seller")

    with client.post(
        "/api/artisans", json=artisan_data(), headers=headers, catch_response=True, name="POST /api/artisans"
    ) as resp:
        if resp.status_code != 201:
            resp.failure(f"Register artisan failed: {resp.status_code} - {extract_error_detail(resp)}")
            return False
        state.artisan_id = payload(resp)["artisan"]["id"]

    with client.post(
        "/api/products",
        json=product_data(quantity),
        headers=headers,
        catch_response=True,
        name="POST /api/products",
    ) as resp:
        if resp.status_code != 201:
            resp.failure(f"Create product failed: {resp.status_code} - {extract_error_detail(resp)}")
            return False
        state.product_ids.append(payload(resp)["product"]["id"])
    return True


class SellerOnboardingJourney(SequentialTaskSet):
    """Register -> List Products -> Reprice -> Restock -> Browse Storefront."""

    def on_start(self):
        self.state = SellerState()
        if not seed_listing(self.client, self.state):
            self.interrupt()

    @task
    def list_second_product(self):
        with self.client.post(
            "/api/products",
            json=product_data(),
            headers=bearer(self.state.user_id, "seller"),
            catch_response=True,
            name="POST /api/products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_ids.append(payload(resp)["product"]["id"])
            else:
                resp.failure(f"Create product failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def reprice(self):
        product_id = random.choice(self.state.product_ids)
        with self.client.put(
            f"/api/products/{product_id}/price",
            json={"amount": round(random.uniform(150.0, 8000.0), 2), "discount": random.choice([0, 10, 25])},
            headers=bearer(self.state.user_id, "seller"),
            catch_response=True,
            name="PUT /api/products/{id}/price",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Reprice failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def restock(self):
        product_id = random.choice(self.state.product_ids)
        with self.client.put(
            f"/api/products/{product_id}/restock",
            json={"quantity": random.randint(10, 100)},
            headers=bearer(self.state.user_id, "seller"),
            catch_response=True,
            name="PUT /api/products/{id}/restock",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Restock failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def browse_storefront(self):
        with self.client.get(
            f"/api/products/artisan/{self.state.artisan_id}",
            catch_response=True,
            name="GET /api/products/artisan/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Storefront failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CatalogueUser(HttpUser):
    """Seller-side catalogue traffic only."""

    wait_time = between(0.5, 2.0)
    tasks = [SellerOnboardingJourney]
