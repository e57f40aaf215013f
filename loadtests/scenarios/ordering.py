"""Ordering and review load test scenarios.

Three stateful SequentialTaskSet journeys: cart-to-checkout, cancellation
with stock restoration, and the full fulfillment path ending in a review.
Each journey seeds its own seller and product so journeys never contend on
each other's stock.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_item_data, order_data, review_data, unique_user_id
from loadtests.helpers.auth import bearer
from loadtests.helpers.response import extract_error_detail, payload
from loadtests.helpers.state import OrderState, SellerState
from loadtests.scenarios.catalogue import seed_listing


class _OrderJourney(SequentialTaskSet):
    def on_start(self):
        seller = SellerState()
        if not seed_listing(self.client, seller, quantity=50):
            self.interrupt()
        self.state = OrderState(
            buyer_id=unique_user_id("buyer"),
            seller_id=seller.user_id,
            product_id=seller.product_ids[0],
        )

    def _buyer(self):
        return bearer(self.state.buyer_id)

    def _seller(self):
        return bearer(self.state.seller_id, "seller")

    def _place_order(self, payment_method=None):
        with self.client.post(
            "/api/orders",
            json=order_data([self.state.product_id], payment_method=payment_method),
            headers=self._buyer(),
            catch_response=True,
            name="POST /api/orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = payload(resp)["order"]["id"]
            else:
                resp.failure(f"Place order failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    def _set_status(self, status):
        with self.client.put(
            f"/api/orders/{self.state.order_id}/status",
            json={"status": status},
            headers=self._seller(),
            catch_response=True,
            name="PUT /api/orders/{id}/status",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = status
            else:
                resp.failure(f"Set {status} failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()


class CartToCheckoutJourney(_OrderJourney):
    """Add to Cart -> Update Quantity -> View Cart -> Place Order -> View Order."""

    @task
    def add_to_cart(self):
        with self.client.post(
            "/api/users/cart",
            json=cart_item_data(self.state.product_id, quantity=1),
            headers=self._buyer(),
            catch_response=True,
            name="POST /api/users/cart",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Add to cart failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def update_quantity(self):
        with self.client.put(
            f"/api/users/cart/{self.state.product_id}",
            json={"quantity": 2},
            headers=self._buyer(),
            catch_response=True,
            name="PUT /api/users/cart/{productId}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update cart failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def view_cart(self):
        self.client.get("/api/users/cart", headers=self._buyer(), name="GET /api/users/cart")

    @task
    def checkout(self):
        self._place_order()

    @task
    def view_order(self):
        with self.client.get(
            f"/api/orders/{self.state.order_id}",
            headers=self._buyer(),
            catch_response=True,
            name="GET /api/orders/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Read order failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class OrderCancellationJourney(_OrderJourney):
    """Place Order -> Confirm -> Buyer Cancels (stock is restored)."""

    @task
    def place(self):
        self._place_order()

    @task
    def confirm(self):
        self._set_status("confirmed")

    @task
    def cancel(self):
        with self.client.post(
            f"/api/orders/{self.state.order_id}/cancel",
            json={"reason": "Ordered by mistake"},
            headers=self._buyer(),
            catch_response=True,
            name="POST /api/orders/{id}/cancel",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = "cancelled"
            else:
                resp.failure(f"Cancel failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class FulfillmentAndReviewJourney(_OrderJourney):
    """Place Order -> Processing -> Shipped -> Delivered -> Review -> Seller Dashboard."""

    @task
    def place(self):
        self._place_order(payment_method="cod")

    @task
    def process(self):
        self._set_status("processing")

    @task
    def ship(self):
        self._set_status("shipped")

    @task
    def deliver(self):
        self._set_status("delivered")

    @task
    def review(self):
        with self.client.post(
            "/api/reviews",
            json=review_data(self.state.product_id, self.state.order_id),
            headers=self._buyer(),
            catch_response=True,
            name="POST /api/reviews",
        ) as resp:
            if resp.status_code == 201:
                self.state.review_id = payload(resp)["review"]["id"]
            else:
                resp.failure(f"Review failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def read_product_reviews(self):
        self.client.get(f"/api/reviews/product/{self.state.product_id}", name="GET /api/reviews/product/{id}")

    @task
    def seller_dashboard(self):
        with self.client.get(
            "/api/orders/artisan/dashboard",
            headers=self._seller(),
            catch_response=True,
            name="GET /api/orders/artisan/dashboard",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Dashboard failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class OrderingUser(HttpUser):
    wait_time = between(0.5, 2.0)
    tasks = {
        CartToCheckoutJourney: 5,
        OrderCancellationJourney: 2,
        FulfillmentAndReviewJourney: 3,
    }
