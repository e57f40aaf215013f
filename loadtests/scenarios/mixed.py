"""Mixed marketplace workload scenario.

Combines seller and buyer journeys with weights that model marketplace
traffic. This is the recommended scenario for load baseline testing.
"""

from locust import HttpUser, between

from loadtests.scenarios.catalogue import SellerOnboardingJourney
from loadtests.scenarios.ordering import (
    CartToCheckoutJourney,
    FulfillmentAndReviewJourney,
    OrderCancellationJourney,
)


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload.

    Catalogue (20%): sellers onboarding and maintaining listings.
    Checkout (45%): carts converting to orders.
    Fulfillment and reviews (25%): orders delivered and reviewed.
    Cancellations (10%): buyers cancelling before shipment.
    """

    wait_time = between(0.5, 3.0)
    tasks = {
        SellerOnboardingJourney: 4,
        CartToCheckoutJourney: 9,
        FulfillmentAndReviewJourney: 5,
        OrderCancellationJourney: 2,
    }
