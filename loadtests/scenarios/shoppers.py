"""Shopper load test scenarios: sign-up, reviews and payments.

Payment webhooks are signed with the fake gateway's test signature, so
these journeys need the server running with ``PAYMENT_GATEWAY=fake``.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    payment_intent_event,
    product_data,
    profile_data,
    review_content,
    review_data,
    unique_owner_id,
    unique_payment_intent_id,
)
from loadtests.helpers.state import ShopperState

TEST_SIGNATURE = "test-signature"


class ReviewJourney(SequentialTaskSet):
    """Sign up -> Find product -> Review -> Reword -> Check counts.

    Generates UserProfileCreated, ProductCreated, ProductPublished,
    ReviewSubmitted, ReviewEdited and two ReviewSentimentAnalyzed events.
    """

    def on_start(self):
        self.state = ShopperState(owner_id=unique_owner_id())

    @task
    def sign_up(self):
        with self.client.post(
            "/profiles", json=profile_data(self.state.owner_id), catch_response=True, name="POST /profiles"
        ) as resp:
            if resp.status_code == 201:
                self.state.profile_id = resp.json()["profile_id"]
            else:
                resp.failure(f"Create profile failed: {resp.status_code}")
                self.interrupt()

    @task
    def list_product(self):
        resp = self.client.post("/products", json=product_data(), name="POST /products")
        if resp.status_code != 201:
            self.interrupt()
            return
        self.state.product_id = resp.json()["product_id"]
        self.client.put(f"/products/{self.state.product_id}/publish", name="PUT /products/{id}/publish")

    @task
    def review(self):
        with self.client.post(
            "/reviews",
            json=review_data(self.state.product_id, self.state.owner_id),
            catch_response=True,
            name="POST /reviews",
        ) as resp:
            if resp.status_code == 201:
                self.state.review_id = resp.json()["review_id"]
            else:
                resp.failure(f"Submit review failed: {resp.status_code}")
                self.interrupt()

    @task
    def reword(self):
        self.client.put(
            f"/reviews/{self.state.review_id}",
            json={"owner_id": self.state.owner_id, "content": review_content()},
            name="PUT /reviews/{id}",
        )

    @task
    def check_counts(self):
        self.client.get("/reviews/count", params={"product_id": self.state.product_id}, name="GET /reviews/count")
        self.client.get("/stats/sentiment", name="GET /stats/sentiment")

    @task
    def done(self):
        self.interrupt()


class PaymentJourney(SequentialTaskSet):
    """created -> processing -> succeeded (or failed), with one redelivery."""

    def on_start(self):
        self.state = ShopperState(
            payment_intent_id=unique_payment_intent_id(),
            product_ids=[f"prod-lt-{random.randint(1, 500)}"],
        )
        self.amount = random.randint(500, 50_000)

    def _deliver(self, event_type):
        body = payment_intent_event(event_type, self.state.payment_intent_id, self.state.product_ids, self.amount)
        with self.client.post(
            "/payments/webhook",
            data=body,
            headers={"Stripe-Signature": TEST_SIGNATURE, "Content-Type": "application/json"},
            catch_response=True,
            name=f"POST /payments/webhook [{event_type}]",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Webhook failed: {resp.status_code}")
                self.interrupt()
        return body

    @task
    def created(self):
        self._deliver("payment_intent.created")

    @task
    def processing(self):
        self._deliver("payment_intent.processing")

    @task
    def outcome(self):
        event_type = "payment_intent.succeeded" if random.random() < 0.9 else "payment_intent.payment_failed"
        body = self._deliver(event_type)
        # Providers retry deliveries; the duplicate must be a no-op
        self.client.post(
            "/payments/webhook",
            data=body,
            headers={"Stripe-Signature": TEST_SIGNATURE, "Content-Type": "application/json"},
            name="POST /payments/webhook [redelivery]",
        )

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    wait_time = between(0.5, 2.0)
    tasks = {ReviewJourney: 3, PaymentJourney: 2}
