"""Product load test scenarios.

Stateful SequentialTaskSet journeys over the product lifecycle. Steps
execute in order; each depends on the previous step succeeding.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import product_data, product_update_data
from loadtests.helpers.state import ProductState


class ProductLifecycleJourney(SequentialTaskSet):
    """Create -> Update -> Publish -> Archive -> Restore -> Count.

    Exercises the product state machine and the archiving and counting
    resolvers. Generates 5 events: ProductCreated, ProductDetailsUpdated,
    ProductPublished, ProductArchived, ProductRestored.
    """

    def on_start(self):
        self.state = ProductState()

    @task
    def create(self):
        with self.client.post("/products", json=product_data(), catch_response=True, name="POST /products") as resp:
            if resp.status_code == 201:
                self.state.product_id = resp.json()["product_id"]
            else:
                resp.failure(f"Create product failed: {resp.status_code}")
                self.interrupt()

    @task
    def update(self):
        with self.client.put(
            f"/products/{self.state.product_id}",
            json=product_update_data(),
            catch_response=True,
            name="PUT /products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update failed: {resp.status_code}")

    @task
    def publish(self):
        self._transition("publish", "Active")

    @task
    def archive(self):
        self._transition("archive", "Archived")

    @task
    def restore(self):
        self._transition("restore", "Active")

    @task
    def count(self):
        self.client.get("/products/count", params={"status": "Active"}, name="GET /products/count")

    @task
    def done(self):
        self.interrupt()

    def _transition(self, action, target_status):
        with self.client.put(
            f"/products/{self.state.product_id}/{action}",
            catch_response=True,
            name=f"PUT /products/{{id}}/{action}",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = target_status
            else:
                resp.failure(f"{action} failed: {resp.status_code}")
                self.interrupt()


class ProductUser(HttpUser):
    wait_time = between(1, 3)
    tasks = [ProductLifecycleJourney]
