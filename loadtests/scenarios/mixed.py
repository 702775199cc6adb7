"""Mixed storefront workload scenario.

Combines the product, review and payment journeys with weights that model
realistic storefront traffic. This is the recommended scenario for a load
baseline.
"""

from locust import HttpUser, between, task

from loadtests.scenarios.products import ProductLifecycleJourney
from loadtests.scenarios.shoppers import PaymentJourney, ReviewJourney


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload.

    - Reviews (45%): the most common write, and each one triggers text
      analysis and three aggregation handlers.
    - Payments (35%): webhook bursts including redeliveries.
    - Products (20%): seller activity through the full lifecycle.
    """

    wait_time = between(0.5, 3.0)
    tasks = {
        ReviewJourney: 9,
        PaymentJourney: 7,
        ProductLifecycleJourney: 4,
    }

    @task(1)
    def dashboard(self):
        self.client.get("/stats/general", name="GET /stats/general")
        self.client.get("/stats/status/Product", name="GET /stats/status/{entity}")
