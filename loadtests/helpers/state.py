"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state — no cross-user sharing.
State tracks entity IDs returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ProductState:
    """Tracks state for a single simulated product lifecycle."""

    product_id: str | None = None
    current_status: str = "Draft"


@dataclass
class ShopperState:
    """Tracks a shopper who signs up, reviews and pays."""

    owner_id: str | None = None
    profile_id: str | None = None
    product_id: str | None = None
    review_id: str | None = None
    payment_intent_id: str | None = None
    product_ids: list[str] = field(default_factory=list)
