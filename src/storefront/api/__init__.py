"""Storefront API package."""

from storefront.api.routes import (
    payment_router,
    product_router,
    profile_router,
    review_router,
    stats_router,
)

__all__ = ["product_router", "review_router", "profile_router", "payment_router", "stats_router"]
