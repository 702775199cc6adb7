"""Storefront bounded context — Products, Reviews, User Profiles and Payments.

Aggregates emit domain events that drive the derived counters (sentiment
distribution, general aggregates, status distribution). Review text is
analyzed through the text analysis port, and payment records are kept in
sync with the payment provider through the gateway port.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
