"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- FakeGateway for development and testing
- StripeGateway for production

The default is picked from the domain's ``PAYMENT_GATEWAY`` setting.
"""

from protean.utils.globals import current_domain

from storefront.gateway.fake_adapter import FakeGateway
from storefront.gateway.port import PaymentGateway

_current_gateway: PaymentGateway | None = None


def _configured_gateway() -> PaymentGateway:
    custom = current_domain.config.get("custom", {}) if current_domain else {}
    if custom.get("PAYMENT_GATEWAY") == "stripe":
        from storefront.gateway.stripe_adapter import StripeGateway

        return StripeGateway(webhook_secret=custom.get("STRIPE_WEBHOOK_SECRET", ""))
    return FakeGateway()


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway, building the configured one on first use."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = _configured_gateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to the configured gateway."""
    global _current_gateway
    _current_gateway = None
