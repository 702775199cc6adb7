"""Stripe payment gateway adapter.

Verifies the ``Stripe-Signature`` header with the endpoint's signing secret
and decodes the event envelope. Signature checks include Stripe's replay
window (``tolerance`` seconds).
"""

import stripe

from storefront.gateway.port import (
    InvalidWebhookSignature,
    MalformedWebhook,
    PaymentGateway,
    WebhookEvent,
    decode_json,
    webhook_event_from_dict,
)


class StripeGateway(PaymentGateway):
    """Production gateway backed by stripe-python."""

    def __init__(self, webhook_secret: str, tolerance: int = 300) -> None:
        self.webhook_secret = webhook_secret
        self.tolerance = tolerance

    def parse_webhook(self, payload: bytes, signature: str) -> WebhookEvent:
        if not self.webhook_secret:
            raise InvalidWebhookSignature("Stripe webhook secret is not configured")

        try:
            stripe.Webhook.construct_event(payload, signature, self.webhook_secret, tolerance=self.tolerance)
        except stripe.SignatureVerificationError as exc:
            raise InvalidWebhookSignature(str(exc)) from exc
        except ValueError as exc:
            raise MalformedWebhook(str(exc)) from exc

        return webhook_event_from_dict(decode_json(payload))
