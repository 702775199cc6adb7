"""Fake payment gateway for development and testing.

Accepts any Stripe-shaped JSON body signed with the literal signature
``test-signature``, and records every webhook it was asked to parse.
"""

from storefront.gateway.port import (
    InvalidWebhookSignature,
    PaymentGateway,
    WebhookEvent,
    decode_json,
    webhook_event_from_dict,
)

TEST_SIGNATURE = "test-signature"


class FakeGateway(PaymentGateway):
    def __init__(self) -> None:
        self.calls: list[dict] = []

    def parse_webhook(self, payload: bytes, signature: str) -> WebhookEvent:
        self.calls.append({"method": "parse_webhook", "signature": signature})
        if signature != TEST_SIGNATURE:
            raise InvalidWebhookSignature("Signature mismatch")
        return webhook_event_from_dict(decode_json(payload))
