"""Payment gateway port (abstract interface).

The storefront never charges cards itself; checkout happens on the payment
provider. What the storefront does own is a local record of each payment,
kept in sync from the provider's webhooks. Adapters verify and decode those
webhooks into a provider-neutral WebhookEvent.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import UTC, datetime


class InvalidWebhookSignature(Exception):
    """The webhook did not come from the payment provider."""


class MalformedWebhook(Exception):
    """The webhook body could not be decoded into a payment event."""


@dataclass(frozen=True)
class WebhookEvent:
    """A payment-related notification from the provider."""

    event_id: str
    event_type: str
    created: datetime
    payment_intent_id: str | None = None
    amount: int | None = None
    currency: str | None = None
    customer_email: str | None = None
    product_ids: tuple[str, ...] = ()
    failure_message: str | None = None


def _product_ids(metadata):
    if not isinstance(metadata, dict):
        return ()
    raw = metadata.get("product_ids") or ""
    return tuple(pid.strip() for pid in raw.split(",") if pid.strip())


def webhook_event_from_dict(data: dict) -> WebhookEvent:
    """Decode a provider event envelope (``{"id", "type", "created", "data": {"object"}}``).

    Payment intents carry their own id; charges point at theirs through
    ``payment_intent``, and refunds report the refunded amount.
    """
    try:
        event_id = data["id"]
        event_type = data["type"]
        created = datetime.fromtimestamp(int(data["created"]), tz=UTC)
        obj = data["data"]["object"]
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedWebhook(f"Missing webhook field: {exc}") from exc
    if not isinstance(obj, dict):
        raise MalformedWebhook("Webhook data.object must be an object")

    if obj.get("object") == "charge":
        payment_intent_id = obj.get("payment_intent")
        amount = obj.get("amount_refunded") if event_type == "charge.refunded" else obj.get("amount")
        billing = obj.get("billing_details") or {}
        email = obj.get("receipt_email") or billing.get("email")
        failure = obj.get("failure_message")
    else:
        payment_intent_id = obj.get("id")
        amount = obj.get("amount")
        email = obj.get("receipt_email")
        failure = (obj.get("last_payment_error") or {}).get("message")

    return WebhookEvent(
        event_id=event_id,
        event_type=event_type,
        created=created,
        payment_intent_id=payment_intent_id,
        amount=int(amount) if amount is not None else None,
        currency=obj.get("currency"),
        customer_email=email,
        product_ids=_product_ids(obj.get("metadata")),
        failure_message=failure,
    )


def decode_json(payload: bytes | str) -> dict:
    try:
        return json.loads(payload)
    except (TypeError, ValueError) as exc:
        raise MalformedWebhook("Webhook body is not valid JSON") from exc


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def parse_webhook(self, payload: bytes, signature: str) -> WebhookEvent:
        """Verify that ``payload`` came from the provider and decode it."""
        ...
