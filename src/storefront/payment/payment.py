"""PaymentRecord aggregate — local mirror of a payment held by the provider.

Checkout and charging happen on the payment provider. The storefront keeps
one record per payment intent so sales can be counted and reported, updated
from the provider's webhooks. Webhooks may be delivered more than once and
out of order: a redelivered event and an event older than the last one
applied are both ignored. Timestamps only have second resolution, so an
event from the same second is ignored when it would move the payment back
to an earlier stage.

State Machine (driven by the provider, not enforced locally):
    PENDING → PROCESSING → SUCCEEDED → REFUNDED
    PENDING | PROCESSING → FAILED | CANCELED
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Integer, String, Text

from storefront.domain import storefront
from storefront.payment.events import PaymentRecordCreated, PaymentStatusChanged


class PaymentStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    CANCELED = "Canceled"
    REFUNDED = "Refunded"


STATUS_BY_EVENT_TYPE = {
    "payment_intent.created": PaymentStatus.PENDING,
    "payment_intent.processing": PaymentStatus.PROCESSING,
    "payment_intent.succeeded": PaymentStatus.SUCCEEDED,
    "payment_intent.payment_failed": PaymentStatus.FAILED,
    "payment_intent.canceled": PaymentStatus.CANCELED,
    "charge.refunded": PaymentStatus.REFUNDED,
}


# Lifecycle stage, used to order events the provider stamps with the same second
_STAGE = {
    PaymentStatus.PENDING.value: 0,
    PaymentStatus.PROCESSING.value: 1,
    PaymentStatus.SUCCEEDED.value: 2,
    PaymentStatus.FAILED.value: 2,
    PaymentStatus.CANCELED.value: 2,
    PaymentStatus.REFUNDED.value: 3,
}


def status_for_event_type(event_type):
    """Map a provider event type to a payment status, or None when irrelevant."""
    return STATUS_BY_EVENT_TYPE.get(event_type)


@storefront.aggregate
class PaymentRecord:
    """A payment as last reported by the provider."""

    payment_intent_id = String(identifier=True, max_length=255)
    amount = Integer(min_value=0)  # minor units (cents)
    currency = String(max_length=3)
    customer_email = String(max_length=254)
    product_ids = Text(default="[]")  # JSON array
    status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    failure_message = String(max_length=500)

    last_event_id = String(max_length=255)
    last_event_at = DateTime()
    synced_at = DateTime()

    @classmethod
    def open(
        cls,
        payment_intent_id,
        status,
        event_id,
        occurred_at,
        amount=None,
        currency=None,
        customer_email=None,
        product_ids=None,
        failure_message=None,
    ):
        now = datetime.now(UTC)
        record = cls(
            payment_intent_id=payment_intent_id,
            amount=amount,
            currency=currency.upper() if currency else None,
            customer_email=customer_email,
            product_ids=json.dumps(list(product_ids or [])),
            status=status,
            failure_message=failure_message,
            last_event_id=event_id,
            last_event_at=occurred_at,
            synced_at=now,
        )

        record.raise_(
            PaymentRecordCreated(
                payment_intent_id=payment_intent_id,
                amount=record.amount,
                currency=record.currency,
                customer_email=customer_email,
                product_ids=record.product_ids,
                status=status,
                created_at=now,
            )
        )
        return record

    def is_stale(self, event_id, occurred_at, status=None):
        if event_id == self.last_event_id:
            return True
        if not (self.last_event_at and occurred_at):
            return False
        if occurred_at < self.last_event_at:
            return True
        if occurred_at == self.last_event_at and status is not None:
            return _STAGE.get(status, 0) < _STAGE.get(self.status, 0)
        return False

    def apply_provider_event(
        self,
        event_id,
        occurred_at,
        status,
        amount=None,
        currency=None,
        customer_email=None,
        failure_message=None,
    ):
        """Fold a provider webhook into the record. Returns False when it was ignored."""
        if self.is_stale(event_id, occurred_at, status):
            return False

        now = datetime.now(UTC)
        previous_status = self.status

        # Refund events report the refunded amount, not the charge
        if amount is not None and status != PaymentStatus.REFUNDED.value:
            self.amount = amount
        if currency:
            self.currency = currency.upper()
        if customer_email:
            self.customer_email = customer_email
        if failure_message:
            self.failure_message = failure_message

        self.status = status
        self.last_event_id = event_id
        self.last_event_at = occurred_at
        self.synced_at = now

        if status != previous_status:
            self.raise_(
                PaymentStatusChanged(
                    payment_intent_id=self.payment_intent_id,
                    previous_status=previous_status,
                    status=status,
                    provider_event_id=event_id,
                    failure_message=failure_message,
                    changed_at=now,
                )
            )
        return True
