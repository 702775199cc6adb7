"""SyncPaymentRecord — upsert a payment record from a provider webhook."""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.payment.payment import PaymentRecord

logger = structlog.get_logger(__name__)


@storefront.command(part_of="PaymentRecord")
class SyncPaymentRecord:
    payment_intent_id = String(required=True, max_length=255)
    provider_event_id = String(required=True, max_length=255)
    occurred_at = DateTime(required=True)
    status = String(required=True, max_length=50)
    amount = Integer()
    currency = String(max_length=3)
    customer_email = String(max_length=254)
    product_ids = Text()  # JSON array
    failure_message = String(max_length=500)


@storefront.command_handler(part_of=PaymentRecord)
class SyncPaymentRecordHandler:
    @handle(SyncPaymentRecord)
    def sync_payment_record(self, command):
        repo = current_domain.repository_for(PaymentRecord)
        try:
            record = repo.get(command.payment_intent_id)
        except ObjectNotFoundError:
            record = PaymentRecord.open(
                payment_intent_id=command.payment_intent_id,
                status=command.status,
                event_id=command.provider_event_id,
                occurred_at=command.occurred_at,
                amount=command.amount,
                currency=command.currency,
                customer_email=command.customer_email,
                product_ids=json.loads(command.product_ids or "[]"),
                failure_message=command.failure_message,
            )
            repo.add(record)
            logger.info(
                "payment.recorded",
                payment_intent_id=command.payment_intent_id,
                status=command.status,
            )
            return "created"

        applied = record.apply_provider_event(
            event_id=command.provider_event_id,
            occurred_at=command.occurred_at,
            status=command.status,
            amount=command.amount,
            currency=command.currency,
            customer_email=command.customer_email,
            failure_message=command.failure_message,
        )
        if not applied:
            logger.info(
                "payment.event_skipped",
                payment_intent_id=command.payment_intent_id,
                provider_event_id=command.provider_event_id,
            )
            return "skipped"

        repo.add(record)
        logger.info(
            "payment.synced",
            payment_intent_id=command.payment_intent_id,
            status=record.status,
        )
        return "updated"
