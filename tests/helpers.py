"""Command shortcuts shared by application, integration and BDD tests."""

import json
from datetime import UTC, datetime

from protean import current_domain
from storefront.payment.sync import SyncPaymentRecord
from storefront.product.creation import CreateProduct
from storefront.product.lifecycle import ArchiveProduct, PublishProduct
from storefront.profile.management import CreateUserProfile
from storefront.review.submission import SubmitReview


def create_product(**overrides):
    defaults = {
        "name": "Trail Running Shoes",
        "price": 89.99,
        "currency": "USD",
        "stock": 25,
        "owner_id": "seller-001",
    }
    defaults.update(overrides)
    return current_domain.process(CreateProduct(**defaults), asynchronous=False)


def publish_product(product_id):
    current_domain.process(PublishProduct(product_id=product_id), asynchronous=False)


def archive_product(product_id):
    current_domain.process(ArchiveProduct(product_id=product_id), asynchronous=False)


def active_product(**overrides):
    product_id = create_product(**overrides)
    publish_product(product_id)
    return product_id


def submit_review(product_id, **overrides):
    defaults = {
        "product_id": product_id,
        "owner_id": "user-001",
        "rating": 4,
        "title": "Solid pair",
        "content": "Comfortable from day one.",
    }
    defaults.update(overrides)
    return current_domain.process(SubmitReview(**defaults), asynchronous=False)


def create_profile(**overrides):
    defaults = {
        "owner_id": "user-001",
        "username": "trailrunner",
        "email": "runner@example.com",
    }
    defaults.update(overrides)
    return current_domain.process(CreateUserProfile(**defaults), asynchronous=False)


def sync_payment(payment_intent_id="pi_001", event_id="evt_001", status="Pending", occurred_at=None, **overrides):
    defaults = {
        "payment_intent_id": payment_intent_id,
        "provider_event_id": event_id,
        "occurred_at": occurred_at or datetime.now(UTC),
        "status": status,
        "amount": 8999,
        "currency": "usd",
        "customer_email": "runner@example.com",
        "product_ids": json.dumps(["prod-001"]),
    }
    defaults.update(overrides)
    return current_domain.process(SyncPaymentRecord(**defaults), asynchronous=False)


def stripe_event(event_type, payment_intent_id="pi_001", event_id="evt_001", created=1_700_000_000, **fields):
    """A Stripe-shaped webhook envelope for a payment intent."""
    obj = {
        "id": payment_intent_id,
        "object": "payment_intent",
        "amount": 8999,
        "currency": "usd",
        "receipt_email": "runner@example.com",
        "metadata": {"product_ids": "prod-001,prod-002"},
    }
    obj.update(fields)
    return {"id": event_id, "object": "event", "type": event_type, "created": created, "data": {"object": obj}}


def stripe_refund_event(payment_intent_id="pi_001", event_id="evt_refund", created=1_700_000_500, amount_refunded=8999):
    charge = {
        "id": "ch_001",
        "object": "charge",
        "payment_intent": payment_intent_id,
        "amount": 8999,
        "amount_refunded": amount_refunded,
        "currency": "usd",
        "billing_details": {"email": "runner@example.com"},
        "metadata": {},
    }
    return {"id": event_id, "object": "event", "type": "charge.refunded", "created": created, "data": {"object": charge}}
