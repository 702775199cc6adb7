"""Tests for the PaymentRecord aggregate and provider event mapping."""

import json
from datetime import UTC, datetime, timedelta

import pytest
from storefront.payment.events import PaymentRecordCreated, PaymentStatusChanged
from storefront.payment.payment import PaymentRecord, PaymentStatus, status_for_event_type

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _record(**overrides):
    defaults = {
        "payment_intent_id": "pi_001",
        "status": PaymentStatus.PENDING.value,
        "event_id": "evt_001",
        "occurred_at": T0,
        "amount": 8999,
        "currency": "usd",
        "product_ids": ["prod-001"],
    }
    defaults.update(overrides)
    return PaymentRecord.open(**defaults)


class TestStatusMapping:
    @pytest.mark.parametrize(
        "event_type,status",
        [
            ("payment_intent.created", PaymentStatus.PENDING),
            ("payment_intent.processing", PaymentStatus.PROCESSING),
            ("payment_intent.succeeded", PaymentStatus.SUCCEEDED),
            ("payment_intent.payment_failed", PaymentStatus.FAILED),
            ("payment_intent.canceled", PaymentStatus.CANCELED),
            ("charge.refunded", PaymentStatus.REFUNDED),
        ],
    )
    def test_known_event_types(self, event_type, status):
        assert status_for_event_type(event_type) is status

    def test_unknown_event_type_is_ignored(self):
        assert status_for_event_type("customer.created") is None


class TestOpen:
    def test_open_records_provider_fields(self):
        record = _record()
        assert record.payment_intent_id == "pi_001"
        assert record.currency == "USD"
        assert json.loads(record.product_ids) == ["prod-001"]
        assert record.last_event_id == "evt_001"

    def test_open_raises_created_event(self):
        record = _record()
        event = record._events[0]
        assert isinstance(event, PaymentRecordCreated)
        assert event.status == "Pending"
        assert event.amount == 8999


class TestApplyProviderEvent:
    def test_newer_event_moves_status(self):
        record = _record()
        record._events.clear()

        applied = record.apply_provider_event("evt_002", T0 + timedelta(seconds=5), PaymentStatus.SUCCEEDED.value)

        assert applied is True
        assert record.status == "Succeeded"
        event = record._events[0]
        assert isinstance(event, PaymentStatusChanged)
        assert event.previous_status == "Pending"
        assert event.provider_event_id == "evt_002"

    def test_duplicate_event_is_ignored(self):
        record = _record()
        record._events.clear()

        applied = record.apply_provider_event("evt_001", T0 + timedelta(seconds=5), PaymentStatus.SUCCEEDED.value)

        assert applied is False
        assert record.status == "Pending"
        assert record._events == []

    def test_out_of_order_event_is_ignored(self):
        record = _record()
        record.apply_provider_event("evt_003", T0 + timedelta(seconds=10), PaymentStatus.SUCCEEDED.value)
        record._events.clear()

        applied = record.apply_provider_event("evt_002", T0 + timedelta(seconds=5), PaymentStatus.PROCESSING.value)

        assert applied is False
        assert record.status == "Succeeded"

    def test_same_status_updates_without_event(self):
        record = _record()
        record._events.clear()

        record.apply_provider_event("evt_002", T0 + timedelta(seconds=1), PaymentStatus.PENDING.value, amount=9999)

        assert record.amount == 9999
        assert record.last_event_id == "evt_002"
        assert record._events == []

    def test_refund_keeps_charged_amount(self):
        record = _record()
        record.apply_provider_event("evt_002", T0 + timedelta(seconds=1), PaymentStatus.SUCCEEDED.value)
        record.apply_provider_event("evt_003", T0 + timedelta(seconds=2), PaymentStatus.REFUNDED.value, amount=1000)
        assert record.amount == 8999
        assert record.status == "Refunded"

    def test_failure_message_recorded(self):
        record = _record()
        record.apply_provider_event(
            "evt_002",
            T0 + timedelta(seconds=1),
            PaymentStatus.FAILED.value,
            failure_message="Your card was declined.",
        )
        assert record.failure_message == "Your card was declined."
        assert record._events[-1].failure_message == "Your card was declined."

    def test_same_second_event_cannot_move_back_a_stage(self):
        record = _record()
        record.apply_provider_event("evt_002", T0, PaymentStatus.SUCCEEDED.value)
        record._events.clear()

        applied = record.apply_provider_event("evt_003", T0, PaymentStatus.PENDING.value)

        assert applied is False
        assert record.status == "Succeeded"
        assert record._events == []

    def test_same_second_event_can_move_forward(self):
        record = _record()

        applied = record.apply_provider_event("evt_002", T0, PaymentStatus.PROCESSING.value)

        assert applied is True
        assert record.status == "Processing"
