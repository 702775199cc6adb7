"""Domain events for the PaymentRecord aggregate."""

from protean.fields import DateTime, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="PaymentRecord")
class PaymentRecordCreated:
    """A payment was seen for the first time in a provider webhook."""

    __version__ = 1

    payment_intent_id: String(required=True)
    amount: Integer()
    currency: String(max_length=3)
    customer_email: String(max_length=254)
    product_ids: Text()
    status: String(required=True)
    created_at: DateTime(required=True)


@storefront.event(part_of="PaymentRecord")
class PaymentStatusChanged:
    """The provider reported the payment moving to a new status."""

    __version__ = 1

    payment_intent_id: String(required=True)
    previous_status: String(required=True)
    status: String(required=True)
    provider_event_id: String(required=True)
    failure_message: String(max_length=500)
    changed_at: DateTime(required=True)
