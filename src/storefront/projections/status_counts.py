"""StatusCounts — number of records in each status, per entity type.

One record per entity type (``Product``, ``PaymentRecord``). Creation adds
one to the initial status; every status change moves one unit from the
previous status to the new one, so ``total`` tracks creations only.
"""

import json

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.payment.events import PaymentRecordCreated, PaymentStatusChanged
from storefront.payment.payment import PaymentRecord
from storefront.product.events import (
    ProductArchived,
    ProductCreated,
    ProductPublished,
    ProductRestored,
)
from storefront.product.product import Product

PRODUCT = "Product"
PAYMENT_RECORD = "PaymentRecord"
ENTITY_TYPES = (PRODUCT, PAYMENT_RECORD)


@storefront.projection
class StatusCounts:
    entity_type = String(identifier=True, required=True, max_length=50)
    distribution = Text(default="{}")  # JSON: {"Draft": 3, "Active": 10, ...}
    total = Integer(default=0)
    updated_at = DateTime()

    def counts(self):
        return json.loads(self.distribution or "{}")


def _record_for(entity_type):
    repo = current_domain.repository_for(StatusCounts)
    try:
        return repo.get(entity_type)
    except ObjectNotFoundError:
        return StatusCounts(entity_type=entity_type, distribution="{}", total=0)


def _apply(entity_type, timestamp, increment=None, decrement=None):
    record = _record_for(entity_type)
    distribution = record.counts()

    if decrement:
        distribution[decrement] = max(0, distribution.get(decrement, 0) - 1)
    if increment:
        distribution[increment] = distribution.get(increment, 0) + 1

    record.distribution = json.dumps(distribution)
    record.total = sum(distribution.values())
    record.updated_at = timestamp
    current_domain.repository_for(StatusCounts).add(record)


@storefront.projector(projector_for=StatusCounts, aggregates=[Product, PaymentRecord])
class StatusCountsProjector:
    @on(ProductCreated)
    def on_product_created(self, event):
        _apply(PRODUCT, event.created_at, increment=event.status)

    @on(ProductPublished)
    def on_product_published(self, event):
        _apply(PRODUCT, event.published_at, increment=event.status, decrement=event.previous_status)

    @on(ProductArchived)
    def on_product_archived(self, event):
        _apply(PRODUCT, event.archived_at, increment=event.status, decrement=event.previous_status)

    @on(ProductRestored)
    def on_product_restored(self, event):
        _apply(PRODUCT, event.restored_at, increment=event.status, decrement=event.previous_status)

    @on(PaymentRecordCreated)
    def on_payment_record_created(self, event):
        _apply(PAYMENT_RECORD, event.created_at, increment=event.status)

    @on(PaymentStatusChanged)
    def on_payment_status_changed(self, event):
        _apply(PAYMENT_RECORD, event.changed_at, increment=event.status, decrement=event.previous_status)
