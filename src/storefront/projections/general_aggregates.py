"""GeneralAggregates — store-wide totals for the dashboard.

A single record keyed ``global`` counting products, reviews, user profiles
and payments, plus the running rating sum behind the store-wide average.
"""

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.payment.events import PaymentRecordCreated
from storefront.payment.payment import PaymentRecord
from storefront.product.events import ProductCreated
from storefront.product.product import Product
from storefront.profile.events import UserProfileCreated
from storefront.profile.profile import UserProfile
from storefront.review.events import ReviewDeleted, ReviewEdited, ReviewSubmitted
from storefront.review.review import Review

GLOBAL_ID = "global"


@storefront.projection
class GeneralAggregates:
    aggregates_id = String(identifier=True, required=True, max_length=20)
    product_count = Integer(default=0)
    review_count = Integer(default=0)
    user_count = Integer(default=0)
    payment_count = Integer(default=0)
    rating_sum = Integer(default=0)
    average_rating = Float(default=0.0)
    updated_at = DateTime()


def _average(rating_sum, review_count):
    if not review_count:
        return 0.0
    return round(rating_sum / review_count, 2)


@storefront.projector(
    projector_for=GeneralAggregates,
    aggregates=[Product, Review, UserProfile, PaymentRecord],
)
class GeneralAggregatesProjector:
    def _get_or_create(self):
        repo = current_domain.repository_for(GeneralAggregates)
        try:
            return repo.get(GLOBAL_ID)
        except ObjectNotFoundError:
            return GeneralAggregates(aggregates_id=GLOBAL_ID)

    def _save(self, record, timestamp):
        record.average_rating = _average(record.rating_sum or 0, record.review_count or 0)
        record.updated_at = timestamp
        current_domain.repository_for(GeneralAggregates).add(record)

    @on(ProductCreated)
    def on_product_created(self, event):
        record = self._get_or_create()
        record.product_count = (record.product_count or 0) + 1
        self._save(record, event.created_at)

    @on(UserProfileCreated)
    def on_user_profile_created(self, event):
        record = self._get_or_create()
        record.user_count = (record.user_count or 0) + 1
        self._save(record, event.created_at)

    @on(PaymentRecordCreated)
    def on_payment_record_created(self, event):
        record = self._get_or_create()
        record.payment_count = (record.payment_count or 0) + 1
        self._save(record, event.created_at)

    @on(ReviewSubmitted)
    def on_review_submitted(self, event):
        record = self._get_or_create()
        record.review_count = (record.review_count or 0) + 1
        record.rating_sum = (record.rating_sum or 0) + event.rating
        self._save(record, event.submitted_at)

    @on(ReviewEdited)
    def on_review_edited(self, event):
        delta = event.rating - event.previous_rating
        if delta == 0:
            return
        record = self._get_or_create()
        record.rating_sum = max(0, (record.rating_sum or 0) + delta)
        self._save(record, event.edited_at)

    @on(ReviewDeleted)
    def on_review_deleted(self, event):
        record = self._get_or_create()
        record.review_count = max(0, (record.review_count or 0) - 1)
        record.rating_sum = max(0, (record.rating_sum or 0) - event.rating)
        if record.review_count == 0:
            record.rating_sum = 0
        self._save(record, event.deleted_at)
