"""SentimentCounts — how many live reviews carry each sentiment.

A single record keyed ``global``. Changing a review's text takes it out of
its bucket, and re-analysis puts it into the new one, so ``total`` counts
only reviews that currently carry a sentiment.
"""

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Integer, String
from protean.utils.globals import current_domain

from storefront.analysis.port import Sentiment
from storefront.domain import storefront
from storefront.review.events import ReviewDeleted, ReviewEdited, ReviewSentimentAnalyzed
from storefront.review.review import Review

GLOBAL_ID = "global"

_BUCKETS = {
    Sentiment.POSITIVE.value: "positive",
    Sentiment.NEGATIVE.value: "negative",
    Sentiment.NEUTRAL.value: "neutral",
    Sentiment.MIXED.value: "mixed",
}


@storefront.projection
class SentimentCounts:
    counts_id = String(identifier=True, required=True, max_length=20)
    positive = Integer(default=0)
    negative = Integer(default=0)
    neutral = Integer(default=0)
    mixed = Integer(default=0)
    total = Integer(default=0)
    updated_at = DateTime()


def _shift(counts, sentiment, delta):
    bucket = _BUCKETS.get(sentiment)
    if bucket is None:
        return
    setattr(counts, bucket, max(0, (getattr(counts, bucket) or 0) + delta))


def _retotal(counts):
    counts.total = sum(getattr(counts, bucket) or 0 for bucket in _BUCKETS.values())


@storefront.projector(projector_for=SentimentCounts, aggregates=[Review])
class SentimentCountsProjector:
    def _get_or_create(self):
        repo = current_domain.repository_for(SentimentCounts)
        try:
            return repo.get(GLOBAL_ID)
        except ObjectNotFoundError:
            return SentimentCounts(counts_id=GLOBAL_ID)

    @on(ReviewSentimentAnalyzed)
    def on_sentiment_analyzed(self, event):
        counts = self._get_or_create()
        if event.previous_sentiment:
            _shift(counts, event.previous_sentiment, -1)
        _shift(counts, event.sentiment, +1)
        _retotal(counts)
        counts.updated_at = event.analyzed_at
        current_domain.repository_for(SentimentCounts).add(counts)

    @on(ReviewEdited)
    def on_review_edited(self, event):
        # Re-worded reviews leave their bucket until re-analysis scores them again
        if not (event.content_changed and event.previous_sentiment):
            return
        counts = self._get_or_create()
        _shift(counts, event.previous_sentiment, -1)
        _retotal(counts)
        counts.updated_at = event.edited_at
        current_domain.repository_for(SentimentCounts).add(counts)

    @on(ReviewDeleted)
    def on_review_deleted(self, event):
        if not event.sentiment:
            return
        counts = self._get_or_create()
        _shift(counts, event.sentiment, -1)
        _retotal(counts)
        counts.updated_at = event.deleted_at
        current_domain.repository_for(SentimentCounts).add(counts)
