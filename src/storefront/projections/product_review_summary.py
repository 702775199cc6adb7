"""ProductReviewSummary — per-product review statistics for product pages."""

import json

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, Identifier, Integer, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.review.events import (
    ReviewDeleted,
    ReviewEdited,
    ReviewSentimentAnalyzed,
    ReviewSubmitted,
)
from storefront.review.review import Review


@storefront.projection
class ProductReviewSummary:
    product_id = Identifier(identifier=True, required=True)
    review_count = Integer(default=0)
    average_rating = Float(default=0.0)
    rating_distribution = Text()  # JSON: {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0}
    sentiment_distribution = Text()  # JSON: {"Positive": 0, "Negative": 0, ...}
    updated_at = DateTime()


def _default_distribution():
    return json.dumps({"1": 0, "2": 0, "3": 0, "4": 0, "5": 0})


def _recalculate_average(distribution):
    total = sum(distribution.values())
    if total == 0:
        return 0.0
    weighted_sum = sum(int(rating) * count for rating, count in distribution.items())
    return round(weighted_sum / total, 2)


def _bump(distribution, key, delta):
    if key is None:
        return
    distribution[key] = max(0, distribution.get(key, 0) + delta)


@storefront.projector(projector_for=ProductReviewSummary, aggregates=[Review])
class ProductReviewSummaryProjector:
    def _get_or_create(self, product_id):
        repo = current_domain.repository_for(ProductReviewSummary)
        try:
            return repo.get(str(product_id))
        except ObjectNotFoundError:
            return ProductReviewSummary(
                product_id=str(product_id),
                review_count=0,
                rating_distribution=_default_distribution(),
                sentiment_distribution="{}",
            )

    def _save_ratings(self, summary, ratings, timestamp):
        summary.rating_distribution = json.dumps(ratings)
        summary.review_count = sum(ratings.values())
        summary.average_rating = _recalculate_average(ratings)
        summary.updated_at = timestamp
        current_domain.repository_for(ProductReviewSummary).add(summary)

    @on(ReviewSubmitted)
    def on_review_submitted(self, event):
        summary = self._get_or_create(event.product_id)
        ratings = json.loads(summary.rating_distribution or _default_distribution())
        _bump(ratings, str(event.rating), +1)
        self._save_ratings(summary, ratings, event.submitted_at)

    @on(ReviewEdited)
    def on_review_edited(self, event):
        rating_changed = event.rating != event.previous_rating
        sentiment_cleared = bool(event.content_changed and event.previous_sentiment)
        if not (rating_changed or sentiment_cleared):
            return

        summary = self._get_or_create(event.product_id)
        if sentiment_cleared:
            sentiments = json.loads(summary.sentiment_distribution or "{}")
            _bump(sentiments, event.previous_sentiment, -1)
            summary.sentiment_distribution = json.dumps(sentiments)

        ratings = json.loads(summary.rating_distribution or _default_distribution())
        if rating_changed:
            _bump(ratings, str(event.previous_rating), -1)
            _bump(ratings, str(event.rating), +1)
        self._save_ratings(summary, ratings, event.edited_at)

    @on(ReviewSentimentAnalyzed)
    def on_sentiment_analyzed(self, event):
        summary = self._get_or_create(event.product_id)
        sentiments = json.loads(summary.sentiment_distribution or "{}")
        _bump(sentiments, event.previous_sentiment, -1)
        _bump(sentiments, event.sentiment, +1)
        summary.sentiment_distribution = json.dumps(sentiments)
        summary.updated_at = event.analyzed_at
        current_domain.repository_for(ProductReviewSummary).add(summary)

    @on(ReviewDeleted)
    def on_review_deleted(self, event):
        try:
            summary = current_domain.repository_for(ProductReviewSummary).get(str(event.product_id))
        except ObjectNotFoundError:
            return

        sentiments = json.loads(summary.sentiment_distribution or "{}")
        _bump(sentiments, event.sentiment, -1)
        summary.sentiment_distribution = json.dumps(sentiments)

        ratings = json.loads(summary.rating_distribution or _default_distribution())
        _bump(ratings, str(event.rating), -1)
        self._save_ratings(summary, ratings, event.deleted_at)
