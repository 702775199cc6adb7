"""Review aggregate — a shopper's rating and opinion of a product.

Reviews are published on submission; the managed platform's moderation is
out of scope. Sentiment is filled in asynchronously by the analysis handler
once the text has been scored, and is cleared again whenever the text
changes so it can be re-scored.

State Machine:
    PUBLISHED → DELETED (terminal)
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text, ValueObject

from storefront.analysis.port import Sentiment
from storefront.domain import storefront
from storefront.review.events import (
    ReviewDeleted,
    ReviewEdited,
    ReviewSentimentAnalyzed,
    ReviewSubmitted,
)

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


class ReviewStatus(Enum):
    PUBLISHED = "Published"
    DELETED = "Deleted"


@storefront.value_object(part_of="Review")
class Rating:
    """A star rating from 1 to 5."""

    score = Integer(required=True)

    @invariant.post
    def score_must_be_in_range(self):
        if self.score is not None and (self.score < 1 or self.score > 5):
            raise ValidationError({"score": ["Rating must be between 1 and 5"]})


@storefront.aggregate
class Review:
    """A shopper's review of a product."""

    product_id = Identifier(required=True)
    owner_id = Identifier(required=True)

    rating = ValueObject(Rating, required=True)
    title = String(max_length=200)
    content = Text(required=True)

    status = String(choices=ReviewStatus, default=ReviewStatus.PUBLISHED.value)

    # Filled in by text analysis
    sentiment = String(choices=Sentiment)
    sentiment_scores = Text()  # JSON: {"Positive": 0.9, ...}
    key_phrases = Text()  # JSON array of entity texts
    analyzed_at = DateTime()

    is_edited = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def content_must_not_be_blank(self):
        if self.content is not None and not self.content.strip():
            raise ValidationError({"content": ["Review content cannot be empty"]})

    @classmethod
    def submit(cls, product_id, owner_id, rating, content, title=None):
        now = datetime.now(UTC)

        review = cls(
            product_id=product_id,
            owner_id=owner_id,
            rating=Rating(score=rating),
            title=title,
            content=content,
            status=ReviewStatus.PUBLISHED.value,
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                product_id=str(product_id),
                owner_id=str(owner_id),
                rating=rating,
                title=title,
                content=content,
                submitted_at=now,
            )
        )

        return review

    @property
    def is_deleted(self):
        return self.status == ReviewStatus.DELETED.value

    def _assert_owned_by(self, owner_id):
        if str(owner_id) != str(self.owner_id):
            raise ValidationError({"owner": ["Only the author can change this review"]})

    def _assert_not_deleted(self):
        if self.is_deleted:
            raise ValidationError({"status": ["Review has been deleted"]})

    def edit(self, owner_id, title=_UNSET, content=_UNSET, rating=_UNSET):
        """Edit the review. Changing the text clears the sentiment for re-analysis."""
        self._assert_owned_by(owner_id)
        self._assert_not_deleted()

        now = datetime.now(UTC)
        previous_rating = self.rating.score
        previous_sentiment = self.sentiment
        content_changed = content is not _UNSET and content != self.content

        with atomic_change(self):
            if title is not _UNSET:
                self.title = title
            if content is not _UNSET:
                self.content = content
            if rating is not _UNSET:
                self.rating = Rating(score=rating)
            if content_changed:
                self.sentiment = None
                self.sentiment_scores = None
                self.key_phrases = None
                self.analyzed_at = None

            self.is_edited = True
            self.updated_at = now

        self.raise_(
            ReviewEdited(
                review_id=str(self.id),
                product_id=str(self.product_id),
                rating=self.rating.score,
                previous_rating=previous_rating,
                previous_sentiment=previous_sentiment if content_changed else None,
                content_changed=content_changed,
                edited_at=now,
            )
        )

    def record_analysis(self, result):
        """Store the outcome of text analysis and announce the sentiment."""
        self._assert_not_deleted()

        now = datetime.now(UTC)
        previous_sentiment = self.sentiment
        key_phrases = json.dumps(result.entity_texts)

        self.sentiment = result.sentiment.value
        self.sentiment_scores = json.dumps(result.scores)
        self.key_phrases = key_phrases
        self.analyzed_at = now

        self.raise_(
            ReviewSentimentAnalyzed(
                review_id=str(self.id),
                product_id=str(self.product_id),
                sentiment=self.sentiment,
                previous_sentiment=previous_sentiment,
                key_phrases=key_phrases,
                analyzed_at=now,
            )
        )

    def delete(self, owner_id):
        self._assert_owned_by(owner_id)
        self._assert_not_deleted()

        now = datetime.now(UTC)
        self.status = ReviewStatus.DELETED.value
        self.updated_at = now

        self.raise_(
            ReviewDeleted(
                review_id=str(self.id),
                product_id=str(self.product_id),
                owner_id=str(self.owner_id),
                rating=self.rating.score,
                sentiment=self.sentiment,
                deleted_at=now,
            )
        )
