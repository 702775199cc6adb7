"""Tests for the Review aggregate: submission, editing, analysis and deletion."""

import json

import pytest
from protean.exceptions import ValidationError
from storefront.analysis.port import AnalysisResult, DetectedEntity, Sentiment
from storefront.review.events import (
    ReviewDeleted,
    ReviewEdited,
    ReviewSentimentAnalyzed,
    ReviewSubmitted,
)
from storefront.review.review import Rating, Review, ReviewStatus


def _review(**overrides):
    defaults = {
        "product_id": "prod-001",
        "owner_id": "user-001",
        "rating": 4,
        "title": "Solid pair",
        "content": "Comfortable from day one.",
    }
    defaults.update(overrides)
    review = Review.submit(**defaults)
    return review


def _result(sentiment=Sentiment.POSITIVE, entities=()):
    return AnalysisResult(sentiment=sentiment, scores={sentiment.value: 0.9}, entities=entities)


class TestRating:
    def test_valid_rating(self):
        assert Rating(score=5).score == 5

    @pytest.mark.parametrize("score", [0, 6])
    def test_out_of_range_rating_rejected(self, score):
        with pytest.raises(ValidationError):
            Rating(score=score)


class TestReviewSubmission:
    def test_submit_publishes_review(self):
        review = _review()
        assert review.status == ReviewStatus.PUBLISHED.value
        assert review.rating.score == 4
        assert review.sentiment is None
        assert review.is_edited is False

    def test_submit_raises_event(self):
        review = _review()
        event = review._events[0]
        assert isinstance(event, ReviewSubmitted)
        assert event.review_id == str(review.id)
        assert event.rating == 4
        assert event.content == "Comfortable from day one."

    def test_blank_content_rejected(self):
        with pytest.raises(ValidationError):
            _review(content="   ")


class TestReviewEditing:
    def test_only_author_can_edit(self):
        review = _review()
        with pytest.raises(ValidationError) as exc:
            review.edit(owner_id="someone-else", rating=1)
        assert "owner" in exc.value.messages

    def test_rating_change_keeps_sentiment(self):
        review = _review()
        review.record_analysis(_result())
        review._events.clear()

        review.edit(owner_id="user-001", rating=2)

        assert review.sentiment == "Positive"
        event = review._events[0]
        assert isinstance(event, ReviewEdited)
        assert event.previous_rating == 4
        assert event.rating == 2
        assert event.content_changed is False
        assert event.previous_sentiment is None

    def test_content_change_clears_sentiment(self):
        review = _review()
        review.record_analysis(_result())
        review._events.clear()

        review.edit(owner_id="user-001", content="Fell apart after a month.")

        assert review.sentiment is None
        assert review.key_phrases is None
        assert review.is_edited is True
        event = review._events[0]
        assert event.content_changed is True
        assert event.previous_sentiment == "Positive"

    def test_same_content_is_not_a_change(self):
        review = _review()
        review.edit(owner_id="user-001", content="Comfortable from day one.")
        assert review._events[-1].content_changed is False

    def test_deleted_review_cannot_be_edited(self):
        review = _review()
        review.delete(owner_id="user-001")
        with pytest.raises(ValidationError):
            review.edit(owner_id="user-001", rating=5)


class TestReviewAnalysis:
    def test_record_analysis_stores_result(self):
        review = _review()
        entities = (
            DetectedEntity(text="Acme", entity_type="ORGANIZATION", score=0.99),
            DetectedEntity(text="Acme", entity_type="ORGANIZATION", score=0.95),
        )
        review.record_analysis(_result(entities=entities))

        assert review.sentiment == "Positive"
        assert json.loads(review.key_phrases) == ["Acme"]
        assert json.loads(review.sentiment_scores) == {"Positive": 0.9}
        assert review.analyzed_at is not None

    def test_reanalysis_reports_previous_sentiment(self):
        review = _review()
        review.record_analysis(_result(Sentiment.NEUTRAL))
        review.record_analysis(_result(Sentiment.NEGATIVE))

        event = review._events[-1]
        assert isinstance(event, ReviewSentimentAnalyzed)
        assert event.previous_sentiment == "Neutral"
        assert event.sentiment == "Negative"


class TestReviewDeletion:
    def test_delete_marks_review_deleted(self):
        review = _review()
        review.record_analysis(_result(Sentiment.MIXED))
        review._events.clear()

        review.delete(owner_id="user-001")

        assert review.is_deleted
        event = review._events[0]
        assert isinstance(event, ReviewDeleted)
        assert event.rating == 4
        assert event.sentiment == "Mixed"

    def test_only_author_can_delete(self):
        review = _review()
        with pytest.raises(ValidationError):
            review.delete(owner_id="user-002")

    def test_cannot_delete_twice(self):
        review = _review()
        review.delete(owner_id="user-001")
        with pytest.raises(ValidationError):
            review.delete(owner_id="user-001")
