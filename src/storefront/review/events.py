"""Domain events for the Review aggregate.

Review events feed the sentiment, general and per-product counters. Each
event carries enough of the review's state (rating, sentiment) for a
projector to adjust a counter without loading the review.
"""

from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Review")
class ReviewSubmitted:
    """A shopper reviewed a product."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    rating = Integer(required=True)
    title = String()
    content = Text(required=True)
    submitted_at = DateTime(required=True)


@storefront.event(part_of="Review")
class ReviewEdited:
    """The author changed the rating or the text of a review."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    rating = Integer(required=True)
    previous_rating = Integer(required=True)
    previous_sentiment = String()
    content_changed = Boolean(default=False)
    edited_at = DateTime(required=True)


@storefront.event(part_of="Review")
class ReviewSentimentAnalyzed:
    """Text analysis assigned a sentiment to a review."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    sentiment = String(required=True)
    previous_sentiment = String()
    key_phrases = Text()  # JSON array of strings
    analyzed_at = DateTime(required=True)


@storefront.event(part_of="Review")
class ReviewDeleted:
    """The author deleted a review."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    rating = Integer(required=True)
    sentiment = String()
    deleted_at = DateTime(required=True)
