"""Review text analysis — reacts to new and re-worded reviews.

Scores the review text through the configured text analyzer and records the
result on the review, which in turn raises ReviewSentimentAnalyzed for the
sentiment counters. A provider failure leaves the review un-analyzed; the
review itself is already committed and stays visible.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.analysis import get_analyzer
from storefront.analysis.port import TextAnalysisError
from storefront.domain import storefront
from storefront.review.events import ReviewEdited, ReviewSubmitted
from storefront.review.review import Review

logger = structlog.get_logger(__name__)


def _text_for(review):
    if review.title:
        return f"{review.title}. {review.content}"
    return review.content


@storefront.event_handler(part_of=Review)
class ReviewAnalysisHandler:
    """Runs sentiment and entity detection on review text."""

    @handle(ReviewSubmitted)
    def on_review_submitted(self, event: ReviewSubmitted) -> None:
        self._analyze(event.review_id)

    @handle(ReviewEdited)
    def on_review_edited(self, event: ReviewEdited) -> None:
        if not event.content_changed:
            return
        self._analyze(event.review_id)

    def _analyze(self, review_id):
        repo = current_domain.repository_for(Review)
        try:
            review = repo.get(review_id)
        except ObjectNotFoundError:
            logger.warning("review.analysis_skipped", review_id=str(review_id), reason="not_found")
            return

        if review.is_deleted:
            return

        try:
            result = get_analyzer().analyze(_text_for(review))
        except TextAnalysisError as exc:
            logger.warning("review.analysis_failed", review_id=str(review_id), error=str(exc))
            return

        review.record_analysis(result)
        repo.add(review)
        logger.info(
            "review.analyzed",
            review_id=str(review_id),
            sentiment=review.sentiment,
            entity_count=len(result.entities),
        )
