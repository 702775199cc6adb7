"""Integration tests for the SentimentCounts projection."""

from protean import current_domain
from storefront.analysis import set_analyzer
from storefront.analysis.port import TextAnalysisError, TextAnalyzer
from storefront.projections.sentiment_counts import GLOBAL_ID, SentimentCounts
from storefront.review.editing import EditReview
from storefront.review.removal import DeleteReview
from tests.helpers import active_product, submit_review


def _counts():
    return current_domain.repository_for(SentimentCounts).get(GLOBAL_ID)


class _Unavailable(TextAnalyzer):
    def analyze(self, text, language_code="en"):
        raise TextAnalysisError("down")


class TestSentimentCounts:
    def test_each_analyzed_review_is_counted(self):
        product_id = active_product()
        submit_review(product_id, owner_id="u1", title=None, content="Great shoes")
        submit_review(product_id, owner_id="u2", title=None, content="Terrible shoes")
        submit_review(product_id, owner_id="u3", title=None, content="Shoes")
        submit_review(product_id, owner_id="u4", title=None, content="Great fit but awful laces")

        counts = _counts()
        assert (counts.positive, counts.negative, counts.neutral, counts.mixed) == (1, 1, 1, 1)
        assert counts.total == 4

    def test_reanalysis_moves_between_buckets(self):
        product_id = active_product()
        review_id = submit_review(product_id, title=None, content="Great shoes")

        current_domain.process(
            EditReview(review_id=review_id, owner_id="user-001", content="Worst shoes I own"),
            asynchronous=False,
        )

        counts = _counts()
        assert counts.positive == 0
        assert counts.negative == 1
        assert counts.total == 1

    def test_deleting_analyzed_review_decrements(self):
        product_id = active_product()
        review_id = submit_review(product_id, title=None, content="Great shoes")
        submit_review(product_id, owner_id="user-002", title=None, content="Great laces")

        current_domain.process(DeleteReview(review_id=review_id, owner_id="user-001"), asynchronous=False)

        counts = _counts()
        assert counts.positive == 1
        assert counts.total == 1

    def test_unanalyzed_review_is_not_counted(self):
        set_analyzer(_Unavailable())
        product_id = active_product()
        review_id = submit_review(product_id, title=None, content="Great shoes")
        current_domain.process(DeleteReview(review_id=review_id, owner_id="user-001"), asynchronous=False)

        records = current_domain.repository_for(SentimentCounts)._dao.query.all().items
        assert records == []

    def test_reworded_then_deleted_review_leaves_no_count(self):
        product_id = active_product()
        review_id = submit_review(product_id, title=None, content="Great shoes")

        current_domain.process(
            EditReview(review_id=review_id, owner_id="user-001", content="Worst shoes I own"),
            asynchronous=False,
        )
        current_domain.process(DeleteReview(review_id=review_id, owner_id="user-001"), asynchronous=False)

        counts = _counts()
        assert (counts.positive, counts.negative, counts.neutral, counts.mixed) == (0, 0, 0, 0)
        assert counts.total == 0

    def test_rewording_without_reanalysis_takes_review_out_of_bucket(self):
        product_id = active_product()
        review_id = submit_review(product_id, title=None, content="Great shoes")

        set_analyzer(_Unavailable())
        current_domain.process(
            EditReview(review_id=review_id, owner_id="user-001", content="Worst shoes I own"),
            asynchronous=False,
        )

        counts = _counts()
        assert counts.positive == 0
        assert counts.negative == 0
        assert counts.total == 0

    def test_title_edit_keeps_bucket(self):
        product_id = active_product()
        review_id = submit_review(product_id, title=None, content="Great shoes")

        current_domain.process(
            EditReview(review_id=review_id, owner_id="user-001", title="Still my favourite"),
            asynchronous=False,
        )

        counts = _counts()
        assert counts.positive == 1
        assert counts.total == 1
