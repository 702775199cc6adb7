"""BDD tests for review sentiment scoring and counting."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when
from storefront.projections.sentiment_counts import GLOBAL_ID, SentimentCounts
from storefront.review.editing import EditReview
from storefront.review.removal import DeleteReview
from storefront.review.review import Review
from tests.helpers import active_product, submit_review

scenarios("features/review_sentiment.feature")


@given("a product on sale", target_fixture="product_id")
def product_on_sale():
    return active_product()


@pytest.fixture()
def review_ids():
    return []


@given(parsers.cfparse('"{owner_id}" reviewed the product with "{content}"'))
def existing_review(product_id, review_ids, owner_id, content):
    review_ids.append(submit_review(product_id, owner_id=owner_id, title=None, content=content))


@when(parsers.cfparse('"{owner_id}" reviews the product with "{content}"'))
def new_review(product_id, review_ids, owner_id, content):
    review_ids.append(submit_review(product_id, owner_id=owner_id, title=None, content=content))


@when(parsers.cfparse('the author rewrites the review as "{content}"'))
def rewrite_review(review_ids, content):
    current_domain.process(
        EditReview(review_id=review_ids[0], owner_id="user-001", content=content),
        asynchronous=False,
    )


@when("the first review is deleted by its author")
def delete_first_review(review_ids):
    current_domain.process(DeleteReview(review_id=review_ids[0], owner_id="user-001"), asynchronous=False)


@then(parsers.cfparse('the review sentiment is "{sentiment}"'))
def review_sentiment_is(review_ids, sentiment):
    review = current_domain.repository_for(Review).get(review_ids[0])
    assert review.sentiment == sentiment


@then(
    parsers.cfparse(
        "the sentiment counts are {positive:d} positive, {negative:d} negative, "
        "{neutral:d} neutral and {mixed:d} mixed"
    )
)
def sentiment_counts_are(positive, negative, neutral, mixed):
    counts = current_domain.repository_for(SentimentCounts).get(GLOBAL_ID)
    assert (counts.positive, counts.negative, counts.neutral, counts.mixed) == (positive, negative, neutral, mixed)
    assert counts.total == positive + negative + neutral + mixed
