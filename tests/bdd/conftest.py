"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import parsers, then
from storefront.product.events import (
    ProductArchived,
    ProductCreated,
    ProductDetailsUpdated,
    ProductPublished,
    ProductRestored,
)

_PRODUCT_EVENT_CLASSES = {
    "ProductCreated": ProductCreated,
    "ProductDetailsUpdated": ProductDetailsUpdated,
    "ProductPublished": ProductPublished,
    "ProductArchived": ProductArchived,
    "ProductRestored": ProductRestored,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@then("the product action fails with a validation error")
def product_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse('the product status is "{status}"'))
def product_status_is(product, status):
    assert product.status == status


@then(parsers.cfparse("a {event_type} event is raised"))
def product_event_raised(product, event_type):
    event_cls = _PRODUCT_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in product._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in product._events]}"
