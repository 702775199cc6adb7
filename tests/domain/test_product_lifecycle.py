"""Tests for the Product status state machine."""

import pytest
from protean.exceptions import ValidationError
from storefront.product.events import ProductArchived, ProductPublished, ProductRestored
from storefront.product.product import Product, ProductStatus


@pytest.fixture()
def product():
    product = Product.create(name="Camp Stove", price=49.5)
    product._events.clear()
    return product


class TestPublish:
    def test_draft_can_be_published(self, product):
        product.publish()
        assert product.status == ProductStatus.ACTIVE.value

    def test_publish_event_carries_previous_status(self, product):
        product.publish()
        event = product._events[-1]
        assert isinstance(event, ProductPublished)
        assert event.previous_status == "Draft"
        assert event.status == "Active"

    def test_active_cannot_be_published_again(self, product):
        product.publish()
        with pytest.raises(ValidationError):
            product.publish()

    def test_archived_must_be_restored_not_published(self, product):
        product.archive()
        with pytest.raises(ValidationError) as exc:
            product.publish()
        assert "restored" in str(exc.value)
        assert product.status == ProductStatus.ARCHIVED.value


class TestArchive:
    def test_draft_can_be_archived(self, product):
        product.archive()
        assert product.is_archived

    def test_active_can_be_archived(self, product):
        product.publish()
        product.archive()
        event = product._events[-1]
        assert isinstance(event, ProductArchived)
        assert event.previous_status == "Active"

    def test_archived_cannot_be_archived_again(self, product):
        product.archive()
        with pytest.raises(ValidationError):
            product.archive()


class TestRestore:
    def test_restore_makes_product_active(self, product):
        product.archive()
        product.restore()
        assert product.status == ProductStatus.ACTIVE.value
        event = product._events[-1]
        assert isinstance(event, ProductRestored)
        assert event.previous_status == "Archived"
        assert event.status == "Active"

    def test_only_archived_products_can_be_restored(self, product):
        with pytest.raises(ValidationError) as exc:
            product.restore()
        assert "Only archived products" in str(exc.value)
