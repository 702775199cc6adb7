"""Tests for Product aggregate creation, invariants and detail updates."""

import pytest
from protean.exceptions import ValidationError
from storefront.product.events import ProductCreated, ProductDetailsUpdated
from storefront.product.product import Product, ProductStatus


def _product(**overrides):
    defaults = {"name": "Trail Running Shoes", "price": 89.99, "owner_id": "seller-001"}
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductCreation:
    def test_create_starts_as_draft(self):
        product = _product()
        assert product.status == ProductStatus.DRAFT.value
        assert product.currency == "USD"
        assert product.stock == 0

    def test_create_normalizes_currency(self):
        product = _product(currency="eur")
        assert product.currency == "EUR"

    def test_create_sets_timestamps(self):
        product = _product()
        assert product.created_at is not None
        assert product.updated_at == product.created_at

    def test_create_raises_product_created(self):
        product = _product(stock=5)
        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, ProductCreated)
        assert event.product_id == str(product.id)
        assert event.status == "Draft"
        assert event.owner_id == "seller-001"


class TestProductInvariants:
    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _product(name="   ")
        assert "name" in exc.value.messages

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError):
            _product(price=0)

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError):
            _product(stock=-1)

    def test_currency_must_be_alphabetic(self):
        with pytest.raises(ValidationError) as exc:
            _product(currency="US1")
        assert "currency" in exc.value.messages


class TestProductDetails:
    def test_update_changes_only_given_fields(self):
        product = _product(description="Light and grippy")
        product._events.clear()

        product.update_details(price=79.99, stock=10)

        assert product.price == 79.99
        assert product.stock == 10
        assert product.name == "Trail Running Shoes"
        assert product.description == "Light and grippy"

    def test_update_raises_details_updated(self):
        product = _product()
        product._events.clear()

        product.update_details(name="Road Running Shoes")

        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, ProductDetailsUpdated)
        assert event.name == "Road Running Shoes"

    def test_update_can_clear_description(self):
        product = _product(description="Old copy")
        product.update_details(description=None)
        assert product.description is None

    def test_archived_product_is_read_only(self):
        product = _product()
        product.archive()
        with pytest.raises(ValidationError) as exc:
            product.update_details(price=10.0)
        assert "Archived products cannot be modified" in str(exc.value)
