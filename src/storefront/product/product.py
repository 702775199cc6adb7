"""Product aggregate root.

State Machine:
    DRAFT → ACTIVE | ARCHIVED
    ACTIVE → ARCHIVED
    ARCHIVED → ACTIVE (restore)

Every status change raises an event carrying both the previous and the new
status, so status counters can move one unit between buckets.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.product.events import (
    ProductArchived,
    ProductCreated,
    ProductDetailsUpdated,
    ProductPublished,
    ProductRestored,
)

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


class ProductStatus(Enum):
    """Enumeration of product lifecycle statuses."""

    DRAFT = "Draft"
    ACTIVE = "Active"
    ARCHIVED = "Archived"


_VALID_TRANSITIONS = {
    ProductStatus.DRAFT: {ProductStatus.ACTIVE, ProductStatus.ARCHIVED},
    ProductStatus.ACTIVE: {ProductStatus.ARCHIVED},
    ProductStatus.ARCHIVED: {ProductStatus.ACTIVE},
}


@storefront.aggregate
class Product:
    """An item offered for sale on the storefront."""

    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.01)
    currency: String(max_length=3, default="USD")
    image_key: String(max_length=500)
    stock: Integer(default=0, min_value=0)
    owner_id: Identifier()
    status: String(choices=ProductStatus, default=ProductStatus.DRAFT.value)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": ["Product name cannot be blank"]})

    @invariant.post
    def currency_must_be_iso_code(self):
        if self.currency and (len(self.currency) != 3 or not self.currency.isalpha()):
            raise ValidationError({"currency": ["Currency must be a 3-letter ISO code"]})

    @classmethod
    def create(
        cls,
        name,
        price,
        currency="USD",
        description=None,
        image_key=None,
        stock=0,
        owner_id=None,
    ):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            price=price,
            currency=currency.upper() if currency else "USD",
            description=description,
            image_key=image_key,
            stock=stock,
            owner_id=owner_id,
            status=ProductStatus.DRAFT.value,
            created_at=now,
            updated_at=now,
        )

        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                currency=product.currency,
                owner_id=str(owner_id) if owner_id else None,
                status=product.status,
                created_at=now,
            )
        )
        return product

    @property
    def is_archived(self):
        return self.status == ProductStatus.ARCHIVED.value

    def _transition_to(self, target):
        current = ProductStatus(self.status)
        if target not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target.value}"]})

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now
        return current, now

    def update_details(
        self,
        name=_UNSET,
        description=_UNSET,
        price=_UNSET,
        currency=_UNSET,
        image_key=_UNSET,
        stock=_UNSET,
    ):
        """Partially update descriptive fields. Archived products are read-only."""
        if self.is_archived:
            raise ValidationError({"status": ["Archived products cannot be modified"]})

        now = datetime.now(UTC)
        with atomic_change(self):
            if name is not _UNSET:
                self.name = name
            if description is not _UNSET:
                self.description = description
            if price is not _UNSET:
                self.price = price
            if currency is not _UNSET:
                self.currency = currency.upper() if currency else currency
            if image_key is not _UNSET:
                self.image_key = image_key
            if stock is not _UNSET:
                self.stock = stock
            self.updated_at = now

        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                name=self.name,
                description=self.description,
                price=self.price,
                currency=self.currency,
                image_key=self.image_key,
                stock=self.stock,
                updated_at=now,
            )
        )

    def publish(self):
        if self.is_archived:
            raise ValidationError({"status": ["Archived products must be restored, not published"]})
        previous, now = self._transition_to(ProductStatus.ACTIVE)
        self.raise_(
            ProductPublished(
                product_id=str(self.id),
                previous_status=previous.value,
                status=self.status,
                published_at=now,
            )
        )

    def archive(self):
        previous, now = self._transition_to(ProductStatus.ARCHIVED)
        self.raise_(
            ProductArchived(
                product_id=str(self.id),
                previous_status=previous.value,
                status=self.status,
                archived_at=now,
            )
        )

    def restore(self):
        if not self.is_archived:
            raise ValidationError({"status": ["Only archived products can be restored"]})
        previous, now = self._transition_to(ProductStatus.ACTIVE)
        self.raise_(
            ProductRestored(
                product_id=str(self.id),
                previous_status=previous.value,
                status=self.status,
                restored_at=now,
            )
        )
