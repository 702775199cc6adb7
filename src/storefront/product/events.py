"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue as a draft."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    currency: String(required=True)
    owner_id: Identifier()
    status: String(required=True)
    created_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    """Descriptive fields, price or stock of a product changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    description: Text()
    price: Float(required=True)
    currency: String(required=True)
    image_key: String()
    stock: Integer()
    updated_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductPublished:
    """A draft product became visible to shoppers."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_status: String(required=True)
    status: String(required=True)
    published_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductArchived:
    """A product was withdrawn from the storefront."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_status: String(required=True)
    status: String(required=True)
    archived_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductRestored:
    """An archived product was put back on sale."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_status: String(required=True)
    status: String(required=True)
    restored_at: DateTime(required=True)
