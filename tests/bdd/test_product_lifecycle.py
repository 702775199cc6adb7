"""BDD tests for the product lifecycle."""

from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, when
from storefront.product.product import Product

scenarios("features/product_lifecycle.feature")


@given("a draft product", target_fixture="product")
def draft_product():
    product = Product.create(name="Camp Stove", price=49.5)
    product._events.clear()
    return product


@given("an archived product", target_fixture="product")
def archived_product():
    product = Product.create(name="Camp Stove", price=49.5)
    product.archive()
    product._events.clear()
    return product


@when("the product is published")
def publish(product, error):
    try:
        product.publish()
    except ValidationError as exc:
        error["exc"] = exc


@when("the product is restored")
def restore(product, error):
    try:
        product.restore()
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse("the seller changes the price to {price:f}"))
def change_price(product, price, error):
    try:
        product.update_details(price=price)
    except ValidationError as exc:
        error["exc"] = exc
