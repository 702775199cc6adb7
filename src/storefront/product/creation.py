"""Product creation — command and handler."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product


@storefront.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    price: Float(required=True)
    currency: String(max_length=3, default="USD")
    description: Text()
    image_key: String(max_length=500)
    stock: Integer(default=0)
    owner_id: Identifier()


@storefront.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            price=command.price,
            currency=command.currency,
            description=command.description,
            image_key=command.image_key,
            stock=command.stock,
            owner_id=command.owner_id,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
