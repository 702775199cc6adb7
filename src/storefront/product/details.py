"""Product detail editing — command and handler.

Only fields present on the command are changed; ``None`` means "leave as is".
"""

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product


@storefront.command(part_of="Product")
class UpdateProductDetails:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    price: Float()
    currency: String(max_length=3)
    image_key: String(max_length=500)
    stock: Integer()


@storefront.command_handler(part_of=Product)
class UpdateProductDetailsHandler:
    @handle(UpdateProductDetails)
    def update_product_details(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        changes = {
            field: getattr(command, field)
            for field in ("name", "description", "price", "currency", "image_key", "stock")
            if getattr(command, field) is not None
        }
        product.update_details(**changes)
        repo.add(product)
