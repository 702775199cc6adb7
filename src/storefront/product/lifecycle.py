"""Product lifecycle management — publish, archive and restore."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product


@storefront.command(part_of="Product")
class PublishProduct:
    product_id: Identifier(required=True)


@storefront.command(part_of="Product")
class ArchiveProduct:
    product_id: Identifier(required=True)


@storefront.command(part_of="Product")
class RestoreProduct:
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageLifecycleHandler:
    @handle(PublishProduct)
    def publish_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.publish()
        repo.add(product)

    @handle(ArchiveProduct)
    def archive_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.archive()
        repo.add(product)

    @handle(RestoreProduct)
    def restore_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.restore()
        repo.add(product)
