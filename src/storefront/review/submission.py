"""SubmitReview — submit a new product review.

The product must exist and be on sale (not archived), and each shopper may
hold at most one live review per product. Both checks need repository
queries, so they live in the handler rather than the aggregate.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product
from storefront.review.review import Review, ReviewStatus


@storefront.command(part_of="Review")
class SubmitReview:
    product_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    rating = Integer(required=True)
    content = Text(required=True)
    title = String(max_length=200)


@storefront.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        try:
            product = current_domain.repository_for(Product).get(command.product_id)
        except ObjectNotFoundError:
            raise ValidationError({"product_id": [f"Product {command.product_id} does not exist"]}) from None

        if product.is_archived:
            raise ValidationError({"product_id": ["Archived products cannot be reviewed"]})

        repo = current_domain.repository_for(Review)
        existing = repo._dao.query.filter(
            owner_id=str(command.owner_id),
            product_id=str(command.product_id),
        ).all()
        if any(r.status != ReviewStatus.DELETED.value for r in existing.items):
            raise ValidationError({"review": ["You have already reviewed this product"]})

        review = Review.submit(
            product_id=command.product_id,
            owner_id=command.owner_id,
            rating=command.rating,
            content=command.content,
            title=command.title,
        )
        repo.add(review)
        return str(review.id)
