"""DeleteReview — the author withdraws a review."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.review.review import Review


@storefront.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)
    owner_id = Identifier(required=True)


@storefront.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        review.delete(owner_id=command.owner_id)
        repo.add(review)
