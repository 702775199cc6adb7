"""EditReview — change the rating, title or text of one's own review."""

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.review.review import Review


@storefront.command(part_of="Review")
class EditReview:
    review_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    rating = Integer()
    title = String(max_length=200)
    content = Text()


@storefront.command_handler(part_of=Review)
class EditReviewHandler:
    @handle(EditReview)
    def edit_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        changes = {}
        if command.title is not None:
            changes["title"] = command.title
        if command.content is not None:
            changes["content"] = command.content
        if command.rating is not None:
            changes["rating"] = command.rating

        review.edit(owner_id=command.owner_id, **changes)
        repo.add(review)
