"""User profile management — create and update commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.profile.profile import UserProfile


@storefront.command(part_of="UserProfile")
class CreateUserProfile:
    owner_id: String(required=True, max_length=255)
    username: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    display_name: String(max_length=100)
    avatar_key: String(max_length=500)


@storefront.command(part_of="UserProfile")
class UpdateUserProfile:
    profile_id: Identifier(required=True)
    owner_id: String(required=True, max_length=255)
    username: String(max_length=100)
    email: String(max_length=254)
    display_name: String(max_length=100)
    avatar_key: String(max_length=500)


@storefront.command_handler(part_of=UserProfile)
class ManageProfileHandler:
    @handle(CreateUserProfile)
    def create_profile(self, command):
        repo = current_domain.repository_for(UserProfile)
        existing = repo._dao.query.filter(owner_id=command.owner_id).all()
        if existing.items:
            raise ValidationError({"owner_id": ["A profile already exists for this user"]})

        profile = UserProfile.create(
            owner_id=command.owner_id,
            username=command.username,
            email=command.email,
            display_name=command.display_name,
            avatar_key=command.avatar_key,
        )
        repo.add(profile)
        return str(profile.id)

    @handle(UpdateUserProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(UserProfile)
        profile = repo.get(command.profile_id)

        changes = {
            field: getattr(command, field)
            for field in ("username", "email", "display_name", "avatar_key")
            if getattr(command, field) is not None
        }
        profile.update(owner_id=command.owner_id, **changes)
        repo.add(profile)
