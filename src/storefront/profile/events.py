"""Domain events for the UserProfile aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="UserProfile")
class UserProfileCreated:
    """A signed-in user set up their storefront profile."""

    __version__ = 1

    profile_id: Identifier(required=True)
    owner_id: Identifier(required=True)
    username: String(required=True)
    email: String(required=True)
    created_at: DateTime(required=True)


@storefront.event(part_of="UserProfile")
class UserProfileUpdated:
    """A user changed their display details."""

    __version__ = 1

    profile_id: Identifier(required=True)
    username: String(required=True)
    email: String(required=True)
    display_name: String()
    avatar_key: String()
    updated_at: DateTime(required=True)
