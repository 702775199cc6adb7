"""UserProfile aggregate — storefront-side details about a signed-in user.

Identity itself (sign-up, passwords, tokens) belongs to the hosted auth
provider; the profile only keeps the subject identifier it issued
(``owner_id``) alongside the details shoppers see.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String, ValueObject

from storefront.domain import storefront
from storefront.profile.events import UserProfileCreated, UserProfileUpdated
from storefront.shared.email import EmailAddress

_UNSET = object()


@storefront.aggregate
class UserProfile:
    owner_id: String(required=True, max_length=255, unique=True)
    username: String(required=True, max_length=100)
    email: ValueObject(EmailAddress, required=True)
    display_name: String(max_length=100)
    avatar_key: String(max_length=500)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def username_must_be_handle(self):
        if self.username is None:
            return
        if not self.username.strip() or any(ch.isspace() for ch in self.username):
            raise ValidationError({"username": ["Username cannot be empty or contain whitespace"]})

    @classmethod
    def create(cls, owner_id, username, email, display_name=None, avatar_key=None):
        now = datetime.now(UTC)
        profile = cls(
            owner_id=owner_id,
            username=username,
            email=EmailAddress(address=email),
            display_name=display_name,
            avatar_key=avatar_key,
            created_at=now,
            updated_at=now,
        )
        profile.raise_(
            UserProfileCreated(
                profile_id=str(profile.id),
                owner_id=str(owner_id),
                username=username,
                email=email,
                created_at=now,
            )
        )
        return profile

    def update(self, owner_id, username=_UNSET, email=_UNSET, display_name=_UNSET, avatar_key=_UNSET):
        if str(owner_id) != str(self.owner_id):
            raise ValidationError({"owner": ["Only the owner can update this profile"]})

        now = datetime.now(UTC)
        with atomic_change(self):
            if username is not _UNSET:
                self.username = username
            if email is not _UNSET:
                self.email = EmailAddress(address=email)
            if display_name is not _UNSET:
                self.display_name = display_name
            if avatar_key is not _UNSET:
                self.avatar_key = avatar_key
            self.updated_at = now

        self.raise_(
            UserProfileUpdated(
                profile_id=str(self.id),
                username=self.username,
                email=self.email.address,
                display_name=self.display_name,
                avatar_key=self.avatar_key,
                updated_at=now,
            )
        )
