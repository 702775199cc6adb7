"""EmailAddress value object used by user profiles."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront

_LOCAL_PART = re.compile(r"^[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*$")
_DOMAIN_LABEL = re.compile(r"^[A-Za-z0-9]([A-Za-z0-9-]*[A-Za-z0-9])?$")


@storefront.value_object
class EmailAddress:
    """A structurally valid email address.

    One ``@``, a dot-atom local part, and a domain of at least two labels
    where no label starts or ends with a hyphen.
    """

    address: String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        email = self.address
        if email is None:
            return

        if email.count("@") != 1:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        local_part, domain_part = email.split("@", 1)
        if not _LOCAL_PART.match(local_part):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        labels = domain_part.split(".")
        if len(labels) < 2 or not all(_DOMAIN_LABEL.match(label) for label in labels):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})
