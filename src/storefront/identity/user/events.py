"""Domain events for the User aggregate."""

from protean.fields import Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A shopper or back-office user account was created."""

    user_id = Identifier(required=True)
    email = String(required=True)
    role = String(required=True)


@storefront.event(part_of="User")
class UserProfileUpdated:
    user_id = Identifier(required=True)

