"""Account creation: shoppers register themselves, admins add back-office users."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user.user import Role, User
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="User")
class RegisterUser:
    email = String(required=True, max_length=254)
    first_name = String(required=True, max_length=100)
    last_name = String(required=True, max_length=100)
    phone = String(max_length=30)
    address = Text()
    city = String(max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(max_length=100)


@storefront.command(part_of="User")
class CreateAdminUser:
    email = String(required=True, max_length=254)
    first_name = String(required=True, max_length=100)
    last_name = String(required=True, max_length=100)
    phone = String(max_length=30)


def _profile(command, names):
    return {name: getattr(command, name) for name in names if getattr(command, name) is not None}


@storefront.command_handler(part_of=User)
class RegistrationHandler:
    def _create(self, command, role, profile):
        repo = current_domain.repository_for(User)
        if repo.email_taken(command.email):
            raise ValidationError({"email": ["has already been taken"]})

        user = User.register(
            email=command.email,
            first_name=command.first_name,
            last_name=command.last_name,
            role=role,
            **profile,
        )
        repo.add(user)
        logger.info("user_registered", user_id=str(user.id), role=role)
        return str(user.id)

    @handle(RegisterUser)
    def register_user(self, command):
        profile = _profile(command, ("phone", "address", "city", "state", "zip_code", "country"))
        return self._create(command, Role.CUSTOMER.value, profile)

    @handle(CreateAdminUser)
    def create_admin_user(self, command):
        return self._create(command, Role.ADMIN.value, _profile(command, ("phone",)))
