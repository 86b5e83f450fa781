"""User aggregate: a shopper or a back-office administrator.

Authentication happens upstream; the storefront only keeps the profile it
needs to pre-fill checkout and the role that drives authorization.
"""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, String, Text

from storefront.domain import storefront
from storefront.identity.user.events import UserProfileUpdated, UserRegistered
from storefront.shared.email import is_valid_email
from storefront.shared.queries import fetch_all

PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]+$")
ZIP_CODE_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")

PROFILE_FIELDS = ("first_name", "last_name", "phone", "address", "city", "state", "zip_code", "country")


class Role(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


@storefront.aggregate
class User:
    email = String(required=True, max_length=254, unique=True)
    first_name = String(required=True, max_length=100)
    last_name = String(required=True, max_length=100)
    role = String(choices=Role, default=Role.CUSTOMER.value)
    phone = String(max_length=30)
    address = Text()
    city = String(max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(max_length=100, default="US")
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if not is_valid_email(self.email):
            raise ValidationError({"email": ["is invalid"]})

    @invariant.post
    def phone_must_be_well_formed(self):
        if self.phone and (not PHONE_PATTERN.match(self.phone) or not re.search(r"\d", self.phone)):
            raise ValidationError({"phone": ["is invalid"]})

    @invariant.post
    def zip_code_must_be_well_formed(self):
        if self.zip_code and not ZIP_CODE_PATTERN.match(self.zip_code):
            raise ValidationError({"zip_code": ["is invalid"]})

    @classmethod
    def register(cls, email, first_name, last_name, role=Role.CUSTOMER.value, **profile):
        now = datetime.now(UTC)
        user = cls(
            email=email.strip().lower(),
            first_name=first_name,
            last_name=last_name,
            role=role,
            created_at=now,
            updated_at=now,
            **profile,
        )
        user.raise_(UserRegistered(user_id=user.id, email=user.email, role=user.role))
        return user

    def update_profile(self, **changes):
        for name, value in changes.items():
            if name not in PROFILE_FIELDS:
                raise ValidationError({name: ["cannot be changed"]})
            setattr(self, name, value)
        self.updated_at = datetime.now(UTC)

        self.raise_(UserProfileUpdated(user_id=self.id))

    def is_admin(self):
        return self.role == Role.ADMIN.value

    def full_name(self):
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or self.email

    def display_name(self):
        return self.first_name or self.email.split("@")[0]

    def full_address(self):
        parts = [self.address, self.city, self.state, self.zip_code, self.country]
        return ", ".join(part for part in parts if part)


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email) -> User:
        users = fetch_all(self._dao, email=email.strip().lower())
        if not users:
            raise ObjectNotFoundError(f"User with email {email} does not exist")
        return users[0]

    def email_taken(self, email) -> bool:
        return bool(fetch_all(self._dao, email=email.strip().lower()))

    def customers(self) -> list[User]:
        return sorted(fetch_all(self._dao, role=Role.CUSTOMER.value), key=lambda u: u.email)

    def admins(self) -> list[User]:
        return sorted(fetch_all(self._dao, role=Role.ADMIN.value), key=lambda u: u.email)

    def remove(self, user: User) -> None:
        self._dao.delete(user)
