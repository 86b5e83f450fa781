"""Tests for the User aggregate."""

import pytest
from protean.exceptions import ValidationError

from storefront.identity.user.events import UserProfileUpdated, UserRegistered
from storefront.identity.user.user import User


def _make_user(**overrides):
    attributes = {"email": "Jane@Example.com ", "first_name": "Jane", "last_name": "Doe"}
    attributes.update(overrides)
    return User.register(**attributes)


class TestRegistration:
    def test_email_is_normalised(self):
        assert _make_user().email == "jane@example.com"

    def test_defaults(self):
        user = _make_user()
        assert user.role == "customer"
        assert user.country == "US"
        assert not user.is_admin()

    def test_event(self):
        event = _make_user(role="admin")._events[0]
        assert isinstance(event, UserRegistered)
        assert event.role == "admin"

    def test_invalid_email(self):
        with pytest.raises(ValidationError) as exc:
            _make_user(email="jane-at-example")
        assert "email" in exc.value.messages

    @pytest.mark.parametrize("phone", ["+1 (555) 010-2030", "555 0102"])
    def test_valid_phones(self, phone):
        assert _make_user(phone=phone).phone == phone

    @pytest.mark.parametrize("phone", ["call me", "+-()"])
    def test_invalid_phones(self, phone):
        with pytest.raises(ValidationError):
            _make_user(phone=phone)

    @pytest.mark.parametrize("zip_code", ["62701", "62701-1234"])
    def test_valid_zip_codes(self, zip_code):
        assert _make_user(zip_code=zip_code).zip_code == zip_code

    def test_invalid_zip_code(self):
        with pytest.raises(ValidationError):
            _make_user(zip_code="6270")


class TestProfile:
    def test_update_profile(self):
        user = _make_user()
        user.update_profile(city="Springfield", state="IL")
        assert user.full_address() == "Springfield, IL, US"
        assert isinstance(user._events[-1], UserProfileUpdated)

    def test_email_and_role_are_not_profile_fields(self):
        user = _make_user()
        with pytest.raises(ValidationError):
            user.update_profile(role="admin")

    def test_names(self):
        user = _make_user()
        assert user.full_name() == "Jane Doe"
        assert user.display_name() == "Jane"
