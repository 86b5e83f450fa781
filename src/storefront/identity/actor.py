"""The party behind a request: a signed-in user, or a guest known only by session."""

from dataclasses import dataclass

from storefront.identity.user.user import Role


@dataclass(frozen=True)
class Actor:
    user_id: str | None = None
    role: str | None = None
    session_id: str | None = None

    @classmethod
    def guest(cls, session_id=None):
        return cls(session_id=session_id)

    @classmethod
    def for_user(cls, user, session_id=None):
        return cls(user_id=str(user.id), role=user.role, session_id=session_id)

    @property
    def signed_in(self) -> bool:
        return self.user_id is not None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def owner(self) -> dict:
        """Owner keys for carts and orders: the user when signed in, else the session."""
        if self.signed_in:
            return {"user_id": self.user_id, "session_id": None}
        return {"user_id": None, "session_id": self.session_id}
