"""Storefront exceptions that complement Protean's own.

Protean's ``ValidationError`` and ``ObjectNotFoundError`` cover invalid data and
lookup misses. The three classes here cover the remaining outcomes a request can
be refused with. Each carries a ``messages`` dict shaped like Protean's, so the
HTTP layer renders all of them the same way.
"""

from protean.exceptions import ValidationError

NOT_ENOUGH_STOCK = "Not enough items in stock."
NOT_AUTHORIZED = "You are not authorized to access this page."


class InsufficientInventoryError(ValidationError):
    """Requested quantity exceeds the stock available for a product or variant."""

    def __init__(self, available=None):
        super().__init__({"quantity": [NOT_ENOUGH_STOCK]})
        self.available = available


class AuthorizationDenied(Exception):
    """The acting user may not perform the action.

    The message is deliberately generic: the rule that refused access is never
    revealed to the caller.
    """

    def __init__(self, message=NOT_AUTHORIZED):
        super().__init__(message)
        self.messages = {"authorization": [message]}


class IntegrityBlockedError(Exception):
    """The change would orphan dependent records, e.g. deleting a category that owns products."""

    def __init__(self, messages):
        super().__init__(str(messages))
        self.messages = messages
