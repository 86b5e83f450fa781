"""Email port: the interface transactional mail goes through."""

from abc import ABC, abstractmethod


class EmailPort(ABC):
    @abstractmethod
    def send(self, to: str, subject: str, body: str) -> dict:
        """Hand a message to the delivery service.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
