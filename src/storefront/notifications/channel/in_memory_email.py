"""In-memory email adapter: keeps every message instead of delivering it."""

from uuid import uuid4

from storefront.notifications.channel.email_port import EmailPort


class InMemoryEmailAdapter(EmailPort):
    def __init__(self):
        self.outbox: list[dict] = []
        self.fail_with: str | None = None

    def send(self, to: str, subject: str, body: str) -> dict:
        if self.fail_with:
            return {"message_id": None, "status": "failed", "error": self.fail_with}

        message_id = f"email-{uuid4().hex[:12]}"
        self.outbox.append({"message_id": message_id, "to": to, "subject": subject, "body": body})
        return {"message_id": message_id, "status": "sent"}

    def messages_to(self, address: str) -> list[dict]:
        return [message for message in self.outbox if message["to"] == address]
