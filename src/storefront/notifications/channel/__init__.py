"""Outbound email channel.

Delivery is an external collaborator. The storefront only talks to an
``EmailPort``; the in-memory adapter is used unless another one is installed
with ``use_email_channel``.
"""

from storefront.notifications.channel.email_port import EmailPort

_email_channel: EmailPort | None = None


def get_email_channel() -> EmailPort:
    global _email_channel
    if _email_channel is None:
        from storefront.notifications.channel.in_memory_email import InMemoryEmailAdapter

        _email_channel = InMemoryEmailAdapter()
    return _email_channel


def use_email_channel(channel: EmailPort) -> None:
    global _email_channel
    _email_channel = channel


def reset_channels():
    """Forget the configured channel so the next lookup starts fresh."""
    global _email_channel
    _email_channel = None
