"""Plain-text helpers for generated excerpts and meta fields."""

import html
import re

_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")


def strip_html(markup: str | None) -> str:
    """Drop tags and decode entities, collapsing whitespace."""
    text = html.unescape(_TAG.sub(" ", markup or ""))
    return _WHITESPACE.sub(" ", text).strip()


def truncate(text: str | None, length: int, omission: str = "...") -> str:
    """Cut ``text`` so the result, omission included, is at most ``length`` characters."""
    text = text or ""
    if len(text) <= length:
        return text
    return text[: max(length - len(omission), 0)] + omission
