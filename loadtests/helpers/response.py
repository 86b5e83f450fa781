"""Readable failure messages from storefront API error responses.

Two body shapes reach a load test:

- Request schema errors (422): {"detail": [{"loc": [...], "msg": "..."}]}
- Domain errors (403/404/409/422): {"error": "msg"} or {"error": {"field": ["msg", ...]}}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Compact one-line description of an error response."""
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if "detail" in body and isinstance(body["detail"], list):
        parts = []
        for err in body["detail"]:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        return " | ".join(parts)

    if "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            return " | ".join(f"{field}: {'; '.join(messages)}" for field, messages in error.items())
        return str(error)

    return str(body)[:300]


def fail(response, action: str) -> None:
    """Mark a ``catch_response`` request as failed with the API's own message."""
    response.failure(f"{action} failed ({response.status_code}): {extract_error_detail(response)}")
