"""Translate storefront exceptions into HTTP responses.

JSON clients get a status code and an ``{"error": ...}`` body. Browsers get a
303 redirect back to where they came from, with the message in the ``alert``
cookie. Unexpected failures are logged and answered with a generic message;
exception details never reach a response body.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.shared.errors import (
    NOT_ENOUGH_STOCK,
    AuthorizationDenied,
    InsufficientInventoryError,
    IntegrityBlockedError,
)
from storefront.utils.logging import get_logger
from storefront.web.responses import ALERT_COOKIE, wants_html

logger = get_logger(__name__)

GENERIC_ERROR = "An error occurred"


def _flatten(messages) -> str:
    if isinstance(messages, dict):
        return "; ".join(message for values in messages.values() for message in values)
    return str(messages)


def _redirect_with_alert(request: Request, message: str, location: str | None = None) -> RedirectResponse:
    response = RedirectResponse(location or request.headers.get("referer") or "/", status_code=303)
    response.set_cookie(ALERT_COOKIE, message, max_age=60, httponly=True, samesite="lax")
    return response


def _respond(request: Request, status_code: int, error, location: str | None = None):
    if wants_html(request):
        return _redirect_with_alert(request, _flatten(error), location)
    return JSONResponse(status_code=status_code, content={"error": error})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(InsufficientInventoryError)
    async def insufficient_inventory(request: Request, exc: InsufficientInventoryError):
        return _respond(request, 422, NOT_ENOUGH_STOCK)

    @app.exception_handler(ValidationError)
    async def validation_failed(request: Request, exc: ValidationError):
        return _respond(request, 422, exc.messages)

    @app.exception_handler(ObjectNotFoundError)
    async def not_found(request: Request, exc: ObjectNotFoundError):
        return _respond(request, 404, "Not found")

    @app.exception_handler(AuthorizationDenied)
    async def authorization_denied(request: Request, exc: AuthorizationDenied):
        logger.warning("authorization_denied", path=request.url.path, method=request.method)
        return _respond(request, 403, str(exc), location="/")

    @app.exception_handler(IntegrityBlockedError)
    async def integrity_blocked(request: Request, exc: IntegrityBlockedError):
        return _respond(request, 409, exc.messages)

    @app.exception_handler(Exception)
    async def unexpected(request: Request, exc: Exception):
        logger.exception("unhandled_error", path=request.url.path, method=request.method)
        return JSONResponse(status_code=500, content={"error": GENERIC_ERROR})
