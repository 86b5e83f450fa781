"""Content negotiation for mutations: JSON for API clients, redirects for browsers."""

from fastapi import Request
from fastapi.responses import JSONResponse, RedirectResponse

from storefront.ordering.cart.summary import cart_payload

ALERT_COOKIE = "alert"
NOTICE_COOKIE = "notice"
SESSION_COOKIE = "session_id"


def wants_html(request: Request) -> bool:
    accept = request.headers.get("accept", "")
    return "text/html" in accept and "application/json" not in accept


def remember_session(request: Request, response) -> None:
    """Carry a session issued during this request onto a response built by hand."""
    issued = getattr(request.state, "issued_session", None)
    if issued:
        response.set_cookie(SESSION_COOKIE, issued, httponly=True, samesite="lax")


def cart_response(request: Request, cart, notice: str | None = None, status_code: int = 200):
    if wants_html(request):
        response = RedirectResponse("/cart", status_code=303)
        if notice:
            response.set_cookie(NOTICE_COOKIE, notice, max_age=60, httponly=True, samesite="lax")
    else:
        response = JSONResponse(status_code=status_code, content=cart_payload(cart))
    remember_session(request, response)
    return response
