"""FastAPI dependencies that identify the caller.

The authentication gateway in front of the storefront passes the signed-in
user's id in ``X-User-Id``. Anonymous shoppers are tracked by a session id
sent in ``X-Session-Id`` or the ``session_id`` cookie; a new session is issued
when neither is present.
"""

from uuid import uuid4

from fastapi import Cookie, Depends, Header, Request, Response
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.identity.ability import Ability
from storefront.identity.actor import Actor
from storefront.identity.user.user import User
from storefront.ordering.cart.cart import Cart
from storefront.ordering.cart.resolution import ResolveCart
from storefront.utils.logging import add_context, get_logger
from storefront.web.responses import SESSION_COOKIE

logger = get_logger(__name__)


async def current_actor(
    request: Request,
    response: Response,
    x_user_id: str | None = Header(None),
    x_session_id: str | None = Header(None),
    session_id: str | None = Cookie(None),
) -> Actor:
    session = x_session_id or session_id
    if not session:
        session = uuid4().hex
        request.state.issued_session = session
        response.set_cookie(SESSION_COOKIE, session, httponly=True, samesite="lax")

    if not x_user_id:
        return Actor.guest(session)

    try:
        user = current_domain.repository_for(User).get(x_user_id)
    except ObjectNotFoundError:
        logger.warning("unknown_user", user_id=x_user_id)
        return Actor.guest(session)

    add_context(user_id=str(user.id))
    return Actor.for_user(user, session)


async def current_ability(actor: Actor = Depends(current_actor)) -> Ability:
    return Ability(actor)


async def admin_ability(ability: Ability = Depends(current_ability)) -> Ability:
    """Ability of a caller allowed into the back office; everyone else is refused."""
    ability.authorize("access", "admin_panel")
    return ability


def resolve_cart(actor: Actor, ability: Ability, action: str) -> Cart:
    """The caller's cart, checked against ``action``.

    Resolving may create a cart or fold a guest cart into the user's, so the
    caller must be allowed ``action`` on carts before anything is written.
    """
    ability.authorize(action, "Cart")
    cart_id = current_domain.process(
        ResolveCart(user_id=actor.user_id, session_id=actor.session_id),
        asynchronous=False,
    )
    cart = current_domain.repository_for(Cart).get(cart_id)
    ability.authorize(action, "Cart", cart)
    return cart


def cart_for(action: str):
    """Dependency yielding the caller's cart once ``action`` on it is authorized."""

    async def _cart(actor: Actor = Depends(current_actor), ability: Ability = Depends(current_ability)) -> Cart:
        return resolve_cart(actor, ability, action)

    return _cart
