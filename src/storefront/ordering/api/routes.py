"""FastAPI endpoints for the shopping cart and checkout.

Cart mutations answer with the priced cart for JSON clients and redirect
browsers back to ``/cart``.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse
from protean.utils.globals import current_domain

from storefront.identity.ability import Ability
from storefront.identity.actor import Actor
from storefront.ordering.api.schemas import AddCartItemRequest, PlaceOrderRequest, UpdateCartItemRequest
from storefront.ordering.api.serializers import order_data
from storefront.ordering.cart.cart import Cart
from storefront.ordering.cart.items import AddToCart, ClearCart, RemoveCartItem, UpdateCartItem
from storefront.ordering.cart.summary import cart_payload
from storefront.ordering.order.checkout import PlaceOrder
from storefront.ordering.order.order import Order
from storefront.web.dependencies import cart_for, current_ability, current_actor, resolve_cart
from storefront.web.responses import cart_response, remember_session, wants_html

cart_router = APIRouter(prefix="/cart", tags=["cart"])
cart_items_router = APIRouter(prefix="/cart_items", tags=["cart"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


def _reload(cart: Cart) -> Cart:
    return current_domain.repository_for(Cart).get(cart.id)


# --- Cart endpoints ---


@cart_router.get("")
async def show_cart(cart: Cart = Depends(cart_for("read"))) -> dict:
    return cart_payload(cart)


@cart_router.delete("")
async def clear_cart(
    request: Request,
    cart: Cart = Depends(cart_for("update")),
):
    current_domain.process(ClearCart(cart_id=cart.id), asynchronous=False)
    return cart_response(request, _reload(cart), notice="Cart cleared.")


# --- Cart item endpoints ---


@cart_items_router.post("")
async def add_cart_item(
    request: Request,
    body: AddCartItemRequest,
    cart: Cart = Depends(cart_for("update")),
):
    command = AddToCart(
        cart_id=cart.id,
        product=body.product,
        variant_id=body.variant_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return cart_response(request, _reload(cart), notice="Item added to cart.")


@cart_items_router.patch("/{item_id}")
async def update_cart_item(
    request: Request,
    item_id: str,
    body: UpdateCartItemRequest,
    cart: Cart = Depends(cart_for("update")),
):
    command = UpdateCartItem(cart_id=cart.id, item_id=item_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return cart_response(request, _reload(cart), notice="Cart updated.")


@cart_items_router.delete("/{item_id}")
async def remove_cart_item(
    request: Request,
    item_id: str,
    cart: Cart = Depends(cart_for("update")),
):
    current_domain.process(RemoveCartItem(cart_id=cart.id, item_id=item_id), asynchronous=False)
    return cart_response(request, _reload(cart), notice="Item removed from cart.")


# --- Order endpoints ---


@order_router.get("")
async def list_orders(actor: Actor = Depends(current_actor), ability: Ability = Depends(current_ability)) -> dict:
    ability.authorize("read", "Order")
    orders = current_domain.repository_for(Order).for_owner(
        user_id=actor.user_id,
        session_id=None if actor.signed_in else actor.session_id,
    )
    return {"orders": [order_data(o) for o in orders]}


@order_router.post("", status_code=201)
async def place_order(
    request: Request,
    body: PlaceOrderRequest,
    actor: Actor = Depends(current_actor),
    ability: Ability = Depends(current_ability),
):
    ability.authorize("create", "Order")
    cart = resolve_cart(actor, ability, "update")

    command = PlaceOrder(cart_id=cart.id, **body.model_dump())
    order_number = current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).find_by_number(order_number)

    if wants_html(request):
        response = RedirectResponse(f"/orders/{order_number}", status_code=303)
    else:
        response = JSONResponse(status_code=201, content={"order_number": order_number, "order": order_data(order)})
    remember_session(request, response)
    return response


@order_router.get("/{order_number}")
async def show_order(order_number: str, ability: Ability = Depends(current_ability)) -> dict:
    order = current_domain.repository_for(Order).find_by_number(order_number)
    ability.authorize("read", "Order", order)
    return {"order": order_data(order)}
