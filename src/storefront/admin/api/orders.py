"""Back-office endpoints for orders and abandoned carts."""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.admin.api.schemas import (
    CountResponse,
    ReclaimCartsRequest,
    SendTrackingEmailRequest,
    UpdateOrderRequest,
    UpdateOrderStatusRequest,
    UpdatePaymentStatusRequest,
)
from storefront.identity.ability import Ability
from storefront.ordering.api.serializers import order_data
from storefront.ordering.cart.abandonment import ReclaimAbandonedCarts
from storefront.ordering.order.invoice import invoice_payload
from storefront.ordering.order.order import Order
from storefront.ordering.order.status import UpdateOrderNotes, UpdateOrderStatus, UpdatePaymentStatus
from storefront.ordering.order.tracking import SendTrackingEmail
from storefront.shared.pagination import paginate
from storefront.web.dependencies import admin_ability

router = APIRouter(tags=["admin: orders"])

ORDERS_PER_PAGE = 25


def _order(order_id: str) -> Order:
    return current_domain.repository_for(Order).get(order_id)


@router.get("/orders")
async def list_orders(
    status: str | None = None,
    payment_status: str | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    ability: Ability = Depends(admin_ability),
) -> dict:
    ability.authorize("read", "Order")
    orders = current_domain.repository_for(Order).everything()
    if status:
        orders = [o for o in orders if o.status == status]
    if payment_status:
        orders = [o for o in orders if o.payment_status == payment_status]
    if search:
        needle = search.strip().lower()
        orders = [
            o
            for o in orders
            if needle in o.order_number.lower() or needle in o.email.lower() or needle in o.customer_name().lower()
        ]

    listing = paginate(orders, page, ORDERS_PER_PAGE)
    return {"orders": [order_data(o) for o in listing.items], "pagination": listing.to_dict()}


@router.get("/orders/{order_id}")
async def show_order(order_id: str, ability: Ability = Depends(admin_ability)) -> dict:
    order = _order(order_id)
    ability.authorize("read", "Order", order)
    return {"order": order_data(order)}


@router.patch("/orders/{order_id}")
async def update_order(order_id: str, body: UpdateOrderRequest, ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("update", "Order", _order(order_id))
    current_domain.process(UpdateOrderNotes(order_id=order_id, notes=body.notes), asynchronous=False)
    return {"order": order_data(_order(order_id))}


@router.post("/orders/{order_id}/update_status")
async def update_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    ability: Ability = Depends(admin_ability),
) -> dict:
    ability.authorize("update_status", "Order", _order(order_id))
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    order = _order(order_id)
    return {"status": "ok", "message": f"Order status updated to {order.status}.", "order": order_data(order)}


@router.post("/orders/{order_id}/update_payment_status")
async def update_payment_status(
    order_id: str,
    body: UpdatePaymentStatusRequest,
    ability: Ability = Depends(admin_ability),
) -> dict:
    ability.authorize("update_payment_status", "Order", _order(order_id))
    command = UpdatePaymentStatus(order_id=order_id, payment_status=body.payment_status)
    current_domain.process(command, asynchronous=False)
    order = _order(order_id)
    return {
        "status": "ok",
        "message": f"Payment status updated to {order.payment_status}.",
        "order": order_data(order),
    }


@router.post("/orders/{order_id}/send_tracking_email")
async def send_tracking_email(
    order_id: str,
    body: SendTrackingEmailRequest,
    ability: Ability = Depends(admin_ability),
) -> dict:
    ability.authorize("send_tracking_email", "Order", _order(order_id))
    command = SendTrackingEmail(order_id=order_id, tracking_number=body.tracking_number)
    message_id = current_domain.process(command, asynchronous=False)
    return {"status": "ok", "message": "Tracking email sent.", "message_id": message_id}


@router.get("/orders/{order_id}/print_invoice")
async def print_invoice(order_id: str, ability: Ability = Depends(admin_ability)) -> dict:
    order = _order(order_id)
    ability.authorize("print_invoice", "Order", order)
    return invoice_payload(order)


@router.post("/carts/cleanup", response_model=CountResponse)
async def reclaim_abandoned_carts(
    body: ReclaimCartsRequest | None = None,
    ability: Ability = Depends(admin_ability),
) -> CountResponse:
    ability.authorize("reclaim_abandoned", "Cart")
    idle_hours = body.idle_hours if body else 24
    count = current_domain.process(ReclaimAbandonedCarts(idle_hours=idle_hours), asynchronous=False)
    return CountResponse(count=count, message=f"{count} abandoned carts removed.")
