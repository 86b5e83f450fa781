"""Back-office endpoints for customers and administrator accounts."""

from fastapi import APIRouter, Depends, Query
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.admin.api.schemas import StatusResponse
from storefront.identity.ability import Ability
from storefront.identity.api.schemas import CreateAdminUserRequest, UpdateUserRequest
from storefront.identity.api.serializers import user_data
from storefront.identity.user.management import DeleteUser, UpdateUser
from storefront.identity.user.registration import CreateAdminUser
from storefront.identity.user.user import User
from storefront.ordering.api.serializers import order_data
from storefront.ordering.order.order import Order
from storefront.shared.pagination import paginate
from storefront.web.dependencies import admin_ability

customers_router = APIRouter(prefix="/customers", tags=["admin: customers"])
admin_users_router = APIRouter(prefix="/admin_users", tags=["admin: admin users"])

USERS_PER_PAGE = 25


def _customer(user_id: str) -> User:
    user = current_domain.repository_for(User).get(user_id)
    if user.is_admin():
        raise ObjectNotFoundError("Customer not found.")
    return user


def _admin(user_id: str) -> User:
    user = current_domain.repository_for(User).get(user_id)
    if not user.is_admin():
        raise ObjectNotFoundError("Admin user not found.")
    return user


# --- Customers ---


@customers_router.get("")
async def list_customers(
    search: str | None = None,
    page: int = Query(1, ge=1),
    ability: Ability = Depends(admin_ability),
) -> dict:
    ability.authorize("read", "User")
    customers = current_domain.repository_for(User).customers()
    if search:
        needle = search.strip().lower()
        customers = [c for c in customers if needle in c.email or needle in c.full_name().lower()]

    listing = paginate(customers, page, USERS_PER_PAGE)
    return {"customers": [user_data(c) for c in listing.items], "pagination": listing.to_dict()}


@customers_router.get("/{user_id}")
async def show_customer(user_id: str, ability: Ability = Depends(admin_ability)) -> dict:
    customer = _customer(user_id)
    ability.authorize("read", "User", customer)
    orders = current_domain.repository_for(Order).for_owner(user_id=customer.id)
    return {"customer": user_data(customer), "orders": [order_data(o) for o in orders]}


@customers_router.patch("/{user_id}")
async def update_customer(user_id: str, body: UpdateUserRequest, ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("update", "User", _customer(user_id))
    current_domain.process(UpdateUser(user_id=user_id, **body.model_dump()), asynchronous=False)
    return {"customer": user_data(_customer(user_id))}


# --- Administrators ---


@admin_users_router.get("")
async def list_admin_users(ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("read", "User")
    return {"admin_users": [user_data(u) for u in current_domain.repository_for(User).admins()]}


@admin_users_router.post("", status_code=201)
async def create_admin_user(body: CreateAdminUserRequest, ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("create", "User")
    user_id = current_domain.process(CreateAdminUser(**body.model_dump()), asynchronous=False)
    return {"user_id": user_id, "admin_user": user_data(_admin(user_id))}


@admin_users_router.get("/{user_id}")
async def show_admin_user(user_id: str, ability: Ability = Depends(admin_ability)) -> dict:
    admin = _admin(user_id)
    ability.authorize("read", "User", admin)
    return {"admin_user": user_data(admin)}


@admin_users_router.delete("/{user_id}", response_model=StatusResponse)
async def delete_admin_user(user_id: str, ability: Ability = Depends(admin_ability)) -> StatusResponse:
    ability.authorize("destroy", "User", _admin(user_id))
    command = DeleteUser(user_id=user_id, requested_by=ability.actor.user_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse(message="Admin user was successfully deleted.")
