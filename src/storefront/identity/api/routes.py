"""FastAPI endpoints for shopper accounts.

Sign-in itself is handled by the authentication gateway; these endpoints keep
the storefront's copy of the profile.
"""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.identity.ability import Ability
from storefront.identity.actor import Actor
from storefront.identity.api.schemas import RegisterUserRequest, UpdateUserRequest
from storefront.identity.api.serializers import user_data
from storefront.identity.user.management import UpdateUser
from storefront.identity.user.registration import RegisterUser
from storefront.identity.user.user import User
from storefront.shared.errors import AuthorizationDenied
from storefront.web.dependencies import current_ability, current_actor

router = APIRouter(tags=["account"])


def _signed_in_user(actor: Actor) -> User:
    if not actor.signed_in:
        raise AuthorizationDenied()
    return current_domain.repository_for(User).get(actor.user_id)


@router.post("/users", status_code=201)
async def register_user(body: RegisterUserRequest) -> dict:
    user_id = current_domain.process(RegisterUser(**body.model_dump()), asynchronous=False)
    return {"user_id": user_id}


@router.get("/account")
async def show_account(actor: Actor = Depends(current_actor), ability: Ability = Depends(current_ability)) -> dict:
    user = _signed_in_user(actor)
    ability.authorize("read", "User", user)
    return {"user": user_data(user)}


@router.patch("/account")
async def update_account(
    body: UpdateUserRequest,
    actor: Actor = Depends(current_actor),
    ability: Ability = Depends(current_ability),
) -> dict:
    user = _signed_in_user(actor)
    ability.authorize("update", "User", user)
    current_domain.process(UpdateUser(user_id=user.id, **body.model_dump()), asynchronous=False)
    return {"user": user_data(current_domain.repository_for(User).get(user.id))}
