"""Back-office endpoints for categories and their display order."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.admin.api.schemas import (
    CreateCategoryRequest,
    ReorderCategoriesRequest,
    StatusResponse,
    UpdateCategoryRequest,
)
from storefront.catalogue.api.serializers import category_data
from storefront.catalogue.category.category import Category
from storefront.catalogue.category.management import (
    CreateCategory,
    DeleteCategory,
    ToggleCategoryActive,
    UpdateCategory,
)
from storefront.catalogue.category.positioning import MoveCategoryDown, MoveCategoryUp, ReorderCategories
from storefront.catalogue.product.product import Product
from storefront.identity.ability import Ability
from storefront.web.dependencies import admin_ability

router = APIRouter(prefix="/categories", tags=["admin: categories"])


def _category(category_id: str) -> Category:
    return current_domain.repository_for(Category).get(category_id)


def _with_counts(category: Category) -> dict:
    data = category_data(category)
    data["products_count"] = current_domain.repository_for(Product).count_in_category(category.id)
    return data


def _ordered() -> list[dict]:
    return [_with_counts(c) for c in current_domain.repository_for(Category).ordered()]


@router.get("")
async def list_categories(ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("read", "Category")
    return {"categories": _ordered()}


@router.post("/reorder")
async def reorder_categories(body: ReorderCategoriesRequest, ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("update", "Category")
    current_domain.process(ReorderCategories(category_ids=json.dumps(body.category_ids)), asynchronous=False)
    return {"status": "ok", "categories": _ordered()}


@router.post("", status_code=201)
async def create_category(body: CreateCategoryRequest, ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("create", "Category")
    category_id = current_domain.process(CreateCategory(**body.model_dump()), asynchronous=False)
    return {"category_id": category_id, "category": _with_counts(_category(category_id))}


@router.get("/{category_id}")
async def show_category(category_id: str, ability: Ability = Depends(admin_ability)) -> dict:
    category = _category(category_id)
    ability.authorize("read", "Category", category)
    return {"category": _with_counts(category)}


@router.patch("/{category_id}")
async def update_category(
    category_id: str,
    body: UpdateCategoryRequest,
    ability: Ability = Depends(admin_ability),
) -> dict:
    ability.authorize("update", "Category", _category(category_id))
    current_domain.process(UpdateCategory(category_id=category_id, **body.model_dump()), asynchronous=False)
    return {"category": _with_counts(_category(category_id))}


@router.delete("/{category_id}", response_model=StatusResponse)
async def delete_category(category_id: str, ability: Ability = Depends(admin_ability)) -> StatusResponse:
    ability.authorize("destroy", "Category", _category(category_id))
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return StatusResponse(message="Category was successfully deleted.")


@router.post("/{category_id}/toggle_active")
async def toggle_active(category_id: str, ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("update", "Category", _category(category_id))
    current_domain.process(ToggleCategoryActive(category_id=category_id), asynchronous=False)
    return {"status": "ok", "active": _category(category_id).active}


@router.post("/{category_id}/move_up")
async def move_up(category_id: str, ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("update", "Category", _category(category_id))
    current_domain.process(MoveCategoryUp(category_id=category_id), asynchronous=False)
    return {"status": "ok", "categories": _ordered()}


@router.post("/{category_id}/move_down")
async def move_down(category_id: str, ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("update", "Category", _category(category_id))
    current_domain.process(MoveCategoryDown(category_id=category_id), asynchronous=False)
    return {"status": "ok", "categories": _ordered()}
