"""Back-office endpoints for products and their variants."""

import json
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from protean.utils.globals import current_domain

from storefront.admin.api.schemas import (
    BulkDestroyProductsRequest,
    BulkUpdateProductsRequest,
    CountResponse,
    CreateProductRequest,
    StatusResponse,
    UpdateProductRequest,
    UpdateVariantRequest,
    VariantRequest,
)
from storefront.catalogue.api.serializers import page_data, product_data, review_data, variant_data
from storefront.catalogue.product.bulk import BulkDestroyProducts, BulkUpdateProducts
from storefront.catalogue.product.creation import CreateProduct
from storefront.catalogue.product.details import UpdateProduct
from storefront.catalogue.product.duplication import DuplicateProduct
from storefront.catalogue.product.export import products_csv
from storefront.catalogue.product.lifecycle import DeleteProduct, ToggleProductActive, ToggleProductFeatured
from storefront.catalogue.product.product import Product
from storefront.catalogue.product.queries import admin_listing, admin_products
from storefront.catalogue.product.variants import AddVariant, RemoveVariant, UpdateVariant
from storefront.identity.ability import Ability
from storefront.reviews.review.review import Review
from storefront.web.dependencies import admin_ability

router = APIRouter(prefix="/products", tags=["admin: products"])


def _product(product_id: str) -> Product:
    return current_domain.repository_for(Product).get(product_id)


def _admin_product_data(product: Product) -> dict:
    return product_data(product, variants=list(product.variants))


@router.get("")
async def list_products(
    search: str | None = None,
    category_id: str | None = None,
    active: bool | None = None,
    low_stock: bool = False,
    sort: str | None = None,
    page: int = Query(1, ge=1),
    ability: Ability = Depends(admin_ability),
) -> dict:
    ability.authorize("read", "Product")
    listing = admin_listing(
        page=page,
        search=search,
        category_id=category_id,
        active=active,
        low_stock=low_stock,
        sort=sort,
    )
    return {"products": page_data(listing, _admin_product_data)}


@router.get("/export")
async def export_products(
    search: str | None = None,
    category_id: str | None = None,
    active: bool | None = None,
    low_stock: bool = False,
    ability: Ability = Depends(admin_ability),
) -> Response:
    ability.authorize("export", "Product")
    products = admin_products(search=search, category_id=category_id, active=active, low_stock=low_stock)
    filename = f"products-{datetime.now(UTC):%Y-%m-%d}.csv"
    return Response(
        content=products_csv(products),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/bulk_update", response_model=CountResponse)
async def bulk_update(body: BulkUpdateProductsRequest, ability: Ability = Depends(admin_ability)) -> CountResponse:
    ability.authorize("bulk_update", "Product")
    command = BulkUpdateProducts(
        product_ids=json.dumps(body.product_ids),
        active=body.active,
        featured=body.featured,
        category_id=body.category_id,
    )
    count = current_domain.process(command, asynchronous=False)
    return CountResponse(count=count, message=f"{count} products updated successfully.")


@router.post("/bulk_destroy", response_model=CountResponse)
async def bulk_destroy(body: BulkDestroyProductsRequest, ability: Ability = Depends(admin_ability)) -> CountResponse:
    ability.authorize("bulk_destroy", "Product")
    command = BulkDestroyProducts(product_ids=json.dumps(body.product_ids))
    count = current_domain.process(command, asynchronous=False)
    return CountResponse(count=count, message=f"{count} products deleted successfully.")


@router.post("", status_code=201)
async def create_product(body: CreateProductRequest, ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("create", "Product")
    product_id = current_domain.process(CreateProduct(**body.model_dump()), asynchronous=False)
    return {"product_id": product_id, "product": _admin_product_data(_product(product_id))}


@router.get("/{product_id}")
async def show_product(product_id: str, ability: Ability = Depends(admin_ability)) -> dict:
    product = _product(product_id)
    ability.authorize("read", "Product", product)
    reviews = current_domain.repository_for(Review).for_product(product.id, approved_only=False)
    return {"product": _admin_product_data(product), "reviews": [review_data(r) for r in reviews]}


@router.patch("/{product_id}")
async def update_product(product_id: str, body: UpdateProductRequest, ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("update", "Product", _product(product_id))
    current_domain.process(UpdateProduct(product_id=product_id, **body.model_dump()), asynchronous=False)
    return {"product": _admin_product_data(_product(product_id))}


@router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str, ability: Ability = Depends(admin_ability)) -> StatusResponse:
    ability.authorize("destroy", "Product", _product(product_id))
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse(message="Product was successfully deleted.")


@router.post("/{product_id}/toggle_active")
async def toggle_active(product_id: str, ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("toggle_active", "Product", _product(product_id))
    current_domain.process(ToggleProductActive(product_id=product_id), asynchronous=False)
    product = _product(product_id)
    return {"status": "ok", "active": product.active}


@router.post("/{product_id}/toggle_featured")
async def toggle_featured(product_id: str, ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("toggle_featured", "Product", _product(product_id))
    current_domain.process(ToggleProductFeatured(product_id=product_id), asynchronous=False)
    product = _product(product_id)
    return {"status": "ok", "featured": product.featured}


@router.post("/{product_id}/duplicate", status_code=201)
async def duplicate_product(product_id: str, ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("duplicate", "Product", _product(product_id))
    copy_id = current_domain.process(DuplicateProduct(product_id=product_id), asynchronous=False)
    return {"product_id": copy_id, "product": _admin_product_data(_product(copy_id))}


# --- Variant endpoints ---


@router.post("/{product_id}/variants", status_code=201)
async def add_variant(product_id: str, body: VariantRequest, ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("create", "ProductVariant")
    variant_id = current_domain.process(AddVariant(product_id=product_id, **body.model_dump()), asynchronous=False)
    product = _product(product_id)
    return {"variant_id": variant_id, "variant": variant_data(product.get_variant(variant_id), product.name)}


@router.patch("/{product_id}/variants/{variant_id}")
async def update_variant(
    product_id: str,
    variant_id: str,
    body: UpdateVariantRequest,
    ability: Ability = Depends(admin_ability),
) -> dict:
    ability.authorize("update", "ProductVariant")
    command = UpdateVariant(product_id=product_id, variant_id=variant_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    product = _product(product_id)
    return {"variant": variant_data(product.get_variant(variant_id), product.name)}


@router.delete("/{product_id}/variants/{variant_id}", response_model=StatusResponse)
async def remove_variant(product_id: str, variant_id: str, ability: Ability = Depends(admin_ability)) -> StatusResponse:
    ability.authorize("destroy", "ProductVariant")
    current_domain.process(RemoveVariant(product_id=product_id, variant_id=variant_id), asynchronous=False)
    return StatusResponse(message="Variant was successfully deleted.")
