"""Pydantic request/response schemas for the back-office API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Product Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Handmade Ceramic Mug",
                    "description": "Wheel-thrown stoneware mug with a speckled glaze.",
                    "price": 24.0,
                    "category_id": "cat-kitchen-001",
                    "inventory_count": 18,
                    "weight": 0.4,
                    "materials": "Stoneware",
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    description: str
    price: float = Field(..., gt=0)
    category_id: str
    sku: str | None = Field(None, max_length=50)
    slug: str | None = Field(None, max_length=255)
    inventory_count: int = Field(0, ge=0)
    active: bool = True
    featured: bool = False
    weight: float | None = None
    dimensions: str | None = Field(None, max_length=100)
    materials: str | None = None
    care_instructions: str | None = None
    image_url: str | None = Field(None, max_length=500)


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, max_length=255)
    description: str | None = None
    price: float | None = None
    category_id: str | None = None
    inventory_count: int | None = Field(None, ge=0)
    active: bool | None = None
    featured: bool | None = None
    weight: float | None = None
    dimensions: str | None = Field(None, max_length=100)
    materials: str | None = None
    care_instructions: str | None = None
    image_url: str | None = Field(None, max_length=500)


class BulkUpdateProductsRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"product_ids": ["prod-001", "prod-002"], "featured": True}]}
    }

    product_ids: list[str]
    active: bool | None = None
    featured: bool | None = None
    category_id: str | None = None


class BulkDestroyProductsRequest(BaseModel):
    product_ids: list[str]


class VariantRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"name": "Large Blue", "color": "Blue", "size": "Large", "price": 28.0, "inventory_count": 6}]
        }
    }

    name: str = Field(..., max_length=255)
    sku: str | None = Field(None, max_length=80)
    price: float | None = None
    inventory_count: int = Field(0, ge=0)
    color: str | None = Field(None, max_length=50)
    size: str | None = Field(None, max_length=50)
    style: str | None = Field(None, max_length=50)
    active: bool = True
    image_url: str | None = Field(None, max_length=500)


class UpdateVariantRequest(BaseModel):
    name: str | None = Field(None, max_length=255)
    sku: str | None = Field(None, max_length=80)
    price: float | None = None
    inventory_count: int | None = Field(None, ge=0)
    color: str | None = Field(None, max_length=50)
    size: str | None = Field(None, max_length=50)
    style: str | None = Field(None, max_length=50)
    active: bool | None = None
    image_url: str | None = Field(None, max_length=500)


# --- Category Request Schemas ---


class CreateCategoryRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"name": "Kitchen", "description": "Cookware and tableware"}]}}

    name: str = Field(..., max_length=100)
    description: str | None = None
    position: int | None = Field(None, ge=0)
    active: bool = True


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(None, max_length=100)
    description: str | None = None
    position: int | None = Field(None, ge=0)
    active: bool | None = None


class ReorderCategoriesRequest(BaseModel):
    category_ids: list[str]


# --- Order Request Schemas ---


class UpdateOrderRequest(BaseModel):
    notes: str | None = None


class UpdateOrderStatusRequest(BaseModel):
    status: str = Field(..., max_length=30)


class UpdatePaymentStatusRequest(BaseModel):
    payment_status: str = Field(..., max_length=30)


class SendTrackingEmailRequest(BaseModel):
    tracking_number: str | None = Field(None, max_length=100)


class ReclaimCartsRequest(BaseModel):
    idle_hours: int = Field(24, ge=1)


# --- Review Request Schemas ---


class UpdateReviewRequest(BaseModel):
    rating: int | None = Field(None, ge=1, le=5)
    title: str | None = Field(None, max_length=100)
    content: str | None = Field(None, max_length=1000)
    approved: bool | None = None


# --- Article Request Schemas ---


class CreateArticleRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Caring for Stoneware",
                    "content": "<p>Stoneware lasts for decades when it is treated well.</p>",
                    "category": "Guides",
                    "tags": "care, ceramics",
                    "published": True,
                }
            ]
        }
    }

    title: str = Field(..., max_length=255)
    content: str
    slug: str | None = Field(None, max_length=255)
    excerpt: str | None = Field(None, max_length=500)
    published: bool = False
    featured: bool = False
    category: str | None = Field(None, max_length=100)
    tags: str | None = None
    meta_title: str | None = Field(None, max_length=60)
    meta_description: str | None = Field(None, max_length=160)


class UpdateArticleRequest(BaseModel):
    title: str | None = Field(None, max_length=255)
    content: str | None = None
    excerpt: str | None = Field(None, max_length=500)
    published: bool | None = None
    featured: bool | None = None
    category: str | None = Field(None, max_length=100)
    tags: str | None = None
    meta_title: str | None = Field(None, max_length=60)
    meta_description: str | None = Field(None, max_length=160)


# --- Response Schemas ---


class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"
    message: str | None = None


class CountResponse(BaseModel):
    count: int
    message: str
