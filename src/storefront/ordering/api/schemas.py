"""Pydantic request schemas for the cart and checkout endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AddCartItemRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product": "handmade-ceramic-mug",
                    "variant_id": None,
                    "quantity": 2,
                }
            ]
        }
    }

    product: str = Field(..., max_length=255, description="Product slug or id")
    variant_id: str | None = None
    quantity: int = Field(1, ge=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "jane@example.com",
                    "first_name": "Jane",
                    "last_name": "Doe",
                    "phone": "+1 555 010 2030",
                    "address": "12 Market Street",
                    "city": "Springfield",
                    "state": "IL",
                    "zip_code": "62701",
                    "country": "US",
                    "shipping_method": "standard",
                    "payment_method": "card",
                }
            ]
        }
    }

    email: str | None = Field(None, max_length=254)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=30)
    address: str | None = None
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, max_length=20)
    country: str | None = Field(None, max_length=100)
    notes: str | None = None
    shipping_method: str | None = Field(None, max_length=50)
    payment_method: str | None = Field(None, max_length=50)
