"""Pydantic request schemas for the Reviews API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SubmitReviewRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "rating": 5,
                    "title": "Lovely glaze",
                    "content": "The mug keeps coffee warm and the glaze is even better in person.",
                }
            ]
        }
    }

    rating: int = Field(..., ge=1, le=5)
    title: str = Field(..., max_length=100)
    content: str = Field(..., max_length=1000)
