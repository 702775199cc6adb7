"""Pydantic request/response schemas for the Storefront API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    price: float = Field(gt=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    description: str | None = None
    image_key: str | None = Field(default=None, max_length=500)
    stock: int = Field(default=0, ge=0)
    owner_id: str | None = None


class UpdateProductRequest(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    price: float | None = Field(default=None, gt=0)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    description: str | None = None
    image_key: str | None = Field(default=None, max_length=500)
    stock: int | None = Field(default=None, ge=0)


class SubmitReviewRequest(BaseModel):
    product_id: str
    owner_id: str
    rating: int = Field(ge=1, le=5)
    content: str = Field(min_length=1)
    title: str | None = Field(default=None, max_length=200)


class EditReviewRequest(BaseModel):
    owner_id: str
    rating: int | None = Field(default=None, ge=1, le=5)
    title: str | None = Field(default=None, max_length=200)
    content: str | None = Field(default=None, min_length=1)


class CreateProfileRequest(BaseModel):
    owner_id: str
    username: str = Field(min_length=1, max_length=100)
    email: str = Field(max_length=254)
    display_name: str | None = Field(default=None, max_length=100)
    avatar_key: str | None = Field(default=None, max_length=500)


class UpdateProfileRequest(BaseModel):
    owner_id: str
    username: str | None = Field(default=None, max_length=100)
    email: str | None = Field(default=None, max_length=254)
    display_name: str | None = Field(default=None, max_length=100)
    avatar_key: str | None = Field(default=None, max_length=500)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ProductIdResponse(BaseModel):
    product_id: str


class ReviewIdResponse(BaseModel):
    review_id: str


class ProfileIdResponse(BaseModel):
    profile_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class CountResponse(BaseModel):
    count: int
    status: str | None = None
    product_id: str | None = None


class WebhookResponse(BaseModel):
    status: str
    event_id: str | None = None
    event_type: str | None = None


class SentimentStatsResponse(BaseModel):
    positive: int = 0
    negative: int = 0
    neutral: int = 0
    mixed: int = 0
    total: int = 0


class GeneralStatsResponse(BaseModel):
    product_count: int = 0
    review_count: int = 0
    user_count: int = 0
    payment_count: int = 0
    average_rating: float = 0.0


class StatusCountsResponse(BaseModel):
    entity_type: str
    distribution: dict[str, int] = Field(default_factory=dict)
    total: int = 0
