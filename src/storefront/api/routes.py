"""FastAPI routes for the Storefront.

Mutations translate Pydantic schemas (external contract) into Protean
commands. Counting and stats routes read the aggregation projections
directly; a projection that has not been written yet reads as zeros.
"""

import json

import structlog
from fastapi import APIRouter, Header, HTTPException, Request
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    CountResponse,
    CreateProductRequest,
    CreateProfileRequest,
    EditReviewRequest,
    GeneralStatsResponse,
    ProductIdResponse,
    ProfileIdResponse,
    ReviewIdResponse,
    SentimentStatsResponse,
    StatusCountsResponse,
    StatusResponse,
    SubmitReviewRequest,
    UpdateProductRequest,
    UpdateProfileRequest,
    WebhookResponse,
)
from storefront.gateway import get_gateway
from storefront.gateway.port import InvalidWebhookSignature, MalformedWebhook
from storefront.payment.payment import status_for_event_type
from storefront.payment.sync import SyncPaymentRecord
from storefront.product.creation import CreateProduct
from storefront.product.details import UpdateProductDetails
from storefront.product.lifecycle import ArchiveProduct, PublishProduct, RestoreProduct
from storefront.profile.management import CreateUserProfile, UpdateUserProfile
from storefront.projections.general_aggregates import GLOBAL_ID, GeneralAggregates
from storefront.projections.product_review_summary import ProductReviewSummary
from storefront.projections.sentiment_counts import GLOBAL_ID as SENTIMENT_ID, SentimentCounts
from storefront.projections.status_counts import ENTITY_TYPES, PRODUCT, StatusCounts
from storefront.review.editing import EditReview
from storefront.review.removal import DeleteReview
from storefront.review.submission import SubmitReview

logger = structlog.get_logger(__name__)

product_router = APIRouter(prefix="/products", tags=["products"])
review_router = APIRouter(prefix="/reviews", tags=["reviews"])
profile_router = APIRouter(prefix="/profiles", tags=["profiles"])
payment_router = APIRouter(prefix="/payments", tags=["payments"])
stats_router = APIRouter(prefix="/stats", tags=["stats"])


def _get_or_none(projection_cls, identifier):
    try:
        return current_domain.repository_for(projection_cls).get(identifier)
    except ObjectNotFoundError:
        return None


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    """Create a draft product."""
    command = CreateProduct(
        name=body.name,
        price=body.price,
        currency=body.currency,
        description=body.description,
        image_key=body.image_key,
        stock=body.stock,
        owner_id=body.owner_id,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=product_id)


@product_router.get("/count", response_model=CountResponse)
async def count_products(status: str | None = None) -> CountResponse:
    """Count products, optionally only those in one status."""
    record = _get_or_none(StatusCounts, PRODUCT)
    if record is None:
        return CountResponse(count=0, status=status)
    if status is None:
        return CountResponse(count=record.total or 0)
    return CountResponse(count=record.counts().get(status, 0), status=status)


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    """Update product details."""
    command = UpdateProductDetails(
        product_id=product_id,
        name=body.name,
        price=body.price,
        currency=body.currency,
        description=body.description,
        image_key=body.image_key,
        stock=body.stock,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/publish", response_model=StatusResponse)
async def publish_product(product_id: str) -> StatusResponse:
    """Put a draft product on sale."""
    current_domain.process(PublishProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/archive", response_model=StatusResponse)
async def archive_product(product_id: str) -> StatusResponse:
    """Take a product off sale."""
    current_domain.process(ArchiveProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/restore", response_model=StatusResponse)
async def restore_product(product_id: str) -> StatusResponse:
    """Put an archived product back on sale."""
    current_domain.process(RestoreProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
@review_router.post("", status_code=201, response_model=ReviewIdResponse)
async def submit_review(body: SubmitReviewRequest) -> ReviewIdResponse:
    """Submit a new product review."""
    command = SubmitReview(
        product_id=body.product_id,
        owner_id=body.owner_id,
        rating=body.rating,
        title=body.title,
        content=body.content,
    )
    review_id = current_domain.process(command, asynchronous=False)
    return ReviewIdResponse(review_id=review_id)


@review_router.get("/count", response_model=CountResponse)
async def count_reviews(product_id: str | None = None) -> CountResponse:
    """Count live reviews, store-wide or for one product."""
    if product_id is None:
        record = _get_or_none(GeneralAggregates, GLOBAL_ID)
        return CountResponse(count=record.review_count if record else 0)

    summary = _get_or_none(ProductReviewSummary, product_id)
    return CountResponse(count=summary.review_count if summary else 0, product_id=product_id)


@review_router.put("/{review_id}", response_model=StatusResponse)
async def edit_review(review_id: str, body: EditReviewRequest) -> StatusResponse:
    """Edit an existing review."""
    command = EditReview(
        review_id=review_id,
        owner_id=body.owner_id,
        rating=body.rating,
        title=body.title,
        content=body.content,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def delete_review(review_id: str, owner_id: str) -> StatusResponse:
    """Delete a review. Only its author may do so."""
    current_domain.process(DeleteReview(review_id=review_id, owner_id=owner_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------
@profile_router.post("", status_code=201, response_model=ProfileIdResponse)
async def create_profile(body: CreateProfileRequest) -> ProfileIdResponse:
    """Create the profile for a signed-in user."""
    command = CreateUserProfile(
        owner_id=body.owner_id,
        username=body.username,
        email=body.email,
        display_name=body.display_name,
        avatar_key=body.avatar_key,
    )
    profile_id = current_domain.process(command, asynchronous=False)
    return ProfileIdResponse(profile_id=profile_id)


@profile_router.put("/{profile_id}", response_model=StatusResponse)
async def update_profile(profile_id: str, body: UpdateProfileRequest) -> StatusResponse:
    """Update a profile. Only its owner may do so."""
    command = UpdateUserProfile(
        profile_id=profile_id,
        owner_id=body.owner_id,
        username=body.username,
        email=body.email,
        display_name=body.display_name,
        avatar_key=body.avatar_key,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------
@payment_router.post("/webhook", response_model=WebhookResponse)
async def payment_webhook(
    request: Request,
    stripe_signature: str | None = Header(default=None, alias="Stripe-Signature"),
) -> WebhookResponse:
    """Receive a payment provider webhook and sync the local payment record."""
    payload = await request.body()
    try:
        event = get_gateway().parse_webhook(payload, stripe_signature or "")
    except InvalidWebhookSignature as exc:
        logger.warning("payment.webhook_rejected", reason=str(exc))
        raise HTTPException(status_code=400, detail="Invalid webhook signature") from exc
    except MalformedWebhook as exc:
        logger.warning("payment.webhook_malformed", reason=str(exc))
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    status = status_for_event_type(event.event_type)
    if status is None or not event.payment_intent_id:
        logger.info("payment.webhook_ignored", event_id=event.event_id, event_type=event.event_type)
        return WebhookResponse(status="ignored", event_id=event.event_id, event_type=event.event_type)

    command = SyncPaymentRecord(
        payment_intent_id=event.payment_intent_id,
        provider_event_id=event.event_id,
        occurred_at=event.created,
        status=status.value,
        amount=event.amount,
        currency=event.currency,
        customer_email=event.customer_email,
        product_ids=json.dumps(list(event.product_ids)),
        failure_message=event.failure_message,
    )
    outcome = current_domain.process(command, asynchronous=False)
    return WebhookResponse(status=outcome, event_id=event.event_id, event_type=event.event_type)


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------
@stats_router.get("/sentiment", response_model=SentimentStatsResponse)
async def sentiment_stats() -> SentimentStatsResponse:
    record = _get_or_none(SentimentCounts, SENTIMENT_ID)
    if record is None:
        return SentimentStatsResponse()
    return SentimentStatsResponse(
        positive=record.positive or 0,
        negative=record.negative or 0,
        neutral=record.neutral or 0,
        mixed=record.mixed or 0,
        total=record.total or 0,
    )


@stats_router.get("/general", response_model=GeneralStatsResponse)
async def general_stats() -> GeneralStatsResponse:
    record = _get_or_none(GeneralAggregates, GLOBAL_ID)
    if record is None:
        return GeneralStatsResponse()
    return GeneralStatsResponse(
        product_count=record.product_count or 0,
        review_count=record.review_count or 0,
        user_count=record.user_count or 0,
        payment_count=record.payment_count or 0,
        average_rating=record.average_rating or 0.0,
    )


@stats_router.get("/status/{entity_type}", response_model=StatusCountsResponse)
async def status_stats(entity_type: str) -> StatusCountsResponse:
    if entity_type not in ENTITY_TYPES:
        raise HTTPException(status_code=404, detail=f"Unknown entity type {entity_type}")

    record = _get_or_none(StatusCounts, entity_type)
    if record is None:
        return StatusCountsResponse(entity_type=entity_type)
    return StatusCountsResponse(entity_type=entity_type, distribution=record.counts(), total=record.total or 0)
