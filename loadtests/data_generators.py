"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the domain's validation rules
(EmailAddress VO, username handle, ISO currency, rating range) and match
the exact field names expected by the API's Pydantic request schemas.
"""

import json
import random
import time
import uuid

from faker import Faker

fake = Faker()

POSITIVE_PHRASES = ["Great quality", "I love it", "Excellent value", "Would recommend"]
NEGATIVE_PHRASES = ["Terrible fit", "It broke quickly", "Poor stitching", "Awful support"]
NEUTRAL_PHRASES = ["Arrived on time", "Does what it says", "Standard packaging"]


def unique_owner_id() -> str:
    """Generate subject ids like the hosted auth provider issues."""
    return f"user-lt-{uuid.uuid4().hex[:12]}"


# ---------- Products ----------


def product_data(owner_id: str | None = None) -> dict:
    """Generate CreateProductRequest payload matching schema field names."""
    return {
        "name": f"{fake.word().capitalize()} {fake.word().capitalize()}"[:255],
        "price": round(random.uniform(4.99, 499.99), 2),
        "currency": random.choice(["USD", "EUR", "GBP"]),
        "description": fake.paragraph(nb_sentences=3),
        "image_key": f"products/{uuid.uuid4().hex}.jpg",
        "stock": random.randint(0, 500),
        "owner_id": owner_id or f"seller-{uuid.uuid4().hex[:6]}",
    }


def product_update_data() -> dict:
    return {
        "price": round(random.uniform(4.99, 499.99), 2),
        "stock": random.randint(0, 500),
    }


# ---------- Reviews ----------


def review_content(tone: str | None = None) -> str:
    """Review text with a predictable tone for the lexicon analyzer."""
    tone = tone or random.choice(["positive", "negative", "neutral", "mixed"])
    if tone == "positive":
        lead = random.choice(POSITIVE_PHRASES)
    elif tone == "negative":
        lead = random.choice(NEGATIVE_PHRASES)
    elif tone == "mixed":
        lead = f"{random.choice(POSITIVE_PHRASES)} but {random.choice(NEGATIVE_PHRASES).lower()}"
    else:
        lead = random.choice(NEUTRAL_PHRASES)
    return f"{lead}. {fake.sentence(nb_words=10)}"


def review_data(product_id: str, owner_id: str, tone: str | None = None) -> dict:
    """Generate SubmitReviewRequest payload."""
    return {
        "product_id": product_id,
        "owner_id": owner_id,
        "rating": random.randint(1, 5),
        "title": fake.sentence(nb_words=4)[:200],
        "content": review_content(tone),
    }


# ---------- Profiles ----------


def valid_email() -> str:
    """Generate emails that pass EmailAddress VO validation."""
    local = fake.user_name()[:20]
    domain = fake.free_email_domain()
    return f"{local}.{uuid.uuid4().hex[:4]}@{domain}"


def profile_data(owner_id: str) -> dict:
    """Generate CreateProfileRequest payload. Usernames are whitespace-free handles."""
    return {
        "owner_id": owner_id,
        "username": f"{fake.user_name()[:80]}{uuid.uuid4().hex[:6]}",
        "email": valid_email(),
        "display_name": fake.name()[:100],
    }


# ---------- Payments ----------


def payment_intent_event(event_type: str, payment_intent_id: str, product_ids: list[str], amount: int) -> bytes:
    """A Stripe-shaped webhook body, accepted by the fake gateway."""
    body = {
        "id": f"evt_{uuid.uuid4().hex[:24]}",
        "object": "event",
        "type": event_type,
        "created": int(time.time()),
        "data": {
            "object": {
                "id": payment_intent_id,
                "object": "payment_intent",
                "amount": amount,
                "currency": "usd",
                "receipt_email": valid_email(),
                "metadata": {"product_ids": ",".join(product_ids)},
            }
        },
    }
    return json.dumps(body).encode()


def unique_payment_intent_id() -> str:
    return f"pi_lt_{uuid.uuid4().hex[:20]}"
