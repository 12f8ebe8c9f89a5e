"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the domain's validation rules
and match the camelCase field names of the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

CATEGORIES = [
    "fresh-food",
    "vegetables",
    "fruits",
    "dairy",
    "handmade-crafts",
    "textiles",
    "pottery",
    "woodwork",
    "local-art",
]

UNITS = ["kg", "piece", "dozen", "bunch", "bag"]

PAYMENT_METHODS = ["credit_card", "debit_card", "paypal", "bank_transfer", "cash_on_delivery"]


def identity_headers(role: str, user_id: str | None = None) -> dict:
    """Headers the upstream gateway would forward for an authenticated user."""
    return {
        "X-User-Id": user_id or f"{role}-lt-{uuid.uuid4().hex[:8]}",
        "X-User-Role": role,
    }


def product_data(quantity: int | None = None) -> dict:
    """Generate CreateProductRequest payload."""
    return {
        "name": fake.catch_phrase()[:100],
        "description": fake.paragraph(nb_sentences=2)[:1000],
        "price": round(random.uniform(2.0, 80.0), 2),
        "category": random.choice(CATEGORIES),
        "inventory": {
            "quantity": quantity if quantity is not None else random.randint(20, 200),
            "unit": random.choice(UNITS),
        },
    }


def product_update_data() -> dict:
    return {
        "price": round(random.uniform(2.0, 80.0), 2),
        "description": fake.paragraph(nb_sentences=3)[:1000],
    }


def shipping_address_data() -> dict:
    return {
        "name": fake.name()[:100],
        "street": fake.street_address()[:200],
        "city": fake.city()[:100],
        "state": fake.state_abbr(),
        "zipCode": fake.zipcode()[:20],
        "country": "US",
        "phone": fake.numerify("+1-###-###-####"),
    }


def checkout_data(product_ids: list[str]) -> dict:
    """Generate PlaceOrderRequest payload for one or more products."""
    return {
        "items": [{"product": product_id, "quantity": random.randint(1, 3)} for product_id in product_ids],
        "shippingAddress": shipping_address_data(),
        "paymentInfo": {
            "method": random.choice(PAYMENT_METHODS),
            "transactionId": f"tx-{uuid.uuid4().hex[:10]}",
        },
    }


def tracking_data() -> dict:
    return {
        "carrier": random.choice(["Rural Post", "Valley Freight", "County Courier"]),
        "trackingNumber": f"TRK-{uuid.uuid4().hex[:10].upper()}",
        "estimatedDelivery": fake.date_between(start_date="+1d", end_date="+10d").isoformat(),
    }


def cancellation_reason() -> str:
    return random.choice(
        [
            "Ordered by mistake",
            "Found it at the farmers market",
            "Delivery window too long",
        ]
    )
