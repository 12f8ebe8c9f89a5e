"""Business settings read from the environment.

Settings are loaded once per process and handed to the code that needs them;
tests build their own ``Settings`` or ``PricingPolicy`` directly.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw not in (None, "") else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw not in (None, "") else default


@dataclass(frozen=True)
class PricingPolicy:
    """Tax and shipping rules applied at checkout."""

    tax_rate: float = 0.10
    free_shipping_threshold: float = 50.0
    flat_shipping_fee: float = 10.0


@dataclass(frozen=True)
class Settings:
    pricing: PricingPolicy = field(default_factory=PricingPolicy)
    low_stock_threshold: int = 5
    page_size: int = 10
    max_page_size: int = 100
    # Upper bound on records pulled into memory when a listing has to be
    # filtered on a field the store cannot query directly.
    scan_limit: int = 10_000


def load_settings() -> Settings:
    return Settings(
        pricing=PricingPolicy(
            tax_rate=_env_float("MARKETPLACE_TAX_RATE", 0.10),
            free_shipping_threshold=_env_float("MARKETPLACE_FREE_SHIPPING_THRESHOLD", 50.0),
            flat_shipping_fee=_env_float("MARKETPLACE_FLAT_SHIPPING_FEE", 10.0),
        ),
        low_stock_threshold=_env_int("MARKETPLACE_LOW_STOCK_THRESHOLD", 5),
        page_size=_env_int("MARKETPLACE_PAGE_SIZE", 10),
        max_page_size=_env_int("MARKETPLACE_MAX_PAGE_SIZE", 100),
        scan_limit=_env_int("MARKETPLACE_SCAN_LIMIT", 10_000),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
