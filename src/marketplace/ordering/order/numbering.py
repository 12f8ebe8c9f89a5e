"""Human-readable order numbers: ``RM`` + six clock digits + three random digits."""

import random
import time

PREFIX = "RM"


def generate_order_number(now_ms: int | None = None, rng: random.Random | None = None) -> str:
    now_ms = int(time.time() * 1000) if now_ms is None else now_ms
    rng = rng or random
    return f"{PREFIX}{str(now_ms)[-6:].zfill(6)}{rng.randint(0, 999):03d}"


def next_order_number(is_taken, attempts: int = 5, **kwargs) -> str:
    """Generate a number that ``is_taken`` reports as free.

    Raises ``RuntimeError`` if every attempt collides.
    """
    for _ in range(attempts):
        candidate = generate_order_number(**kwargs)
        if not is_taken(candidate):
            return candidate
    raise RuntimeError(f"Could not allocate a unique order number after {attempts} attempts")
