"""Order totals: line totals, tax and shipping."""

from marketplace.config import PricingPolicy


def to_cents(amount: float) -> float:
    return round(amount, 2)


def line_total(unit_price: float, quantity: int) -> float:
    return to_cents(unit_price * quantity)


def summarize(line_totals, policy: PricingPolicy | None = None) -> dict:
    """Compute ``subtotal``, ``tax``, ``shipping`` and ``total`` for an order.

    Shipping is free once the subtotal is strictly above the policy's
    threshold. Every amount is rounded to cents, and ``total`` is the sum of
    the rounded parts so the figures always add up.
    """
    policy = policy or PricingPolicy()

    subtotal = to_cents(sum(line_totals))
    tax = to_cents(subtotal * policy.tax_rate)
    shipping = 0.0 if subtotal > policy.free_shipping_threshold else to_cents(policy.flat_shipping_fee)
    return {
        "subtotal": subtotal,
        "tax": tax,
        "shipping": shipping,
        "total": to_cents(subtotal + tax + shipping),
    }
