"""Tests for line totals, tax and shipping."""

import pytest
from marketplace.config import PricingPolicy
from marketplace.ordering.order.pricing import line_total, summarize


class TestLineTotal:
    def test_multiplies_price_by_quantity(self):
        assert line_total(10.0, 2) == 20.0

    def test_rounds_to_cents(self):
        assert line_total(0.1, 3) == 0.3


class TestSummarize:
    def test_worked_example(self):
        assert summarize([20.0, 25.0]) == {
            "subtotal": 45.0,
            "tax": 4.5,
            "shipping": 10.0,
            "total": 59.5,
        }

    def test_free_shipping_above_threshold(self):
        summary = summarize([50.01])
        assert summary["shipping"] == 0.0
        assert summary["total"] == pytest.approx(55.01)

    def test_threshold_itself_still_pays_shipping(self):
        assert summarize([50.0])["shipping"] == 10.0

    def test_total_is_sum_of_parts(self):
        summary = summarize([3.33, 7.77, 0.01])
        assert summary["total"] == round(summary["subtotal"] + summary["tax"] + summary["shipping"], 2)

    def test_custom_policy(self):
        policy = PricingPolicy(tax_rate=0.2, free_shipping_threshold=100.0, flat_shipping_fee=5.0)
        assert summarize([60.0], policy) == {
            "subtotal": 60.0,
            "tax": 12.0,
            "shipping": 5.0,
            "total": 77.0,
        }
