"""Checkout and fulfilment load test scenarios.

Each journey lists a fresh product as an artisan so customers never compete
for the same stock, places an order and then drives it through the lifecycle.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    cancellation_reason,
    checkout_data,
    identity_headers,
    product_data,
    tracking_data,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import OrderState


class _OrderJourney(SequentialTaskSet):
    def on_start(self):
        self.state = OrderState()
        self.artisan = identity_headers("artisan")
        self.customer = identity_headers("customer")
        self.state.seller_id = self.artisan["X-User-Id"]
        self.state.customer_id = self.customer["X-User-Id"]

    def _advance(self, status, **extra):
        payload = {"status": status, **extra}
        with self.client.put(
            f"/orders/{self.state.order_id}/status",
            json=payload,
            headers=self.artisan,
            catch_response=True,
            name=f"PUT /orders/{{id}}/status [{status}]",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = resp.json()["data"]["status"]
            else:
                resp.failure(f"Move to {status} failed: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def list_product(self):
        with self.client.post(
            "/products",
            json=product_data(quantity=random.randint(10, 30)),
            headers=self.artisan,
            catch_response=True,
            name="POST /products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_id = resp.json()["data"]["id"]
            else:
                resp.failure(f"List product failed: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def place_order(self):
        with self.client.post(
            "/orders",
            json=checkout_data([self.state.product_id]),
            headers=self.customer,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["data"]["id"]
            else:
                resp.failure(f"Checkout failed: {extract_error_detail(resp)}")
                self.interrupt()


class FulfilmentJourney(_OrderJourney):
    """List -> Order -> Confirm -> Accept -> Produce -> Ready -> Ship -> Deliver."""

    @task
    def confirm(self):
        self._advance("confirmed")

    @task
    def accept(self):
        self._advance("artisan-accepted", note="Happy to make this one")

    @task
    def start_production(self):
        self._advance("in-production")

    @task
    def ready(self):
        self._advance("ready-to-ship")

    @task
    def ship(self):
        self._advance("shipped", trackingInfo=tracking_data())

    @task
    def deliver(self):
        self._advance("delivered")

    @task
    def customer_checks_order(self):
        self.client.get(f"/orders/{self.state.order_id}", headers=self.customer, name="GET /orders/{id}")
        self.interrupt()


class CancellationJourney(_OrderJourney):
    """List -> Order -> Customer Cancels -> Stock Check."""

    @task
    def cancel(self):
        with self.client.put(
            f"/orders/{self.state.order_id}/cancel",
            json={"reason": cancellation_reason()},
            headers=self.customer,
            catch_response=True,
            name="PUT /orders/{id}/cancel",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = resp.json()["data"]["status"]
            else:
                resp.failure(f"Cancel failed: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def stock_restored(self):
        self.client.get(f"/products/{self.state.product_id}", name="GET /products/{id}")
        self.interrupt()


class OrderHistoryBrowsing(SequentialTaskSet):
    """A customer pages through their order history."""

    def on_start(self):
        self.customer = identity_headers("customer")

    @task
    def list_orders(self):
        with self.client.get(
            "/orders?page=1&limit=10",
            headers=self.customer,
            catch_response=True,
            name="GET /orders",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"List orders failed: {extract_error_detail(resp)}")
        self.interrupt()


class CheckoutUser(HttpUser):
    wait_time = between(0.5, 2.0)
    tasks = {
        FulfilmentJourney: 4,
        CancellationJourney: 2,
        OrderHistoryBrowsing: 3,
    }
