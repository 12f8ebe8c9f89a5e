"""Catalogue load test scenarios.

An artisan lists products, edits one, restocks it and checks the
low-stock report. Steps execute in order and each depends on the previous
step succeeding.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import identity_headers, product_data, product_update_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import SellerState


class ArtisanListingJourney(SequentialTaskSet):
    """List Product x2 -> Update Details -> Restock -> Low-Stock Report."""

    def on_start(self):
        self.state = SellerState()
        self.headers = identity_headers("artisan")
        self.state.seller_id = self.headers["X-User-Id"]

    def _list_product(self, quantity=None):
        with self.client.post(
            "/products",
            json=product_data(quantity=quantity),
            headers=self.headers,
            catch_response=True,
            name="POST /products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_ids.append(resp.json()["data"]["id"])
            else:
                resp.failure(f"List product failed: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def list_first_product(self):
        self._list_product()

    @task
    def list_scarce_product(self):
        self._list_product(quantity=random.randint(0, 5))

    @task
    def update_details(self):
        with self.client.put(
            f"/products/{self.state.product_ids[0]}",
            json=product_update_data(),
            headers=self.headers,
            catch_response=True,
            name="PUT /products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update product failed: {extract_error_detail(resp)}")

    @task
    def restock(self):
        with self.client.put(
            f"/products/{self.state.product_ids[-1]}/inventory",
            json={"quantity": random.randint(10, 50)},
            headers=self.headers,
            catch_response=True,
            name="PUT /products/{id}/inventory",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Restock failed: {extract_error_detail(resp)}")

    @task
    def low_stock_report(self):
        with self.client.get(
            "/products/low-stock",
            headers=self.headers,
            catch_response=True,
            name="GET /products/low-stock",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Low-stock report failed: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CatalogueBrowsing(SequentialTaskSet):
    """Anonymous browsing: category listing then a product detail page."""

    @task
    def browse_category(self):
        category = random.choice(["fresh-food", "handmade-crafts", "pottery", "textiles"])
        with self.client.get(
            f"/products?category={category}&limit=20",
            catch_response=True,
            name="GET /products?category",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Browse failed: {extract_error_detail(resp)}")
                self.interrupt()
                return
            products = resp.json()["data"]
            self.product_id = products[0]["id"] if products else None

    @task
    def view_product(self):
        if self.product_id:
            self.client.get(f"/products/{self.product_id}", name="GET /products/{id}")
        self.interrupt()


class CatalogueUser(HttpUser):
    wait_time = between(0.5, 2.0)
    tasks = {
        ArtisanListingJourney: 2,
        CatalogueBrowsing: 5,
    }
