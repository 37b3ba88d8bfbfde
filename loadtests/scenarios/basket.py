"""Basket load test scenarios.

A shopper fills a basket, changes one line, drops another, checks out and
reads the order history. Every request carries the shopper's ``X-User-Id``.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import line_item_data, loadtest_user
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import BasketState


class BasketCheckoutJourney(SequentialTaskSet):
    """Clear -> Add x3 -> Change count -> Remove -> Checkout -> Order history."""

    def on_start(self):
        self.state = BasketState(user=loadtest_user())

    @property
    def headers(self):
        return {"X-User-Id": self.state.user}

    @task
    def clear_basket(self):
        self.state.product_ids = []
        with self.client.delete("/basket", headers=self.headers, catch_response=True, name="DELETE /basket") as resp:
            if resp.status_code != 204:
                resp.failure(f"Clear basket failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def add_items(self):
        for _ in range(3):
            item = line_item_data()
            if item["productId"] in self.state.product_ids:
                continue
            with self.client.post(
                f"/basket/{item['productId']}",
                json=item,
                headers=self.headers,
                catch_response=True,
                name="POST /basket/{productId}",
            ) as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(item["productId"])
                else:
                    resp.failure(f"Add item failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def change_count(self):
        if not self.state.product_ids:
            return
        pid = random.choice(self.state.product_ids)
        with self.client.patch(
            f"/basket/{pid}",
            json=line_item_data(pid, count=2),
            headers=self.headers,
            catch_response=True,
            name="PATCH /basket/{productId}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Change count failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def remove_item(self):
        if len(self.state.product_ids) < 2:
            return
        pid = self.state.product_ids.pop()
        with self.client.delete(
            f"/basket/{pid}",
            headers=self.headers,
            catch_response=True,
            name="DELETE /basket/{productId}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Remove item failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def checkout(self):
        if not self.state.product_ids:
            return
        with self.client.post("/basket", headers=self.headers, catch_response=True, name="POST /basket") as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["id"])
            else:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def order_history(self):
        with self.client.get("/orders", headers=self.headers, catch_response=True, name="GET /orders") as resp:
            if resp.status_code != 200:
                resp.failure(f"Order history failed: {resp.status_code} — {extract_error_detail(resp)}")
        self.interrupt()


class BasketUser(HttpUser):
    tasks = [BasketCheckoutJourney]
    wait_time = between(0.5, 2)
