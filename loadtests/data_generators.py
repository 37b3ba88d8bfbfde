"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the API's request validation:
product ids are six dash-separated digits, prices stay within 10..100 and
product names are never blank.
"""

import os
import random

from faker import Faker

fake = Faker()

LOADTEST_USERS = int(os.environ.get("LOADTEST_USERS", "50"))


def loadtest_user() -> str:
    """Pick one of the pre-seeded load test accounts.

    Seed them first with ``python src/manage.py open-account loadtest-N --balance 100000``
    for N in ``0..LOADTEST_USERS-1``.
    """
    return f"loadtest-{random.randrange(LOADTEST_USERS)}"


def product_id() -> str:
    return "-".join(str(random.randint(0, 9)) for _ in range(6))


def line_item_data(pid: str | None = None, count: int | None = None) -> dict:
    return {
        "productId": pid or product_id(),
        "productName": fake.catch_phrase()[:255],
        "count": count or random.randint(1, 2),
        "price": round(random.uniform(10, 100), 2),
    }
