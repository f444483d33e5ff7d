"""Shared pytest fixtures for point-of-sale tests."""

import random
from dataclasses import replace
from decimal import Decimal

import pytest

from silzey_pos.catalog import Product, generate
from silzey_pos.config import PosConfig
from silzey_pos.session import Screen, new_session

SEED = 1234


class FakeTimer:
    """Handle returned by FakeScheduler.call_later."""

    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Records scheduled callbacks; tests fire them explicitly."""

    def __init__(self):
        self.timers = []

    def call_later(self, delay, callback):
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self):
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def fire_next(self):
        timer = self.pending[0]
        timer.fired = True
        timer.callback()
        return timer

    def fire_all(self):
        while self.pending:
            self.fire_next()


def priced_catalog(prices=None, seed=SEED):
    """Catalog source with seeded randomness and optional fixed prices by id."""
    prices = prices or {}

    def source(category):
        products = generate(category, random.Random(seed))
        return [
            replace(p, price=Decimal(prices[p.id])) if p.id in prices else p
            for p in products
        ]

    return source


def make_product(product_id="Flower-1", price="20.00", name=None, tags="Organic") -> Product:
    return Product(
        id=product_id,
        name=name or f"Product {product_id}",
        image="https://example.test/img.jpeg?h=150&w=200",
        price=Decimal(price),
        tags=tags,
        rating=Decimal("4.5"),
    )


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def config():
    return PosConfig()


@pytest.fixture
def catalog_source():
    return priced_catalog({"Flower-1": "20.00", "Flower-2": "15.50"})


@pytest.fixture
def session(config, catalog_source):
    """A browsing session on Flower with Flower-1 at 20.00 and Flower-2 at 15.50."""
    return new_session(config, catalog_source, Screen.BROWSING)


@pytest.fixture
def product():
    return make_product()


@pytest.fixture
def product_factory():
    return make_product


@pytest.fixture
def catalog_factory():
    return priced_catalog
