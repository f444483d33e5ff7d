"""Catalog source: generated per-category product lists.

Product ids and tags are deterministic for a category. Prices and ratings
are drawn from the supplied random source, so they are only reproducible
when the caller passes a seeded ``random.Random``.
"""

import math
import random
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .errors import UnknownCategoryError

CATEGORIES = ("Flower", "Concentrates", "Vapes", "Edibles")
DEFAULT_CATEGORY = CATEGORIES[0]

TAGS = ("Organic", "Hybrid", "Indica", "Sativa")

CATALOG_SIZE = 100

PRICE_MIN = 10
PRICE_SPAN = 50
RATING_MAX = 5

_PEXELS = "https://images.pexels.com/photos/{0}/pexels-photo-{0}.jpeg?auto=compress&cs=tinysrgb&h=150&w=200"

IMAGE_POOLS = {
    "Flower": (_PEXELS.format(7667726), _PEXELS.format(7667760)),
    "Concentrates": (_PEXELS.format(7667727), _PEXELS.format(7667723)),
    "Vapes": (_PEXELS.format(4041323), _PEXELS.format(3738934)),
    "Edibles": (_PEXELS.format(106343), _PEXELS.format(70497)),
}

THUMBNAIL_SIZE = "h=150&w=200"
DETAIL_SIZE = "h=350&w=500"

FULL_STAR = "★"
HALF_STAR = "⯨"
EMPTY_STAR = "☆"


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    image: str
    price: Decimal
    tags: str
    rating: Decimal

    @property
    def detail_image(self) -> str:
        """Image URL sized for the product detail view."""
        return self.image.replace(THUMBNAIL_SIZE, DETAIL_SIZE)


def product_id(category: str, index: int) -> str:
    return f"{category}-{index}"


def generate(category: str, rng: Optional[random.Random] = None) -> list[Product]:
    """Generate the product list for a category.

    Args:
        category: One of CATEGORIES.
        rng: Random source for price and rating. Defaults to a freshly seeded
            generator.

    Returns:
        CATALOG_SIZE products with ids "<category>-1" .. "<category>-100".

    Raises:
        UnknownCategoryError: If category is not in CATEGORIES.
    """
    if category not in IMAGE_POOLS:
        raise UnknownCategoryError(category)

    rng = rng or random.Random()
    pool = IMAGE_POOLS[category]
    products = []
    for i in range(CATALOG_SIZE):
        index = i + 1
        price = Decimal(f"{rng.random() * PRICE_SPAN + PRICE_MIN:.2f}")
        rating = Decimal(f"{rng.random() * RATING_MAX:.1f}")
        products.append(
            Product(
                id=product_id(category, index),
                name=f"{category} Product {index}",
                image=pool[i % len(pool)],
                price=price,
                tags=TAGS[i % len(TAGS)],
                rating=rating,
            )
        )
    return products


def star_breakdown(rating) -> tuple[int, bool, int]:
    """Split a 0-5 rating into (full, half, empty) star counts."""
    value = float(rating)
    full = math.floor(value)
    half = value - full >= 0.5
    empty = RATING_MAX - full - (1 if half else 0)
    return full, half, empty


def render_stars(rating) -> str:
    full, half, empty = star_breakdown(rating)
    return FULL_STAR * full + (HALF_STAR if half else "") + EMPTY_STAR * empty
