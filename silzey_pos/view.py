"""Catalog view engine.

Applies, in fixed order: tag filter, search filter, sort, pagination.
Pagination is always last so ``has_more`` reflects the filtered and sorted
list, never the raw catalog.
"""

import locale
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from .catalog import Product

PAGE_SIZE = 12


class SortOption(str, Enum):
    NAME = "A-Z"
    PRICE = "Price"


DEFAULT_SORT = SortOption.NAME.value


@dataclass(frozen=True)
class ViewOptions:
    """Filter, sort and pagination inputs for one catalog view."""

    tag: str = ""
    search: str = ""
    sort: str = DEFAULT_SORT
    visible_count: int = PAGE_SIZE


@dataclass(frozen=True)
class CatalogPage:
    """Visible slice of the filtered catalog."""

    products: list[Product] = field(default_factory=list)
    has_more: bool = False
    total_matches: int = 0

    @property
    def is_empty(self) -> bool:
        """True when no product matched the filters."""
        return self.total_matches == 0


def filter_by_tag(products: Sequence[Product], tag: str) -> list[Product]:
    if not tag:
        return list(products)
    return [p for p in products if p.tags == tag]


def filter_by_search(products: Sequence[Product], term: str) -> list[Product]:
    if not term or not term.strip():
        return list(products)
    needle = term.lower()
    return [p for p in products if needle in p.name.lower()]


def sort_products(products: Sequence[Product], sort: str) -> list[Product]:
    """Order products by the given sort option.

    Name ordering uses the current locale's collation. Unknown options keep
    catalog order. Both sorts are stable.
    """
    if sort == SortOption.NAME.value:
        return sorted(products, key=lambda p: locale.strxfrm(p.name))
    if sort == SortOption.PRICE.value:
        return sorted(products, key=lambda p: p.price)
    return list(products)


def view(
    products: Sequence[Product],
    tag: str = "",
    search: str = "",
    sort: str = DEFAULT_SORT,
    visible_count: int = PAGE_SIZE,
) -> CatalogPage:
    matched = filter_by_tag(products, tag)
    matched = filter_by_search(matched, search)
    matched = sort_products(matched, sort)
    visible_count = max(0, visible_count)
    return CatalogPage(
        products=matched[:visible_count],
        has_more=len(matched) > visible_count,
        total_matches=len(matched),
    )


def view_with(products: Sequence[Product], options: ViewOptions) -> CatalogPage:
    return view(
        products,
        tag=options.tag,
        search=options.search,
        sort=options.sort,
        visible_count=options.visible_count,
    )
