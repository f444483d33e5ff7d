"""Cart ledger: insertion-ordered cart lines keyed by product id."""

from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterator, Optional

import structlog

from .catalog import Product

CENTS = Decimal("0.01")

log = structlog.get_logger("silzey_pos.ledger")


@dataclass(frozen=True)
class CartLine:
    """Snapshot of a product's display fields plus a quantity (always >= 1)."""

    product_id: str
    name: str
    image: str
    price: Decimal
    tags: str
    rating: Decimal
    quantity: int = 1

    @classmethod
    def from_product(cls, product: Product) -> "CartLine":
        return cls(
            product_id=product.id,
            name=product.name,
            image=product.image,
            price=product.price,
            tags=product.tags,
            rating=product.rating,
        )

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


def format_money(amount: Decimal) -> str:
    return str(amount.quantize(CENTS, rounding=ROUND_HALF_UP))


class CartLedger:
    """Cart contents for the current session.

    Every mutation builds a new line mapping and swaps it in as a whole, so
    callers never observe a partially applied update.
    """

    def __init__(self, lines: Optional[list[CartLine]] = None):
        self._lines: dict[str, CartLine] = {line.product_id: line for line in lines or ()}

    def __iter__(self) -> Iterator[CartLine]:
        return iter(list(self._lines.values()))

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._lines

    def __bool__(self) -> bool:
        return bool(self._lines)

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    def get(self, product_id: str) -> Optional[CartLine]:
        return self._lines.get(product_id)

    def add(self, product: Product) -> CartLine:
        """Add one unit of product, creating its line at the end if new."""
        lines = dict(self._lines)
        existing = lines.get(product.id)
        if existing is None:
            line = CartLine.from_product(product)
        else:
            line = replace(existing, quantity=existing.quantity + 1)
        lines[product.id] = line
        self._lines = lines
        log.info("item_added", product_id=product.id, quantity=line.quantity)
        return line

    def remove(self, product_id: str) -> None:
        if product_id not in self._lines:
            return
        self._lines = {pid: line for pid, line in self._lines.items() if pid != product_id}
        log.info("item_removed", product_id=product_id)

    def adjust_quantity(self, product_id: str, delta: int) -> Optional[CartLine]:
        """Change a line's quantity by delta.

        The new quantity is clamped to at least 1, except that a result of
        zero or less removes the line. Unknown ids are ignored.

        Returns:
            The updated line, or None if the line was removed or absent.
        """
        existing = self._lines.get(product_id)
        if existing is None:
            return None

        if existing.quantity + delta <= 0:
            self.remove(product_id)
            return None

        line = replace(existing, quantity=max(1, existing.quantity + delta))
        lines = dict(self._lines)
        lines[product_id] = line
        self._lines = lines
        log.info("quantity_adjusted", product_id=product_id, quantity=line.quantity)
        return line

    def clear(self) -> None:
        self._lines = {}

    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self._lines.values()), Decimal("0"))

    def total(self) -> str:
        """Sum of price x quantity, formatted to two decimals ("0.00" if empty)."""
        return format_money(self.subtotal())

    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())
