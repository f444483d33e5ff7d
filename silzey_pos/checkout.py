"""Checkout flow: overlay transitions, customer validation and point accrual.

The functions here decide transitions and raise on rejected ones. They do
not touch the session; ``silzey_pos.session`` applies their results and
turns rejections into the session message.
"""

import math
from dataclasses import dataclass, fields
from decimal import Decimal
from enum import Enum

from .errors import EmptyCartError, InvalidStateError, ValidationError, errmsg
from .ledger import CartLedger, CartLine


class Overlay(Enum):
    NONE = "none"
    CART = "cart"
    CHECKOUT = "checkout"


@dataclass(frozen=True)
class CheckoutDraft:
    """Customer details entered on the checkout form."""

    first_name: str = ""
    last_name: str = ""
    date_of_birth: str = ""
    phone_number: str = ""

    def missing_fields(self) -> tuple[str, ...]:
        return tuple(f.name for f in fields(self) if not getattr(self, f.name))

    def validate(self) -> None:
        missing = self.missing_fields()
        if missing:
            raise ValidationError(missing)

    @property
    def customer_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


DRAFT_FIELDS = tuple(f.name for f in fields(CheckoutDraft))


@dataclass(frozen=True)
class SaleReceipt:
    """Summary of a finalized sale."""

    customer_name: str
    lines: tuple[CartLine, ...]
    total: str
    points_earned: int
    rewards_total: int


def points_for(total: str) -> int:
    """Whole currency units in a formatted total."""
    return math.floor(Decimal(total))


def open_cart(overlay: Overlay) -> Overlay:
    """Show the cart. Always allowed."""
    return Overlay.CART


def close_cart(overlay: Overlay) -> Overlay:
    if overlay is not Overlay.CART:
        return overlay
    return Overlay.NONE


def proceed_to_checkout(overlay: Overlay, ledger: CartLedger) -> Overlay:
    """Move from the cart to the checkout form.

    Raises:
        EmptyCartError: If the ledger has no lines.
    """
    if overlay is not Overlay.CART:
        raise InvalidStateError(errmsg.CART_NOT_OPEN)
    if not ledger:
        raise EmptyCartError()
    return Overlay.CHECKOUT


def cancel_checkout(overlay: Overlay) -> Overlay:
    if overlay is not Overlay.CHECKOUT:
        raise InvalidStateError(errmsg.CHECKOUT_NOT_OPEN)
    return Overlay.CART


def finalize(overlay: Overlay, draft: CheckoutDraft, ledger: CartLedger, rewards_points: int) -> SaleReceipt:
    """Validate the draft and compute the sale's receipt.

    Raises:
        InvalidStateError: If the checkout form is not open.
        ValidationError: If any customer field is empty.
    """
    if overlay is not Overlay.CHECKOUT:
        raise InvalidStateError(errmsg.CHECKOUT_NOT_OPEN)
    draft.validate()

    total = ledger.total()
    points_earned = points_for(total)
    return SaleReceipt(
        customer_name=draft.customer_name,
        lines=tuple(ledger.lines),
        total=total,
        points_earned=points_earned,
        rewards_total=rewards_points + points_earned,
    )
