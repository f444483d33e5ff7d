"""Session record and the operations the presentation layer calls.

All state for one clerk interaction lives on a single ``Session`` that is
passed explicitly to every operation. Rejected checkout steps are reported
through ``session.message``; nothing else in here is expected to fail.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Optional, Sequence

import structlog

from . import checkout
from .catalog import CATEGORIES, DEFAULT_CATEGORY, Product, generate
from .checkout import CheckoutDraft, Overlay, SaleReceipt
from .config import PosConfig
from .errors import EmptyCartError, UnknownCategoryError, ValidationError
from .ledger import CartLedger
from .view import PAGE_SIZE, CatalogPage, ViewOptions, view_with

log = structlog.get_logger("silzey_pos.session")

CatalogSource = Callable[[str], Sequence[Product]]


class Screen(Enum):
    SPLASH = "splash"
    BROWSING = "browsing"
    THANK_YOU = "thank-you"


@dataclass
class Session:
    """All mutable point-of-sale state."""

    screen: Screen = Screen.SPLASH
    category: str = DEFAULT_CATEGORY
    products: list[Product] = field(default_factory=list)
    options: ViewOptions = field(default_factory=ViewOptions)
    page_size: int = PAGE_SIZE
    overlay: Overlay = Overlay.NONE
    ledger: CartLedger = field(default_factory=CartLedger)
    draft: CheckoutDraft = field(default_factory=CheckoutDraft)
    rewards_points: int = 0
    message: str = ""
    selected_product: Optional[Product] = None
    last_receipt: Optional[SaleReceipt] = None
    catalog_source: CatalogSource = field(default=generate, repr=False, compare=False)


def new_session(
    config: Optional[PosConfig] = None,
    catalog_source: CatalogSource = generate,
    screen: Screen = Screen.SPLASH,
) -> Session:
    """Build a fresh session on the default category."""
    config = config or PosConfig()
    return Session(
        screen=screen,
        category=config.default_category,
        products=list(catalog_source(config.default_category)),
        options=ViewOptions(visible_count=config.page_size),
        page_size=config.page_size,
        catalog_source=catalog_source,
    )


# --- Catalog view ---


def get_visible_products(session: Session) -> CatalogPage:
    return view_with(session.products, session.options)


def find_product(session: Session, product_id: str) -> Optional[Product]:
    """Look up a product in the active category."""
    for product in session.products:
        if product.id == product_id:
            return product
    return None


def set_category(session: Session, category: str) -> None:
    """Switch category, regenerating its products and resetting filters.

    Raises:
        UnknownCategoryError: If category is not in CATEGORIES.
    """
    if category not in CATEGORIES:
        raise UnknownCategoryError(category)
    session.products = list(session.catalog_source(category))
    session.category = category
    session.options = ViewOptions(sort=session.options.sort, visible_count=session.page_size)
    session.selected_product = None
    log.info("category_selected", category=category)


def set_tag_filter(session: Session, tag: str) -> None:
    session.options = replace(session.options, tag=tag, search="", visible_count=session.page_size)


def set_search_term(session: Session, term: str) -> None:
    session.options = replace(session.options, search=term)


def set_sort_option(session: Session, sort: str) -> None:
    session.options = replace(session.options, sort=sort)


def load_more(session: Session) -> None:
    session.options = replace(
        session.options, visible_count=session.options.visible_count + session.page_size
    )


# --- Product detail ---


def select_product(session: Session, product_id: str) -> Optional[Product]:
    product = find_product(session, product_id)
    if product is not None:
        session.selected_product = product
    return product


def dismiss_product(session: Session) -> None:
    session.selected_product = None


def add_selected_to_cart(session: Session) -> None:
    if session.selected_product is None:
        return
    add_to_cart(session, session.selected_product)
    session.selected_product = None


# --- Cart ---


def add_to_cart(session: Session, product: Product) -> None:
    session.ledger.add(product)


def remove_from_cart(session: Session, product_id: str) -> None:
    session.ledger.remove(product_id)


def adjust_quantity(session: Session, product_id: str, delta: int) -> None:
    session.ledger.adjust_quantity(product_id, delta)


def cart_total(session: Session) -> str:
    return session.ledger.total()


def cart_item_count(session: Session) -> int:
    return session.ledger.item_count()


# --- Checkout ---


def open_cart(session: Session) -> None:
    if session.overlay is Overlay.CHECKOUT:
        session.draft = CheckoutDraft()
    session.overlay = checkout.open_cart(session.overlay)


def close_cart(session: Session) -> None:
    session.overlay = checkout.close_cart(session.overlay)


def proceed_to_checkout(session: Session) -> bool:
    """Open the checkout form if the cart has items.

    Returns:
        True if the checkout overlay is now open. On an empty cart the
        overlay is left unchanged and the session message explains why.
    """
    try:
        session.overlay = checkout.proceed_to_checkout(session.overlay, session.ledger)
    except EmptyCartError as e:
        log.info("checkout_rejected", reason="empty_cart")
        session.message = e.message
        return False

    session.message = ""
    log.info("checkout_opened", item_count=session.ledger.item_count(), total=session.ledger.total())
    return True


def cancel_checkout(session: Session) -> None:
    """Return to the cart, discarding the customer details entered so far."""
    session.overlay = checkout.cancel_checkout(session.overlay)
    session.draft = CheckoutDraft()
    session.message = ""


def update_draft(session: Session, **changes: str) -> CheckoutDraft:
    """Edit customer fields on the checkout draft.

    Raises:
        TypeError: If a keyword is not a draft field.
    """
    session.draft = replace(session.draft, **changes)
    return session.draft


def finalize_sale(session: Session, draft: Optional[CheckoutDraft] = None) -> Optional[SaleReceipt]:
    """Complete the sale and move the session to the thank-you screen.

    Args:
        session: The active session. Its checkout overlay must be open.
        draft: Customer details as submitted. Defaults to the session's
            draft. A rejected submission is kept as the session's draft
            so the clerk can correct it.

    Returns:
        The receipt, or None if a customer field was missing (the session
        message is set and the ledger is left as it was).

    Raises:
        InvalidStateError: If the checkout form is not open. The session
            is left unchanged.
    """
    submitted = session.draft if draft is None else draft

    try:
        receipt = checkout.finalize(session.overlay, submitted, session.ledger, session.rewards_points)
    except ValidationError as e:
        log.info("sale_rejected", missing_fields=list(e.missing_fields))
        session.draft = submitted
        session.message = e.message
        return None

    session.rewards_points += receipt.points_earned
    log.info(
        "sale_finalized",
        total=receipt.total,
        points_earned=receipt.points_earned,
        rewards_points=session.rewards_points,
    )

    session.ledger.clear()
    session.draft = CheckoutDraft()
    session.overlay = Overlay.NONE
    session.message = ""
    # Points are not carried to the next customer.
    session.rewards_points = 0
    session.selected_product = None
    session.last_receipt = receipt
    session.screen = Screen.THANK_YOU
    return receipt
