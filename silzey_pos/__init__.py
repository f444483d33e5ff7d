"""Silzey POS: catalog browsing, cart and checkout for a point-of-sale front end."""

from .catalog import (
    CATALOG_SIZE,
    CATEGORIES,
    DEFAULT_CATEGORY,
    TAGS,
    Product,
    generate,
    render_stars,
    star_breakdown,
)
from .checkout import CheckoutDraft, Overlay, SaleReceipt
from .config import PosConfig
from .errors import (
    ConfigError,
    EmptyCartError,
    InvalidStateError,
    PosError,
    UnknownCategoryError,
    ValidationError,
    errmsg,
)
from .ledger import CartLedger, CartLine
from .lifecycle import Scheduler, SessionLifecycle
from .logs import configure_logging
from .receipt import format_receipt
from .session import (
    Screen,
    Session,
    add_selected_to_cart,
    add_to_cart,
    adjust_quantity,
    cancel_checkout,
    cart_item_count,
    cart_total,
    close_cart,
    dismiss_product,
    finalize_sale,
    find_product,
    get_visible_products,
    load_more,
    new_session,
    open_cart,
    proceed_to_checkout,
    remove_from_cart,
    select_product,
    set_category,
    set_search_term,
    set_sort_option,
    set_tag_filter,
    update_draft,
)
from .view import PAGE_SIZE, CatalogPage, SortOption, ViewOptions, view

__all__ = [
    # Catalog
    "CATALOG_SIZE",
    "CATEGORIES",
    "DEFAULT_CATEGORY",
    "TAGS",
    "Product",
    "generate",
    "render_stars",
    "star_breakdown",
    # View
    "PAGE_SIZE",
    "CatalogPage",
    "SortOption",
    "ViewOptions",
    "view",
    # Cart
    "CartLedger",
    "CartLine",
    # Checkout
    "CheckoutDraft",
    "Overlay",
    "SaleReceipt",
    "format_receipt",
    # Session
    "Screen",
    "Session",
    "new_session",
    "get_visible_products",
    "find_product",
    "set_category",
    "set_tag_filter",
    "set_search_term",
    "set_sort_option",
    "load_more",
    "select_product",
    "dismiss_product",
    "add_selected_to_cart",
    "add_to_cart",
    "remove_from_cart",
    "adjust_quantity",
    "cart_total",
    "cart_item_count",
    "open_cart",
    "close_cart",
    "proceed_to_checkout",
    "cancel_checkout",
    "update_draft",
    "finalize_sale",
    # Lifecycle
    "Scheduler",
    "SessionLifecycle",
    # Config, logging, errors
    "PosConfig",
    "configure_logging",
    "PosError",
    "EmptyCartError",
    "ValidationError",
    "UnknownCategoryError",
    "InvalidStateError",
    "ConfigError",
    "errmsg",
]
