#!/usr/bin/env python3
"""Line-oriented clerk console for the point-of-sale session.

Runs the session lifecycle on an asyncio loop so the splash and thank-you
timers fire while the console waits for input.
"""

import argparse
import asyncio
import locale
import shlex
import sys
import threading
from dataclasses import replace
from typing import Callable, Optional, TextIO

import structlog

from . import session as ops
from .catalog import CATEGORIES, TAGS, render_stars
from .checkout import DRAFT_FIELDS, Overlay
from .config import PosConfig
from .errors import PosError
from .lifecycle import SessionLifecycle
from .ledger import format_money
from .logs import configure_logging
from .receipt import format_receipt
from .session import Screen, Session

logger = structlog.get_logger("silzey_pos.console")

HELP = """\
categories                 list categories
category NAME              switch category
tag [NAME]                 filter by tag (no NAME clears)
search [TEXT]              search product names (no TEXT clears)
sort A-Z|Price             sort products
more                       show the next page
list                       show visible products
show ID                    show product detail
add ID                     add product to cart
cart                       open the cart
close                      close the cart or product detail
inc ID / dec ID            change a cart line's quantity
remove ID                  remove a cart line
checkout                   proceed to checkout
cancel                     return from checkout to the cart
customer FIELD VALUE       set first_name, last_name, date_of_birth or phone_number
finalize                   finalize the sale
status                     show session status
quit                       exit"""


class Console:
    """Parses clerk commands and applies them to the lifecycle's session."""

    def __init__(self, lifecycle: SessionLifecycle):
        self.lifecycle = lifecycle
        self._commands: dict[str, Callable[[Session, list[str]], str]] = {
            "help": lambda s, a: HELP,
            "categories": self._categories,
            "category": self._category,
            "tag": self._tag,
            "search": self._search,
            "sort": self._sort,
            "more": self._more,
            "list": self._list,
            "show": self._show,
            "add": self._add,
            "cart": self._cart,
            "close": self._close,
            "inc": self._inc,
            "dec": self._dec,
            "remove": self._remove,
            "checkout": self._checkout,
            "cancel": self._cancel,
            "customer": self._customer,
            "finalize": self._finalize,
            "status": self._status,
        }

    def execute(self, line: str) -> str:
        """Run one command line and return the text to show the clerk."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            return f"error: {e}"
        if not parts:
            return ""

        name, args = parts[0].lower(), parts[1:]
        handler = self._commands.get(name)
        if handler is None:
            return f"unknown command: {name} (try 'help')"

        session = self.lifecycle.session
        if session.screen is Screen.SPLASH:
            return "Silzey POS is starting..."
        if session.screen is Screen.THANK_YOU and name != "status":
            return "Thank you! This session will reset shortly."

        try:
            return handler(session, args)
        except PosError as e:
            logger.warning("command_failed", command=name, error=str(e))
            return f"error: {e}"

    # --- catalog ---

    def _categories(self, session: Session, args: list[str]) -> str:
        return "\n".join(f"{'*' if c == session.category else ' '} {c}" for c in CATEGORIES)

    def _category(self, session: Session, args: list[str]) -> str:
        if len(args) != 1:
            return "usage: category NAME"
        ops.set_category(session, args[0])
        return self._list(session, [])

    def _tag(self, session: Session, args: list[str]) -> str:
        tag = args[0] if args else ""
        if tag and tag not in TAGS:
            return f"unknown tag: {tag} (one of {', '.join(TAGS)})"
        ops.set_tag_filter(session, tag)
        return self._list(session, [])

    def _search(self, session: Session, args: list[str]) -> str:
        ops.set_search_term(session, " ".join(args))
        return self._list(session, [])

    def _sort(self, session: Session, args: list[str]) -> str:
        if len(args) != 1:
            return "usage: sort A-Z|Price"
        ops.set_sort_option(session, args[0])
        return self._list(session, [])

    def _more(self, session: Session, args: list[str]) -> str:
        ops.load_more(session)
        return self._list(session, [])

    def _list(self, session: Session, args: list[str]) -> str:
        page = ops.get_visible_products(session)
        if page.is_empty:
            return "No products found matching your criteria."
        lines = [
            f"{p.id:<20} {p.name:<28} ${format_money(p.price):>6}  {p.tags:<8} {render_stars(p.rating)}"
            for p in page.products
        ]
        if page.has_more:
            lines.append(f"... {page.total_matches - len(page.products)} more ('more' to load)")
        return "\n".join(lines)

    def _show(self, session: Session, args: list[str]) -> str:
        if len(args) != 1:
            return "usage: show ID"
        product = ops.select_product(session, args[0])
        if product is None:
            return f"no product {args[0]} in {session.category}"
        return "\n".join(
            [
                product.name,
                f"Tag: {product.tags}",
                f"Price: ${format_money(product.price)}",
                f"Rating: {render_stars(product.rating)} ({product.rating})",
                f"Image: {product.detail_image}",
            ]
        )

    # --- cart ---

    def _add(self, session: Session, args: list[str]) -> str:
        if not args and session.selected_product is not None:
            ops.add_selected_to_cart(session)
            return self._badge(session)
        if len(args) != 1:
            return "usage: add ID"
        product = ops.find_product(session, args[0])
        if product is None:
            return f"no product {args[0]} in {session.category}"
        ops.add_to_cart(session, product)
        return self._badge(session)

    def _cart(self, session: Session, args: list[str]) -> str:
        ops.open_cart(session)
        return self._render_cart(session)

    def _render_cart(self, session: Session) -> str:
        if not session.ledger:
            return "Your cart is empty."
        lines = [
            f"{line.quantity:>3} x {line.name:<28} ${format_money(line.line_total):>8}  [{line.product_id}]"
            for line in session.ledger
        ]
        lines.append(f"Total: ${ops.cart_total(session)}")
        return "\n".join(lines)

    def _close(self, session: Session, args: list[str]) -> str:
        if session.selected_product is not None:
            ops.dismiss_product(session)
            return "closed product detail"
        if session.overlay is Overlay.CHECKOUT:
            return "checkout is still open ('cancel' returns to the cart)"
        ops.close_cart(session)
        return "closed cart"

    def _inc(self, session: Session, args: list[str]) -> str:
        return self._adjust(session, args, 1)

    def _dec(self, session: Session, args: list[str]) -> str:
        return self._adjust(session, args, -1)

    def _adjust(self, session: Session, args: list[str], delta: int) -> str:
        if len(args) != 1:
            return "usage: inc ID / dec ID"
        ops.adjust_quantity(session, args[0], delta)
        return self._render_cart(session)

    def _remove(self, session: Session, args: list[str]) -> str:
        if len(args) != 1:
            return "usage: remove ID"
        ops.remove_from_cart(session, args[0])
        return self._render_cart(session)

    def _badge(self, session: Session) -> str:
        return f"Cart ({ops.cart_item_count(session)})"

    # --- checkout ---

    def _checkout(self, session: Session, args: list[str]) -> str:
        if session.overlay is Overlay.NONE:
            ops.open_cart(session)
        if session.overlay is Overlay.CART and not ops.proceed_to_checkout(session):
            return session.message
        return f"Checkout - total ${ops.cart_total(session)}. Enter customer details, then 'finalize'."

    def _cancel(self, session: Session, args: list[str]) -> str:
        ops.cancel_checkout(session)
        return self._render_cart(session)

    def _customer(self, session: Session, args: list[str]) -> str:
        if len(args) < 2 or args[0] not in DRAFT_FIELDS:
            return f"usage: customer {'|'.join(DRAFT_FIELDS)} VALUE"
        ops.update_draft(session, **{args[0]: " ".join(args[1:])})
        return f"{args[0]} set"

    def _finalize(self, session: Session, args: list[str]) -> str:
        receipt = self.lifecycle.finalize_sale()
        if receipt is None:
            return session.message
        return format_receipt(receipt)

    def _status(self, session: Session, args: list[str]) -> str:
        return (
            f"screen={session.screen.value} category={session.category} "
            f"overlay={session.overlay.value} cart={ops.cart_item_count(session)} "
            f"total={ops.cart_total(session)} rewards={session.rewards_points}"
            + (f" message={session.message!r}" if session.message else "")
        )


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Silzey POS clerk console")
    parser.add_argument("--splash-seconds", type=float, default=None, help="Splash screen duration")
    parser.add_argument("--thank-you-seconds", type=float, default=None, help="Thank-you duration before reset")
    parser.add_argument("--log-level", default=None, help="Log level (debug, info, warning, error)")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, base: Optional[PosConfig] = None) -> PosConfig:
    config = base or PosConfig.from_env()
    overrides = {}
    if args.splash_seconds is not None:
        overrides["splash_seconds"] = args.splash_seconds
    if args.thank_you_seconds is not None:
        overrides["thank_you_seconds"] = args.thank_you_seconds
    if args.log_level is not None:
        overrides["log_level"] = args.log_level.lower()
    return replace(config, **overrides)


def configure_locale() -> None:
    """Collate product names by the user's locale."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning("locale_unavailable", error=str(e))


def read_lines(loop: asyncio.AbstractEventLoop, stream: TextIO) -> "asyncio.Queue[str]":
    """Feed lines from a blocking stream into a queue.

    Reads on a daemon thread. An empty string marks end of input.
    """
    lines: asyncio.Queue[str] = asyncio.Queue()

    def pump() -> None:
        try:
            for line in iter(stream.readline, ""):
                loop.call_soon_threadsafe(lines.put_nowait, line)
            loop.call_soon_threadsafe(lines.put_nowait, "")
        except RuntimeError:
            # Loop already closed; the console has exited.
            return

    threading.Thread(target=pump, name="console-stdin", daemon=True).start()
    return lines


async def run_console(config: PosConfig, stream: Optional[TextIO] = None) -> None:
    loop = asyncio.get_running_loop()
    lifecycle = SessionLifecycle(
        loop,
        config,
        on_change=lambda s: print(f"[{s.screen.value}]", flush=True),
    )
    console = Console(lifecycle)
    lines = read_lines(loop, stream or sys.stdin)
    lifecycle.start()
    print("Silzey POS", flush=True)
    try:
        while True:
            line = await lines.get()
            if not line or line.strip().lower() in ("quit", "exit"):
                break
            output = console.execute(line)
            if output:
                print(output, flush=True)
    finally:
        lifecycle.teardown()


def main(argv: Optional[list[str]] = None) -> int:
    try:
        config = build_config(parse_args(argv))
    except PosError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    configure_logging(config.log_level)
    configure_locale()
    try:
        asyncio.run(run_console(config))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
