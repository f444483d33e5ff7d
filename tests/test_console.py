"""Tests for the clerk console."""

import asyncio
import io
import locale

import pytest

from silzey_pos import console as console_module
from silzey_pos.checkout import Overlay
from silzey_pos.config import PosConfig
from silzey_pos.console import Console, build_config, configure_locale, parse_args, run_console
from silzey_pos.errors import ConfigError, errmsg
from silzey_pos.lifecycle import SessionLifecycle
from silzey_pos.session import Screen


@pytest.fixture
def console(scheduler, config, catalog_source):
    lifecycle = SessionLifecycle(scheduler, config, catalog_source)
    lifecycle.start()
    scheduler.fire_next()
    return Console(lifecycle)


class TestCommands:
    """Tests for Console.execute."""

    def test_splash_blocks_commands(self, scheduler, config, catalog_source) -> None:
        """Nothing runs until the splash has elapsed."""
        lifecycle = SessionLifecycle(scheduler, config, catalog_source)
        lifecycle.start()
        assert "starting" in Console(lifecycle).execute("list")

    def test_blank_and_unknown(self, console) -> None:
        """Blank lines are ignored and unknown commands explained."""
        assert console.execute("   ") == ""
        assert "unknown command" in console.execute("dance")

    def test_list_and_more(self, console) -> None:
        """List shows a page and more extends it."""
        first = console.execute("list").splitlines()
        assert len(first) == 13
        assert first[-1].startswith("... 88 more")
        assert len(console.execute("more").splitlines()) == 25

    def test_tag_and_search(self, console) -> None:
        """Filters are applied through the session."""
        console.execute("tag Organic")
        assert console.lifecycle.session.options.tag == "Organic"
        assert "unknown tag" in console.execute("tag Ruderalis")
        assert console.execute("search no such product") == "No products found matching your criteria."

    def test_category_error_reported(self, console) -> None:
        """Unknown categories surface as an error line."""
        assert console.execute("category Tinctures").startswith("error: Unknown category")

    def test_show_and_add_selected(self, console) -> None:
        """Show opens the detail and a bare add adds it."""
        detail = console.execute("show Flower-1")
        assert "Flower Product 1" in detail
        assert "h=350&w=500" in detail
        assert console.execute("add") == "Cart (1)"
        assert console.lifecycle.session.selected_product is None

    def test_cart_adjustments(self, console) -> None:
        """inc, dec and remove edit the cart."""
        console.execute("add Flower-1")
        console.execute("inc Flower-1")
        assert "Total: $40.00" in console.execute("cart")
        console.execute("dec Flower-1")
        console.execute("dec Flower-1")
        assert console.execute("cart") == "Your cart is empty."

    def test_checkout_empty_cart(self, console) -> None:
        """Checkout on an empty cart prints the empty-cart message."""
        assert console.execute("checkout") == errmsg.CART_EMPTY

    def test_full_sale(self, console) -> None:
        """A sale runs from add to receipt and locks the console."""
        console.execute("add Flower-1")
        console.execute("add Flower-1")
        assert "$40.00" in console.execute("checkout")
        assert console.execute("finalize") == errmsg.CUSTOMER_FIELDS_REQUIRED
        console.execute("customer first_name Ada")
        console.execute("customer last_name Lovelace")
        console.execute("customer date_of_birth 1815-12-10")
        console.execute('customer phone_number "555 0100"')
        receipt = console.execute("finalize")
        assert "Points Earned:         40" in receipt
        assert console.lifecycle.session.screen is Screen.THANK_YOU
        assert "reset shortly" in console.execute("list")
        assert "screen=thank-you" in console.execute("status")

    def test_close_during_checkout(self, console) -> None:
        """Close does not claim to close the cart while checkout is open."""
        console.execute("add Flower-1")
        console.execute("checkout")
        assert "checkout is still open" in console.execute("close")
        assert console.lifecycle.session.overlay is Overlay.CHECKOUT

    def test_cart_edits_keep_draft_during_checkout(self, console) -> None:
        """Adjusting quantities from checkout keeps the customer details."""
        console.execute("add Flower-1")
        console.execute("checkout")
        console.execute("customer first_name Ada")
        assert "Total: $40.00" in console.execute("inc Flower-1")
        session = console.lifecycle.session
        assert session.overlay is Overlay.CHECKOUT
        assert session.draft.first_name == "Ada"

    def test_customer_usage(self, console) -> None:
        """Unknown draft fields print usage."""
        assert console.execute("customer email a@b.c").startswith("usage: customer")


class TestArgs:
    """Tests for argument parsing."""

    def test_overrides_config(self) -> None:
        """Command-line values override the environment config."""
        args = parse_args(["--splash-seconds", "0", "--log-level", "DEBUG"])
        config = build_config(args, PosConfig())
        assert config.splash_seconds == 0
        assert config.log_level == "debug"
        assert config.thank_you_seconds == 10.0

    def test_invalid_override(self) -> None:
        """Invalid overrides fail config validation."""
        with pytest.raises(ConfigError):
            build_config(parse_args(["--thank-you-seconds", "-1"]), PosConfig())


class TestRuntime:
    """Tests for locale setup and the input loop."""

    def test_configure_locale_sets_collation(self, monkeypatch) -> None:
        """Name collation follows the environment's locale."""
        calls = []
        monkeypatch.setattr(console_module.locale, "setlocale", lambda *a: calls.append(a))
        configure_locale()
        assert calls == [(locale.LC_COLLATE, "")]

    def test_configure_locale_tolerates_bad_locale(self, monkeypatch) -> None:
        """An unusable locale falls back to the default collation."""

        def fail(*args):
            raise locale.Error("unsupported locale setting")

        monkeypatch.setattr(console_module.locale, "setlocale", fail)
        configure_locale()

    def test_run_console_reads_until_quit(self, capsys) -> None:
        """The loop processes queued lines and stops at quit."""
        config = PosConfig(splash_seconds=0)
        stream = io.StringIO("help\nquit\nstatus\n")
        asyncio.run(asyncio.wait_for(run_console(config, stream), timeout=5))
        out = capsys.readouterr().out
        assert out.startswith("Silzey POS")
        assert "screen=" not in out

    def test_run_console_stops_at_end_of_input(self, capsys) -> None:
        """End of input ends the loop without a quit command."""
        stream = io.StringIO("")
        asyncio.run(asyncio.wait_for(run_console(PosConfig(), stream), timeout=5))
        assert "Silzey POS" in capsys.readouterr().out
