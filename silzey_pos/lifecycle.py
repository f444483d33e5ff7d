"""Session lifecycle: splash delay, thank-you delay and full reset.

Timers are scheduled on anything providing ``call_later(delay, callback)``
that returns a handle with ``cancel()``; an asyncio event loop does. After
``teardown()`` every pending timer is cancelled and the lifecycle refuses
further operations, so nothing can mutate a torn-down session.
"""

from typing import Any, Callable, Optional, Protocol

import structlog

from . import session as ops
from .catalog import generate
from .checkout import CheckoutDraft, SaleReceipt
from .config import PosConfig
from .errors import InvalidStateError, errmsg
from .session import CatalogSource, Screen, Session

log = structlog.get_logger("silzey_pos.lifecycle")


class TimerHandle(Protocol):
    def cancel(self) -> Any: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle: ...


class SessionLifecycle:
    """Owns the single session and the timers that move it between screens."""

    def __init__(
        self,
        scheduler: Scheduler,
        config: Optional[PosConfig] = None,
        catalog_source: CatalogSource = generate,
        on_change: Optional[Callable[[Session], None]] = None,
    ):
        self.config = config or PosConfig()
        self._scheduler = scheduler
        self._catalog_source = catalog_source
        self._on_change = on_change
        self._session: Optional[Session] = None
        self._splash_timer: Optional[TimerHandle] = None
        self._reset_timer: Optional[TimerHandle] = None
        self._torn_down = False

    @property
    def session(self) -> Session:
        self._check_alive()
        if self._session is None:
            raise InvalidStateError(errmsg.LIFECYCLE_NOT_STARTED)
        return self._session

    @property
    def torn_down(self) -> bool:
        return self._torn_down

    @property
    def pending_timers(self) -> int:
        return sum(1 for t in (self._splash_timer, self._reset_timer) if t is not None)

    def start(self) -> Session:
        """Create the session on the splash screen and schedule browsing."""
        self._check_alive()
        if self._session is not None:
            raise InvalidStateError(errmsg.LIFECYCLE_STARTED)

        self._session = ops.new_session(self.config, self._catalog_source, Screen.SPLASH)
        self._splash_timer = self._scheduler.call_later(self.config.splash_seconds, self._splash_elapsed)
        log.info("session_started", category=self._session.category, splash_seconds=self.config.splash_seconds)
        return self._session

    def finalize_sale(self, draft: Optional[CheckoutDraft] = None) -> Optional[SaleReceipt]:
        """Finalize the sale and schedule the reset after the thank-you interval."""
        receipt = ops.finalize_sale(self.session, draft)
        if receipt is not None:
            self._reset_timer = self._scheduler.call_later(self.config.thank_you_seconds, self._thank_you_elapsed)
        return receipt

    def reset(self) -> Session:
        """Replace the session with a fresh one, straight to browsing."""
        self._check_alive()
        self._cancel_timers()
        self._session = ops.new_session(self.config, self._catalog_source, Screen.BROWSING)
        log.info("session_reset", category=self._session.category)
        return self._session

    def teardown(self) -> None:
        if self._torn_down:
            return
        self._cancel_timers()
        self._torn_down = True
        log.info("lifecycle_torn_down")

    def _splash_elapsed(self) -> None:
        self._splash_timer = None
        if self._torn_down or self._session is None:
            return
        self._session.screen = Screen.BROWSING
        log.info("splash_elapsed")
        self._notify()

    def _thank_you_elapsed(self) -> None:
        self._reset_timer = None
        if self._torn_down:
            return
        self.reset()
        self._notify()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self._session)

    def _cancel_timers(self) -> None:
        for timer in (self._splash_timer, self._reset_timer):
            if timer is not None:
                timer.cancel()
        self._splash_timer = None
        self._reset_timer = None

    def _check_alive(self) -> None:
        if self._torn_down:
            raise InvalidStateError(errmsg.LIFECYCLE_TORN_DOWN)
