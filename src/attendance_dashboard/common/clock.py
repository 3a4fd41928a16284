from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from ..core.constants import CLOCK_REFRESH_SECONDS
from .datetime_utils import now_utc

logger = logging.getLogger(__name__)


class DisplayClock:
    """Wall-clock display refresh, independent of any business logic.

    Records the current time in ``latest`` and calls ``on_tick`` (when given)
    roughly every ``interval`` seconds on a daemon thread until ``stop()``
    is called.
    """

    def __init__(
        self,
        on_tick: Optional[Callable[[datetime], None]] = None,
        *,
        interval: float = CLOCK_REFRESH_SECONDS,
        now: Callable[[], datetime] = now_utc,
    ):
        self._on_tick = on_tick
        self._interval = float(interval)
        self._now = now
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.latest: Optional[datetime] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stopped.clear()
        self._thread = threading.Thread(target=self._run, name="display-clock", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stopped.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=self._interval * 2)
        self._thread = None

    def _run(self) -> None:
        while not self._stopped.is_set():
            self.latest = self._now()
            if self._on_tick is not None:
                try:
                    self._on_tick(self.latest)
                except Exception:
                    logger.exception("display clock tick failed")
            self._stopped.wait(self._interval)
