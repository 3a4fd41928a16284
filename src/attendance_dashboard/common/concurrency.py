"""Per-action in-flight guards and last-request-wins bookkeeping."""
from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Callable, Generic, Hashable, Iterator, Optional, TypeVar

from ..core.exceptions import ActionInProgressError

T = TypeVar("T")


class InFlightGuard:
    """Rejects re-entrant triggering of one action while its call is outstanding."""

    def __init__(self, action: str):
        self.action = action
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @contextmanager
    def hold(self) -> Iterator[None]:
        if not self._lock.acquire(blocking=False):
            raise ActionInProgressError(f"{self.action} is already in progress")
        try:
            yield
        finally:
            self._lock.release()


class GuardRegistry:
    """One ``InFlightGuard`` per (action, key), created on first use."""

    def __init__(self):
        self._guards: dict[tuple[str, Hashable], InFlightGuard] = {}
        self._mutex = threading.Lock()

    def get(self, action: str, key: Hashable = None) -> InFlightGuard:
        with self._mutex:
            guard = self._guards.get((action, key))
            if guard is None:
                guard = InFlightGuard(action)
                self._guards[(action, key)] = guard
            return guard

    def is_busy(self, action: str, key: Hashable = None) -> bool:
        guard = self._guards.get((action, key))
        return bool(guard and guard.busy)


class LatestRequest(Generic[T]):
    """Tags each load with the parameter that triggered it.

    ``run`` only publishes a result when its parameter is still the most
    recently requested one; results for superseded parameters are discarded.
    """

    def __init__(self, initial: T):
        self._value: T = initial
        self._param: Any = None
        self._seq = 0
        self._mutex = threading.Lock()

    @property
    def value(self) -> T:
        return self._value

    @property
    def param(self) -> Any:
        return self._param

    def begin(self, param: Any) -> int:
        with self._mutex:
            self._seq += 1
            self._param = param
            return self._seq

    def is_current(self, token: int) -> bool:
        return token == self._seq

    def publish(self, token: int, value: T) -> bool:
        with self._mutex:
            if token != self._seq:
                return False
            self._value = value
            return True

    def run(self, param: Any, load: Callable[[], T]) -> Optional[T]:
        token = self.begin(param)
        result = load()
        if self.publish(token, result):
            return result
        return None
