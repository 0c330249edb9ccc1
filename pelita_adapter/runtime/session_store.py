"""Process-wide, mutex-guarded storage for player-owned state."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, TypeVar

from pelita_adapter.protocol.errors import SessionTimeoutError


logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNSET = object()


class SessionHandle:
    """Mutable view of the session value, valid only while the lock is held."""

    def __init__(self, session: "PlayerSession"):
        self._session = session
        self._open = True

    def _check_open(self) -> None:
        if not self._open:
            raise RuntimeError("session handle used after the session was released")

    @property
    def value(self) -> Any:
        self._check_open()
        return self._session._value

    @value.setter
    def value(self, new_value: Any) -> None:
        self._check_open()
        self._session._value = new_value

    def close(self) -> None:
        self._open = False


class PlayerSession:
    def __init__(
        self,
        factory: Optional[Callable[[], Any]] = None,
        lock_timeout: Optional[float] = None,
    ):
        self.factory = factory
        self.lock_timeout = lock_timeout
        self.turns_served = 0
        self._value: Any = _UNSET
        self._lock = threading.Lock()
        self._owner: Optional[int] = None

    @property
    def initialized(self) -> bool:
        return self._value is not _UNSET

    def _acquire_lock(self) -> None:
        if self._owner == threading.get_ident():
            raise RuntimeError("player session is not reentrant")
        timeout = -1 if self.lock_timeout is None else self.lock_timeout
        if not self._lock.acquire(timeout=timeout):
            raise SessionTimeoutError(
                f"Timed out after {self.lock_timeout}s waiting for the player session"
            )
        self._owner = threading.get_ident()

    @contextmanager
    def acquire(self) -> Iterator[SessionHandle]:
        self._acquire_lock()
        handle = SessionHandle(self)
        try:
            if self._value is _UNSET:
                self._value = self.factory() if self.factory is not None else None
                logger.debug("Created player session value of type %s", type(self._value).__name__)
            yield handle
        finally:
            handle.close()
            self.turns_served += 1
            self._owner = None
            self._lock.release()

    def with_session(self, func: Callable[[SessionHandle], T]) -> T:
        with self.acquire() as handle:
            return func(handle)
