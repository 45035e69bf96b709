# agrorain/stores/subscription.py
from __future__ import annotations
import logging
import time
from typing import Callable, Generic, Iterator, List, Optional, Sequence, TypeVar

from .. import config
from ..errors import StoreError

log = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription(Generic[T]):
    """Full-collection snapshots of one store listing.

    Every delivered snapshot replaces the previous one completely. ``poll()``
    does a single fetch and returns the snapshot only when it differs from the
    last delivered one; iterating polls in a loop until ``cancel()``.
    With ``once=True`` the first snapshot is the only one (static sources).
    """

    def __init__(
        self,
        fetch: Callable[[], Sequence[T]],
        *,
        interval: Optional[float] = None,
        once: bool = False,
        on_error: Optional[Callable[[StoreError], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
        name: str = "",
    ):
        self._fetch = fetch
        self.interval = config.POLL_SECONDS if interval is None else interval
        self.once = once
        self._on_error = on_error
        self._sleep = sleep
        self.name = name
        self._last: Optional[List[T]] = None
        self._delivered = False
        self._cancelled = False
        self.last_error: Optional[StoreError] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def latest(self) -> Optional[List[T]]:
        return self._last

    def cancel(self) -> None:
        self._cancelled = True

    def restart(self) -> None:
        """Re-arms a cancelled subscription; the next poll delivers a full snapshot."""
        self._cancelled = False
        self._last = None
        self._delivered = False
        self.last_error = None

    def poll(self) -> Optional[List[T]]:
        if self._cancelled or (self.once and self._delivered):
            return None
        try:
            snapshot = list(self._fetch())
        except StoreError as exc:
            self.last_error = exc
            raise
        self.last_error = None
        if self._delivered and snapshot == self._last:
            return None
        self._last = snapshot
        self._delivered = True
        return snapshot

    def __iter__(self) -> Iterator[List[T]]:
        while not self._cancelled:
            try:
                snapshot = self.poll()
            except StoreError as exc:
                log.warning("subscription %s: %s", self.name or "?", exc)
                if self._on_error is not None:
                    self._on_error(exc)
                snapshot = None
            if snapshot is not None:
                yield snapshot
            if self._cancelled or (self.once and self._delivered):
                return
            self._sleep(self.interval)
