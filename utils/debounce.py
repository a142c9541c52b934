# utils/debounce.py
from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

_EMPTY = object()


class Debouncer:
    """
    Coalesce bursts of values into one callback with the latest value.

    Every ``trigger`` restarts the quiet window. When the window elapses
    without another trigger, ``callback`` runs once on a timer thread with the
    most recent value. Superseded timers do nothing, and callbacks never
    run concurrently with each other.
    """

    def __init__(self, delay: float, callback: Callable[[Any], None], *, name: str = "debounce") -> None:
        self._delay = max(0.0, float(delay))
        self._callback = callback
        self._name = name
        self._lock = threading.Lock()
        # held for the whole callback; writes never overlap or reorder
        self._write_lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._pending: Any = _EMPTY
        self._generation = 0
        self._closed = False

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not _EMPTY

    def trigger(self, value: Any) -> None:
        with self._lock:
            self._pending = value
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
            if self._closed:
                self._timer = None
                return
            timer = threading.Timer(self._delay, self._fire, args=(self._generation,))
            timer.daemon = True
            timer.name = f"{self._name}-{self._generation}"
            self._timer = timer
            timer.start()

    def _fire(self, generation: int) -> None:
        with self._write_lock:
            with self._lock:
                if generation != self._generation or self._pending is _EMPTY:
                    return
                value, self._pending = self._pending, _EMPTY
                self._timer = None
            self._callback(value)

    def flush(self) -> bool:
        """
        Run the callback now with the pending value. Returns False if nothing was pending.

        Waits for a callback already running on the timer thread, so on return
        every value handed to ``trigger`` so far has been delivered.
        """
        with self._write_lock:
            with self._lock:
                if self._timer is not None:
                    self._timer.cancel()
                    self._timer = None
                self._generation += 1
                value, self._pending = self._pending, _EMPTY
            if value is _EMPTY:
                return False
            logger.debug("%s: flushing pending value", self._name)
            self._callback(value)
            return True

    def close(self) -> None:
        """Stop scheduling timers, then flush. Later triggers only record the value."""
        with self._lock:
            self._closed = True
        self.flush()
