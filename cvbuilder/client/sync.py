"""
Debounced server sync.

Edits arrive faster than they should be sent. DebouncedSaver holds the latest
payload and sends it once no new edit has arrived for the debounce delay.
A newer payload replaces the pending one outright (last edit wins, no merge).
"""

import os
import threading
from typing import Any, Callable, Optional

from dotenv import load_dotenv

from cvbuilder.client.logger import _log_debug

load_dotenv()

SAVE_DEBOUNCE_S = float(os.getenv("SAVE_DEBOUNCE_S", "0.4"))


class DebouncedSaver:
    """
    Delays calls to save until edits pause.

    save runs on a timer thread, except when flush() sends immediately on the
    caller's thread. A payload is sent at most once.
    """

    def __init__(self, save: Callable[[Any], Any], delay_s: float = SAVE_DEBOUNCE_S):
        """
        Args:
            save: Called with the payload once the delay elapses
            delay_s: Quiet period before sending, in seconds
        """
        self.save = save
        self.delay_s = delay_s
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending: Any = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        """True when a payload is waiting to be sent."""
        with self._lock:
            return self._pending is not None

    def queue(self, payload: Any) -> None:
        """Replace any pending payload and restart the delay."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            self._pending = payload
            self._timer = threading.Timer(self.delay_s, self._fire, args=(self._generation,))
            self._timer.daemon = True
            self._timer.start()
        _log_debug(f"Save queued (generation {self._generation})")

    def _take(self) -> Any:
        payload, self._pending = self._pending, None
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        return payload

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A newer queue() or a flush() got here first
            if generation != self._generation or self._pending is None:
                return
            payload = self._take()
        self.save(payload)

    def flush(self) -> Any:
        """
        Send the pending payload now.

        Returns:
            Whatever save returned, or None if nothing was pending
        """
        with self._lock:
            payload = self._take()
        if payload is None:
            return None
        return self.save(payload)

    def cancel(self) -> None:
        """Drop the pending payload without sending it."""
        with self._lock:
            self._take()
