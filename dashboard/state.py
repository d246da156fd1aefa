"""
Refresh status tracking and the latest portfolio snapshot.
"""

import threading
import time
from typing import Callable, List, Optional

from .constants import STATE_ERROR, STATE_UPDATED, STATE_UPDATING
from .logging_config import logger
from .models import PortfolioSnapshot


class StateManager:
    """Tracks the refresh state and notifies listeners on every transition."""

    def __init__(self):
        self.state = STATE_UPDATING  # Start with updating state
        self.last_error: Optional[str] = None
        self.last_updated: Optional[float] = None
        self._change_listeners: List[Callable[[], None]] = []

    def _set_state(self, value: str) -> None:
        self.state = value
        self._notify_change()

    def _notify_change(self) -> None:
        for listener in self._change_listeners:
            try:
                listener()
            except Exception as e:
                logger.exception("Error notifying listener: %s", e)

    def add_change_listener(self, callback: Callable[[], None]) -> None:
        """Add a callback to be notified on state changes."""
        self._change_listeners.append(callback)

    def set_updating(self) -> None:
        self._set_state(STATE_UPDATING)

    def set_updated(self, error: Optional[str] = None) -> None:
        """Mark a refresh as complete.

        Args:
            error: Optional error message. If provided, state is set to ERROR
                and the last successful timestamp is left untouched.
        """
        if error:
            self.last_error = error
            self._set_state(STATE_ERROR)
        else:
            self.last_updated = time.time()
            self.last_error = None
            self._set_state(STATE_UPDATED)

    def is_updating(self) -> bool:
        return self.state == STATE_UPDATING

    def clear_error(self) -> None:
        self.last_error = None
        self._notify_change()


class SnapshotStore:
    """Holds the most recent portfolio snapshot for the HTTP layer."""

    def __init__(self, initial: PortfolioSnapshot):
        self._snapshot = initial
        self._lock = threading.Lock()

    def get(self) -> PortfolioSnapshot:
        with self._lock:
            return self._snapshot

    def set(self, snapshot: PortfolioSnapshot) -> None:
        with self._lock:
            self._snapshot = snapshot
