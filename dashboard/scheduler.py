"""
Cancellable fixed-interval task runner.
"""

import threading
from typing import Callable, Optional

from .logging_config import logger


class RefreshScheduler:
    """Runs a task immediately and then every ``interval`` seconds.

    The loop lives on a daemon thread. ``stop()`` wakes it at once instead of
    waiting out the current interval, and ``trigger()`` requests an early run.
    A task that raises is logged and the loop keeps going.
    """

    def __init__(self, task: Callable[[], None], interval: float, name: str = "RefreshScheduler"):
        self.task = task
        self.interval = interval
        self.name = name
        self.run_count = 0
        self._stop_event = threading.Event()
        self._wake_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the loop; a no-op if it is already running."""
        with self._lock:
            if self.is_running:
                return
            self._stop_event.clear()
            self._wake_event.clear()
            self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
            self._thread.start()
        logger.info("%s started (every %ss)", self.name, self.interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        """Cancel the loop and wait for the current run to finish."""
        with self._lock:
            thread = self._thread
            self._stop_event.set()
            self._wake_event.set()
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        logger.info("%s stopped", self.name)

    def trigger(self) -> None:
        """Run the task as soon as the loop is free, then restart the interval."""
        self._wake_event.set()

    def _run_task(self) -> None:
        try:
            self.task()
        except Exception as e:
            logger.exception("%s task failed: %s", self.name, e)
        finally:
            self.run_count += 1

    def _run(self) -> None:
        while not self._stop_event.is_set():
            self._run_task()
            self._wake_event.wait(self.interval)
            self._wake_event.clear()
