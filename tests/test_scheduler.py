"""
Unit tests for scheduler.py (cancellable periodic refresh).
"""
import threading
import unittest

from dashboard.scheduler import RefreshScheduler

WAIT = 2.0


class TestRefreshScheduler(unittest.TestCase):
    """Test RefreshScheduler start/stop/trigger behaviour."""

    def setUp(self):
        self.ran = threading.Event()
        self.calls = 0

    def _task(self):
        self.calls += 1
        self.ran.set()

    def test_runs_immediately_on_start(self):
        scheduler = RefreshScheduler(self._task, interval=60)
        scheduler.start()
        try:
            self.assertTrue(self.ran.wait(WAIT))
            self.assertTrue(scheduler.is_running)
        finally:
            scheduler.stop(timeout=WAIT)

    def test_stop_interrupts_long_interval(self):
        scheduler = RefreshScheduler(self._task, interval=3600)
        scheduler.start()
        self.assertTrue(self.ran.wait(WAIT))

        scheduler.stop(timeout=WAIT)

        self.assertFalse(scheduler.is_running)
        self.assertEqual(self.calls, 1)

    def test_trigger_runs_task_early(self):
        second_run = threading.Event()

        def task():
            self._task()
            if self.calls >= 2:
                second_run.set()

        scheduler = RefreshScheduler(task, interval=3600)
        scheduler.start()
        try:
            self.assertTrue(self.ran.wait(WAIT))
            scheduler.trigger()
            self.assertTrue(second_run.wait(WAIT))
        finally:
            scheduler.stop(timeout=WAIT)

    def test_repeats_on_interval(self):
        third_run = threading.Event()

        def task():
            self._task()
            if self.calls >= 3:
                third_run.set()

        scheduler = RefreshScheduler(task, interval=0.01)
        scheduler.start()
        try:
            self.assertTrue(third_run.wait(WAIT))
        finally:
            scheduler.stop(timeout=WAIT)
        self.assertGreaterEqual(scheduler.run_count, 3)

    def test_start_twice_is_noop(self):
        scheduler = RefreshScheduler(self._task, interval=3600)
        scheduler.start()
        try:
            self.assertTrue(self.ran.wait(WAIT))
            first_thread = scheduler._thread
            scheduler.start()
            self.assertIs(scheduler._thread, first_thread)
        finally:
            scheduler.stop(timeout=WAIT)

    def test_task_exception_does_not_kill_loop(self):
        recovered = threading.Event()
        attempts = []

        def task():
            attempts.append(1)
            if len(attempts) == 1:
                raise RuntimeError("first run fails")
            recovered.set()

        scheduler = RefreshScheduler(task, interval=0.01)
        scheduler.start()
        try:
            self.assertTrue(recovered.wait(WAIT))
        finally:
            scheduler.stop(timeout=WAIT)

    def test_can_restart_after_stop(self):
        scheduler = RefreshScheduler(self._task, interval=3600)
        scheduler.start()
        self.assertTrue(self.ran.wait(WAIT))
        scheduler.stop(timeout=WAIT)

        self.ran.clear()
        scheduler.start()
        try:
            self.assertTrue(self.ran.wait(WAIT))
        finally:
            scheduler.stop(timeout=WAIT)

    def test_stop_before_start(self):
        scheduler = RefreshScheduler(self._task, interval=1)
        # Should not raise
        scheduler.stop()
        self.assertFalse(scheduler.is_running)


if __name__ == '__main__':
    unittest.main()
