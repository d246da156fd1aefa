"""
Unit tests for sse.py (SSE client manager).
"""
import json
import unittest
from queue import Queue

from dashboard.sse import SSEClientManager, format_sse, sse_manager


class TestSSEClientManager(unittest.TestCase):
    """Test SSEClientManager."""

    def test_add_and_remove_client(self):
        manager = SSEClientManager()
        q = manager.new_client()
        self.assertIn(q, manager.clients)
        manager.remove_client(q)
        self.assertNotIn(q, manager.clients)

    def test_remove_nonexistent_client(self):
        manager = SSEClientManager()
        # Should not raise
        manager.remove_client(Queue())

    def test_broadcast_sends_to_all(self):
        manager = SSEClientManager()
        q1 = manager.new_client()
        q2 = manager.new_client()

        manager.broadcast("status", {"state": "updated"})

        expected = 'event: status\ndata: {"state": "updated"}\n\n'
        self.assertEqual(q1.get_nowait(), expected)
        self.assertEqual(q2.get_nowait(), expected)

    def test_full_client_is_dropped(self):
        manager = SSEClientManager()
        stalled = Queue(maxsize=1)
        manager.add_client(stalled)
        healthy = manager.new_client()

        manager.broadcast("portfolio", {"n": 1})
        manager.broadcast("portfolio", {"n": 2})

        self.assertNotIn(stalled, manager.clients)
        self.assertIn(healthy, manager.clients)
        self.assertEqual(healthy.qsize(), 2)

    def test_format_sse(self):
        self.assertEqual(format_sse("{}"), "data: {}\n\n")
        message = format_sse(json.dumps({"a": 1}), "portfolio")
        self.assertTrue(message.startswith("event: portfolio\n"))

    def test_global_instance_exists(self):
        self.assertIsInstance(sse_manager, SSEClientManager)


if __name__ == '__main__':
    unittest.main()
