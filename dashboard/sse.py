"""
Server-Sent Events (SSE) client management.
"""

import json
import threading
from queue import Full, Queue
from typing import Any, List

from .constants import SSE_CLIENT_QUEUE_SIZE
from .logging_config import logger


def format_sse(data: str, event: str = None) -> str:
    """Frame *data* as one SSE message."""
    message = f"data: {data}\n\n"
    if event:
        message = f"event: {event}\n{message}"
    return message


class SSEClientManager:
    """Manages SSE client queues and fans out named events to them."""

    def __init__(self):
        self.clients: List[Queue] = []
        self.lock = threading.Lock()

    def new_client(self) -> Queue:
        """Create and register a bounded queue for a new connection."""
        client_queue = Queue(maxsize=SSE_CLIENT_QUEUE_SIZE)
        self.add_client(client_queue)
        return client_queue

    def add_client(self, client_queue: Queue) -> None:
        with self.lock:
            self.clients.append(client_queue)

    def remove_client(self, client_queue: Queue) -> None:
        with self.lock:
            try:
                self.clients.remove(client_queue)
            except ValueError:
                pass

    def broadcast(self, event: str, payload: Any) -> None:
        """Send *payload* as JSON under *event* to every client.

        A client whose queue is full has stopped reading and is dropped.
        """
        message = format_sse(json.dumps(payload), event)
        dropped = []
        with self.lock:
            for client_queue in self.clients[:]:
                try:
                    client_queue.put_nowait(message)
                except Full:
                    logger.warning("SSE client not keeping up, dropping it")
                    dropped.append(client_queue)
        for client_queue in dropped:
            self.remove_client(client_queue)


# Module-level instance
sse_manager = SSEClientManager()
