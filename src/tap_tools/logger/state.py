"""Process-wide state of the tap-tools logging pipeline.

One LoggerState owns the queue between the ``tap_tools`` root logger and
the QueueListener thread that feeds the console and the log file.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from dataclasses import dataclass, field
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path


@dataclass(slots=True)
class LoggerState:
    """Queue, listener and flags for the logging pipeline.

    Attributes:
        lock: Serializes first-time setup and teardown
        queue_listener: Thread delivering records to the real handlers
        log_queue: Queue written by the root logger's QueueHandler
        log_file: Rotating log file, or None when file logging is off
        config_applied: Whether settings.conf levels have been applied

    """

    lock: threading.Lock = field(default_factory=threading.Lock)
    queue_listener: QueueListener | None = None
    log_queue: queue.Queue | None = None
    log_file: Path | None = None
    config_applied: bool = False

    @property
    def root_initialized(self) -> bool:
        return self.queue_listener is not None

    @property
    def handlers(self) -> tuple[logging.Handler, ...]:
        if self.queue_listener is None:
            return ()
        return tuple(self.queue_listener.handlers)

    def start(
        self, handlers: list[logging.Handler], log_file: Path | None
    ) -> QueueHandler:
        """Start a listener for ``handlers`` and return the queue's writer."""
        self.log_queue = queue.Queue(-1)
        self.queue_listener = QueueListener(
            self.log_queue, *handlers, respect_handler_level=True
        )
        self.queue_listener.start()
        self.log_file = log_file
        return QueueHandler(self.log_queue)

    def drain(self, timeout: float) -> None:
        """Wait up to ``timeout`` seconds for queued records to be taken."""
        if self.log_queue is None:
            return
        deadline = time.monotonic() + timeout
        while not self.log_queue.empty() and time.monotonic() < deadline:
            time.sleep(0.01)

    def stop(self) -> None:
        """Stop the listener; queued records are delivered first."""
        if self.queue_listener is not None:
            self.queue_listener.stop()
        self.queue_listener = None
        self.log_queue = None
        self.log_file = None
        self.config_applied = False


_state = LoggerState()


def get_state() -> LoggerState:
    """Return the shared logger state."""
    return _state
