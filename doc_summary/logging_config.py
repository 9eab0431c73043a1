"""
Logging Configuration Module

Queue-based logging for the document summary service. Flask async views run
each request on its own worker thread and event loop, so records are funnelled
through a single queue and written by one listener to keep lines intact.
"""

import logging
import logging.handlers
import sys
from queue import Queue
from typing import List, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

# Third-party loggers that are only useful while debugging
NOISY_LOGGERS: List[str] = [
    "httpx",
    "httpcore",
    "urllib3",
    "openai",
    "langchain_core",
    "langchain_openai",
    "langchain_deepseek",
    "langchain_ollama",
    "asyncio",
    "playwright",
    "markdown_it",
]


class _MuteHttpFilter(logging.Filter):
    """Drop per-request HTTP client chatter."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        name = record.name or ""
        if name.startswith("httpx") or name.startswith("httpcore"):
            return False
        msg = record.getMessage()
        if isinstance(msg, str) and (
            msg.startswith("HTTP Request:") or msg.startswith("HTTP Response:")
        ):
            return False
        return True


class ThreadSafeLoggingConfig:
    """Root logger wired to a QueueHandler drained by a QueueListener."""

    def __init__(self):
        self._log_listener: Optional[logging.handlers.QueueListener] = None
        self._log_queue: Optional[Queue] = None

    @property
    def is_running(self) -> bool:
        return self._log_listener is not None

    def setup_logging(self, debug: bool = False) -> None:
        """
        Install the queue handler on the root logger and start the listener.

        Calling this twice restarts the listener instead of stacking handlers.

        Args:
            debug: Whether to enable debug logging
        """
        if self.is_running:
            self.stop()

        self._log_queue = Queue()
        queue_handler = logging.handlers.QueueHandler(self._log_queue)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

        self._log_listener = logging.handlers.QueueListener(
            self._log_queue, console_handler, respect_handler_level=True
        )
        self._log_listener.start()

        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.addHandler(queue_handler)
        root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

        if not debug:
            self._silence_noisy_libraries()

    def _silence_noisy_libraries(self) -> None:
        for handler in logging.getLogger().handlers:
            handler.addFilter(_MuteHttpFilter())

        for name in NOISY_LOGGERS:
            logger = logging.getLogger(name)
            if name in ("httpx", "httpcore"):
                logger.setLevel(logging.CRITICAL)
                logger.disabled = True
            else:
                logger.setLevel(logging.WARNING)
            logger.handlers.clear()
            logger.addHandler(logging.NullHandler())
            logger.propagate = False

    def stop(self) -> None:
        """Flush pending records and stop the listener."""
        if self._log_listener:
            self._log_listener.stop()
            self._log_listener = None
        self._log_queue = None


logging_config = ThreadSafeLoggingConfig()


def setup_logging(debug: bool = False) -> None:
    """Configure process-wide logging."""
    logging_config.setup_logging(debug)


def stop_logging() -> None:
    logging_config.stop()
