"""
Tests for the queue-based logging setup.
"""
import logging
import logging.handlers
import sys
from unittest.mock import Mock, patch

import pytest

from doc_summary.logging_config import NOISY_LOGGERS, ThreadSafeLoggingConfig


@pytest.fixture()
def root_state():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    noisy = {name: (logging.getLogger(name).level, logging.getLogger(name).propagate) for name in NOISY_LOGGERS}
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, (lvl, propagate) in noisy.items():
        logger = logging.getLogger(name)
        logger.setLevel(lvl)
        logger.propagate = propagate
        logger.disabled = False
        logger.handlers.clear()


def test_setup_installs_single_queue_handler(root_state):
    config = ThreadSafeLoggingConfig()
    try:
        config.setup_logging(debug=False)
        config.setup_logging(debug=False)

        assert config.is_running
        queue_handlers = [h for h in root_state.handlers if isinstance(h, logging.handlers.QueueHandler)]
        assert len(queue_handlers) == 1
        assert root_state.level == logging.INFO
        assert logging.getLogger("playwright").level == logging.WARNING
    finally:
        config.stop()

    assert not config.is_running


def test_debug_level(root_state):
    config = ThreadSafeLoggingConfig()
    try:
        config.setup_logging(debug=True)
        assert root_state.level == logging.DEBUG
    finally:
        config.stop()


def test_main_stops_logging_when_server_exits(monkeypatch):
    from app.main import main

    monkeypatch.setattr(sys, "argv", ["run_app.py", "--port", "5050"])
    app = Mock()
    app.run.side_effect = KeyboardInterrupt

    with patch("app.main.create_app", return_value=app), \
            patch("doc_summary.logging_config.setup_logging") as setup_logging, \
            patch("doc_summary.logging_config.stop_logging") as stop_logging:
        with pytest.raises(KeyboardInterrupt):
            main()

    setup_logging.assert_called_once()
    assert app.run.call_args.kwargs["port"] == 5050
    stop_logging.assert_called_once()
