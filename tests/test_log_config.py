import sys
from io import StringIO

import pytest
from loguru import logger

from readloom.log_config import configure_logging


def test_configure_logging_default_level():
    """Test configure_logging with default INFO level and stderr sink."""
    logger.remove()

    configure_logging()

    assert len(logger._core.handlers) == 1
    handler_id = list(logger._core.handlers.keys())[-1]
    handler = logger._core.handlers[handler_id]
    assert handler._levelno == logger.level("INFO").no


@pytest.mark.parametrize("level", ["debug", "WARNING"])
def test_configure_logging_custom_level(level):
    logger.remove()
    configure_logging(level=level)
    handler_id = list(logger._core.handlers.keys())[-1]
    handler = logger._core.handlers[handler_id]
    assert handler._levelno == logger.level(level.upper()).no


def test_configure_logging_custom_sink_stringio():
    """Messages reach a custom sink, filtered by level."""
    logger.remove()
    sink = StringIO()
    configure_logging(sink=sink, level="INFO")

    logger.info("Test message to StringIO")
    logger.debug("Hidden debug message")

    output = sink.getvalue()
    assert "Test message to StringIO" in output
    assert "INFO" in output
    assert "Hidden debug message" not in output


def test_configure_logging_removes_existing_handlers():
    """Test that configure_logging removes pre-existing handlers."""
    logger.remove()
    logger.add(lambda _: None, level="ERROR")
    assert len(logger._core.handlers) == 1

    configure_logging(level="INFO")

    assert len(logger._core.handlers) == 1


def test_library_messages_reach_configured_sink():
    """The client's own log records go through the shared logger."""
    from readloom.config import ApiSettings
    from readloom.connection import Connection

    sink = StringIO()
    configure_logging(sink=sink, level="DEBUG")
    Connection(settings=ApiSettings(_env_file=None, api_key="k", api_secret="s"))

    assert "Using authentication strategy: NoAuth" in sink.getvalue()


def test_library_is_silent_until_configured():
    from readloom.config import ApiSettings
    from readloom.connection import Connection
    from readloom.log_config import LIBRARY_NAME

    logger.remove()
    logger.disable(LIBRARY_NAME)
    sink = StringIO()
    logger.add(sink, level="DEBUG")
    settings = ApiSettings(_env_file=None, api_key="k", api_secret="s")

    Connection(settings=settings)
    assert sink.getvalue() == ""

    configure_logging(sink=sink, level="DEBUG")
    Connection(settings=settings)
    assert "Using authentication strategy: NoAuth" in sink.getvalue()


def test_tracebacks_hide_local_values_by_default():
    sink = StringIO()
    configure_logging(sink=sink, level="ERROR")
    token_secret = "hidden-" + "value"
    try:
        raise RuntimeError(len(token_secret))
    except RuntimeError:
        logger.exception("Handshake failed")

    output = sink.getvalue()
    assert "Handshake failed" in output
    assert "hidden-value" not in output


@pytest.fixture(autouse=True)
def reset_logger_after_test():
    """Fixture to reset Loguru to a default state after each test in this module."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="INFO")
