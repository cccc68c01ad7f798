"""Tests for logging configuration."""

import logging
from collections.abc import Generator

import pytest
import structlog
from structlog.stdlib import BoundLogger
from structlog.testing import LogCapture
from structlog.types import BindableLogger

from locref.core.geocoding import LocationReferenceResolver, StandardGeocodingBackend
from locref.core.logging import configure_logging, get_logger, get_reference_logger


@pytest.fixture
def log_output() -> LogCapture:
    """Fixture to capture log output."""
    return LogCapture()


@pytest.fixture(autouse=True)
def setup_logging(log_output: LogCapture) -> Generator[None, None, None]:
    """Configure logging for tests."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            log_output,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    yield
    configure_logging(testing=True)


def test_configure_logging() -> None:
    """Test logging configuration."""
    configure_logging()
    logger = structlog.get_logger()
    assert isinstance(logger, BoundLogger | BindableLogger)

    processors = structlog.get_config()["processors"]
    assert any(
        p.__class__.__name__ == "JSONRenderer" for p in processors
    ), "JSONRenderer not configured"


def test_configure_logging_testing() -> None:
    """Test the key-value renderer is used under test."""
    configure_logging(testing=True)

    processors = structlog.get_config()["processors"]
    assert any(p.__class__.__name__ == "KeyValueRenderer" for p in processors)


def test_get_logger() -> None:
    """Test get_logger returns a configured logger."""
    logger = get_logger(__name__)
    assert isinstance(logger, BoundLogger | BindableLogger)


def test_reference_logger_binds_context(log_output: LogCapture) -> None:
    """Test reference and format are bound to the logger."""
    logger = get_reference_logger("123 Main St", "address")
    logger.warning("test_event")

    assert log_output.entries[0]["location_reference"] == "123 Main St"
    assert log_output.entries[0]["format"] == "address"


def test_resolver_logs_unsupported_format(log_output: LogCapture) -> None:
    """Test unsupported formats are logged with the operation name."""
    resolver = LocationReferenceResolver(StandardGeocodingBackend())

    resolver.resolve("123 Main St", "address")

    entries = [e for e in log_output.entries if e["event"] == "unsupported_format"]
    assert entries[0]["operation"] == "parse_address"
    assert entries[0]["location_reference"] == "123 Main St"


@pytest.mark.parametrize(
    "level,expected",
    [("debug", logging.DEBUG), ("ERROR", logging.ERROR), ("bogus", logging.INFO)],
)
def test_configure_logging_level(level: str, expected: int) -> None:
    """Test level names are case insensitive and unknown names fall back to INFO."""
    configure_logging(testing=True, level=level)

    package_logger = logging.getLogger("locref")
    assert package_logger.level == expected
    assert package_logger.propagate is False
    assert len(package_logger.handlers) == 1
