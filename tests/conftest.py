"""Test configuration."""

import os
from collections.abc import Generator
from typing import Any

import pytest
from pytest import Config

from locref.core.config import Settings
from locref.core.geocoding.base import GeocodingBackend, NodeTopologyMixin
from locref.core.logging import configure_logging

fixture = pytest.fixture


class ScriptedBackend(GeocodingBackend):
    """Backend whose address results are scripted per reference."""

    def __init__(self, responses: dict[str, dict[str, Any]] | None = None):
        super().__init__()
        self.responses = responses or {}
        self.calls: list[Any] = []

    def parse_address(self, reference: Any) -> None:
        self.calls.append(reference)
        response = self.responses.get(reference, {})
        self.errors.extend(response.get("errors", []))
        self.warnings.extend(response.get("warnings", []))
        self.coords = response.get("coords", [])
        self.formatted_location_reference = response.get(
            "formatted", None if response.get("errors") else reference
        )


class ScriptedNodeBackend(NodeTopologyMixin, ScriptedBackend):
    """Scripted backend that also reports graph endpoints."""

    def parse_address(self, reference: Any) -> None:
        super().parse_address(reference)
        response = self.responses.get(reference, {})
        self.from_node = response.get("from_node")
        self.to_node = response.get("to_node")


@fixture
def scripted_backend() -> ScriptedBackend:
    """Backend with one good, one warning and one failing address."""
    return ScriptedBackend(
        {
            "123 Main St": {
                "coords": [[1.0, 2.0]],
                "formatted": "123 Main St, Normalized",
            },
            "Ambiguous Rd": {
                "coords": [[3.0, 4.0]],
                "formatted": "Ambiguous Rd, Somewhere",
                "warnings": ["Multiple matches", "Used first match"],
            },
            "Nowhere": {
                "errors": ["Address not found", "Provider gave up"],
                "warnings": ["partial warning"],
                "coords": [[9.0, 9.0]],
                "formatted": "partial",
            },
        }
    )


@fixture
def node_backend() -> ScriptedNodeBackend:
    return ScriptedNodeBackend(
        {
            "Main St & 1st Ave": {
                "coords": [[-76.6, 39.3]],
                "formatted": "MAIN ST & 1ST AVE",
                "from_node": 1001,
                "to_node": None,
            },
            "Main St between 1st and 3rd": {
                "coords": [[-76.6, 39.3], [-76.5, 39.3]],
                "formatted": "MAIN ST FROM 1ST AVE TO 3RD AVE",
                "from_node": 1001,
                "to_node": 1003,
            },
        }
    )


@fixture
def test_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Settings isolated from the environment and any .env file."""
    for key in list(os.environ):
        if key.startswith(("GEOCODING_", "DISTANCE_", "SPATIAL_")) or key in (
            "REDIS_URL",
            "NOMINATIM_USER_AGENT",
        ):
            monkeypatch.delenv(key, raising=False)
    return Settings(_env_file=None)


@fixture(scope="session", autouse=True)
def testing_env() -> Generator[None, None, None]:
    """Mark the process as running tests."""
    os.environ["TESTING"] = "true"
    yield


def pytest_configure(config: Config) -> None:
    """Configure pytest.

    Args:
        config: Pytest configuration object
    """
    # Configure logging for test environment
    configure_logging(testing=True)
