"""Pytest configuration and shared fixtures."""

import json
import logging
from unittest.mock import Mock

import httpx
import pytest

from weather_cli.config import Settings
from weather_cli.services.weather_service import create_http_client


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by setup_logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def mock_settings():
    """Settings instance with test values, ignoring dotfiles."""
    return Settings(
        api_key="test-weather-key",
        default_location="Amsterdam",
        api_base_url="https://api.openweathermap.org",
        _env_file=None,
    )


@pytest.fixture
def mock_http_client():
    """Mock httpx.Client for external API calls."""
    mock_client = Mock(spec=httpx.Client)
    mock_client.get = Mock()
    mock_client.close = Mock()
    return mock_client


@pytest.fixture
def mock_weather_response():
    """Mock OpenWeatherMap current weather response."""
    return {
        "coord": {"lon": -0.13, "lat": 51.51},
        "weather": [{"id": 300, "main": "Drizzle", "description": "light intensity drizzle", "icon": "09d"}],
        "base": "stations",
        "main": {
            "temp": 288.15,
            "humidity": 70,
            "pressure": 1012,
            "temp_min": 287,
            "temp_max": 289,
        },
        "visibility": 10000,
        "wind": {"speed": 4.1, "deg": 200},
        "clouds": {"all": 90},
        "dt": 1485789600,
        "id": 2643743,
        "name": "London",
        "cod": 200,
    }


@pytest.fixture
def mock_error_response():
    """Mock OpenWeatherMap error envelope."""
    return {"cod": "404", "message": "city not found"}


@pytest.fixture
def make_http_client(mock_settings):
    """Build real httpx.Clients backed by a MockTransport.

    Every request seen by the transport is appended to ``requests`` on the
    returned client for later inspection.
    """
    clients: list[httpx.Client] = []

    def factory(payload=None, status_code: int = 200, handler=None) -> httpx.Client:
        seen: list[httpx.Request] = []

        def default_handler(request: httpx.Request) -> httpx.Response:
            if isinstance(payload, (dict, list)):
                return httpx.Response(status_code, content=json.dumps(payload).encode())
            return httpx.Response(status_code, content=payload or b"")

        def recording_handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return (handler or default_handler)(request)

        client = create_http_client(mock_settings, transport=httpx.MockTransport(recording_handler))
        client.requests = seen
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()
