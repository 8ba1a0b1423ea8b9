"""Weather service for the OpenWeatherMap current weather API."""

from collections.abc import Callable
from typing import Any

import httpx
from pydantic import ValidationError

from weather_cli.config import Settings
from weather_cli.exceptions import (
    ConfigurationException,
    DeserializationException,
    ErrorCode,
    TransportException,
    WeatherApiErrorException,
)
from weather_cli.logging_config import get_logger, log_with_context, redact_sensitive_data
from weather_cli.models.query import Query
from weather_cli.models.weather import ApiError, ApiResponse, Weather

WEATHER_PATH = "/data/2.5/weather"

logger = get_logger(__name__)


def build_url(base_host: str, api_key: str, query: Query) -> str:
    """Build the current weather URL for a query.

    The query value is percent-encoded, so ``New York`` is sent as
    ``q=New+York``.

    Args:
        base_host: API host, with or without scheme (defaults to https)
        api_key: OpenWeatherMap APPID
        query: City, postal code or location id

    Returns:
        ``<scheme>://<host>/data/2.5/weather?APPID=<key>&<param>=<value>``

    Raises:
        ConfigurationException: If api_key is empty
    """
    if not api_key:
        raise ConfigurationException("API key must not be empty", code=ErrorCode.CONFIG_MISSING)

    base = base_host.rstrip("/")
    if "://" not in base:
        base = f"https://{base}"

    params = httpx.QueryParams({"APPID": api_key, query.param: query.value})
    return f"{base}{WEATHER_PATH}?{params}"


def parse_response(body: bytes | str) -> ApiResponse:
    """Deserialize a response body as weather data, falling back to an API error.

    The wire format carries no discriminant, so the body is first validated
    against the weather shape and only then against the error envelope.

    Args:
        body: Raw HTTP response body

    Returns:
        Weather on success, ApiError when the provider reported a failure

    Raises:
        DeserializationException: If the body matches neither shape
    """
    try:
        return Weather.model_validate_json(body)
    except ValidationError as weather_error:
        try:
            return ApiError.model_validate_json(body)
        except ValidationError as api_error:
            text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
            raise DeserializationException(
                f"Unexpected response from server: {text}",
                details={
                    "body": text,
                    "weather_errors": weather_error.error_count(),
                    "api_error_errors": api_error.error_count(),
                },
            ) from api_error


def _log_request(request: httpx.Request) -> None:
    """Event hook to log requests with the API key redacted."""
    log_with_context(
        logger,
        "info",
        "HTTP Request",
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        event_type="http_request",
    )


def _log_response(response: httpx.Response) -> None:
    """Event hook to log responses with the API key redacted."""
    log_with_context(
        logger,
        "info",
        "HTTP Response",
        status_code=response.status_code,
        url=redact_sensitive_data(str(response.request.url)),
        event_type="http_response",
    )


def create_http_client(settings: Settings, **kwargs: Any) -> httpx.Client:
    """Create the blocking HTTP client used for all queries of one run.

    Args:
        settings: Settings providing the request timeout
        **kwargs: Extra httpx.Client arguments (e.g. transport in tests)

    Returns:
        Configured httpx.Client; the caller owns and closes it
    """
    event_hooks: dict[str, list[Callable[..., Any]]] = {
        "request": [_log_request],
        "response": [_log_response],
    }
    return httpx.Client(
        timeout=settings.request_timeout,
        follow_redirects=True,
        event_hooks=event_hooks,
        **kwargs,
    )


def fetch_response(client: httpx.Client, query: Query, settings: Settings) -> ApiResponse:
    """Perform one GET for a query and deserialize the body.

    Non-2xx statuses are not raised: the provider sends its error envelope
    with 4xx statuses and the body decides the outcome.

    Raises:
        TransportException: If the request could not complete
        DeserializationException: If the body matches neither shape
    """
    url = build_url(settings.api_base_url, settings.api_key, query)

    try:
        response = client.get(url)
    except httpx.TimeoutException as e:
        raise TransportException(
            f"Request timed out: {e}",
            code=ErrorCode.TRANSPORT_TIMEOUT,
            details={"query": str(query)},
        ) from e
    except httpx.HTTPError as e:
        raise TransportException(
            f"Request failed: {e}",
            details={"query": str(query), "error_type": type(e).__name__},
        ) from e

    return parse_response(response.content)


def get_current_weather(client: httpx.Client, query: Query, settings: Settings) -> Weather:
    """Get current weather for a query.

    Args:
        client: HTTP client for making the request
        query: City, postal code or location id
        settings: Settings providing API key and host

    Returns:
        Parsed Weather

    Raises:
        TransportException: If the request could not complete
        DeserializationException: If the response body is not understood
        WeatherApiErrorException: If the provider reported an error
    """
    log_with_context(logger, "debug", "Fetching current weather", query=str(query), event_type="weather_request")

    result = fetch_response(client, query, settings)

    if isinstance(result, ApiError):
        log_with_context(
            logger,
            "info",
            "Weather API returned an error",
            query=str(query),
            api_code=result.code,
            api_message=result.message,
            event_type="weather_api_error",
        )
        raise WeatherApiErrorException(result)

    log_with_context(
        logger,
        "info",
        "Weather fetched",
        query=str(query),
        city=result.city_name,
        event_type="weather_fetched",
    )
    return result
