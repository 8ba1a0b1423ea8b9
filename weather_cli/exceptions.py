"""Custom exceptions for the weather CLI with process exit codes."""

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from weather_cli.models.weather import ApiError


class ErrorCode(str, Enum):
    """Error codes for structured error reporting."""

    # Generic errors
    WEATHER_CLI_ERROR = "WEATHER_CLI_ERROR"

    # Configuration errors
    CONFIG_ERROR = "CONFIG_ERROR"
    CONFIG_MISSING = "CONFIG_MISSING"

    # Transport errors
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    TRANSPORT_TIMEOUT = "TRANSPORT_TIMEOUT"

    # Response errors
    DESERIALIZATION_ERROR = "DESERIALIZATION_ERROR"
    WEATHER_API_ERROR = "WEATHER_API_ERROR"


class WeatherCliException(Exception):
    """Base exception for weather CLI errors with exit code support.

    All custom exceptions should inherit from this class so the driver
    can report every failure the same way.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.WEATHER_CLI_ERROR,
        exit_code: int = 1,
        details: dict[str, Any] | None = None,
    ):
        """Initialize weather CLI exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            exit_code: Process exit status (default 1)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.exit_code = exit_code
        self.details = details or {}
        super().__init__(message)


class ConfigurationException(WeatherCliException):
    """Configuration errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details=details)


class TransportException(WeatherCliException):
    """HTTP request could not complete."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.TRANSPORT_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details=details)


class DeserializationException(WeatherCliException):
    """Response body matched neither the weather nor the error shape."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.DESERIALIZATION_ERROR, details=details)


class WeatherApiErrorException(WeatherCliException):
    """The provider reported a failure in its own error envelope."""

    def __init__(self, api_error: "ApiError"):
        self.api_error = api_error
        super().__init__(
            str(api_error),
            code=ErrorCode.WEATHER_API_ERROR,
            details={"api_code": api_error.code, "api_message": api_error.message},
        )
