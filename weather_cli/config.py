from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from weather_cli.exceptions import ConfigurationException, ErrorCode
from weather_cli.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

DOTFILE = Path.home() / ".owm"
DEFAULT_API_BASE_URL = "https://api.openweathermap.org"


class Settings(BaseSettings):
    """Weather CLI settings with validation.

    Values come from OWM_* environment variables, the ~/.owm dotfile and a
    .env file in the working directory (the .env file wins over the dotfile,
    the environment wins over both).
    """

    # OpenWeatherMap credentials - required
    api_key: str = Field(min_length=1, description="OpenWeatherMap API key (APPID)")
    default_location: str | None = Field(default=None, description="City queried when no location is given")

    # HTTP
    api_base_url: str = Field(default=DEFAULT_API_BASE_URL, min_length=1, description="API scheme and host")
    request_timeout: float = Field(default=10.0, gt=0, description="HTTP timeout in seconds")

    # Presentation
    wind_speed_factor: float = Field(default=11 / 25, gt=0, description="Multiplier from m/s to displayed mph")

    # Logging
    log_level: str = Field(default="WARNING", description="Console log level")
    log_file: Path | None = Field(default=None, description="Optional JSON log file")

    model_config = SettingsConfigDict(
        env_prefix="OWM_",
        env_file=(DOTFILE, ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("api_key", mode="after")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Ensure api_key is not whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("api_key cannot be empty")
        return v

    @field_validator("default_location", mode="after")
    @classmethod
    def validate_default_location(cls, v: str | None) -> str | None:
        """Treat a blank default location as unset."""
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log_level names a standard logging level."""
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"log_level must be a standard logging level, got {v!r}")
        return v


def load_settings(**overrides) -> Settings:
    """Load settings, turning validation failures into a configuration error.

    Raises:
        ConfigurationException: If the API key is missing or a value is invalid
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors() if err["type"] == "missing"]
        if missing:
            message = f"Missing configuration: {', '.join('OWM_' + name.upper() for name in missing)}"
            code = ErrorCode.CONFIG_MISSING
        else:
            message = f"Invalid configuration: {e.errors()[0]['msg']}"
            code = ErrorCode.CONFIG_ERROR
        log_with_context(
            logger,
            "debug",
            "Settings validation failed",
            errors=[err["msg"] for err in e.errors()],
            event_type="config_invalid",
        )
        raise ConfigurationException(message, code=code, details={"errors": e.errors()}) from e


# Singleton settings instance, loaded once per process
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance.

    Settings are read once before the first request and never reloaded.

    Returns:
        Cached Settings instance

    Raises:
        ConfigurationException: If settings cannot be loaded
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = load_settings()
    return _settings_instance
