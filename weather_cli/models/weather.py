"""Pydantic models for OpenWeatherMap current weather responses."""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")


class _WireModel(BaseModel):
    """Read-only model populated from the provider's wire field names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Coordinates(_WireModel):
    """City geo location."""

    longitude: float = Field(alias="lon")
    latitude: float = Field(alias="lat")


class Conditions(_WireModel):
    """Main weather metrics. Temperatures are in Kelvin."""

    temperature_kelvin: float = Field(alias="temp")
    humidity_percent: int = Field(alias="humidity")
    pressure: float
    temp_min: float
    temp_max: float


class Wind(_WireModel):
    """Wind speed in m/s and direction in degrees clockwise from north."""

    speed_meters_per_second: float = Field(alias="speed")
    direction_degrees: float = Field(alias="deg", allow_inf_nan=False)


class Weather(_WireModel):
    """Successful current weather response."""

    city_name: str = Field(alias="name")
    coordinates: Coordinates = Field(alias="coord")
    conditions: Conditions = Field(alias="main")
    wind: Wind


class ApiError(_WireModel):
    """Error envelope returned by the provider.

    ``cod`` is sent as a string even though it always holds an integer
    (``{"cod": "404", "message": "city not found"}``). Plain integers are
    accepted too; booleans, floats and other text are rejected.
    """

    code: int = Field(alias="cod")
    message: str

    @field_validator("code", mode="before")
    @classmethod
    def parse_code(cls, v: object) -> int:
        """Parse a 32-bit integer code from its string or integer form."""
        if isinstance(v, bool) or not isinstance(v, (int, str)):
            raise ValueError("cod must be an integer or a string-encoded integer")
        if isinstance(v, str):
            if not _INTEGER_TEXT.fullmatch(v):
                raise ValueError(f"cod is not a valid integer: {v!r}")
            v = int(v)
        if not INT32_MIN <= v <= INT32_MAX:
            raise ValueError(f"cod is out of range: {v}")
        return v

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


ApiResponse = Weather | ApiError
