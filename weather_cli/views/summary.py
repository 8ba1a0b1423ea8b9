"""Derived, display-ready values for a weather response."""

import math
from enum import Enum

from weather_cli.models.weather import Conditions, Weather, Wind

# Historical m/s -> mph multiplier. The physical factor is 2.23694; set
# OWM_WIND_SPEED_FACTOR to use it instead.
WIND_SPEED_FACTOR = 11 / 25

SECTOR_WIDTH = 45.0


class CompassBucket(str, Enum):
    """Eight 45 degree compass sectors, clockwise from north."""

    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"


_BUCKETS = list(CompassBucket)


def temperature_fahrenheit(conditions: Conditions) -> float:
    """Convert the reported Kelvin temperature to Fahrenheit (unrounded)."""
    return conditions.temperature_kelvin * 9 / 5 - 459.67


def wind_speed_mph(wind: Wind, factor: float = WIND_SPEED_FACTOR) -> float:
    """Convert the reported wind speed to miles per hour (unrounded)."""
    return wind.speed_meters_per_second * factor


def wind_compass_bucket(wind: Wind) -> CompassBucket:
    """Map wind direction to one of eight compass sectors.

    Each sector spans ``(center - 22.5, center + 22.5]`` around its center
    (N at 0, NE at 45, ...), so a value on a shared edge belongs to the
    sector counter-clockwise of it: 22.5 is N, 67.5 is NE, 337.5 is NW.
    The index is computed arithmetically on the direction reduced modulo
    360, so every finite input lands in exactly one sector.
    """
    degrees = wind.direction_degrees % 360.0
    index = math.ceil((degrees - SECTOR_WIDTH / 2) / SECTOR_WIDTH) % len(_BUCKETS)
    return _BUCKETS[index]


def format_wind(wind: Wind, factor: float = WIND_SPEED_FACTOR) -> str:
    """Format wind as ``"<speed> mph <BUCKET>"``, e.g. ``"2 mph SW"``."""
    return f"{wind_speed_mph(wind, factor):.0f} mph {wind_compass_bucket(wind).value}"


def render_summary(weather: Weather, factor: float = WIND_SPEED_FACTOR) -> str:
    """Render the three line summary printed for each query."""
    lines = [
        weather.city_name,
        f"{temperature_fahrenheit(weather.conditions):.0f}°F",
        format_wind(weather.wind, factor),
    ]
    return "\n".join(lines)
