"""Presentation helpers for weather summaries"""

from weather_cli.views.summary import (
    CompassBucket,
    format_wind,
    render_summary,
    temperature_fahrenheit,
    wind_compass_bucket,
    wind_speed_mph,
)

__all__ = [
    "CompassBucket",
    "format_wind",
    "render_summary",
    "temperature_fahrenheit",
    "wind_compass_bucket",
    "wind_speed_mph",
]
