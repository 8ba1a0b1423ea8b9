"""Weather CLI models"""

from weather_cli.models.query import City, LocationId, PostalCode, Query
from weather_cli.models.weather import ApiError, ApiResponse, Conditions, Coordinates, Weather, Wind

__all__ = [
    "ApiError",
    "ApiResponse",
    "City",
    "Conditions",
    "Coordinates",
    "LocationId",
    "PostalCode",
    "Query",
    "Weather",
    "Wind",
]
