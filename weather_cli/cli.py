"""Command line entry point for the weather CLI."""

import argparse
import logging
import sys

import httpx
from pydantic import ValidationError

from weather_cli import __version__
from weather_cli.config import Settings, get_settings
from weather_cli.exceptions import ConfigurationException, ErrorCode, WeatherCliException
from weather_cli.logging_config import get_logger, log_with_context, setup_logging
from weather_cli.models.query import City, LocationId, PostalCode, Query
from weather_cli.services.weather_service import create_http_client, get_current_weather
from weather_cli.views.summary import render_summary

logger = get_logger(__name__)


class CliArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser(prog_name: str | None = None) -> argparse.ArgumentParser:
    """Build the argument parser for the weather command."""
    parser = CliArgumentParser(
        prog=prog_name or "weather",
        description="Show current weather from OpenWeatherMap.",
        epilog="With no location, OWM_DEFAULT_LOCATION is used.",
    )
    parser.add_argument("cities", nargs="*", metavar="CITY", help="city name, e.g. 'London,uk'")
    parser.add_argument(
        "-z", "--zip", dest="postal_codes", action="append", default=[], metavar="CODE",
        help="postal code, e.g. '94040,us' (repeatable)",
    )
    parser.add_argument(
        "-i", "--id", dest="location_ids", action="append", default=[], metavar="ID",
        help="OpenWeatherMap city id (repeatable)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log requests to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_queries(args: argparse.Namespace, settings: Settings) -> list[Query]:
    """Turn parsed arguments into queries, falling back to the default location.

    Raises:
        ConfigurationException: If no location was given and none is configured
    """
    queries: list[Query] = []
    try:
        queries.extend(City(name=name) for name in args.cities)
        queries.extend(PostalCode(code=code) for code in args.postal_codes)
        queries.extend(LocationId(id=location_id) for location_id in args.location_ids)
    except ValidationError as e:
        raise ConfigurationException(f"Invalid location: {e.errors()[0]['msg']}") from e

    if queries:
        return queries

    if settings.default_location is None:
        raise ConfigurationException(
            "No location given and OWM_DEFAULT_LOCATION is not set",
            code=ErrorCode.CONFIG_MISSING,
        )
    return [City(name=settings.default_location)]


def resolve_log_level(configured: str, verbose: bool) -> str:
    """Return the configured level, raised to at least INFO when verbose."""
    if verbose and logging.getLevelName(configured) > logging.INFO:
        return "INFO"
    return configured


def report_error(error: WeatherCliException) -> None:
    """Print an error as a single line on stderr."""
    message = " ".join(error.message.splitlines())
    print(f"error: {message}", file=sys.stderr)


def run(
    argv: list[str] | None = None,
    *,
    settings: Settings | None = None,
    client: httpx.Client | None = None,
) -> int:
    """Run the CLI and return the process exit status.

    Queries are processed one at a time; a failed query is reported on
    stderr and the remaining queries still run.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])
        settings: Preloaded settings (the process-wide get_settings() if None)
        client: HTTP client to use (created and closed here if None)

    Returns:
        0 if every query succeeded, 1 otherwise
    """
    args = build_parser().parse_args(argv)

    try:
        if settings is None:
            settings = get_settings()
        setup_logging(resolve_log_level(settings.log_level, args.verbose), settings.log_file)
        queries = resolve_queries(args, settings)
    except ConfigurationException as e:
        report_error(e)
        return e.exit_code

    log_with_context(logger, "debug", "Resolved queries", queries=[str(q) for q in queries], event_type="cli_start")

    owns_client = client is None
    http_client = client if client is not None else create_http_client(settings)
    exit_code = 0
    try:
        for query in queries:
            try:
                weather = get_current_weather(http_client, query, settings)
            except WeatherCliException as e:
                report_error(e)
                exit_code = e.exit_code
                continue
            print(render_summary(weather, settings.wind_speed_factor))
    finally:
        if owns_client:
            http_client.close()

    return exit_code


def main(argv: list[str] | None = None) -> None:
    """Console script entry point."""
    sys.exit(run(argv))


if __name__ == "__main__":
    main()
