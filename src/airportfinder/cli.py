"""Command-line interface for Airport Finder.

Geocodes a place query, picks one of the matches as search origin and
prints the commercial airports within the requested radius.

Usage:
    airportfinder "London" --range 50
    airportfinder "Lyon" --range 120 --mode driving --pick 2
    airportfinder "Springfield" --list

Exit codes: 0 success, 1 geocoding or search failure, 2 no location
selected or invalid arguments.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

import aiohttp
from pydantic import ValidationError

from airportfinder import __version__
from airportfinder.config import make_runtime_settings
from airportfinder.core.errors import GeocodingError, NoSelectionError, SearchFailure
from airportfinder.core.models import DistanceMode, LocationCandidate
from airportfinder.providers import NominatimGeocoder, OsrmRouter, OurAirportsDataset
from airportfinder.render.results import format_results, format_suggestions
from airportfinder.search.orchestrator import search, selection_to_request
from airportfinder.settings.store import SettingsStore

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_NO_SELECTION = 2
EXIT_USAGE = 2


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {value}")
    return value


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    When ``argv`` is None the values are read from ``sys.argv`` as usual.
    Accepting an ``argv`` list makes the parser testable programmatically.
    """
    p = argparse.ArgumentParser(
        prog="airportfinder",
        description="Find commercial airports within a radius of a place",
    )
    p.add_argument("query", nargs="?", help="Place to search around")
    p.add_argument(
        "--range",
        type=_positive_int,
        default=None,
        help="Search radius in km (default: saved setting)",
    )
    p.add_argument(
        "--mode",
        choices=[m.value for m in DistanceMode],
        default=None,
        help="Distance mode (default: saved setting)",
    )
    p.add_argument(
        "--pick",
        type=_positive_int,
        default=None,
        help="1-based index of the location match to use (default: 1)",
    )
    p.add_argument(
        "--list",
        action="store_true",
        help="Only list location matches, do not search",
    )
    p.add_argument(
        "--save-defaults",
        dest="save_defaults",
        action="store_true",
        help="Persist --range/--mode as the new defaults",
    )
    p.add_argument(
        "--debug-level",
        dest="debug_level",
        type=int,
        choices=[0, 1, 2, 3],
        default=0,
        help="Log verbosity (0=quiet, 1=info, 2=debug, 3=debug incl. aiohttp)",
    )
    p.add_argument("--version", action="store_true", help="Print version and exit")
    return p.parse_args(argv)


def configure_logging(debug_level: int) -> None:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    if debug_level <= 0:
        # Diagnostics stay out of the terminal unless asked for
        level = logging.CRITICAL
    elif debug_level == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.getLogger("airportfinder").setLevel(level)
    # Silence noisy library loggers unless we want full debug
    if debug_level < 3:
        logging.getLogger("aiohttp").setLevel(logging.WARNING)
        logging.getLogger("asyncio").setLevel(logging.WARNING)


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    field = ".".join(str(p) for p in err.get("loc", ())) or "value"
    return f"{field}: {err.get('msg', 'invalid value')}"


def _pick(
    candidates: Sequence[LocationCandidate], pick: Optional[int]
) -> LocationCandidate:
    """Return the 1-based *pick* among *candidates* (default: the first).

    Raises:
        NoSelectionError: Nothing matched or *pick* is out of range.
    """
    index = 1 if pick is None else pick
    if not 1 <= index <= len(candidates):
        raise NoSelectionError(f"pick {index} of {len(candidates)} match(es)")
    return candidates[index - 1]


async def run_async(argv: list[str] | None = None) -> int:
    """Async entrypoint for programmatic usage/testing.

    Returns the process exit code.
    """
    args = parse_args(argv)
    if args.version:
        print(f"airportfinder {__version__}")
        return EXIT_OK

    try:
        settings = make_runtime_settings(args=args)
    except ValidationError as e:
        logger.debug("Rejected settings: %s", e)
        print(f"Invalid settings: {_first_error(e)}", file=sys.stderr)
        return EXIT_USAGE
    if args.save_defaults:
        SettingsStore.save(settings)
        logger.info("Saved defaults to %s", SettingsStore.settings_path())

    if not args.query:
        print(NoSelectionError.user_message, file=sys.stderr)
        return EXIT_NO_SELECTION

    timeout = aiohttp.ClientTimeout(total=settings.timeout_s)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        geocoder = NominatimGeocoder(
            settings.geocoder_url,
            limit=settings.geocoder_limit,
            min_query_length=settings.min_query_length,
            session=session,
            timeout_s=settings.timeout_s,
            user_agent=settings.user_agent,
        )
        try:
            candidates = await geocoder.geocode(args.query)
        except GeocodingError:
            logger.exception("Geocoding error")
            print(GeocodingError.user_message, file=sys.stderr)
            return EXIT_FAILURE

        if args.list:
            print(format_suggestions(candidates) or "No matching locations.")
            return EXIT_OK

        if args.pick is None and len(candidates) > 1:
            print(format_suggestions(candidates), file=sys.stderr)
            print("Using match 1 (choose another with --pick N)", file=sys.stderr)

        try:
            selected = _pick(candidates, args.pick)
            request = selection_to_request(
                selected, settings.radius_km, settings.mode
            )
        except NoSelectionError as e:
            print(e.user_message, file=sys.stderr)
            return EXIT_NO_SELECTION

        print(
            f"Airports within {request.radius_km} km of {selected.display_name}"
            f" - {request.mode.describe()}"
        )

        dataset = OurAirportsDataset(
            settings.dataset_url,
            session=session,
            timeout_s=settings.timeout_s,
            user_agent=settings.user_agent,
        )
        router = None
        if request.mode is DistanceMode.DRIVING:
            router = OsrmRouter(
                settings.routing_url,
                session=session,
                timeout_s=settings.routing_timeout_s,
                user_agent=settings.user_agent,
            )
        try:
            results = await search(request, dataset, router, settings=settings)
        except SearchFailure as e:
            print(e.user_message, file=sys.stderr)
            return EXIT_FAILURE

    print(format_results(results))
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Synchronous entrypoint for the airportfinder CLI."""
    args = parse_args(argv)
    configure_logging(args.debug_level)
    try:
        return asyncio.run(run_async(argv))
    except KeyboardInterrupt:
        # Allow graceful cancellation via Ctrl+C
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
