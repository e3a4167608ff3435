"""Nominatim geocoding client."""

import logging
from typing import List

import requests
from pydantic import TypeAdapter, ValidationError

from models.suggestion import Coordinates, GeocodeCandidate
from utils.constants import GEOCODE_API_URL, USER_AGENT
from utils.deadline import Deadline
from utils.errors import GeocodeError

logger = logging.getLogger(__name__)

_candidates = TypeAdapter(List[GeocodeCandidate])


def _parse_coordinate(value: str, name: str) -> float:
    try:
        return float(value)
    except ValueError:
        logger.warning("[GEOCODE]: %s %r is not a number, using 0.0", name, value)
        return 0.0


def geocode_location(location: str, deadline: Deadline) -> Coordinates:
    """Resolve a free-text location to coordinates.

    Only the first search result is used.

    Args:
        location (str): The place name to search for.
        deadline (Deadline): Deadline of the current request.

    Returns:
        The coordinates of the best match.

    Raises:
        GeocodeError: The search failed or found nothing.
    """
    timeout = deadline.remaining()
    if timeout <= 0:
        raise GeocodeError("deadline expired before geocoding")

    params = {"q": location, "format": "json", "limit": 1}
    logger.info("[GEOCODE]: Searching %s for %r", GEOCODE_API_URL, location)
    try:
        response = requests.get(
            GEOCODE_API_URL,
            params=params,
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
            timeout=timeout,
        )
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.error("[GEOCODE]: Request failed for %r: %s", location, exc)
        raise GeocodeError(f"geocoding request failed: {exc}") from exc

    try:
        candidates = _candidates.validate_json(response.content)
    except ValidationError as exc:
        logger.error("[GEOCODE]: Unexpected response for %r: %s", location, exc)
        raise GeocodeError("invalid geocoding response") from exc

    if not candidates:
        logger.error("[GEOCODE]: No results for %r", location)
        raise GeocodeError(f"no results for location {location}")

    best = candidates[0]
    coordinates = Coordinates(
        latitude=_parse_coordinate(best.lat, "lat"),
        longitude=_parse_coordinate(best.lon, "lon"),
    )
    logger.info("[GEOCODE]: %r -> lat=%.6f lon=%.6f", location, coordinates.latitude, coordinates.longitude)
    return coordinates
