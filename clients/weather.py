"""Open-Meteo current weather client."""

import logging

import requests
from pydantic import ValidationError

from models.suggestion import Coordinates, CurrentWeather, OpenMeteoResponse, WeatherObservation
from utils.constants import WEATHER_API_URL
from utils.deadline import Deadline
from utils.errors import WeatherError

logger = logging.getLogger(__name__)


def describe_condition(current: CurrentWeather) -> str:
    """Map current weather to a condition label for the prompt.

    Weather codes are not requested yet, so every observation is "clear".
    """
    return "clear"


def fetch_current_weather(coordinates: Coordinates, deadline: Deadline) -> WeatherObservation:
    """Fetch the current temperature at a location.

    Args:
        coordinates (Coordinates): Where to look.
        deadline (Deadline): Deadline of the current request.

    Returns:
        The current weather observation.

    Raises:
        WeatherError: The forecast request failed or returned an unexpected body.
    """
    timeout = deadline.remaining()
    if timeout <= 0:
        raise WeatherError("deadline expired before weather lookup")

    params = {
        "latitude": f"{coordinates.latitude:.6f}",
        "longitude": f"{coordinates.longitude:.6f}",
        "current_weather": "true",
    }
    logger.info("[WEATHER]: Fetching %s %s", WEATHER_API_URL, params)
    try:
        response = requests.get(WEATHER_API_URL, params=params, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.error("[WEATHER]: Request failed: %s", exc)
        raise WeatherError(f"weather request failed: {exc}") from exc

    try:
        current = OpenMeteoResponse.model_validate_json(response.content).current_weather
    except ValidationError as exc:
        logger.error("[WEATHER]: Unexpected response: %s", exc)
        raise WeatherError("invalid weather response") from exc

    observation = WeatherObservation(
        temperature_celsius=current.temperature,
        condition=describe_condition(current),
    )
    logger.info("[WEATHER]: temp=%.1f winds=%.1f", current.temperature, current.windspeed)
    return observation
