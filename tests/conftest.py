import pytest
from fastapi.testclient import TestClient

from models.suggestion import SuggestionRequest, WeatherObservation
from server import app
from utils.constants import GEOCODE_API_URL, OLLAMA_API_URL, WEATHER_API_URL
from utils.deadline import Deadline


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def deadline():
    return Deadline(30)


@pytest.fixture()
def expired_deadline():
    return Deadline(0)


class ScriptedClock:
    """Clock returning the given readings in order, then repeating the last."""

    def __init__(self, *readings):
        self.readings = list(readings)

    def __call__(self):
        if len(self.readings) > 1:
            return self.readings.pop(0)
        return self.readings[0]


@pytest.fixture()
def closing_deadline():
    """Deadline with half a second left on its first check, none after."""
    return Deadline(1.0, clock=ScriptedClock(0.0, 0.5, 1.0))


@pytest.fixture()
def suggestion_request():
    return SuggestionRequest(height="180cm", location="paris", occasion="wedding", rating=5)


@pytest.fixture()
def mild_weather():
    return WeatherObservation(temperature_celsius=21.3, condition="clear")


@pytest.fixture()
def upstreams(requests_mock):
    """Register healthy geocoding, weather and generation services."""
    requests_mock.get(GEOCODE_API_URL, json=[{"lat": "48.8566", "lon": "2.3522"}])
    requests_mock.get(
        WEATHER_API_URL,
        json={"current_weather": {"temperature": 21.3, "windspeed": 7.2}},
    )
    requests_mock.post(
        OLLAMA_API_URL,
        text='{"response":"Wear a linen ","done":false}\n{"response":"suit.","done":true}\n',
    )
    return requests_mock
