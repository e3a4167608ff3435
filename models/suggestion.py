"""Pydantic models for the suggestion pipeline."""
from typing import List
from pydantic import BaseModel, ConfigDict, field_validator


class SuggestionRequest(BaseModel):
    """ User input for a clothing suggestion. """
    model_config = ConfigDict(strict=True)

    height: str = ""
    location: str = ""
    occasion: str = ""
    rating: int = 0

    # JSON null reads as the zero value
    @field_validator("height", "location", "occasion", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        return "" if value is None else value

    @field_validator("rating", mode="before")
    @classmethod
    def null_as_zero(cls, value):
        return 0 if value is None else value

    def missing_fields(self) -> List[str]:
        """Names of required fields left empty."""
        return [name for name in ("height", "location", "occasion") if not getattr(self, name)]


class SuggestionResponse(BaseModel):
    """ Suggestion returned to the caller. """
    suggestion: str


class Coordinates(BaseModel):
    """ Resolved location. """
    latitude: float
    longitude: float


class WeatherObservation(BaseModel):
    """ Current weather at a location. """
    temperature_celsius: float
    condition: str


class GenerationChunk(BaseModel):
    """ One line of the generation stream. """
    response: str = ""
    done: bool = False


class SuggestionTrace(BaseModel):
    """ Diagnostic record of one pipeline run, never sent to the caller. """
    location: str
    coordinates: Coordinates
    weather: WeatherObservation
    prompt: str
    retry_requested: bool


class SuggestionResult(BaseModel):
    """ Pipeline output: the response plus its trace. """
    response: SuggestionResponse
    trace: SuggestionTrace


# Upstream payloads ----------------------------------------------------------

class GeocodeCandidate(BaseModel):
    """ Nominatim search result, coordinates arrive as strings. """
    lat: str = ""
    lon: str = ""


class CurrentWeather(BaseModel):
    temperature: float
    windspeed: float = 0.0


class OpenMeteoResponse(BaseModel):
    """ Open-Meteo forecast body with ``current_weather=true``. """
    current_weather: CurrentWeather
