"""Prompts for the outfit advisor"""
from models.suggestion import SuggestionRequest, WeatherObservation

SUGGESTION_PROMPT = (
    "Suggest clothing for a person with height {height} attending a {occasion} "
    "in {condition} weather with temperature {temperature:.1f}°C."
)

RETRY_SUFFIX = " The previous suggestion wasn't good enough. Make a better one."

# Ratings in this open range mean the user disliked the previous suggestion
RETRY_RATING_MIN = 0
RETRY_RATING_MAX = 8


def needs_retry(rating: int) -> bool:
    """Whether a rating asks for a better suggestion than the last one."""
    return RETRY_RATING_MIN < rating < RETRY_RATING_MAX


def build_prompt(request: SuggestionRequest, weather: WeatherObservation) -> str:
    """Build the generation prompt.

    Args:
        request (SuggestionRequest): The validated user input.
        weather (WeatherObservation): Current weather at the user's location.

    Returns:
        The prompt text.
    """
    prompt = SUGGESTION_PROMPT.format(
        height=request.height,
        occasion=request.occasion,
        condition=weather.condition,
        temperature=weather.temperature_celsius,
    )
    if needs_retry(request.rating):
        prompt += RETRY_SUFFIX
    return prompt
