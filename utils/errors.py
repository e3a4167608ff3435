""" Error types raised by the suggestion pipeline. """


class SuggestionError(RuntimeError):
    """Base pipeline error, carries the HTTP status and plain-text body."""

    status_code = 500
    detail = "Internal Server Error"

    def __init__(self, message=None, detail=None):
        super().__init__(message or detail or self.detail)
        if detail is not None:
            self.detail = detail


class InvalidInputError(SuggestionError):
    """Request body could not be decoded or misses required fields."""

    status_code = 400
    detail = "Invalid JSON body"


class GeocodeError(SuggestionError):
    detail = "Failed to geocode location"


class WeatherError(SuggestionError):
    detail = "Failed to fetch weather data"


class GenerationError(SuggestionError):
    """Generation failed. ``partial`` holds any text streamed before the failure."""

    detail = "Failed to get AI suggestion"

    def __init__(self, message=None, partial=""):
        super().__init__(message)
        self.partial = partial
