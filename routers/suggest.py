"""Router for the suggestion API."""

import logging
from typing import Optional

from fastapi import APIRouter, Request
from pydantic import TypeAdapter, ValidationError
from starlette.concurrency import run_in_threadpool

from clients.generation import generate_suggestion
from clients.geocoding import geocode_location
from clients.weather import fetch_current_weather
from models.suggestion import (
    SuggestionRequest,
    SuggestionResponse,
    SuggestionResult,
    SuggestionTrace,
)
from utils.constants import REQUEST_TIMEOUT
from utils.deadline import Deadline
from utils.errors import GenerationError, InvalidInputError
from utils.prompts import build_prompt, needs_retry

logger = logging.getLogger(__name__)

router = APIRouter()

# A bare null body decodes to an empty request
_request_body = TypeAdapter(Optional[SuggestionRequest])


def parse_request(body: bytes) -> SuggestionRequest:
    """Decode and validate a /suggest request body.

    Args:
        body (bytes): Raw request body.

    Returns:
        The validated request.

    Raises:
        InvalidInputError: The body is not a valid request or misses required fields.
    """
    try:
        request = _request_body.validate_json(body) or SuggestionRequest()
    except ValidationError as exc:
        logger.warning("[SUGGEST]: JSON decode error: %s", exc)
        raise InvalidInputError("undecodable request body", detail="Invalid JSON body") from exc

    missing = request.missing_fields()
    if missing:
        logger.warning("[SUGGEST]: Missing fields %s", missing)
        raise InvalidInputError(f"missing fields {missing}", detail="Missing required fields")
    return request


def run_pipeline(request: SuggestionRequest, deadline: Optional[Deadline] = None) -> SuggestionResult:
    """Geocode, fetch weather, build the prompt and generate a suggestion.

    Stages run one after another; the first failure ends the run.

    Args:
        request (SuggestionRequest): The validated user input.
        deadline (Deadline): Shared deadline for all upstream calls.

    Returns:
        The suggestion together with a trace of the run.
    """
    deadline = deadline or Deadline(REQUEST_TIMEOUT)

    coordinates = geocode_location(request.location, deadline)
    weather = fetch_current_weather(coordinates, deadline)
    prompt = build_prompt(request, weather)
    logger.info("[SUGGEST]: prompt=%s", prompt)

    try:
        suggestion = generate_suggestion(prompt, deadline)
    except GenerationError as exc:
        if exc.partial:
            logger.warning("[SUGGEST]: Discarding %d chars of partial output", len(exc.partial))
        raise

    trace = SuggestionTrace(
        location=request.location,
        coordinates=coordinates,
        weather=weather,
        prompt=prompt,
        retry_requested=needs_retry(request.rating),
    )
    return SuggestionResult(response=SuggestionResponse(suggestion=suggestion), trace=trace)


@router.post("/suggest", response_model=SuggestionResponse)
async def suggest(request: Request) -> SuggestionResponse:
    """Return a clothing suggestion for the posted user attributes.

    Args:
        request (Request): The raw HTTP request.

    Returns:
        The suggestion.
    """
    suggestion_request = parse_request(await request.body())
    logger.info("[SUGGEST]: input=%s", suggestion_request.model_dump())

    result = await run_in_threadpool(run_pipeline, suggestion_request)
    logger.debug("[SUGGEST]: trace=%s", result.trace.model_dump())
    return result.response
