"""Ollama streaming generation client."""

import logging
from typing import Iterable, Union

import requests
from pydantic import ValidationError

from models.suggestion import GenerationChunk
from utils.constants import OLLAMA_API_URL, OLLAMA_MODEL
from utils.deadline import Deadline
from utils.errors import GenerationError

logger = logging.getLogger(__name__)


def aggregate_stream(lines: Iterable[Union[bytes, str]], deadline: Deadline) -> str:
    """Concatenate the fragments of a newline-delimited JSON stream.

    Lines that are not valid chunks are skipped. Reading stops at the first
    chunk marked ``done`` or when the stream ends.

    Args:
        lines: Raw stream lines.
        deadline (Deadline): Deadline of the current request.

    Returns:
        The concatenated text.

    Raises:
        GenerationError: Reading failed or the deadline passed mid-stream. The
            text gathered so far is kept on the error as ``partial``.
    """
    fragments = []
    try:
        for line in lines:
            if deadline.expired():
                raise GenerationError("deadline expired mid-stream", partial="".join(fragments))
            if not line:
                continue
            try:
                chunk = GenerationChunk.model_validate_json(line)
            except ValidationError:
                logger.debug("[GENERATE]: Skipping unparseable line %r", line)
                continue
            fragments.append(chunk.response)
            if chunk.done:
                break
    except requests.RequestException as exc:
        partial = "".join(fragments)
        logger.error("[GENERATE]: Stream broke after %d chars: %s", len(partial), exc)
        raise GenerationError(f"stream read failed: {exc}", partial=partial) from exc
    return "".join(fragments)


def generate_suggestion(prompt: str, deadline: Deadline) -> str:
    """Send a prompt to the local model and collect the streamed answer.

    Args:
        prompt (str): The prompt text.
        deadline (Deadline): Deadline of the current request.

    Returns:
        The full generated text.

    Raises:
        GenerationError: The service was unreachable or the stream failed.
    """
    timeout = deadline.remaining()
    if timeout <= 0:
        raise GenerationError("deadline expired before generation")

    logger.info("[GENERATE]: Sending prompt to %s", OLLAMA_API_URL)
    body = {"prompt": prompt, "model": OLLAMA_MODEL}
    try:
        response = requests.post(OLLAMA_API_URL, json=body, stream=True, timeout=timeout)
    except requests.RequestException as exc:
        logger.error("[GENERATE]: Request failed: %s", exc)
        raise GenerationError(f"generation request failed: {exc}") from exc

    with response:
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            logger.error("[GENERATE]: Service returned %s", response.status_code)
            raise GenerationError(f"generation service returned {response.status_code}") from exc
        text = aggregate_stream(response.iter_lines(), deadline)
    logger.info("[GENERATE]: Received %d chars", len(text))
    return text
