import pytest
import requests

from clients.generation import aggregate_stream, generate_suggestion
from utils.constants import OLLAMA_API_URL
from utils.deadline import Deadline
from utils.errors import GenerationError


class SteppingClock:
    """Clock that advances one second per reading."""

    def __init__(self):
        self.now = 0.0

    def __call__(self):
        self.now += 1.0
        return self.now


def test_stops_at_first_done_chunk(requests_mock, deadline):
    requests_mock.post(
        OLLAMA_API_URL,
        text='{"response":"A","done":false}\n{"response":"B","done":true}\n{"response":"C","done":false}',
    )

    assert generate_suggestion("prompt", deadline) == "AB"


def test_sends_prompt_and_fixed_model(requests_mock, deadline):
    requests_mock.post(OLLAMA_API_URL, text='{"response":"ok","done":true}\n')

    generate_suggestion("What should I wear?", deadline)

    assert requests_mock.last_request.json() == {"prompt": "What should I wear?", "model": "llama3.2"}


def test_unparseable_lines_are_skipped(requests_mock, deadline):
    requests_mock.post(
        OLLAMA_API_URL,
        text='{"response":"Wear ","done":false}\nnot json at all\n\n{"response":"boots.","done":false}\n',
    )

    assert generate_suggestion("prompt", deadline) == "Wear boots."


def test_stream_end_without_done(deadline):
    lines = [b'{"response":"a"}', b'{"response":"b","done":false}']
    assert aggregate_stream(lines, deadline) == "ab"


def test_mid_stream_failure_keeps_partial(deadline):
    def broken_stream():
        yield b'{"response":"Half ","done":false}'
        yield b'{"response":"an answer","done":false}'
        raise requests.exceptions.ChunkedEncodingError("connection reset")

    with pytest.raises(GenerationError) as excinfo:
        aggregate_stream(broken_stream(), deadline)

    assert excinfo.value.partial == "Half an answer"


def test_deadline_expiring_mid_stream():
    deadline = Deadline(2.5, clock=SteppingClock())
    lines = [b'{"response":"%d","done":false}' % i for i in range(10)]

    with pytest.raises(GenerationError) as excinfo:
        aggregate_stream(lines, deadline)

    assert excinfo.value.partial == "01"


def test_deadline_expiring_while_only_skipped_lines_arrive():
    deadline = Deadline(2.5, clock=SteppingClock())
    lines = [b'{"response":"A","done":false}'] + [b"", b"keepalive"] * 1000

    with pytest.raises(GenerationError) as excinfo:
        aggregate_stream(lines, deadline)

    assert excinfo.value.partial == "A"


def test_unreachable_service_raises(requests_mock, deadline):
    requests_mock.post(OLLAMA_API_URL, exc=requests.exceptions.ConnectionError)

    with pytest.raises(GenerationError) as excinfo:
        generate_suggestion("prompt", deadline)

    assert excinfo.value.partial == ""


def test_http_error_status_raises(requests_mock, deadline):
    requests_mock.post(OLLAMA_API_URL, status_code=404, json={"error": "model 'llama3.2' not found"})

    with pytest.raises(GenerationError):
        generate_suggestion("prompt", deadline)


def test_expired_deadline_skips_request(requests_mock, expired_deadline):
    requests_mock.post(OLLAMA_API_URL, text='{"response":"x","done":true}')

    with pytest.raises(GenerationError):
        generate_suggestion("prompt", expired_deadline)
    assert not requests_mock.called
