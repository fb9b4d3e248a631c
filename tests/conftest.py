"""
Pytest configuration for ollamakit tests.

This file configures pytest with custom markers and command-line options
for running different types of tests, and provides an in-memory fake of the
Ollama server for both the ``requests`` and the ``httpx`` client paths.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Callable, Dict, Iterable, List, Optional, Tuple, Union
from urllib.parse import parse_qsl, urlsplit

import httpx
import pytest
import requests
from requests.adapters import BaseAdapter

from ollamakit import Client

TEST_HOST = "http://ollama.test:11434"
TIMESTAMP = "2024-05-14T17:59:25.123456789Z"


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run end-to-end tests against a real Ollama server",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "e2e: mark test as end-to-end (requires a running Ollama, use --run-e2e to run)"
    )


def pytest_collection_modifyitems(config, items):
    """Skip e2e tests unless --run-e2e is passed."""
    if config.getoption("--run-e2e"):
        return

    skip_e2e = pytest.mark.skip(reason="Need --run-e2e option to run end-to-end tests")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


# =============================================================================
# Fake server
# =============================================================================


@dataclass
class RecordedRequest:
    """A request as seen by the fake server, independent of the HTTP library."""

    method: str
    url: str
    headers: Dict[str, str]
    body: bytes

    @property
    def path(self) -> str:
        return urlsplit(self.url).path

    @property
    def query(self) -> List[Tuple[str, str]]:
        return parse_qsl(urlsplit(self.url).query, keep_blank_values=True)

    def json(self) -> Any:
        return json.loads(self.body)


@dataclass
class QueuedResponse:
    status: int = 200
    chunks: List[bytes] = field(default_factory=list)
    error: Optional[Exception] = None
    async_body: Optional[Callable[[], AsyncIterator[bytes]]] = None


class FakeRaw:
    """Stand-in for urllib3's response: yields queued chunks and records closing."""

    def __init__(self, chunks: Iterable[bytes]):
        self._chunks = list(chunks)
        self.reads = 0
        self.closed = False

    def stream(self, chunk_size=None, decode_content=True):
        for chunk in self._chunks:
            if self.closed:
                return
            self.reads += 1
            yield chunk

    def close(self) -> None:
        self.closed = True


class FakeAdapter(BaseAdapter):
    """requests transport adapter answering from the fake server's queue."""

    def __init__(self, server: "FakeOllama"):
        super().__init__()
        self.server = server

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        body = request.body or b""
        if isinstance(body, str):
            body = body.encode("utf-8")
        queued = self.server.record(
            RecordedRequest(
                method=request.method,
                url=request.url,
                headers={k.lower(): v for k, v in request.headers.items()},
                body=body,
            )
        )
        if queued.error is not None:
            raise queued.error

        raw = FakeRaw(queued.chunks)
        self.server.raws.append(raw)

        response = requests.Response()
        response.status_code = queued.status
        response.raw = raw
        response.url = request.url
        response.request = request
        response.encoding = "utf-8"
        return response

    def close(self) -> None:
        pass


class FakeOllama:
    """
    In-memory fake of the Ollama HTTP API.

    Queue responses with ``reply()`` / ``reply_json()`` / ``reply_lines()``;
    every request is recorded in ``requests``.
    """

    def __init__(self) -> None:
        self.requests: List[RecordedRequest] = []
        self.queue: List[QueuedResponse] = []
        self.raws: List[FakeRaw] = []
        self.async_responses: List[httpx.Response] = []
        self.adapter = FakeAdapter(self)
        self.transport = httpx.MockTransport(self._handle_async)

    # -- queueing ---------------------------------------------------------

    def reply(self, status: int = 200, body: Union[bytes, str] = b"", chunks=None) -> None:
        if chunks is None:
            data = body.encode("utf-8") if isinstance(body, str) else body
            chunks = [data] if data else []
        self.queue.append(QueuedResponse(status=status, chunks=list(chunks)))

    def reply_json(self, payload: Any, status: int = 200) -> None:
        self.reply(status, json.dumps(payload))

    def reply_lines(self, *payloads: Any, status: int = 200) -> None:
        """Queue a streaming reply with one JSON document per chunk."""
        self.reply(status, chunks=[(json.dumps(p) + "\n").encode() for p in payloads])

    def fail(self, error: Exception) -> None:
        self.queue.append(QueuedResponse(error=error))

    def reply_async_body(
        self, body: Callable[[], AsyncIterator[bytes]], status: int = 200
    ) -> None:
        """Queue a reply whose body is produced by an async generator (httpx path only)."""
        self.queue.append(QueuedResponse(status=status, async_body=body))

    # -- dispatch ---------------------------------------------------------

    def record(self, request: RecordedRequest) -> QueuedResponse:
        self.requests.append(request)
        if not self.queue:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        return self.queue.pop(0)

    @property
    def last_request(self) -> RecordedRequest:
        return self.requests[-1]

    def _handle_async(self, request: httpx.Request) -> httpx.Response:
        queued = self.record(
            RecordedRequest(
                method=request.method,
                url=str(request.url),
                headers={k.lower(): v for k, v in request.headers.items()},
                body=request.content,
            )
        )
        if queued.error is not None:
            raise queued.error
        if queued.async_body is not None:
            return httpx.Response(queued.status, content=queued.async_body())

        async def body():
            for chunk in queued.chunks:
                yield chunk

        return httpx.Response(queued.status, content=body())

    async def _capture(self, response: httpx.Response) -> None:
        self.async_responses.append(response)

    # -- clients ----------------------------------------------------------

    def sync_client(self, **kwargs: Any) -> Client:
        session = requests.Session()
        session.mount("http://", self.adapter)
        session.mount("https://", self.adapter)
        return Client(host=TEST_HOST, session=session, **kwargs)

    def async_client(self, **kwargs: Any) -> Client:
        transport_client = httpx.AsyncClient(
            transport=self.transport, event_hooks={"response": [self._capture]}
        )
        return Client(host=TEST_HOST, async_client=transport_client, **kwargs)


@pytest.fixture
def server() -> FakeOllama:
    """Fresh fake server per test."""
    return FakeOllama()


@pytest.fixture
def client(server: FakeOllama) -> Client:
    """Synchronous client wired to the fake server."""
    return server.sync_client()


@pytest.fixture
def aclient(server: FakeOllama) -> Client:
    """Client whose async methods are wired to the fake server."""
    return server.async_client()


# =============================================================================
# Payload builders
# =============================================================================


def generate_payload(text: str, done: bool = True, **extra: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "model": "llama3.2",
        "created_at": TIMESTAMP,
        "response": text,
        "done": done,
    }
    payload.update(extra)
    return payload


def chat_payload(
    content: str,
    tool_calls: Optional[List[Dict[str, Any]]] = None,
    done: bool = True,
    **extra: Any,
) -> Dict[str, Any]:
    message: Dict[str, Any] = {"role": "assistant", "content": content}
    if tool_calls is not None:
        message["tool_calls"] = tool_calls
    payload: Dict[str, Any] = {
        "model": "llama3.2",
        "created_at": TIMESTAMP,
        "message": message,
        "done": done,
    }
    payload.update(extra)
    return payload


def details_payload() -> Dict[str, Any]:
    return {
        "format": "gguf",
        "family": "llama",
        "families": ["llama"],
        "parameter_size": "3.2B",
        "quantization_level": "Q4_K_M",
        "parent_model": "",
    }
