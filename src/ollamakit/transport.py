"""
Request construction and response classification shared by both clients.

Nothing in this module performs I/O. The synchronous client (``requests``) and
the asynchronous client (``httpx``) both build a ``PreparedRequest`` here, send
it with their own library and hand the status and body back to
``decode_result``. Streaming responses are split into JSON documents by a
``LineDecoder`` owned by a single stream.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Type, TypeVar
from urllib.parse import urlsplit

from .exceptions import DecodingError, EmptyBodyError, RequestError, ResponseError
from .value import Object, Value

logger = logging.getLogger(__name__)

T = TypeVar("T")

JSON_CONTENT_TYPE = "application/json"


class Method(str, Enum):
    """HTTP methods used by the API."""

    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


@dataclass
class PreparedRequest:
    """A fully built HTTP request, independent of the HTTP library."""

    method: Method
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    query: List[Tuple[str, str]] = field(default_factory=list)
    body: Optional[bytes] = None


def normalize_host(host: str) -> str:
    """
    Validate a host URL and strip trailing slashes.

    Raises:
        RequestError: If the host is not an absolute http(s) URL.
    """
    candidate = host.strip().rstrip("/")
    parts = urlsplit(candidate)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise RequestError(f"Invalid host URL: {host!r}")
    return candidate


def build_request(
    host: str,
    method: Method,
    path: str,
    params: Optional[Mapping[str, Any]] = None,
    user_agent: Optional[str] = None,
) -> PreparedRequest:
    """
    Build the request for ``method path`` against ``host``.

    GET parameters become query items rendered with ``str(value)``. POST and
    DELETE parameters are encoded as a compact JSON body.
    """
    if not path.startswith("/"):
        raise RequestError(f"Invalid path: {path!r}")

    request = PreparedRequest(method=Method(method), url=normalize_host(host) + path)
    request.headers["Accept"] = JSON_CONTENT_TYPE
    if user_agent:
        request.headers["User-Agent"] = user_agent

    if params is not None:
        payload = Object(params)
        if request.method is Method.GET:
            request.query = [(key, str(value)) for key, value in payload.value.items()]
        else:
            try:
                request.body = payload.encode()
            except ValueError as exc:
                raise RequestError(str(exc)) from exc
            request.headers["Content-Type"] = JSON_CONTENT_TYPE

    return request


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def error_from_response(status_code: int, body: bytes) -> ResponseError:
    """Build the error for a non-2xx response body."""
    try:
        parsed = json.loads(body)
    except ValueError:
        parsed = None
    if isinstance(parsed, dict) and isinstance(parsed.get("error"), str):
        return ResponseError(status_code, parsed["error"])

    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        return ResponseError(status_code, "Invalid response")
    return ResponseError(status_code, text)


def decode_value(data: Any, result_type: Type[T], status_code: Optional[int] = None) -> T:
    """
    Convert parsed JSON into ``result_type``.

    ``result_type`` is ``Value``, ``dict`` or a class with ``from_dict``.
    """
    try:
        if isinstance(result_type, type) and issubclass(result_type, Value):
            return Value.from_json(data)  # type: ignore[return-value]
        if result_type is dict:
            if not isinstance(data, dict):
                raise TypeError(f"expected an object, got {type(data).__name__}")
            return data  # type: ignore[return-value]
        if not isinstance(data, dict):
            raise TypeError(f"expected an object, got {type(data).__name__}")
        return result_type.from_dict(data)  # type: ignore[attr-defined]
    except DecodingError as exc:
        raise DecodingError(exc.detail, status_code) from exc
    except (KeyError, TypeError, ValueError) as exc:
        detail = f"missing key {exc}" if isinstance(exc, KeyError) else str(exc)
        raise DecodingError(
            f"Cannot decode {getattr(result_type, '__name__', result_type)}: {detail}",
            status_code,
        ) from exc


def decode_result(status_code: int, body: bytes, result_type: Type[T]) -> T:
    """
    Classify a complete response.

    Boolean results fold the status into True/False and never raise. Other
    results raise ``EmptyBodyError``, ``DecodingError`` or ``ResponseError``.
    """
    if result_type is bool:
        return is_success(status_code)  # type: ignore[return-value]

    if not is_success(status_code):
        raise error_from_response(status_code, body)

    if not body:
        raise EmptyBodyError(status_code)

    try:
        parsed = json.loads(body)
    except ValueError as exc:
        raise DecodingError(f"Invalid JSON: {exc}", status_code) from exc
    return decode_value(parsed, result_type, status_code)


class LineDecoder:
    """
    Incremental newline-delimited JSON splitter.

    Feed raw chunks with ``feed()``; each complete line is decoded and
    returned in order. Whitespace-only lines are skipped. A line that is an
    ``{"error": ...}`` envelope raises ``ResponseError``; any other decode
    failure raises ``DecodingError`` and the decoder stops producing items.
    """

    def __init__(self, status_code: int, decode: Callable[[Any], Any]):
        self.status_code = status_code
        self._decode = decode
        self._buffer = bytearray()
        self._failed = False

    def feed(self, chunk: bytes) -> Iterator[Any]:
        if self._failed:
            return
        self._buffer.extend(chunk)
        while True:
            index = self._buffer.find(b"\n")
            if index < 0:
                break
            line = bytes(self._buffer[:index])
            del self._buffer[: index + 1]
            if not line.strip():
                continue
            yield self._decode_line(line)

    def finish(self) -> None:
        """Report bytes left without a terminating newline; they are dropped."""
        if self._buffer.strip() and not self._failed:
            logger.warning(
                "Dropping %d trailing bytes without a final newline from stream",
                len(self._buffer),
            )
        self._buffer.clear()

    def _decode_line(self, line: bytes) -> Any:
        try:
            parsed = json.loads(line)
        except ValueError as exc:
            self._failed = True
            raise DecodingError(f"Invalid JSON line: {exc}", self.status_code) from exc

        if isinstance(parsed, dict) and set(parsed) == {"error"} and isinstance(parsed["error"], str):
            self._failed = True
            raise ResponseError(self.status_code, parsed["error"])

        try:
            return self._decode(parsed)
        except DecodingError:
            self._failed = True
            raise


__all__ = [
    "Method",
    "PreparedRequest",
    "normalize_host",
    "build_request",
    "is_success",
    "error_from_response",
    "decode_value",
    "decode_result",
    "LineDecoder",
]
