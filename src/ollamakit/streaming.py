"""
Cancellable streams of newline-delimited JSON documents.

``Stream`` wraps a ``requests`` response for synchronous callers and
``AsyncStream`` wraps an ``httpx`` response for asynchronous ones. Both are
lazy: the request is sent when the first item is requested and bytes are
read only as items are consumed. Closing a stream (explicitly, by leaving a
``with`` block, or by cancelling the task that iterates it) closes the HTTP
response; no further items or errors are produced afterwards.

Example:
    >>> with client.generate_stream("llama3.2", "Why is the sky blue?") as stream:
    ...     for chunk in stream:
    ...         print(chunk.response, end="", flush=True)
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Awaitable, Callable, Generic, Iterator, Optional, Type, TypeVar

import httpx
import requests

from .exceptions import UnexpectedError
from .transport import LineDecoder, decode_value, error_from_response, is_success

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Stream(Generic[T]):
    """
    Synchronous iterator over the decoded lines of a streaming response.

    Args:
        open_response: Sends the request with ``stream=True`` and returns the
            response. Called once, on the first ``next()``.
        result_type: Item type: ``Value``, ``dict`` or a class with
            ``from_dict``.
    """

    def __init__(
        self,
        open_response: Callable[[], requests.Response],
        result_type: Type[T],
    ):
        self._open_response = open_response
        self._result_type = result_type
        self._response: Optional[requests.Response] = None
        self._iterator = self._iterate()
        self._closed = False

    def _iterate(self) -> Iterator[T]:
        response = self._open_response()
        self._response = response
        logger.debug("Stream opened (status %s)", response.status_code)
        try:
            if not is_success(response.status_code):
                raise error_from_response(response.status_code, response.content)

            decoder = LineDecoder(response.status_code, self._decode_item)
            try:
                for chunk in response.iter_content(chunk_size=None):
                    yield from decoder.feed(chunk)
            except requests.RequestException as exc:
                raise UnexpectedError(f"Stream interrupted: {exc}") from exc
            decoder.finish()
        finally:
            response.close()
            logger.debug("Stream closed")

    def _decode_item(self, data: Any) -> T:
        return decode_value(data, self._result_type, self.status_code)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def status_code(self) -> Optional[int]:
        """HTTP status, once the request has been sent."""
        return self._response.status_code if self._response is not None else None

    def __iter__(self) -> "Stream[T]":
        return self

    def __next__(self) -> T:
        if self._closed:
            raise StopIteration
        try:
            return next(self._iterator)
        except BaseException:
            self._closed = True
            raise

    def close(self) -> None:
        """Stop the stream and release the connection."""
        if self._closed and self._response is None:
            return
        self._closed = True
        self._iterator.close()
        if self._response is not None:
            self._response.close()

    def __enter__(self) -> "Stream[T]":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class AsyncStream(Generic[T]):
    """
    Asynchronous iterator over the decoded lines of a streaming response.

    Args:
        open_response: Coroutine factory that sends the request with
            ``stream=True`` and returns the response.
        result_type: Item type: ``Value``, ``dict`` or a class with
            ``from_dict``.
    """

    def __init__(
        self,
        open_response: Callable[[], Awaitable[httpx.Response]],
        result_type: Type[T],
    ):
        self._open_response = open_response
        self._result_type = result_type
        self._response: Optional[httpx.Response] = None
        self._iterator = self._iterate()
        self._closed = False

    async def _iterate(self) -> AsyncIterator[T]:
        response = await self._open_response()
        self._response = response
        logger.debug("Stream opened (status %s)", response.status_code)
        try:
            if not is_success(response.status_code):
                body = await response.aread()
                raise error_from_response(response.status_code, body)

            decoder = LineDecoder(response.status_code, self._decode_item)
            try:
                async for chunk in response.aiter_bytes():
                    for item in decoder.feed(chunk):
                        yield item
            except httpx.HTTPError as exc:
                raise UnexpectedError(f"Stream interrupted: {exc}") from exc
            decoder.finish()
        finally:
            await response.aclose()
            logger.debug("Stream closed")

    def _decode_item(self, data: Any) -> T:
        return decode_value(data, self._result_type, self.status_code)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def status_code(self) -> Optional[int]:
        """HTTP status, once the request has been sent."""
        return self._response.status_code if self._response is not None else None

    def __aiter__(self) -> "AsyncStream[T]":
        return self

    async def __anext__(self) -> T:
        if self._closed:
            raise StopAsyncIteration
        try:
            return await self._iterator.__anext__()
        except BaseException:
            self._closed = True
            raise

    async def aclose(self) -> None:
        """Stop the stream and release the connection."""
        if self._closed and self._response is None:
            return
        self._closed = True
        await self._iterator.aclose()
        if self._response is not None:
            await self._response.aclose()

    async def __aenter__(self) -> "AsyncStream[T]":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


__all__ = ["Stream", "AsyncStream"]
