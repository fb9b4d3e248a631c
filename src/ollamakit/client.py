"""
HTTP client for the Ollama server API.

``Client`` exposes every endpoint twice: a synchronous method backed by a
``requests.Session`` and an ``a``-prefixed coroutine backed by an
``httpx.AsyncClient``. Both flavours build requests and classify responses
with the same helpers in ``transport``.

Example:
    >>> from ollamakit import Client, Message
    >>> client = Client()
    >>> response = client.chat("llama3.2", [Message.user("Hello!")])
    >>> print(response.message.content)

    >>> async with Client() as client:
    ...     async for chunk in client.agenerate_stream("llama3.2", "Tell me a joke"):
    ...         print(chunk.response, end="")
"""

from __future__ import annotations

import base64
import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Type, TypeVar, Union

import httpx
import requests

from .config import DEFAULT_HOST, ClientConfig
from .exceptions import RequestError, UnexpectedError
from .models import KeepAlive, ModelID
from .responses import (
    ChatResponse,
    EmbedResponse,
    GenerateResponse,
    ListModelsResponse,
    ListRunningModelsResponse,
    ShowModelResponse,
)
from .streaming import AsyncStream, Stream
from .tools import Tool, ToolRegistry
from .transport import Method, PreparedRequest, build_request, decode_result
from .types import Message
from .value import Value

logger = logging.getLogger(__name__)

T = TypeVar("T")

ModelRef = Union[str, ModelID]
ToolsArg = Union[ToolRegistry, Iterable[Union[Tool, Mapping[str, Any], Value]]]

_CONNECT_HINT = "Make sure Ollama is running (try: ollama serve)."


# ----------------------------------------------------------------------
# Request parameters shared by the sync and async methods
# ----------------------------------------------------------------------


def _model_name(model: ModelRef) -> str:
    return ModelID.coerce(model).raw


def _set_keep_alive(params: Dict[str, Any], keep_alive: KeepAlive) -> None:
    value = keep_alive.value
    if value is not None:
        params["keep_alive"] = value


def _tool_definitions(tools: Optional[ToolsArg]) -> List[Value]:
    if tools is None:
        return []
    definitions: List[Value] = []
    for item in tools:
        if isinstance(item, Tool):
            definitions.append(item.definition)
        else:
            definitions.append(Value.from_python(item))
    return definitions


def _as_registry(tools: ToolsArg) -> ToolRegistry:
    if isinstance(tools, ToolRegistry):
        return tools
    items = list(tools)
    not_tools = [item for item in items if not isinstance(item, Tool)]
    if not_tools:
        raise TypeError("Running tools requires Tool instances, not schema definitions")
    return ToolRegistry(items)


def _generate_params(
    model: ModelRef,
    prompt: str,
    *,
    stream: bool,
    images: Optional[Sequence[bytes]],
    format: Any,
    options: Optional[Mapping[str, Any]],
    system: Optional[str],
    template: Optional[str],
    context: Optional[Sequence[int]],
    raw: bool,
    keep_alive: KeepAlive,
) -> Dict[str, Any]:
    params: Dict[str, Any] = {
        "model": _model_name(model),
        "prompt": prompt,
        "stream": stream,
        "raw": raw,
    }
    if images is not None:
        params["images"] = [base64.b64encode(image).decode("ascii") for image in images]
    if format is not None:
        params["format"] = format
    if options is not None:
        params["options"] = dict(options)
    if system is not None:
        params["system"] = system
    if template is not None:
        params["template"] = template
    if context is not None:
        params["context"] = list(context)
    _set_keep_alive(params, keep_alive)
    return params


def _chat_params(
    model: ModelRef,
    messages: Sequence[Message],
    *,
    stream: bool,
    options: Optional[Mapping[str, Any]],
    tools: Optional[ToolsArg],
    template: Optional[str],
    format: Any,
    keep_alive: KeepAlive,
) -> Dict[str, Any]:
    params: Dict[str, Any] = {
        "model": _model_name(model),
        "messages": [message.to_dict() for message in messages],
        "stream": stream,
    }
    if options is not None:
        params["options"] = dict(options)
    if template is not None:
        params["template"] = template
    if format is not None:
        params["format"] = format
    definitions = _tool_definitions(tools)
    if definitions:
        params["tools"] = definitions
    _set_keep_alive(params, keep_alive)
    return params


def _embed_params(
    model: ModelRef,
    input: Union[str, Sequence[str]],
    *,
    truncate: bool,
    options: Optional[Mapping[str, Any]],
    keep_alive: KeepAlive,
) -> Dict[str, Any]:
    params: Dict[str, Any] = {
        "model": _model_name(model),
        "input": input if isinstance(input, str) else list(input),
        "truncate": truncate,
    }
    if options is not None:
        params["options"] = dict(options)
    _set_keep_alive(params, keep_alive)
    return params


def _create_params(
    name: ModelRef, modelfile: Optional[str], path: Optional[str]
) -> Dict[str, Any]:
    params: Dict[str, Any] = {"name": _model_name(name)}
    if modelfile is not None:
        params["modelfile"] = modelfile
    if path is not None:
        params["path"] = path
    return params


def _transfer_params(name: ModelRef, insecure: bool) -> Dict[str, Any]:
    return {"name": _model_name(name), "insecure": insecure, "stream": False}


class Client:
    """
    Client for a local or remote Ollama server.

    The client holds a pooled HTTP session and no other state, so one
    instance can be shared. Synchronous methods use ``requests``; the
    ``a``-prefixed coroutines use ``httpx``.

    Args:
        config: Connection settings. Built from ``host``, ``user_agent`` and
            ``timeout`` when omitted. When given, those arguments override
            the matching fields of a copy; the passed config is not modified.
        host: Server base URL. Default: http://localhost:11434.
        user_agent: User-Agent header value.
        timeout: Request timeout in seconds.
        session: ``requests.Session`` to use instead of creating one.
        async_client: ``httpx.AsyncClient`` to use instead of creating one.

    Raises:
        RequestError: If the host is not a valid http(s) URL.

    Note:
        Requires Ollama to be installed and running. Download from https://ollama.com
        Start Ollama with: `ollama serve`
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        host: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        async_client: Optional[httpx.AsyncClient] = None,
    ):
        if config is None:
            config = ClientConfig(host=host or DEFAULT_HOST, user_agent=user_agent, timeout=timeout)
        else:
            overrides = {
                key: value
                for key, value in (("host", host), ("user_agent", user_agent), ("timeout", timeout))
                if value is not None
            }
            if overrides:
                config = replace(config, **overrides)
        self.config = config
        self._session = session if session is not None else requests.Session()
        self._owns_session = session is None
        self._async_client = async_client
        self._owns_async_client = async_client is None

    @property
    def host(self) -> str:
        return self.config.host

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the synchronous session if this client created it."""
        if self._owns_session:
            self._session.close()

    async def aclose(self) -> None:
        """Close the asynchronous client if this client created it."""
        if self._async_client is not None and self._owns_async_client:
            await self._async_client.aclose()
            self._async_client = None

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _prepare(
        self, method: Method, path: str, params: Optional[Mapping[str, Any]]
    ) -> PreparedRequest:
        return build_request(self.config.host, method, path, params, self.config.user_agent)

    def _connect_error(self, exc: Exception) -> UnexpectedError:
        return UnexpectedError(
            f"Failed to connect to Ollama at {self.config.host}. {_CONNECT_HINT} Error: {exc}"
        )

    def _send(self, prepared: PreparedRequest, stream: bool = False) -> requests.Response:
        logger.debug("%s %s", prepared.method.value, prepared.url)
        try:
            return self._session.request(
                prepared.method.value,
                prepared.url,
                params=prepared.query or None,
                data=prepared.body,
                headers=prepared.headers,
                timeout=self.config.timeout,
                stream=stream,
            )
        except (
            requests.exceptions.InvalidURL,
            requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
        ) as exc:
            raise RequestError(str(exc)) from exc
        except requests.exceptions.ConnectionError as exc:
            raise self._connect_error(exc) from exc
        except requests.RequestException as exc:
            raise UnexpectedError(f"Request to {prepared.url} failed: {exc}") from exc

    def _get_async_client(self) -> httpx.AsyncClient:
        if self._async_client is None:
            if self.config.timeout is not None:
                self._async_client = httpx.AsyncClient(timeout=self.config.timeout)
            else:
                self._async_client = httpx.AsyncClient()
        return self._async_client

    async def _asend(self, prepared: PreparedRequest, stream: bool = False) -> httpx.Response:
        logger.debug("%s %s", prepared.method.value, prepared.url)
        client = self._get_async_client()
        try:
            request = client.build_request(
                prepared.method.value,
                prepared.url,
                params=prepared.query or None,
                content=prepared.body,
                headers=prepared.headers,
            )
            return await client.send(request, stream=stream)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise RequestError(str(exc)) from exc
        except httpx.ConnectError as exc:
            raise self._connect_error(exc) from exc
        except httpx.HTTPError as exc:
            raise UnexpectedError(f"Request to {prepared.url} failed: {exc}") from exc

    def fetch(
        self,
        method: Method,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        result_type: Type[T] = Value,  # type: ignore[assignment]
    ) -> T:
        """
        Send one request and decode the whole response.

        ``result_type`` may be ``bool`` (2xx becomes True, anything else
        False), ``Value``, ``dict`` or a response class with ``from_dict``.
        """
        prepared = self._prepare(method, path, params)
        response = self._send(prepared)
        try:
            return decode_result(response.status_code, response.content, result_type)
        finally:
            response.close()

    async def afetch(
        self,
        method: Method,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        result_type: Type[T] = Value,  # type: ignore[assignment]
    ) -> T:
        """Async version of ``fetch()``."""
        prepared = self._prepare(method, path, params)
        response = await self._asend(prepared)
        return decode_result(response.status_code, response.content, result_type)

    def fetch_stream(
        self,
        method: Method,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        result_type: Type[T] = Value,  # type: ignore[assignment]
    ) -> Stream[T]:
        """Send one request and iterate its newline-delimited JSON body."""
        prepared = self._prepare(method, path, params)
        return Stream(lambda: self._send(prepared, stream=True), result_type)

    def afetch_stream(
        self,
        method: Method,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        result_type: Type[T] = Value,  # type: ignore[assignment]
    ) -> AsyncStream[T]:
        """Async version of ``fetch_stream()``; iterate with ``async for``."""
        prepared = self._prepare(method, path, params)
        return AsyncStream(lambda: self._asend(prepared, stream=True), result_type)

    # ------------------------------------------------------------------
    # Generate
    # ------------------------------------------------------------------

    def generate(
        self,
        model: ModelRef,
        prompt: str,
        *,
        images: Optional[Sequence[bytes]] = None,
        format: Any = None,
        options: Optional[Mapping[str, Any]] = None,
        system: Optional[str] = None,
        template: Optional[str] = None,
        context: Optional[Sequence[int]] = None,
        raw: bool = False,
        keep_alive: KeepAlive = KeepAlive.DEFAULT,
    ) -> GenerateResponse:
        """
        Generate a response for a prompt.

        Args:
            model: Model to use, e.g. "llama3.2".
            prompt: Text to generate a response for.
            images: Raw image bytes for multimodal models.
            format: "json" or a JSON schema for structured output.
            options: Model parameters such as temperature.
            system: System message (overrides the Modelfile's).
            template: Prompt template (overrides the Modelfile's).
            context: ``context`` from a previous response, for short memory.
            raw: Send the prompt without formatting.
            keep_alive: How long the model stays loaded afterwards.
        """
        params = _generate_params(
            model,
            prompt,
            stream=False,
            images=images,
            format=format,
            options=options,
            system=system,
            template=template,
            context=context,
            raw=raw,
            keep_alive=keep_alive,
        )
        return self.fetch(Method.POST, "/api/generate", params, GenerateResponse)

    async def agenerate(
        self,
        model: ModelRef,
        prompt: str,
        *,
        images: Optional[Sequence[bytes]] = None,
        format: Any = None,
        options: Optional[Mapping[str, Any]] = None,
        system: Optional[str] = None,
        template: Optional[str] = None,
        context: Optional[Sequence[int]] = None,
        raw: bool = False,
        keep_alive: KeepAlive = KeepAlive.DEFAULT,
    ) -> GenerateResponse:
        """Async version of ``generate()``."""
        params = _generate_params(
            model,
            prompt,
            stream=False,
            images=images,
            format=format,
            options=options,
            system=system,
            template=template,
            context=context,
            raw=raw,
            keep_alive=keep_alive,
        )
        return await self.afetch(Method.POST, "/api/generate", params, GenerateResponse)

    def generate_stream(
        self,
        model: ModelRef,
        prompt: str,
        *,
        images: Optional[Sequence[bytes]] = None,
        format: Any = None,
        options: Optional[Mapping[str, Any]] = None,
        system: Optional[str] = None,
        template: Optional[str] = None,
        context: Optional[Sequence[int]] = None,
        raw: bool = False,
        keep_alive: KeepAlive = KeepAlive.DEFAULT,
    ) -> Stream[GenerateResponse]:
        """Stream a generation as partial responses; the last one has ``done=True``."""
        params = _generate_params(
            model,
            prompt,
            stream=True,
            images=images,
            format=format,
            options=options,
            system=system,
            template=template,
            context=context,
            raw=raw,
            keep_alive=keep_alive,
        )
        return self.fetch_stream(Method.POST, "/api/generate", params, GenerateResponse)

    def agenerate_stream(
        self,
        model: ModelRef,
        prompt: str,
        *,
        images: Optional[Sequence[bytes]] = None,
        format: Any = None,
        options: Optional[Mapping[str, Any]] = None,
        system: Optional[str] = None,
        template: Optional[str] = None,
        context: Optional[Sequence[int]] = None,
        raw: bool = False,
        keep_alive: KeepAlive = KeepAlive.DEFAULT,
    ) -> AsyncStream[GenerateResponse]:
        """Async version of ``generate_stream()``."""
        params = _generate_params(
            model,
            prompt,
            stream=True,
            images=images,
            format=format,
            options=options,
            system=system,
            template=template,
            context=context,
            raw=raw,
            keep_alive=keep_alive,
        )
        return self.afetch_stream(Method.POST, "/api/generate", params, GenerateResponse)

    # ------------------------------------------------------------------
    # Chat
    # ------------------------------------------------------------------

    def chat(
        self,
        model: ModelRef,
        messages: Sequence[Message],
        *,
        options: Optional[Mapping[str, Any]] = None,
        tools: Optional[ToolsArg] = None,
        template: Optional[str] = None,
        format: Any = None,
        keep_alive: KeepAlive = KeepAlive.DEFAULT,
    ) -> ChatResponse:
        """
        Generate the next message in a chat.

        Args:
            model: Model to use.
            messages: Conversation so far.
            options: Model parameters such as temperature.
            tools: Tools the model may call: a ``ToolRegistry``, ``Tool``
                instances or raw function schemas.
            template: Prompt template (overrides the Modelfile's).
            format: "json" or a JSON schema for structured output.
            keep_alive: How long the model stays loaded afterwards.
        """
        params = _chat_params(
            model,
            messages,
            stream=False,
            options=options,
            tools=tools,
            template=template,
            format=format,
            keep_alive=keep_alive,
        )
        return self.fetch(Method.POST, "/api/chat", params, ChatResponse)

    async def achat(
        self,
        model: ModelRef,
        messages: Sequence[Message],
        *,
        options: Optional[Mapping[str, Any]] = None,
        tools: Optional[ToolsArg] = None,
        template: Optional[str] = None,
        format: Any = None,
        keep_alive: KeepAlive = KeepAlive.DEFAULT,
    ) -> ChatResponse:
        """Async version of ``chat()``."""
        params = _chat_params(
            model,
            messages,
            stream=False,
            options=options,
            tools=tools,
            template=template,
            format=format,
            keep_alive=keep_alive,
        )
        return await self.afetch(Method.POST, "/api/chat", params, ChatResponse)

    def chat_stream(
        self,
        model: ModelRef,
        messages: Sequence[Message],
        *,
        options: Optional[Mapping[str, Any]] = None,
        tools: Optional[ToolsArg] = None,
        template: Optional[str] = None,
        format: Any = None,
        keep_alive: KeepAlive = KeepAlive.DEFAULT,
    ) -> Stream[ChatResponse]:
        """Stream the next chat message as partial responses."""
        params = _chat_params(
            model,
            messages,
            stream=True,
            options=options,
            tools=tools,
            template=template,
            format=format,
            keep_alive=keep_alive,
        )
        return self.fetch_stream(Method.POST, "/api/chat", params, ChatResponse)

    def achat_stream(
        self,
        model: ModelRef,
        messages: Sequence[Message],
        *,
        options: Optional[Mapping[str, Any]] = None,
        tools: Optional[ToolsArg] = None,
        template: Optional[str] = None,
        format: Any = None,
        keep_alive: KeepAlive = KeepAlive.DEFAULT,
    ) -> AsyncStream[ChatResponse]:
        """Async version of ``chat_stream()``."""
        params = _chat_params(
            model,
            messages,
            stream=True,
            options=options,
            tools=tools,
            template=template,
            format=format,
            keep_alive=keep_alive,
        )
        return self.afetch_stream(Method.POST, "/api/chat", params, ChatResponse)

    def chat_with_tools(
        self,
        model: ModelRef,
        messages: Sequence[Message],
        tools: ToolsArg,
        *,
        options: Optional[Mapping[str, Any]] = None,
        template: Optional[str] = None,
        format: Any = None,
        keep_alive: KeepAlive = KeepAlive.DEFAULT,
    ) -> Tuple[List[Message], ChatResponse]:
        """
        Chat, run any tools the model calls, and send their results back once.

        If the first response carries tool calls, each call is executed in
        order and one follow-up request is made with the assistant message
        and one ``tool`` message per call appended. No further tool calls are
        run automatically.

        Returns:
            The conversation sent with the final request, and the final response.

        Raises:
            UnknownToolError: If the model calls a tool that is not available.
            DecodingError: If a call's arguments do not fit the tool's input.
        """
        registry = _as_registry(tools)
        response = self.chat(
            model,
            messages,
            options=options,
            tools=registry,
            template=template,
            format=format,
            keep_alive=keep_alive,
        )
        if not response.message.tool_calls:
            return list(messages), response

        conversation = list(messages)
        conversation.append(response.message)
        for tool_call in response.message.tool_calls:
            conversation.append(registry.execute_sync(tool_call))

        follow_up = self.chat(
            model,
            conversation,
            options=options,
            tools=registry,
            template=template,
            format=format,
            keep_alive=keep_alive,
        )
        return conversation, follow_up

    async def achat_with_tools(
        self,
        model: ModelRef,
        messages: Sequence[Message],
        tools: ToolsArg,
        *,
        options: Optional[Mapping[str, Any]] = None,
        template: Optional[str] = None,
        format: Any = None,
        keep_alive: KeepAlive = KeepAlive.DEFAULT,
    ) -> Tuple[List[Message], ChatResponse]:
        """Async version of ``chat_with_tools()``; tool calls run one after another."""
        registry = _as_registry(tools)
        response = await self.achat(
            model,
            messages,
            options=options,
            tools=registry,
            template=template,
            format=format,
            keep_alive=keep_alive,
        )
        if not response.message.tool_calls:
            return list(messages), response

        conversation = list(messages)
        conversation.append(response.message)
        for tool_call in response.message.tool_calls:
            conversation.append(await registry.execute(tool_call))

        follow_up = await self.achat(
            model,
            conversation,
            options=options,
            tools=registry,
            template=template,
            format=format,
            keep_alive=keep_alive,
        )
        return conversation, follow_up

    # ------------------------------------------------------------------
    # Embeddings
    # ------------------------------------------------------------------

    def embed(
        self,
        model: ModelRef,
        input: Union[str, Sequence[str]],
        *,
        truncate: bool = True,
        options: Optional[Mapping[str, Any]] = None,
        keep_alive: KeepAlive = KeepAlive.DEFAULT,
    ) -> EmbedResponse:
        """
        Generate embeddings for one text or a batch of texts.

        Args:
            truncate: Truncate inputs that exceed the context length instead
                of failing.
        """
        params = _embed_params(
            model, input, truncate=truncate, options=options, keep_alive=keep_alive
        )
        return self.fetch(Method.POST, "/api/embed", params, EmbedResponse)

    async def aembed(
        self,
        model: ModelRef,
        input: Union[str, Sequence[str]],
        *,
        truncate: bool = True,
        options: Optional[Mapping[str, Any]] = None,
        keep_alive: KeepAlive = KeepAlive.DEFAULT,
    ) -> EmbedResponse:
        """Async version of ``embed()``."""
        params = _embed_params(
            model, input, truncate=truncate, options=options, keep_alive=keep_alive
        )
        return await self.afetch(Method.POST, "/api/embed", params, EmbedResponse)

    # ------------------------------------------------------------------
    # Model management
    # ------------------------------------------------------------------

    def list_models(self) -> ListModelsResponse:
        """List models available locally."""
        return self.fetch(Method.GET, "/api/tags", None, ListModelsResponse)

    async def alist_models(self) -> ListModelsResponse:
        return await self.afetch(Method.GET, "/api/tags", None, ListModelsResponse)

    def list_running_models(self) -> ListRunningModelsResponse:
        """List models currently loaded in memory."""
        return self.fetch(Method.GET, "/api/ps", None, ListRunningModelsResponse)

    async def alist_running_models(self) -> ListRunningModelsResponse:
        return await self.afetch(Method.GET, "/api/ps", None, ListRunningModelsResponse)

    def create_model(
        self, name: ModelRef, modelfile: Optional[str] = None, path: Optional[str] = None
    ) -> bool:
        """Create a model from a Modelfile. Returns False on any non-2xx status."""
        return self.fetch(Method.POST, "/api/create", _create_params(name, modelfile, path), bool)

    async def acreate_model(
        self, name: ModelRef, modelfile: Optional[str] = None, path: Optional[str] = None
    ) -> bool:
        return await self.afetch(
            Method.POST, "/api/create", _create_params(name, modelfile, path), bool
        )

    def copy_model(self, source: ModelRef, destination: ModelRef) -> bool:
        """Copy a model under a new name. Returns False on any non-2xx status."""
        params = {"source": _model_name(source), "destination": _model_name(destination)}
        return self.fetch(Method.POST, "/api/copy", params, bool)

    async def acopy_model(self, source: ModelRef, destination: ModelRef) -> bool:
        params = {"source": _model_name(source), "destination": _model_name(destination)}
        return await self.afetch(Method.POST, "/api/copy", params, bool)

    def delete_model(self, name: ModelRef) -> bool:
        """Delete a model and its data. Returns False on any non-2xx status."""
        return self.fetch(Method.DELETE, "/api/delete", {"name": _model_name(name)}, bool)

    async def adelete_model(self, name: ModelRef) -> bool:
        return await self.afetch(Method.DELETE, "/api/delete", {"name": _model_name(name)}, bool)

    def pull_model(self, name: ModelRef, insecure: bool = False) -> bool:
        """
        Download a model from the library and wait until it completes.

        Set ``insecure`` only when pulling from your own library during
        development. Returns False on any non-2xx status.
        """
        return self.fetch(Method.POST, "/api/pull", _transfer_params(name, insecure), bool)

    async def apull_model(self, name: ModelRef, insecure: bool = False) -> bool:
        return await self.afetch(Method.POST, "/api/pull", _transfer_params(name, insecure), bool)

    def push_model(self, name: ModelRef, insecure: bool = False) -> bool:
        """Upload a model (``namespace/model:tag``) to a library. Returns False on any non-2xx status."""
        return self.fetch(Method.POST, "/api/push", _transfer_params(name, insecure), bool)

    async def apush_model(self, name: ModelRef, insecure: bool = False) -> bool:
        return await self.afetch(Method.POST, "/api/push", _transfer_params(name, insecure), bool)

    def show_model(self, name: ModelRef) -> ShowModelResponse:
        """Show a model's Modelfile, template, parameters, details and capabilities."""
        return self.fetch(Method.POST, "/api/show", {"name": _model_name(name)}, ShowModelResponse)

    async def ashow_model(self, name: ModelRef) -> ShowModelResponse:
        return await self.afetch(
            Method.POST, "/api/show", {"name": _model_name(name)}, ShowModelResponse
        )


def default_client(**kwargs: Any) -> Client:
    """
    Create a client configured from ``OLLAMA_HOST`` (or the default host).

    Explicit ``host``, ``user_agent`` or ``timeout`` keywords override the
    environment.
    """
    return Client(ClientConfig.from_env(), **kwargs)


__all__ = ["Client", "default_client", "ModelRef"]
