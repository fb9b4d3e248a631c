"""Public exports for the ollamakit package."""

from .client import Client, default_client
from .config import ClientConfig
from .data_url import encode_data_url, is_data_url, parse_data_url
from .dates import parse_timestamp
from .exceptions import (
    DecodingError,
    EmptyBodyError,
    OllamaKitError,
    RequestError,
    ResponseError,
    ToolValidationError,
    UnexpectedError,
    UnknownToolError,
)
from .models import Capability, KeepAlive, ModelDetails, ModelID
from .responses import (
    ChatResponse,
    EmbedResponse,
    GenerateResponse,
    ListModelsResponse,
    ListRunningModelsResponse,
    ModelSummary,
    RunningModel,
    ShowModelResponse,
)
from .streaming import AsyncStream, Stream
from .tools import (
    Tool,
    ToolParameter,
    ToolRegistry,
    build_legacy_schema,
    build_schema,
    resolve_tool_call,
    tool,
)
from .transport import Method
from .types import Message, Role, ToolCall, ToolCallFunction
from .value import NULL, Array, Binary, Bool, Double, Int, Null, Object, String, Value

__version__ = "0.1.0"

__all__ = [
    "Client",
    "ClientConfig",
    "default_client",
    "Method",
    "Stream",
    "AsyncStream",
    "Message",
    "Role",
    "ToolCall",
    "ToolCallFunction",
    "Tool",
    "ToolParameter",
    "ToolRegistry",
    "tool",
    "build_schema",
    "build_legacy_schema",
    "resolve_tool_call",
    "Value",
    "Null",
    "NULL",
    "Bool",
    "Int",
    "Double",
    "String",
    "Binary",
    "Array",
    "Object",
    "ModelID",
    "ModelDetails",
    "Capability",
    "KeepAlive",
    "GenerateResponse",
    "ChatResponse",
    "EmbedResponse",
    "ListModelsResponse",
    "ModelSummary",
    "ListRunningModelsResponse",
    "RunningModel",
    "ShowModelResponse",
    "is_data_url",
    "parse_data_url",
    "encode_data_url",
    "parse_timestamp",
    "OllamaKitError",
    "RequestError",
    "ResponseError",
    "EmptyBodyError",
    "DecodingError",
    "UnexpectedError",
    "UnknownToolError",
    "ToolValidationError",
]
