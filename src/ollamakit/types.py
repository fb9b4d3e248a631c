"""
Chat message, role and tool-call types.

Messages are immutable; a conversation is a plain list owned by the caller.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .exceptions import DecodingError
from .value import Value


class Role(str, Enum):
    """Conversation role."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    TOOL = "tool"


@dataclass(frozen=True)
class ToolCallFunction:
    """The function a model asked to invoke, with its decoded arguments."""

    name: str
    arguments: Dict[str, Value] = field(default_factory=dict)

    def __hash__(self) -> int:
        return hash((self.name, frozenset(self.arguments.items())))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "arguments": {key: value.to_json() for key, value in self.arguments.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ToolCallFunction":
        arguments = data.get("arguments") or {}
        if isinstance(arguments, str):
            # some servers send arguments as a JSON-encoded string
            arguments = Value.decode(arguments).to_json()
        if not isinstance(arguments, dict):
            raise DecodingError(
                f"Tool call arguments must be an object, got {type(arguments).__name__}"
            )
        return cls(
            name=data["name"],
            arguments={key: Value.from_json(item) for key, item in arguments.items()},
        )


@dataclass(frozen=True)
class ToolCall:
    """A model-issued request to invoke a local tool."""

    function: ToolCallFunction

    @property
    def name(self) -> str:
        return self.function.name

    @property
    def arguments(self) -> Dict[str, Value]:
        return self.function.arguments

    def to_dict(self) -> Dict[str, Any]:
        return {"function": self.function.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ToolCall":
        return cls(function=ToolCallFunction.from_dict(data["function"]))


@dataclass(frozen=True)
class Message:
    """
    A single chat message.

    Only assistant messages may carry ``tool_calls``. Tool messages carry the
    serialised tool result in ``content`` and nothing else. Images are raw
    bytes here and plain base64 strings on the wire.
    """

    role: Role
    content: str
    images: Optional[Tuple[bytes, ...]] = None
    tool_calls: Optional[Tuple[ToolCall, ...]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "role", Role(self.role))
        if self.images is not None:
            object.__setattr__(self, "images", tuple(bytes(image) for image in self.images))
        if self.tool_calls is not None:
            object.__setattr__(self, "tool_calls", tuple(self.tool_calls))

        if self.tool_calls and self.role is not Role.ASSISTANT:
            raise ValueError(f"Only assistant messages carry tool calls, not {self.role.value}")
        if self.role is Role.TOOL and self.images:
            raise ValueError("Tool messages carry only content")

    @classmethod
    def system(cls, content: str, images: Optional[Sequence[bytes]] = None) -> "Message":
        return cls(Role.SYSTEM, content, images=images)

    @classmethod
    def user(cls, content: str, images: Optional[Sequence[bytes]] = None) -> "Message":
        return cls(Role.USER, content, images=images)

    @classmethod
    def assistant(
        cls,
        content: str,
        images: Optional[Sequence[bytes]] = None,
        tool_calls: Optional[Sequence[ToolCall]] = None,
    ) -> "Message":
        return cls(Role.ASSISTANT, content, images=images, tool_calls=tool_calls)

    @classmethod
    def tool(cls, content: str) -> "Message":
        return cls(Role.TOOL, content)

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire representation."""
        payload: Dict[str, Any] = {"role": self.role.value, "content": self.content}
        if self.images is not None:
            payload["images"] = [base64.b64encode(image).decode("ascii") for image in self.images]
        if self.tool_calls is not None:
            payload["tool_calls"] = [call.to_dict() for call in self.tool_calls]
        return payload

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        """Decode a wire message; raises KeyError/ValueError on bad shapes."""
        images: Optional[List[bytes]] = None
        if data.get("images") is not None:
            try:
                images = [base64.b64decode(image, validate=True) for image in data["images"]]
            except binascii.Error as exc:
                raise ValueError(f"Invalid base64 image: {exc}") from exc

        tool_calls: Optional[List[ToolCall]] = None
        if data.get("tool_calls") is not None:
            tool_calls = [ToolCall.from_dict(call) for call in data["tool_calls"]]

        return cls(
            role=Role(data["role"]),
            content=data.get("content") or "",
            images=images,
            tool_calls=tool_calls,
        )


__all__ = ["Role", "Message", "ToolCall", "ToolCallFunction"]
