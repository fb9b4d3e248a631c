"""
Registry for managing tools and correlating model tool calls with them.
"""

from __future__ import annotations

import difflib
import logging
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from ..exceptions import UnknownToolError
from ..types import Message, ToolCall
from .base import JsonSchema, ParamMetadata, Tool
from .decorators import tool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Central registry for a collection of tools.

    Allows registering tools via method calls or decorators, resolves the
    tool calls in an assistant message and executes them.

    Example:
        >>> registry = ToolRegistry([rgb_to_hex])
        >>> for call in response.message.tool_calls or ():
        ...     messages.append(registry.execute_sync(call))
    """

    def __init__(self, tools: Optional[Iterable[Tool]] = None) -> None:
        self._tools: Dict[str, Tool] = {}
        for tool_instance in tools or ():
            self.register(tool_instance)

    def register(self, tool_instance: Tool) -> Tool:
        """
        Register a Tool instance. A tool with the same name is replaced.

        Args:
            tool_instance: The Tool object to register.
        """
        if tool_instance.name in self._tools:
            logger.warning("Replacing registered tool %r", tool_instance.name)
        self._tools[tool_instance.name] = tool_instance
        return tool_instance

    def get(self, name: str) -> Optional[Tool]:
        """Get a tool by name."""
        return self._tools.get(name)

    def list_tools(self) -> List[Tool]:
        """Return all registered tools as a list."""
        return list(self._tools.values())

    def names(self) -> List[str]:
        return list(self._tools)

    def definitions(self) -> List[JsonSchema]:
        """Return the function schemas of all tools, in registration order."""
        return [tool_instance.schema() for tool_instance in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._tools.values())

    def tool(
        self,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        param_metadata: Optional[Dict[str, ParamMetadata]] = None,
    ) -> Callable[[Callable[..., Any]], Tool]:
        """
        Decorator to register a function as a tool in this registry.

        Returns:
            Decorator that returns the registered Tool instance.
        """

        def decorator(func: Callable[..., Any]) -> Tool:
            tool_instance = tool(
                name=name,
                description=description,
                param_metadata=param_metadata,
            )(func)
            return self.register(tool_instance)

        return decorator

    def resolve(self, tool_call: ToolCall) -> Tuple[str, Any]:
        """Shortcut for ``resolve_tool_call(tool_call, self)``."""
        return resolve_tool_call(tool_call, self)

    async def execute(self, tool_call: ToolCall) -> Message:
        """
        Resolve and run a tool call, returning the ``tool`` message with its result.

        Errors raised by the tool propagate unchanged.
        """
        tool_name, tool_input = self.resolve(tool_call)
        tool_instance = self._tools[tool_name]
        logger.debug("Executing tool %s", tool_name)
        output = await tool_instance.call(tool_input)
        return Message.tool(tool_instance.encode_output(output))

    def execute_sync(self, tool_call: ToolCall) -> Message:
        """Synchronous version of ``execute``."""
        tool_name, tool_input = self.resolve(tool_call)
        tool_instance = self._tools[tool_name]
        logger.debug("Executing tool %s", tool_name)
        output = tool_instance.call_sync(tool_input)
        return Message.tool(tool_instance.encode_output(output))


def resolve_tool_call(tool_call: ToolCall, registry: ToolRegistry) -> Tuple[str, Any]:
    """
    Find the tool a call names and decode the call's arguments.

    Args:
        tool_call: A tool call from an assistant message.
        registry: Tools available to the model.

    Returns:
        ``(tool_name, decoded_input)``.

    Raises:
        UnknownToolError: If no registered tool has that exact name.
        DecodingError: If the arguments do not match the tool's input.
    """
    name = tool_call.function.name
    tool_instance = registry.get(name)
    if tool_instance is None:
        available = registry.names()
        matches = difflib.get_close_matches(name, available, n=1, cutoff=0.6)
        suggestion = f"Did you mean '{matches[0]}'?" if matches else ""
        raise UnknownToolError(name, available, suggestion)
    return name, tool_instance.decode_input(tool_call.function.arguments)


__all__ = ["ToolRegistry", "resolve_tool_call"]
