"""
Decorators for tool definition and registration.
"""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, Dict, List, Optional, get_type_hints

from .base import ParamMetadata, Tool, ToolParameter, _unwrap_optional


def _infer_parameters_from_callable(
    func: Callable[..., Any], param_metadata: Optional[Dict[str, ParamMetadata]] = None
) -> List[ToolParameter]:
    """
    Inspect function signature to create ToolParameter objects.

    Args:
        func: The function to inspect.
        param_metadata: Optional manual overrides for parameter descriptions/enums.

    Returns:
        List of ToolParameter objects inferred from type hints.
    """
    type_hints = get_type_hints(func)
    sig = inspect.signature(func)
    parameters = []
    param_metadata = param_metadata or {}

    for name, param in sig.parameters.items():
        if name in ("self", "cls"):
            continue
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue

        param_type = _unwrap_optional(type_hints.get(name, str))

        meta = param_metadata.get(name, {})
        description = meta.get("description", f"Parameter {name}")
        enum_values = meta.get("enum")

        parameters.append(
            ToolParameter(
                name=name,
                param_type=param_type,
                description=description,
                required=param.default is inspect.Parameter.empty,
                enum=enum_values,
            )
        )

    return parameters


def _keyword_implementation(func: Callable[..., Any]) -> Callable[[Dict[str, Any]], Any]:
    """Adapt ``func(**kwargs)`` to the single-input tool calling convention."""
    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def call_async(arguments: Dict[str, Any]) -> Any:
            return await func(**arguments)

        return call_async

    @functools.wraps(func)
    def call(arguments: Dict[str, Any]) -> Any:
        return func(**arguments)

    return call


def tool(
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
    param_metadata: Optional[Dict[str, ParamMetadata]] = None,
) -> Callable[[Callable[..., Any]], Tool]:
    """
    Decorator to convert a function into a Tool.

    Introspects the function signature and type hints to generate the tool's
    properties and required list. The model's arguments are passed to the
    function as keyword arguments.

    Args:
        name: Optional custom name (defaults to function name).
        description: Optional description (defaults to docstring).
        param_metadata: Dict mapping parameter names to metadata (description, enum).

    Returns:
        Decorator function that returns a Tool instance.

    Example:
        >>> @tool(description="Add two integers")
        ... def add(a: int, b: int) -> int:
        ...     return a + b
        >>>
        >>> add.name
        'add'
        >>> add.call_sync({"a": 2, "b": 3})
        5
    """

    def decorator(func: Callable[..., Any]) -> Tool:
        tool_name = name or func.__name__
        tool_description = description or inspect.getdoc(func) or f"Tool {tool_name}"
        parameters = _infer_parameters_from_callable(func, param_metadata)
        return_type = get_type_hints(func).get("return")

        return Tool.from_parameters(
            name=tool_name,
            description=tool_description,
            parameters=parameters,
            implementation=_keyword_implementation(func),
            input_type=dict,
            output_type=return_type,
        )

    return decorator


__all__ = ["tool"]
