"""
Tool metadata, schemas, and argument decoding.
"""

from __future__ import annotations

import asyncio
import contextvars
import dataclasses
import difflib
import functools
import inspect
import logging
import warnings
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from ..exceptions import DecodingError, ToolValidationError
from ..value import Object, Value

logger = logging.getLogger(__name__)

JsonSchema = Dict[str, Any]
ParamMetadata = Dict[str, Any]


def _python_type_to_json(param_type: type) -> str:
    """Map a Python type to a JSON schema type string."""
    type_map = {
        str: "string",
        int: "integer",
        float: "number",
        bool: "boolean",
        list: "array",
        dict: "object",
    }
    return type_map.get(get_origin(param_type) or param_type, "string")


def _schema_json(schema: Any) -> Any:
    return schema.to_json() if isinstance(schema, Value) else Value.from_python(schema).to_json()


def build_schema(
    name: str,
    description: str,
    properties: Mapping[str, Any],
    required: Sequence[str] = (),
) -> JsonSchema:
    """
    Build the function schema sent to the model.

    Args:
        name: Tool name.
        description: What the tool does, shown to the model.
        properties: Property name to JSON schema (``Value`` or plain data).
        required: Names of required properties.

    Returns:
        ``{"type": "function", "function": {name, description, parameters}}``
        where ``parameters`` is ``{"type": "object", "properties", "required"}``.
    """
    return {
        "type": "function",
        "function": {
            "name": name,
            "description": description,
            "parameters": {
                "type": "object",
                "properties": {key: _schema_json(value) for key, value in properties.items()},
                "required": list(required),
            },
        },
    }


def _warn_legacy(name: str, stacklevel: int) -> None:
    warnings.warn(
        f"Tool '{name}': passing a full JSON schema as 'parameters' is deprecated; "
        "pass 'properties' and 'required' instead",
        DeprecationWarning,
        stacklevel=stacklevel,
    )
    logger.debug("Tool %s uses the legacy parameters schema", name)


def split_legacy_parameters(
    parameters: Any, required: Optional[Sequence[str]] = None
) -> Tuple[Dict[str, Value], List[str]]:
    """
    Unwrap a full object schema into its properties and required names.

    An explicit non-empty ``required`` wins over the one embedded in the
    schema. A value that is not an object schema is used as the properties
    map as-is.
    """
    value = Value.from_python(parameters)
    members = value.object_value
    if members is None:
        raise TypeError(f"Tool parameters must be an object, got {type(parameters).__name__}")

    properties = members
    embedded_required: List[str] = []
    inner = members.get("properties")
    is_object_schema = members.get("type") == Value.from_python("object")
    if is_object_schema and inner is not None and inner.object_value is not None:
        properties = inner.object_value
        required_value = members.get("required")
        if required_value is not None and required_value.array_value is not None:
            embedded_required = [
                item.str_value for item in required_value.array_value if item.str_value is not None
            ]

    if required:
        return properties, list(required)
    return properties, embedded_required


def build_legacy_schema(
    name: str,
    description: str,
    parameters: Any,
    required: Optional[Sequence[str]] = None,
) -> JsonSchema:
    """
    Build a function schema from a full JSON schema (deprecated input form).

    Prefer ``build_schema`` with separate ``properties`` and ``required``.
    """
    _warn_legacy(name, stacklevel=3)
    properties, resolved_required = split_legacy_parameters(parameters, required)
    return build_schema(name, description, properties, resolved_required)


@dataclass
class ToolParameter:
    """
    Schema definition for a single tool parameter.

    Attributes:
        name: Parameter name (should match the implementation's argument name).
        param_type: Python type (str, int, float, bool, list, dict).
        description: Human-readable description explaining what the parameter does.
        required: Whether this parameter must be provided (default: True).
        enum: Optional list of allowed string values for enumerated parameters.

    Example:
        >>> param = ToolParameter(
        ...     name="units",
        ...     param_type=str,
        ...     description="Temperature units",
        ...     required=False,
        ...     enum=["celsius", "fahrenheit"]
        ... )
    """

    name: str
    param_type: type
    description: str
    required: bool = True
    enum: Optional[List[str]] = None

    def to_schema(self) -> JsonSchema:
        """Convert the parameter definition to a JSON schema property."""
        schema: JsonSchema = {
            "type": _python_type_to_json(self.param_type),
            "description": self.description,
        }
        if self.enum:
            schema["enum"] = self.enum
        return schema


def _unwrap_optional(type_hint: Any) -> Any:
    """Unwrap Optional[T] to T."""
    origin = get_origin(type_hint)
    if origin is Union:
        non_none_args = [a for a in get_args(type_hint) if a is not type(None)]
        if len(non_none_args) == 1:
            return _unwrap_optional(non_none_args[0])
    return type_hint


_JSON_TYPE_CHECKS: Dict[str, Callable[[Value], bool]] = {
    "string": lambda v: v.str_value is not None or v.data_value is not None,
    "integer": lambda v: v.int_value is not None,
    "number": lambda v: v.to_float() is not None,
    "boolean": lambda v: v.bool_value is not None,
    "array": lambda v: v.array_value is not None,
    "object": lambda v: v.object_value is not None,
}


class Tool:
    """
    A callable tool with its schema and input decoding.

    The model sees ``definition`` (name, description and the JSON schema of
    the input). When the model calls the tool, ``decode_input`` turns the
    call's arguments into ``input_type`` and ``call`` passes that single
    value to the implementation.

    Attributes:
        name: Unique identifier for the tool.
        description: Human-readable description of what the tool does (used by the model).
        properties: Property name to JSON schema.
        required: Names of required properties.
        implementation: Sync or async callable taking one input value.
        input_type: ``dict`` (default), ``Value``, a dataclass, or a class with ``from_dict``.
        output_type: Declared result type, informational only.
        is_async: Whether the implementation is a coroutine function (detected automatically).

    Example:
        >>> @dataclass
        ... class RGB:
        ...     red: float
        ...     green: float
        ...     blue: float
        >>> rgb_to_hex = Tool(
        ...     name="rgb_to_hex",
        ...     description="Converts RGB components to a hex color string",
        ...     properties={
        ...         "red": {"type": "number", "minimum": 0, "maximum": 1},
        ...         "green": {"type": "number", "minimum": 0, "maximum": 1},
        ...         "blue": {"type": "number", "minimum": 0, "maximum": 1},
        ...     },
        ...     required=["red", "green", "blue"],
        ...     implementation=to_hex,
        ...     input_type=RGB,
        ...     output_type=str,
        ... )
    """

    def __init__(
        self,
        name: str,
        description: str,
        implementation: Callable[[Any], Any],
        *,
        properties: Optional[Mapping[str, Any]] = None,
        required: Optional[Sequence[str]] = None,
        parameters: Any = None,
        input_type: Any = dict,
        output_type: Any = None,
    ):
        """
        Initialize a new Tool.

        Args:
            name: Unique identifier for the tool.
            description: Description of what the tool does (shown to the model).
            implementation: Callable that receives the decoded input.
            properties: Property name to JSON schema.
            required: Names of required properties.
            parameters: Deprecated. A full object schema
                (``{"type": "object", "properties": ..., "required": ...}``);
                a non-empty ``required`` overrides the embedded one.
            input_type: Type the call arguments are decoded into.
            output_type: Declared result type.

        Raises:
            ToolValidationError: If the tool definition is invalid.
        """
        self.name = name
        self.description = description
        self.implementation = implementation
        self.input_type = input_type
        self.output_type = output_type
        self.is_async = inspect.iscoroutinefunction(implementation) or inspect.iscoroutinefunction(
            getattr(implementation, "__call__", None)
        )

        self._validate_names()

        if parameters is not None:
            if properties is not None:
                raise ToolValidationError(
                    tool_name=name,
                    field_name="parameters",
                    issue="Both 'parameters' and 'properties' were given",
                    suggestion="Pass 'properties' and 'required' only",
                )
            _warn_legacy(name, stacklevel=3)
            try:
                resolved, required_names = split_legacy_parameters(parameters, required)
            except TypeError as exc:
                raise ToolValidationError(
                    tool_name=name,
                    field_name="parameters",
                    issue=str(exc),
                    suggestion="Pass a JSON object schema",
                ) from exc
        else:
            resolved = {
                key: Value.from_python(value) for key, value in (properties or {}).items()
            }
            required_names = list(required or [])

        self.properties: Dict[str, Value] = resolved
        self.required: List[str] = required_names
        self._validate_properties()

    @classmethod
    def from_parameters(
        cls,
        name: str,
        description: str,
        parameters: List[ToolParameter],
        implementation: Callable[[Any], Any],
        *,
        input_type: Any = dict,
        output_type: Any = None,
    ) -> "Tool":
        """Build a tool from ``ToolParameter`` records."""
        names = [param.name for param in parameters]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ToolValidationError(
                tool_name=name,
                field_name=", ".join(duplicates),
                issue="Duplicate parameter name(s)",
                suggestion="Each parameter must have a unique name",
            )

        supported_types = {str, int, float, bool, list, dict}
        for param in parameters:
            if (get_origin(param.param_type) or param.param_type) not in supported_types:
                type_list = ", ".join(t.__name__ for t in (str, int, float, bool, list, dict))
                raise ToolValidationError(
                    tool_name=name,
                    field_name=param.name,
                    issue=f"Unsupported parameter type: {param.param_type}",
                    suggestion=f"Use one of: {type_list}",
                )

        return cls(
            name=name,
            description=description,
            implementation=implementation,
            properties={param.name: param.to_schema() for param in parameters},
            required=[param.name for param in parameters if param.required],
            input_type=input_type,
            output_type=output_type,
        )

    def _validate_names(self) -> None:
        if not self.name or not self.name.strip():
            raise ToolValidationError(
                tool_name="<unnamed>",
                field_name="name",
                issue="Tool name cannot be empty",
                suggestion="Provide a descriptive name for the tool",
            )

        if not self.description or not self.description.strip():
            raise ToolValidationError(
                tool_name=self.name,
                field_name="description",
                issue="Tool description cannot be empty",
                suggestion="Provide a clear description explaining what the tool does",
            )

    def _validate_properties(self) -> None:
        for key, schema in self.properties.items():
            if schema.object_value is None:
                raise ToolValidationError(
                    tool_name=self.name,
                    field_name=key,
                    issue="Property schema must be a JSON object",
                    suggestion='Use a schema such as {"type": "string"}',
                )

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------

    def schema(self) -> JsonSchema:
        """Return the function schema as plain JSON data."""
        return build_schema(self.name, self.description, self.properties, self.required)

    @property
    def definition(self) -> Value:
        """The function schema as a ``Value``, ready for a request payload."""
        return Value.from_python(self.schema())

    # ------------------------------------------------------------------
    # Input / output
    # ------------------------------------------------------------------

    def _check_arguments(self, arguments: Mapping[str, Value]) -> None:
        if self.properties:
            extra = sorted(set(arguments) - set(self.properties))
            if extra:
                hints = []
                for key in extra:
                    matches = difflib.get_close_matches(key, self.properties, n=1, cutoff=0.6)
                    hints.append(f"'{key}' (did you mean '{matches[0]}'?)" if matches else f"'{key}'")
                raise DecodingError(f"Tool '{self.name}': unexpected argument(s) {', '.join(hints)}")

        missing = [key for key in self.required if key not in arguments]
        if missing:
            raise DecodingError(
                f"Tool '{self.name}': missing required argument(s) {', '.join(missing)}"
            )

        for key, value in arguments.items():
            json_type = self._declared_type(key)
            check = _JSON_TYPE_CHECKS.get(json_type or "")
            if check is not None and not value.is_null and not check(value):
                raise DecodingError(
                    f"Tool '{self.name}': argument '{key}' must be of type {json_type}, "
                    f"got {value.description!r}"
                )

    def decode_input(self, arguments: Mapping[str, Value]) -> Any:
        """
        Decode tool-call arguments into ``input_type``.

        Raises:
            DecodingError: On missing required, unexpected or mistyped arguments.
        """
        arguments = {key: Value.from_python(value) for key, value in arguments.items()}
        self._check_arguments(arguments)

        input_type = self.input_type
        if input_type is Value or input_type is Object:
            return Object(arguments)
        if input_type is dict:
            return self._plain_arguments(arguments)
        if dataclasses.is_dataclass(input_type):
            return self._decode_dataclass(arguments)
        from_dict = getattr(input_type, "from_dict", None)
        if callable(from_dict):
            try:
                return from_dict(self._plain_arguments(arguments))
            except (KeyError, TypeError, ValueError) as exc:
                raise DecodingError(
                    f"Tool '{self.name}': cannot decode {input_type.__name__}: {exc}"
                ) from exc
        raise DecodingError(f"Tool '{self.name}': unsupported input type {input_type!r}")

    def _declared_type(self, key: str) -> Optional[str]:
        schema = self.properties.get(key)
        expected = schema.object_value.get("type") if schema is not None else None
        return expected.str_value if expected is not None else None

    def _plain_arguments(self, arguments: Mapping[str, Value]) -> Dict[str, Any]:
        """Arguments as plain Python data; string properties keep data URLs as text."""
        plain: Dict[str, Any] = {}
        for key, value in arguments.items():
            if value.data_value is not None and self._declared_type(key) == "string":
                plain[key] = value.to_json()
            else:
                plain[key] = value.to_python()
        return plain

    def _decode_dataclass(self, arguments: Mapping[str, Value]) -> Any:
        input_type = self.input_type
        hints = get_type_hints(input_type)
        fields = {f.name: f for f in dataclasses.fields(input_type) if f.init}

        extra = sorted(set(arguments) - set(fields))
        if extra:
            raise DecodingError(f"Tool '{self.name}': unexpected argument(s) {', '.join(extra)}")

        kwargs: Dict[str, Any] = {}
        for field_name, field_info in fields.items():
            if field_name not in arguments:
                has_default = (
                    field_info.default is not dataclasses.MISSING
                    or field_info.default_factory is not dataclasses.MISSING
                )
                if not has_default:
                    raise DecodingError(
                        f"Tool '{self.name}': missing required argument '{field_name}'"
                    )
                continue
            kwargs[field_name] = self._convert(
                field_name, hints.get(field_name, Any), arguments[field_name]
            )
        return input_type(**kwargs)

    def _convert(self, field_name: str, type_hint: Any, value: Value) -> Any:
        """Convert one argument to a field's declared type."""
        expected = _unwrap_optional(type_hint)
        if value.is_null and expected is not type_hint:
            return None
        if expected is Any:
            return value.to_python()
        if isinstance(expected, type) and issubclass(expected, Value):
            return value

        origin = get_origin(expected) or expected
        result: Any = None
        if origin is bool:
            result = value.bool_value
        elif origin is int:
            result = value.int_value
        elif origin is float:
            result = value.to_float()
        elif origin is str:
            # data URL text is decoded as Binary; a str field wants the text back
            result = value.to_json() if value.data_value is not None else value.str_value
        elif origin in (list, tuple):
            result = value.to_python() if value.array_value is not None else None
        elif origin is dict:
            result = value.to_python() if value.object_value is not None else None
        else:
            return value.to_python()

        if result is None:
            name = getattr(expected, "__name__", str(expected))
            raise DecodingError(
                f"Tool '{self.name}': argument '{field_name}' must be of type {name}, "
                f"got {value.description!r}"
            )
        return result

    def encode_output(self, output: Any) -> str:
        """Serialise a result for a tool message: strings verbatim, anything else as JSON."""
        if isinstance(output, str):
            return output
        return Value.from_python(output).encode().decode("utf-8")

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    async def call(self, input: Any) -> Any:
        """
        Invoke the implementation with a decoded input.

        Async implementations are awaited. Sync implementations run in a
        thread pool executor to avoid blocking the event loop. Errors raised
        by the implementation propagate unchanged.
        """
        if self.is_async:
            return await self.implementation(input)

        loop = asyncio.get_running_loop()
        context = contextvars.copy_context()
        func_with_args = functools.partial(self.implementation, input)
        result = await loop.run_in_executor(None, context.run, func_with_args)
        if inspect.isawaitable(result):
            result = await result
        return result

    def call_sync(self, input: Any) -> Any:
        """Invoke the implementation from synchronous code."""
        if self.is_async:
            return asyncio.run(self.implementation(input))
        result = self.implementation(input)
        if inspect.isawaitable(result):
            return asyncio.run(_await(result))
        return result

    def __repr__(self) -> str:
        return f"Tool(name={self.name!r})"


async def _await(awaitable: Any) -> Any:
    return await awaitable


__all__ = [
    "JsonSchema",
    "ParamMetadata",
    "Tool",
    "ToolParameter",
    "build_schema",
    "build_legacy_schema",
    "split_legacy_parameters",
]
