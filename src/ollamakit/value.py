"""
Dynamic JSON value model.

``Value`` is a closed set of variants (``Null``, ``Bool``, ``Int``, ``Double``,
``String``, ``Binary``, ``Array``, ``Object``) used to build request payloads
and to carry heterogeneous tool-call arguments. ``Binary`` travels on the wire
as a base64 data URL and is recognised again when decoded.

Example:
    >>> payload = Value.from_python({"model": "llama3.2", "stream": False})
    >>> payload.encode()
    b'{"model":"llama3.2","stream":false}'
    >>> Value.decode(b'"data:,hello"')
    Binary(data=b'hello', mime_type='text/plain')
"""

from __future__ import annotations

import dataclasses
import json
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .data_url import encode_data_url, is_data_url, parse_data_url
from .exceptions import DecodingError

_INT_LITERAL_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)
_FLOAT_LITERAL_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.ASCII | re.IGNORECASE,
)

_TRUE_TOKENS = frozenset({"true", "t", "yes", "y", "on", "1"})
_FALSE_TOKENS = frozenset({"false", "f", "no", "n", "off", "0"})


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


class Value:
    """
    Base class of the dynamic value variants.

    Accessors such as ``int_value`` return the payload only when the value is
    exactly that variant. The ``to_*`` conversions optionally widen across
    variants when called with ``strict=False``.
    """

    @property
    def is_null(self) -> bool:
        return False

    @property
    def bool_value(self) -> Optional[bool]:
        return None

    @property
    def int_value(self) -> Optional[int]:
        return None

    @property
    def float_value(self) -> Optional[float]:
        return None

    @property
    def str_value(self) -> Optional[str]:
        return None

    @property
    def data_value(self) -> Optional[Tuple[Optional[str], bytes]]:
        return None

    @property
    def array_value(self) -> Optional[Tuple["Value", ...]]:
        return None

    @property
    def object_value(self) -> Optional[Dict[str, "Value"]]:
        return None

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @staticmethod
    def from_python(obj: Any) -> "Value":
        """
        Build a value from plain Python data.

        Supports None, bool, int, float, str, bytes, lists and tuples,
        str-keyed mappings, Enum members, dataclass instances, objects with a
        ``to_dict()`` method and ``Value`` instances (returned unchanged).

        Raises:
            TypeError: If the object has no JSON representation.
        """
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return NULL
        if isinstance(obj, bool):
            return Bool(obj)
        if isinstance(obj, int):
            return Int(obj)
        if isinstance(obj, float):
            return Double(obj)
        if isinstance(obj, str):
            return String(obj)
        if isinstance(obj, (bytes, bytearray)):
            return Binary(bytes(obj))
        if isinstance(obj, Enum):
            return Value.from_python(obj.value)
        if isinstance(obj, Mapping):
            return Object(obj)
        if isinstance(obj, (list, tuple)):
            return Array(obj)
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return Object(
                {field.name: getattr(obj, field.name) for field in dataclasses.fields(obj)}
            )
        to_dict = getattr(obj, "to_dict", None)
        if callable(to_dict):
            return Value.from_python(to_dict())
        raise TypeError(f"Cannot convert {type(obj).__name__} to Value")

    @staticmethod
    def from_json(obj: Any) -> "Value":
        """
        Build a value from already-parsed JSON data.

        Unlike ``from_python``, strings that are data URLs become ``Binary``.
        """
        if obj is None:
            return NULL
        if isinstance(obj, bool):
            return Bool(obj)
        if isinstance(obj, int):
            return Int(obj)
        if isinstance(obj, float):
            return Double(obj)
        if isinstance(obj, str):
            if is_data_url(obj):
                parsed = parse_data_url(obj)
                if parsed is not None:
                    mime_type, data = parsed
                    return Binary(data, mime_type)
            return String(obj)
        if isinstance(obj, list):
            return Array([Value.from_json(item) for item in obj])
        if isinstance(obj, dict):
            return Object({key: Value.from_json(item) for key, item in obj.items()})
        raise DecodingError(f"Value type not found for {type(obj).__name__}")

    @staticmethod
    def decode(data: Union[bytes, bytearray, str]) -> "Value":
        """
        Decode a JSON document into a value.

        Raises:
            DecodingError: If the payload is not valid JSON.
        """
        try:
            parsed = json.loads(data, parse_constant=_reject_constant)
        except (ValueError, UnicodeDecodeError) as exc:
            raise DecodingError(f"Invalid JSON: {exc}") from exc
        return Value.from_json(parsed)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    def to_json(self) -> Any:
        """Return JSON-native Python data (``Binary`` becomes a data URL string)."""
        raise NotImplementedError

    def to_python(self) -> Any:
        """Return plain Python data (``Binary`` becomes bytes)."""
        raise NotImplementedError

    def encode(self) -> bytes:
        """
        Encode as compact JSON with sorted object keys.

        Raises:
            ValueError: If the value holds a NaN or infinite ``Double``, which
                JSON cannot represent.
        """
        try:
            text = json.dumps(
                self.to_json(),
                sort_keys=True,
                separators=(",", ":"),
                ensure_ascii=False,
                allow_nan=False,
            )
        except ValueError as exc:
            raise ValueError(f"Cannot encode non-finite number as JSON: {exc}") from exc
        return text.encode("utf-8")

    @property
    def description(self) -> str:
        """Display form, used for query string values."""
        return json.dumps(self.to_json(), sort_keys=True, ensure_ascii=False)

    def __str__(self) -> str:
        return self.description

    # ------------------------------------------------------------------
    # Scalar conversions
    # ------------------------------------------------------------------

    def to_bool(self, strict: bool = True) -> Optional[bool]:
        """
        Convert to bool, or return None.

        Non-strict mode accepts the integers 0/1, the doubles 0.0/1.0 and the
        lowercase tokens true/t/yes/y/on/1 and false/f/no/n/off/0.
        """
        if isinstance(self, Bool):
            return self.value
        if strict:
            return None
        if isinstance(self, (Int, Double)):
            if self.value == 0:
                return False
            if self.value == 1:
                return True
            return None
        if isinstance(self, String):
            if self.value in _TRUE_TOKENS:
                return True
            if self.value in _FALSE_TOKENS:
                return False
        return None

    def to_int(self, strict: bool = True) -> Optional[int]:
        """
        Convert to int, or return None.

        Non-strict mode accepts integral doubles and strings that are entirely
        an integer literal.
        """
        if isinstance(self, Int):
            return self.value
        if strict:
            return None
        if isinstance(self, Double):
            if math.isfinite(self.value) and self.value.is_integer():
                return int(self.value)
            return None
        if isinstance(self, String):
            if _INT_LITERAL_RE.fullmatch(self.value):
                return int(self.value)
        return None

    def to_float(self, strict: bool = True) -> Optional[float]:
        """
        Convert to float, or return None.

        Integers always widen. Non-strict mode also parses strings that are
        entirely a floating-point literal.
        """
        if isinstance(self, Double):
            return self.value
        if isinstance(self, Int):
            return float(self.value)
        if strict:
            return None
        if isinstance(self, String):
            if _FLOAT_LITERAL_RE.fullmatch(self.value):
                return float(self.value)
        return None

    def to_str(self, strict: bool = True) -> Optional[str]:
        """
        Convert to str, or return None.

        Non-strict mode renders integers, doubles and booleans as text.
        """
        if isinstance(self, String):
            return self.value
        if strict:
            return None
        if isinstance(self, Bool):
            return "true" if self.value else "false"
        if isinstance(self, Int):
            return str(self.value)
        if isinstance(self, Double):
            return repr(self.value)
        return None


@dataclass(frozen=True)
class Null(Value):
    """JSON null."""

    @property
    def is_null(self) -> bool:
        return True

    def to_json(self) -> Any:
        return None

    def to_python(self) -> Any:
        return None

    @property
    def description(self) -> str:
        return ""


NULL = Null()


@dataclass(frozen=True)
class Bool(Value):
    value: bool

    @property
    def bool_value(self) -> Optional[bool]:
        return self.value

    def to_json(self) -> Any:
        return self.value

    def to_python(self) -> Any:
        return self.value

    @property
    def description(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class Int(Value):
    value: int

    @property
    def int_value(self) -> Optional[int]:
        return self.value

    def to_json(self) -> Any:
        return self.value

    def to_python(self) -> Any:
        return self.value

    @property
    def description(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Double(Value):
    value: float

    @property
    def float_value(self) -> Optional[float]:
        return self.value

    def to_json(self) -> Any:
        return self.value

    def to_python(self) -> Any:
        return self.value

    @property
    def description(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class String(Value):
    value: str

    @property
    def str_value(self) -> Optional[str]:
        return self.value

    def to_json(self) -> Any:
        return self.value

    def to_python(self) -> Any:
        return self.value

    @property
    def description(self) -> str:
        return self.value


@dataclass(frozen=True)
class Binary(Value):
    """Raw bytes with an optional MIME type, sent as a data URL."""

    data: bytes
    mime_type: Optional[str] = None

    @property
    def data_value(self) -> Optional[Tuple[Optional[str], bytes]]:
        return self.mime_type, self.data

    def to_json(self) -> Any:
        return encode_data_url(self.data, self.mime_type)

    def to_python(self) -> Any:
        return self.data

    @property
    def description(self) -> str:
        return encode_data_url(self.data, self.mime_type)


@dataclass(frozen=True)
class Array(Value):
    value: Tuple[Value, ...]

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "value", tuple(Value.from_python(item) for item in self.value)
        )

    @property
    def array_value(self) -> Optional[Tuple[Value, ...]]:
        return self.value

    def to_json(self) -> Any:
        return [item.to_json() for item in self.value]

    def to_python(self) -> Any:
        return [item.to_python() for item in self.value]

    def __len__(self) -> int:
        return len(self.value)

    def __getitem__(self, index: int) -> Value:
        return self.value[index]


@dataclass(frozen=True)
class Object(Value):
    value: Dict[str, Value]

    def __post_init__(self) -> None:
        members: Dict[str, Value] = {}
        for key, item in dict(self.value).items():
            if not isinstance(key, str):
                raise TypeError(f"Object keys must be str, got {type(key).__name__}")
            members[key] = Value.from_python(item)
        object.__setattr__(self, "value", members)

    def __hash__(self) -> int:
        return hash((Object, frozenset(self.value.items())))

    @property
    def object_value(self) -> Optional[Dict[str, Value]]:
        return dict(self.value)

    def to_json(self) -> Any:
        return {key: item.to_json() for key, item in self.value.items()}

    def to_python(self) -> Any:
        return {key: item.to_python() for key, item in self.value.items()}

    def get(self, key: str, default: Optional[Value] = None) -> Optional[Value]:
        return self.value.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self.value

    def __getitem__(self, key: str) -> Value:
        return self.value[key]

    def __len__(self) -> int:
        return len(self.value)


ValueMap = Dict[str, Value]


__all__ = [
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
    "ValueMap",
]
