"""
Model identifiers, model metadata and keep-alive settings.

Example:
    >>> model = ModelID.parse("library/llama3.2:latest")
    >>> model.namespace, model.model, model.tag
    ('library', 'llama3.2', 'latest')
    >>> ModelID.parse("llama3.2").matches(ModelID.parse("llama3.2:1b"))
    True
    >>> KeepAlive.minutes(5).value
    String(value='5m')
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Union

from .value import Int, String, Value


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class ModelID:
    """
    An identifier in the form ``[namespace/]model[:tag]``.

    Equality and ordering compare the raw string case-insensitively.
    """

    model: str
    namespace: Optional[str] = None
    tag: Optional[str] = None

    @classmethod
    def parse(cls, raw: str) -> "ModelID":
        namespace: Optional[str] = None
        rest = raw
        if "/" in raw:
            namespace, rest = raw.split("/", 1)
        model, _, tag = rest.partition(":")
        return cls(model=model, namespace=namespace or None, tag=tag or None)

    @classmethod
    def coerce(cls, value: Union[str, "ModelID"]) -> "ModelID":
        return value if isinstance(value, ModelID) else cls.parse(value)

    @property
    def raw(self) -> str:
        namespace = f"{self.namespace}/" if self.namespace else ""
        tag = f":{self.tag}" if self.tag else ""
        return f"{namespace}{self.model}{tag}"

    def matches(self, other: Union[str, "ModelID"]) -> bool:
        """
        Return True if ``other`` matches this identifier used as a pattern.

        A namespace or tag missing from the pattern matches any value; the
        model name must always be equal.
        """
        other = ModelID.coerce(other)
        if self.namespace is not None and self.namespace != other.namespace:
            return False
        if self.model != other.model:
            return False
        if self.tag is not None and self.tag != other.tag:
            return False
        return True

    def __str__(self) -> str:
        return self.raw

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            other = ModelID.parse(other)
        if not isinstance(other, ModelID):
            return NotImplemented
        return self.raw.casefold() == other.raw.casefold()

    def __lt__(self, other: object) -> bool:
        if isinstance(other, str):
            other = ModelID.parse(other)
        if not isinstance(other, ModelID):
            return NotImplemented
        return self.raw.casefold() < other.raw.casefold()

    def __hash__(self) -> int:
        return hash(self.raw.casefold())


@dataclass(frozen=True)
class ModelDetails:
    """
    Additional information about a model.

    Attributes:
        format: Model file format (e.g. "gguf").
        family: Primary architecture (e.g. "llama").
        families: Additional architectures, if any.
        parameter_size: Parameter count label (e.g. "7B").
        quantization_level: Quantisation label (e.g. "Q4_0").
        parent_model: Model this one was derived from, if any.
    """

    format: str
    family: str
    parameter_size: str
    quantization_level: str
    families: Optional[List[str]] = None
    parent_model: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelDetails":
        return cls(
            format=data["format"],
            family=data["family"],
            parameter_size=data["parameter_size"],
            quantization_level=data["quantization_level"],
            families=data.get("families"),
            parent_model=data.get("parent_model") or None,
        )


class Capability:
    """Capabilities reported by ``/api/show``."""

    COMPLETION = "completion"
    TOOLS = "tools"
    INSERT = "insert"
    VISION = "vision"
    EMBEDDING = "embedding"
    THINKING = "thinking"


_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600}
_KIND_RANK = {"default": 0, "none": 1, "duration": 2, "forever": 3}


@functools.total_ordering
@dataclass(frozen=True)
class KeepAlive:
    """
    How long a model stays loaded after a request.

    ``DEFAULT`` omits the field so the server decides; ``NONE`` unloads
    immediately; ``FOREVER`` keeps the model loaded. Durations render as
    ``"10s"``, ``"5m"`` or ``"2h"``; a zero duration behaves like ``NONE`` and
    a negative one like ``FOREVER``.
    """

    kind: str
    amount: int = 0
    unit: str = "s"

    DEFAULT: ClassVar["KeepAlive"]
    NONE: ClassVar["KeepAlive"]
    FOREVER: ClassVar["KeepAlive"]

    @classmethod
    def seconds(cls, amount: int) -> "KeepAlive":
        return cls("duration", amount, "s")

    @classmethod
    def minutes(cls, amount: int) -> "KeepAlive":
        return cls("duration", amount, "m")

    @classmethod
    def hours(cls, amount: int) -> "KeepAlive":
        return cls("duration", amount, "h")

    @property
    def total_seconds(self) -> int:
        return self.amount * _UNIT_SECONDS[self.unit]

    @property
    def value(self) -> Optional[Value]:
        """Payload value for ``keep_alive``, or None to omit the field."""
        if self.kind == "default":
            return None
        if self.kind == "none":
            return Int(0)
        if self.kind == "forever":
            return Int(-1)
        if self.total_seconds < 0:
            return Int(-1)
        if self.total_seconds == 0:
            return Int(0)
        return String(f"{self.amount}{self.unit}")

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, KeepAlive):
            return NotImplemented
        if self.kind == other.kind == "duration":
            return self.total_seconds < other.total_seconds
        return _KIND_RANK[self.kind] < _KIND_RANK[other.kind]

    def __str__(self) -> str:
        if self.kind == "duration":
            return f"{self.amount}{self.unit}"
        return self.kind


KeepAlive.DEFAULT = KeepAlive("default")
KeepAlive.NONE = KeepAlive("none")
KeepAlive.FOREVER = KeepAlive("forever")


__all__ = ["ModelID", "ModelDetails", "Capability", "KeepAlive"]
