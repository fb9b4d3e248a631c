"""
Typed response records for the server's JSON endpoints.

Each record decodes from the parsed JSON object with ``from_dict``. Missing
required keys or wrong shapes raise ``KeyError``/``TypeError``/``ValueError``;
the transport turns those into ``DecodingError`` with the HTTP status attached.
Durations are the server's nanosecond integers, unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .dates import parse_timestamp
from .models import ModelDetails, ModelID
from .types import Message
from .value import Value


def _optional_int(data: Dict[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{key} must be a number, got {type(value).__name__}")
    return int(value)


def _require_str(data: Dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class GenerateResponse:
    """
    One ``/api/generate`` result, or one chunk of a streamed generation.

    Attributes:
        model: Model that produced the text.
        created_at: Server timestamp for this chunk.
        response: Generated text (a fragment when streaming).
        done: True on the final chunk.
        done_reason: Why generation stopped, on the final chunk.
        context: Token context to pass to a follow-up generate call.
        total_duration: Nanoseconds spent on the whole request.
        load_duration: Nanoseconds spent loading the model.
        prompt_eval_count: Tokens in the prompt.
        prompt_eval_duration: Nanoseconds spent evaluating the prompt.
        eval_count: Tokens generated.
        eval_duration: Nanoseconds spent generating.
    """

    model: ModelID
    created_at: datetime
    response: str
    done: bool
    done_reason: Optional[str] = None
    context: Optional[List[int]] = None
    total_duration: Optional[int] = None
    load_duration: Optional[int] = None
    prompt_eval_count: Optional[int] = None
    prompt_eval_duration: Optional[int] = None
    eval_count: Optional[int] = None
    eval_duration: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerateResponse":
        return cls(
            model=ModelID.parse(_require_str(data, "model")),
            created_at=parse_timestamp(data["created_at"]),
            response=_require_str(data, "response"),
            done=bool(data["done"]),
            done_reason=data.get("done_reason"),
            context=list(data["context"]) if data.get("context") is not None else None,
            total_duration=_optional_int(data, "total_duration"),
            load_duration=_optional_int(data, "load_duration"),
            prompt_eval_count=_optional_int(data, "prompt_eval_count"),
            prompt_eval_duration=_optional_int(data, "prompt_eval_duration"),
            eval_count=_optional_int(data, "eval_count"),
            eval_duration=_optional_int(data, "eval_duration"),
        )


@dataclass(frozen=True)
class ChatResponse:
    """One ``/api/chat`` result, or one chunk of a streamed chat."""

    model: ModelID
    created_at: datetime
    message: Message
    done: bool
    done_reason: Optional[str] = None
    total_duration: Optional[int] = None
    load_duration: Optional[int] = None
    prompt_eval_count: Optional[int] = None
    prompt_eval_duration: Optional[int] = None
    eval_count: Optional[int] = None
    eval_duration: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChatResponse":
        return cls(
            model=ModelID.parse(_require_str(data, "model")),
            created_at=parse_timestamp(data["created_at"]),
            message=Message.from_dict(data["message"]),
            done=bool(data["done"]),
            done_reason=data.get("done_reason"),
            total_duration=_optional_int(data, "total_duration"),
            load_duration=_optional_int(data, "load_duration"),
            prompt_eval_count=_optional_int(data, "prompt_eval_count"),
            prompt_eval_duration=_optional_int(data, "prompt_eval_duration"),
            eval_count=_optional_int(data, "eval_count"),
            eval_duration=_optional_int(data, "eval_duration"),
        )


@dataclass(frozen=True)
class EmbedResponse:
    """Embeddings for each input, in input order."""

    model: ModelID
    embeddings: List[List[float]]
    total_duration: Optional[int] = None
    load_duration: Optional[int] = None
    prompt_eval_count: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EmbedResponse":
        embeddings = [[float(x) for x in vector] for vector in data["embeddings"]]
        return cls(
            model=ModelID.parse(_require_str(data, "model")),
            embeddings=embeddings,
            total_duration=_optional_int(data, "total_duration"),
            load_duration=_optional_int(data, "load_duration"),
            prompt_eval_count=_optional_int(data, "prompt_eval_count"),
        )


@dataclass(frozen=True)
class ModelSummary:
    """A locally available model, as listed by ``/api/tags``."""

    name: str
    modified_at: datetime
    size: int
    digest: str
    details: ModelDetails

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelSummary":
        return cls(
            name=_require_str(data, "name"),
            modified_at=parse_timestamp(data["modified_at"]),
            size=int(data["size"]),
            digest=_require_str(data, "digest"),
            details=ModelDetails.from_dict(data["details"]),
        )


@dataclass(frozen=True)
class ListModelsResponse:
    models: List[ModelSummary] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ListModelsResponse":
        return cls(models=[ModelSummary.from_dict(item) for item in data["models"]])


@dataclass(frozen=True)
class RunningModel:
    """A model currently loaded in memory, as listed by ``/api/ps``."""

    name: str
    model: str
    size: int
    digest: str
    details: ModelDetails
    expires_at: datetime
    size_vram: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunningModel":
        return cls(
            name=_require_str(data, "name"),
            model=_require_str(data, "model"),
            size=int(data["size"]),
            digest=_require_str(data, "digest"),
            details=ModelDetails.from_dict(data["details"]),
            expires_at=parse_timestamp(data["expires_at"]),
            size_vram=int(data["size_vram"]),
        )


@dataclass(frozen=True)
class ListRunningModelsResponse:
    models: List[RunningModel] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ListRunningModelsResponse":
        return cls(models=[RunningModel.from_dict(item) for item in data["models"]])


@dataclass(frozen=True)
class ShowModelResponse:
    """
    Model information from ``/api/show``.

    ``model_info`` keeps its heterogeneous values as ``Value``; ``capabilities``
    holds strings such as ``Capability.TOOLS``.
    """

    modelfile: str
    parameters: str
    template: str
    details: ModelDetails
    model_info: Dict[str, Value]
    capabilities: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ShowModelResponse":
        info = data.get("model_info") or {}
        if not isinstance(info, dict):
            raise TypeError("model_info must be an object")
        return cls(
            modelfile=_require_str(data, "modelfile"),
            parameters=data.get("parameters") or "",
            template=data.get("template") or "",
            details=ModelDetails.from_dict(data["details"]),
            model_info={key: Value.from_json(item) for key, item in info.items()},
            capabilities=list(data.get("capabilities") or []),
        )


__all__ = [
    "GenerateResponse",
    "ChatResponse",
    "EmbedResponse",
    "ModelSummary",
    "ListModelsResponse",
    "RunningModel",
    "ListRunningModelsResponse",
    "ShowModelResponse",
]
