"""
Exceptions raised by the client, the value model and the tool layer.

Transport errors carry the HTTP status where one exists. Tool errors use
multi-line messages with a concrete suggestion so they read well in a
traceback.
"""

from __future__ import annotations

from typing import Iterable, Optional


class OllamaKitError(Exception):
    """Base exception for all ollamakit errors."""

    pass


class RequestError(OllamaKitError):
    """Raised when a request cannot be constructed (bad host or path)."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Request error: {detail}")


class ResponseError(OllamaKitError):
    """Raised when the server answers with a non-2xx status or an error line."""

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Response error (Status {status_code}): {detail}")


class EmptyBodyError(ResponseError):
    """Raised when a 2xx response has no body but a typed result was expected."""

    def __init__(self, status_code: int):
        super().__init__(status_code, "Empty response body")


class DecodingError(OllamaKitError):
    """Raised when a payload does not match the expected shape."""

    def __init__(self, detail: str, status_code: Optional[int] = None):
        self.detail = detail
        self.status_code = status_code
        if status_code is None:
            message = f"Decoding error: {detail}"
        else:
            message = f"Decoding error (Status {status_code}): {detail}"
        super().__init__(message)


class UnexpectedError(OllamaKitError):
    """Raised when the transport fails without producing a usable response."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Unexpected error: {detail}")


class UnknownToolError(OllamaKitError):
    """Raised when a tool call names a tool that is not registered."""

    def __init__(self, tool_name: str, available: Iterable[str] = (), suggestion: str = ""):
        self.tool_name = tool_name
        self.available = sorted(available)
        self.suggestion = suggestion

        message = f"\n{'='*60}\n"
        message += f"Unknown Tool: '{tool_name}'\n"
        message += f"{'='*60}\n\n"
        if self.available:
            message += f"Registered tools: {', '.join(self.available)}\n"
        else:
            message += "Registered tools: (none)\n"
        if suggestion:
            message += f"\nSuggestion: {suggestion}\n"
        message += f"\n{'='*60}\n"

        super().__init__(message)


class ToolValidationError(OllamaKitError):
    """Raised when a tool definition is invalid."""

    def __init__(self, tool_name: str, field_name: str, issue: str, suggestion: str = ""):
        self.tool_name = tool_name
        self.field_name = field_name
        self.issue = issue
        self.suggestion = suggestion

        message = f"\n{'='*60}\n"
        message += f"Tool Validation Error: '{tool_name}'\n"
        message += f"{'='*60}\n\n"
        message += f"Field: {field_name}\n"
        message += f"Issue: {issue}\n"
        if suggestion:
            message += f"\nSuggestion: {suggestion}\n"
        message += f"\n{'='*60}\n"

        super().__init__(message)


__all__ = [
    "OllamaKitError",
    "RequestError",
    "ResponseError",
    "EmptyBodyError",
    "DecodingError",
    "UnexpectedError",
    "UnknownToolError",
    "ToolValidationError",
]
