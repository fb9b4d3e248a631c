"""
RFC 2397 ``data:`` URL parsing and encoding.

Only the subset needed for binary values is supported::

    data:[<mediatype>][;charset=<charset>][;base64],<data>

See https://www.rfc-editor.org/rfc/rfc2397.html
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import Optional, Tuple
from urllib.parse import unquote_to_bytes

DEFAULT_MIME_TYPE = "text/plain"

_DATA_URL_RE = re.compile(
    r"data:(?P<mediatype>[^,;]*)"
    r"(?:;charset=(?P<charset>[^,;]+))?"
    r"(?P<base64>;base64)?"
    r",(?P<data>.*)",
    re.DOTALL,
)
_BAD_PERCENT_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def is_data_url(string: str) -> bool:
    """Return True if the whole string is a data URL."""
    return _DATA_URL_RE.fullmatch(string) is not None


def parse_data_url(string: str) -> Optional[Tuple[str, bytes]]:
    """
    Parse a data URL into its MIME type and decoded payload.

    Args:
        string: Candidate data URL.

    Returns:
        ``(mime_type, data)``, or None if the string is not a data URL or its
        payload cannot be decoded.
    """
    match = _DATA_URL_RE.fullmatch(string)
    if match is None:
        return None

    mime_type = match.group("mediatype") or DEFAULT_MIME_TYPE
    charset = match.group("charset")
    if charset and mime_type.startswith("text/"):
        mime_type += f";charset={charset}"

    payload = match.group("data")
    if match.group("base64"):
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            return None
    else:
        if _BAD_PERCENT_ESCAPE_RE.search(payload):
            return None
        data = unquote_to_bytes(payload)
        try:
            data.decode("utf-8")
        except UnicodeDecodeError:
            return None

    return mime_type, data


def encode_data_url(data: bytes, mime_type: Optional[str] = None) -> str:
    """Encode bytes as a base64 data URL (MIME type defaults to text/plain)."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type or DEFAULT_MIME_TYPE};base64,{encoded}"


__all__ = ["DEFAULT_MIME_TYPE", "is_data_url", "parse_data_url", "encode_data_url"]
