"""
Configuration options for the client.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional

from .transport import normalize_host

logger = logging.getLogger(__name__)

DEFAULT_HOST = "http://localhost:11434"
HOST_ENV_VAR = "OLLAMA_HOST"


def _read_env_file(path: Path) -> Optional[Dict[str, str]]:
    """Parse KEY=value lines; None if the file is missing or unreadable."""
    if not path.is_file():
        return None
    try:
        text = path.read_text()
    except OSError as exc:
        logger.debug("Skipping unreadable env file %s: %s", path, exc)
        return None

    values: Dict[str, str] = {}
    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith("export "):
            stripped = stripped[len("export ") :].lstrip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        key, value = key.strip(), value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        if key:
            values[key] = value
    return values


def _host_from(environ: Mapping[str, str]) -> str:
    host = environ.get(HOST_ENV_VAR, "").strip()
    if not host:
        return DEFAULT_HOST
    if "://" not in host:
        return f"http://{host}"
    return host


@dataclass
class ClientConfig:
    """
    Connection settings for a ``Client``.

    Attributes:
        host: Base URL of the server. Trailing slashes are removed. Default: http://localhost:11434.
        user_agent: Value for the User-Agent header. None = the HTTP library's default. Default: None.
        timeout: Request timeout in seconds. None = the HTTP library's default. Default: None.
    """

    host: str = DEFAULT_HOST
    user_agent: Optional[str] = None
    timeout: Optional[float] = None

    def __post_init__(self) -> None:
        self.host = normalize_host(self.host)

    @classmethod
    def from_env(
        cls,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> "ClientConfig":
        """
        Build a config whose host comes from ``OLLAMA_HOST``.

        The variable may omit the scheme (``127.0.0.1:11434``), in which case
        ``http://`` is assumed. Unset or empty means the default host.
        """
        return cls(host=_host_from(os.environ), user_agent=user_agent, timeout=timeout)

    @classmethod
    def from_env_files(
        cls,
        candidate_paths: Iterable[Path],
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> "ClientConfig":
        """
        Like ``from_env``, with ``OLLAMA_HOST`` falling back to a .env file.

        Only the first existing file in ``candidate_paths`` is read. A
        non-empty value in the process environment wins over the file, and
        the process environment is never modified. ``OLLAMA_HOST`` is the
        only key used. ``export`` prefixes and matching quotes are accepted.
        """
        file_values: Dict[str, str] = {}
        for path in candidate_paths:
            values = _read_env_file(path)
            if values is not None:
                logger.debug("Read client settings from %s", path)
                file_values = values
                break

        environ = dict(file_values)
        if os.environ.get(HOST_ENV_VAR, "").strip():
            environ[HOST_ENV_VAR] = os.environ[HOST_ENV_VAR]
        return cls(host=_host_from(environ), user_agent=user_agent, timeout=timeout)


__all__ = ["ClientConfig", "DEFAULT_HOST", "HOST_ENV_VAR"]
