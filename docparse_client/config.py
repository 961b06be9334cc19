"""
Client Configuration
====================
Immutable configuration objects for the parse client.

Defaults live in module constants and are copied into each config at
construction; nothing here is mutated after validation.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from requests.structures import CaseInsensitiveDict

from .errors import ConfigError

DEFAULT_BASE_URL = "https://api.cloud.llamaindex.ai/api/parsing"
DEFAULT_POLL_INTERVAL = 1.0
DEFAULT_REQUEST_TIMEOUT = 60.0

API_KEY_ENV = "LLAMA_CLOUD_API_KEY"
BASE_URL_ENV = "LLAMA_CLOUD_BASE_URL"


@dataclass(frozen=True)
class ClientConfig:
    """Credentials and transport settings for ParseClient."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL

    # Extra headers, applied over the defaults
    headers: dict[str, str] = field(default_factory=dict)

    # Per-request HTTP timeout in seconds
    request_timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT

    def __post_init__(self):
        if not self.api_key or not str(self.api_key).strip():
            raise ConfigError("API key is required")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ConfigError(
                f"request_timeout must be positive, got {self.request_timeout}"
            )

        base_url = (self.base_url or DEFAULT_BASE_URL).rstrip("/")
        object.__setattr__(self, "base_url", base_url)
        object.__setattr__(self, "headers", dict(self.headers or {}))

    @classmethod
    def from_env(cls, **overrides) -> "ClientConfig":
        """
        Build a config from LLAMA_CLOUD_API_KEY / LLAMA_CLOUD_BASE_URL.

        Keyword overrides that are not None take precedence over the
        environment.
        """
        values = {
            "api_key": os.environ.get(API_KEY_ENV, ""),
            "base_url": os.environ.get(BASE_URL_ENV) or DEFAULT_BASE_URL,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def request_headers(self) -> dict[str, str]:
        """Default headers merged with caller headers (caller wins)."""
        merged = CaseInsensitiveDict({
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        })
        merged.update(self.headers)
        return dict(merged)

    def __repr__(self) -> str:
        return (
            f"ClientConfig(api_key='***', base_url={self.base_url!r}, "
            f"headers={sorted(self.headers)!r}, "
            f"request_timeout={self.request_timeout!r})"
        )


@dataclass(frozen=True)
class PollingConfig:
    """
    Status polling policy for ParseClient.parse_file.

    With the defaults the client polls every second until the job reaches
    a terminal state, however long that takes.
    """

    interval: float = DEFAULT_POLL_INTERVAL
    timeout: Optional[float] = None
    max_attempts: Optional[int] = None

    def __post_init__(self):
        if self.interval < 0:
            raise ConfigError(f"Poll interval must be >= 0, got {self.interval}")
        if self.timeout is not None and self.timeout < 0:
            raise ConfigError(f"Poll timeout must be >= 0, got {self.timeout}")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ConfigError(
                f"max_attempts must be >= 1, got {self.max_attempts}"
            )
