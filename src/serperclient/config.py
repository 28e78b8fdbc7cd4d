"""Configuration for the Serper API client."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .transport import Transport

API_BASE_URL = "https://google.serper.dev"
API_KEY_ENV_VAR = "SERPER_API_KEY"
BASE_URL_ENV_VAR = "SERPER_BASE_URL"
API_KEY_HEADER = "X-API-KEY"

MAX_QUERY_LENGTH = 400

DEFAULT_RETRY_COUNT = 3
DEFAULT_RETRY_BASE_DELAY = 1.0
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_TOTAL_TIMEOUT = 30.0


class Logger(Protocol):
    """Leveled log sink. ``logging.Logger`` satisfies it."""

    def debug(self, msg: str, *args: Any) -> None: ...

    def info(self, msg: str, *args: Any) -> None: ...

    def warning(self, msg: str, *args: Any) -> None: ...

    def error(self, msg: str, *args: Any) -> None: ...


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Immutable client settings, shared read-only across concurrent calls.

    Every field can be overridden by keyword; fields left unset keep the
    defaults below. Use ``with_options`` to derive a modified copy.

    Attributes:
        api_key: Serper API key, sent in the X-API-KEY header.
        base_url: Scheme and host the endpoint paths are appended to.
        transport: HTTP capability; None means a pooled httpx client.
        logger: Log sink; None means the package's ``logging`` loggers.
        retry_count: Retries after the first attempt (0 disables retrying).
        retry_base_delay: Seconds; attempt n waits base * (2n - 1).
        request_timeout: Seconds allowed for each individual POST.
        total_timeout: Seconds allowed for all attempts and waits together.
    """

    api_key: str = ""
    base_url: str = API_BASE_URL
    transport: Transport | None = None
    logger: Logger | None = None
    retry_count: int = DEFAULT_RETRY_COUNT
    retry_base_delay: float = DEFAULT_RETRY_BASE_DELAY
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    total_timeout: float = DEFAULT_TOTAL_TIMEOUT

    def __post_init__(self) -> None:
        if self.retry_count < 0:
            raise ValueError(f"retry_count must be >= 0, got {self.retry_count}")
        if self.retry_base_delay < 0:
            raise ValueError(f"retry_base_delay must be >= 0, got {self.retry_base_delay}")
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be > 0, got {self.request_timeout}")
        if self.total_timeout <= 0:
            raise ValueError(f"total_timeout must be > 0, got {self.total_timeout}")

    @classmethod
    def from_env(cls, **overrides: Any) -> ClientConfig:
        """Build a config from SERPER_API_KEY / SERPER_BASE_URL.

        Explicit keyword overrides take precedence over the environment.
        """
        values: dict[str, Any] = {}
        api_key = os.environ.get(API_KEY_ENV_VAR)
        if api_key:
            values["api_key"] = api_key
        base_url = os.environ.get(BASE_URL_ENV_VAR)
        if base_url:
            values["base_url"] = base_url
        values.update(overrides)
        return cls(**values)

    def with_options(self, **changes: Any) -> ClientConfig:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @property
    def max_attempts(self) -> int:
        return self.retry_count + 1
