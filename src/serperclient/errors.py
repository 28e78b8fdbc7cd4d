"""Error values returned by the Serper client."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """What went wrong, independent of the message text."""

    CONFIGURATION = "configuration"  # Missing API key
    SERIALIZATION = "serialization"  # Request could not be encoded
    TRANSPORT = "transport"  # Connect/DNS/timeout or body read failure
    UPSTREAM_STATUS = "upstream_status"  # Non-200 HTTP status
    DECODE = "decode"  # Body is not the expected JSON shape
    CANCELLED = "cancelled"  # Total deadline expired
    EXHAUSTED = "exhausted"  # Every configured attempt failed
    TERMINAL = "terminal"  # Non-retryable failure stopped the retry loop


@dataclass(frozen=True, slots=True)
class SerperError:
    """API error details.

    ``cause`` links a wrapping error (EXHAUSTED, TERMINAL, CANCELLED) to the
    error of the last attempt. ``attempts`` is only set on wrapping errors.
    """

    kind: ErrorKind
    message: str
    status_code: int | None = None
    attempts: int = 0
    cause: SerperError | None = None

    def __str__(self) -> str:
        return self.message

    def root(self) -> SerperError:
        """Return the innermost error in the cause chain."""
        error = self
        while error.cause is not None:
            error = error.cause
        return error

    @property
    def is_cancelled(self) -> bool:
        return self.kind is ErrorKind.CANCELLED
