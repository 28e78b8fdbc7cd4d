"""Retry loop with odd-multiple backoff and a deadline spanning all attempts."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Literal

from .config import ClientConfig
from .errors import ErrorKind, SerperError
from .executor import RequestExecutor
from .result import Err, Result
from .types import Endpoint, SearchRequest

logger = logging.getLogger(__name__)

# Matched case-insensitively against the error message, in this order.
# A message matching both a retryable and a terminal keyword is retried.
RETRYABLE_KEYWORDS = (
    "timeout",
    "connection",
    "network",
    "dial",
    "dns",
    "500",
    "502",
    "503",
    "504",
    "internal server error",
    "bad gateway",
    "service unavailable",
    "gateway timeout",
)
RATE_LIMIT_KEYWORDS = ("rate limit", "429")
TERMINAL_KEYWORDS = (
    "401",
    "403",
    "400",
    "unauthorized",
    "forbidden",
    "bad request",
    "invalid api key",
    "authentication",
    "unmarshal",
    "json",
    "parse",
)

# Never retried, whatever the message text says
ALWAYS_TERMINAL = frozenset(
    {
        ErrorKind.CONFIGURATION,
        ErrorKind.SERIALIZATION,
        ErrorKind.DECODE,
        ErrorKind.CANCELLED,
    }
)

Sleep = Callable[[float], Awaitable[Any]]


def backoff_delay(attempt: int, base_delay: float) -> float:
    """Seconds to wait before ``attempt`` (0-based): 0, 1x, 3x, 5x, 7x..."""
    if attempt <= 0:
        return 0.0
    return base_delay * (2 * attempt - 1)


def is_retryable(error: SerperError) -> bool:
    """Classify an attempt's error, ignoring the attempt budget."""
    if error.kind in ALWAYS_TERMINAL:
        return False
    msg = error.message.lower()
    if any(keyword in msg for keyword in RETRYABLE_KEYWORDS):
        return True
    if any(keyword in msg for keyword in RATE_LIMIT_KEYWORDS):
        return True
    if any(keyword in msg for keyword in TERMINAL_KEYWORDS):
        return False
    # Unrecognized failures are retried
    return True


def should_retry(error: SerperError, attempt: int, retry_count: int) -> bool:
    """True if another attempt should follow ``attempt`` (0-based)."""
    if attempt >= retry_count:
        return False
    return is_retryable(error)


@dataclass
class RetryState:
    """Progress of one orchestrated call; never shared between calls."""

    attempt: int = 0
    last_error: SerperError | None = None
    delay: float = 0.0
    phase: Literal["attempting", "waiting"] = "attempting"


class RetryOrchestrator:
    """Wraps a RequestExecutor in a bounded retry loop.

    Usage:
        orchestrator = RetryOrchestrator(executor, config)
        result = await orchestrator.execute_with_retry(request, Endpoint.WEB)
        if result.is_err() and result.error.is_cancelled:
            ...
    """

    def __init__(
        self,
        executor: RequestExecutor,
        config: ClientConfig,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._executor = executor
        self._config = config
        self._sleep = sleep
        self._log = config.logger or logger

    async def execute_with_retry(
        self,
        request: SearchRequest,
        endpoint: Endpoint,
        total_timeout: float | None = None,
    ) -> Result[Any, SerperError]:
        """Run attempts until success, a terminal error, or the deadline.

        Args:
            request: Search parameters sent on every attempt.
            endpoint: Vertical to query.
            total_timeout: Deadline in seconds for all attempts and waits;
                defaults to the configured total timeout.
        """
        deadline = self._config.total_timeout if total_timeout is None else total_timeout
        state = RetryState()
        try:
            return await asyncio.wait_for(self._run(request, endpoint, state), timeout=deadline)
        except asyncio.TimeoutError:
            error = self._cancelled(state, deadline)
            self._log.error("%s", error.message)
            return Err(error)

    async def _run(
        self, request: SearchRequest, endpoint: Endpoint, state: RetryState
    ) -> Result[Any, SerperError]:
        retry_count = self._config.retry_count
        while True:
            if state.attempt > 0:
                self._log.warning("Retrying request (attempt %d)", state.attempt)
                state.delay = backoff_delay(state.attempt, self._config.retry_base_delay)
                state.phase = "waiting"
                await self._sleep(state.delay)
                state.phase = "attempting"

            result = await self._executor.execute(request, endpoint)
            if result.is_ok():
                if state.attempt > 0:
                    self._log.info("Request succeeded after retry (attempt %d)", state.attempt)
                return result

            state.last_error = result.error
            if not should_retry(result.error, state.attempt, retry_count):
                return Err(self._failed(result.error, state.attempt + 1))
            state.attempt += 1

    def _failed(self, last: SerperError, attempts: int) -> SerperError:
        kind = ErrorKind.EXHAUSTED if is_retryable(last) else ErrorKind.TERMINAL
        noun = "attempt" if attempts == 1 else "attempts"
        return SerperError(
            kind,
            f"request failed after {attempts} {noun}: {last.message}",
            status_code=last.status_code,
            attempts=attempts,
            cause=last,
        )

    def _cancelled(self, state: RetryState, deadline: float) -> SerperError:
        if state.phase == "waiting":
            where = "during retry delay"
            attempts = state.attempt
        else:
            where = f"during attempt {state.attempt + 1}"
            attempts = state.attempt + 1
        return SerperError(
            ErrorKind.CANCELLED,
            f"request cancelled {where}: deadline of {deadline:g}s exceeded",
            attempts=attempts,
            cause=state.last_error,
        )
