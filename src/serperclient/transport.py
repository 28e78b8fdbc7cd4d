"""HTTP transport capability used by the request executor."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Protocol

import httpx

from .result import Err, Ok, Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RawResponse:
    """Status and body of a completed HTTP exchange."""

    status_code: int
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


@dataclass(frozen=True, slots=True)
class TransportFailure:
    """Why an exchange did not complete.

    ``stage`` is "send" when the request never produced a response
    (connect, DNS, timeout) and "read" when reading the body failed.
    """

    message: str
    stage: Literal["send", "read"] = "send"


class Transport(Protocol):
    """Performs one POST under a timeout."""

    async def post(
        self,
        url: str,
        headers: dict[str, str],
        content: bytes,
        timeout: float,
    ) -> Result[RawResponse, TransportFailure]: ...


def _describe(exc: httpx.RequestError) -> str:
    detail = str(exc) or type(exc).__name__
    if isinstance(exc, httpx.TimeoutException):
        return f"timeout: {detail}"
    if isinstance(exc, httpx.ConnectError):
        return f"connection failed: {detail}"
    return f"network error: {detail}"


class HttpxTransport:
    """Default transport backed by one pooled ``httpx.AsyncClient``.

    Usage:
        transport = HttpxTransport()
        result = await transport.post(url, headers, body, timeout=10.0)
        await transport.aclose()

    A caller-supplied client is used as-is and is not closed by ``aclose``.
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()

    async def post(
        self,
        url: str,
        headers: dict[str, str],
        content: bytes,
        timeout: float,
    ) -> Result[RawResponse, TransportFailure]:
        try:
            async with self._client.stream(
                "POST", url, headers=headers, content=content, timeout=timeout
            ) as response:
                try:
                    body = await response.aread()
                except httpx.RequestError as e:
                    return Err(TransportFailure(_describe(e), stage="read"))
                return Ok(RawResponse(status_code=response.status_code, body=body))
        except httpx.RequestError as e:
            return Err(TransportFailure(_describe(e)))

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class ResponseCapture:
    """Transport wrapper that remembers the most recent response body.

    The capture is a debugging side channel. Concurrent calls overwrite
    each other's body, so it only ever reflects the latest exchange.
    """

    def __init__(self, inner: Transport) -> None:
        self.inner = inner
        self.last_body = ""

    async def post(
        self,
        url: str,
        headers: dict[str, str],
        content: bytes,
        timeout: float,
    ) -> Result[RawResponse, TransportFailure]:
        result = await self.inner.post(url, headers, content, timeout)
        if result.is_ok():
            self.last_body = result.value.text
        else:
            logger.debug("No response body captured: %s", result.error.message)
        return result
