"""Single-attempt request execution against one Serper endpoint."""

from __future__ import annotations

import json
import logging
from typing import Any

from .config import API_KEY_ENV_VAR, API_KEY_HEADER, MAX_QUERY_LENGTH, ClientConfig
from .errors import ErrorKind, SerperError
from .result import Err, Ok, Result
from .transport import Transport, TransportFailure
from .types import Endpoint, SearchRequest

logger = logging.getLogger(__name__)


def _transport_error(failure: TransportFailure) -> SerperError:
    prefix = "read response" if failure.stage == "read" else "request error"
    return SerperError(ErrorKind.TRANSPORT, f"{prefix}: {failure.message}")


class RequestExecutor:
    """Serializes, sends and decodes one request. Knows nothing of retries."""

    def __init__(self, config: ClientConfig, transport: Transport) -> None:
        self._config = config
        self._transport = transport
        self._log = config.logger or logger

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            API_KEY_HEADER: self._config.api_key,
        }

    def _url(self, endpoint: Endpoint) -> str:
        return f"{self._config.base_url.rstrip('/')}{endpoint.path}"

    async def execute(
        self, request: SearchRequest, endpoint: Endpoint
    ) -> Result[Any, SerperError]:
        """Run one attempt.

        Args:
            request: Search parameters; the query is clamped to 400 chars.
            endpoint: Vertical to query; selects path and response type.

        Returns:
            Ok with the endpoint's response type, or Err describing the
            failure (transport, status, decode, serialization, config).
        """
        if not self._config.api_key:
            return Err(
                SerperError(
                    ErrorKind.CONFIGURATION,
                    f"API key required: set {API_KEY_ENV_VAR} or pass api_key",
                )
            )

        self._log.debug("Sending request to %s", endpoint.path)

        if len(request.query) > MAX_QUERY_LENGTH:
            self._log.info(
                "Clamping query to %d chars (was %d)", MAX_QUERY_LENGTH, len(request.query)
            )
            request = request.truncated(MAX_QUERY_LENGTH)

        try:
            body = json.dumps(request.to_payload()).encode("utf-8")
        except (TypeError, ValueError) as e:
            return Err(SerperError(ErrorKind.SERIALIZATION, f"marshal request: {e}"))

        sent = await self._transport.post(
            self._url(endpoint), self._headers(), body, self._config.request_timeout
        )
        if sent.is_err():
            self._log.error("Request to %s failed: %s", endpoint.path, sent.error.message)
            return sent.map_err(_transport_error)

        response = sent.value
        text = response.text
        if response.status_code != 200:
            self._log.error(
                "API error from %s: status %d, body: %s", endpoint.path, response.status_code, text
            )
            return Err(
                SerperError(
                    ErrorKind.UPSTREAM_STATUS,
                    f"api error: status {response.status_code}, body: {text}",
                    status_code=response.status_code,
                )
            )

        try:
            parsed = endpoint.response_type.from_json(text)
        except (ValueError, RecursionError, OverflowError) as e:
            self._log.error("Failed to decode response from %s: %s", endpoint.path, e)
            return Err(SerperError(ErrorKind.DECODE, f"unmarshal response: {e}"))

        self._log.debug("Received response from %s", endpoint.path)
        return Ok(parsed)
