"""Serper API client implementation."""

from __future__ import annotations

import asyncio
from typing import Any

from .config import ClientConfig
from .errors import SerperError
from .executor import RequestExecutor
from .result import Result
from .retry import RetryOrchestrator, Sleep
from .transport import HttpxTransport, ResponseCapture
from .types import (
    Endpoint,
    ImageResponse,
    NewsResponse,
    PlaceResponse,
    ScholarResponse,
    SearchRequest,
    SearchResponse,
    ShoppingResponse,
    VideoResponse,
)


def _as_request(query: str | SearchRequest, params: dict[str, Any]) -> SearchRequest:
    if isinstance(query, SearchRequest):
        if params:
            raise TypeError("pass either a SearchRequest or keyword parameters, not both")
        return query
    return SearchRequest(query=query, **params)


class SerperClient:
    """Client for the Serper Google Search API.

    Usage:
        async with SerperClient(api_key="your-key") as client:  # or set SERPER_API_KEY
            result = await client.search("python async frameworks", num=5)
            if result.is_ok():
                for r in result.value.results:
                    print(f"{r.position}. {r.title}: {r.url}")
            else:
                print(f"Error: {result.error.message}")

            result = await client.search_places("coffee", location="Berlin, Germany")

    Keyword options (base_url, retry_count, retry_base_delay, request_timeout,
    total_timeout, transport, logger) each override one ClientConfig field.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        config: ClientConfig | None = None,
        sleep: Sleep | None = None,
        **options: Any,
    ) -> None:
        if api_key:
            options["api_key"] = api_key
        if config is None:
            config = ClientConfig.from_env(**options)
        elif options:
            config = config.with_options(**options)
        self._config = config

        self._owned_transport: HttpxTransport | None = None
        transport = config.transport
        if transport is None:
            transport = self._owned_transport = HttpxTransport()
        self._capture = ResponseCapture(transport)

        executor = RequestExecutor(config, self._capture)
        self._orchestrator = RetryOrchestrator(executor, config, sleep=sleep or asyncio.sleep)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def last_raw_response(self) -> str:
        """Body text of the most recent HTTP response, for debugging."""
        return self._capture.last_body

    async def aclose(self) -> None:
        """Close the pooled HTTP client, if this client created it."""
        if self._owned_transport is not None:
            await self._owned_transport.aclose()

    async def __aenter__(self) -> SerperClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def execute(
        self,
        request: SearchRequest,
        endpoint: Endpoint,
        total_timeout: float | None = None,
    ) -> Result[Any, SerperError]:
        """Query any endpoint with retries; the result type follows the endpoint."""
        return await self._orchestrator.execute_with_retry(request, endpoint, total_timeout)

    async def search(
        self, query: str | SearchRequest, *, total_timeout: float | None = None, **params: Any
    ) -> Result[SearchResponse, SerperError]:
        """Web search.

        Args:
            query: Query string, or a prepared SearchRequest
            total_timeout: Override the configured total deadline (seconds)
            **params: SearchRequest fields (country, location, language,
                autocorrect, num, page)

        Returns:
            Result containing SearchResponse on success or SerperError on failure
        """
        return await self.execute(_as_request(query, params), Endpoint.WEB, total_timeout)

    async def search_images(
        self, query: str | SearchRequest, *, total_timeout: float | None = None, **params: Any
    ) -> Result[ImageResponse, SerperError]:
        """Image search."""
        return await self.execute(_as_request(query, params), Endpoint.IMAGES, total_timeout)

    async def search_videos(
        self, query: str | SearchRequest, *, total_timeout: float | None = None, **params: Any
    ) -> Result[VideoResponse, SerperError]:
        """Video search."""
        return await self.execute(_as_request(query, params), Endpoint.VIDEOS, total_timeout)

    async def search_places(
        self, query: str | SearchRequest, *, total_timeout: float | None = None, **params: Any
    ) -> Result[PlaceResponse, SerperError]:
        """Local places search; pair with ``location`` for useful results."""
        return await self.execute(_as_request(query, params), Endpoint.PLACES, total_timeout)

    async def search_news(
        self, query: str | SearchRequest, *, total_timeout: float | None = None, **params: Any
    ) -> Result[NewsResponse, SerperError]:
        """News search."""
        return await self.execute(_as_request(query, params), Endpoint.NEWS, total_timeout)

    async def search_shopping(
        self, query: str | SearchRequest, *, total_timeout: float | None = None, **params: Any
    ) -> Result[ShoppingResponse, SerperError]:
        """Shopping search."""
        return await self.execute(_as_request(query, params), Endpoint.SHOPPING, total_timeout)

    async def search_scholar(
        self, query: str | SearchRequest, *, total_timeout: float | None = None, **params: Any
    ) -> Result[ScholarResponse, SerperError]:
        """Google Scholar search."""
        return await self.execute(_as_request(query, params), Endpoint.SCHOLAR, total_timeout)


# Convenience function for one-off usage
async def search(
    query: str,
    endpoint: Endpoint = Endpoint.WEB,
    api_key: str | None = None,
    **params: Any,
) -> Result[Any, SerperError]:
    """Search a single endpoint.

    Convenience function that creates a client for single use.
    For multiple requests, prefer creating a SerperClient instance.
    """
    async with SerperClient(api_key=api_key) as client:
        return await client.execute(_as_request(query, params), endpoint)
