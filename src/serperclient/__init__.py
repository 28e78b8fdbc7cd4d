"""
serperclient - Python client library for the Serper Google Search API

Usage:
    from serperclient import SerperClient

    async with SerperClient(api_key="your-key") as client:  # or set SERPER_API_KEY env var
        # Web search
        result = await client.search("latest python frameworks 2024", num=5)
        if result.is_ok():
            for r in result.value.results:
                print(f"{r.title}: {r.url}")
        else:
            print(f"Error: {result.error.message}")

        # Other verticals share the same request envelope
        result = await client.search_news("python 3.13 release", country="us")
        result = await client.search_places("coffee", location="Berlin, Germany")

Every call is retried with backoff (1x, 3x, 5x... the base delay) on
transient failures, bounded by a total deadline across all attempts.
"""

import logging

from .client import SerperClient, search
from .config import ClientConfig, Logger
from .errors import ErrorKind, SerperError
from .executor import RequestExecutor
from .retry import RetryOrchestrator, RetryState, backoff_delay, is_retryable, should_retry
from .transport import HttpxTransport, RawResponse, ResponseCapture, Transport, TransportFailure
from .types import (
    AnswerBox,
    Endpoint,
    ImageResponse,
    ImageResult,
    KnowledgeGraph,
    NewsResponse,
    NewsResult,
    PeopleAlsoAsk,
    PlaceResponse,
    PlaceResult,
    RelatedSearch,
    ScholarResponse,
    ScholarResult,
    SearchParameters,
    SearchRequest,
    SearchResponse,
    SearchResult,
    ShoppingResponse,
    ShoppingResult,
    Sitelink,
    TopStory,
    VideoResponse,
    VideoResult,
    WireModel,
)
from .result import Result, Ok, Err

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Client
    "SerperClient",
    "search",
    "ClientConfig",
    "Logger",
    # Core
    "RequestExecutor",
    "RetryOrchestrator",
    "RetryState",
    "backoff_delay",
    "is_retryable",
    "should_retry",
    # Transport
    "Transport",
    "HttpxTransport",
    "ResponseCapture",
    "RawResponse",
    "TransportFailure",
    # Types
    "Endpoint",
    "SearchRequest",
    "SearchParameters",
    "SearchResponse",
    "SearchResult",
    "Sitelink",
    "KnowledgeGraph",
    "AnswerBox",
    "PeopleAlsoAsk",
    "RelatedSearch",
    "TopStory",
    "ImageResponse",
    "ImageResult",
    "VideoResponse",
    "VideoResult",
    "PlaceResponse",
    "PlaceResult",
    "NewsResponse",
    "NewsResult",
    "ShoppingResponse",
    "ShoppingResult",
    "ScholarResponse",
    "ScholarResult",
    "WireModel",
    # Errors
    "SerperError",
    "ErrorKind",
    # Result
    "Result",
    "Ok",
    "Err",
]

__version__ = "1.0.0"
