"""Pytest fixtures for all test modules."""
from __future__ import annotations

import asyncio
import json
from typing import Any, Callable

import pytest

from serperclient.result import Err, Ok
from serperclient.transport import RawResponse, TransportFailure


class FakeTransport:
    """Scripted transport for testing.

    Each queued step is either a RawResponse, a TransportFailure, or an
    async callable taking the request and returning one of those. The last
    step repeats once the queue runs out.
    """

    def __init__(self, *steps: Any):
        self.steps = list(steps)
        self.calls: list[dict[str, Any]] = []

    @property
    def attempts(self) -> int:
        return len(self.calls)

    async def post(self, url: str, headers: dict[str, str], content: bytes, timeout: float):
        """Record the call and play the next step."""
        call = {
            "url": url,
            "headers": dict(headers),
            "body": json.loads(content),
            "timeout": timeout,
        }
        self.calls.append(call)
        step = self.steps.pop(0) if len(self.steps) > 1 else self.steps[0]
        if callable(step):
            step = await step(call)
        if isinstance(step, TransportFailure):
            return Err(step)
        return Ok(step)


class RecordingLogger:
    """Logger double capturing (level, formatted message) pairs."""

    def __init__(self):
        self.records: list[tuple[str, str]] = []

    def _record(self, level: str, msg: str, *args: Any) -> None:
        self.records.append((level, msg % args if args else msg))

    def debug(self, msg: str, *args: Any) -> None:
        self._record("debug", msg, *args)

    def info(self, msg: str, *args: Any) -> None:
        self._record("info", msg, *args)

    def warning(self, msg: str, *args: Any) -> None:
        self._record("warning", msg, *args)

    def error(self, msg: str, *args: Any) -> None:
        self._record("error", msg, *args)

    def messages(self, level: str) -> list[str]:
        return [m for lvl, m in self.records if lvl == level]


class RecordingSleep:
    """Sleep double that records requested delays without waiting."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        await asyncio.sleep(0)


def json_response(payload: Any, status: int = 200) -> RawResponse:
    return RawResponse(status_code=status, body=json.dumps(payload).encode("utf-8"))


def text_response(text: str, status: int = 200) -> RawResponse:
    return RawResponse(status_code=status, body=text.encode("utf-8"))


def slow(delay: float, response: RawResponse) -> Callable[[dict[str, Any]], Any]:
    """Step that answers only after ``delay`` seconds."""

    async def step(call: dict[str, Any]) -> RawResponse:
        await asyncio.sleep(delay)
        return response

    return step


@pytest.fixture
def logger():
    """
    Create a recording logger.

    Returns:
        RecordingLogger: Logger capturing every record
    """
    return RecordingLogger()


@pytest.fixture
def sleep():
    """
    Create a recording sleep that never waits.

    Returns:
        RecordingSleep: Callable recording backoff delays
    """
    return RecordingSleep()


@pytest.fixture
def web_payload():
    """
    Sample /search response body.

    Returns:
        dict: Decoded JSON as returned by the API
    """
    return {
        "searchParameters": {"q": "apple inc", "type": "search", "engine": "google"},
        "knowledgeGraph": {
            "title": "Apple",
            "type": "Technology company",
            "website": "http://www.apple.com/",
            "imageUrl": "https://example.com/apple.png",
            "description": "Apple Inc. is an American multinational technology company.",
            "descriptionSource": "Wikipedia",
            "descriptionLink": "https://en.wikipedia.org/wiki/Apple_Inc.",
            "attributes": {"Headquarters": "Cupertino, CA", "CEO": "Tim Cook"},
        },
        "organic": [
            {
                "title": "Apple",
                "link": "https://www.apple.com/",
                "snippet": "Discover the innovative world of Apple.",
                "position": 1,
                "sitelinks": [{"title": "Support", "link": "https://support.apple.com/"}],
            },
            {
                "title": "Apple Inc. - Wikipedia",
                "link": "https://en.wikipedia.org/wiki/Apple_Inc.",
                "snippet": "Apple Inc. is an American multinational corporation.",
                "position": 2,
                "date": "2 days ago",
                "attributes": {"Founded": "April 1, 1976"},
                "unknownField": "ignored",
            },
        ],
        "answerBox": {"answer": "Tim Cook", "title": "Apple CEO", "link": "https://x", "snippet": "CEO"},
        "peopleAlsoAsk": [
            {"question": "Who owns Apple?", "snippet": "Shareholders", "title": "Owners", "link": "https://y"}
        ],
        "relatedSearches": [{"query": "apple stock"}, {"query": "apple store"}],
        "topStories": [
            {"title": "Apple news", "link": "https://z", "source": "Verge", "date": "1 hour ago", "imageUrl": "https://i"}
        ],
    }
