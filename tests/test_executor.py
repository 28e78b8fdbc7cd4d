"""Unit tests for single-attempt request execution."""
import json

import pytest

from conftest import FakeTransport, json_response, text_response
from serperclient.config import ClientConfig
from serperclient.errors import ErrorKind
from serperclient.executor import RequestExecutor
from serperclient.transport import TransportFailure
from serperclient.types import Endpoint, SearchRequest, SearchResponse

pytestmark = pytest.mark.asyncio


def make_executor(transport, logger=None, **options):
    config = ClientConfig(api_key="test-key", base_url="https://api.test", logger=logger, **options)
    return RequestExecutor(config, transport)


class TestRequestShape:
    """Tests for what goes over the wire."""

    async def test_posts_to_endpoint_with_headers(self):
        transport = FakeTransport(json_response({}))
        executor = make_executor(transport, request_timeout=7.5)

        await executor.execute(SearchRequest(query="q", country="us"), Endpoint.NEWS)

        call = transport.calls[0]
        assert call["url"] == "https://api.test/news"
        assert call["headers"] == {"Content-Type": "application/json", "X-API-KEY": "test-key"}
        assert call["body"] == {"q": "q", "gl": "us"}
        assert call["timeout"] == 7.5

    async def test_trailing_slash_in_base_url(self):
        transport = FakeTransport(json_response({}))
        config = ClientConfig(api_key="k", base_url="https://api.test/")
        await RequestExecutor(config, transport).execute(SearchRequest(query="q"), Endpoint.WEB)
        assert transport.calls[0]["url"] == "https://api.test/search"

    @pytest.mark.parametrize("length", [401, 450, 1000])
    async def test_long_query_truncated_to_400(self, length, logger):
        transport = FakeTransport(json_response({}))
        executor = make_executor(transport, logger=logger)
        query = "".join(chr(ord("a") + i % 26) for i in range(length))

        result = await executor.execute(SearchRequest(query=query), Endpoint.WEB)

        assert result.is_ok()
        assert transport.calls[0]["body"]["q"] == query[:400]
        assert any("Clamping query to 400" in m for m in logger.messages("info"))

    @pytest.mark.parametrize("length", [1, 399, 400])
    async def test_short_query_sent_unchanged(self, length, logger):
        transport = FakeTransport(json_response({}))
        executor = make_executor(transport, logger=logger)
        request = SearchRequest(query="é" * length, num=10)

        await executor.execute(request, Endpoint.WEB)

        assert transport.calls[0]["body"] == request.to_payload()
        assert logger.messages("info") == []

    async def test_caller_request_not_mutated(self):
        transport = FakeTransport(json_response({}))
        request = SearchRequest(query="x" * 500)
        await make_executor(transport).execute(request, Endpoint.WEB)
        assert len(request.query) == 500


class TestOutcomes:
    """Tests for success and each error kind."""

    async def test_success_decodes_response(self, web_payload, logger):
        transport = FakeTransport(json_response(web_payload))
        result = await make_executor(transport, logger=logger).execute(
            SearchRequest(query="apple inc"), Endpoint.WEB
        )

        assert result.is_ok()
        assert isinstance(result.value, SearchResponse)
        assert result.value.results[0].title == "Apple"
        assert logger.messages("debug") == ["Sending request to /search", "Received response from /search"]

    async def test_transport_failure(self, logger):
        transport = FakeTransport(TransportFailure("connection failed: refused"))
        result = await make_executor(transport, logger=logger).execute(
            SearchRequest(query="q"), Endpoint.WEB
        )

        assert result.is_err()
        assert result.error.kind is ErrorKind.TRANSPORT
        assert result.error.message == "request error: connection failed: refused"
        assert logger.messages("error")

    async def test_body_read_failure(self):
        transport = FakeTransport(TransportFailure("network error: reset", stage="read"))
        result = await make_executor(transport).execute(SearchRequest(query="q"), Endpoint.WEB)

        assert result.error.kind is ErrorKind.TRANSPORT
        assert result.error.message.startswith("read response: ")

    async def test_non_200_embeds_status_and_body(self, logger):
        transport = FakeTransport(text_response('{"message": "Unauthorized."}', status=401))
        result = await make_executor(transport, logger=logger).execute(
            SearchRequest(query="q"), Endpoint.WEB
        )

        error = result.error
        assert error.kind is ErrorKind.UPSTREAM_STATUS
        assert error.status_code == 401
        assert error.message == 'api error: status 401, body: {"message": "Unauthorized."}'
        assert logger.messages("error")

    async def test_invalid_json_is_decode_error(self, logger):
        transport = FakeTransport(text_response("not-json"))
        result = await make_executor(transport, logger=logger).execute(
            SearchRequest(query="q"), Endpoint.WEB
        )

        assert result.error.kind is ErrorKind.DECODE
        assert result.error.message.startswith("unmarshal response: ")
        assert logger.messages("error")

    async def test_wrong_shape_is_decode_error(self):
        transport = FakeTransport(json_response({"organic": "nope"}))
        result = await make_executor(transport).execute(SearchRequest(query="q"), Endpoint.WEB)

        assert result.error.kind is ErrorKind.DECODE
        assert "organic" in result.error.message

    async def test_unserializable_request(self):
        transport = FakeTransport(json_response({}))
        request = SearchRequest.model_construct(q="q", num=object())
        result = await make_executor(transport).execute(request, Endpoint.WEB)

        assert result.error.kind is ErrorKind.SERIALIZATION
        assert result.error.message.startswith("marshal request: ")
        assert transport.attempts == 0

    async def test_missing_api_key(self):
        transport = FakeTransport(json_response({}))
        executor = RequestExecutor(ClientConfig(api_key=""), transport)
        result = await executor.execute(SearchRequest(query="q"), Endpoint.WEB)

        assert result.error.kind is ErrorKind.CONFIGURATION
        assert "SERPER_API_KEY" in result.error.message
        assert transport.attempts == 0

    async def test_non_200_body_is_raw_text(self):
        body = json.dumps({"message": "Not enough credits"})
        transport = FakeTransport(text_response(body, status=400))
        result = await make_executor(transport).execute(SearchRequest(query="q"), Endpoint.IMAGES)
        assert result.error.message.endswith(body)

    async def test_deeply_nested_body_is_decode_error(self):
        transport = FakeTransport(text_response("[" * 200000))
        result = await make_executor(transport).execute(SearchRequest(query="q"), Endpoint.WEB)

        assert result.error.kind is ErrorKind.DECODE
        assert result.error.message.startswith("unmarshal response: ")

    async def test_oversized_number_is_decode_error(self):
        body = '{"places": [{"latitude": ' + "1" * 400 + "}]}"
        transport = FakeTransport(text_response(body))
        result = await make_executor(transport).execute(SearchRequest(query="q"), Endpoint.PLACES)

        assert result.error.kind is ErrorKind.DECODE

    async def test_null_item_in_list_is_decode_error(self):
        transport = FakeTransport(json_response({"organic": [None]}))
        result = await make_executor(transport).execute(SearchRequest(query="q"), Endpoint.WEB)

        assert result.error.kind is ErrorKind.DECODE
