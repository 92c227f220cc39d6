"""Tests for the query proxy HTTP client."""

import json

import httpx
import pytest

from supportbot.graph import QueryProxyClient, QueryProxyError


def _client(handler) -> QueryProxyClient:
    return QueryProxyClient("http://proxy.test/", transport=httpx.MockTransport(handler))


class TestQueryProxyClient:
    """Tests for QueryProxyClient.run."""

    @pytest.mark.asyncio
    async def test_posts_tool_call_and_returns_result(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"result": [{"price": 19.99}]})

        rows = await _client(handler).run("MATCH (p) RETURN p.price AS price", {"name": "X"})

        assert rows == [{"price": 19.99}]
        assert seen["url"] == "http://proxy.test/run-neo4j-cypher"
        assert seen["body"] == {
            "tool": "run-neo4j-cypher",
            "cypher": "MATCH (p) RETURN p.price AS price",
            "params": {"name": "X"},
        }

    @pytest.mark.asyncio
    async def test_empty_result(self) -> None:
        rows = await _client(lambda r: httpx.Response(200, json={"result": []})).run("RETURN 1")
        assert rows == []

    @pytest.mark.asyncio
    async def test_missing_result_field(self) -> None:
        with pytest.raises(QueryProxyError, match="missing 'result'"):
            await _client(lambda r: httpx.Response(200, json={"rows": []})).run("RETURN 1")

    @pytest.mark.asyncio
    async def test_error_status(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "Failed to execute Cypher query.", "details": "syntax"})

        with pytest.raises(QueryProxyError):
            await _client(handler).run("MATC (n)")

    @pytest.mark.asyncio
    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(QueryProxyError):
            await _client(handler).run("RETURN 1")

    @pytest.mark.asyncio
    async def test_non_json_body(self) -> None:
        with pytest.raises(QueryProxyError):
            await _client(lambda r: httpx.Response(200, text="<html>")).run("RETURN 1")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("result", [None, {"price": 1}, "rows"])
    async def test_non_list_result(self, result) -> None:
        with pytest.raises(QueryProxyError, match="must be a list"):
            await _client(lambda r: httpx.Response(200, json={"result": result})).run("RETURN 1")
