"""네트워크 전송 테스트 - FastMCP 인메모리 클라이언트로 도구 등록과 호출을 검증한다."""

import asyncio
import json
from unittest.mock import MagicMock, patch

import pytest
from fastmcp import Client, FastMCP
from fastmcp.exceptions import ToolError

from src.errors import HTTPStatusError
from src.mcp_servers.http_server import create_server, serve_http
from src.searxng_client import SearchParams, SearchResponse, SearXNGClient


def make_mock_client() -> MagicMock:
    mock = MagicMock(spec=SearXNGClient)
    mock.get_engines.return_value = {"engines": {"google": {}}}
    mock.search.return_value = SearchResponse(query="cats", number_of_results=0)
    return mock


async def _list_tools(mock_client):
    async with Client(create_server(mock_client)) as c:
        return await c.list_tools()


async def _call(mock_client, name: str, arguments: dict):
    async with Client(create_server(mock_client)) as c:
        return await c.call_tool(name, arguments)


class TestToolRegistration:
    def test_four_tools(self):
        tools = {t.name: t for t in asyncio.run(_list_tools(make_mock_client()))}

        assert set(tools) == {
            "searxng_search", "searxng_image_search", "searxng_news_search", "searxng_engines_info",
        }
        schema = tools["searxng_search"].inputSchema
        assert schema["required"] == ["query"]
        assert set(schema["properties"]) == {
            "query", "categories", "engines", "language", "page", "time_range", "safe_search",
        }
        assert schema["properties"]["query"]["type"] == "string"
        assert schema["properties"]["page"]["type"] == "number"
        assert set(tools["searxng_image_search"].inputSchema["properties"]) == {"query", "engines", "page"}
        assert set(tools["searxng_news_search"].inputSchema["properties"]) == {
            "query", "time_range", "language", "page",
        }


class TestToolCalls:
    def test_engines_info(self):
        result = asyncio.run(_call(make_mock_client(), "searxng_engines_info", {}))

        assert result.content[0].text == json.dumps({"engines": {"google": {}}}, indent=2)

    def test_search_uses_same_coercion(self):
        mock_client = make_mock_client()
        asyncio.run(_call(mock_client, "searxng_search", {
            "query": "cats",
            "categories": " general , news ",
            "page": 2.9,
        }))

        assert mock_client.search.call_args.args[0] == SearchParams(
            query="cats", categories=("general", "news"), engines=("google",), language="en", page_no=2,
        )

    def test_wrong_typed_optionals_ignored(self):
        mock_client = make_mock_client()
        asyncio.run(_call(mock_client, "searxng_news_search", {
            "query": "cats",
            "page": "2",
            "language": 5,
        }))

        params = mock_client.search.call_args.args[0]
        assert params.page_no == 0
        assert params.language == "en"

    def test_non_string_query_fails_before_network(self):
        mock_client = make_mock_client()
        with pytest.raises(ToolError):
            asyncio.run(_call(mock_client, "searxng_image_search", {"query": 42}))
        mock_client.search.assert_not_called()

    def test_backend_error_reported(self):
        mock_client = make_mock_client()
        mock_client.search.side_effect = HTTPStatusError(500, "upstream error")

        with pytest.raises(ToolError, match="500"):
            asyncio.run(_call(mock_client, "searxng_search", {"query": "cats"}))


class TestServeHTTP:
    @patch.object(FastMCP, "run")
    def test_sse(self, mock_run):
        serve_http(SearXNGClient("http://searx.test"), "sse", "0.0.0.0", 8892)

        mock_run.assert_called_once_with(transport="sse", host="0.0.0.0", port=8892)

    @patch.object(FastMCP, "run")
    def test_streamable_http(self, mock_run):
        serve_http(SearXNGClient("http://searx.test"), "http", "127.0.0.1", 9000)

        mock_run.assert_called_once_with(transport="streamable-http", host="127.0.0.1", port=9000)
