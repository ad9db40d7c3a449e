"""네트워크 전송 - FastMCP로 SSE(/sse) 또는 streamable-http(/mcp) MCP 서버를 띄운다.

도구 인자는 Any로 받아 searxng_server의 핸들러가 그대로 변환한다.
잘못된 타입의 선택 인자는 검증 오류가 아니라 '없음'으로 처리되어야 하기 때문이다.
핸들러는 블로킹 HTTP 호출이므로 워커 스레드에서 실행한다.
"""

import asyncio
from typing import Annotated, Any

from fastmcp import FastMCP
from pydantic import Field

from src.logger import get_logger
from src.mcp_servers.searxng_server import (
    SERVER_INFO,
    handle_engines_info,
    handle_image_search,
    handle_news_search,
    handle_search,
)
from src.searxng_client import SearXNGClient

NETWORK_TRANSPORTS = {"sse": "sse", "http": "streamable-http"}

logger = get_logger(__name__)


def _arg(type_name: str, description: str):
    return Field(description=description, json_schema_extra={"type": type_name})


def _present(**kwargs) -> dict:
    return {key: value for key, value in kwargs.items() if value is not None}


def create_server(client: SearXNGClient) -> FastMCP:
    mcp = FastMCP(SERVER_INFO["name"])

    @mcp.tool(
        name="searxng_search",
        description="Search information through SearXNG. Supports various categories and search engines.",
    )
    async def searxng_search(
        query: Annotated[Any, _arg("string", "Search query")],
        categories: Annotated[Any, _arg(
            "string",
            "Search categories (general, images, videos, news, music, files, science, it). Multiple values separated by comma",
        )] = None,
        engines: Annotated[Any, _arg(
            "string",
            "Search engines (google, bing, duckduckgo, yandex, etc.). Multiple values separated by comma",
        )] = None,
        language: Annotated[Any, _arg("string", "Search language (ru, en, de, fr, etc.)")] = None,
        page: Annotated[Any, _arg("number", "Page number of results (default 1)")] = None,
        time_range: Annotated[Any, _arg("string", "Time range (day, week, month, year)")] = None,
        safe_search: Annotated[Any, _arg("number", "Safe search (0 - disabled, 1 - moderate, 2 - strict)")] = None,
    ) -> str:
        args = _present(
            query=query, categories=categories, engines=engines, language=language,
            page=page, time_range=time_range, safe_search=safe_search,
        )
        return await asyncio.to_thread(handle_search, client, args)

    @mcp.tool(name="searxng_image_search", description="Specialized image search through SearXNG")
    async def searxng_image_search(
        query: Annotated[Any, _arg("string", "Search query for images")],
        engines: Annotated[Any, _arg("string", "Image search engines (google images, bing images, flickr, etc.)")] = None,
        page: Annotated[Any, _arg("number", "Page number of results")] = None,
    ) -> str:
        args = _present(query=query, engines=engines, page=page)
        return await asyncio.to_thread(handle_image_search, client, args)

    @mcp.tool(name="searxng_news_search", description="Specialized news search through SearXNG")
    async def searxng_news_search(
        query: Annotated[Any, _arg("string", "Search query for news")],
        time_range: Annotated[Any, _arg("string", "Time range for news (day, week, month, year)")] = None,
        language: Annotated[Any, _arg("string", "News language")] = None,
        page: Annotated[Any, _arg("number", "Page number of results")] = None,
    ) -> str:
        args = _present(query=query, time_range=time_range, language=language, page=page)
        return await asyncio.to_thread(handle_news_search, client, args)

    @mcp.tool(
        name="searxng_engines_info",
        description="Get information about available SearXNG search engines and categories",
    )
    async def searxng_engines_info() -> str:
        return await asyncio.to_thread(handle_engines_info, client, {})

    return mcp


def serve_http(client: SearXNGClient, transport: str, host: str, port: int):
    """transport: "sse" (/sse) 또는 "http" (streamable-http, /mcp)."""
    mcp = create_server(client)
    path = "/sse" if transport == "sse" else "/mcp"
    logger.info(f"{transport} 서버 시작: http://{host}:{port}{path}")
    mcp.run(transport=NETWORK_TRANSPORTS[transport], host=host, port=port)
