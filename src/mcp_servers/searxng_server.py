"""SearXNG MCP Server - 메타검색 도구를 MCP로 제공

JSON-RPC 요청을 처리하여 4개의 도구(일반/이미지/뉴스 검색, 엔진 정보)를 노출한다.
stdio는 handle_request를, sse/http(http_server.py)는 도구 핸들러를 직접 호출한다.
"""

import json
import sys

from src.arguments import get_int, get_list, get_string, require_string
from src.errors import (
    HTTPStatusError,
    SearXNGError,
    SerializationError,
    ToolInputError,
)
from src.logger import get_logger
from src.searxng_client import SearchParams, SearXNGClient

PROTOCOL_VERSION = "2024-11-05"
SERVER_INFO = {"name": "searxng-mcp-server", "version": "1.0.0"}

# JSON-RPC 오류 코드
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

logger = get_logger(__name__)


TOOLS = [
    {
        "name": "searxng_search",
        "description": "Search information through SearXNG. Supports various categories and search engines.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Search query"},
                "categories": {
                    "type": "string",
                    "description": "Search categories (general, images, videos, news, music, files, science, it). Multiple values separated by comma",
                },
                "engines": {
                    "type": "string",
                    "description": "Search engines (google, bing, duckduckgo, yandex, etc.). Multiple values separated by comma",
                },
                "language": {"type": "string", "description": "Search language (ru, en, de, fr, etc.)"},
                "page": {"type": "number", "description": "Page number of results (default 1)"},
                "time_range": {"type": "string", "description": "Time range (day, week, month, year)"},
                "safe_search": {
                    "type": "number",
                    "description": "Safe search (0 - disabled, 1 - moderate, 2 - strict)",
                },
            },
            "required": ["query"],
        },
    },
    {
        "name": "searxng_image_search",
        "description": "Specialized image search through SearXNG",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Search query for images"},
                "engines": {
                    "type": "string",
                    "description": "Image search engines (google images, bing images, flickr, etc.)",
                },
                "page": {"type": "number", "description": "Page number of results"},
            },
            "required": ["query"],
        },
    },
    {
        "name": "searxng_news_search",
        "description": "Specialized news search through SearXNG",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Search query for news"},
                "time_range": {"type": "string", "description": "Time range for news (day, week, month, year)"},
                "language": {"type": "string", "description": "News language"},
                "page": {"type": "number", "description": "Page number of results"},
            },
            "required": ["query"],
        },
    },
    {
        "name": "searxng_engines_info",
        "description": "Get information about available SearXNG search engines and categories",
        "inputSchema": {"type": "object", "properties": {}},
    },
]


def to_json_text(value) -> str:
    """도구 결과를 2칸 들여쓰기 JSON 텍스트로 직렬화한다."""
    try:
        return json.dumps(value, indent=2, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"result serialization error: {e}") from e


def _page(args: dict) -> int:
    page, _ = get_int(args, "page")
    return page if page is not None else 0


def handle_search(client: SearXNGClient, args: dict) -> str:
    """일반 검색. 답변/제안/교정은 값이 있을 때만 포함하고 infobox는 제외한다."""
    query = require_string(args, "query")

    categories, _ = get_list(args, "categories")
    engines, _ = get_list(args, "engines")
    language, _ = get_string(args, "language")
    time_range, _ = get_string(args, "time_range")
    safe_search, _ = get_int(args, "safe_search")

    params = SearchParams(
        query=query,
        categories=tuple(categories or ["general"]),
        engines=tuple(engines or ["google"]),
        language=language or "en",
        page_no=_page(args),
        time_range=time_range or "",
        safe_search=safe_search,
    )
    result = client.search(params)

    response = {
        "query": result.query,
        "number_of_results": result.number_of_results,
        "results": [r.to_dict() for r in result.results],
    }
    if result.answers:
        response["answers"] = result.answers
    if result.suggestions:
        response["suggestions"] = result.suggestions
    if result.corrections:
        response["corrections"] = result.corrections

    return to_json_text(response)


def handle_image_search(client: SearXNGClient, args: dict) -> str:
    query = require_string(args, "query")
    engines, _ = get_list(args, "engines")

    params = SearchParams(
        query=query,
        categories=("images",),
        engines=tuple(engines or ["google images"]),
        page_no=_page(args),
    )
    return to_json_text(client.search(params).to_dict())


def handle_news_search(client: SearXNGClient, args: dict) -> str:
    query = require_string(args, "query")
    language, _ = get_string(args, "language")
    time_range, _ = get_string(args, "time_range")

    params = SearchParams(
        query=query,
        categories=("news",),
        engines=("google news",),
        language=language or "en",
        page_no=_page(args),
        time_range=time_range or "",
    )
    return to_json_text(client.search(params).to_dict())


def handle_engines_info(client: SearXNGClient, args: dict) -> str:
    return to_json_text(client.get_engines())


HANDLERS = {
    "searxng_search": handle_search,
    "searxng_image_search": handle_image_search,
    "searxng_news_search": handle_news_search,
    "searxng_engines_info": handle_engines_info,
}


def call_tool(client: SearXNGClient, name: str, arguments) -> str:
    """도구 이름으로 핸들러를 선택해 실행하고 텍스트 결과를 반환한다."""
    handler = HANDLERS.get(name)
    if handler is None:
        raise ToolInputError(f"unknown tool: {name}")
    if not isinstance(arguments, dict):
        arguments = {}
    return handler(client, arguments)


def _error(req_id, code: int, message: str, data=None) -> dict:
    error = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "id": req_id, "error": error}


def handle_request(req: dict, client: SearXNGClient) -> dict | None:
    """JSON-RPC 요청 하나를 처리한다. 알림(id 없음)이면 None을 반환한다."""
    if not isinstance(req, dict):
        return _error(None, INVALID_REQUEST, "request must be a JSON object")

    method = req.get("method", "")
    req_id = req.get("id")
    is_notification = "id" not in req

    if method == "initialize":
        result = {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": SERVER_INFO,
        }
    elif is_notification:
        return None
    elif method == "ping":
        result = {}
    elif method == "tools/list":
        result = {"tools": TOOLS}
    elif method == "tools/call":
        params = req.get("params")
        if not isinstance(params, dict):
            params = {}
        name = params.get("name", "")
        logger.info(f"[도구 호출] {name}")
        try:
            text = call_tool(client, name, params.get("arguments"))
        except ToolInputError as e:
            return _error(req_id, INVALID_PARAMS, str(e))
        except HTTPStatusError as e:
            return _error(
                req_id, INTERNAL_ERROR, str(e),
                data={"status_code": e.status_code, "body": e.body},
            )
        except SearXNGError as e:
            logger.warning(f"[도구 오류] {name}: {e}")
            return _error(req_id, INTERNAL_ERROR, str(e))
        result = {"content": [{"type": "text", "text": text}]}
    else:
        return _error(req_id, METHOD_NOT_FOUND, f"method not found: {method}")

    if is_notification:
        return None
    return {"jsonrpc": "2.0", "id": req_id, "result": result}


def handle_message(line: str, client: SearXNGClient) -> dict | None:
    """와이어로 받은 JSON 텍스트 한 건을 처리한다."""
    try:
        req = json.loads(line)
    except ValueError as e:
        return _error(None, PARSE_ERROR, f"parse error: {e}")
    return handle_request(req, client)


def serve_stdio(client: SearXNGClient, stdin=None, stdout=None):
    """줄 단위 JSON-RPC를 stdin에서 읽어 stdout으로 응답한다."""
    if stdin is None or stdout is None:
        # Windows CP949 → UTF-8 인코딩 강제
        for stream in (sys.stdin, sys.stdout):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding="utf-8")
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    for line in stdin:
        line = line.strip()
        if not line:
            continue
        try:
            response = handle_message(line, client)
        except Exception as e:
            logger.exception("요청 처리 중 예기치 않은 오류")
            response = _error(None, INTERNAL_ERROR, str(e))
        if response is None:
            continue
        stdout.write(json.dumps(response, ensure_ascii=False) + "\n")
        stdout.flush()
