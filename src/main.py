"""main.py - SearXNG MCP Server 진입점

전송 방식(stdio / sse / http), 바인딩 주소, SearXNG 주소를 받아 서버를 실행한다.
설정 우선순위: CLI 플래그 > 환경변수(.env) > 기본값

사용법:
  python -m src.main -t stdio --searxng http://127.0.0.1:8080
  python -m src.main -t sse --host 0.0.0.0 -p 8892      # http://host:8892/sse
  python -m src.main -t http -p 8892                     # streamable-http, /mcp
"""

import argparse

from src.config import TRANSPORTS, Config
from src.logger import get_logger
from src.mcp_servers.http_server import serve_http
from src.mcp_servers.searxng_server import serve_stdio
from src.searxng_client import SearXNGClient

logger = get_logger("searxng_mcp")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="MCP server for a SearXNG instance")
    parser.add_argument("-t", "--transport", choices=TRANSPORTS, help="전송 방식 (stdio, sse, http)")
    parser.add_argument("--host", help="sse/http 서버 호스트")
    parser.add_argument("-p", "--port", type=int, help="sse/http 서버 포트")
    parser.add_argument("--searxng", dest="searxng_url", help="SearXNG 인스턴스 URL")
    return parser.parse_args(argv)


def load_config(argv: list[str] | None = None) -> Config:
    args = parse_args(argv)
    config = Config().override(
        transport=args.transport,
        host=args.host,
        port=args.port,
        searxng_url=args.searxng_url,
    )
    config.validate()
    return config


def main(argv: list[str] | None = None):
    config = load_config(argv)
    client = SearXNGClient(base_url=config.searxng_url)

    logger.info(f"SearXNG 인스턴스: {client.base_url}")
    if config.transport == "stdio":
        logger.info("stdio 서버 시작")
        serve_stdio(client)
    else:
        serve_http(client, config.transport, config.host, config.port)


if __name__ == "__main__":
    main()
