"""설정 관리 모듈 - .env 파일에서 설정을 로드한다."""

import os
from dotenv import load_dotenv


load_dotenv()

TRANSPORTS = ("stdio", "sse", "http")


class Config:
    def __init__(self):
        self.searxng_url: str = os.getenv("SEARXNG_URL", "http://127.0.0.1:8080")
        self.transport: str = os.getenv("MCP_TRANSPORT", "sse").lower()
        self.host: str = os.getenv("MCP_HOST", "0.0.0.0")
        self.port: int = int(os.getenv("MCP_PORT", "8892"))

    def override(self, **values) -> "Config":
        """CLI 플래그처럼 None이 아닌 값만 덮어쓴다."""
        for key, value in values.items():
            if value is not None:
                setattr(self, key, value)
        return self

    def validate(self):
        if self.transport not in TRANSPORTS:
            raise ValueError(
                f"지원하지 않는 전송 방식: {self.transport} (stdio, sse, http)"
            )
        if not 0 < self.port < 65536:
            raise ValueError(f"잘못된 포트 번호: {self.port}")

