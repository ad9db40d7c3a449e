"""예외 계층 - SearXNG 호출과 MCP 도구 처리에서 발생하는 오류"""


class SearXNGError(Exception):
    """모든 도구 호출 오류의 기반 클래스."""


class ToolInputError(SearXNGError):
    """필수 인자 누락 또는 타입 오류. 네트워크 호출 전에 발생한다."""


class NetworkError(SearXNGError):
    """백엔드 연결 실패 또는 타임아웃."""


class HTTPStatusError(SearXNGError):
    def __init__(self, status_code: int, body: str):
        super().__init__(f"HTTP error {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class DecodeError(SearXNGError):
    """응답 본문이 JSON이 아니거나 기대한 구조가 아님."""


class SerializationError(SearXNGError):
    """도구 결과를 JSON 텍스트로 직렬화하지 못함."""
