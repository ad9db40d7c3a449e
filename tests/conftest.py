"""테스트용 공통 유틸리티 및 Mock 객체"""

import json
from unittest.mock import MagicMock

import pytest

from src.searxng_client import SearXNGClient

BASE_URL = "http://searx.test"


def make_response(status_code: int = 200, body=None, text: str | None = None) -> MagicMock:
    """requests.get(stream=True)가 반환할 Mock 응답을 생성한다. body는 JSON으로 직렬화된다.

    raw.read1은 본문 전체를 한 번 돌려준 뒤 b""로 끝을 알린다. 같은 Mock을 여러 번 읽어도 된다.
    """
    text = text if text is not None else json.dumps(body)
    data = text.encode("utf-8")
    state = {"sent": False}

    def read1(*args, **kwargs):
        if state["sent"]:
            state["sent"] = False
            return b""
        state["sent"] = True
        return data

    mock_resp = MagicMock()
    mock_resp.status_code = status_code
    mock_resp.text = text
    mock_resp.raw.read1.side_effect = read1
    mock_resp.json.side_effect = lambda: json.loads(text)
    return mock_resp


def make_search_body(results: list[dict] | None = None, **extra) -> dict:
    """SearXNG /search 응답 본문."""
    results = results if results is not None else [
        {"title": "T", "url": "U", "content": "C", "engine": "google", "category": "general"}
    ]
    body = {"query": "cats", "number_of_results": len(results), "results": results}
    body.update(extra)
    return body


@pytest.fixture
def client() -> SearXNGClient:
    return SearXNGClient(base_url=BASE_URL)


def sent_params(mock_get) -> dict:
    """마지막 requests.get 호출의 쿼리 파라미터를 dict로 반환한다."""
    return dict(mock_get.call_args.kwargs["params"])
