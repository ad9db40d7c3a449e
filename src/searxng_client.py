"""SearXNG Client - 메타검색 엔진 HTTP API 래퍼

SearXNG의 /search, /config 엔드포인트를 JSON 형식으로 호출한다.
요청 하나당 HTTP 호출 하나이며, 재시도와 캐시는 하지 않는다.
"""

import time
from dataclasses import dataclass, field

import requests
import urllib3

from src.errors import DecodeError, HTTPStatusError, NetworkError
from src.logger import get_logger

DEFAULT_TIMEOUT = 30
USER_AGENT = "MCP-SearXNG-Client/1.0"
READ_CHUNK_SIZE = 8192

logger = get_logger(__name__)


@dataclass(frozen=True)
class SearchParams:
    query: str
    categories: tuple[str, ...] = ()
    engines: tuple[str, ...] = ()
    language: str = "en"
    page_no: int = 0
    time_range: str = ""
    safe_search: int | None = None


@dataclass
class SearchResult:
    title: str
    url: str
    content: str
    engine: str
    category: str
    score: float | None = None
    published_date: str | None = None

    def to_dict(self) -> dict:
        data = {
            "title": self.title,
            "url": self.url,
            "content": self.content,
            "engine": self.engine,
            "category": self.category,
        }
        if self.score is not None:
            data["score"] = self.score
        if self.published_date is not None:
            data["publishedDate"] = self.published_date
        return data


@dataclass
class SearchResponse:
    query: str
    number_of_results: int
    results: list[SearchResult] = field(default_factory=list)
    answers: list[str] = field(default_factory=list)
    corrections: list[str] = field(default_factory=list)
    infoboxes: list = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """백엔드 응답 형식으로 변환한다. 비어 있는 부가 필드는 생략."""
        data = {
            "query": self.query,
            "number_of_results": self.number_of_results,
            "results": [r.to_dict() for r in self.results],
        }
        for key in ("answers", "corrections", "infoboxes", "suggestions"):
            value = getattr(self, key)
            if value:
                data[key] = value
        return data

    @classmethod
    def from_json(cls, data) -> "SearchResponse":
        """디코딩된 JSON을 SearchResponse로 변환한다.

        구조가 하나라도 맞지 않으면 DecodeError를 발생시킨다 (부분 성공 없음).
        null 문자열 필드는 "", null 리스트 필드는 []로 취급한다.
        """
        if not isinstance(data, dict):
            raise DecodeError(f"응답이 JSON 객체가 아닙니다: {type(data).__name__}")

        raw_results = _list_field(data, "results")
        results = []
        for i, item in enumerate(raw_results):
            if not isinstance(item, dict):
                raise DecodeError(f"results[{i}]가 JSON 객체가 아닙니다")
            results.append(
                SearchResult(
                    title=_str_field(item, "title"),
                    url=_str_field(item, "url"),
                    content=_str_field(item, "content"),
                    engine=_str_field(item, "engine"),
                    category=_str_field(item, "category"),
                    score=_number_field(item, "score"),
                    published_date=_optional_str_field(item, "publishedDate"),
                )
            )

        return cls(
            query=_str_field(data, "query"),
            number_of_results=_int_field(data, "number_of_results"),
            results=results,
            answers=_str_list_field(data, "answers"),
            corrections=_str_list_field(data, "corrections"),
            infoboxes=_list_field(data, "infoboxes"),
            suggestions=_str_list_field(data, "suggestions"),
        )


def _str_field(obj: dict, key: str) -> str:
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"'{key}' 필드는 문자열이어야 합니다: {value!r}")
    return value


def _optional_str_field(obj: dict, key: str) -> str | None:
    value = obj.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise DecodeError(f"'{key}' 필드는 문자열이어야 합니다: {value!r}")
    return value


def _number_field(obj: dict, key: str) -> float | None:
    value = obj.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"'{key}' 필드는 숫자여야 합니다: {value!r}")
    return value


def _int_field(obj: dict, key: str) -> int:
    value = obj.get(key)
    if value is None:
        return 0
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"'{key}' 필드는 정수여야 합니다: {value!r}")
    return value


def _list_field(obj: dict, key: str) -> list:
    value = obj.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"'{key}' 필드는 배열이어야 합니다: {value!r}")
    return value


def _str_list_field(obj: dict, key: str) -> list[str]:
    values = _list_field(obj, key)
    for value in values:
        if not isinstance(value, str):
            raise DecodeError(f"'{key}' 배열에는 문자열만 허용됩니다: {value!r}")
    return values


class SearXNGClient:
    def __init__(self, base_url: str = "http://127.0.0.1:8080", timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @staticmethod
    def build_query(params: SearchParams) -> list[tuple[str, str]]:
        """SearchParams를 /search 쿼리 파라미터 목록으로 변환한다."""
        query = [("q", params.query), ("format", "json")]

        if params.categories:
            query.append(("categories", ",".join(params.categories)))
        if params.engines:
            query.append(("engines", ",".join(params.engines)))
        if params.language:
            query.append(("language", params.language))
        if params.page_no > 0:
            query.append(("pageno", str(params.page_no)))
        if params.time_range:
            query.append(("time_range", params.time_range))
        # 범위 밖의 값은 오류 없이 생략
        if params.safe_search is not None and 0 <= params.safe_search <= 2:
            query.append(("safesearch", str(params.safe_search)))

        return query

    def search(self, params: SearchParams) -> SearchResponse:
        data = self._get_json("/search", self.build_query(params))
        return SearchResponse.from_json(data)

    def get_engines(self) -> dict:
        """/config 응답을 그대로 반환한다. 내부 구조는 해석하지 않는다."""
        data = self._get_json("/config")
        if not isinstance(data, dict):
            raise DecodeError(f"/config 응답이 JSON 객체가 아닙니다: {type(data).__name__}")
        return data

    def _get_json(self, path: str, params: list[tuple[str, str]] | None = None):
        url = f"{self.base_url}{path}"
        logger.debug(f"GET {url} params={params}")

        # timeout은 요청 전체(연결부터 본문 수신까지)에 대한 기한
        deadline = time.monotonic() + self.timeout
        try:
            resp = requests.get(
                url,
                params=params,
                headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
                timeout=self.timeout,
                stream=True,
            )
            try:
                resp._content = self._read_body(resp, deadline)
            finally:
                resp.close()
        except (requests.RequestException, urllib3.exceptions.HTTPError, OSError) as e:
            logger.warning(f"SearXNG 요청 실패 ({url}): {e}")
            raise NetworkError(f"error executing request: {e}") from e

        if resp.status_code != 200:
            logger.warning(f"SearXNG HTTP {resp.status_code} ({url})")
            raise HTTPStatusError(resp.status_code, resp.text)

        try:
            return resp.json()
        except ValueError as e:
            raise DecodeError(f"error parsing JSON: {e}") from e

    def _read_body(self, resp, deadline: float) -> bytes:
        """기한 안에 본문을 끝까지 읽는다. 천천히 보내는 서버도 기한을 넘기면 실패."""
        chunks = []
        while True:
            if time.monotonic() > deadline:
                raise requests.Timeout(f"응답 수신이 {self.timeout}초를 넘었습니다")
            chunk = resp.raw.read1(READ_CHUNK_SIZE, decode_content=True)
            if not chunk:
                break
            chunks.append(chunk)
        return b"".join(chunks)
