"""도구 인자 추출 - 느슨한 타입의 MCP arguments에서 값을 꺼낸다.

각 접근자는 (값, 타입불일치) 튜플을 반환한다.
키가 없으면 (None, False), 타입이 다르면 (None, True). 예외는 던지지 않는다.
"""

from src.errors import ToolInputError


def get_string(args: dict, key: str) -> tuple[str | None, bool]:
    if key not in args or args[key] is None:
        return None, False
    value = args[key]
    if not isinstance(value, str):
        return None, True
    return value, False


def get_int(args: dict, key: str) -> tuple[int | None, bool]:
    """JSON 숫자를 0 방향으로 잘라 정수로 반환한다. bool은 숫자로 보지 않는다."""
    if key not in args or args[key] is None:
        return None, False
    value = args[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None, True
    try:
        return int(value), False
    except (OverflowError, ValueError):
        # inf, nan
        return None, True


def get_list(args: dict, key: str) -> tuple[list[str] | None, bool]:
    """쉼표로 구분된 문자열을 공백 제거된 리스트로 변환한다. 빈 결과는 None."""
    value, mismatch = get_string(args, key)
    if value is None:
        return None, mismatch
    items = [item.strip() for item in value.split(",")]
    items = [item for item in items if item]
    return (items or None), False


def require_string(args: dict, key: str) -> str:
    value, mismatch = get_string(args, key)
    if value is None:
        if mismatch:
            raise ToolInputError(f"{key} must be a string")
        raise ToolInputError(f"{key} is required")
    return value
