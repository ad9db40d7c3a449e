"""로거 설정 - stdout은 stdio 전송 채널이므로 로그는 stderr로만 출력한다."""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler


def get_logger(name: str = "searxng_mcp") -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
    if not isinstance(level, int):
        # 알 수 없는 이름은 "Level XXX" 문자열로 돌아온다
        level = logging.INFO
    logger.setLevel(level)

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_time=True,
        show_level=True,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
