"""Logging utilities for the transcription service.

構造化ログの初期化と、長大なテキストを含むイベントを安全に切り詰める
ヘルパーをまとめて提供する。バッチ API ではページ全体のテキストが
渡されることがあるため、ログ行が肥大化しないようここで一元的に処理する。
"""

from typing import Any

import logging
import structlog
from structlog import contextvars as structlog_contextvars
from .config import settings


_MAX_VALUE_CHARS = 512
_TRUNCATION_SUFFIX = "…"


def _truncate_text(value: str, limit: int = _MAX_VALUE_CHARS) -> str:
    """Return `value` cut to `limit` characters with a visible suffix."""

    if len(value) <= limit:
        return value
    return value[:limit] + _TRUNCATION_SUFFIX


def _truncate_long_values(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Truncate oversized string fields before rendering a log event.

    入力テキストやアラインメント結果をそのまま出力するとログ基盤の
    1 行上限を超えるため、文字列は一定長で切り詰める。ネストした dict と
    list も再帰的に処理する。
    """

    def _shorten(value: Any) -> Any:
        if isinstance(value, str):
            return _truncate_text(value)
        if isinstance(value, dict):
            return {k: _shorten(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [_shorten(v) for v in value]
        return value

    for key, value in list(event_dict.items()):
        if key == "event":
            continue
        event_dict[key] = _shorten(value)
    return event_dict


def configure_logging() -> None:
    """Configure structlog for application-wide logging.

    アプリ全体のロギング設定を行う。標準 logging を設定値のレベルで初期化し、
    structlog で ISO タイムスタンプと JSON 形式の出力を有効化する。
    """
    # stdlib 側の出力に余計なプレフィックスを付けないため、フォーマットは
    # メッセージのみ(%(message)s)に固定する。
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(message)s",
        handlers=[logging.StreamHandler()],
        force=True,
    )
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog_contextvars.merge_contextvars,
            _truncate_long_values,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


logger = structlog.get_logger()
