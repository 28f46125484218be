from __future__ import annotations

import time
import uuid
from typing import Awaitable, Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from .logging import logger
from .metrics import registry


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assign a request ID to each incoming request and expose it in headers.

    - Sets `request.state.request_id`
    - Adds `X-Request-ID` to the response headers
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:  # type: ignore[override]
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class AccessLogAndMetricsMiddleware(BaseHTTPMiddleware):
    """Emit a structured access log line and record latency per path.

    全リクエストについて `request_complete` をログに出し、パス別の遅延・エラー件数を
    メトリクスへ記録する。例外は記録後にそのまま再送出し、FastAPI のハンドラに任せる。
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:  # type: ignore[override]
        start = time.time()
        path = request.url.path
        method = request.method
        is_error = False
        status_code: int | None = None
        error_type: str | None = None
        try:
            response = await call_next(request)
            status_code = response.status_code
            is_error = status_code >= 500
            return response
        except Exception as exc:
            is_error = True
            status_code = 500
            error_type = exc.__class__.__name__
            raise
        finally:
            latency_ms = (time.time() - start) * 1000
            registry.record(path, latency_ms, is_error=is_error)
            log_method = logger.error if is_error else logger.info
            log_method(
                "request_complete",
                path=path,
                method=method,
                latency_ms=round(latency_ms, 2),
                status_code=status_code,
                is_error=is_error,
                error_type=error_type,
                request_id=getattr(request.state, "request_id", None),
            )
