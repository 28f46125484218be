from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..metrics import registry
from ..transcriber import get_transcriber

router = APIRouter()


@router.get("/healthz")
def health_check() -> dict[str, str]:
    """Simple health check endpoint.

    ライブネス/レディネス確認用の簡易エンドポイント。
    """
    return {"status": "ok"}


@router.get("/metrics")
def metrics() -> JSONResponse:
    """Return in-memory metrics snapshot.

    パス別の p95/エラー/件数、変換キャッシュのヒット状況、変換エンジンの処理量を返す。
    """
    cache = get_transcriber().cache
    cache_stats = cache.stats() if cache is not None else None
    return JSONResponse(
        content={
            "paths": registry.snapshot(),
            "cache": cache_stats,
            "engine": registry.engine_snapshot(cache_stats),
        }
    )
