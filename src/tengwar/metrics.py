"""In-process counters for the HTTP layer and the transcription engine.

パス別の遅延（p95）・エラー件数に加え、変換エンジンの処理量
（変換した語数、バッチのテキスト数と断片数）を集計する。
キャッシュのヒット率は `TranscriptionCache.stats()` の値から `engine_snapshot` で算出する。
"""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Mapping, Sequence

from .models.transcription import TextFragment


@dataclass
class PathStats:
    latencies_ms: Deque[float]
    count: int = 0
    errors: int = 0

    def as_dict(self) -> Dict[str, float | int]:
        return {
            "p95_ms": round(calculate_p95(list(self.latencies_ms)), 2),
            "count": self.count,
            "errors": self.errors,
        }


@dataclass
class EngineStats:
    words_transcribed: int = 0
    batches: int = 0
    batch_texts: int = 0
    fragments: int = 0
    tengwar_fragments: int = 0
    fragment_counts: Deque[int] = field(default_factory=deque)


class MetricsRegistry:
    """Thread-safe registry shared by the middleware and the routers."""

    def __init__(self, window_size: int = 200) -> None:
        self._window_size = window_size
        self._lock = threading.Lock()
        self._paths: Dict[str, PathStats] = {}
        self._engine = EngineStats(fragment_counts=deque(maxlen=window_size))

    def record(self, path: str, latency_ms: float, *, is_error: bool = False) -> None:
        with self._lock:
            stats = self._paths.get(path)
            if stats is None:
                stats = PathStats(latencies_ms=deque(maxlen=self._window_size))
                self._paths[path] = stats
            stats.latencies_ms.append(latency_ms)
            stats.count += 1
            if is_error:
                stats.errors += 1

    def record_words(self, count: int) -> None:
        with self._lock:
            self._engine.words_transcribed += count

    def record_batch(self, results: Sequence[Sequence[TextFragment]]) -> None:
        """Count one batch; each Tengwar fragment also counts as a transcribed word."""
        per_text = [len(fragments) for fragments in results]
        tengwar = sum(1 for fragments in results for fragment in fragments if fragment.is_tengwar)
        with self._lock:
            engine = self._engine
            engine.batches += 1
            engine.batch_texts += len(results)
            engine.fragments += sum(per_text)
            engine.tengwar_fragments += tengwar
            engine.words_transcribed += tengwar
            engine.fragment_counts.extend(per_text)

    def snapshot(self) -> Dict[str, Dict[str, float | int]]:
        with self._lock:
            return {path: stats.as_dict() for path, stats in self._paths.items()}

    def engine_snapshot(
        self, cache_stats: Mapping[str, int] | None = None
    ) -> Dict[str, float | int | None]:
        """Engine counters plus the cache hit ratio (None when nothing was looked up)."""
        with self._lock:
            engine = self._engine
            counts = list(engine.fragment_counts)
            result: Dict[str, float | int | None] = {
                "words_transcribed": engine.words_transcribed,
                "batches": engine.batches,
                "batch_texts": engine.batch_texts,
                "fragments": engine.fragments,
                "tengwar_fragments": engine.tengwar_fragments,
                "fragments_per_text_p95": calculate_p95([float(c) for c in counts]),
            }
        hits = cache_stats.get("hits", 0) if cache_stats else 0
        misses = cache_stats.get("misses", 0) if cache_stats else 0
        result["cache_hit_ratio"] = round(hits / (hits + misses), 3) if hits + misses else None
        return result

    def reset(self) -> None:
        with self._lock:
            self._paths.clear()
            self._engine = EngineStats(fragment_counts=deque(maxlen=self._window_size))


def calculate_p95(values: list[float]) -> float:
    if not values:
        return 0.0
    sorted_vals = sorted(values)
    k = int(0.95 * (len(sorted_vals) - 1))
    return sorted_vals[k]


registry = MetricsRegistry()
