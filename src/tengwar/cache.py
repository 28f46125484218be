from __future__ import annotations

import threading


class TranscriptionCache:
    """Thread-safe memo of raw word -> glyph string.

    変換は入力と静的テーブルだけで決まる純粋関数なので、未登録語への同時書き込みが
    競合しても結果は同じになる（重複計算が起きるだけ）。アクセスはロックで直列化する。
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._store: dict[str, str] = {}
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> str | None:
        with self._lock:
            value = self._store.get(key)
            if value is None:
                self._misses += 1
            else:
                self._hits += 1
            return value

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._store[key] = value

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
            self._hits = 0
            self._misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._store

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {"size": len(self._store), "hits": self._hits, "misses": self._misses}
