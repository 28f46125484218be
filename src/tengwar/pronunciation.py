from __future__ import annotations

from functools import lru_cache
from typing import Mapping, Protocol

try:
    import cmudict  # type: ignore
except Exception:  # pragma: no cover - optional during tests
    cmudict = None  # type: ignore

from .config import settings
from .logging import logger


class PronunciationDictionary(Protocol):
    """Lookup collaborator: lowercase word -> ``"K AE1 T"`` or None."""

    def lookup(self, word: str) -> str | None: ...


# 例外辞書（CMU に無い・CMU と表記がずれる語）。キーは小文字、値は空白区切りの ARPABET。
_EXCEPTION_DICT: dict[str, str] = {
    "lactase": "L AE1 K T EY2 S",
    "cafe": "K AH0 F EY1",
    "rwanda": "R UW0 AA1 N D AH0",
}

# cmudict の辞書インスタンスは高コストのためキャッシュ
_CMU_CACHE: dict[str, list[list[str]]] | None = None


def _get_cmu_dict() -> dict[str, list[list[str]]] | None:
    global _CMU_CACHE
    if cmudict is None:
        return None
    if _CMU_CACHE is None:
        try:
            _CMU_CACHE = cmudict.dict()  # type: ignore[attr-defined]
        except Exception:  # pragma: no cover
            logger.warning("cmudict_load_failed")
            _CMU_CACHE = None
    return _CMU_CACHE


@lru_cache(maxsize=8192)
def _lookup_cmu(word: str) -> str | None:
    if word in _EXCEPTION_DICT:
        return _EXCEPTION_DICT[word]
    cmu = _get_cmu_dict()
    if not cmu:
        return None
    entries = cmu.get(word)
    if not entries:
        return None
    # 複数発音がある場合は辞書の先頭（最も一般的な読み）を採用する
    return " ".join(entries[0])


class CmuPronunciationDictionary:
    """CMU Pronouncing Dictionary backed lookup with a small exception table."""

    def lookup(self, word: str) -> str | None:
        if not word:
            return None
        return _lookup_cmu(word.lower())


class StaticPronunciationDictionary:
    """In-memory dictionary, mainly for tests and fixed vocabularies.

    テストで CMU 辞書の版差に依存しないよう、期待する発音を直接与えるために使う。
    """

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries = {key.lower(): value for key, value in (entries or {}).items()}

    def lookup(self, word: str) -> str | None:
        return self._entries.get(word.lower())


class NullPronunciationDictionary:
    """Always reports "no data" so only spelling heuristics apply."""

    def lookup(self, word: str) -> str | None:
        return None


def get_pronunciation_dictionary(source: str | None = None) -> PronunciationDictionary:
    """Build the dictionary selected by `source` (defaults to settings)."""

    selected = (source or settings.pronunciation_source).lower()
    if selected == "none":
        return NullPronunciationDictionary()
    if selected == "cmudict":
        if cmudict is None:
            logger.warning("cmudict_unavailable", fallback="none")
        return CmuPronunciationDictionary()
    raise ValueError(f"unknown pronunciation source: {selected}")
