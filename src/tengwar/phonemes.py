from __future__ import annotations

import re

from .mappings import VOWEL_PHONEMES


_PHONEME_RE = re.compile(r"^[A-Z]{1,2}[0-2]?$")


def base_phoneme(phoneme: str) -> str:
    """Return the ARPABET phoneme without its stress digit (``"AY1" -> "AY"``)."""
    if phoneme and phoneme[-1].isdigit():
        return phoneme[:-1]
    return phoneme


def is_vowel_phoneme(phoneme: str | None) -> bool:
    if not phoneme:
        return False
    return base_phoneme(phoneme) in VOWEL_PHONEMES


def parse_pronunciation(raw: str | None) -> tuple[str, ...] | None:
    """Split a dictionary pronunciation into phoneme codes.

    辞書の発音文字列（例: ``"K AE1 T"``）を音素タプルに分解する。
    不正なコードが1つでも含まれる場合は「データなし」として None を返し、
    呼び出し側は綴りだけのヒューリスティックにフォールバックする。
    """
    if not raw:
        return None
    phonemes = tuple(raw.split())
    if not phonemes:
        return None
    if not all(_PHONEME_RE.match(phoneme) for phoneme in phonemes):
        return None
    return phonemes
