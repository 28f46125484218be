"""Per-letter decision rules evaluated against one word's alignment.

各判定は `WordContext`（正規化済みの綴り・発音・位置インデックス化したアラインメント）
を受け取る純粋関数として定義し、個別にテストできるようにしている。
発音データがある場合はアラインメントを優先し、無い場合は綴りだけの
フォールバック規則で判定する（先に当たった規則が勝つ）。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

from .align import align_letters_to_phonemes, index_alignment
from .mappings import COMMON_DIPHTHONGS, DIPHTHONG_PHONEMES, NON_DIPHTHONG_WORDS
from .models.alignment import AlignmentEntry
from .phonemes import base_phoneme, is_vowel_phoneme


VOWELS = "aeiou"
VOWELS_WITH_Y = "aeiouy"
_CONSONANTS = frozenset("bcdfgjklmnpqstvwxz")
_SOFT_FOLLOWERS = frozenset({"S", "SH", "CH"})

YVowelType = Literal["long", "short"]


@dataclass(frozen=True)
class WordContext:
    """Normalized spelling plus the alignment looked up by letter position."""

    text: str
    pronunciation: tuple[str, ...] | None
    alignment: tuple[AlignmentEntry | None, ...]

    @classmethod
    def build(cls, text: str, pronunciation: Sequence[str] | None) -> "WordContext":
        phonemes = tuple(pronunciation) if pronunciation else None
        entries = align_letters_to_phonemes(text, phonemes)
        return cls(
            text=text,
            pronunciation=phonemes,
            alignment=tuple(index_alignment(entries, len(text))),
        )

    @property
    def length(self) -> int:
        return len(self.text)

    def char(self, pos: int) -> str:
        if 0 <= pos < len(self.text):
            return self.text[pos]
        return ""

    def entry(self, pos: int) -> AlignmentEntry | None:
        if 0 <= pos < len(self.alignment):
            return self.alignment[pos]
        return None


def _phoneme_of(entry: AlignmentEntry | None) -> str:
    if entry is None or entry.phoneme is None:
        return ""
    return entry.phoneme


def _soft_c_by_spelling(ctx: WordContext, pos: int) -> bool:
    return ctx.char(pos + 1) in ("e", "i", "y")


def is_soft_c(ctx: WordContext, pos: int) -> bool:
    """Return True when the c at `pos` reads as /s/ (silme-nuquerna)."""
    entry = ctx.entry(pos)
    if ctx.pronunciation is None or entry is None:
        return _soft_c_by_spelling(ctx, pos)

    if entry.phoneme is None:
        # science, scene, social, ocean: 無音の c は後ろの歯擦音に吸収される
        following = base_phoneme(_phoneme_of(ctx.entry(pos + 1)))
        return following in _SOFT_FOLLOWERS or ctx.char(pos - 1) == "s"

    if "c" in entry.letters:
        return base_phoneme(entry.phoneme) in ("S", "SH")

    return _soft_c_by_spelling(ctx, pos)


def is_consonant_y(ctx: WordContext, pos: int) -> bool:
    """Return True when the y at `pos` is the consonant /j/ (anna).

    音素 Y なら子音、母音音素なら母音。無音・未整列の y は綴りで判定する（employee）。
    """
    entry = ctx.entry(pos)
    phoneme = entry.phoneme if entry is not None and entry.letters == "y" else None
    if ctx.pronunciation is not None and phoneme:
        base = base_phoneme(phoneme)
        if base == "Y":
            return True
        if is_vowel_phoneme(base):
            return False
    return pos == 0 or ctx.char(pos - 1) in VOWELS_WITH_Y


def y_vowel_type(ctx: WordContext, pos: int) -> YVowelType:
    """Classify a vocalic y as long (caron) or short (two dots below)."""
    entry = ctx.entry(pos)
    if ctx.pronunciation is not None and entry is not None and entry.letters == "y":
        base = base_phoneme(_phoneme_of(entry))
        if base == "AY":
            return "long"
        if base in ("IY", "IH"):
            return "short"
    if ctx.pronunciation and any(base_phoneme(p) == "AY" for p in ctx.pronunciation):
        return "long"
    return "short"


def is_postvocalic_r(ctx: WordContext, pos: int) -> bool:
    """Return True when the r at `pos` should use oore instead of roomen.

    rr は後ろの r に判定を委ね、無音の r に続く h は読み飛ばす。
    いずれも位置を進めるだけなので、語長で上限を切ったループで処理する。
    """
    for _ in range(ctx.length + 1):
        nxt = ctx.char(pos + 1)
        if not nxt:
            return True
        if nxt == "r":
            pos += 1
            continue
        if nxt in _CONSONANTS:
            return True
        if nxt == "h":
            entry = ctx.entry(pos)
            if entry is not None and entry.phoneme is None:
                pos += 2
                continue
            return False
        if nxt == "e":
            e_pos = pos + 1
            if is_diphthong(ctx, e_pos):
                return False
            if is_silent_e_in_middle(ctx, e_pos):
                return True
            return e_pos == ctx.length - 1 and has_trailing_silent_e(ctx)
        return False
    return True


def is_hard_s(ctx: WordContext, pos: int) -> bool:
    """Return True when the s at `pos` is voiced (esse-nuquerna)."""
    if pos > 0 and ctx.text[pos - 1 : pos + 2] == "ase":
        return True
    entry = ctx.entry(pos)
    if ctx.pronunciation is None or entry is None:
        return False
    return "s" in entry.letters and _phoneme_of(entry).startswith("Z")


def is_silent_e_in_middle(ctx: WordContext, pos: int) -> bool:
    if ctx.char(pos) != "e" or pos == ctx.length - 1:
        return False
    entry = ctx.entry(pos)
    if entry is None or ctx.pronunciation is None:
        return False
    if entry.letters != "e":
        return False
    # R 音につながる e（-er- など）は無音扱いしない
    if "R" in _phoneme_of(ctx.entry(pos + 1)):
        return False
    if entry.phoneme is None or entry.is_silent:
        return True
    # 複合語の "-re-"（firearm）: r に続く e が ER を担うときは r 側で読む
    if base_phoneme(entry.phoneme) == "ER" and ctx.char(pos - 1) == "r":
        return True
    return not is_vowel_phoneme(entry.phoneme)


def _silent_e_by_spelling(text: str) -> bool:
    if len(text) < 2 or text[-1] != "e":
        return False
    has_earlier_vowel = any(ch in VOWELS_WITH_Y for ch in text[:-1])
    return has_earlier_vowel and text[-2] not in VOWELS_WITH_Y


def _vowel_count_mismatch(text: str, pronunciation: Sequence[str]) -> bool:
    vowel_letters = sum(1 for ch in text if ch in VOWELS_WITH_Y)
    vowel_phonemes = sum(1 for p in pronunciation if is_vowel_phoneme(p))
    return vowel_letters > vowel_phonemes


def has_trailing_silent_e(ctx: WordContext) -> bool:
    """Return True when the word-final e is silent (dot-below)."""
    text = ctx.text
    if len(text) < 2 or text[-1] != "e":
        return False
    if ctx.pronunciation is None:
        return _silent_e_by_spelling(text)

    pos = len(text) - 1
    entry = ctx.entry(pos)
    if entry is None or entry.is_missing_letter:
        return _vowel_count_mismatch(text, ctx.pronunciation) or _silent_e_by_spelling(text)
    if entry.phoneme is None:
        return True
    base = base_phoneme(entry.phoneme)
    if not is_vowel_phoneme(base):
        return True
    # "-le" を AH、"-re" を ER と読む辞書表記は音節化した子音なので e は書かない
    if base == "AH" and ctx.char(pos - 1) == "l":
        return True
    if base == "ER" and ctx.char(pos - 1) == "r":
        return True
    return False


def is_diphthong(ctx: WordContext, pos: int) -> bool:
    """Return True when letters `pos` and `pos + 1` form one vowel sound."""
    if pos >= ctx.length - 1:
        return False
    first = ctx.char(pos)
    second = ctx.char(pos + 1)
    if first not in VOWELS_WITH_Y or second not in VOWELS_WITH_Y:
        return False

    pair = first + second
    if pair in ("ia", "io", "iu") and pos > 0 and ctx.char(pos - 1) not in VOWELS_WITH_Y:
        return False

    entry1 = ctx.entry(pos)
    entry2 = ctx.entry(pos + 1)
    if ctx.pronunciation is not None and entry1 is not None:
        p1 = entry1.phoneme
        p2 = entry2.phoneme if entry2 is not None else None
        if p1 and (entry2 is None or not p2 or entry2.is_silent):
            if base_phoneme(p1) in DIPHTHONG_PHONEMES:
                return True
        # 両方の母音字がそれぞれ母音音素を持つなら別音節
        if p1 and p2 and is_vowel_phoneme(p1) and is_vowel_phoneme(p2):
            return False

    if ctx.text in NON_DIPHTHONG_WORDS:
        return False
    return pair in COMMON_DIPHTHONGS


def is_ng_digraph(ctx: WordContext, pos: int) -> bool:
    """Return True when "ng" at `pos` collapses into nwalme."""
    entry_n = ctx.entry(pos)
    entry_g = ctx.entry(pos + 1)
    if ctx.pronunciation is not None and entry_n is not None:
        phoneme_n = _phoneme_of(entry_n)
        if phoneme_n.startswith("NG"):
            return True
        if phoneme_n.startswith("N") and _phoneme_of(entry_g).startswith("G"):
            return False
    return pos == ctx.length - 2 or ctx.char(pos + 2) in VOWELS_WITH_Y


def is_monophthong_eau(ctx: WordContext, pos: int) -> bool:
    """Return True when "eau" at `pos` reads as a single o (bureau, beau)."""
    if ctx.pronunciation is None:
        return True
    entry_e = ctx.entry(pos)
    entry_a = ctx.entry(pos + 1)
    entry_u = ctx.entry(pos + 2)
    return (
        entry_e is not None
        and entry_e.phoneme is None
        and entry_a is not None
        and entry_a.phoneme is None
        and "OW" in _phoneme_of(entry_u)
    )
