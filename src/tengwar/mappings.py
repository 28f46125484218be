"""Static glyph and phonetic tables.

Annatar フォントのコード表と、英語モードのテングワール変換・アラインメントが
参照する静的テーブルをまとめる。いずれもインポート時に一度だけ構築し、
以後は変更しない（`MappingProxyType` / `frozenset` / tuple で公開する）。
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


# Annatar フォントの文字コード（グリフ名 -> 出力文字）
TENGWAR: Mapping[str, str] = MappingProxyType(
    {
        # Consonants
        "tinco": "1",
        "parma": "q",
        "calma": "a",
        "quesse": "z",
        "ando": "2",
        "umbar": "w",
        "anga": "s",
        "ungwe": "x",
        "thuule": "3",
        "formen": "e",
        "aha": "d",
        "hwesta": "r",
        "anto": "4",
        "ampa": "r",
        "anca": "f",
        "unque": "v",
        "nuumen": "5",
        "malta": "t",
        "noldo": "g",
        "nwalme": "b",
        "oore": "6",
        "vala": "y",
        "anna": "h",
        "vilya": "n",
        "roomen": "7",
        "arda": "u",
        "lambe": "j",
        "alda": "m",
        "silme": "8",
        "silme-nuquerna": "i",
        "esse": ";",
        "esse-nuquerna": ",",
        "hyarmen": "9",
        "hwesta-sindarinwa": "o",
        "yanta": "m",
        "uure": "9",
        "telco": "`",
        "osse": "]",
        # Tehtar
        "three-dots": "E",
        "acute": "R",
        "dot": "T",
        "right-curl": "Y",
        "left-curl": "U",
        "nasalizer": "p",
        "doubler": ";",
        "tilde": "ê",
        "dot-below": "É",
        "caron": "Ù",
        "two-dots-below": "Í",
        "left-hook": "|",
        # Punctuation
        "space": " ",
        "centered-dot": "=",
        "centered-tilde": "\\",
        "extended-ando": "@",
        "extended-umbar": "W",
    }
)


def tengwar_to_string(*names: str) -> str:
    """Join glyph names into the font string, e.g. ``("tinco", "dot") -> "1T"``.

    未知のグリフ名は KeyError とする（テストの期待値を組み立てる用途が主）。
    """

    return "".join(TENGWAR[name] for name in names)


# 母音字に対応するテフタ（母音符号）
TEHTAR: Mapping[str, str] = MappingProxyType(
    {
        "a": TENGWAR["three-dots"],
        "e": TENGWAR["acute"],
        "i": TENGWAR["dot"],
        "o": TENGWAR["right-curl"],
        "u": TENGWAR["left-curl"],
    }
)

# 直前の出力がこれらのテフタなら、次のテフタはテルコ（短い担い手）に載せる
VOWEL_TEHTAR: frozenset[str] = frozenset(TEHTAR.values())


# 子音字・クラスタ -> グリフ列。'nq' は "vanquish" の n/qu 分割を妨げるため持たない。
CONSONANTS: Mapping[str, str] = MappingProxyType(
    {
        "t": TENGWAR["tinco"],
        "nt": TENGWAR["tinco"] + TENGWAR["nasalizer"],
        "p": TENGWAR["parma"],
        "c": TENGWAR["quesse"],
        "nch": TENGWAR["nuumen"] + TENGWAR["calma"],
        "ch": TENGWAR["calma"],
        "k": TENGWAR["quesse"],
        "q": TENGWAR["quesse"],
        "qu": TENGWAR["quesse"] + TENGWAR["tilde"],
        "d": TENGWAR["ando"],
        "b": TENGWAR["umbar"],
        "g": TENGWAR["ungwe"],
        "ng": TENGWAR["nwalme"],
        "th": TENGWAR["thuule"],
        "f": TENGWAR["formen"],
        "ph": TENGWAR["formen"],
        "h": TENGWAR["hyarmen"],
        "hw": TENGWAR["hwesta"],
        "wh": TENGWAR["hwesta-sindarinwa"],
        "nd": TENGWAR["ando"] + TENGWAR["nasalizer"],
        "mb": TENGWAR["umbar"] + TENGWAR["nasalizer"],
        "mp": TENGWAR["parma"] + TENGWAR["nasalizer"],
        "nk": TENGWAR["quesse"] + TENGWAR["nasalizer"],
        "n": TENGWAR["nuumen"],
        "m": TENGWAR["malta"],
        "r": TENGWAR["roomen"],
        "v": TENGWAR["ampa"],
        "w": TENGWAR["vala"],
        "rd": TENGWAR["arda"],
        "l": TENGWAR["lambe"],
        "ld": TENGWAR["alda"],
        "s": TENGWAR["silme"],
        "z": TENGWAR["esse-nuquerna"],
        "sh": TENGWAR["aha"],
        "y": TENGWAR["anna"],
        "gh": TENGWAR["unque"],
        "x": TENGWAR["quesse"] + TENGWAR["left-hook"],
        "j": TENGWAR["anga"],
    }
)

# 定型語（大文字小文字を区別しない）。"ofthe" は "of the" を呼び出し側で連結したもの。
SPECIAL_WORDS: Mapping[str, str] = MappingProxyType(
    {
        "a": TENGWAR["osse"],
        "the": TENGWAR["extended-ando"],
        "of": TENGWAR["extended-umbar"],
        "and": TENGWAR["ando"] + TENGWAR["nasalizer"],
        "ofthe": TENGWAR["extended-umbar"] + TENGWAR["doubler"],
    }
)

# アラインメントが無い場合に二重母音として扱う母音字の組
COMMON_DIPHTHONGS: frozenset[str] = frozenset(
    {"ai", "au", "ea", "ee", "ei", "eu", "ie", "oa", "oe", "oi", "oo", "ou", "ue", "ui"}
)

# 母音字の組が辞書上は別音節になる語（フォールバック判定からも除外する）
NON_DIPHTHONG_WORDS: frozenset[str] = frozenset(
    {"being", "create", "react", "reuse", "poet", "video"}
)


VOWEL_PHONEMES: frozenset[str] = frozenset(
    {"AA", "AE", "AH", "AO", "AW", "AY", "EH", "ER", "EY", "IH", "IY", "OW", "OY", "UH", "UW"}
)

# 単独の母音字に割り当てられたとき二重母音とみなす音素（IH を含むのは "build" 用）
DIPHTHONG_PHONEMES: frozenset[str] = frozenset({"EY", "AY", "OY", "AW", "OW", "IH"})


# 音素（強勢なし）-> その音素を表し得る綴り
PHONEME_TO_LETTER_PATTERNS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        # Vowels
        "AA": ("a", "o"),
        "AE": ("a",),
        "AH": ("a", "e", "i", "o", "u"),
        "AO": ("o", "a", "au", "aw"),
        "AW": ("ou", "ow"),
        "AY": ("i", "y", "ie", "igh"),
        "EH": ("e", "ea", "a"),
        "ER": ("er", "ir", "ur", "ear", "or", "e", "i", "u", "o"),
        "EY": ("a", "ai", "ay", "ei", "ey"),
        "IH": ("i", "y", "e"),
        "IY": ("e", "ee", "ea", "y", "i"),
        "OW": ("o", "oa", "ow"),
        "OY": ("oi", "oy"),
        "UH": ("u", "oo"),
        "UW": ("oo", "u", "ew", "ue", "ui"),
        # Consonants
        "B": ("b",),
        "CH": ("ch", "tch"),
        "D": ("d", "ed"),
        "DH": ("th",),
        "F": ("f", "ph", "gh"),
        "G": ("g", "gg", "gh"),
        "HH": ("h",),
        "JH": ("j", "g", "dg", "dge"),
        "K": ("c", "k", "ck", "ch", "q"),
        "L": ("l", "ll"),
        "M": ("m", "mm"),
        "N": ("n", "nn", "kn", "gn"),
        "NG": ("ng", "n"),
        "P": ("p", "pp"),
        "R": ("r", "rr", "wr"),
        # 'c' は持たない（軟音 c は減点付きの同値規則で扱う）
        "S": ("s", "ss", "ce", "se"),
        "SH": ("sh", "ti", "ci", "si", "ch"),
        "T": ("t", "tt", "ed"),
        "TH": ("th",),
        "V": ("v", "f"),
        "W": ("w", "wh"),
        "Y": ("y", "i", "j"),
        "Z": ("z", "s", "zz", "x", "ss"),
        "ZH": ("s", "z", "g"),
    }
)


@dataclass(frozen=True)
class LetterPattern:
    """A curated spelling unit and the base phonemes it spells."""

    letters: str
    phonemes: tuple[str, ...]


def _p(letters: str, *phonemes: str) -> LetterPattern:
    return LetterPattern(letters, tuple(phonemes))


_DOUBLED = {
    "bb": "B",
    "cc": "K",
    "dd": "D",
    "ff": "F",
    "gg": "G",
    "ll": "L",
    "mm": "M",
    "nn": "N",
    "pp": "P",
    "rr": "R",
    "ss": "S",
    "tt": "T",
    "zz": "Z",
}

_PATTERNS: list[LetterPattern] = [
    # Multi-letter
    _p("tion", "SH", "AH", "N"),
    _p("sion", "ZH", "AH", "N"),
    _p("sion", "SH", "AH", "N"),
    _p("ough", "AO"),
    _p("ough", "OW"),
    _p("igh", "AY"),
    _p("tch", "CH"),
    _p("dge", "JH"),
    _p("que", "K"),
    _p("ck", "K"),
    # Digraphs
    _p("ch", "CH"),
    _p("ch", "K"),
    _p("sh", "SH"),
    _p("th", "TH"),
    _p("th", "DH"),
    _p("ph", "F"),
    _p("wh", "W"),
    _p("ng", "NG"),
    _p("qu", "K", "W"),
    _p("gh", "F"),
    _p("gh"),
    _p("kn", "N"),
    _p("wr", "R"),
    # Suffix "ed" は語末でのみ使う
    _p("ed", "D"),
    _p("ed", "T"),
    _p("er", "ER"),
    _p("ee", "IY"),
    _p("oo", "UW"),
    _p("x", "K", "S"),
    # accident, success: 前の c は硬音、後ろの c は軟音
    _p("cc", "K", "S"),
    # Doubled consonants
    *(_p(pair, phoneme) for pair, phoneme in _DOUBLED.items()),
]

# 長い綴りを優先する（同じ長さでは定義順を保つ）
COMMON_PATTERNS: tuple[LetterPattern, ...] = tuple(
    sorted(_PATTERNS, key=lambda pattern: len(pattern.letters), reverse=True)
)
