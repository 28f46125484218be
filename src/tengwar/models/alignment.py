from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AlignmentEntry:
    """One step of a letter/phoneme alignment.

    通常のエントリは1文字分（`start_index == end_index`）を表す。
    音素に対応する文字が無い場合（音素ギャップ）は `letters == ""` かつ
    `is_missing_letter=True` のプレースホルダとなり、`start_index` は次の文字位置を指す。
    """

    letters: str
    start_index: int
    end_index: int
    phoneme: str | None
    is_silent: bool = False
    is_guess: bool = False
    pattern: str | None = None
    is_missing_letter: bool = False

    def to_dict(self) -> dict[str, object]:
        return {
            "letters": self.letters,
            "start_index": self.start_index,
            "end_index": self.end_index,
            "phoneme": self.phoneme,
            "is_silent": self.is_silent,
            "is_guess": self.is_guess,
            "pattern": self.pattern,
            "is_missing_letter": self.is_missing_letter,
        }
