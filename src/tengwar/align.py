"""Letter-to-phoneme alignment (Needleman-Wunsch).

英単語の綴りと CMU 辞書の発音（ARPABET）を大域アラインメントで対応付ける。
スコアは浮動小数の同点比較を避けるため 1/10 単位の整数で持つ。

同点時の優先順位は pattern > diagonal > up（黙字）> left（文字欠落）。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .logging import logger
from .mappings import COMMON_PATTERNS, PHONEME_TO_LETTER_PATTERNS, LetterPattern
from .models.alignment import AlignmentEntry
from .phonemes import base_phoneme, is_vowel_phoneme


MATCH_SCORE = 20
MISMATCH_SCORE = -10
GAP_PENALTY = -10
VOWEL_GAP_PENALTY = -15
PATTERN_BASE_BONUS = 25
PATTERN_LEN_BONUS = 8

_VOWEL_LETTERS = "aeiou"

PTR_DIAGONAL = "diagonal"
PTR_UP = "up"
PTR_LEFT = "left"
PTR_PATTERN = "pattern"

_NEG_INF = float("-inf")


@dataclass(frozen=True)
class Pointer:
    """How a DP cell was reached; `pattern` is set only for pattern moves."""

    kind: str
    pattern: LetterPattern | None = None


def single_score(letter: str, phoneme: str) -> int:
    """Score aligning one letter with one phoneme (stress ignored)."""
    if not letter or not phoneme:
        return GAP_PENALTY
    letter = letter.lower()
    base = base_phoneme(phoneme)

    if letter in PHONEME_TO_LETTER_PATTERNS.get(base, ()):
        # 母音字と母音音素の一致は強く優先する
        if is_vowel_phoneme(base) and letter in _VOWEL_LETTERS:
            return MATCH_SCORE + 15
        return MATCH_SCORE

    if letter == "f" and base == "F":
        return MATCH_SCORE
    if letter in ("k", "c", "q") and base == "K":
        return MATCH_SCORE
    if letter == "s" and base == "S":
        return MATCH_SCORE
    if letter == "c" and base == "S":
        return MATCH_SCORE - 10
    if letter == "z" and base == "Z":
        return MATCH_SCORE
    if letter == "s" and base == "Z":
        return MATCH_SCORE - 10

    if letter in _VOWEL_LETTERS and is_vowel_phoneme(base):
        return MATCH_SCORE - 5

    return MISMATCH_SCORE


def _pattern_matches(
    pattern: LetterPattern,
    letters: Sequence[str],
    bases: Sequence[str],
    i: int,
    j: int,
) -> bool:
    len_l = len(pattern.letters)
    len_p = len(pattern.phonemes)
    if len_l == 0 or i < len_l or j < len_p:
        return False
    if "".join(letters[i - len_l : i]) != pattern.letters:
        return False
    if len_p == 0:
        return True
    return tuple(bases[j - len_p : j]) == pattern.phonemes


def _build_tables(
    letters: Sequence[str], phonemes: Sequence[str]
) -> list[list[Pointer | None]]:
    n = len(letters)
    m = len(phonemes)
    bases = [base_phoneme(p) for p in phonemes]

    score: list[list[float]] = [[_NEG_INF] * (m + 1) for _ in range(n + 1)]
    pointers: list[list[Pointer | None]] = [[None] * (m + 1) for _ in range(n + 1)]

    score[0][0] = 0
    for i in range(1, n + 1):
        score[i][0] = score[i - 1][0] + GAP_PENALTY
        pointers[i][0] = Pointer(PTR_UP)
    for j in range(1, m + 1):
        score[0][j] = score[0][j - 1] + GAP_PENALTY
        pointers[0][j] = Pointer(PTR_LEFT)

    for i in range(1, n + 1):
        letter = letters[i - 1]
        for j in range(1, m + 1):
            best = _NEG_INF
            best_ptr: Pointer | None = None

            for pattern in COMMON_PATTERNS:
                # 語末以外の "ed" は過去形語尾とみなさない
                if pattern.letters == "ed" and i != n:
                    continue
                if not _pattern_matches(pattern, letters, bases, i, j):
                    continue
                prev = score[i - len(pattern.letters)][j - len(pattern.phonemes)]
                candidate = prev + PATTERN_BASE_BONUS + PATTERN_LEN_BONUS * len(pattern.letters)
                if candidate > best:
                    best = candidate
                    best_ptr = Pointer(PTR_PATTERN, pattern)

            diag = score[i - 1][j - 1] + single_score(letter, phonemes[j - 1])
            if diag > best or (diag == best and (best_ptr is None or best_ptr.kind != PTR_PATTERN)):
                best = diag
                best_ptr = Pointer(PTR_DIAGONAL)

            up_penalty = VOWEL_GAP_PENALTY if letter in _VOWEL_LETTERS else GAP_PENALTY
            up = score[i - 1][j] + up_penalty
            if up > best or (
                up == best and (best_ptr is None or best_ptr.kind not in (PTR_PATTERN, PTR_DIAGONAL))
            ):
                best = up
                best_ptr = Pointer(PTR_UP)

            left_penalty = VOWEL_GAP_PENALTY if is_vowel_phoneme(phonemes[j - 1]) else GAP_PENALTY
            left = score[i][j - 1] + left_penalty
            if left > best or (
                left == best
                and (best_ptr is None or best_ptr.kind not in (PTR_PATTERN, PTR_DIAGONAL, PTR_UP))
            ):
                best = left
                best_ptr = Pointer(PTR_LEFT)

            score[i][j] = best
            pointers[i][j] = best_ptr

    return pointers


def trace_back(
    letters: Sequence[str],
    phonemes: Sequence[str],
    pointers: Sequence[Sequence[Pointer | None]],
) -> list[AlignmentEntry]:
    """Walk the pointer grid from (N, M) back to the origin.

    不正な状態（ポインタ欠落・範囲外の移動）に当たった時点で打ち切り、
    警告ログを出したうえで未処理の先頭文字を `is_guess=True` の1文字エントリで埋める。
    これにより文字位置の分割（各位置ちょうど1回）の不変条件は常に保たれる。
    """
    entries: list[AlignmentEntry] = []
    i = len(letters)
    j = len(phonemes)

    while i > 0 or j > 0:
        row = pointers[i] if 0 <= i < len(pointers) else None
        move = row[j] if row is not None and 0 <= j < len(row) else None
        if move is None or not _move_is_valid(move, i, j):
            logger.warning(
                "alignment_traceback_aborted",
                word="".join(letters),
                row=i,
                column=j,
                move=getattr(move, "kind", None),
            )
            break

        if move.kind == PTR_PATTERN and move.pattern is not None:
            pattern = move.pattern
            len_l = len(pattern.letters)
            len_p = len(pattern.phonemes)
            for k in range(len_l - 1, -1, -1):
                index = i - len_l + k
                phoneme = phonemes[j - len_p + k] if k < len_p else None
                entries.append(
                    AlignmentEntry(
                        letters=letters[index],
                        start_index=index,
                        end_index=index,
                        phoneme=phoneme,
                        is_silent=phoneme is None,
                        pattern=pattern.letters,
                    )
                )
            i -= len_l
            j -= len_p
        elif move.kind == PTR_DIAGONAL:
            entries.append(
                AlignmentEntry(
                    letters=letters[i - 1],
                    start_index=i - 1,
                    end_index=i - 1,
                    phoneme=phonemes[j - 1],
                )
            )
            i -= 1
            j -= 1
        elif move.kind == PTR_UP:
            entries.append(
                AlignmentEntry(
                    letters=letters[i - 1],
                    start_index=i - 1,
                    end_index=i - 1,
                    phoneme=None,
                    is_silent=True,
                )
            )
            i -= 1
        else:
            # 文字を伴わない音素。次の文字位置にプレースホルダとして置く
            entries.append(
                AlignmentEntry(
                    letters="",
                    start_index=i,
                    end_index=i,
                    phoneme=phonemes[j - 1],
                    is_missing_letter=True,
                )
            )
            j -= 1

    for index in range(i - 1, -1, -1):
        entries.append(
            AlignmentEntry(
                letters=letters[index],
                start_index=index,
                end_index=index,
                phoneme=None,
                is_guess=True,
            )
        )

    entries.reverse()
    return entries


def _move_is_valid(move: Pointer, i: int, j: int) -> bool:
    if move.kind == PTR_PATTERN:
        if move.pattern is None:
            return False
        return i >= len(move.pattern.letters) > 0 and j >= len(move.pattern.phonemes)
    if move.kind == PTR_DIAGONAL:
        return i > 0 and j > 0
    if move.kind == PTR_UP:
        return i > 0
    if move.kind == PTR_LEFT:
        return j > 0
    return False


def align_letters_to_phonemes(
    word: str, pronunciation: Sequence[str] | str | None
) -> list[AlignmentEntry] | None:
    """Align the letters of `word` with `pronunciation`.

    `pronunciation` は音素列（または空白区切り文字列）。None/空なら None を返す。
    例外は送出しない。
    """
    if not word or not pronunciation:
        return None
    phonemes = pronunciation.split() if isinstance(pronunciation, str) else list(pronunciation)
    if not phonemes:
        return None

    letters = list(word.lower())
    pointers = _build_tables(letters, phonemes)
    return trace_back(letters, phonemes, pointers)


def index_alignment(
    entries: Sequence[AlignmentEntry] | None, length: int
) -> list[AlignmentEntry | None]:
    """Densify entries into a position-indexed list (first entry wins).

    文字欠落のプレースホルダが同じ位置の実際の文字より先に並ぶ場合、
    プレースホルダ側が採用される（後段のヒューリスティックはこの前提で調整済み）。
    """
    by_index: list[AlignmentEntry | None] = [None] * length
    if not entries:
        return by_index
    for entry in entries:
        if 0 <= entry.start_index < length and by_index[entry.start_index] is None:
            by_index[entry.start_index] = entry
    return by_index
