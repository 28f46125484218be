"""English word -> Tengwar (Annatar font codes) transcription.

単語を左から走査し、母音は直後の子音に載せるテフタとして保留（pending）しながら
グリフを出力する。走査の各段階の優先順位:

1. 単母音 "eau"
2. 二重母音（第2母音ごとの固定パターン）
3. 三字・二字のクラスタ（ng / nc / nch / nt-h / mp-h の例外つき）
4. 重子音（および c の後の k）→ doubler
5. 1文字ごとの判定（a/i/o/u, e, c, y, r, s, その他）

判定に使う発音・アラインメントは `WordContext` にまとめ、各規則は `heuristics` の
純粋関数として切り出してある。
"""

from __future__ import annotations

import threading
from typing import Any, Callable

from . import heuristics as rules
from .align import align_letters_to_phonemes
from .cache import TranscriptionCache
from .config import settings
from .heuristics import WordContext
from .logging import logger
from .mappings import CONSONANTS, SPECIAL_WORDS, TEHTAR, TENGWAR, VOWEL_TEHTAR
from .phonemes import parse_pronunciation
from .pronunciation import PronunciationDictionary, get_pronunciation_dictionary
from .spelling import remove_silent_letters, strip_diacritics, to_american_spelling


_VOWELS = "aeiou"


class _Scan:
    """Mutable state of one left-to-right pass over a word."""

    def __init__(self, ctx: WordContext) -> None:
        self.ctx = ctx
        self.text = ctx.text
        self.pos = 0
        self.out: list[str] = []
        self.pending: str | None = None

    def push(self, *glyphs: str) -> None:
        self.out.extend(glyphs)

    def flush_on_carrier(self) -> None:
        """Write the pending tehta on a telco before a new vowel takes its place."""
        if self.pending is not None:
            self.push(TENGWAR["telco"], self.pending)
            self.pending = None

    def flush_after_step(self) -> None:
        if self.pending is None:
            return
        if not self.out or self.out[-1] in VOWEL_TEHTAR:
            self.push(TENGWAR["telco"])
        self.push(self.pending)
        self.pending = None

    # --- 各段階。True を返したら位置を進めて次の文字へ ---

    def monophthong_eau(self) -> bool:
        if self.text[self.pos : self.pos + 3] != "eau":
            return False
        if not rules.is_monophthong_eau(self.ctx, self.pos):
            return False
        self.pending = TENGWAR["right-curl"]
        self.pos += 3
        return True

    def diphthong(self) -> bool:
        pos = self.pos
        if self.text[pos] not in _VOWELS or not rules.is_diphthong(self.ctx, pos):
            return False
        first, second = self.text[pos], self.text[pos + 1]
        emit = _DIPHTHONG_EMITTERS.get(second)
        if emit is None:
            return False
        self.flush_on_carrier()
        self.push(*emit(TEHTAR[first]))
        self.pending = None
        self.pos += 2
        return True

    def cluster(self) -> bool:
        text, pos, ctx = self.text, self.pos, self.ctx
        for size in (3, 2):
            if pos + size > len(text):
                continue
            gram = text[pos : pos + size]
            if gram == "ng":
                if rules.is_ng_digraph(ctx, pos):
                    self.push(CONSONANTS["ng"])
                    self.pos += 2
                else:
                    # n だけ出力し、g は次の反復で処理する
                    self.push(CONSONANTS["n"])
                    self.pos += 1
                return True
            if gram == "nc" and not rules.is_soft_c(ctx, pos + 1):
                self.push(CONSONANTS["nk"])
                self.pos += 2
                return True
            if gram == "nch":
                if self.pending is not None:
                    # 保留中の母音を n に載せるため n と ch に分ける
                    self.push(CONSONANTS["n"])
                    self.pos += 1
                else:
                    self.push(CONSONANTS["nch"])
                    self.pos += 3
                return True
            if gram in CONSONANTS:
                # nth / mph は nt / mp にまとめない
                if gram in ("nt", "mp") and text[pos + 2 : pos + 3] == "h":
                    return False
                self.push(CONSONANTS[gram])
                self.pos += size
                return True
        return False

    def doubled(self) -> bool:
        text, pos = self.text, self.pos
        char = text[pos]
        if char in _VOWELS or pos == 0:
            return False
        prev = text[pos - 1]
        if not (char == prev or (char == "k" and prev == "c")):
            return False
        if char == "c" and prev == "c":
            if rules.is_soft_c(self.ctx, pos) != rules.is_soft_c(self.ctx, pos - 1):
                return False
        self.push(TENGWAR["doubler"])
        self.pos += 1
        return True

    # --- 1文字の判定。True を返したら保留テフタの出力を次の文字まで遅らせる ---

    def letter_vowel(self, char: str) -> bool:
        self.flush_on_carrier()
        self.pending = TEHTAR[char]
        self.pos += 1
        return True

    def letter_e(self, char: str) -> bool:
        pos = self.pos
        if pos < len(self.text) - 1 and rules.is_silent_e_in_middle(self.ctx, pos):
            self.push(TENGWAR["dot-below"])
            self.pos += 1
            return False
        return self.letter_vowel(char)

    def letter_c(self, char: str) -> bool:
        if rules.is_soft_c(self.ctx, self.pos):
            self.push(TENGWAR["silme-nuquerna"])
        else:
            self.push(CONSONANTS["c"])
        self.pos += 1
        return False

    def letter_y(self, char: str) -> bool:
        pos = self.pos
        if rules.is_consonant_y(self.ctx, pos):
            self.push(CONSONANTS["y"])
            self.pos += 1
            return False
        kind = rules.y_vowel_type(self.ctx, pos)
        self.flush_on_carrier()
        self.pos += 1
        if kind == "long":
            self.pending = TENGWAR["caron"]
            return True
        self.push(TENGWAR["two-dots-below"])
        return False

    def letter_r(self, char: str) -> bool:
        if rules.is_postvocalic_r(self.ctx, self.pos):
            self.push(TENGWAR["oore"])
        else:
            self.push(CONSONANTS["r"])
        self.pos += 1
        return False

    def letter_s(self, char: str) -> bool:
        if rules.is_hard_s(self.ctx, self.pos):
            self.push(CONSONANTS["z"])
        else:
            self.push(CONSONANTS["s"])
        self.pos += 1
        return False

    def letter_default(self, char: str) -> bool:
        # 表に無い文字（数字・記号など）はそのまま出力する
        self.push(CONSONANTS.get(char, char))
        self.pos += 1
        return False

    def letter(self, char: str) -> bool:
        handler = _LETTER_HANDLERS.get(char, _Scan.letter_default)
        return handler(self, char)

    def finish(self) -> str:
        if rules.has_trailing_silent_e(self.ctx) and (not self.out or self.out[-1] != TENGWAR["dot-below"]):
            self.push(TENGWAR["dot-below"])
        elif self.pending is not None:
            if self.pending != TENGWAR["two-dots-below"]:
                self.push(TENGWAR["telco"])
            self.push(self.pending)
            self.pending = None
        return "".join(self.out)

    def run(self) -> str:
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if char == "'":
                # 短縮形のアポストロフィは幅ゼロとして読み飛ばす
                self.pos += 1
                continue
            if self.monophthong_eau() or self.diphthong():
                continue
            if not self.cluster() and not self.doubled():
                if self.letter(char):
                    continue
            self.flush_after_step()
        return self.finish()


# 第2母音 -> 出力（第1母音のテフタを受け取る）
_DIPHTHONG_EMITTERS: dict[str, Callable[[str], tuple[str, ...]]] = {
    "a": lambda tehta: (TENGWAR["osse"], tehta),
    "e": lambda tehta: (TENGWAR["telco"], tehta, TENGWAR["dot-below"]),
    "i": lambda tehta: (CONSONANTS["y"], tehta),
    "u": lambda tehta: (CONSONANTS["w"], tehta),
    "o": lambda tehta: (TENGWAR["telco"], tehta, TENGWAR["right-curl"]),
}

_LETTER_HANDLERS: dict[str, Callable[[_Scan, str], bool]] = {
    "a": _Scan.letter_vowel,
    "i": _Scan.letter_vowel,
    "o": _Scan.letter_vowel,
    "u": _Scan.letter_vowel,
    "e": _Scan.letter_e,
    "c": _Scan.letter_c,
    "y": _Scan.letter_y,
    "r": _Scan.letter_r,
    "s": _Scan.letter_s,
}


class TengwarTranscriber:
    """Transcribe single English words into Annatar font code strings.

    発音辞書とメモ化キャッシュは注入可能（テストでは固定の辞書と新しいキャッシュを渡す）。
    `cache=None` を渡すとメモ化しない。
    """

    def __init__(
        self,
        dictionary: PronunciationDictionary | None = None,
        cache: TranscriptionCache | None = None,
        *,
        debug: bool | None = None,
    ) -> None:
        self.dictionary = dictionary if dictionary is not None else get_pronunciation_dictionary()
        self.cache = cache
        self.debug = settings.transcription_debug if debug is None else debug

    @staticmethod
    def normalize(word: str) -> str:
        return strip_diacritics(to_american_spelling(word))

    def pronunciation_for(self, normalized: str) -> tuple[str, ...] | None:
        raw = self.dictionary.lookup(normalized.lower())
        phonemes = parse_pronunciation(raw)
        if raw and phonemes is None:
            logger.warning("pronunciation_malformed", word=normalized, raw=raw)
        return phonemes

    def context_for(self, word: str) -> WordContext:
        normalized = self.normalize(word)
        pronunciation = self.pronunciation_for(normalized)
        processed = remove_silent_letters(normalized.lower())
        return WordContext.build(processed, pronunciation)

    def transcribe(self, word: str) -> str:
        if self.cache is not None:
            cached = self.cache.get(word)
            if cached is not None:
                return cached

        special = SPECIAL_WORDS.get(word.lower())
        if special is not None:
            return special

        ctx = self.context_for(word)
        if self.debug:
            logger.debug(
                "transcription_alignment",
                word=word,
                processed=ctx.text,
                pronunciation=list(ctx.pronunciation) if ctx.pronunciation else None,
                alignment=[entry.to_dict() if entry else None for entry in ctx.alignment],
            )

        output = _Scan(ctx).run()
        if self.cache is not None:
            self.cache.set(word, output)
        return output

    def explain(self, word: str) -> dict[str, Any]:
        """Return the intermediate steps for diagnostics (no caching)."""
        normalized = self.normalize(word)
        pronunciation = self.pronunciation_for(normalized)
        processed = remove_silent_letters(normalized.lower())
        entries = align_letters_to_phonemes(processed, pronunciation)
        return {
            "word": word,
            "normalized": processed,
            "pronunciation": list(pronunciation) if pronunciation else None,
            "alignment": [entry.to_dict() for entry in entries] if entries is not None else None,
            "tengwar": self.transcribe(word),
        }


_transcriber: TengwarTranscriber | None = None
_transcriber_lock = threading.Lock()


def get_transcriber() -> TengwarTranscriber:
    """Return the process-wide transcriber, creating it from settings on first use."""
    global _transcriber
    with _transcriber_lock:
        if _transcriber is None:
            cache = TranscriptionCache() if settings.transcription_cache_enabled else None
            _transcriber = TengwarTranscriber(cache=cache)
        return _transcriber


def reset_transcriber(transcriber: TengwarTranscriber | None = None) -> None:
    """Replace (or drop) the process-wide transcriber; used by tests."""
    global _transcriber
    with _transcriber_lock:
        _transcriber = transcriber


def transcribe_to_tengwar(word: str) -> str:
    return get_transcriber().transcribe(word)
