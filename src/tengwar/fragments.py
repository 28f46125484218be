"""Split running text into transcribed word fragments and passthrough pieces.

テキストノード単位の文字列を「単語（テングワールに変換）」と「それ以外（空白・
句読点・数字など、そのまま保持）」の断片列に分ける。"of the" は1語の定型
（"ofthe"）として扱う。
"""

from __future__ import annotations

import re
from typing import Iterable

from .models.transcription import TextFragment
from .transcriber import TengwarTranscriber, get_transcriber


# 単語: 文字の連続（アポストロフィで連結可）。"of the" は先に照合する。
_TOKEN_RE = re.compile(
    r"(?P<ofthe>\b[Oo][Ff]\s+[Tt][Hh][Ee]\b)|(?P<word>[^\W\d_]+(?:'[^\W\d_]+)*)"
)


def split_into_fragments(
    text: str, transcriber: TengwarTranscriber | None = None
) -> list[TextFragment]:
    transcriber = transcriber or get_transcriber()
    fragments: list[TextFragment] = []
    cursor = 0
    for match in _TOKEN_RE.finditer(text):
        start, end = match.span()
        if start > cursor:
            fragments.append(TextFragment(text=text[cursor:start], is_tengwar=False))
        original = match.group(0)
        key = "ofthe" if match.group("ofthe") else original
        fragments.append(
            TextFragment(text=transcriber.transcribe(key), is_tengwar=True, original=original)
        )
        cursor = end
    if cursor < len(text):
        fragments.append(TextFragment(text=text[cursor:], is_tengwar=False))
    return fragments


def process_batch(
    texts: Iterable[str], transcriber: TengwarTranscriber | None = None
) -> list[list[TextFragment]]:
    """Transcribe every text independently, preserving order."""
    transcriber = transcriber or get_transcriber()
    return [split_into_fragments(text, transcriber) for text in texts]
