"""Pytest configuration shared by the transcription tests."""

import os

# CMU 辞書の読み込みはテスト全体では不要なため、既定では発音辞書を無効にする。
# 発音が必要なテストは固定の辞書（PUBLISHED_PRONUNCIATIONS）を注入する。
os.environ.setdefault("PRONUNCIATION_SOURCE", "none")
os.environ.setdefault("TRANSCRIPTION_DEBUG", "false")

import pytest

from tengwar.cache import TranscriptionCache
from tengwar.pronunciation import StaticPronunciationDictionary
from tengwar.transcriber import TengwarTranscriber, reset_transcriber


# CMU Pronouncing Dictionary の先頭発音（テストが辞書の版差に左右されないよう固定）
PUBLISHED_PRONUNCIATIONS = {
    "able": "EY1 B AH0 L",
    "accident": "AE1 K S AH0 D AH0 N T",
    "account": "AH0 K AW1 N T",
    "acknowledge": "AE0 K N AA1 L IH0 JH",
    "ancient": "EY1 N CH AH0 N T",
    "beautiful": "B Y UW1 T AH0 F AH0 L",
    "build": "B IH1 L D",
    "bureau": "B Y UH1 R OW0",
    "cafe": "K AH0 F EY1",
    "cake": "K EY1 K",
    "carry": "K AE1 R IY0",
    "employee": "EH0 M P L OY1 IY0",
    "europe": "Y UH1 R AH0 P",
    "explore": "IH0 K S P L AO1 R",
    "finally": "F AY1 N AH0 L IY0",
    "firearm": "F AY1 ER0 AA2 R M",
    "heart": "HH AA1 R T",
    "iraq": "IH0 R AA1 K",
    "know": "N OW1",
    "lactase": "L AE1 K T EY2 S",
    "mysterious": "M IH0 S T IH1 R IY0 AH0 S",
    "ocean": "OW1 SH AH0 N",
    "ongoing": "AA1 N G OW2 IH0 NG",
    "perhaps": "P ER0 HH AE1 P S",
    "pneumonia": "N UW0 M OW1 N Y AH0",
    "psychology": "S AY0 K AA1 L AH0 JH IY0",
    "purr": "P ER1",
    "rhyme": "R AY1 M",
    "rifle": "R AY1 F AH0 L",
    "scene": "S IY1 N",
    "science": "S AY1 AH0 N S",
    "social": "S OW1 SH AH0 L",
    "syria": "S IH1 R IY0 AH0",
    "treasure": "T R EH1 ZH ER0",
    "tree": "T R IY1",
    "unknown": "AH0 N N OW1 N",
    "vanquish": "V AE1 NG K W IH0 SH",
}


@pytest.fixture(autouse=True)
def _reset_global_transcriber():
    """モジュール共有の変換器とキャッシュをテストごとに破棄する。"""

    reset_transcriber()
    yield
    reset_transcriber()


@pytest.fixture()
def transcriber() -> TengwarTranscriber:
    """Transcriber backed by the fixed published pronunciations."""

    return TengwarTranscriber(
        StaticPronunciationDictionary(PUBLISHED_PRONUNCIATIONS),
        TranscriptionCache(),
        debug=False,
    )


@pytest.fixture()
def spelling_only_transcriber() -> TengwarTranscriber:
    """Transcriber without pronunciation data (spelling heuristics only)."""

    return TengwarTranscriber(StaticPronunciationDictionary(), TranscriptionCache(), debug=False)
