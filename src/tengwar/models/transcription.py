from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TranscribeRequest(BaseModel):
    """Request body for ``POST /api/transcribe``."""

    model_config = ConfigDict(extra="ignore")

    words: list[str] = Field(min_length=1, description="単語の配列（1語ずつ変換）")


class TranscribedWord(BaseModel):
    word: str
    tengwar: str


class TranscribeResponse(BaseModel):
    results: list[TranscribedWord]


class TextFragment(BaseModel):
    """A piece of running text, either transcribed or passed through.

    `is_tengwar=True` の断片は `text` がフォントコード列で、`original` に元の綴りを持つ。
    それ以外（空白・句読点・数字など）は入力をそのまま `text` に保持する。
    """

    text: str
    is_tengwar: bool
    original: str | None = None


class BatchRequest(BaseModel):
    """Request body for ``POST /api/transcribe/batch``."""

    model_config = ConfigDict(extra="ignore")

    texts: list[str] = Field(description="テキストノード単位の文字列配列")


class BatchResponse(BaseModel):
    results: list[list[TextFragment]]


class AlignmentItem(BaseModel):
    letters: str
    start_index: int
    end_index: int
    phoneme: str | None = None
    is_silent: bool = False
    is_guess: bool = False
    pattern: str | None = None
    is_missing_letter: bool = False


class AlignmentResponse(BaseModel):
    """Diagnostic view of how a word was normalized, pronounced and aligned."""

    word: str
    normalized: str
    pronunciation: list[str] | None = None
    alignment: list[AlignmentItem] | None = None
    tengwar: str
