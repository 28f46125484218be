from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from ..config import settings
from ..fragments import process_batch
from ..logging import logger
from ..metrics import registry
from ..models.transcription import (
    AlignmentResponse,
    BatchRequest,
    BatchResponse,
    TranscribedWord,
    TranscribeRequest,
    TranscribeResponse,
)
from ..transcriber import get_transcriber


router = APIRouter(prefix="/api", tags=["transcribe"])


@router.post("/transcribe", response_model=TranscribeResponse)
def transcribe_words(req: TranscribeRequest) -> TranscribeResponse:
    """Transcribe each word independently.

    1語ずつ変換する。複数語のフレーズを渡したい場合は `/api/transcribe/batch` を使う。
    """
    transcriber = get_transcriber()
    results = [TranscribedWord(word=w, tengwar=transcriber.transcribe(w)) for w in req.words]
    registry.record_words(len(results))
    return TranscribeResponse(results=results)


@router.post("/transcribe/batch", response_model=BatchResponse)
def transcribe_batch(req: BatchRequest) -> BatchResponse:
    """Split each text into fragments and transcribe the words.

    入力サイズは設定値（BATCH_MAX_TEXTS / BATCH_MAX_CHARS）で制限し、超過時は 422 を返す。
    """
    if len(req.texts) > settings.batch_max_texts:
        logger.warning("batch_rejected", reason="too_many_texts", count=len(req.texts))
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"at most {settings.batch_max_texts} texts per request",
        )
    oversized = [i for i, text in enumerate(req.texts) if len(text) > settings.batch_max_chars]
    if oversized:
        logger.warning("batch_rejected", reason="text_too_long", indexes=oversized)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"texts must be at most {settings.batch_max_chars} characters",
        )
    results = process_batch(req.texts, get_transcriber())
    registry.record_batch(results)
    logger.info(
        "batch_transcribed",
        texts=len(req.texts),
        fragments=sum(len(fragments) for fragments in results),
    )
    return BatchResponse(results=results)


@router.get("/align/{word}", response_model=AlignmentResponse)
def align_word(word: str) -> AlignmentResponse:
    """Diagnostics: pronunciation, alignment and output for one word."""
    if not word.strip():
        raise HTTPException(status_code=400, detail="word is required")
    return AlignmentResponse(**get_transcriber().explain(word))
