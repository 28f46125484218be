"""テキストの断片分割とバッチ変換を検証するテスト群。"""

from tengwar.fragments import process_batch, split_into_fragments
from tengwar.mappings import SPECIAL_WORDS
from tengwar.transcriber import TengwarTranscriber


def test_words_and_punctuation_are_split(spelling_only_transcriber: TengwarTranscriber) -> None:
    fragments = split_into_fragments("Hello, world!", spelling_only_transcriber)

    assert [(f.is_tengwar, f.original) for f in fragments] == [
        (True, "Hello"),
        (False, None),
        (True, "world"),
        (False, None),
    ]
    assert fragments[1].text == ", "
    assert fragments[3].text == "!"
    assert fragments[0].text == spelling_only_transcriber.transcribe("Hello")


def test_of_the_becomes_single_idiom(spelling_only_transcriber: TengwarTranscriber) -> None:
    fragments = split_into_fragments("top of  the hill", spelling_only_transcriber)

    idiom = fragments[2]
    assert idiom.is_tengwar
    assert idiom.original == "of  the"
    assert idiom.text == SPECIAL_WORDS["ofthe"]
    assert [f.original for f in fragments if f.is_tengwar] == ["top", "of  the", "hill"]


def test_of_without_the_stays_separate(spelling_only_transcriber: TengwarTranscriber) -> None:
    fragments = split_into_fragments("often the roof", spelling_only_transcriber)
    assert [f.original for f in fragments if f.is_tengwar] == ["often", "the", "roof"]


def test_contractions_and_accents_stay_whole(spelling_only_transcriber: TengwarTranscriber) -> None:
    fragments = split_into_fragments("don't café", spelling_only_transcriber)
    assert [f.original for f in fragments if f.is_tengwar] == ["don't", "café"]


def test_digits_pass_through(spelling_only_transcriber: TengwarTranscriber) -> None:
    fragments = split_into_fragments("3 cats", spelling_only_transcriber)

    assert fragments[0].text == "3 "
    assert fragments[0].is_tengwar is False
    assert fragments[1].original == "cats"


def test_empty_text_has_no_fragments(spelling_only_transcriber: TengwarTranscriber) -> None:
    assert split_into_fragments("", spelling_only_transcriber) == []


def test_process_batch_preserves_order(spelling_only_transcriber: TengwarTranscriber) -> None:
    results = process_batch(["a cat", "", "the end"], spelling_only_transcriber)

    assert len(results) == 3
    assert results[0][0].text == SPECIAL_WORDS["a"]
    assert results[1] == []
    assert results[2][0].text == SPECIAL_WORDS["the"]
