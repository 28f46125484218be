"""1文字ごとの判定規則（c/y/r/s/e/ng/二重母音）を個別に検証するテスト群。"""

import pytest

from tengwar import heuristics as rules
from tengwar.heuristics import WordContext
from tengwar.models.alignment import AlignmentEntry


def _ctx(word: str, pronunciation: str | None = None) -> WordContext:
    return WordContext.build(word, pronunciation.split() if pronunciation else None)


def test_context_densifies_alignment() -> None:
    ctx = _ctx("cake", "K EY1 K")

    assert ctx.length == 4
    assert [entry.phoneme if entry else None for entry in ctx.alignment] == ["K", "EY1", "K", None]
    assert ctx.char(-1) == "" and ctx.char(4) == ""
    assert ctx.entry(10) is None


def test_context_without_pronunciation_has_empty_alignment() -> None:
    ctx = _ctx("cake")
    assert ctx.pronunciation is None
    assert ctx.alignment == (None, None, None, None)


@pytest.mark.parametrize(
    "word, pronunciation, pos, expected",
    [
        ("cell", None, 0, True),
        ("cat", None, 0, False),
        ("cake", "K EY1 K", 0, False),
        # 無音の c は直前の s で軟音と判定（science）
        ("science", "S AY1 AH0 N S", 1, True),
        ("science", "S AY1 AH0 N S", 5, True),
        # cc が K S に分かれる（accident）
        ("accident", "AE1 K S AH0 D AH0 N T", 1, False),
        ("accident", "AE1 K S AH0 D AH0 N T", 2, True),
    ],
)
def test_is_soft_c(word: str, pronunciation: str | None, pos: int, expected: bool) -> None:
    assert rules.is_soft_c(_ctx(word, pronunciation), pos) is expected


def test_silent_c_before_s_sound_is_soft() -> None:
    ctx = WordContext(
        text="ecs",
        pronunciation=("EH1", "S"),
        alignment=(
            AlignmentEntry("e", 0, 0, "EH1"),
            AlignmentEntry("c", 1, 1, None, is_silent=True),
            AlignmentEntry("s", 2, 2, "S"),
        ),
    )
    assert rules.is_soft_c(ctx, 1) is True


@pytest.mark.parametrize(
    "word, pronunciation, pos, expected",
    [
        ("yes", "Y EH1 S", 0, True),
        ("carry", "K AE1 R IY0", 4, False),
        ("toy", None, 2, True),
        ("gym", None, 1, False),
        # 無音の y は綴りで判定する（employee）
        ("employee", "EH0 M P L OY1 IY0", 5, True),
        ("mysterious", "M IH0 S T IH1 R IY0 AH0 S", 1, False),
    ],
)
def test_is_consonant_y(word: str, pronunciation: str | None, pos: int, expected: bool) -> None:
    assert rules.is_consonant_y(_ctx(word, pronunciation), pos) is expected


def test_y_vowel_type() -> None:
    ctx = _ctx("sychology", "S AY0 K AA1 L AH0 JH IY0")
    assert rules.y_vowel_type(ctx, 1) == "long"
    assert rules.y_vowel_type(ctx, 8) == "short"
    assert rules.y_vowel_type(_ctx("gym"), 1) == "short"


@pytest.mark.parametrize(
    "word, pronunciation, pos, expected",
    [
        ("heart", "HH AA1 R T", 3, True),
        ("rhyme", "R AY1 M", 0, False),
        ("purr", "P ER1", 2, True),
        # 無音の r に続く h は読み飛ばす
        ("perhaps", "P ER0 HH AE1 P S", 2, True),
        ("carry", "K AE1 R IY0", 2, False),
        ("explore", "IH0 K S P L AO1 R", 5, True),
        # 複合語中の "-re-" は ER を r 側で読む
        ("firearm", "F AY1 ER0 AA2 R M", 2, True),
        ("car", None, 2, True),
        ("red", None, 0, False),
    ],
)
def test_is_postvocalic_r(word: str, pronunciation: str | None, pos: int, expected: bool) -> None:
    assert rules.is_postvocalic_r(_ctx(word, pronunciation), pos) is expected


@pytest.mark.parametrize(
    "word, pronunciation, pos, expected",
    [
        ("lactase", "L AE1 K T EY2 S", 5, True),
        ("treasure", "T R EH1 ZH ER0", 4, True),
        ("sing", None, 0, False),
        ("perhaps", "P ER0 HH AE1 P S", 6, False),
    ],
)
def test_is_hard_s(word: str, pronunciation: str | None, pos: int, expected: bool) -> None:
    assert rules.is_hard_s(_ctx(word, pronunciation), pos) is expected


def test_is_silent_e_in_middle() -> None:
    assert rules.is_silent_e_in_middle(_ctx("lovely", "L AH1 V L IY0"), 3) is True
    # ER につながる e は発音される
    assert rules.is_silent_e_in_middle(_ctx("perhaps", "P ER0 HH AE1 P S"), 1) is False
    assert rules.is_silent_e_in_middle(_ctx("firearm", "F AY1 ER0 AA2 R M"), 3) is True
    # 語末は別規則
    assert rules.is_silent_e_in_middle(_ctx("cake", "K EY1 K"), 3) is False
    # 発音なしでは判定しない
    assert rules.is_silent_e_in_middle(_ctx("lovely"), 3) is False


@pytest.mark.parametrize(
    "word, pronunciation, expected",
    [
        ("cake", "K EY1 K", True),
        ("cafe", "K AH0 F EY1", False),
        ("able", "EY1 B AH0 L", True),
        ("make", None, True),
        ("tree", None, False),
        ("be", None, False),
        ("cat", "K AE1 T", False),
    ],
)
def test_has_trailing_silent_e(word: str, pronunciation: str | None, expected: bool) -> None:
    assert rules.has_trailing_silent_e(_ctx(word, pronunciation)) is expected


@pytest.mark.parametrize(
    "word, pronunciation, pos, expected",
    [
        ("build", "B IH1 L D", 1, True),
        ("science", "S AY1 AH0 N S", 2, False),
        ("syria", "S IH1 R IY0 AH0", 3, False),
        ("rain", None, 1, True),
        ("create", None, 2, False),
        ("cat", None, 1, False),
        ("idea", None, 3, False),
    ],
)
def test_is_diphthong(word: str, pronunciation: str | None, pos: int, expected: bool) -> None:
    assert rules.is_diphthong(_ctx(word, pronunciation), pos) is expected


def test_is_ng_digraph() -> None:
    assert rules.is_ng_digraph(_ctx("sing"), 2) is True
    assert rules.is_ng_digraph(_ctx("singer", "S IH1 NG ER0"), 2) is True
    # n と g が別々の音素なら分ける
    assert rules.is_ng_digraph(_ctx("engulf", "EH0 N G AH1 L F"), 1) is False
    # 発音が無ければ後続の母音で判断する
    assert rules.is_ng_digraph(_ctx("engulf"), 1) is True
    assert rules.is_ng_digraph(_ctx("angry"), 1) is False


def test_is_monophthong_eau() -> None:
    assert rules.is_monophthong_eau(_ctx("bureau", "B Y UH1 R OW0"), 3) is True
    assert rules.is_monophthong_eau(_ctx("beau"), 1) is True
    assert rules.is_monophthong_eau(_ctx("beautiful", "B Y UW1 T AH0 F AH0 L"), 1) is False
