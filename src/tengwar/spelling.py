"""Spelling normalization before pronunciation lookup.

変換前の綴り正規化をまとめる。
- `to_american_spelling`: 英綴りを米綴りに寄せ、"colour" と "color" を同じ変換結果にする
- `strip_diacritics`: 結合文字を除去して "café" を "cafe" として扱う
- `remove_silent_letters`: 黙字（psychology の p、know の k など）を落とす
"""

from __future__ import annotations

import re
import unicodedata
from functools import lru_cache

from breame.spelling import american_spelling_exists, get_american_spelling


# 英綴り -> 米綴り（語単位）の上書き表。breame より先に引く。
# 屈折形（-s, -ed, -ing, -ful, -ation など）は `_convert_inflected` で語幹に戻して引く。
_UK_TO_US: dict[str, str] = {
    "aeroplane": "airplane",
    "aluminium": "aluminum",
    "analyse": "analyze",
    "apologise": "apologize",
    "armour": "armor",
    "behaviour": "behavior",
    "catalogue": "catalog",
    "centre": "center",
    "cheque": "check",
    "colour": "color",
    "coloured": "colored",
    "defence": "defense",
    "dialogue": "dialog",
    "endeavour": "endeavor",
    "favour": "favor",
    "favourite": "favorite",
    "fibre": "fiber",
    "flavour": "flavor",
    "grey": "gray",
    "harbour": "harbor",
    "honour": "honor",
    "humour": "humor",
    "jewellery": "jewelry",
    "labour": "labor",
    "licence": "license",
    "litre": "liter",
    "manoeuvre": "maneuver",
    "metre": "meter",
    "neighbour": "neighbor",
    "odour": "odor",
    "offence": "offense",
    "organise": "organize",
    "paediatric": "pediatric",
    "plough": "plow",
    "practise": "practice",
    "programme": "program",
    "realise": "realize",
    "recognise": "recognize",
    "rumour": "rumor",
    "savour": "savor",
    "sceptical": "skeptical",
    "theatre": "theater",
    "travelled": "traveled",
    "travelling": "traveling",
    "tyre": "tire",
    "vapour": "vapor",
}

_TOKEN_RE = re.compile(r"[A-Za-z']+")

# 語幹 + 接尾辞。語幹側は英綴りの基本形として辞書で引き直す。
_OUR_FORM_RE = re.compile(
    r"^(?P<stem>[a-z]+our)(?P<suffix>s|ed|ing|ful|fully|able|ably|ite|ites|less|ers?)$"
)
_ISE_FORM_RE = re.compile(r"^(?P<stem>[a-z]+[iy])s(?P<suffix>es|ed|ing|ers?|ations?|able)$")
_RE_FORM_RE = re.compile(r"^(?P<stem>[a-z]+)(?:re(?P<plural>s)|r(?P<suffix>ed|ing))$")


def _match_case(source: str, target: str) -> str:
    if source.isupper() and len(source) > 1:
        return target.upper()
    if source[:1].isupper():
        return target[:1].upper() + target[1:]
    return target


def _lookup_base(word: str) -> str | None:
    american = _UK_TO_US.get(word)
    if american is not None:
        return american
    if american_spelling_exists(word):
        american = get_american_spelling(word)
        if american and american != word:
            return american
    return None


def _convert_inflected(lower: str) -> str | None:
    if lower.endswith("s"):
        singular = _lookup_base(lower[:-1])
        if singular is not None:
            return singular + "s"

    match = _OUR_FORM_RE.match(lower)
    if match:
        base = _lookup_base(match["stem"])
        if base is not None:
            return base + match["suffix"]

    # organisation -> organise -> organize -> organiz + ation
    match = _ISE_FORM_RE.match(lower)
    if match:
        base = _lookup_base(match["stem"] + "se")
        if base is not None and base.endswith("e"):
            return base[:-1] + match["suffix"]

    # centred -> centre -> center + ed, centres -> centers
    match = _RE_FORM_RE.match(lower)
    if match:
        base = _lookup_base(match["stem"] + "re")
        if base is not None and base.endswith("er"):
            return base + (match["plural"] or match["suffix"])
    return None


@lru_cache(maxsize=4096)
def _convert_token(token: str) -> str:
    lower = token.lower()
    american = _lookup_base(lower)
    if american is None:
        american = _convert_inflected(lower)
    if american is None or american == lower:
        return token
    return _match_case(token, american)


def to_american_spelling(text: str) -> str:
    """Replace British spellings with their American counterparts word by word."""
    return _TOKEN_RE.sub(lambda match: _convert_token(match.group(0)), text)


def strip_diacritics(text: str) -> str:
    # NFD で分解して結合文字（Mn）を落とし、NFC に戻す
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return unicodedata.normalize("NFC", stripped)


_SILENT_PREFIXES = (
    re.compile(r"^p(?=[stn])"),  # psychology, pterodactyl, pneumonia
    re.compile(r"k(?=n)"),  # know, knight, unknown
    re.compile(r"^w(?=r)"),  # write, wrong
)


def remove_silent_letters(word: str) -> str:
    """Drop known silent letters (leading p and w, k before n) from a lowercase word.

    "ckn" は先に "ccn" へ書き換える（acknowledge の c/k を重子音として扱うため）。
    """
    processed = re.sub(r"c(k(?=n))", "cc", word)
    for pattern in _SILENT_PREFIXES:
        processed = pattern.sub("", processed, count=1)
    return processed
