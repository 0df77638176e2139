"""Unicode text segmentation with UTF-8 byte offsets.

Grapheme clusters follow the extended rules; word boundaries follow the
default word boundary rules of UAX #29. All offsets are byte offsets into
the UTF-8 encoding of the text.
"""

from __future__ import annotations

import functools
from collections.abc import Iterator

import regex

_GRAPHEME = regex.compile(r"\X")
_WHITESPACE = regex.compile(r"\p{White_Space}*")
_PICTOGRAPHIC = regex.compile(r"\p{Extended_Pictographic}")

_WORD_BREAK_NAMES = (
    "CR",
    "LF",
    "Newline",
    "Extend",
    "ZWJ",
    "Regional_Indicator",
    "Format",
    "Katakana",
    "Hebrew_Letter",
    "ALetter",
    "Single_Quote",
    "Double_Quote",
    "MidNumLet",
    "MidLetter",
    "MidNum",
    "Numeric",
    "ExtendNumLet",
    "WSegSpace",
)
_WORD_BREAK_PATTERNS = {
    name: regex.compile(r"\p{Word_Break=%s}" % name) for name in _WORD_BREAK_NAMES
}

_NEWLINES = frozenset({"CR", "LF", "Newline"})
_IGNORABLE = frozenset({"Extend", "Format", "ZWJ"})
_AHLETTER = frozenset({"ALetter", "Hebrew_Letter"})
_MID_LETTER_Q = frozenset({"MidLetter", "MidNumLet", "Single_Quote"})
_MID_NUM_Q = frozenset({"MidNum", "MidNumLet", "Single_Quote"})
_WORDLIKE = frozenset({"ALetter", "Hebrew_Letter", "Numeric", "Katakana"})


def utf8_len(text: str) -> int:
    """Length of ``text`` in UTF-8 bytes."""
    return len(text.encode("utf-8"))


def is_whitespace_str(text: str) -> bool:
    """True when every character of ``text`` is whitespace (vacuously for "")."""
    return _WHITESPACE.fullmatch(text) is not None


def grapheme_indices(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(byte_offset, grapheme)`` for each extended grapheme cluster."""
    offset = 0
    for match in _GRAPHEME.finditer(text):
        grapheme = match.group()
        yield offset, grapheme
        offset += utf8_len(grapheme)


@functools.lru_cache(maxsize=8192)
def _word_break(ch: str) -> str:
    for name, pattern in _WORD_BREAK_PATTERNS.items():
        if pattern.match(ch):
            return name
    return "Other"


@functools.lru_cache(maxsize=8192)
def _is_pictographic(ch: str) -> bool:
    return _PICTOGRAPHIC.match(ch) is not None


def _skip_back(classes: list[str], j: int) -> int:
    """Index of the unit base owning position ``j`` (rule WB4), or -1."""
    while j > 0 and classes[j] in _IGNORABLE and classes[j - 1] not in _NEWLINES:
        j -= 1
    return j


def _skip_forward(classes: list[str], k: int) -> str | None:
    while k < len(classes) and classes[k] in _IGNORABLE:
        k += 1
    return classes[k] if k < len(classes) else None


def _is_break(classes: list[str], pictographic: list[bool], i: int) -> bool:
    prev, cur = classes[i - 1], classes[i]
    if prev == "CR" and cur == "LF":
        return False
    if prev in _NEWLINES or cur in _NEWLINES:
        return True
    if prev == "ZWJ" and pictographic[i]:
        return False
    if prev == "WSegSpace" and cur == "WSegSpace":
        return False
    if cur in _IGNORABLE:
        return False

    base = _skip_back(classes, i - 1)
    before = classes[base]
    after = _skip_forward(classes, i + 1)
    earlier_index = _skip_back(classes, base - 1) if base > 0 else -1
    earlier = classes[earlier_index] if earlier_index >= 0 else None

    if before in _AHLETTER and cur in _AHLETTER:
        return False
    if before in _AHLETTER and cur in _MID_LETTER_Q and after in _AHLETTER:
        return False
    if earlier in _AHLETTER and before in _MID_LETTER_Q and cur in _AHLETTER:
        return False
    if before == "Hebrew_Letter" and cur == "Single_Quote":
        return False
    if before == "Hebrew_Letter" and cur == "Double_Quote" and after == "Hebrew_Letter":
        return False
    if earlier == "Hebrew_Letter" and before == "Double_Quote" and cur == "Hebrew_Letter":
        return False
    if before == "Numeric" and cur == "Numeric":
        return False
    if before in _AHLETTER and cur == "Numeric":
        return False
    if before == "Numeric" and cur in _AHLETTER:
        return False
    if earlier == "Numeric" and before in _MID_NUM_Q and cur == "Numeric":
        return False
    if before == "Numeric" and cur in _MID_NUM_Q and after == "Numeric":
        return False
    if before == "Katakana" and cur == "Katakana":
        return False
    if (before in _WORDLIKE or before == "ExtendNumLet") and cur == "ExtendNumLet":
        return False
    if before == "ExtendNumLet" and cur in _WORDLIKE:
        return False
    if before == "Regional_Indicator" and cur == "Regional_Indicator":
        run = 0
        k = base
        while k >= 0 and classes[k] == "Regional_Indicator":
            run += 1
            k = _skip_back(classes, k - 1) if k > 0 else -1
        if run % 2 == 1:
            return False
    return True


def word_bound_indices(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(byte_offset, segment)`` for each UAX #29 word-bounded segment."""
    if not text:
        return
    classes = [_word_break(ch) for ch in text]
    pictographic = [_is_pictographic(ch) for ch in text]
    start = 0
    offset = 0
    for i in range(1, len(text)):
        if _is_break(classes, pictographic, i):
            segment = text[start:i]
            yield offset, segment
            offset += utf8_len(segment)
            start = i
    yield offset, text[start:]