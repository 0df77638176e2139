"""Cursor arithmetic over text, using UTF-8 byte offsets.

Every function takes the text and a cursor position given as a byte offset
into the UTF-8 encoding of the text, and returns a byte offset or range.
"""

from __future__ import annotations

from itertools import pairwise
from typing import NamedTuple

from ledline.segment import (
    grapheme_indices,
    is_whitespace_str,
    utf8_len,
    word_bound_indices,
)


class TextRange(NamedTuple):
    """Half-open byte range ``[start, end)``."""

    start: int
    end: int


def _encode(text: str, pos: int) -> bytes:
    data = text.encode("utf-8")
    if not 0 <= pos <= len(data):
        raise IndexError(f"position {pos} outside text of {len(data)} bytes")
    return data


def _decode(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError("position is not on a character boundary") from exc


def _prefix(text: str, pos: int) -> str:
    return _decode(_encode(text, pos)[:pos])


def _suffix(text: str, pos: int) -> str:
    return _decode(_encode(text, pos)[pos:])


def _last_grapheme_start(text: str) -> int:
    last = 0
    for index, _ in grapheme_indices(text):
        last = index
    return last


def find_current_line_end(text: str, pos: int) -> int:
    """Offset where the current line ends: the newline (or its ``\\r``) or the end."""
    data = _encode(text, pos)
    index = data.find(b"\n", pos)
    if index < 0:
        return len(data)
    if index > 0 and data[index - 1] == ord("\r"):
        return index - 1
    return index


def grapheme_right_index(text: str, pos: int) -> int:
    """Offset behind the grapheme right of ``pos``."""
    graphemes = grapheme_indices(_suffix(text, pos))
    next(graphemes, None)
    following = next(graphemes, None)
    if following is None:
        return utf8_len(text)
    return pos + following[0]


def grapheme_left_index(text: str, pos: int) -> int:
    """Offset in front of the grapheme left of ``pos``."""
    return _last_grapheme_start(_prefix(text, pos))


def word_right_index(text: str, pos: int) -> int:
    """Offset behind the next word to the right."""
    for index, word in word_bound_indices(_suffix(text, pos)):
        if not is_whitespace_str(word):
            return pos + index + utf8_len(word)
    return utf8_len(text)


def big_word_right_index(text: str, pos: int) -> int:
    """Offset behind the next WORD (whitespace-delimited) to the right."""
    found_ws = False
    for index, word in word_bound_indices(_suffix(text, pos)):
        blank = is_whitespace_str(word)
        found_ws = found_ws or blank
        if found_ws and not blank:
            return pos + index + utf8_len(word)
    return utf8_len(text)


def word_right_end_index(text: str, pos: int) -> int:
    """Offset on the last grapheme of the next word to the right."""
    for index, word in word_bound_indices(_suffix(text, pos)):
        candidate = pos + index + _last_grapheme_start(word)
        if not is_whitespace_str(word) and candidate != pos:
            return candidate
    return _last_grapheme_start(text)


def big_word_right_end_index(text: str, pos: int) -> int:
    """Offset on the last grapheme of the next WORD to the right."""
    segments = word_bound_indices(_suffix(text, pos))
    for (prev_index, prev_word), (_, word) in pairwise(segments):
        if is_whitespace_str(word):
            candidate = pos + prev_index + _last_grapheme_start(prev_word)
            if candidate != pos:
                return candidate
    return _last_grapheme_start(text)


def word_right_start_index(text: str, pos: int) -> int:
    """Offset in front of the next word to the right."""
    for index, word in word_bound_indices(_suffix(text, pos)):
        if index != 0 and not is_whitespace_str(word):
            return pos + index
    return utf8_len(text)


def big_word_right_start_index(text: str, pos: int) -> int:
    """Offset in front of the next WORD to the right."""
    found_ws = False
    for index, word in word_bound_indices(_suffix(text, pos)):
        blank = is_whitespace_str(word)
        found_ws = found_ws or (index != 0 and blank)
        if found_ws and index != 0 and not blank:
            return pos + index
    return utf8_len(text)


def _last_word_start(text: str) -> int:
    last = 0
    for index, word in word_bound_indices(text):
        if not is_whitespace_str(word):
            last = index
    return last


def word_left_index(text: str, pos: int) -> int:
    """Offset in front of the next word to the left."""
    return _last_word_start(_prefix(text, pos))


def big_word_left_index(text: str, pos: int) -> int:
    """Offset in front of the next WORD to the left."""
    start: int | None = None
    for index, word in word_bound_indices(_prefix(text, pos)):
        if is_whitespace_str(word):
            start = None
        elif start is None:
            start = index
    return 0 if start is None else start


def next_whitespace(text: str, pos: int) -> int:
    """Offset of the next whitespace segment after the one at ``pos``."""
    for index, word in word_bound_indices(_suffix(text, pos)):
        if index != 0 and is_whitespace_str(word):
            return pos + index
    return utf8_len(text)


def current_word_range(text: str, pos: int) -> TextRange:
    """Range of the word at or after ``pos``."""
    right = word_right_index(text, pos)
    left = _last_word_start(_prefix(text, right))
    return TextRange(left, right)


def current_line_range(text: str, pos: int) -> TextRange:
    """Range of the current line, including its terminating newline."""
    data = _encode(text, pos)
    newline_before = data.rfind(b"\n", 0, pos)
    left = newline_before + 1
    newline_after = data.find(b"\n", pos)
    right = len(data) if newline_after < 0 else newline_after + 1
    return TextRange(left, right)