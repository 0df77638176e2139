"""Editable multi-line text with a cursor kept as a UTF-8 byte offset."""

from __future__ import annotations

import dataclasses
import sys
from dataclasses import dataclass
from itertools import islice

from ledline import navigation as nav
from ledline.navigation import TextRange
from ledline.segment import grapheme_indices, is_whitespace_str, utf8_len


def _switch_ascii_case(ch: str) -> str:
    if "a" <= ch <= "z":
        return ch.upper()
    if "A" <= ch <= "Z":
        return ch.lower()
    return ch


@dataclass
class LineBuffer:
    """The entered line(s) plus the insertion point, a byte offset into ``text``."""

    text: str = ""
    insertion_point: int = 0

    @classmethod
    def from_text(cls, text: str) -> LineBuffer:
        """A buffer holding ``text`` with the cursor at its end."""
        buffer = cls()
        buffer.insert_str(text)
        return buffer

    def copy(self) -> LineBuffer:
        return dataclasses.replace(self)

    @property
    def _data(self) -> bytes:
        return self.text.encode("utf-8")

    def _slice(self, start: int, end: int | None = None) -> str:
        try:
            return self._data[start:end].decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError("range is not on character boundaries") from exc

    def is_empty(self) -> bool:
        return not self.text

    def is_valid(self) -> bool:
        """True when the cursor sits on a grapheme boundary inside the text."""
        data = self._data
        pos = self.insertion_point
        if not 0 <= pos <= len(data):
            return False
        if pos == len(data):
            return True
        if data[pos] & 0xC0 == 0x80:
            return False
        return any(index == pos for index, _ in grapheme_indices(self.text))

    def set_buffer(self, buffer: str) -> None:
        """Replace the text and move the cursor to its end."""
        self.text = buffer
        self.insertion_point = utf8_len(buffer)

    def line(self) -> int:
        """Zero-based number of the line holding the cursor."""
        return self._data[: self.insertion_point].count(b"\n")

    def num_lines(self) -> int:
        return self.text.count("\n") + 1

    def ends_with(self, c: str) -> bool:
        return self.text.endswith(c)

    def move_to_start(self) -> None:
        self.insertion_point = 0

    def move_to_line_start(self) -> None:
        self.insertion_point = self._data.rfind(b"\n", 0, self.insertion_point) + 1

    def move_to_line_end(self) -> None:
        self.insertion_point = self.find_current_line_end()

    def move_to_end(self) -> None:
        self.insertion_point = len(self)

    def __len__(self) -> int:
        """Length of the text in UTF-8 bytes."""
        return utf8_len(self.text)

    def find_current_line_end(self) -> int:
        return nav.find_current_line_end(self.text, self.insertion_point)

    def grapheme_right_index(self) -> int:
        return nav.grapheme_right_index(self.text, self.insertion_point)

    def grapheme_left_index(self) -> int:
        return nav.grapheme_left_index(self.text, self.insertion_point)

    def word_right_index(self) -> int:
        return nav.word_right_index(self.text, self.insertion_point)

    def big_word_right_index(self) -> int:
        return nav.big_word_right_index(self.text, self.insertion_point)

    def word_right_end_index(self) -> int:
        return nav.word_right_end_index(self.text, self.insertion_point)

    def big_word_right_end_index(self) -> int:
        return nav.big_word_right_end_index(self.text, self.insertion_point)

    def word_right_start_index(self) -> int:
        return nav.word_right_start_index(self.text, self.insertion_point)

    def big_word_right_start_index(self) -> int:
        return nav.big_word_right_start_index(self.text, self.insertion_point)

    def word_left_index(self) -> int:
        return nav.word_left_index(self.text, self.insertion_point)

    def big_word_left_index(self) -> int:
        return nav.big_word_left_index(self.text, self.insertion_point)

    def next_whitespace(self) -> int:
        return nav.next_whitespace(self.text, self.insertion_point)

    def move_right(self) -> None:
        self.insertion_point = self.grapheme_right_index()

    def move_left(self) -> None:
        self.insertion_point = self.grapheme_left_index()

    def move_word_left(self) -> None:
        self.insertion_point = self.word_left_index()

    def move_big_word_left(self) -> None:
        self.insertion_point = self.big_word_left_index()

    def move_word_right(self) -> None:
        self.insertion_point = self.word_right_index()

    def move_word_right_start(self) -> None:
        self.insertion_point = self.word_right_start_index()

    def move_big_word_right_start(self) -> None:
        self.insertion_point = self.big_word_right_start_index()

    def move_word_right_end(self) -> None:
        self.insertion_point = self.word_right_end_index()

    def move_big_word_right_end(self) -> None:
        self.insertion_point = self.big_word_right_end_index()

    def insert_char(self, c: str) -> None:
        """Insert one character at the cursor and move right one grapheme."""
        self.replace_range(self.insertion_point, self.insertion_point, c)
        self.move_right()

    def insert_str(self, string: str) -> None:
        """Insert ``string`` at the cursor and move the cursor behind it."""
        self.replace_range(self.insertion_point, self.insertion_point, string)
        self.insertion_point += utf8_len(string)

    def insert_newline(self) -> None:
        """Insert the platform's line terminator."""
        if sys.platform == "win32":
            self.insert_str("\r\n")
        else:
            self.insert_char("\n")

    def clear(self) -> None:
        self.text = ""
        self.insertion_point = 0

    def clear_to_end(self) -> None:
        """Drop everything from the cursor onward."""
        self.text = self._slice(0, self.insertion_point)

    def clear_to_line_end(self) -> None:
        """Drop from the cursor up to (not including) the line terminator."""
        self.clear_range(self.insertion_point, self.find_current_line_end())

    def clear_to_insertion_point(self) -> None:
        """Drop everything before the cursor and move the cursor to the start."""
        self.clear_range(0, self.insertion_point)
        self.insertion_point = 0

    def clear_range(self, start: int, end: int) -> None:
        """Remove bytes ``[start, end)``; the cursor is left untouched."""
        self.replace_range(start, end, "")

    def replace_range(self, start: int, end: int, replace_with: str) -> None:
        """Replace bytes ``[start, end)``; the cursor is left untouched."""
        data = self._data
        if not 0 <= start <= end <= len(data):
            raise IndexError(f"range {start}..{end} outside text of {len(data)} bytes")
        try:
            self.text = (data[:start] + replace_with.encode("utf-8") + data[end:]).decode(
                "utf-8"
            )
        except UnicodeDecodeError as exc:
            raise ValueError("range is not on character boundaries") from exc

    def on_whitespace(self) -> bool:
        rest = self._slice(self.insertion_point)
        return bool(rest) and is_whitespace_str(rest[0])

    def grapheme_right(self) -> str:
        return self._slice(self.insertion_point, self.grapheme_right_index())

    def grapheme_left(self) -> str:
        return self._slice(self.grapheme_left_index(), self.insertion_point)

    def current_word_range(self) -> TextRange:
        return nav.current_word_range(self.text, self.insertion_point)

    def current_line_range(self) -> TextRange:
        return nav.current_line_range(self.text, self.insertion_point)

    def uppercase_word(self) -> None:
        start, end = self.current_word_range()
        self.replace_range(start, end, self._slice(start, end).upper())
        self.move_word_right()

    def lowercase_word(self) -> None:
        start, end = self.current_word_range()
        self.replace_range(start, end, self._slice(start, end).lower())
        self.move_word_right()

    def switchcase_char(self) -> None:
        """Swap the ASCII case of the grapheme under the cursor and move right."""
        start = self.insertion_point
        end = self.grapheme_right_index()
        if end > start:
            swapped = "".join(map(_switch_ascii_case, self._slice(start, end)))
            self.replace_range(start, end, swapped)
            self.move_right()

    def capitalize_char(self) -> None:
        """Uppercase the grapheme at (or the word after) the cursor and move right."""
        if self.on_whitespace():
            self.move_word_right()
            self.move_word_left()
        start = self.insertion_point
        end = self.grapheme_right_index()
        if end > start:
            self.replace_range(start, end, self._slice(start, end).upper())
            self.move_right()

    def delete_left_grapheme(self) -> None:
        left = self.grapheme_left_index()
        if left < self.insertion_point:
            self.clear_range(left, self.insertion_point)
            self.insertion_point = left

    def delete_right_grapheme(self) -> None:
        right = self.grapheme_right_index()
        if right > self.insertion_point:
            self.clear_range(self.insertion_point, right)

    def delete_word_left(self) -> None:
        left = self.word_left_index()
        self.clear_range(left, self.insertion_point)
        self.insertion_point = left

    def delete_word_right(self) -> None:
        self.clear_range(self.insertion_point, self.word_right_index())

    def swap_words(self) -> None:
        """Swap the current word with the word to its right."""
        first = self.current_word_range()
        self.move_word_right()
        second = self.current_word_range()
        if first != second:
            self.move_word_left()
            first_word = self._slice(*first)
            second_word = self._slice(*second)
            self.replace_range(second.start, second.end, first_word)
            self.replace_range(first.start, first.end, second_word)

    def swap_graphemes(self) -> None:
        """Swap the graphemes on either side of the cursor."""
        initial = self.insertion_point
        if initial == 0:
            self.move_right()
        elif initial == len(self):
            self.move_left()

        middle = self.insertion_point
        start = self.grapheme_left_index()
        end = self.grapheme_right_index()
        if start < middle < end:
            first = self._slice(start, middle)
            second = self._slice(middle, end)
            self.replace_range(middle, end, first)
            self.replace_range(start, middle, second)
            self.insertion_point = end
        else:
            self.insertion_point = middle

    def _grapheme_column(self, line_start: int) -> int:
        return sum(1 for _ in grapheme_indices(self._slice(line_start, self.insertion_point)))

    def move_line_up(self) -> None:
        if self.is_cursor_at_first_line():
            return
        old = self.current_line_range()
        column = self._grapheme_column(old.start)
        self.insertion_point = old.start
        self.move_left()

        new = self.current_line_range()
        last = None
        for index, _ in islice(grapheme_indices(self._slice(*new)), column + 1):
            last = index
        self.insertion_point = new.start if last is None else new.start + last

    def move_line_down(self) -> None:
        if self.is_cursor_at_last_line():
            return
        old = self.current_line_range()
        column = self._grapheme_column(old.start)
        self.insertion_point = old.end

        new = self.current_line_range()
        target = next(islice(grapheme_indices(self._slice(*new)), column, None), None)
        if target is None:
            self.insertion_point = self.find_current_line_end()
        else:
            self.insertion_point = new.start + target[0]

    def is_cursor_at_first_line(self) -> bool:
        return b"\n" not in self._data[: self.insertion_point]

    def is_cursor_at_last_line(self) -> bool:
        return b"\n" not in self._data[self.insertion_point :]

    def find_char_right(self, c: str, current_line: bool) -> int | None:
        """Offset of the first ``c`` right of the grapheme under the cursor."""
        start = self.grapheme_right_index()
        end = self.current_line_range().end if current_line else len(self)
        index = self._data.find(c.encode("utf-8"), start, end)
        return None if index < 0 else index

    def find_char_left(self, c: str, current_line: bool) -> int | None:
        """Offset of the last ``c`` left of the cursor."""
        start = self.current_line_range().start if current_line else 0
        index = self._data.rfind(c.encode("utf-8"), start, self.insertion_point)
        return None if index < 0 else index

    def move_right_until(self, c: str, current_line: bool) -> int:
        index = self.find_char_right(c, current_line)
        if index is not None:
            self.insertion_point = index
        return self.insertion_point

    def move_right_before(self, c: str, current_line: bool) -> int:
        index = self.find_char_right(c, current_line)
        if index is not None:
            self.insertion_point = index
            self.insertion_point = self.grapheme_left_index()
        return self.insertion_point

    def move_left_until(self, c: str, current_line: bool) -> int:
        index = self.find_char_left(c, current_line)
        if index is not None:
            self.insertion_point = index
        return self.insertion_point

    def move_left_before(self, c: str, current_line: bool) -> int:
        index = self.find_char_left(c, current_line)
        if index is not None:
            self.insertion_point = index + utf8_len(c)
        return self.insertion_point

    def delete_right_until_char(self, c: str, current_line: bool) -> None:
        index = self.find_char_right(c, current_line)
        if index is not None:
            self.clear_range(self.insertion_point, index + utf8_len(c))

    def delete_right_before_char(self, c: str, current_line: bool) -> None:
        index = self.find_char_right(c, current_line)
        if index is not None:
            self.clear_range(self.insertion_point, index)

    def delete_left_until_char(self, c: str, current_line: bool) -> None:
        index = self.find_char_left(c, current_line)
        if index is not None:
            self.clear_range(index, self.insertion_point)
            self.insertion_point = index

    def delete_left_before_char(self, c: str, current_line: bool) -> None:
        index = self.find_char_left(c, current_line)
        if index is not None:
            after = index + utf8_len(c)
            self.clear_range(after, self.insertion_point)
            self.insertion_point = after