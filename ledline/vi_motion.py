"""Motions that follow an operator in vi normal mode."""

from __future__ import annotations

import enum
from collections import deque
from dataclasses import dataclass


class MotionKind(enum.Enum):
    NEXT_WORD = enum.auto()
    NEXT_BIG_WORD = enum.auto()
    NEXT_WORD_END = enum.auto()
    NEXT_BIG_WORD_END = enum.auto()
    PREVIOUS_WORD = enum.auto()
    PREVIOUS_BIG_WORD = enum.auto()
    LINE = enum.auto()
    START = enum.auto()
    END = enum.auto()
    RIGHT_UNTIL = enum.auto()
    RIGHT_BEFORE = enum.auto()
    LEFT_UNTIL = enum.auto()
    LEFT_BEFORE = enum.auto()


_WITH_CHAR = frozenset(
    {
        MotionKind.RIGHT_UNTIL,
        MotionKind.RIGHT_BEFORE,
        MotionKind.LEFT_UNTIL,
        MotionKind.LEFT_BEFORE,
    }
)

_SIMPLE_KEYS = {
    "b": MotionKind.PREVIOUS_WORD,
    "B": MotionKind.PREVIOUS_BIG_WORD,
    "w": MotionKind.NEXT_WORD,
    "W": MotionKind.NEXT_BIG_WORD,
    "e": MotionKind.NEXT_WORD_END,
    "E": MotionKind.NEXT_BIG_WORD_END,
    "d": MotionKind.LINE,
    "0": MotionKind.START,
    "^": MotionKind.START,
    "$": MotionKind.END,
}

_CHAR_KEYS = {
    "f": MotionKind.RIGHT_UNTIL,
    "t": MotionKind.RIGHT_BEFORE,
    "F": MotionKind.LEFT_UNTIL,
    "T": MotionKind.LEFT_BEFORE,
}


@dataclass(frozen=True)
class Motion:
    """A motion; the to/till kinds carry their target character."""

    kind: MotionKind
    char: str | None = None

    def __post_init__(self) -> None:
        if self.kind in _WITH_CHAR:
            if self.char is None or len(self.char) != 1:
                raise ValueError(f"{self.kind.name} needs a single target character")
        elif self.char is not None:
            raise ValueError(f"{self.kind.name} takes no target character")


def parse_motion(chars: deque[str]) -> Motion | None:
    """Parse a motion from the front of ``chars``, consuming what it recognises.

    The target character of a to/till motion is looked at but left in place.
    """
    if not chars:
        return None
    key = chars[0]
    if key in _SIMPLE_KEYS:
        chars.popleft()
        return Motion(_SIMPLE_KEYS[key])
    if key in _CHAR_KEYS:
        chars.popleft()
        if not chars:
            return None
        return Motion(_CHAR_KEYS[key], chars[0])
    return None