"""Parsing of the keys typed in vi normal mode into editor events."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ledline.keybindings import ReedlineEvent
from ledline.vi_command import Command, CommandKind, parse_command
from ledline.vi_motion import Motion, parse_motion

_INSERTING_COMMANDS = frozenset(
    {
        CommandKind.ENTER_VI_INSERT,
        CommandKind.ENTER_VI_APPEND,
        CommandKind.CHANGE_TO_LINE_END,
        CommandKind.APPEND_TO_END,
        CommandKind.PREPEND_TO_START,
        CommandKind.REWRITE_CURRENT_LINE,
        CommandKind.SUBSTITUTE_CHAR_WITH_INSERT,
        CommandKind.HISTORY_SEARCH,
    }
)


@dataclass(frozen=True)
class ParseResult:
    """The parts of a normal-mode key sequence: ``[multiplier] command [count] motion``."""

    multiplier: int | None = None
    command: Command | None = None
    count: int | None = None
    motion: Motion | None = None
    valid: bool = False

    def is_valid(self) -> bool:
        return self.valid

    def enter_insert_mode(self) -> bool:
        """Whether the sequence switches the editor to insert mode."""
        if self.command is None:
            return False
        if self.motion is None:
            return self.command.kind in _INSERTING_COMMANDS
        return self.command.kind is CommandKind.CHANGE

    def to_reedline_event(self) -> ReedlineEvent:
        """The event for the sequence, or ``NONE`` while it is incomplete."""
        if self.command is None:
            return ReedlineEvent.NONE
        repeat = 1 if self.multiplier is None else self.multiplier

        if self.count is None and self.motion is None:
            events = [option.to_event() for option in self.command.to_reedline()] * repeat
            if ReedlineEvent.NONE in events:
                return ReedlineEvent.NONE
            return ReedlineEvent.multiple(events)

        if self.motion is not None:
            options = self.command.to_reedline_with_motion(self.motion, self.count)
            if options is None:
                return ReedlineEvent.NONE
            return ReedlineEvent.multiple(
                [option.to_event() for option in options * repeat]
            )

        return ReedlineEvent.NONE


def _is_ascii_digit(c: str) -> bool:
    return "0" <= c <= "9"


def parse_number(chars: deque[str]) -> int | None:
    """Consume a decimal number from the front of ``chars``.

    A leading ``0`` is not a number: it is the move-to-line-start key.
    """
    if not chars or chars[0] == "0" or not _is_ascii_digit(chars[0]):
        return None
    value = 0
    while chars and _is_ascii_digit(chars[0]):
        value = value * 10 + int(chars.popleft())
    return value


def parse(vi: Any, chars: Iterable[str]) -> ParseResult:
    """Parse a whole normal-mode key sequence.

    Characters left over after the motion mark the sequence invalid so the
    caller can drop it instead of getting stuck.
    """
    queue = chars if isinstance(chars, deque) else deque(chars)
    multiplier = parse_number(queue)
    command = parse_command(vi, queue)
    count = parse_number(queue)
    motion = parse_motion(queue)

    recognised = any(part is not None for part in (multiplier, command, count, motion))
    has_garbage = bool(queue)
    return ParseResult(
        multiplier=multiplier,
        command=command,
        count=count,
        motion=motion,
        valid=recognised and not has_garbage,
    )