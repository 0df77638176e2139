"""Vi normal-mode commands and the editor operations they stand for."""

from __future__ import annotations

import enum
from collections import deque
from dataclasses import dataclass
from typing import Any, ClassVar

from ledline.keybindings import EditCommand, EditKind, ReedlineEvent
from ledline.vi_motion import Motion, MotionKind


class ViToTillKind(enum.Enum):
    TO_RIGHT = enum.auto()
    """f"""
    TO_LEFT = enum.auto()
    """F"""
    TILL_RIGHT = enum.auto()
    """t"""
    TILL_LEFT = enum.auto()
    """T"""


_REVERSED = {
    ViToTillKind.TO_RIGHT: ViToTillKind.TO_LEFT,
    ViToTillKind.TO_LEFT: ViToTillKind.TO_RIGHT,
    ViToTillKind.TILL_RIGHT: ViToTillKind.TILL_LEFT,
    ViToTillKind.TILL_LEFT: ViToTillKind.TILL_RIGHT,
}

_TO_TILL_EDITS = {
    ViToTillKind.TILL_LEFT: EditKind.MOVE_LEFT_BEFORE,
    ViToTillKind.TO_LEFT: EditKind.MOVE_LEFT_UNTIL,
    ViToTillKind.TILL_RIGHT: EditKind.MOVE_RIGHT_BEFORE,
    ViToTillKind.TO_RIGHT: EditKind.MOVE_RIGHT_UNTIL,
}
_EDITS_TO_TILL = {edit: kind for kind, edit in _TO_TILL_EDITS.items()}


def _check_char(label: str, c: Any) -> None:
    if not isinstance(c, str) or len(c) != 1:
        raise ValueError(f"{label} needs a single character, got {c!r}")


@dataclass(frozen=True)
class ViToTill:
    """A left or right motion to or till a character, remembered for ``;`` and ``,``."""

    kind: ViToTillKind
    char: str

    def __post_init__(self) -> None:
        _check_char(self.kind.name, self.char)

    @classmethod
    def to_right(cls, c: str) -> ViToTill:
        return cls(ViToTillKind.TO_RIGHT, c)

    @classmethod
    def to_left(cls, c: str) -> ViToTill:
        return cls(ViToTillKind.TO_LEFT, c)

    @classmethod
    def till_right(cls, c: str) -> ViToTill:
        return cls(ViToTillKind.TILL_RIGHT, c)

    @classmethod
    def till_left(cls, c: str) -> ViToTill:
        return cls(ViToTillKind.TILL_LEFT, c)

    def reverse(self) -> ViToTill:
        """The same motion in the opposite direction, as used by ``,``."""
        return ViToTill(_REVERSED[self.kind], self.char)

    def to_edit_command(self) -> EditCommand:
        """The edit command performing this motion."""
        return EditCommand(_TO_TILL_EDITS[self.kind], (self.char,))

    @classmethod
    def from_edit_command(cls, edit: EditCommand) -> ViToTill | None:
        """The motion an edit command performs, or None if it is no to/till move."""
        kind = _EDITS_TO_TILL.get(edit.kind)
        if kind is None:
            return None
        return cls(kind, edit.args[0])


class OptionKind(enum.Enum):
    EVENT = enum.auto()
    EDIT = enum.auto()
    INCOMPLETE = enum.auto()


@dataclass(frozen=True)
class ReedlineOption:
    """An event, an edit, or a marker that the command still needs a motion."""

    kind: OptionKind
    value: ReedlineEvent | EditCommand | None = None

    INCOMPLETE: ClassVar[ReedlineOption]

    def __post_init__(self) -> None:
        if self.kind is OptionKind.EVENT and not isinstance(self.value, ReedlineEvent):
            raise ValueError("an EVENT option carries a ReedlineEvent")
        if self.kind is OptionKind.EDIT and not isinstance(self.value, EditCommand):
            raise ValueError("an EDIT option carries an EditCommand")
        if self.kind is OptionKind.INCOMPLETE and self.value is not None:
            raise ValueError("an INCOMPLETE option carries nothing")

    @classmethod
    def event(cls, event: ReedlineEvent) -> ReedlineOption:
        return cls(OptionKind.EVENT, event)

    @classmethod
    def edit(cls, command: EditCommand) -> ReedlineOption:
        return cls(OptionKind.EDIT, command)

    def to_event(self) -> ReedlineEvent:
        """The line editor event for this option; incomplete becomes ``NONE``."""
        if self.kind is OptionKind.EDIT:
            assert isinstance(self.value, EditCommand)
            return ReedlineEvent.edit([self.value])
        if self.kind is OptionKind.EVENT:
            assert isinstance(self.value, ReedlineEvent)
            return self.value
        return ReedlineEvent.NONE


ReedlineOption.INCOMPLETE = ReedlineOption(OptionKind.INCOMPLETE)


class CommandKind(enum.Enum):
    INCOMPLETE = enum.auto()
    DELETE = enum.auto()
    DELETE_CHAR = enum.auto()
    REPLACE_CHAR = enum.auto()
    SUBSTITUTE_CHAR_WITH_INSERT = enum.auto()
    PASTE_AFTER = enum.auto()
    PASTE_BEFORE = enum.auto()
    MOVE_LEFT = enum.auto()
    MOVE_RIGHT = enum.auto()
    MOVE_UP = enum.auto()
    MOVE_DOWN = enum.auto()
    MOVE_WORD_RIGHT_START = enum.auto()
    MOVE_BIG_WORD_RIGHT_START = enum.auto()
    MOVE_WORD_RIGHT_END = enum.auto()
    MOVE_BIG_WORD_RIGHT_END = enum.auto()
    MOVE_WORD_LEFT = enum.auto()
    MOVE_BIG_WORD_LEFT = enum.auto()
    MOVE_TO_LINE_START = enum.auto()
    MOVE_TO_LINE_END = enum.auto()
    ENTER_VI_APPEND = enum.auto()
    ENTER_VI_INSERT = enum.auto()
    UNDO = enum.auto()
    CHANGE_TO_LINE_END = enum.auto()
    DELETE_TO_END = enum.auto()
    APPEND_TO_END = enum.auto()
    PREPEND_TO_START = enum.auto()
    REWRITE_CURRENT_LINE = enum.auto()
    CHANGE = enum.auto()
    MOVE_RIGHT_UNTIL = enum.auto()
    MOVE_RIGHT_BEFORE = enum.auto()
    MOVE_LEFT_UNTIL = enum.auto()
    MOVE_LEFT_BEFORE = enum.auto()
    REPLAY_TO_TILL = enum.auto()
    REVERSE_TO_TILL = enum.auto()
    HISTORY_SEARCH = enum.auto()
    SWITCHCASE = enum.auto()


_WITH_CHAR = frozenset(
    {
        CommandKind.REPLACE_CHAR,
        CommandKind.MOVE_RIGHT_UNTIL,
        CommandKind.MOVE_RIGHT_BEFORE,
        CommandKind.MOVE_LEFT_UNTIL,
        CommandKind.MOVE_LEFT_BEFORE,
    }
)
_WITH_TO_TILL = frozenset({CommandKind.REPLAY_TO_TILL, CommandKind.REVERSE_TO_TILL})


def _edit(command: EditCommand) -> list[ReedlineOption]:
    return [ReedlineOption.edit(command)]


def _event(event: ReedlineEvent) -> list[ReedlineOption]:
    return [ReedlineOption.event(event)]


_SIMPLE_OPTIONS: dict[CommandKind, list[ReedlineOption]] = {
    CommandKind.MOVE_UP: _event(ReedlineEvent.UP),
    CommandKind.MOVE_DOWN: _event(ReedlineEvent.DOWN),
    CommandKind.MOVE_LEFT: _event(ReedlineEvent.LEFT),
    CommandKind.MOVE_RIGHT: _event(ReedlineEvent.RIGHT),
    CommandKind.MOVE_TO_LINE_START: _edit(EditCommand.MOVE_TO_LINE_START),
    CommandKind.MOVE_TO_LINE_END: _edit(EditCommand.MOVE_TO_LINE_END),
    CommandKind.MOVE_WORD_LEFT: _edit(EditCommand.MOVE_WORD_LEFT),
    CommandKind.MOVE_BIG_WORD_LEFT: _edit(EditCommand.MOVE_BIG_WORD_LEFT),
    CommandKind.MOVE_WORD_RIGHT_START: _edit(EditCommand.MOVE_WORD_RIGHT_START),
    CommandKind.MOVE_BIG_WORD_RIGHT_START: _edit(EditCommand.MOVE_BIG_WORD_RIGHT_START),
    CommandKind.MOVE_WORD_RIGHT_END: _edit(EditCommand.MOVE_WORD_RIGHT_END),
    CommandKind.MOVE_BIG_WORD_RIGHT_END: _edit(EditCommand.MOVE_BIG_WORD_RIGHT_END),
    CommandKind.ENTER_VI_INSERT: _event(ReedlineEvent.REPAINT),
    CommandKind.ENTER_VI_APPEND: _edit(EditCommand.MOVE_RIGHT),
    CommandKind.PASTE_AFTER: _edit(EditCommand.PASTE_CUT_BUFFER_AFTER),
    CommandKind.PASTE_BEFORE: _edit(EditCommand.PASTE_CUT_BUFFER_BEFORE),
    CommandKind.UNDO: _edit(EditCommand.UNDO),
    CommandKind.CHANGE_TO_LINE_END: _edit(EditCommand.CLEAR_TO_LINE_END),
    CommandKind.DELETE_TO_END: _edit(EditCommand.CUT_TO_LINE_END),
    CommandKind.APPEND_TO_END: _edit(EditCommand.MOVE_TO_LINE_END),
    CommandKind.PREPEND_TO_START: _edit(EditCommand.MOVE_TO_LINE_START),
    CommandKind.REWRITE_CURRENT_LINE: _edit(EditCommand.CUT_CURRENT_LINE),
    CommandKind.DELETE_CHAR: _edit(EditCommand.CUT_CHAR),
    CommandKind.SUBSTITUTE_CHAR_WITH_INSERT: _edit(EditCommand.CUT_CHAR),
    CommandKind.HISTORY_SEARCH: _event(ReedlineEvent.SEARCH_HISTORY),
    CommandKind.SWITCHCASE: _edit(EditCommand.SWITCHCASE_CHAR),
    CommandKind.DELETE: [ReedlineOption.INCOMPLETE],
    CommandKind.CHANGE: [ReedlineOption.INCOMPLETE],
    CommandKind.INCOMPLETE: [ReedlineOption.INCOMPLETE],
}

_TO_TILL_MOVES = {
    CommandKind.MOVE_RIGHT_UNTIL: EditKind.MOVE_RIGHT_UNTIL,
    CommandKind.MOVE_RIGHT_BEFORE: EditKind.MOVE_RIGHT_BEFORE,
    CommandKind.MOVE_LEFT_UNTIL: EditKind.MOVE_LEFT_UNTIL,
    CommandKind.MOVE_LEFT_BEFORE: EditKind.MOVE_LEFT_BEFORE,
}

_CUT_BY_MOTION = {
    MotionKind.END: EditCommand.CUT_TO_LINE_END,
    MotionKind.LINE: EditCommand.CUT_CURRENT_LINE,
    MotionKind.NEXT_WORD: EditCommand.CUT_WORD_RIGHT_TO_NEXT,
    MotionKind.NEXT_BIG_WORD: EditCommand.CUT_BIG_WORD_RIGHT_TO_NEXT,
    MotionKind.NEXT_WORD_END: EditCommand.CUT_WORD_RIGHT,
    MotionKind.NEXT_BIG_WORD_END: EditCommand.CUT_BIG_WORD_RIGHT,
    MotionKind.PREVIOUS_WORD: EditCommand.CUT_WORD_LEFT,
    MotionKind.PREVIOUS_BIG_WORD: EditCommand.CUT_BIG_WORD_LEFT,
    MotionKind.START: EditCommand.CUT_FROM_LINE_START,
}

_CUT_TO_CHAR = {
    MotionKind.RIGHT_UNTIL: EditKind.CUT_RIGHT_UNTIL,
    MotionKind.RIGHT_BEFORE: EditKind.CUT_RIGHT_BEFORE,
    MotionKind.LEFT_UNTIL: EditKind.CUT_LEFT_UNTIL,
    MotionKind.LEFT_BEFORE: EditKind.CUT_LEFT_BEFORE,
}


def _cut_edits(motion: Motion) -> list[EditCommand]:
    if motion.kind in _CUT_TO_CHAR:
        return [EditCommand(_CUT_TO_CHAR[motion.kind], (motion.char,))]
    return [_CUT_BY_MOTION[motion.kind]]


def _change_edits(motion: Motion) -> list[EditCommand]:
    if motion.kind is MotionKind.END:
        return [EditCommand.CLEAR_TO_LINE_END]
    if motion.kind is MotionKind.LINE:
        return [EditCommand.MOVE_TO_START, EditCommand.CLEAR_TO_LINE_END]
    return _cut_edits(motion)


@dataclass(frozen=True)
class Command:
    """A vi normal-mode command.

    Commands without arguments are class attributes named after their kind
    (``Command.DELETE``); the others have constructors.
    """

    kind: CommandKind
    char: str | None = None
    to_till: ViToTill | None = None

    def __post_init__(self) -> None:
        name = self.kind.name
        if self.kind in _WITH_CHAR:
            _check_char(name, self.char)
        elif self.char is not None:
            raise ValueError(f"{name} takes no character")
        if self.kind in _WITH_TO_TILL:
            if not isinstance(self.to_till, ViToTill):
                raise ValueError(f"{name} needs a ViToTill")
        elif self.to_till is not None:
            raise ValueError(f"{name} takes no ViToTill")

    @classmethod
    def replace_char(cls, c: str) -> Command:
        return cls(CommandKind.REPLACE_CHAR, char=c)

    @classmethod
    def move_right_until(cls, c: str) -> Command:
        return cls(CommandKind.MOVE_RIGHT_UNTIL, char=c)

    @classmethod
    def move_right_before(cls, c: str) -> Command:
        return cls(CommandKind.MOVE_RIGHT_BEFORE, char=c)

    @classmethod
    def move_left_until(cls, c: str) -> Command:
        return cls(CommandKind.MOVE_LEFT_UNTIL, char=c)

    @classmethod
    def move_left_before(cls, c: str) -> Command:
        return cls(CommandKind.MOVE_LEFT_BEFORE, char=c)

    @classmethod
    def replay_to_till(cls, to_till: ViToTill) -> Command:
        return cls(CommandKind.REPLAY_TO_TILL, to_till=to_till)

    @classmethod
    def reverse_to_till(cls, to_till: ViToTill) -> Command:
        return cls(CommandKind.REVERSE_TO_TILL, to_till=to_till)

    def to_reedline(self) -> list[ReedlineOption]:
        """What the command does on its own, without a motion."""
        if self.kind in _SIMPLE_OPTIONS:
            return list(_SIMPLE_OPTIONS[self.kind])
        if self.kind in _TO_TILL_MOVES:
            return [
                ReedlineOption.event(ReedlineEvent.RECORD_TO_TILL),
                ReedlineOption.edit(EditCommand(_TO_TILL_MOVES[self.kind], (self.char,))),
            ]
        if self.kind is CommandKind.REPLACE_CHAR:
            assert self.char is not None
            return _edit(EditCommand.replace_char(self.char))
        assert self.to_till is not None
        if self.kind is CommandKind.REPLAY_TO_TILL:
            return _edit(self.to_till.to_edit_command())
        return _edit(self.to_till.reverse().to_edit_command())

    def to_reedline_with_motion(
        self, motion: Motion, count: int | None
    ) -> list[ReedlineOption] | None:
        """What the command does with ``motion``, repeated ``count`` times.

        Only delete and change take a motion; other commands give None.
        """
        if self.kind is CommandKind.DELETE:
            options = [ReedlineOption.edit(edit) for edit in _cut_edits(motion)]
        elif self.kind is CommandKind.CHANGE:
            options = [ReedlineOption.edit(edit) for edit in _change_edits(motion)]
            options.append(ReedlineOption.event(ReedlineEvent.REPAINT))
        else:
            return None
        if count is None:
            return options
        return options * count


for _kind in CommandKind:
    if _kind not in _WITH_CHAR and _kind not in _WITH_TO_TILL:
        setattr(Command, _kind.name, Command(_kind))


_SIMPLE_KEYS = {
    "d": CommandKind.DELETE,
    "p": CommandKind.PASTE_AFTER,
    "P": CommandKind.PASTE_BEFORE,
    "h": CommandKind.MOVE_LEFT,
    "l": CommandKind.MOVE_RIGHT,
    "j": CommandKind.MOVE_DOWN,
    "k": CommandKind.MOVE_UP,
    "w": CommandKind.MOVE_WORD_RIGHT_START,
    "W": CommandKind.MOVE_BIG_WORD_RIGHT_START,
    "e": CommandKind.MOVE_WORD_RIGHT_END,
    "E": CommandKind.MOVE_BIG_WORD_RIGHT_END,
    "b": CommandKind.MOVE_WORD_LEFT,
    "B": CommandKind.MOVE_BIG_WORD_LEFT,
    "i": CommandKind.ENTER_VI_INSERT,
    "a": CommandKind.ENTER_VI_APPEND,
    "0": CommandKind.MOVE_TO_LINE_START,
    "^": CommandKind.MOVE_TO_LINE_START,
    "$": CommandKind.MOVE_TO_LINE_END,
    "u": CommandKind.UNDO,
    "c": CommandKind.CHANGE,
    "x": CommandKind.DELETE_CHAR,
    "s": CommandKind.SUBSTITUTE_CHAR_WITH_INSERT,
    "?": CommandKind.HISTORY_SEARCH,
    "C": CommandKind.CHANGE_TO_LINE_END,
    "D": CommandKind.DELETE_TO_END,
    "I": CommandKind.PREPEND_TO_START,
    "A": CommandKind.APPEND_TO_END,
    "S": CommandKind.REWRITE_CURRENT_LINE,
    "~": CommandKind.SWITCHCASE,
}

_CHAR_KEYS = {
    "r": CommandKind.REPLACE_CHAR,
    "f": CommandKind.MOVE_RIGHT_UNTIL,
    "t": CommandKind.MOVE_RIGHT_BEFORE,
    "F": CommandKind.MOVE_LEFT_UNTIL,
    "T": CommandKind.MOVE_LEFT_BEFORE,
}


def parse_command(vi: Any, chars: deque[str]) -> Command | None:
    """Parse a command from the front of ``chars``, consuming what it recognises.

    ``vi`` supplies ``last_to_till`` for ``;`` and ``,``. The character a
    command such as ``f`` or ``r`` targets is looked at but left in place;
    when it is missing the command is ``Command.INCOMPLETE``.
    """
    if not chars:
        return None
    key = chars[0]
    if key in _SIMPLE_KEYS:
        chars.popleft()
        return Command(_SIMPLE_KEYS[key])
    if key in _CHAR_KEYS:
        chars.popleft()
        if not chars:
            return Command(CommandKind.INCOMPLETE)
        return Command(_CHAR_KEYS[key], char=chars[0])
    if key in (";", ","):
        chars.popleft()
        last = vi.last_to_till
        if last is None:
            return None
        if key == ";":
            return Command.replay_to_till(last)
        return Command.reverse_to_till(last)
    return None