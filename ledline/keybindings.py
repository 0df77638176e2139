"""Key events, editor commands and the tables that bind one to the other."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, ClassVar


class KeyModifiers(enum.Flag):
    """Modifier keys held while a key is pressed."""

    NONE = 0
    SHIFT = enum.auto()
    CONTROL = enum.auto()
    ALT = enum.auto()


@dataclass(frozen=True)
class KeyCode:
    """A key: either a named key or ``Char`` carrying one character."""

    name: str
    char: str | None = None

    BACKSPACE: ClassVar[KeyCode]
    ENTER: ClassVar[KeyCode]
    LEFT: ClassVar[KeyCode]
    RIGHT: ClassVar[KeyCode]
    UP: ClassVar[KeyCode]
    DOWN: ClassVar[KeyCode]
    HOME: ClassVar[KeyCode]
    END: ClassVar[KeyCode]
    PAGE_UP: ClassVar[KeyCode]
    PAGE_DOWN: ClassVar[KeyCode]
    TAB: ClassVar[KeyCode]
    BACK_TAB: ClassVar[KeyCode]
    DELETE: ClassVar[KeyCode]
    INSERT: ClassVar[KeyCode]
    NULL: ClassVar[KeyCode]
    ESC: ClassVar[KeyCode]

    def __post_init__(self) -> None:
        if self.name == "Char":
            if not isinstance(self.char, str) or len(self.char) != 1:
                raise ValueError("a Char key needs exactly one character")
        elif self.char is not None:
            raise ValueError(f"the {self.name} key carries no character")

    @classmethod
    def from_char(cls, c: str) -> KeyCode:
        """The key that types ``c``."""
        return cls("Char", c)

    @classmethod
    def function(cls, number: int) -> KeyCode:
        """Function key ``F<number>``."""
        return cls(f"F{number}")

    @property
    def is_char(self) -> bool:
        return self.name == "Char"

    def __repr__(self) -> str:
        if self.is_char:
            return f"KeyCode.from_char({self.char!r})"
        return f"KeyCode({self.name!r})"


KeyCode.BACKSPACE = KeyCode("Backspace")
KeyCode.ENTER = KeyCode("Enter")
KeyCode.LEFT = KeyCode("Left")
KeyCode.RIGHT = KeyCode("Right")
KeyCode.UP = KeyCode("Up")
KeyCode.DOWN = KeyCode("Down")
KeyCode.HOME = KeyCode("Home")
KeyCode.END = KeyCode("End")
KeyCode.PAGE_UP = KeyCode("PageUp")
KeyCode.PAGE_DOWN = KeyCode("PageDown")
KeyCode.TAB = KeyCode("Tab")
KeyCode.BACK_TAB = KeyCode("BackTab")
KeyCode.DELETE = KeyCode("Delete")
KeyCode.INSERT = KeyCode("Insert")
KeyCode.NULL = KeyCode("Null")
KeyCode.ESC = KeyCode("Esc")


@dataclass(frozen=True)
class KeyEvent:
    """A key press together with the modifiers held."""

    code: KeyCode
    modifiers: KeyModifiers = KeyModifiers.NONE


@dataclass(frozen=True)
class MouseEvent:
    """Any mouse activity at a terminal cell."""

    column: int = 0
    row: int = 0


@dataclass(frozen=True)
class ResizeEvent:
    """The terminal changed size."""

    width: int
    height: int


Event = KeyEvent | MouseEvent | ResizeEvent

_CHAR = "char"


def _check_args(label: str, args: tuple[Any, ...], expected: tuple[Any, ...]) -> None:
    if len(args) != len(expected):
        raise ValueError(f"{label} takes {len(expected)} argument(s), got {len(args)}")
    for value, kind in zip(args, expected):
        if kind == _CHAR:
            ok = isinstance(value, str) and len(value) == 1
        elif kind is int:
            ok = isinstance(value, int) and not isinstance(value, bool) and value >= 0
        else:
            ok = isinstance(value, kind)
        if not ok:
            raise ValueError(f"{label}: invalid argument {value!r}")


class EditKind(enum.Enum):
    """The kinds of edits the editor can perform on its buffer."""

    MOVE_TO_START = enum.auto()
    MOVE_TO_LINE_START = enum.auto()
    MOVE_TO_END = enum.auto()
    MOVE_TO_LINE_END = enum.auto()
    MOVE_TO_POSITION = enum.auto()
    MOVE_LEFT = enum.auto()
    MOVE_RIGHT = enum.auto()
    MOVE_WORD_LEFT = enum.auto()
    MOVE_BIG_WORD_LEFT = enum.auto()
    MOVE_WORD_RIGHT = enum.auto()
    MOVE_WORD_RIGHT_START = enum.auto()
    MOVE_BIG_WORD_RIGHT_START = enum.auto()
    MOVE_WORD_RIGHT_END = enum.auto()
    MOVE_BIG_WORD_RIGHT_END = enum.auto()
    INSERT_CHAR = enum.auto()
    INSERT_STRING = enum.auto()
    INSERT_NEWLINE = enum.auto()
    REPLACE_CHAR = enum.auto()
    REPLACE_CHARS = enum.auto()
    BACKSPACE = enum.auto()
    DELETE = enum.auto()
    CUT_CHAR = enum.auto()
    BACKSPACE_WORD = enum.auto()
    DELETE_WORD = enum.auto()
    CLEAR = enum.auto()
    CLEAR_TO_LINE_END = enum.auto()
    CUT_CURRENT_LINE = enum.auto()
    CUT_FROM_START = enum.auto()
    CUT_FROM_LINE_START = enum.auto()
    CUT_TO_END = enum.auto()
    CUT_TO_LINE_END = enum.auto()
    CUT_WORD_LEFT = enum.auto()
    CUT_BIG_WORD_LEFT = enum.auto()
    CUT_WORD_RIGHT = enum.auto()
    CUT_BIG_WORD_RIGHT = enum.auto()
    CUT_WORD_RIGHT_TO_NEXT = enum.auto()
    CUT_BIG_WORD_RIGHT_TO_NEXT = enum.auto()
    PASTE_CUT_BUFFER_BEFORE = enum.auto()
    PASTE_CUT_BUFFER_AFTER = enum.auto()
    UPPERCASE_WORD = enum.auto()
    LOWERCASE_WORD = enum.auto()
    SWITCHCASE_CHAR = enum.auto()
    CAPITALIZE_CHAR = enum.auto()
    SWAP_WORDS = enum.auto()
    SWAP_GRAPHEMES = enum.auto()
    UNDO = enum.auto()
    REDO = enum.auto()
    CUT_RIGHT_UNTIL = enum.auto()
    CUT_RIGHT_BEFORE = enum.auto()
    MOVE_RIGHT_UNTIL = enum.auto()
    MOVE_RIGHT_BEFORE = enum.auto()
    CUT_LEFT_UNTIL = enum.auto()
    CUT_LEFT_BEFORE = enum.auto()
    MOVE_LEFT_UNTIL = enum.auto()
    MOVE_LEFT_BEFORE = enum.auto()


_EDIT_PAYLOADS: dict[EditKind, tuple[Any, ...]] = {
    EditKind.MOVE_TO_POSITION: (int,),
    EditKind.INSERT_CHAR: (_CHAR,),
    EditKind.INSERT_STRING: (str,),
    EditKind.REPLACE_CHAR: (_CHAR,),
    EditKind.REPLACE_CHARS: (int, str),
    EditKind.CUT_RIGHT_UNTIL: (_CHAR,),
    EditKind.CUT_RIGHT_BEFORE: (_CHAR,),
    EditKind.MOVE_RIGHT_UNTIL: (_CHAR,),
    EditKind.MOVE_RIGHT_BEFORE: (_CHAR,),
    EditKind.CUT_LEFT_UNTIL: (_CHAR,),
    EditKind.CUT_LEFT_BEFORE: (_CHAR,),
    EditKind.MOVE_LEFT_UNTIL: (_CHAR,),
    EditKind.MOVE_LEFT_BEFORE: (_CHAR,),
}


@dataclass(frozen=True)
class EditCommand:
    """One edit to the buffer.

    Commands without arguments are available as class attributes named after
    their kind (``EditCommand.UNDO``); the others have constructors.
    """

    kind: EditKind
    args: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))
        _check_args(self.kind.name, self.args, _EDIT_PAYLOADS.get(self.kind, ()))

    @classmethod
    def move_to_position(cls, position: int) -> EditCommand:
        return cls(EditKind.MOVE_TO_POSITION, (position,))

    @classmethod
    def insert_char(cls, c: str) -> EditCommand:
        return cls(EditKind.INSERT_CHAR, (c,))

    @classmethod
    def insert_string(cls, text: str) -> EditCommand:
        return cls(EditKind.INSERT_STRING, (text,))

    @classmethod
    def replace_char(cls, c: str) -> EditCommand:
        return cls(EditKind.REPLACE_CHAR, (c,))

    @classmethod
    def replace_chars(cls, count: int, text: str) -> EditCommand:
        return cls(EditKind.REPLACE_CHARS, (count, text))

    @classmethod
    def cut_right_until(cls, c: str) -> EditCommand:
        return cls(EditKind.CUT_RIGHT_UNTIL, (c,))

    @classmethod
    def cut_right_before(cls, c: str) -> EditCommand:
        return cls(EditKind.CUT_RIGHT_BEFORE, (c,))

    @classmethod
    def move_right_until(cls, c: str) -> EditCommand:
        return cls(EditKind.MOVE_RIGHT_UNTIL, (c,))

    @classmethod
    def move_right_before(cls, c: str) -> EditCommand:
        return cls(EditKind.MOVE_RIGHT_BEFORE, (c,))

    @classmethod
    def cut_left_until(cls, c: str) -> EditCommand:
        return cls(EditKind.CUT_LEFT_UNTIL, (c,))

    @classmethod
    def cut_left_before(cls, c: str) -> EditCommand:
        return cls(EditKind.CUT_LEFT_BEFORE, (c,))

    @classmethod
    def move_left_until(cls, c: str) -> EditCommand:
        return cls(EditKind.MOVE_LEFT_UNTIL, (c,))

    @classmethod
    def move_left_before(cls, c: str) -> EditCommand:
        return cls(EditKind.MOVE_LEFT_BEFORE, (c,))

    def __repr__(self) -> str:
        if not self.args:
            return f"EditCommand.{self.kind.name}"
        rendered = ", ".join(map(repr, self.args))
        return f"EditCommand.{self.kind.name.lower()}({rendered})"


for _kind in EditKind:
    if _kind not in _EDIT_PAYLOADS:
        setattr(EditCommand, _kind.name, EditCommand(_kind))


class EventKind(enum.Enum):
    """The kinds of events an edit mode hands to the line editor."""

    NONE = enum.auto()
    HISTORY_HINT_COMPLETE = enum.auto()
    HISTORY_HINT_WORD_COMPLETE = enum.auto()
    CTRL_D = enum.auto()
    CTRL_C = enum.auto()
    CLEAR_SCREEN = enum.auto()
    ENTER = enum.auto()
    ESC = enum.auto()
    MOUSE = enum.auto()
    RESIZE = enum.auto()
    EDIT = enum.auto()
    REPAINT = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    UNTIL_FOUND = enum.auto()
    MULTIPLE = enum.auto()
    SEARCH_HISTORY = enum.auto()
    OPEN_EDITOR = enum.auto()
    MENU_UP = enum.auto()
    MENU_DOWN = enum.auto()
    MENU_LEFT = enum.auto()
    MENU_RIGHT = enum.auto()
    RECORD_TO_TILL = enum.auto()


_EVENT_WITH_ARGS = frozenset(
    {EventKind.EDIT, EventKind.UNTIL_FOUND, EventKind.MULTIPLE, EventKind.RESIZE}
)


@dataclass(frozen=True)
class ReedlineEvent:
    """An event for the line editor.

    ``EDIT`` carries edit commands, ``UNTIL_FOUND`` and ``MULTIPLE`` carry
    events and ``RESIZE`` carries a width and height. The others carry nothing
    and are available as class attributes (``ReedlineEvent.ENTER``).
    """

    kind: EventKind
    args: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        args = tuple(self.args)
        object.__setattr__(self, "args", args)
        name = self.kind.name
        if self.kind is EventKind.EDIT:
            if not all(isinstance(item, EditCommand) for item in args):
                raise ValueError(f"{name} carries edit commands only")
        elif self.kind in (EventKind.UNTIL_FOUND, EventKind.MULTIPLE):
            if not all(isinstance(item, ReedlineEvent) for item in args):
                raise ValueError(f"{name} carries events only")
        elif self.kind is EventKind.RESIZE:
            _check_args(name, args, (int, int))
        else:
            _check_args(name, args, ())

    @classmethod
    def edit(cls, commands: Iterable[EditCommand]) -> ReedlineEvent:
        return cls(EventKind.EDIT, tuple(commands))

    @classmethod
    def until_found(cls, events: Iterable[ReedlineEvent]) -> ReedlineEvent:
        """Try ``events`` in order until one of them is handled."""
        return cls(EventKind.UNTIL_FOUND, tuple(events))

    @classmethod
    def multiple(cls, events: Iterable[ReedlineEvent]) -> ReedlineEvent:
        """Run all of ``events`` in order."""
        return cls(EventKind.MULTIPLE, tuple(events))

    @classmethod
    def resize(cls, width: int, height: int) -> ReedlineEvent:
        return cls(EventKind.RESIZE, (width, height))

    @property
    def commands(self) -> tuple[EditCommand, ...]:
        """The edit commands of an ``EDIT`` event."""
        if self.kind is not EventKind.EDIT:
            raise ValueError(f"{self.kind.name} carries no edit commands")
        return self.args

    @property
    def events(self) -> tuple[ReedlineEvent, ...]:
        """The events of an ``UNTIL_FOUND`` or ``MULTIPLE`` event."""
        if self.kind not in (EventKind.UNTIL_FOUND, EventKind.MULTIPLE):
            raise ValueError(f"{self.kind.name} carries no events")
        return self.args

    def __repr__(self) -> str:
        if self.kind not in _EVENT_WITH_ARGS:
            return f"ReedlineEvent.{self.kind.name}"
        if self.kind is EventKind.RESIZE:
            return f"ReedlineEvent.resize({self.args[0]}, {self.args[1]})"
        return f"ReedlineEvent.{self.kind.name.lower()}({list(self.args)!r})"


for _kind in EventKind:
    if _kind not in _EVENT_WITH_ARGS:
        setattr(ReedlineEvent, _kind.name, ReedlineEvent(_kind))


class PromptEditMode(enum.Enum):
    """What the prompt shows as the current edit mode."""

    EMACS = enum.auto()
    VI_NORMAL = enum.auto()
    VI_INSERT = enum.auto()


class EditMode(ABC):
    """Turns terminal input events into line editor events."""

    @abstractmethod
    def parse_event(self, event: Event) -> ReedlineEvent:
        """Translate ``event`` into what the line editor understands."""

    @abstractmethod
    def edit_mode(self) -> PromptEditMode:
        """The mode to show in the prompt."""


@dataclass(frozen=True)
class KeyCombination:
    modifier: KeyModifiers
    key_code: KeyCode


@dataclass
class Keybindings:
    """A table from key combinations to editor events."""

    bindings: dict[KeyCombination, ReedlineEvent] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> Keybindings:
        return cls()

    def add_binding(
        self, modifier: KeyModifiers, key_code: KeyCode, command: ReedlineEvent
    ) -> None:
        """Bind ``command`` to the key combination, replacing any earlier binding.

        Raises ValueError for an ``UNTIL_FOUND`` event without events.
        """
        if command.kind is EventKind.UNTIL_FOUND and not command.events:
            raise ValueError(
                "UNTIL_FOUND should contain a series of potential events to handle"
            )
        self.bindings[KeyCombination(modifier, key_code)] = command

    def find_binding(
        self, modifier: KeyModifiers, key_code: KeyCode
    ) -> ReedlineEvent | None:
        return self.bindings.get(KeyCombination(modifier, key_code))

    def remove_binding(
        self, modifier: KeyModifiers, key_code: KeyCode
    ) -> ReedlineEvent | None:
        """Remove the binding and return the event it was bound to, if any."""
        return self.bindings.pop(KeyCombination(modifier, key_code), None)


def edit_bind(command: EditCommand) -> ReedlineEvent:
    """An event running the single edit ``command``."""
    return ReedlineEvent.edit([command])


def add_common_control_bindings(kb: Keybindings) -> None:
    """Esc, Ctrl-C, Ctrl-D, Ctrl-L, Ctrl-R and Ctrl-O (open the external editor)."""
    km, kc, ev = KeyModifiers, KeyCode, ReedlineEvent
    kb.add_binding(km.NONE, kc.ESC, ev.ESC)
    kb.add_binding(km.CONTROL, kc.from_char("c"), ev.CTRL_C)
    kb.add_binding(km.CONTROL, kc.from_char("d"), ev.CTRL_D)
    kb.add_binding(km.CONTROL, kc.from_char("l"), ev.CLEAR_SCREEN)
    kb.add_binding(km.CONTROL, kc.from_char("r"), ev.SEARCH_HISTORY)
    kb.add_binding(km.CONTROL, kc.from_char("o"), ev.OPEN_EDITOR)


def add_common_navigation_bindings(kb: Keybindings) -> None:
    """The arrow keys, Home/End and their Ctrl variants, plus Ctrl-P/N/A/E."""
    km, kc, ev, ec = KeyModifiers, KeyCode, ReedlineEvent, EditCommand

    up = ev.until_found([ev.MENU_UP, ev.UP])
    down = ev.until_found([ev.MENU_DOWN, ev.DOWN])
    to_line_end = ev.until_found([ev.HISTORY_HINT_COMPLETE, edit_bind(ec.MOVE_TO_LINE_END)])

    kb.add_binding(km.NONE, kc.UP, up)
    kb.add_binding(km.NONE, kc.DOWN, down)
    kb.add_binding(km.NONE, kc.LEFT, ev.until_found([ev.MENU_LEFT, ev.LEFT]))
    kb.add_binding(
        km.NONE,
        kc.RIGHT,
        ev.until_found([ev.HISTORY_HINT_COMPLETE, ev.MENU_RIGHT, ev.RIGHT]),
    )

    kb.add_binding(km.CONTROL, kc.LEFT, edit_bind(ec.MOVE_WORD_LEFT))
    kb.add_binding(
        km.CONTROL,
        kc.RIGHT,
        ev.until_found([ev.HISTORY_HINT_WORD_COMPLETE, edit_bind(ec.MOVE_WORD_RIGHT)]),
    )

    kb.add_binding(km.NONE, kc.HOME, edit_bind(ec.MOVE_TO_LINE_START))
    kb.add_binding(km.CONTROL, kc.from_char("a"), edit_bind(ec.MOVE_TO_LINE_START))
    kb.add_binding(km.NONE, kc.END, to_line_end)
    kb.add_binding(km.CONTROL, kc.from_char("e"), to_line_end)

    kb.add_binding(km.CONTROL, kc.HOME, edit_bind(ec.MOVE_TO_START))
    kb.add_binding(km.CONTROL, kc.END, edit_bind(ec.MOVE_TO_END))

    kb.add_binding(km.CONTROL, kc.from_char("p"), up)
    kb.add_binding(km.CONTROL, kc.from_char("n"), down)


def add_common_edit_bindings(kb: Keybindings) -> None:
    """Delete, Backspace and their word-deleting variants."""
    km, kc, ec = KeyModifiers, KeyCode, EditCommand
    kb.add_binding(km.NONE, kc.BACKSPACE, edit_bind(ec.BACKSPACE))
    kb.add_binding(km.NONE, kc.DELETE, edit_bind(ec.DELETE))
    kb.add_binding(km.CONTROL, kc.BACKSPACE, edit_bind(ec.BACKSPACE_WORD))
    kb.add_binding(km.CONTROL, kc.DELETE, edit_bind(ec.DELETE_WORD))
    # These leave the cut buffer alone.
    kb.add_binding(km.CONTROL, kc.from_char("h"), edit_bind(ec.BACKSPACE))
    kb.add_binding(km.CONTROL, kc.from_char("w"), edit_bind(ec.BACKSPACE_WORD))