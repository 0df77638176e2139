"""Vi-style edit mode with normal and insert modes."""

from __future__ import annotations

import enum

from ledline.keybindings import (
    EditCommand,
    EditMode,
    Event,
    EventKind,
    KeyCode,
    KeyEvent,
    KeyModifiers,
    Keybindings,
    MouseEvent,
    PromptEditMode,
    ReedlineEvent,
    ResizeEvent,
)
from ledline.vi_command import ViToTill
from ledline.vi_keybindings import (
    default_vi_insert_keybindings,
    default_vi_normal_keybindings,
)
from ledline.vi_parser import parse

_INSERTING_MODIFIERS = (
    KeyModifiers.NONE,
    KeyModifiers.SHIFT,
    KeyModifiers.CONTROL | KeyModifiers.ALT,
    KeyModifiers.CONTROL | KeyModifiers.ALT | KeyModifiers.SHIFT,
)


def _ascii_lower(c: str) -> str:
    return c.lower() if "A" <= c <= "Z" else c


def _ascii_upper(c: str) -> str:
    return c.upper() if "a" <= c <= "z" else c


class ViMode(enum.Enum):
    NORMAL = enum.auto()
    INSERT = enum.auto()


class Vi(EditMode):
    """Parses input events like a vi-style editor; starts in insert mode."""

    def __init__(
        self,
        insert_keybindings: Keybindings | None = None,
        normal_keybindings: Keybindings | None = None,
    ) -> None:
        self.insert_keybindings = (
            default_vi_insert_keybindings()
            if insert_keybindings is None
            else insert_keybindings
        )
        self.normal_keybindings = (
            default_vi_normal_keybindings()
            if normal_keybindings is None
            else normal_keybindings
        )
        self.cache: list[str] = []
        self.mode = ViMode.INSERT
        self.previous: ReedlineEvent | None = None
        # Last f, F, t or T motion, repeated by ; and ,
        self.last_to_till: ViToTill | None = None

    @staticmethod
    def _lookup(
        keybindings: Keybindings, modifiers: KeyModifiers, code: KeyCode
    ) -> ReedlineEvent:
        found = keybindings.find_binding(modifiers, code)
        return ReedlineEvent.NONE if found is None else found

    def _normal_char(self, modifiers: KeyModifiers, c: str) -> ReedlineEvent:
        # Repeating is handled here since the last event lives in the mode.
        if c == "." and self.previous is not None:
            return self.previous

        c = _ascii_lower(c)
        bound = self.normal_keybindings.find_binding(modifiers, KeyCode.from_char(c))
        if bound is not None:
            return bound
        if modifiers not in (KeyModifiers.NONE, KeyModifiers.SHIFT):
            return ReedlineEvent.NONE

        self.cache.append(_ascii_upper(c) if modifiers == KeyModifiers.SHIFT else c)
        result = parse(self, self.cache)
        if result.enter_insert_mode():
            self.mode = ViMode.INSERT

        event = result.to_reedline_event()
        if event != ReedlineEvent.NONE or not result.is_valid():
            self.cache.clear()

        if event.kind is EventKind.MULTIPLE:
            events = event.events
            if (
                len(events) == 2
                and events[0] == ReedlineEvent.RECORD_TO_TILL
                and events[1].kind is EventKind.EDIT
            ):
                to_till = ViToTill.from_edit_command(events[1].commands[0])
                if to_till is not None:
                    self.last_to_till = to_till

        self.previous = event
        return event

    def _insert_char(self, modifiers: KeyModifiers, c: str) -> ReedlineEvent:
        if modifiers != KeyModifiers.NONE:
            c = _ascii_lower(c)
        # Mixed modifiers such as Ctrl+Alt come from keyboards with an AltGr
        # key and still produce ordinary characters.
        if modifiers in _INSERTING_MODIFIERS:
            if modifiers == KeyModifiers.SHIFT:
                c = _ascii_upper(c)
            return ReedlineEvent.edit([EditCommand.insert_char(c)])
        return self._lookup(self.insert_keybindings, modifiers, KeyCode.from_char(c))

    def parse_event(self, event: Event) -> ReedlineEvent:
        if isinstance(event, MouseEvent):
            return ReedlineEvent.MOUSE
        if isinstance(event, ResizeEvent):
            return ReedlineEvent.resize(event.width, event.height)
        if not isinstance(event, KeyEvent):
            raise TypeError(f"unsupported event {event!r}")

        modifiers, code = event.modifiers, event.code
        if code.is_char:
            assert code.char is not None
            if self.mode is ViMode.NORMAL:
                return self._normal_char(modifiers, code.char)
            return self._insert_char(modifiers, code.char)
        if modifiers == KeyModifiers.NONE and code == KeyCode.ESC:
            self.cache.clear()
            self.mode = ViMode.NORMAL
            return ReedlineEvent.multiple([ReedlineEvent.ESC, ReedlineEvent.REPAINT])
        if modifiers == KeyModifiers.NONE and code == KeyCode.ENTER:
            self.mode = ViMode.INSERT
            return ReedlineEvent.ENTER
        if self.mode is ViMode.NORMAL:
            return self._lookup(self.normal_keybindings, modifiers, code)
        return self._lookup(self.insert_keybindings, modifiers, code)

    def edit_mode(self) -> PromptEditMode:
        if self.mode is ViMode.NORMAL:
            return PromptEditMode.VI_NORMAL
        return PromptEditMode.VI_INSERT