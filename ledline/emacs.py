"""Emacs-style edit mode."""

from __future__ import annotations

from ledline.keybindings import (
    EditCommand,
    EditMode,
    Event,
    KeyCode,
    KeyEvent,
    KeyModifiers,
    Keybindings,
    MouseEvent,
    PromptEditMode,
    ReedlineEvent,
    ResizeEvent,
    add_common_control_bindings,
    add_common_edit_bindings,
    add_common_navigation_bindings,
    edit_bind,
)

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


def default_emacs_keybindings() -> Keybindings:
    """The default emacs keybindings."""
    km, kc, ev, ec = KeyModifiers, KeyCode, ReedlineEvent, EditCommand

    kb = Keybindings()
    add_common_control_bindings(kb)
    add_common_navigation_bindings(kb)
    add_common_edit_bindings(kb)

    word_right = ev.until_found(
        [ev.HISTORY_HINT_WORD_COMPLETE, edit_bind(ec.MOVE_WORD_RIGHT)]
    )

    # Ctrl: moves
    kb.add_binding(km.CONTROL, kc.from_char("b"), ev.until_found([ev.MENU_LEFT, ev.LEFT]))
    kb.add_binding(
        km.CONTROL,
        kc.from_char("f"),
        ev.until_found([ev.HISTORY_HINT_COMPLETE, ev.MENU_RIGHT, ev.RIGHT]),
    )
    # Ctrl: undo and redo
    kb.add_binding(km.CONTROL, kc.from_char("g"), edit_bind(ec.REDO))
    kb.add_binding(km.CONTROL, kc.from_char("z"), edit_bind(ec.UNDO))
    # Ctrl: cutting
    kb.add_binding(km.CONTROL, kc.from_char("y"), edit_bind(ec.PASTE_CUT_BUFFER_BEFORE))
    kb.add_binding(km.CONTROL, kc.from_char("w"), edit_bind(ec.CUT_WORD_LEFT))
    kb.add_binding(km.CONTROL, kc.from_char("k"), edit_bind(ec.CUT_TO_END))
    kb.add_binding(km.CONTROL, kc.from_char("u"), edit_bind(ec.CUT_FROM_START))
    # Ctrl: edits
    kb.add_binding(km.CONTROL, kc.from_char("t"), edit_bind(ec.SWAP_GRAPHEMES))

    # Alt: moves
    kb.add_binding(km.ALT, kc.LEFT, edit_bind(ec.MOVE_WORD_LEFT))
    kb.add_binding(km.ALT, kc.RIGHT, word_right)
    kb.add_binding(km.ALT, kc.from_char("b"), edit_bind(ec.MOVE_WORD_LEFT))
    kb.add_binding(km.ALT, kc.from_char("f"), word_right)
    # Alt: edits
    kb.add_binding(km.ALT, kc.DELETE, edit_bind(ec.DELETE_WORD))
    kb.add_binding(km.ALT, kc.BACKSPACE, edit_bind(ec.BACKSPACE_WORD))
    kb.add_binding(km.ALT, kc.from_char("m"), ev.edit([ec.BACKSPACE_WORD]))
    # Alt: cutting
    kb.add_binding(km.ALT, kc.from_char("d"), edit_bind(ec.CUT_WORD_RIGHT))
    # Alt: case changes
    kb.add_binding(km.ALT, kc.from_char("u"), edit_bind(ec.UPPERCASE_WORD))
    kb.add_binding(km.ALT, kc.from_char("l"), edit_bind(ec.LOWERCASE_WORD))
    kb.add_binding(km.ALT, kc.from_char("c"), edit_bind(ec.CAPITALIZE_CHAR))

    return kb


class Emacs(EditMode):
    """Parses input events like an emacs-style editor."""

    def __init__(self, keybindings: Keybindings | None = None) -> None:
        self.keybindings = (
            default_emacs_keybindings() if keybindings is None else keybindings
        )

    def _lookup(self, modifiers: KeyModifiers, code: KeyCode) -> ReedlineEvent:
        found = self.keybindings.find_binding(modifiers, code)
        return ReedlineEvent.NONE if found is None else found

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
            c = code.char if modifiers == KeyModifiers.NONE else _ascii_lower(code.char)
            # Mixed modifiers such as Ctrl+Alt come from keyboards with an
            # AltGr key and still produce ordinary characters.
            if modifiers in _INSERTING_MODIFIERS:
                if modifiers == KeyModifiers.SHIFT:
                    c = _ascii_upper(c)
                return ReedlineEvent.edit([EditCommand.insert_char(c)])
            return self._lookup(modifiers, KeyCode.from_char(c))
        if modifiers == KeyModifiers.NONE and code == KeyCode.ENTER:
            return ReedlineEvent.ENTER
        return self._lookup(modifiers, code)

    def edit_mode(self) -> PromptEditMode:
        return PromptEditMode.EMACS