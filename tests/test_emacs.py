from ledline.emacs import Emacs, default_emacs_keybindings
from ledline.keybindings import (
    EditCommand,
    KeyCode,
    KeyEvent,
    KeyModifiers,
    Keybindings,
    MouseEvent,
    PromptEditMode,
    ReedlineEvent,
    ResizeEvent,
    edit_bind,
)


def key(c, modifiers=KeyModifiers.NONE):
    return KeyEvent(KeyCode.from_char(c), modifiers)


def test_ctrl_l_leads_to_clear_screen_event():
    emacs = Emacs()
    assert emacs.parse_event(key("l", KeyModifiers.CONTROL)) == ReedlineEvent.CLEAR_SCREEN


def test_overriding_default_keybindings_works():
    keybindings = default_emacs_keybindings()
    keybindings.add_binding(
        KeyModifiers.CONTROL,
        KeyCode.from_char("l"),
        ReedlineEvent.HISTORY_HINT_COMPLETE,
    )
    emacs = Emacs(keybindings)
    result = emacs.parse_event(key("l", KeyModifiers.CONTROL))
    assert result == ReedlineEvent.HISTORY_HINT_COMPLETE


def test_inserting_character_works():
    emacs = Emacs()
    result = emacs.parse_event(key("l"))
    assert result == ReedlineEvent.edit([EditCommand.insert_char("l")])


def test_inserting_capital_character_works():
    emacs = Emacs()
    result = emacs.parse_event(key("l", KeyModifiers.SHIFT))
    assert result == ReedlineEvent.edit([EditCommand.insert_char("L")])


def test_return_none_reedline_event_when_keybinding_is_not_found():
    emacs = Emacs(Keybindings())
    result = emacs.parse_event(key("l", KeyModifiers.CONTROL))
    assert result == ReedlineEvent.NONE


def test_inserting_capital_character_for_non_ascii_remains_as_is():
    emacs = Emacs()
    result = emacs.parse_event(key("😀", KeyModifiers.SHIFT))
    assert result == ReedlineEvent.edit([EditCommand.insert_char("😀")])


def test_ctrl_alt_inserts_lowercased_character():
    emacs = Emacs()
    result = emacs.parse_event(key("Q", KeyModifiers.CONTROL | KeyModifiers.ALT))
    assert result == ReedlineEvent.edit([EditCommand.insert_char("q")])


def test_emacs_ctrl_w_overrides_common_binding():
    emacs = Emacs()
    result = emacs.parse_event(key("w", KeyModifiers.CONTROL))
    assert result == edit_bind(EditCommand.CUT_WORD_LEFT)


def test_uppercase_char_with_control_is_looked_up_lowercased():
    emacs = Emacs()
    result = emacs.parse_event(key("Z", KeyModifiers.CONTROL))
    assert result == edit_bind(EditCommand.UNDO)


def test_enter_mouse_and_resize():
    emacs = Emacs()
    assert emacs.parse_event(KeyEvent(KeyCode.ENTER)) == ReedlineEvent.ENTER
    assert emacs.parse_event(MouseEvent()) == ReedlineEvent.MOUSE
    assert emacs.parse_event(ResizeEvent(80, 24)) == ReedlineEvent.resize(80, 24)


def test_named_key_uses_bindings():
    emacs = Emacs()
    result = emacs.parse_event(KeyEvent(KeyCode.LEFT, KeyModifiers.ALT))
    assert result == edit_bind(EditCommand.MOVE_WORD_LEFT)


def test_edit_mode_is_emacs():
    assert Emacs().edit_mode() is PromptEditMode.EMACS