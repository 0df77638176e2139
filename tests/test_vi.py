import pytest

from ledline.keybindings import (
    EditCommand,
    KeyCode,
    KeyEvent,
    KeyModifiers,
    MouseEvent,
    PromptEditMode,
    ReedlineEvent,
    ResizeEvent,
)
from ledline.vi import Vi, ViMode
from ledline.vi_command import ViToTill
from ledline.vi_keybindings import (
    default_vi_insert_keybindings,
    default_vi_normal_keybindings,
)


def key(c, modifiers=KeyModifiers.NONE):
    return KeyEvent(KeyCode.from_char(c), modifiers)


def normal_vi(normal_keybindings=None):
    vi = Vi(default_vi_insert_keybindings(), normal_keybindings)
    vi.mode = ViMode.NORMAL
    return vi


def test_esc_leads_to_normal_mode():
    vi = Vi()
    result = vi.parse_event(KeyEvent(KeyCode.ESC))
    assert result == ReedlineEvent.multiple([ReedlineEvent.ESC, ReedlineEvent.REPAINT])
    assert vi.mode is ViMode.NORMAL
    assert vi.edit_mode() is PromptEditMode.VI_NORMAL


def test_keybinding_without_modifier():
    keybindings = default_vi_normal_keybindings()
    keybindings.add_binding(
        KeyModifiers.NONE, KeyCode.from_char("e"), ReedlineEvent.CLEAR_SCREEN
    )
    vi = normal_vi(keybindings)
    assert vi.parse_event(key("e")) == ReedlineEvent.CLEAR_SCREEN


def test_keybinding_with_shift_modifier():
    keybindings = default_vi_normal_keybindings()
    keybindings.add_binding(KeyModifiers.SHIFT, KeyCode.from_char("$"), ReedlineEvent.CTRL_D)
    vi = normal_vi(keybindings)
    assert vi.parse_event(key("$", KeyModifiers.SHIFT)) == ReedlineEvent.CTRL_D


def test_non_register_modifier():
    vi = normal_vi(default_vi_normal_keybindings())
    assert vi.parse_event(key("q")) == ReedlineEvent.NONE
    assert vi.cache == []


@pytest.mark.parametrize(
    "code, modifiers, expected",
    [
        ("f", KeyModifiers.NONE, ViToTill.to_right("X")),
        ("f", KeyModifiers.SHIFT, ViToTill.to_left("X")),
        ("t", KeyModifiers.NONE, ViToTill.till_right("X")),
        ("t", KeyModifiers.SHIFT, ViToTill.till_left("X")),
    ],
)
def test_last_to_till(code, modifiers, expected):
    vi = Vi()
    vi.mode = ViMode.NORMAL
    vi.parse_event(key(code, modifiers))
    vi.parse_event(key("x", KeyModifiers.SHIFT))
    assert vi.last_to_till == expected


def test_semicolon_replays_and_comma_reverses_to_till():
    vi = normal_vi()
    vi.parse_event(key("f"))
    vi.parse_event(key("x", KeyModifiers.SHIFT))
    assert vi.parse_event(key(";")) == ReedlineEvent.multiple(
        [ReedlineEvent.edit([EditCommand.move_right_until("X")])]
    )
    assert vi.parse_event(key(",")) == ReedlineEvent.multiple(
        [ReedlineEvent.edit([EditCommand.move_left_until("X")])]
    )


def test_insert_mode_inserts_characters():
    vi = Vi()
    assert vi.edit_mode() is PromptEditMode.VI_INSERT
    assert vi.parse_event(key("l")) == ReedlineEvent.edit([EditCommand.insert_char("l")])
    assert vi.parse_event(key("l", KeyModifiers.SHIFT)) == ReedlineEvent.edit(
        [EditCommand.insert_char("L")]
    )


def test_insert_mode_uses_control_bindings():
    vi = Vi()
    assert vi.parse_event(key("c", KeyModifiers.CONTROL)) == ReedlineEvent.CTRL_C


def test_delete_word_sequence():
    vi = normal_vi()
    assert vi.parse_event(key("d")) == ReedlineEvent.NONE
    assert vi.cache == ["d"]
    assert vi.parse_event(key("w")) == ReedlineEvent.multiple(
        [ReedlineEvent.edit([EditCommand.CUT_WORD_RIGHT_TO_NEXT])]
    )
    assert vi.cache == []


def test_dot_repeats_previous_event():
    vi = normal_vi()
    first = vi.parse_event(key("k"))
    assert first == ReedlineEvent.multiple([ReedlineEvent.UP])
    assert vi.parse_event(key(".")) == first


def test_i_enters_insert_mode():
    vi = normal_vi()
    assert vi.parse_event(key("i")) == ReedlineEvent.multiple([ReedlineEvent.REPAINT])
    assert vi.mode is ViMode.INSERT


def test_enter_returns_to_insert_mode():
    vi = normal_vi()
    assert vi.parse_event(KeyEvent(KeyCode.ENTER)) == ReedlineEvent.ENTER
    assert vi.mode is ViMode.INSERT


def test_normal_mode_backspace_moves_left():
    vi = normal_vi()
    assert vi.parse_event(KeyEvent(KeyCode.BACKSPACE)) == ReedlineEvent.edit(
        [EditCommand.MOVE_LEFT]
    )


def test_mouse_and_resize():
    vi = Vi()
    assert vi.parse_event(MouseEvent()) == ReedlineEvent.MOUSE
    assert vi.parse_event(ResizeEvent(80, 24)) == ReedlineEvent.resize(80, 24)


def test_unknown_event_raises():
    with pytest.raises(TypeError):
        Vi().parse_event("not an event")