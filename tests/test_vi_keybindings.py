from ledline.keybindings import (
    EditCommand,
    KeyCode,
    KeyModifiers,
    ReedlineEvent,
    edit_bind,
)
from ledline.vi_keybindings import (
    default_vi_insert_keybindings,
    default_vi_normal_keybindings,
)


def test_normal_backspace_moves_left():
    kb = default_vi_normal_keybindings()
    assert kb.find_binding(KeyModifiers.NONE, KeyCode.BACKSPACE) == edit_bind(
        EditCommand.MOVE_LEFT
    )


def test_normal_delete_deletes():
    kb = default_vi_normal_keybindings()
    assert kb.find_binding(KeyModifiers.NONE, KeyCode.DELETE) == edit_bind(
        EditCommand.DELETE
    )


def test_normal_mode_has_no_word_deleting_bindings():
    kb = default_vi_normal_keybindings()
    assert kb.find_binding(KeyModifiers.CONTROL, KeyCode.from_char("w")) is None
    assert kb.find_binding(KeyModifiers.CONTROL, KeyCode.BACKSPACE) is None


def test_insert_backspace_deletes():
    kb = default_vi_insert_keybindings()
    assert kb.find_binding(KeyModifiers.NONE, KeyCode.BACKSPACE) == edit_bind(
        EditCommand.BACKSPACE
    )
    assert kb.find_binding(KeyModifiers.CONTROL, KeyCode.from_char("w")) == edit_bind(
        EditCommand.BACKSPACE_WORD
    )


def test_both_modes_share_control_and_navigation_bindings():
    normal = default_vi_normal_keybindings()
    insert = default_vi_insert_keybindings()
    for modifier, code in [
        (KeyModifiers.NONE, KeyCode.ESC),
        (KeyModifiers.CONTROL, KeyCode.from_char("c")),
        (KeyModifiers.NONE, KeyCode.UP),
        (KeyModifiers.NONE, KeyCode.HOME),
    ]:
        found = normal.find_binding(modifier, code)
        assert found == insert.find_binding(modifier, code)
        assert found is not None
    assert normal.find_binding(KeyModifiers.CONTROL, KeyCode.from_char("c")) == (
        ReedlineEvent.CTRL_C
    )


def test_each_call_returns_independent_table():
    first = default_vi_insert_keybindings()
    second = default_vi_insert_keybindings()
    first.remove_binding(KeyModifiers.NONE, KeyCode.ESC)
    assert first.find_binding(KeyModifiers.NONE, KeyCode.ESC) is None
    assert second.find_binding(KeyModifiers.NONE, KeyCode.ESC) == ReedlineEvent.ESC