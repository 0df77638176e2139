import pytest

from ledline.keybindings import (
    EditCommand,
    EditKind,
    EventKind,
    KeyCode,
    KeyModifiers,
    Keybindings,
    ReedlineEvent,
    add_common_control_bindings,
    add_common_edit_bindings,
    add_common_navigation_bindings,
    edit_bind,
)


def test_empty_keybindings_have_no_bindings():
    kb = Keybindings.empty()
    assert kb.bindings == {}
    assert kb.find_binding(KeyModifiers.CONTROL, KeyCode.from_char("c")) is None


def test_add_then_find_round_trip():
    kb = Keybindings()
    kb.add_binding(KeyModifiers.CONTROL, KeyCode.from_char("x"), ReedlineEvent.REPAINT)
    assert kb.find_binding(KeyModifiers.CONTROL, KeyCode.from_char("x")) == ReedlineEvent.REPAINT


def test_binding_depends_on_modifiers():
    kb = Keybindings()
    kb.add_binding(KeyModifiers.CONTROL, KeyCode.from_char("x"), ReedlineEvent.REPAINT)
    combined = KeyModifiers.CONTROL | KeyModifiers.ALT
    assert kb.find_binding(combined, KeyCode.from_char("x")) is None
    assert kb.find_binding(KeyModifiers.NONE, KeyCode.from_char("x")) is None


def test_add_binding_replaces_previous():
    kb = Keybindings()
    kb.add_binding(KeyModifiers.NONE, KeyCode.TAB, ReedlineEvent.REPAINT)
    kb.add_binding(KeyModifiers.NONE, KeyCode.TAB, ReedlineEvent.ENTER)
    assert kb.find_binding(KeyModifiers.NONE, KeyCode.TAB) == ReedlineEvent.ENTER
    assert len(kb.bindings) == 1


def test_remove_binding_returns_previous_event():
    kb = Keybindings()
    kb.add_binding(KeyModifiers.NONE, KeyCode.TAB, ReedlineEvent.REPAINT)
    assert kb.remove_binding(KeyModifiers.NONE, KeyCode.TAB) == ReedlineEvent.REPAINT
    assert kb.find_binding(KeyModifiers.NONE, KeyCode.TAB) is None
    assert kb.remove_binding(KeyModifiers.NONE, KeyCode.TAB) is None


def test_empty_until_found_is_rejected():
    kb = Keybindings()
    with pytest.raises(ValueError):
        kb.add_binding(KeyModifiers.NONE, KeyCode.TAB, ReedlineEvent.until_found([]))
    assert kb.bindings == {}


def test_edit_bind_wraps_single_command():
    event = edit_bind(EditCommand.UNDO)
    assert event == ReedlineEvent.edit([EditCommand.UNDO])
    assert event.kind is EventKind.EDIT
    assert event.commands == (EditCommand.UNDO,)


def test_edit_commands_with_payload_compare_by_value():
    assert EditCommand.insert_char("l") == EditCommand.insert_char("l")
    assert EditCommand.insert_char("l") != EditCommand.insert_char("L")
    assert EditCommand.move_right_until("x").args == ("x",)
    assert EditCommand.UNDO.kind is EditKind.UNDO


def test_edit_command_validates_arguments():
    with pytest.raises(ValueError):
        EditCommand.insert_char("ab")
    with pytest.raises(ValueError):
        EditCommand(EditKind.UNDO, ("x",))
    with pytest.raises(ValueError):
        EditCommand.move_to_position(-1)


def test_events_are_hashable_and_equal_by_value():
    first = ReedlineEvent.until_found([ReedlineEvent.MENU_UP, ReedlineEvent.UP])
    second = ReedlineEvent.until_found([ReedlineEvent.MENU_UP, ReedlineEvent.UP])
    assert first == second
    assert {first: 1}[second] == 1
    assert first.events == (ReedlineEvent.MENU_UP, ReedlineEvent.UP)


def test_event_payload_accessors_reject_wrong_kind():
    with pytest.raises(ValueError):
        ReedlineEvent.ENTER.commands
    with pytest.raises(ValueError):
        ReedlineEvent.ENTER.events
    with pytest.raises(ValueError):
        ReedlineEvent.multiple([EditCommand.UNDO])


def test_key_code_validation():
    with pytest.raises(ValueError):
        KeyCode.from_char("ab")
    with pytest.raises(ValueError):
        KeyCode("Esc", "x")
    assert KeyCode.from_char("a").is_char
    assert not KeyCode.ESC.is_char


def test_common_control_bindings():
    kb = Keybindings()
    add_common_control_bindings(kb)
    assert kb.find_binding(KeyModifiers.NONE, KeyCode.ESC) == ReedlineEvent.ESC
    assert kb.find_binding(KeyModifiers.CONTROL, KeyCode.from_char("c")) == ReedlineEvent.CTRL_C
    assert kb.find_binding(KeyModifiers.CONTROL, KeyCode.from_char("d")) == ReedlineEvent.CTRL_D
    assert (
        kb.find_binding(KeyModifiers.CONTROL, KeyCode.from_char("l"))
        == ReedlineEvent.CLEAR_SCREEN
    )
    assert (
        kb.find_binding(KeyModifiers.CONTROL, KeyCode.from_char("r"))
        == ReedlineEvent.SEARCH_HISTORY
    )
    assert (
        kb.find_binding(KeyModifiers.CONTROL, KeyCode.from_char("o"))
        == ReedlineEvent.OPEN_EDITOR
    )


def test_common_navigation_bindings():
    kb = Keybindings()
    add_common_navigation_bindings(kb)
    up = ReedlineEvent.until_found([ReedlineEvent.MENU_UP, ReedlineEvent.UP])
    assert kb.find_binding(KeyModifiers.NONE, KeyCode.UP) == up
    assert kb.find_binding(KeyModifiers.CONTROL, KeyCode.from_char("p")) == up
    assert kb.find_binding(KeyModifiers.NONE, KeyCode.HOME) == edit_bind(
        EditCommand.MOVE_TO_LINE_START
    )
    assert kb.find_binding(KeyModifiers.CONTROL, KeyCode.END) == edit_bind(
        EditCommand.MOVE_TO_END
    )
    assert kb.find_binding(KeyModifiers.NONE, KeyCode.END) == kb.find_binding(
        KeyModifiers.CONTROL, KeyCode.from_char("e")
    )


def test_common_edit_bindings():
    kb = Keybindings()
    add_common_edit_bindings(kb)
    assert kb.find_binding(KeyModifiers.NONE, KeyCode.BACKSPACE) == edit_bind(
        EditCommand.BACKSPACE
    )
    assert kb.find_binding(KeyModifiers.CONTROL, KeyCode.from_char("w")) == edit_bind(
        EditCommand.BACKSPACE_WORD
    )
    assert kb.find_binding(KeyModifiers.CONTROL, KeyCode.DELETE) == edit_bind(
        EditCommand.DELETE_WORD
    )