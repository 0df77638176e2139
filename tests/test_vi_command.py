from collections import deque
from types import SimpleNamespace

import pytest

from ledline.keybindings import EditCommand, ReedlineEvent
from ledline.vi_command import (
    Command,
    CommandKind,
    ReedlineOption,
    ViToTill,
    parse_command,
)
from ledline.vi_motion import Motion, MotionKind


def _vi(last_to_till=None):
    return SimpleNamespace(last_to_till=last_to_till)


@pytest.mark.parametrize(
    "key, last_to_till, expected",
    [
        (";", None, None),
        (",", None, None),
        (";", ViToTill.to_right("X"), Command.replay_to_till(ViToTill.to_right("X"))),
        (",", ViToTill.to_right("X"), Command.reverse_to_till(ViToTill.to_right("X"))),
    ],
)
def test_repeat_to_till(key, last_to_till, expected):
    chars = deque([key])
    assert parse_command(_vi(last_to_till), chars) == expected
    assert not chars


@pytest.mark.parametrize(
    "key, kind",
    [
        ("d", CommandKind.DELETE),
        ("P", CommandKind.PASTE_BEFORE),
        ("0", CommandKind.MOVE_TO_LINE_START),
        ("^", CommandKind.MOVE_TO_LINE_START),
        ("~", CommandKind.SWITCHCASE),
        ("S", CommandKind.REWRITE_CURRENT_LINE),
    ],
)
def test_parse_simple_commands(key, kind):
    chars = deque([key, "w"])
    assert parse_command(_vi(), chars) == Command(kind)
    assert list(chars) == ["w"]


def test_parse_char_command_leaves_target_in_place():
    chars = deque(["f", "x"])
    assert parse_command(_vi(), chars) == Command.move_right_until("x")
    assert list(chars) == ["x"]


def test_parse_char_command_without_target_is_incomplete():
    chars = deque(["r"])
    assert parse_command(_vi(), chars) == Command.INCOMPLETE


def test_parse_unknown_key_consumes_nothing():
    chars = deque(["q"])
    assert parse_command(_vi(), chars) is None
    assert list(chars) == ["q"]


def test_reverse_swaps_direction():
    assert ViToTill.to_right("a").reverse() == ViToTill.to_left("a")
    assert ViToTill.till_left("b").reverse() == ViToTill.till_right("b")


@pytest.mark.parametrize(
    "to_till, edit",
    [
        (ViToTill.till_left("c"), EditCommand.move_left_before("c")),
        (ViToTill.to_left("c"), EditCommand.move_left_until("c")),
        (ViToTill.till_right("c"), EditCommand.move_right_before("c")),
        (ViToTill.to_right("c"), EditCommand.move_right_until("c")),
    ],
)
def test_to_till_edit_round_trip(to_till, edit):
    assert to_till.to_edit_command() == edit
    assert ViToTill.from_edit_command(edit) == to_till


def test_from_edit_command_rejects_other_edits():
    assert ViToTill.from_edit_command(EditCommand.UNDO) is None


def test_to_reedline_simple():
    assert Command.MOVE_UP.to_reedline() == [ReedlineOption.event(ReedlineEvent.UP)]
    assert Command.UNDO.to_reedline() == [ReedlineOption.edit(EditCommand.UNDO)]
    assert Command.DELETE.to_reedline() == [ReedlineOption.INCOMPLETE]


def test_to_reedline_to_till_records():
    assert Command.move_left_before("z").to_reedline() == [
        ReedlineOption.event(ReedlineEvent.RECORD_TO_TILL),
        ReedlineOption.edit(EditCommand.move_left_before("z")),
    ]


def test_to_reedline_reverse_to_till():
    command = Command.reverse_to_till(ViToTill.to_right("q"))
    assert command.to_reedline() == [
        ReedlineOption.edit(EditCommand.move_left_until("q"))
    ]


def test_delete_with_motion():
    result = Command.DELETE.to_reedline_with_motion(Motion(MotionKind.NEXT_WORD), None)
    assert result == [ReedlineOption.edit(EditCommand.CUT_WORD_RIGHT_TO_NEXT)]


def test_delete_with_char_motion():
    motion = Motion(MotionKind.LEFT_BEFORE, "k")
    result = Command.DELETE.to_reedline_with_motion(motion, None)
    assert result == [ReedlineOption.edit(EditCommand.cut_left_before("k"))]


def test_change_line_with_count():
    result = Command.CHANGE.to_reedline_with_motion(Motion(MotionKind.LINE), 2)
    once = [
        ReedlineOption.edit(EditCommand.MOVE_TO_START),
        ReedlineOption.edit(EditCommand.CLEAR_TO_LINE_END),
        ReedlineOption.event(ReedlineEvent.REPAINT),
    ]
    assert result == once * 2


def test_motion_on_other_command_is_none():
    assert Command.UNDO.to_reedline_with_motion(Motion(MotionKind.END), None) is None


def test_option_to_event():
    assert ReedlineOption.INCOMPLETE.to_event() == ReedlineEvent.NONE
    assert ReedlineOption.edit(EditCommand.UNDO).to_event() == ReedlineEvent.edit(
        [EditCommand.UNDO]
    )


def test_char_command_needs_char():
    with pytest.raises(ValueError):
        Command(CommandKind.REPLACE_CHAR)