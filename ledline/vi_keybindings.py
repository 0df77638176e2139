"""Default keybindings for the two vi modes."""

from __future__ import annotations

from ledline.keybindings import (
    EditCommand,
    KeyCode,
    KeyModifiers,
    Keybindings,
    add_common_control_bindings,
    add_common_edit_bindings,
    add_common_navigation_bindings,
    edit_bind,
)


def default_vi_normal_keybindings() -> Keybindings:
    """Default vi normal-mode keybindings."""
    kb = Keybindings()
    add_common_control_bindings(kb)
    add_common_navigation_bindings(kb)
    # As in vi, Backspace only moves left in normal mode.
    kb.add_binding(KeyModifiers.NONE, KeyCode.BACKSPACE, edit_bind(EditCommand.MOVE_LEFT))
    kb.add_binding(KeyModifiers.NONE, KeyCode.DELETE, edit_bind(EditCommand.DELETE))
    return kb


def default_vi_insert_keybindings() -> Keybindings:
    """Default vi insert-mode keybindings."""
    kb = Keybindings()
    add_common_control_bindings(kb)
    add_common_navigation_bindings(kb)
    add_common_edit_bindings(kb)
    return kb