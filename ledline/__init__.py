"""Line editing core: text buffer, cursor motions, undo history, clipboard and Emacs/Vi key handling."""

__version__ = "0.1.0"

__all__ = [
    "segment",
    "edit_stack",
    "navigation",
    "clipboard",
    "line_buffer",
    "vi_motion",
    "keybindings",
    "emacs",
    "vi_keybindings",
    "vi_command",
    "vi_parser",
    "vi",
]