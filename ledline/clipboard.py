"""Cut buffers used by the editor for cut, copy and paste."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod

from ledline.segment import utf8_len


class ClipboardMode(enum.Enum):
    """How clipboard content is inserted when pasted."""

    NORMAL = enum.auto()
    """At the cursor position, as is."""
    LINES = enum.auto()
    """As whole lines above or below the current one."""


class Clipboard(ABC):
    """Storage for cut text together with its paste mode."""

    @abstractmethod
    def set(self, content: str, mode: ClipboardMode) -> None:
        """Replace the content and its mode."""

    @abstractmethod
    def get(self) -> tuple[str, ClipboardMode]:
        """Return the content and its mode."""

    def clear(self) -> None:
        """Empty the clipboard."""
        self.set("", ClipboardMode.NORMAL)

    def __len__(self) -> int:
        """Length of the content in UTF-8 bytes."""
        return utf8_len(self.get()[0])


class LocalClipboard(Clipboard):
    """A clipboard private to the running editor."""

    def __init__(self) -> None:
        self._content = ""
        self._mode = ClipboardMode.NORMAL

    def set(self, content: str, mode: ClipboardMode) -> None:
        self._content = content
        self._mode = mode

    def get(self) -> tuple[str, ClipboardMode]:
        return self._content, self._mode


def get_default_clipboard() -> Clipboard:
    """The clipboard the editor uses unless told otherwise."""
    return LocalClipboard()