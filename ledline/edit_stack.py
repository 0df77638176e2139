"""Linear undo/redo history of editor states."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Generic, TypeVar

T = TypeVar("T")


class EditStack(Generic[T]):
    """A list of states with a cursor; inserting after undoing drops the redo tail."""

    def __init__(
        self,
        default_factory: Callable[[], T],
        entries: Iterable[T] | None = None,
        index: int = 0,
    ) -> None:
        self._default_factory = default_factory
        self._entries: list[T] = (
            [default_factory()] if entries is None else list(entries)
        )
        if not self._entries:
            raise ValueError("an edit stack needs at least one entry")
        if not 0 <= index < len(self._entries):
            raise ValueError(
                f"index {index} out of range for {len(self._entries)} entries"
            )
        self.index = index

    @property
    def entries(self) -> tuple[T, ...]:
        return tuple(self._entries)

    def undo(self) -> T:
        """Step back one entry, staying put at the first one."""
        self.index = max(self.index - 1, 0)
        return self._entries[self.index]

    def redo(self) -> T:
        """Step forward one entry, staying put at the last one."""
        self.index = min(self.index + 1, len(self._entries) - 1)
        return self._entries[self.index]

    def insert(self, value: T) -> None:
        """Append ``value`` after the current entry, discarding any redo tail."""
        del self._entries[self.index + 1 :]
        self._entries.append(value)
        self.index += 1

    def reset(self) -> None:
        """Return to a single default entry."""
        self._entries = [self._default_factory()]
        self.index = 0

    def current(self) -> T:
        """The entry the cursor points at."""
        return self._entries[self.index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EditStack):
            return NotImplemented
        return self._entries == other._entries and self.index == other.index

    def __repr__(self) -> str:
        return f"EditStack(entries={self._entries!r}, index={self.index})"