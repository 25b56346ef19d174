"""A small multiset of flags."""

from __future__ import annotations

from typing import Generic, Iterator, TypeVar

T = TypeVar("T")


class Flags(Generic[T]):
    """A collection of flags; setting a flag twice stores it twice."""

    def __init__(self, *initial: T) -> None:
        self._flags: list[T] = list(initial)

    def set_flag(self, value: T) -> None:
        """Add a flag."""
        self._flags.append(value)

    def unset_flag(self, value: T) -> bool:
        """Remove one occurrence of a flag; return whether it was present."""
        try:
            self._flags.remove(value)
        except ValueError:
            return False
        return True

    def flip_flag(self, value: T) -> None:
        """Remove the flag if present, otherwise add it."""
        if not self.unset_flag(value):
            self.set_flag(value)

    def has_flag(self, value: T) -> bool:
        """Return whether the flag is set."""
        return value in self._flags

    def __contains__(self, value: object) -> bool:
        return value in self._flags

    def __iter__(self) -> Iterator[T]:
        return iter(self._flags)

    def __len__(self) -> int:
        return len(self._flags)