"""Selection of listed files marked for a bulk download or delete."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class SelectionSet:
    """Set of file names currently marked by the user.

    Independent of any upload session. Bulk actions clear it once they
    complete.
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: set[str] = set(names)

    def toggle(self, name: str) -> bool:
        """Flip membership of ``name``.

        Returns:
            True if the name is selected after the call.
        """
        if name in self._names:
            self._names.discard(name)
            return False
        self._names.add(name)
        return True

    def select_all(self, candidates: Iterable[str]) -> None:
        """Mark every candidate name."""
        self._names.update(candidates)

    def clear(self) -> None:
        """Unmark everything."""
        self._names.clear()

    def size(self) -> int:
        """Return how many names are selected."""
        return len(self._names)

    def names(self) -> list[str]:
        """Return selected names in sorted order."""
        return sorted(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __repr__(self) -> str:
        return f"SelectionSet({self.names()!r})"
