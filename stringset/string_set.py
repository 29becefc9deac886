from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator

from structlog.typing import FilteringBoundLogger

from stringset.errors import NotAStringError


class StringSet(ABC):
    """A set of strings. Not thread-safe; wrap it in a lock if you share it."""

    __slots__ = ()

    @abstractmethod
    def put(self, *values: str) -> bool:
        """
        Add values to the set.

        Returns True if every value was new to the set. A value that was already
        a member, or that occurs more than once in this call, makes it False.
        """

    @abstractmethod
    def contains(self, *values: str) -> bool:
        """Return whether all values are members."""

    @abstractmethod
    def remove(self, *values: str) -> bool:
        """
        Remove values from the set.

        Returns True if every distinct value was a member before the call.
        """

    @abstractmethod
    def strings(self) -> list[str]:
        """Return a copy of all members in no particular order."""

    @abstractmethod
    def __len__(self) -> int: ...

    def __contains__(self, value: object) -> bool:
        return isinstance(value, str) and self.contains(value)

    def __iter__(self) -> Iterator[str]:
        # snapshot, so callers may mutate the set while iterating
        return iter(self.strings())


def _check_strings(operation: str, values: tuple[object, ...]) -> None:
    for position, value in enumerate(values):
        if not isinstance(value, str):
            raise NotAStringError(operation, position, value)


class MapStringSet(StringSet):
    """
    StringSet backed by a dict from member to the epoch it was first put in.

    Every put() call takes one epoch from the counter no matter how many values
    it carries. The epoch of a member is fixed by its first insertion and never
    rewritten afterwards.
    """

    __slots__ = ("_storage", "_next_epoch", "_log")

    def __init__(
        self, values: Iterable[str] | None = None, *, logger: FilteringBoundLogger | None = None
    ) -> None:
        self._storage: dict[str, int] = {}
        self._next_epoch: int = 0
        self._log = logger
        if isinstance(values, str):
            # a bare str would otherwise be split into characters
            raise NotAStringError(
                type(self).__name__,
                0,
                values,
                "values must be an iterable of str, not a single str; use new_with(value)",
            )
        if values is not None:
            self.put(*values)

    @property
    def next_epoch(self) -> int:
        return self._next_epoch

    def epoch_of(self, value: str) -> int | None:
        """Epoch of the put() call that first added value, None for non-members."""
        return self._storage.get(value)

    def put(self, *values: str) -> bool:
        _check_strings("put", values)

        epoch = self._next_epoch
        self._next_epoch += 1

        all_new = True
        for value in values:
            if not self._put_single(value, epoch):
                all_new = False

        if self._log is not None:
            self._log.debug("put", count=len(values), all_new=all_new, size=len(self._storage))
        return all_new

    def contains(self, *values: str) -> bool:
        _check_strings("contains", values)
        return all(value in self._storage for value in values)

    def remove(self, *values: str) -> bool:
        _check_strings("remove", values)

        # values may repeat; collapse them so a second occurrence of a removed
        # member is not counted as missing
        unique = MapStringSet(values)

        all_removed = True
        for value in unique._storage:
            if not self._remove_single(value):
                all_removed = False

        if self._log is not None:
            self._log.debug(
                "remove", count=len(values), all_removed=all_removed, size=len(self._storage)
            )
        return all_removed

    def strings(self) -> list[str]:
        return list(self._storage)

    def __len__(self) -> int:
        return len(self._storage)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={len(self._storage)})"

    # --- single-value helpers -------------------------------------------------

    def _put_single(self, value: str, epoch: int) -> bool:
        """Insert value under epoch unless it is a member already. Returns True on insert."""
        if value in self._storage:
            return False
        self._storage[value] = epoch
        return True

    def _remove_single(self, value: str) -> bool:
        if value in self._storage:
            del self._storage[value]
            return True
        return False


def new() -> StringSet:
    """Return a new empty set."""
    return MapStringSet()


def new_with(*values: str) -> StringSet:
    """Return a new set holding values."""
    return MapStringSet(values)


__all__ = [
    "MapStringSet",
    "StringSet",
    "new",
    "new_with",
]
