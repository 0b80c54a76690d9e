from __future__ import annotations
import ctypes
import logging
from typing import Generic, Iterator, Optional, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class SlotArray(Generic[T]):
    """A fixed-capacity array of slots that only grows when asked to.

    Implementation notes
    --------------------
    • Storage is a ctypes array of `py_object` (not Python's built-in list).
    • Every slot starts out empty (``None``); there is no notion of size here,
      the owner decides which slots are live.
    • `expand()` doubles the capacity and keeps every slot at its index.
    • Negative indices are normalized against the capacity.
    """

    __slots__ = ("_buf", "_capacity")

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._capacity = capacity
        self._buf = self._make_array(capacity)

    # ------------------------------- internals -------------------------------

    @staticmethod
    def _make_array(capacity: int):
        """Allocate a raw ctypes array of `capacity` empty py_object slots."""
        buf = (capacity * ctypes.py_object)()
        # Unset py_object slots raise on read, so mark them empty explicitly.
        for i in range(capacity):
            buf[i] = None
        return buf

    def _normalize_index(self, idx: int) -> int:
        """Map negative indices and validate bounds.

        Returns the non-negative index in [0, capacity).
        Raises IndexError if out of range.
        """
        if idx < 0:
            idx += self._capacity
        if idx < 0 or idx >= self._capacity:
            raise IndexError("slot index out of range")
        return idx

    # --------------------------------- API -----------------------------------

    @property
    def capacity(self) -> int:
        return self._capacity

    def expand(self) -> None:
        """Double the capacity, copying every slot (occupied or not) in place."""
        new_capacity = self._capacity * 2
        new_buf = self._make_array(new_capacity)
        for i in range(self._capacity):
            new_buf[i] = self._buf[i]

        logger.debug("Expanded slot array from %d to %d slots", self._capacity, new_capacity)
        self._buf = new_buf
        self._capacity = new_capacity

    def clear(self, idx: int) -> None:
        """Empty the slot at `idx`."""
        self._buf[self._normalize_index(idx)] = None

    def __getitem__(self, idx: int) -> Optional[T]:
        return self._buf[self._normalize_index(idx)]

    def __setitem__(self, idx: int, value: Optional[T]) -> None:
        self._buf[self._normalize_index(idx)] = value

    def __len__(self) -> int:  # pragma: no cover - trivial
        return self._capacity

    def __iter__(self) -> Iterator[Optional[T]]:
        """Yield every slot from left to right, empty ones as None."""
        for i in range(self._capacity):
            yield self._buf[i]

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"SlotArray({list(self)!r})"
