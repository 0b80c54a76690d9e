from __future__ import annotations
import logging
from typing import Any, Generic, Iterable, Iterator, Optional, Tuple, TypeVar, Union

from .exceptions import KeyNotFoundError
from .slot_array import SlotArray

K = TypeVar("K")
V = TypeVar("V")

logger = logging.getLogger(__name__)

# Number of slots allocated for a new, empty array.
DEFAULT_CAPACITY = 16


class KVPair(Generic[K, V]):
    """A single key/value pair owned by an :class:`AssociativeArray` slot."""

    __slots__ = ("key", "value")

    def __init__(self, key: K, value: V) -> None:
        self.key = key
        self.value = value

    def __iter__(self) -> Iterator[Any]:
        # Allows `k, v = pair`
        yield self.key
        yield self.value

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"KVPair({self.key!r}, {self.value!r})"


class AssociativeArray(Generic[K, V]):
    """A key/value map stored as a growable array of pairs.

    Lookup is a linear scan by equality, so keys only need ``==``, not
    ``hash``. The live pairs always occupy the first ``size`` slots:
    removal moves the last pair into the hole, which means slot order is
    insertion order only until the first removal.

    Capacity starts at :data:`DEFAULT_CAPACITY`, doubles when a new key
    arrives and every slot is taken, and is never given back.
    """

    __slots__ = ("_pairs", "_size")

    def __init__(
        self,
        it: Optional[Union[Iterable[Tuple[K, V]], Any]] = None,
        capacity: int = DEFAULT_CAPACITY,
        **kwargs: V,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._pairs: SlotArray[KVPair[K, V]] = SlotArray(capacity)
        self._size: int = 0
        if it is not None:
            # Accept dict-like or iterable of pairs
            if hasattr(it, "items"):
                for k, v in it.items():
                    self.set(k, v)
            else:
                for k, v in it:
                    self.set(k, v)
        for k, v in kwargs.items():
            self.set(k, v)  # type: ignore[arg-type]

    # -----------------------------
    # Internal helpers
    # -----------------------------
    def _find(self, key: K) -> Optional[int]:
        """Return the slot index holding *key*, or None if it is absent."""
        for i in range(self._size):
            if self._pairs[i].key == key:  # type: ignore[union-attr]
                return i
        return None

    def _expand(self) -> None:
        self._pairs.expand()

    # -----------------------------
    # Core operations
    # -----------------------------
    def set(self, key: K, value: V) -> None:
        """Insert or update key-value pair."""
        i = self._find(key)
        if i is not None:
            self._pairs[i].value = value  # type: ignore[union-attr]
            return
        if self._size == self._pairs.capacity:
            self._expand()
        self._pairs[self._size] = KVPair(key, value)
        self._size += 1

    def get(self, key: K) -> V:
        """Return the value stored under *key*.

        Raises:
            KeyNotFoundError: if no pair holds *key*.
        """
        i = self._find(key)
        if i is None:
            raise KeyNotFoundError(key)
        return self._pairs[i].value  # type: ignore[union-attr]

    def get_or(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Return the value for *key*, or *default* if it is absent."""
        i = self._find(key)
        return default if i is None else self._pairs[i].value  # type: ignore[union-attr]

    def has_key(self, key: K) -> bool:
        """Check if key exists in the array."""
        return self._find(key) is not None

    def remove(self, key: K) -> bool:
        """Remove *key* if present; return True if a pair was removed.

        The last live pair is moved into the freed slot, so this is O(1)
        after the lookup but does not preserve slot order.
        """
        i = self._find(key)
        if i is None:
            logger.debug("Remove of absent key %r ignored", key)
            return False
        last = self._size - 1
        self._pairs[i] = self._pairs[last]
        self._pairs.clear(last)
        self._size -= 1
        return True

    def size(self) -> int:
        return self._size

    def clone(self) -> AssociativeArray[K, V]:
        """Return a copy with its own storage and pairs, in the same slot order.

        Keys and values themselves are shared, not copied.
        """
        out: AssociativeArray[K, V] = AssociativeArray()
        for k, v in self.items():
            out.set(k, v)
        return out

    @property
    def capacity(self) -> int:
        return self._pairs.capacity

    # -----------------------------
    # Iteration helpers
    # -----------------------------
    def items(self) -> Iterator[Tuple[K, V]]:
        for i in range(self._size):
            pair = self._pairs[i]
            yield (pair.key, pair.value)  # type: ignore[union-attr]

    def keys(self) -> Iterator[K]:
        for k, _ in self.items():
            yield k

    def values(self) -> Iterator[V]:
        for _, v in self.items():
            yield v

    def to_py(self) -> dict[K, V]:
        """Convert to a native *dict*; recursively uses ``to_py`` when present."""
        d: dict[K, V] = {}
        for k, v in self.items():
            if hasattr(v, "to_py") and callable(getattr(v, "to_py")):
                d[k] = v.to_py()  # type: ignore[attr-defined]
            else:
                d[k] = v
        return d

    # -----------------------------
    # Standard magic methods
    # -----------------------------
    def __getitem__(self, key: K) -> V:
        return self.get(key)

    def __setitem__(self, key: K, value: V) -> None:
        self.set(key, value)

    def __delitem__(self, key: K) -> None:
        if not self.remove(key):
            raise KeyNotFoundError(key)

    def __contains__(self, key: K) -> bool:
        return self.has_key(key)

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size != 0

    def __iter__(self) -> Iterator[K]:
        return self.keys()

    def __copy__(self) -> AssociativeArray[K, V]:
        return self.clone()

    def __str__(self) -> str:
        if self._size == 0:
            return "{}"
        return "{ " + ", ".join(f"{k}: {v}" for k, v in self.items()) + " }"

    def __repr__(self) -> str:
        pairs = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"AssociativeArray({{{pairs}}})"
