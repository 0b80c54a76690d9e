from .slot_array import SlotArray
from .associative_array import DEFAULT_CAPACITY, AssociativeArray, KVPair
from .exceptions import KeyNotFoundError

__all__ = [
    "SlotArray",
    "AssociativeArray",
    "KVPair",
    "KeyNotFoundError",
    "DEFAULT_CAPACITY",
]
