from .datastructures import AssociativeArray, KeyNotFoundError, KVPair

__all__ = ["AssociativeArray", "KeyNotFoundError", "KVPair"]

__version__ = "0.1.0"
