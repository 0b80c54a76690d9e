from typing import Any


class KeyNotFoundError(KeyError):
    """Raised when a lookup asks for a key that no occupied slot holds."""

    def __init__(self, key: Any) -> None:
        super().__init__(key)
        self.key = key
