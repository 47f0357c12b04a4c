"""Key-value backend interface consumed by the post store."""

from typing import Protocol


class KeyValueBackend(Protocol):
    """Hash and list operations the post store needs.

    List semantics follow Redis: index 0 is the head, ``list_range`` stop is
    inclusive and negative indexes count from the tail.
    """

    async def set_fields(self, key: str, fields: dict[str, str]) -> None: ...

    async def get_fields(self, key: str) -> dict[str, str]:
        """Return all fields of a hash, or an empty dict if it does not exist."""
        ...

    async def delete(self, key: str) -> int: ...

    async def exists(self, key: str) -> bool: ...

    async def push_front(self, key: str, value: str) -> int:
        """Prepend value to a list and return the new length."""
        ...

    async def list_range(self, key: str, start: int, stop: int) -> list[str]: ...

    async def remove_all(self, key: str, value: str) -> int:
        """Remove every occurrence of value from a list."""
        ...

    async def list_length(self, key: str) -> int: ...
