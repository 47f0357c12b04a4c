"""In-process KeyValueBackend.

Mirrors the Redis semantics the post store relies on. Data lives only as
long as the process; used by tests and by ``STORE_BACKEND=memory``.
"""


class InMemoryBackend:
    def __init__(self) -> None:
        self._hashes: dict[str, dict[str, str]] = {}
        self._lists: dict[str, list[str]] = {}

    async def set_fields(self, key: str, fields: dict[str, str]) -> None:
        # HSET merges into an existing hash
        self._hashes.setdefault(key, {}).update({k: str(v) for k, v in fields.items()})

    async def get_fields(self, key: str) -> dict[str, str]:
        return dict(self._hashes.get(key, {}))

    async def delete(self, key: str) -> int:
        removed = 0
        if self._hashes.pop(key, None) is not None:
            removed += 1
        if self._lists.pop(key, None) is not None:
            removed += 1
        return removed

    async def exists(self, key: str) -> bool:
        return key in self._hashes or key in self._lists

    async def push_front(self, key: str, value: str) -> int:
        items = self._lists.setdefault(key, [])
        items.insert(0, value)
        return len(items)

    async def list_range(self, key: str, start: int, stop: int) -> list[str]:
        items = self._lists.get(key, [])
        size = len(items)
        if start < 0:
            start = max(size + start, 0)
        if stop < 0:
            stop = size + stop
        if start > stop or start >= size:
            return []
        return items[start : stop + 1]

    async def remove_all(self, key: str, value: str) -> int:
        items = self._lists.get(key)
        if not items:
            return 0
        kept = [item for item in items if item != value]
        removed = len(items) - len(kept)
        if kept:
            self._lists[key] = kept
        else:
            # Redis drops empty lists
            del self._lists[key]
        return removed

    async def list_length(self, key: str) -> int:
        return len(self._lists.get(key, []))
