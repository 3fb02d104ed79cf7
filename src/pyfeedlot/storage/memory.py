"""In-memory storage backend."""

from __future__ import annotations

from pyfeedlot.exceptions import StorageUnavailableError


class MemoryStorage:
    """Dict-backed storage, mainly for tests and throwaway sessions.

    ``quota_bytes`` caps the total UTF-8 size of all stored values; a
    write that would exceed it raises :class:`StorageUnavailableError`
    and leaves the previous value in place.
    """

    def __init__(self, *, quota_bytes: int | None = None) -> None:
        self._items: dict[str, str] = {}
        self._quota_bytes = quota_bytes

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self._quota_bytes is not None:
            used = sum(len(v.encode("utf-8")) for k, v in self._items.items() if k != key)
            if used + len(value.encode("utf-8")) > self._quota_bytes:
                raise StorageUnavailableError(
                    f"storage quota of {self._quota_bytes} bytes exceeded writing {key!r}",
                    key=key,
                )
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._items)

    def __len__(self) -> int:
        return len(self._items)
