"""Storage backend protocol."""

from __future__ import annotations

from typing import Protocol


class StorageBackend(Protocol):
    """Structural key/value storage interface used by the stores.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementations concrete.  Implementations
    raise :class:`~pyfeedlot.exceptions.StorageUnavailableError` when a
    key cannot be read or written.
    """

    def get_item(self, key: str) -> str | None:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...
