"""Custom exception hierarchy for pyfeedlot."""

from __future__ import annotations


class FeedlotError(Exception):
    """Base exception for all pyfeedlot errors."""


class FeedlotConfigError(FeedlotError):
    """Invalid or missing configuration."""


class StorageError(FeedlotError):
    """Durable storage failure."""

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class StorageUnavailableError(StorageError):
    """The storage backend could not read or write a key.

    Covers quota exhaustion, permission problems and missing or
    unwritable data directories.  The write that raised did not happen;
    previously persisted documents are left untouched.
    """


class StorageCorruptError(StorageError):
    """A persisted document could not be decoded into its model."""


class FeedlotStoreError(FeedlotError):
    """A store operation was rejected."""


class UnknownLotError(FeedlotStoreError):
    """The referenced lot id does not exist."""

    def __init__(self, message: str, *, lot_id: int) -> None:
        self.lot_id = lot_id
        super().__init__(message)


class LotCapacityError(FeedlotStoreError):
    """The target lot has no available head space.

    Raised by ``add_cattle`` and ``move_cattle`` when capacity
    enforcement is enabled (the default).
    """

    def __init__(
        self,
        message: str,
        *,
        lot_id: int,
        capacity: int,
        occupied: int,
    ) -> None:
        self.lot_id = lot_id
        self.capacity = capacity
        self.occupied = occupied
        super().__init__(message)
