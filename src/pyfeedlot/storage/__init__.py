"""Durable storage backends.

A backend is a flat string key/value store with the same contract as a
browser's localStorage.  The feedlot store serializes each entity
collection to JSON under its own key.
"""

from pyfeedlot.storage._backend import StorageBackend
from pyfeedlot.storage.json_file import JsonFileStorage
from pyfeedlot.storage.memory import MemoryStorage

__all__ = ["JsonFileStorage", "MemoryStorage", "StorageBackend"]
