"""Local filesystem storage backend.

Storage layout:
    <directory>/<key>.json    one document per key
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path

from pyfeedlot.exceptions import StorageUnavailableError

_logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[\w\-.]+$")


class JsonFileStorage:
    """Persist each key as a JSON file inside *directory*.

    Writes go to a temporary file in the same directory and are moved
    into place with :func:`os.replace`, so a reader never sees a
    half-written document.  Any ``OSError`` surfaces as
    :class:`StorageUnavailableError`.
    """

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self._directory = Path(directory)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageUnavailableError(f"cannot create data directory {self._directory}: {exc}") from exc

    @property
    def directory(self) -> Path:
        return self._directory

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"invalid storage key {key!r}")
        return self._directory / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageUnavailableError(f"cannot read {path}: {exc}", key=key) from exc

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._directory,
                prefix=f".{key}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(value)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise StorageUnavailableError(f"cannot write {path}: {exc}", key=key) from exc
        _logger.debug("Wrote %d bytes to %s", len(value), path)

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageUnavailableError(f"cannot remove {path}: {exc}", key=key) from exc
