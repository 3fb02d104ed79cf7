"""Store configuration for pyfeedlot."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyfeedlot._constants import (
    ALERTS_KEY_SUFFIX,
    CATTLE_KEY_SUFFIX,
    DEFAULT_KEY_PREFIX,
    DEFAULT_LOT_CAPACITY,
    DEFAULT_LOT_COUNT,
    DEFAULT_TOAST_DURATION_SECONDS,
    INITIALIZED_KEY_SUFFIX,
    LOTS_KEY_SUFFIX,
)
from pyfeedlot.exceptions import FeedlotConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env_key: str, value: str, cast: type[int] | type[float]) -> int | float:
    try:
        return cast(value)
    except ValueError as exc:
        raise FeedlotConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class StorageKeys:
    """The four independently persisted documents of a store."""

    lots: str
    cattle: str
    alerts: str
    initialized: str

    def all(self) -> tuple[str, ...]:
        return (self.lots, self.cattle, self.alerts, self.initialized)


@dataclasses.dataclass(frozen=True)
class FeedlotConfig:
    """Store configuration.

    Parameters
    ----------
    lot_count : int
        Number of lots generated when none are persisted yet.
    lot_capacity : int
        Head capacity of each generated lot.
    key_prefix : str
        Prefix for the storage keys (``<prefix>_lots`` etc.).
    enforce_capacity : bool
        Reject adds and moves into lots with no available space.
        When ``False`` capacity is advisory only and over-allocation is
        logged but allowed.
    toast_duration : float
        Seconds before a toast notification is auto-dismissed.
    data_dir : str or None
        Directory used by :class:`~pyfeedlot.storage.JsonFileStorage`
        when the store is built with :meth:`FeedlotStore.open`.
    """

    lot_count: int = DEFAULT_LOT_COUNT
    lot_capacity: int = DEFAULT_LOT_CAPACITY
    key_prefix: str = DEFAULT_KEY_PREFIX
    enforce_capacity: bool = True
    toast_duration: float = DEFAULT_TOAST_DURATION_SECONDS
    data_dir: str | None = None

    def __post_init__(self) -> None:
        if self.lot_count < 1:
            raise FeedlotConfigError(f"lot_count must be at least 1, got {self.lot_count}")
        if self.lot_capacity < 0:
            raise FeedlotConfigError(f"lot_capacity must not be negative, got {self.lot_capacity}")
        if not self.key_prefix.strip():
            raise FeedlotConfigError("key_prefix must be non-empty")
        if self.toast_duration <= 0:
            raise FeedlotConfigError(f"toast_duration must be positive, got {self.toast_duration}")

    @property
    def keys(self) -> StorageKeys:
        prefix = self.key_prefix
        return StorageKeys(
            lots=f"{prefix}_{LOTS_KEY_SUFFIX}",
            cattle=f"{prefix}_{CATTLE_KEY_SUFFIX}",
            alerts=f"{prefix}_{ALERTS_KEY_SUFFIX}",
            initialized=f"{prefix}_{INITIALIZED_KEY_SUFFIX}",
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> FeedlotConfig:
        """Create configuration from environment variables.

        Reads optional ``FEEDLOT_*`` variables.  Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        FeedlotConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        prefix_env = env.get("FEEDLOT_KEY_PREFIX")
        if prefix_env is not None:
            config_kwargs["key_prefix"] = prefix_env

        data_dir_env = env.get("FEEDLOT_DATA_DIR")
        if data_dir_env is not None:
            config_kwargs["data_dir"] = data_dir_env

        # Numeric settings are parsed separately so a bad value names its variable.
        _ENV_NUMERIC_MAP: dict[str, tuple[str, type[int] | type[float]]] = {
            "FEEDLOT_LOT_COUNT": ("lot_count", int),
            "FEEDLOT_LOT_CAPACITY": ("lot_capacity", int),
            "FEEDLOT_TOAST_DURATION": ("toast_duration", float),
        }
        for env_key, (field_name, cast) in _ENV_NUMERIC_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_number(env_key, val, cast)

        if "enforce_capacity" not in overrides:
            config_kwargs["enforce_capacity"] = _env_bool(env.get("FEEDLOT_ENFORCE_CAPACITY"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
