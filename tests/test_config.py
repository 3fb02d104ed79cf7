"""Tests for store configuration."""

from __future__ import annotations

import pytest

from pyfeedlot.config import FeedlotConfig
from pyfeedlot.exceptions import FeedlotConfigError


class TestFeedlotConfig:
    def test_defaults(self) -> None:
        config = FeedlotConfig()
        assert config.lot_count == 10
        assert config.lot_capacity == 500
        assert config.enforce_capacity is True
        assert config.toast_duration == 6.0
        assert config.data_dir is None

    def test_keys(self) -> None:
        keys = FeedlotConfig().keys
        assert keys.all() == ("cflm_lots", "cflm_cattle", "cflm_alerts", "cflm_initialized")
        assert FeedlotConfig(key_prefix="ranch").keys.cattle == "ranch_cattle"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"lot_count": 0},
            {"lot_capacity": -1},
            {"key_prefix": "  "},
            {"toast_duration": 0},
        ],
    )
    def test_invalid_values(self, kwargs: dict[str, object]) -> None:
        with pytest.raises(FeedlotConfigError):
            FeedlotConfig(**kwargs)


class TestFromEnv:
    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FEEDLOT_KEY_PREFIX", "ranch")
        monkeypatch.setenv("FEEDLOT_DATA_DIR", "/tmp/feedlot")
        monkeypatch.setenv("FEEDLOT_LOT_COUNT", "4")
        monkeypatch.setenv("FEEDLOT_LOT_CAPACITY", "250")
        monkeypatch.setenv("FEEDLOT_TOAST_DURATION", "2.5")
        monkeypatch.setenv("FEEDLOT_ENFORCE_CAPACITY", "off")

        config = FeedlotConfig.from_env()
        assert config.key_prefix == "ranch"
        assert config.data_dir == "/tmp/feedlot"
        assert config.lot_count == 4
        assert config.lot_capacity == 250
        assert config.toast_duration == 2.5
        assert config.enforce_capacity is False

    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FEEDLOT_LOT_COUNT", "not-a-number")
        monkeypatch.setenv("FEEDLOT_ENFORCE_CAPACITY", "no")
        config = FeedlotConfig.from_env(lot_count=2, enforce_capacity=True)
        assert config.lot_count == 2
        assert config.enforce_capacity is True

    def test_bad_number_names_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FEEDLOT_LOT_CAPACITY", "lots")
        with pytest.raises(FeedlotConfigError, match="FEEDLOT_LOT_CAPACITY"):
            FeedlotConfig.from_env()

    def test_unrecognized_bool_keeps_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FEEDLOT_ENFORCE_CAPACITY", "maybe")
        assert FeedlotConfig.from_env().enforce_capacity is True

    def test_empty_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (
            "FEEDLOT_KEY_PREFIX",
            "FEEDLOT_DATA_DIR",
            "FEEDLOT_LOT_COUNT",
            "FEEDLOT_LOT_CAPACITY",
            "FEEDLOT_TOAST_DURATION",
            "FEEDLOT_ENFORCE_CAPACITY",
        ):
            monkeypatch.delenv(name, raising=False)
        assert FeedlotConfig.from_env() == FeedlotConfig()
