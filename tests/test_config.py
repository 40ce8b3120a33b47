"""Tests for switchyard.config — AppConfig frozen dataclass."""

import dataclasses

import pytest

from switchyard.config import AppConfig


class TestAppConfig:
    def test_defaults(self) -> None:
        cfg = AppConfig()

        assert cfg.debug is False
        assert cfg.preflight_method == "OPTIONS"
        assert cfg.max_content_length == 16 * 1024 * 1024
        assert cfg.default_charset == "utf-8"

    def test_override(self) -> None:
        cfg = AppConfig(debug=True, max_content_length=10)

        assert cfg.debug is True
        assert cfg.max_content_length == 10

    def test_frozen(self) -> None:
        cfg = AppConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.debug = True  # type: ignore[misc]
