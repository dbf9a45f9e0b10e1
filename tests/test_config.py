"""
Tests for environment-driven settings.
"""

import logging

import pytest

from blobkzg.config import Settings, _parse_size, configure_logging, get_settings


class TestSettings:
    """Settings.from_env 테스트."""

    def test_defaults(self):
        s = Settings.from_env({})
        assert s.setup_g1_path is None
        assert not s.has_setup_paths
        assert s.setup_format == "binary"
        assert s.cache_max_entries == 64
        assert s.cache_max_bytes == 16 * 1024 * 1024
        assert s.cache_strict_reverify is False
        assert s.log_level == "INFO"

    def test_overrides(self):
        s = Settings.from_env({
            "BLOBKZG_SETUP_G1_PATH": "/srs/g1.txt",
            "BLOBKZG_SETUP_G2_PATH": "/srs/g2.txt",
            "BLOBKZG_SETUP_FORMAT": "TEXT",
            "BLOBKZG_CACHE_MAX_ENTRIES": "8",
            "BLOBKZG_CACHE_MAX_BYTES": "2MiB",
            "BLOBKZG_CACHE_STRICT_REVERIFY": "yes",
            "BLOBKZG_LOG_LEVEL": "debug",
        })
        assert s.has_setup_paths
        assert s.setup_format == "text"
        assert s.cache_max_entries == 8
        assert s.cache_max_bytes == 2 * 1024 * 1024
        assert s.cache_strict_reverify is True
        assert s.log_level == "DEBUG"

    def test_blank_values_use_defaults(self):
        s = Settings.from_env({"BLOBKZG_CACHE_MAX_ENTRIES": "  ", "BLOBKZG_SETUP_G1_PATH": ""})
        assert s.cache_max_entries == 64
        assert s.setup_g1_path is None

    def test_single_path_is_not_enough(self):
        assert not Settings.from_env({"BLOBKZG_SETUP_G1_PATH": "g1.bin"}).has_setup_paths

    @pytest.mark.parametrize("env", [
        {"BLOBKZG_SETUP_FORMAT": "yaml"},
        {"BLOBKZG_LOG_LEVEL": "LOUD"},
        {"BLOBKZG_CACHE_MAX_ENTRIES": "0"},
        {"BLOBKZG_CACHE_MAX_ENTRIES": "many"},
        {"BLOBKZG_CACHE_MAX_BYTES": "lots"},
        {"BLOBKZG_CACHE_STRICT_REVERIFY": "maybe"},
    ])
    def test_invalid(self, env):
        with pytest.raises(ValueError):
            Settings.from_env(env)

    def test_to_dict(self):
        d = Settings.from_env({}).to_dict()
        assert d["cache_max_entries"] == 64
        assert "setup_format" in d

    def test_get_settings_cached(self, monkeypatch):
        get_settings.cache_clear()
        monkeypatch.setenv("BLOBKZG_CACHE_MAX_ENTRIES", "5")
        try:
            assert get_settings().cache_max_entries == 5
            monkeypatch.setenv("BLOBKZG_CACHE_MAX_ENTRIES", "6")
            assert get_settings() is get_settings()
            assert get_settings().cache_max_entries == 5
        finally:
            get_settings.cache_clear()


class TestParseSize:
    """크기 표기 파싱."""

    @pytest.mark.parametrize("text,expected", [
        ("4096", 4096),
        ("4KiB", 4096),
        ("4kb", 4000),
        ("1.5 MiB", 1536 * 1024),
        ("16MiB", 16 * 1024 * 1024),
        ("1GB", 10 ** 9),
        ("10 bytes", 10),
    ])
    def test_units(self, text, expected):
        assert _parse_size(text, default=0) == expected

    def test_empty_is_default(self):
        assert _parse_size(None, default=7) == 7


def test_configure_logging():
    configure_logging("WARNING")
    assert logging.getLogger("blobkzg.test").getEffectiveLevel() <= logging.WARNING
