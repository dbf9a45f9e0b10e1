"""
Tests for the trusted setup container, manager and path loader.

Covers:
- Binary layout sizes checked before any point is decoded
- Generator and point decoding validation
- Hex text format (one point per line)
- Manager lifecycle: not loaded → loaded → unloaded, failed loads keep state
- Path loading and the no-filesystem platform guard
"""

import sys

import pytest

from blobkzg.kzg.constants import SETUP_G1_BYTES, SETUP_G2_BYTES
from blobkzg.kzg.errors import (
    EnvironmentUnsupported,
    InvalidSetup,
    InvalidSetupSize,
    KZGError,
    SetupNotLoaded,
)
from blobkzg.kzg.field import G1, G2, ec_eq, ec_mul
from blobkzg.kzg.loader import filesystem_available, load_setup_files, read_setup_files
from blobkzg.kzg.setup import MOCK_TAU, TrustedSetup, TrustedSetupManager


# ─────────────────────────────────────────────────────────────────────
# TrustedSetup
# ─────────────────────────────────────────────────────────────────────

class TestMockSetup:
    """모의 SRS 생성 테스트."""

    def test_counts(self, mock_setup):
        assert len(mock_setup.g1_powers) == 4096
        assert len(mock_setup.g2_powers) == 2
        assert mock_setup.max_degree == 4095

    def test_powers_of_tau(self, mock_setup):
        assert ec_eq(mock_setup.g1_powers[0], G1)
        assert ec_eq(mock_setup.g1_powers[1], ec_mul(G1, MOCK_TAU))
        assert ec_eq(mock_setup.g1_powers[2], ec_mul(G1, MOCK_TAU * MOCK_TAU))
        assert ec_eq(mock_setup.g2_powers[1], ec_mul(G2, MOCK_TAU))

    def test_validate_passes(self, mock_setup):
        mock_setup.validate()

    def test_wrong_point_count(self, mock_setup):
        with pytest.raises(InvalidSetupSize):
            TrustedSetup(mock_setup.g1_powers[:10], mock_setup.g2_powers)
        with pytest.raises(InvalidSetupSize):
            TrustedSetup(mock_setup.g1_powers, mock_setup.g2_powers[:1])


class TestBinaryFormat:
    """바이너리 레이아웃 로딩 테스트."""

    def test_sizes(self, mock_setup_bytes):
        g1_bytes, g2_bytes = mock_setup_bytes
        assert len(g1_bytes) == SETUP_G1_BYTES == 196608
        assert len(g2_bytes) == SETUP_G2_BYTES == 192

    def test_roundtrip(self, mock_setup, mock_setup_bytes):
        setup = TrustedSetup.from_bytes(*mock_setup_bytes)
        assert ec_eq(setup.g1_powers[4095], mock_setup.g1_powers[4095])
        assert ec_eq(setup.g2_powers[1], mock_setup.g2_powers[1])

    @pytest.mark.parametrize("g1_len,g2_len", [
        (100, 50),
        (SETUP_G1_BYTES - 48, SETUP_G2_BYTES),
        (SETUP_G1_BYTES, SETUP_G2_BYTES + 96),
    ])
    def test_wrong_sizes(self, g1_len, g2_len):
        with pytest.raises(InvalidSetupSize):
            TrustedSetup.from_bytes(bytes(g1_len), bytes(g2_len))

    def test_size_checked_before_decoding(self):
        """Undecodable content of the wrong size still reports the size."""
        with pytest.raises(InvalidSetupSize):
            TrustedSetup.from_bytes(b"\xff" * 100, b"\xff" * 50)

    def test_bad_point(self, mock_setup_bytes):
        g1_bytes, g2_bytes = mock_setup_bytes
        broken = g1_bytes[:5 * 48] + bytes(48) + g1_bytes[6 * 48:]
        with pytest.raises(InvalidSetup, match="index 5"):
            TrustedSetup.from_bytes(broken, g2_bytes)

    def test_first_point_not_generator(self, mock_setup_bytes):
        g1_bytes, g2_bytes = mock_setup_bytes
        swapped = g1_bytes[48:96] + g1_bytes[:48] + g1_bytes[96:]
        with pytest.raises(InvalidSetup, match="generator"):
            TrustedSetup.from_bytes(swapped, g2_bytes)


class TestTextFormat:
    """16진수 텍스트 형식 테스트."""

    def test_roundtrip(self, mock_setup):
        g1_text, g2_text = mock_setup.to_text()
        setup = TrustedSetup.from_text(g1_text, g2_text)
        assert ec_eq(setup.g1_powers[1], mock_setup.g1_powers[1])

    def test_prefix_and_blank_lines(self, mock_setup):
        g1_text, g2_text = mock_setup.to_text()
        g2_text = "\n" + "\n\n".join("0x" + line for line in g2_text.split()) + "\n\n"
        setup = TrustedSetup.from_text(g1_text, g2_text)
        assert ec_eq(setup.g2_powers[0], G2)

    def test_wrong_line_count(self, mock_setup):
        g1_text, g2_text = mock_setup.to_text()
        with pytest.raises(InvalidSetupSize):
            TrustedSetup.from_text(g1_text, g2_text.split()[0])

    def test_bad_hex(self, mock_setup):
        g1_text, g2_text = mock_setup.to_text()
        lines = g1_text.split()
        lines[3] = "zz" * 48
        with pytest.raises(InvalidSetup):
            TrustedSetup.from_text("\n".join(lines), g2_text)


# ─────────────────────────────────────────────────────────────────────
# TrustedSetupManager
# ─────────────────────────────────────────────────────────────────────

class TestManager:
    """SRS 매니저 수명주기 테스트."""

    def test_not_loaded(self, empty_manager):
        assert not empty_manager.is_loaded
        with pytest.raises(SetupNotLoaded) as exc:
            empty_manager.setup
        assert exc.value.code == "NO_TRUSTED_SETUP"

    def test_load_from_bytes(self, empty_manager, mock_setup_bytes):
        setup = empty_manager.load_from_bytes(*mock_setup_bytes)
        assert empty_manager.is_loaded
        assert empty_manager.setup is setup

    def test_load_from_text(self, empty_manager, mock_setup):
        empty_manager.load_from_text(*mock_setup.to_text())
        assert empty_manager.is_loaded

    def test_load_from_mock(self, empty_manager):
        empty_manager.load_from_mock()
        assert ec_eq(empty_manager.setup.g2_powers[1], ec_mul(G2, MOCK_TAU))

    def test_unload(self, manager):
        manager.unload()
        with pytest.raises(SetupNotLoaded):
            manager.setup

    def test_failed_load_keeps_previous(self, manager, mock_setup):
        with pytest.raises(InvalidSetupSize):
            manager.load_from_bytes(bytes(100), bytes(50))
        assert manager.setup is mock_setup

    def test_failed_load_keeps_unloaded(self, empty_manager):
        with pytest.raises(InvalidSetupSize):
            empty_manager.load_from_bytes(bytes(100), bytes(50))
        assert not empty_manager.is_loaded

    def test_load_accepts_point_pair(self, empty_manager, mock_setup):
        empty_manager.load((mock_setup.g1_powers, mock_setup.g2_powers))
        assert isinstance(empty_manager.setup, TrustedSetup)


# ─────────────────────────────────────────────────────────────────────
# Loader
# ─────────────────────────────────────────────────────────────────────

class TestLoader:
    """경로 기반 로더 테스트."""

    def test_binary_files(self, tmp_path, empty_manager, mock_setup_bytes):
        g1_path, g2_path = tmp_path / "g1.bin", tmp_path / "g2.bin"
        g1_path.write_bytes(mock_setup_bytes[0])
        g2_path.write_bytes(mock_setup_bytes[1])
        load_setup_files(empty_manager, g1_path, g2_path)
        assert empty_manager.is_loaded

    def test_text_files(self, tmp_path, empty_manager, mock_setup):
        g1_text, g2_text = mock_setup.to_text()
        g1_path, g2_path = tmp_path / "g1.txt", tmp_path / "g2.txt"
        g1_path.write_text(g1_text)
        g2_path.write_text(g2_text)
        load_setup_files(empty_manager, str(g1_path), str(g2_path), fmt="text")
        assert empty_manager.is_loaded

    def test_unknown_format(self, tmp_path):
        with pytest.raises(KZGError):
            read_setup_files(tmp_path / "a", tmp_path / "b", fmt="json")

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            read_setup_files(tmp_path / "missing1", tmp_path / "missing2")

    @pytest.mark.parametrize("platform", ["emscripten", "wasi"])
    def test_no_filesystem(self, monkeypatch, tmp_path, platform):
        monkeypatch.setattr(sys, "platform", platform)
        assert not filesystem_available()
        with pytest.raises(EnvironmentUnsupported) as exc:
            read_setup_files(tmp_path / "g1.bin", tmp_path / "g2.bin")
        assert exc.value.code == "ENVIRONMENT_UNSUPPORTED"
