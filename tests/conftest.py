"""
공용 테스트 픽스처.

모의 SRS(τ = 12345)는 생성 비용이 있으므로 세션당 한 번만 만든다.
블롭은 낮은 인덱스의 계수만 채운 희소 블롭을 사용해 몫 다항식이
작게 유지되도록 한다.
"""

import pytest

from blobkzg.kzg.constants import BYTES_PER_BLOB, BYTES_PER_FIELD_ELEMENT
from blobkzg.kzg.setup import TrustedSetup, TrustedSetupManager


@pytest.fixture(scope="session")
def mock_setup():
    """Insecure mock SRS shared by the whole session."""
    return TrustedSetup.insecure_mock()


@pytest.fixture(scope="session")
def mock_setup_bytes(mock_setup):
    """(g1_bytes, g2_bytes) of the mock SRS."""
    return mock_setup.to_bytes()


@pytest.fixture
def manager(mock_setup):
    """Manager with the mock SRS loaded."""
    return TrustedSetupManager(mock_setup)


@pytest.fixture
def empty_manager():
    """Manager with no SRS loaded."""
    return TrustedSetupManager()


@pytest.fixture
def make_blob():
    """Build a blob from {field_index: int value}."""
    def _make(values=None):
        blob = bytearray(BYTES_PER_BLOB)
        for i, v in (values or {}).items():
            start = i * BYTES_PER_FIELD_ELEMENT
            blob[start:start + BYTES_PER_FIELD_ELEMENT] = int(v).to_bytes(
                BYTES_PER_FIELD_ELEMENT, "big"
            )
        return bytes(blob)
    return _make
