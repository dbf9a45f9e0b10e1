"""
Tests for JSON serialization helpers used by the HTTP layer.
"""

import pytest

from blobkzg.cache.blob_cache import CacheStats, CachedBlobEntry
from blobkzg.kzg.errors import KZGError

from kzg_serializers import (
    SerializationError,
    bytes_short,
    deserialize_bytes,
    deserialize_scalar,
    serialize_bytes,
    serialize_entry,
    serialize_scalar,
    serialize_stats,
)


class TestBytes:
    """바이트열 직렬화."""

    def test_roundtrip(self):
        assert serialize_bytes(b"\x01\xab") == "0x01ab"
        assert deserialize_bytes("0x01ab") == b"\x01\xab"
        assert deserialize_bytes("01AB") == b"\x01\xab"
        assert deserialize_bytes("0X") == b""

    @pytest.mark.parametrize("bad", ["0xzz", "0x123", 12, None])
    def test_invalid(self, bad):
        with pytest.raises(SerializationError) as exc:
            deserialize_bytes(bad, "blob")
        assert "blob" in str(exc.value)
        assert exc.value.code == "INVALID_REQUEST"

    def test_error_is_kzg_error(self):
        assert issubclass(SerializationError, KZGError)

    def test_short(self):
        assert bytes_short(b"\x01\x02") == "0x0102"
        assert bytes_short(bytes(range(32))) == "0x000102...1e1f"


class TestScalar:
    """스칼라 직렬화."""

    def test_forms(self):
        assert deserialize_scalar(7) == 7
        assert deserialize_scalar("42") == 42
        assert deserialize_scalar("0x2a") == 42
        assert serialize_scalar(42) == "42"

    @pytest.mark.parametrize("bad", [True, 1.5, "forty", None])
    def test_invalid(self, bad):
        with pytest.raises(SerializationError):
            deserialize_scalar(bad)


class TestEntry:
    """캐시 항목/통계 직렬화."""

    def test_entry(self):
        entry = CachedBlobEntry(
            versioned_hash=b"\x01" * 32,
            slot=9,
            index=1,
            commitment=b"\xc0" + bytes(47),
            proof=b"\xc0" + bytes(47),
            field_elements=(bytes(32), b"\x00" * 31 + b"\x05"),
            source="archive",
        )
        data = serialize_entry(entry)
        assert data["versioned_hash"] == "0x" + "01" * 32
        assert data["slot"] == 9
        assert "blob" not in data
        with_blob = serialize_entry(entry, include_blob=True)
        assert with_blob["blob"] == "0x" + "00" * 63 + "05"

    def test_stats(self):
        data = serialize_stats(CacheStats(hits=2, misses=1, entries=1))
        assert data["hits"] == 2
        assert data["misses"] == 1
        assert set(data) == {
            "hits", "misses", "puts", "evictions", "reverify_failures",
            "entries", "used_bytes", "max_entries", "max_bytes",
        }
