"""
Tests for the KZG-backed cache reverifier.

Covers:
- build_entry computes commitment, blob proof and versioned hash
- verify_blob accepts intact entries and rejects tampered ones
- Reverifying cache drops corrupted entries
- A missing setup propagates out of the cache
"""

from dataclasses import replace

import pytest

from blobkzg.cache.blob_cache import ENTRY_SIZE, MISS, BlobCache
from blobkzg.cache.verifier import KZGBlobVerifier
from blobkzg.codecs import encode_payload
from blobkzg.kzg.commitment import CommitmentEngine
from blobkzg.kzg.constants import BLS_MODULUS
from blobkzg.kzg.errors import InvalidBlobSize, SetupNotLoaded
from blobkzg.kzg.versioned_hash import to_versioned_hash


@pytest.fixture
def verifier(manager):
    return KZGBlobVerifier(manager)


@pytest.fixture
def entry(verifier, make_blob):
    return verifier.build_entry(make_blob({0: 5, 1: 3}), slot=100, index=2, source="archive")


class TestBuildEntry:
    """캐시 항목 생성 테스트."""

    def test_fields(self, entry, manager, make_blob):
        commitment = CommitmentEngine(manager).commit(make_blob({0: 5, 1: 3}))
        assert entry.commitment == commitment
        assert entry.versioned_hash == to_versioned_hash(commitment)
        assert len(entry.proof) == 48
        assert len(entry.field_elements) == 4096
        assert (entry.slot, entry.index, entry.source) == (100, 2, "archive")

    def test_rejects_bad_blob(self, verifier):
        with pytest.raises(InvalidBlobSize):
            verifier.build_entry(b"\x00" * 10)

    def test_payload_blob(self, verifier):
        """Blobs packed by the codec layer are always canonical."""
        built = verifier.build_entry(encode_payload(b"hello blob"))
        assert verifier.verify_blob(built) is True


class TestVerifyBlob:
    """verify_blob 테스트."""

    def test_intact(self, verifier, entry):
        assert verifier.verify_blob(entry) is True

    def test_tampered_field_element(self, verifier, entry):
        chunks = list(entry.field_elements)
        chunks[0] = (6).to_bytes(32, "big")
        assert verifier.verify_blob(replace(entry, field_elements=tuple(chunks))) is False

    def test_non_canonical_field_element(self, verifier, entry):
        chunks = list(entry.field_elements)
        chunks[9] = BLS_MODULUS.to_bytes(32, "big")
        assert verifier.verify_blob(replace(entry, field_elements=tuple(chunks))) is False

    def test_truncated_blob(self, verifier, entry):
        assert verifier.verify_blob(replace(entry, field_elements=entry.field_elements[:-1])) is False

    def test_wrong_commitment(self, verifier, entry):
        assert verifier.verify_blob(replace(entry, commitment=bytes(48))) is False

    def test_wrong_versioned_hash(self, verifier, entry):
        assert verifier.verify_blob(replace(entry, versioned_hash=b"\x01" + bytes(31))) is False

    def test_wrong_proof(self, verifier, entry, make_blob):
        other = verifier.build_entry(make_blob({0: 5, 1: 4}))
        assert verifier.verify_blob(replace(entry, proof=other.proof)) is False

    def test_setup_not_loaded(self, empty_manager, entry):
        with pytest.raises(SetupNotLoaded):
            KZGBlobVerifier(empty_manager).verify_blob(entry)


class TestCacheIntegration:
    """재검증 캐시와 KZG 검증기 결합."""

    def test_corrupted_entry_dropped(self, verifier, entry):
        cache = BlobCache(4, 4 * ENTRY_SIZE, strict_reverify=True)
        key = entry.versioned_hash
        cache.put(key, replace(entry, commitment=bytes(48)))
        assert cache.get_with_reverify(key, verifier) is MISS
        assert key not in cache

    def test_intact_entry_served(self, verifier, entry):
        cache = BlobCache(4, 4 * ENTRY_SIZE, strict_reverify=True)
        cache.put(entry.versioned_hash, entry)
        assert cache.get_with_reverify(entry.versioned_hash, verifier) is entry

    def test_missing_setup_propagates(self, empty_manager, entry):
        cache = BlobCache(4, 4 * ENTRY_SIZE, strict_reverify=True)
        cache.put(entry.versioned_hash, entry)
        with pytest.raises(SetupNotLoaded):
            cache.get_with_reverify(entry.versioned_hash, KZGBlobVerifier(empty_manager))
        assert entry.versioned_hash in cache
