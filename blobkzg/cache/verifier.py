"""
KZG 기반 캐시 재검증기
=======================

BlobCache.get_with_reverify에 주입하는 verify_blob 능력(capability)을
증명 엔진으로 구현한다.

검사 순서:
  1. 필드 원소로 블롭을 재조립하고 검증 (길이 / 정규성)
  2. 커밋먼트를 다시 계산하여 저장된 커밋먼트와 비교
  3. 버전 해시가 커밋먼트로부터 도출되는지 확인
  4. Fiat-Shamir 챌린지에서의 블롭 증명을 페어링으로 검증

어느 단계든 실패하면 False이다. 로드되지 않은 SRS만 예외로 전달된다.
"""

import logging

from blobkzg.cache.blob_cache import CachedBlobEntry
from blobkzg.kzg.blob import join_field_elements, split_field_elements
from blobkzg.kzg.commitment import CommitmentEngine
from blobkzg.kzg.errors import KZGError, SetupNotLoaded
from blobkzg.kzg.proof import ProofEngine
from blobkzg.kzg.versioned_hash import to_versioned_hash

log = logging.getLogger(__name__)


class KZGBlobVerifier:
    """증명 엔진에 묶인 verify_blob 구현."""

    def __init__(self, manager):
        self.commitments = CommitmentEngine(manager)
        self.proofs = ProofEngine(manager)

    def verify_blob(self, entry):
        blob = join_field_elements(entry.field_elements)
        try:
            commitment = self.commitments.commit(blob)
        except SetupNotLoaded:
            raise
        except KZGError as e:
            log.debug("cached blob %s is malformed: %s", entry.versioned_hash.hex(), e)
            return False

        if commitment != bytes(entry.commitment):
            return False
        if to_versioned_hash(commitment) != bytes(entry.versioned_hash):
            return False
        return self.proofs.verify_blob_proof(blob, commitment, entry.proof)

    def build_entry(self, blob, slot=0, index=0, source="local"):
        """블롭으로부터 커밋먼트/블롭 증명/버전 해시를 계산해 캐시 항목을 만든다.

        Raises:
            SetupNotLoaded, InvalidBlobSize, InvalidFieldElement
        """
        fields = split_field_elements(blob)
        commitment = self.commitments.commit(blob)
        proof = self.proofs.compute_blob_proof(blob, commitment)
        return CachedBlobEntry(
            versioned_hash=to_versioned_hash(commitment),
            slot=int(slot),
            index=int(index),
            commitment=commitment,
            proof=proof,
            field_elements=fields,
            source=source,
        )
