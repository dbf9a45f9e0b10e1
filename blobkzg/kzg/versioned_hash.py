"""
버전 해시 (Versioned Hash)
===========================

커밋먼트의 32바이트 온체인 식별자를 만든다. 캐시의 키로도 쓰인다.

  versioned_hash = 0x01 ‖ SHA-256(commitment)[1:]

16진수 표현은 항상 ^0x01[0-9a-f]{62}$ 형태이다.
"""

import hashlib
import re

from blobkzg.kzg.constants import (
    BYTES_PER_COMMITMENT,
    BYTES_PER_VERSIONED_HASH,
    VERSIONED_HASH_VERSION_KZG,
)
from blobkzg.kzg.errors import InvalidCommitment

VERSIONED_HASH_RE = re.compile(r"^0x01[0-9a-f]{62}$")


def to_versioned_hash(commitment):
    """48바이트 커밋먼트 → 32바이트 버전 해시.

    Raises:
        InvalidCommitment: 입력이 48바이트가 아닐 때
    """
    if not isinstance(commitment, (bytes, bytearray, memoryview)):
        raise InvalidCommitment(
            f"commitment must be bytes, got {type(commitment).__name__}"
        )
    if len(commitment) != BYTES_PER_COMMITMENT:
        raise InvalidCommitment(
            f"commitment must be {BYTES_PER_COMMITMENT} bytes, got {len(commitment)}"
        )
    digest = bytearray(hashlib.sha256(bytes(commitment)).digest())
    digest[0] = VERSIONED_HASH_VERSION_KZG
    return bytes(digest)


def versioned_hash_hex(commitment):
    """커밋먼트 → "0x01..." 형태의 소문자 16진수 버전 해시."""
    return "0x" + to_versioned_hash(commitment).hex()


def is_versioned_hash(value):
    """바이트열 또는 16진수 문자열이 KZG 버전 해시 형식인지 확인한다."""
    if isinstance(value, str):
        return VERSIONED_HASH_RE.match(value) is not None
    if isinstance(value, (bytes, bytearray)):
        return (len(value) == BYTES_PER_VERSIONED_HASH
                and value[0] == VERSIONED_HASH_VERSION_KZG)
    return False
