"""
블롭 모델: 검증 및 필드 원소 파싱
==================================

131072바이트 블롭을 4096개의 스칼라 필드 원소(= 다항식 계수)로 해석한다.

**검증 규칙**:
  1. 길이는 정확히 131072바이트 → 아니면 InvalidBlobSize
  2. 각 32바이트 청크를 빅엔디안 정수로 읽은 값은 BLS_MODULUS 미만
     → 아니면 InvalidFieldElement

  잘라내기(truncation)나 mod 축소는 하지 않는다.
  첫 바이트만 보는 약한 검사가 아니라 전체 크기 비교를 수행한다.

사용 예시:
    >>> blob = bytes(131072)
    >>> poly = blob_to_polynomial(blob)
    >>> poly.is_zero()  # True
"""

from blobkzg.kzg.constants import (
    BLS_MODULUS,
    BYTES_PER_BLOB,
    BYTES_PER_FIELD_ELEMENT,
    FIELD_ELEMENTS_PER_BLOB,
)
from blobkzg.kzg.errors import InvalidBlobSize, InvalidFieldElement
from blobkzg.kzg.field import FR
from blobkzg.kzg.polynomial import Polynomial


def bytes_to_field_element(chunk, index=None):
    """32바이트 빅엔디안 청크를 정규(canonical) FR 원소로 변환한다.

    Args:
        chunk: 32바이트
        index: 오류 메시지에 표시할 블롭 내 위치 (선택)

    Raises:
        InvalidFieldElement: 길이가 32가 아니거나 값이 BLS_MODULUS 이상일 때
    """
    where = f"field element {index}" if index is not None else "field element"
    if len(chunk) != BYTES_PER_FIELD_ELEMENT:
        raise InvalidFieldElement(
            f"{where}: expected {BYTES_PER_FIELD_ELEMENT} bytes, got {len(chunk)}"
        )
    value = int.from_bytes(chunk, "big")
    if value >= BLS_MODULUS:
        raise InvalidFieldElement(
            f"{where} exceeds modulus", data={"index": index}
        )
    return FR(value)


def field_element_to_bytes(element):
    """FR 원소(또는 정규 범위 정수) → 32바이트 빅엔디안."""
    return int(element).to_bytes(BYTES_PER_FIELD_ELEMENT, "big")


def scalar_to_field_element(value):
    """정수/FR 스칼라를 정규 FR로 변환한다.

    Raises:
        InvalidFieldElement: 정수가 아니거나 [0, BLS_MODULUS) 밖일 때
    """
    if isinstance(value, FR):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFieldElement(f"scalar must be an int, got {type(value).__name__}")
    if value < 0 or value >= BLS_MODULUS:
        raise InvalidFieldElement("scalar is outside the field range")
    return FR(value)


def validate_blob(blob):
    """블롭의 길이와 모든 필드 원소의 정규성을 검사한다.

    Raises:
        InvalidBlobSize: 길이 ≠ 131072
        InvalidFieldElement: 청크 ≥ BLS_MODULUS
    """
    blob_to_field_elements(blob)


def blob_to_field_elements(blob):
    """블롭 → 4096개의 FR 원소 리스트 (청크 i → 원소 i).

    Raises:
        InvalidBlobSize, InvalidFieldElement
    """
    if not isinstance(blob, (bytes, bytearray, memoryview)):
        raise InvalidBlobSize(f"blob must be bytes, got {type(blob).__name__}")
    blob = bytes(blob)
    if len(blob) != BYTES_PER_BLOB:
        raise InvalidBlobSize(
            f"Invalid blob size: expected {BYTES_PER_BLOB}, got {len(blob)}"
        )

    elements = []
    for i in range(FIELD_ELEMENTS_PER_BLOB):
        start = i * BYTES_PER_FIELD_ELEMENT
        elements.append(
            bytes_to_field_element(blob[start:start + BYTES_PER_FIELD_ELEMENT], i)
        )
    return elements


def blob_to_polynomial(blob):
    """블롭을 계수 형태 다항식 p(x) = Σ aᵢ·xⁱ 로 해석한다."""
    return Polynomial(blob_to_field_elements(blob))


def split_field_elements(blob):
    """검증된 블롭 → 32바이트 청크 4096개의 튜플 (캐시 저장 형태)."""
    validate_blob(blob)
    blob = bytes(blob)
    return tuple(
        blob[i:i + BYTES_PER_FIELD_ELEMENT]
        for i in range(0, BYTES_PER_BLOB, BYTES_PER_FIELD_ELEMENT)
    )


def join_field_elements(chunks):
    """32바이트 청크 시퀀스 → 블롭 바이트열 (검증은 하지 않음)."""
    return b"".join(bytes(c) for c in chunks)
