"""
페이로드 ↔ 블롭 패킹
=====================

임의의 바이트 페이로드를 EIP-4844 블롭에 담는다.

  필드 원소 i = 0x00 ‖ payload[31·i : 31·(i+1)]

각 32바이트 청크의 첫 바이트를 0으로 두므로 모든 청크는 항상
BLS_MODULUS보다 작다. 한 블롭에 담을 수 있는 최대 페이로드는
4096 × 31 = 126976바이트이다.

디코딩은 뒤쪽의 0 바이트를 잘라낸다. 0으로 끝나는 페이로드는
코덱(json 등) 수준에서 구분해야 한다.
"""

from blobkzg.kzg.constants import (
    BYTES_PER_BLOB,
    BYTES_PER_FIELD_ELEMENT,
    FIELD_ELEMENTS_PER_BLOB,
    USABLE_BYTES_PER_FIELD_ELEMENT,
)
from blobkzg.kzg.errors import CodecError, DataTooLarge, InvalidBlobSize

MAX_PAYLOAD_BYTES = FIELD_ELEMENTS_PER_BLOB * USABLE_BYTES_PER_FIELD_ELEMENT


def encode_blob(data):
    """페이로드 → 131072바이트 블롭.

    Raises:
        DataTooLarge: 페이로드가 126976바이트를 초과할 때
    """
    data = bytes(data)
    if len(data) > MAX_PAYLOAD_BYTES:
        raise DataTooLarge(
            f"Data too large: {len(data)} bytes (max {MAX_PAYLOAD_BYTES})"
        )

    blob = bytearray(BYTES_PER_BLOB)
    for i in range(0, len(data), USABLE_BYTES_PER_FIELD_ELEMENT):
        chunk = data[i:i + USABLE_BYTES_PER_FIELD_ELEMENT]
        start = (i // USABLE_BYTES_PER_FIELD_ELEMENT) * BYTES_PER_FIELD_ELEMENT + 1
        blob[start:start + len(chunk)] = chunk
    return bytes(blob)


def decode_blob(blob):
    """encode_blob으로 만든 블롭 → 페이로드 (뒤쪽 0 바이트 제거).

    Raises:
        InvalidBlobSize: 길이 ≠ 131072
        CodecError: 필드 원소의 첫 바이트가 0이 아닐 때
    """
    blob = bytes(blob)
    if len(blob) != BYTES_PER_BLOB:
        raise InvalidBlobSize(f"Invalid blob size: {len(blob)}")

    parts = []
    for i in range(FIELD_ELEMENTS_PER_BLOB):
        start = i * BYTES_PER_FIELD_ELEMENT
        if blob[start] != 0:
            raise CodecError(f"field element {i}: first byte must be 0")
        parts.append(blob[start + 1:start + BYTES_PER_FIELD_ELEMENT])
    return b"".join(parts).rstrip(b"\x00")
