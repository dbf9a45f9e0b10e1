"""
페이로드 코덱
=============

페이로드 객체 → 바이트 (코덱) → 블롭 (패킹)의 두 단계를 제공한다.

사용 예시:
    >>> from blobkzg.codecs import encode_payload, decode_payload
    >>> blob = encode_payload({"hello": "blob"}, "application/json")
    >>> decode_payload(blob, "application/json")  # {"hello": "blob"}
"""

from blobkzg.codecs.builtin import JsonCodec, RawCodec
from blobkzg.codecs.packing import MAX_PAYLOAD_BYTES, decode_blob, encode_blob
from blobkzg.codecs.registry import get_codec, has_codec, list_codecs, register_codec

RAW = "application/octet-stream"
JSON = "application/json"

register_codec(RAW, RawCodec())
register_codec(JSON, JsonCodec())


def encode_payload(obj, codec=RAW):
    """코덱으로 직렬화한 뒤 블롭에 패킹한다."""
    return encode_blob(get_codec(codec).encode(obj))


def decode_payload(blob, codec=RAW):
    """블롭에서 꺼낸 바이트를 코덱으로 역직렬화한다."""
    return get_codec(codec).decode(decode_blob(blob))


__all__ = [
    "JSON",
    "MAX_PAYLOAD_BYTES",
    "RAW",
    "decode_blob",
    "decode_payload",
    "encode_blob",
    "encode_payload",
    "get_codec",
    "has_codec",
    "list_codecs",
    "register_codec",
]
