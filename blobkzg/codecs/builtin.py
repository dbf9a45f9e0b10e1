"""
기본 코덱: raw, json
"""

import json

from blobkzg.kzg.errors import CodecError


class RawCodec:
    """바이트열을 그대로 통과시킨다."""

    def encode(self, data):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise CodecError(f"Expected bytes, got {type(data).__name__}")
        return bytes(data)

    def decode(self, data):
        return bytes(data)


class JsonCodec:
    """JSON 직렬화 (UTF-8, 공백 없는 구분자)."""

    def encode(self, data):
        try:
            return json.dumps(data, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise CodecError(f"JSON encode failed: {e}") from e

    def decode(self, data):
        try:
            return json.loads(bytes(data).decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            raise CodecError(f"JSON decode failed: {e}") from e
