"""
코덱 레지스트리
================

MIME 타입(또는 식별자) → 코덱 매핑. 코덱은 encode(obj) -> bytes,
decode(bytes) -> obj 두 메서드를 가진 객체이다.
"""

from blobkzg.kzg.errors import CodecError

_codecs = {}


def register_codec(name, codec):
    """코덱을 등록한다. 같은 이름은 덮어쓴다.

    Raises:
        CodecError: 이름이 비었거나 encode/decode가 없을 때
    """
    if not name or not callable(getattr(codec, "encode", None)) \
            or not callable(getattr(codec, "decode", None)):
        raise CodecError("Invalid codec")
    _codecs[name] = codec


def get_codec(name):
    """등록된 코덱을 반환한다.

    Raises:
        CodecError: 알 수 없는 코덱
    """
    try:
        return _codecs[name]
    except KeyError:
        raise CodecError(f"Unknown codec: {name!r}") from None


def has_codec(name):
    return name in _codecs


def list_codecs():
    return sorted(_codecs)
