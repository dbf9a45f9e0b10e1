"""
KZG 데이터 직렬화/역직렬화 헬퍼
================================

JSON 요청/응답에 쓸 수 있는 형태로 블롭, 점, 스칼라, 캐시 항목을 변환한다.
바이트열은 "0x" 접두사가 붙은 소문자 16진수, 스칼라는 10진수 문자열
(또는 "0x" 16진수)로 주고받는다.
"""

from blobkzg.kzg.blob import join_field_elements
from blobkzg.kzg.errors import KZGError


class SerializationError(KZGError):
    code = "INVALID_REQUEST"


# ─── bytes ───

def serialize_bytes(data):
    """bytes → "0x..." """
    return "0x" + bytes(data).hex()


def deserialize_bytes(s, field="value"):
    """"0x..." → bytes"""
    if not isinstance(s, str):
        raise SerializationError(f"{field} must be a hex string")
    if s.startswith(("0x", "0X")):
        s = s[2:]
    try:
        return bytes.fromhex(s)
    except ValueError:
        raise SerializationError(f"{field} is not valid hex") from None


# ─── scalar ───

def serialize_scalar(val):
    """int/FR → str(int)"""
    return str(int(val))


def deserialize_scalar(s, field="value"):
    """str(int) | "0x.." | int → int (범위 검사는 엔진이 수행)"""
    if isinstance(s, bool):
        raise SerializationError(f"{field} must be an integer")
    if isinstance(s, int):
        return s
    if not isinstance(s, str):
        raise SerializationError(f"{field} must be an integer or string")
    try:
        return int(s, 16) if s.lower().startswith("0x") else int(s, 10)
    except ValueError:
        raise SerializationError(f"{field} is not an integer") from None


# ─── cache entry ───

def serialize_entry(entry, include_blob=False):
    """CachedBlobEntry → dict"""
    data = {
        "versioned_hash": serialize_bytes(entry.versioned_hash),
        "slot": entry.slot,
        "index": entry.index,
        "commitment": serialize_bytes(entry.commitment),
        "proof": serialize_bytes(entry.proof),
        "source": entry.source,
    }
    if include_blob:
        data["blob"] = serialize_bytes(join_field_elements(entry.field_elements))
    return data


def serialize_stats(stats):
    """CacheStats → dict"""
    return {
        "hits": stats.hits,
        "misses": stats.misses,
        "puts": stats.puts,
        "evictions": stats.evictions,
        "reverify_failures": stats.reverify_failures,
        "entries": stats.entries,
        "used_bytes": stats.used_bytes,
        "max_entries": stats.max_entries,
        "max_bytes": stats.max_bytes,
    }


def bytes_short(data):
    """bytes → 축약 문자열 (로그 표시용)"""
    s = bytes(data).hex()
    if len(s) <= 12:
        return "0x" + s
    return "0x" + s[:6] + "..." + s[-4:]
