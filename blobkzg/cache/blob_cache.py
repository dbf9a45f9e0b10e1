"""
블롭 캐시 (LRU, 개수/바이트 이중 제한)
=======================================

이미 가져와 검증한 블롭을 버전 해시로 보관하는 프로세스 내 캐시.

**정책**:
  - max_entries: 최대 항목 수
  - max_bytes:   최대 사용 바이트. 항목 하나의 비용은 고정
                 ENTRY_SIZE = 블롭(131072) + 커밋먼트(48) + 증명(48)
  - 순수 LRU: 최근성은 get / put 성공 시에만 갱신된다.
    `key in cache`나 len()은 순서를 바꾸지 않는다.

**재검증 (strict_reverify)**:
  get_with_reverify(key, verifier)는 적중 후 verifier.verify_blob(entry)를
  호출한다. False면 항목을 제거하고 MISS를 반환한다.
  검증기는 주입되는 능력(capability)이므로 캐시는 증명 엔진에 의존하지 않는다.

**동시성**:
  put / remove / clear는 하나의 RLock 아래에서 원자적으로 적용된다.
  get_with_reverify는 키별 잠금으로 "조회 → 검증 → 제거"를 하나의
  임계 구역으로 묶는다. 키별 잠금은 참조 횟수로 관리되며 마지막
  사용자가 빠져나가면 맵에서 지워진다 (없는 키 조회로 잠금이 쌓이지 않음).

  스레드 경로(get_with_reverify, threading.Lock)와 코루틴 경로
  (aget_with_reverify, asyncio.Lock)는 서로 다른 잠금을 쓴다. 같은 키를
  두 경로에서 동시에 재검증하면 직렬화되지 않는다. 이 경우에도 검증 중
  교체된 새 항목은 제거되지 않는다 (_settle의 동일성 검사).

사용 예시:
    >>> cache = BlobCache(max_entries=3, max_bytes=1 << 20)
    >>> cache.put(entry.versioned_hash, entry)
    >>> cache.get(entry.versioned_hash) is MISS  # False
"""

import asyncio
import inspect
import logging
import threading
from collections import OrderedDict
from contextlib import asynccontextmanager, contextmanager
from dataclasses import dataclass

from blobkzg.kzg.constants import BYTES_PER_BLOB, BYTES_PER_COMMITMENT, BYTES_PER_PROOF

log = logging.getLogger(__name__)

ENTRY_SIZE = BYTES_PER_BLOB + BYTES_PER_COMMITMENT + BYTES_PER_PROOF


class _Miss:
    """캐시 미스 표식. 거짓(falsy)으로 평가된다."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "MISS"


MISS = _Miss()

# 저장된 None과 "키 없음"을 구분한다
_ABSENT = object()


def _fmt(key):
    return "0x" + key.hex() if isinstance(key, (bytes, bytearray)) else str(key)


@dataclass(frozen=True)
class CachedBlobEntry:
    """캐시 항목.

    속성:
        versioned_hash: 32바이트 버전 해시 (캐시 키)
        slot: 블롭이 포함된 비콘 슬롯
        index: 슬롯 내 블롭 인덱스
        commitment: 48바이트 커밋먼트
        proof: 48바이트 블롭 증명
        field_elements: 32바이트 청크 4096개의 튜플
        source: 블롭 출처 (예: "provider-beacon", "archive")
    """
    versioned_hash: bytes
    slot: int
    index: int
    commitment: bytes
    proof: bytes
    field_elements: tuple
    source: str


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    puts: int = 0
    evictions: int = 0
    reverify_failures: int = 0
    entries: int = 0
    used_bytes: int = 0
    max_entries: int = 0
    max_bytes: int = 0


class BlobCache:
    """스레드 안전 LRU 블롭 캐시."""

    def __init__(self, max_entries, max_bytes, strict_reverify=False):
        if int(max_entries) < 1:
            raise ValueError("max_entries must be at least 1")
        if int(max_bytes) < ENTRY_SIZE:
            raise ValueError(f"max_bytes must be at least {ENTRY_SIZE}")
        self.max_entries = int(max_entries)
        self.max_bytes = int(max_bytes)
        self.strict_reverify = bool(strict_reverify)

        self._lock = threading.RLock()
        # 앞쪽이 가장 오래 전에 접근한 항목
        self._entries = OrderedDict()
        self._used_bytes = 0
        self._stats = CacheStats()

        self._key_locks = {}
        self._async_key_locks = {}

    # ---- 기본 연산 ------------------------------------------------------

    def put(self, key, entry):
        """항목을 가장 최근 위치에 넣는다.

        이미 있는 키는 먼저 제거한 뒤, count ≥ max_entries 이거나
        used + ENTRY_SIZE > max_bytes 인 동안 LRU 항목을 축출한다.
        """
        with self._lock:
            if key in self._entries:
                self._delete_unlocked(key)

            evicted = 0
            while self._entries and (
                len(self._entries) >= self.max_entries
                or self._used_bytes + ENTRY_SIZE > self.max_bytes
            ):
                lru_key = next(iter(self._entries))
                self._delete_unlocked(lru_key)
                evicted += 1

            self._entries[key] = entry
            self._used_bytes += ENTRY_SIZE
            self._stats.puts += 1
            self._stats.evictions += evicted

        if evicted:
            log.debug("blob cache evicted %d entr%s for %s",
                      evicted, "y" if evicted == 1 else "ies", _fmt(key))

    def get(self, key):
        """적중 시 항목을 반환하고 가장 최근으로 올린다. 아니면 MISS."""
        with self._lock:
            entry = self._entries.get(key, _ABSENT)
            if entry is _ABSENT:
                self._stats.misses += 1
                return MISS
            self._entries.move_to_end(key, last=True)
            self._stats.hits += 1
            return entry

    def remove(self, key):
        """키를 제거한다. 제거했으면 True."""
        with self._lock:
            return self._delete_unlocked(key)

    def clear(self):
        """모든 항목과 바이트 계산을 한 번에 초기화한다."""
        with self._lock:
            self._entries.clear()
            self._used_bytes = 0

    # ---- 재검증 ---------------------------------------------------------

    def get_with_reverify(self, key, verifier):
        """적중 항목을 verifier.verify_blob(entry)로 재검증한 뒤 반환한다.

        strict_reverify가 꺼져 있으면 get과 같다.
        verify_blob이 코루틴을 반환하면 aget_with_reverify를 사용해야 한다.

        Returns:
            항목 또는 MISS
        """
        if not self.strict_reverify:
            return self.get(key)

        with self._key_lock(key):
            entry = self.get(key)
            if entry is MISS:
                return MISS
            ok = verifier.verify_blob(entry)
            if inspect.isawaitable(ok):
                if hasattr(ok, "close"):
                    ok.close()
                raise TypeError(
                    "verify_blob returned an awaitable; use aget_with_reverify"
                )
            return self._settle(key, entry, ok)

    async def aget_with_reverify(self, key, verifier):
        """get_with_reverify의 비동기 버전. verify_blob은 동기/비동기 모두 허용.

        asyncio.Lock으로 직렬화하므로 같은 키의 get_with_reverify(스레드)와는
        상호 배제되지 않는다.
        """
        if not self.strict_reverify:
            return self.get(key)

        async with self._async_key_lock(key):
            entry = self.get(key)
            if entry is MISS:
                return MISS
            ok = verifier.verify_blob(entry)
            if inspect.isawaitable(ok):
                ok = await ok
            return self._settle(key, entry, ok)

    def _settle(self, key, entry, ok):
        if ok:
            return entry
        with self._lock:
            # 검증 중에 다른 값으로 교체되었으면 새 항목은 건드리지 않는다
            if self._entries.get(key) is entry:
                self._delete_unlocked(key)
            self._stats.reverify_failures += 1
            self._stats.misses += 1
        log.warning("blob cache entry %s failed reverification; evicted", _fmt(key))
        return MISS

    def _acquire_slot(self, locks, key, factory):
        # slot = [잠금, 사용자 수]
        with self._lock:
            slot = locks.get(key)
            if slot is None:
                slot = locks[key] = [factory(), 0]
            slot[1] += 1
            return slot

    def _release_slot(self, locks, key, slot):
        with self._lock:
            slot[1] -= 1
            if slot[1] == 0 and locks.get(key) is slot:
                del locks[key]

    @contextmanager
    def _key_lock(self, key):
        slot = self._acquire_slot(self._key_locks, key, threading.Lock)
        try:
            with slot[0]:
                yield
        finally:
            self._release_slot(self._key_locks, key, slot)

    @asynccontextmanager
    async def _async_key_lock(self, key):
        slot = self._acquire_slot(self._async_key_locks, key, asyncio.Lock)
        try:
            async with slot[0]:
                yield
        finally:
            self._release_slot(self._async_key_locks, key, slot)

    # ---- 조회 -----------------------------------------------------------

    @property
    def used_bytes(self):
        with self._lock:
            return self._used_bytes

    def keys(self):
        """LRU → MRU 순서의 키 목록 (최근성은 바꾸지 않음)."""
        with self._lock:
            return list(self._entries.keys())

    def stats(self):
        with self._lock:
            return CacheStats(
                hits=self._stats.hits,
                misses=self._stats.misses,
                puts=self._stats.puts,
                evictions=self._stats.evictions,
                reverify_failures=self._stats.reverify_failures,
                entries=len(self._entries),
                used_bytes=self._used_bytes,
                max_entries=self.max_entries,
                max_bytes=self.max_bytes,
            )

    def __contains__(self, key):
        with self._lock:
            return key in self._entries

    def __len__(self):
        with self._lock:
            return len(self._entries)

    # ---- 내부 -----------------------------------------------------------

    def _delete_unlocked(self, key):
        if self._entries.pop(key, _ABSENT) is _ABSENT:
            return False
        self._used_bytes -= ENTRY_SIZE
        return True
