"""
blobkzg 설정
=============

환경 변수로 덮어쓸 수 있는 서비스 설정. 모든 값에 기본값이 있다.

환경 변수 (모두 선택):

  # 신뢰 설정
  BLOBKZG_SETUP_G1_PATH=./trusted_setup/g1.bin
  BLOBKZG_SETUP_G2_PATH=./trusted_setup/g2.bin
  BLOBKZG_SETUP_FORMAT=binary          # binary | text

  # 블롭 캐시
  BLOBKZG_CACHE_MAX_ENTRIES=64
  BLOBKZG_CACHE_MAX_BYTES=16MiB        # KiB/MiB/KB/MB 접미사 허용
  BLOBKZG_CACHE_STRICT_REVERIFY=false

  # 로깅
  BLOBKZG_LOG_LEVEL=INFO

모의(mock) 신뢰 설정을 선택하는 키는 없다.
"""

import logging
import os
import re
from dataclasses import asdict, dataclass
from functools import lru_cache

from blobkzg.kzg.loader import SETUP_FORMATS

_SIZE_RE = re.compile(
    r"^\s*(?P<num>\d+(?:\.\d+)?)\s*(?P<unit>bytes?|b|kb|kib|mb|mib|gb|gib)?\s*$",
    re.IGNORECASE,
)

_SIZE_UNITS = {
    "b": 1, "byte": 1, "bytes": 1,
    "kb": 1000, "kib": 1024,
    "mb": 1000 ** 2, "mib": 1024 ** 2,
    "gb": 1000 ** 3, "gib": 1024 ** 3,
}

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def _getenv(env, key, default=None):
    v = env.get(key)
    return v if v is not None and v.strip() != "" else default


def _parse_size(value, *, default):
    """'4096', '4KiB', '16MiB' 같은 크기 표기 → 바이트."""
    if not value:
        return default
    m = _SIZE_RE.match(value)
    if not m:
        raise ValueError(f"Invalid size: {value!r}")
    unit = (m.group("unit") or "b").lower()
    return int(float(m.group("num")) * _SIZE_UNITS[unit])


def _parse_bool(value, *, default):
    if value is None:
        return default
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"Invalid boolean: {value!r}")


def _parse_int(value, *, default):
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"Invalid integer: {value!r}") from e


@dataclass(frozen=True)
class Settings:
    setup_g1_path: str = None
    setup_g2_path: str = None
    setup_format: str = "binary"
    cache_max_entries: int = 64
    cache_max_bytes: int = 16 * 1024 * 1024
    cache_strict_reverify: bool = False
    log_level: str = "INFO"

    @property
    def has_setup_paths(self):
        return bool(self.setup_g1_path and self.setup_g2_path)

    @classmethod
    def from_env(cls, env=None):
        """환경 변수에서 설정을 읽는다.

        Raises:
            ValueError: 값 형식이 잘못되었을 때
        """
        env = os.environ if env is None else env

        def get(key):
            return _getenv(env, key)

        fmt = (get("BLOBKZG_SETUP_FORMAT") or cls.setup_format).lower()
        if fmt not in SETUP_FORMATS:
            raise ValueError(f"BLOBKZG_SETUP_FORMAT must be one of {SETUP_FORMATS}, got {fmt!r}")

        level = (get("BLOBKZG_LOG_LEVEL") or cls.log_level).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid BLOBKZG_LOG_LEVEL: {level!r}")

        max_entries = _parse_int(get("BLOBKZG_CACHE_MAX_ENTRIES"), default=cls.cache_max_entries)
        if max_entries < 1:
            raise ValueError("BLOBKZG_CACHE_MAX_ENTRIES must be >= 1")

        return cls(
            setup_g1_path=get("BLOBKZG_SETUP_G1_PATH"),
            setup_g2_path=get("BLOBKZG_SETUP_G2_PATH"),
            setup_format=fmt,
            cache_max_entries=max_entries,
            cache_max_bytes=_parse_size(get("BLOBKZG_CACHE_MAX_BYTES"), default=cls.cache_max_bytes),
            cache_strict_reverify=_parse_bool(
                get("BLOBKZG_CACHE_STRICT_REVERIFY"), default=cls.cache_strict_reverify
            ),
            log_level=level,
        )

    def to_dict(self):
        return asdict(self)


@lru_cache(maxsize=1)
def get_settings():
    """프로세스 전역 설정 (한 번만 읽음)."""
    return Settings.from_env()


def configure_logging(level="INFO"):
    """서비스 진입점용 루트 로거 설정."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
