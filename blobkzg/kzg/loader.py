"""
플랫폼 의존 신뢰 설정 로더
===========================

경로 → 바이트 변환은 핵심 엔진 밖에서 일어난다. 엔진(TrustedSetupManager)은
이미 읽은 버퍼만 받는다. 파일 시스템이 없는 인터프리터(Pyodide/WASI 등)에서는
경로 기반 로딩이 EnvironmentUnsupported로 실패한다.

지원 형식:
  - "binary": 압축 점을 연접한 바이너리 (196608 / 192바이트)
  - "text":   한 줄에 16진수 압축 점 하나 (4096 / 2줄)
"""

import logging
import sys
from pathlib import Path

from blobkzg.kzg.errors import EnvironmentUnsupported, KZGError

log = logging.getLogger(__name__)

SETUP_FORMATS = ("binary", "text")

# 파일 시스템 접근이 없는 플랫폼
_NO_FILESYSTEM_PLATFORMS = ("emscripten", "wasi")


def filesystem_available():
    return sys.platform not in _NO_FILESYSTEM_PLATFORMS


def read_setup_files(g1_path, g2_path, fmt="binary"):
    """G1/G2 설정 파일을 읽어 (g1, g2) 버퍼를 반환한다.

    Args:
        g1_path, g2_path: 파일 경로
        fmt: "binary"이면 bytes, "text"이면 str을 반환

    Raises:
        EnvironmentUnsupported: 파일 시스템이 없는 환경
        KZGError: 알 수 없는 형식
        OSError: 파일을 읽을 수 없을 때
    """
    if not filesystem_available():
        raise EnvironmentUnsupported(
            f"loading a trusted setup by path is not supported on {sys.platform}; "
            "pass pre-loaded buffers instead"
        )
    if fmt not in SETUP_FORMATS:
        raise KZGError(f"unknown trusted setup format: {fmt!r}")

    g1_path, g2_path = Path(g1_path), Path(g2_path)
    log.debug("reading trusted setup (%s) from %s, %s", fmt, g1_path, g2_path)
    if fmt == "binary":
        return g1_path.read_bytes(), g2_path.read_bytes()
    return g1_path.read_text(encoding="utf-8"), g2_path.read_text(encoding="utf-8")


def load_setup_files(manager, g1_path, g2_path, fmt="binary"):
    """설정 파일을 읽어 manager에 로드한다."""
    g1, g2 = read_setup_files(g1_path, g2_path, fmt)
    if fmt == "binary":
        return manager.load_from_bytes(g1, g2)
    return manager.load_from_text(g1, g2)
