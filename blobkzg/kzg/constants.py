"""
EIP-4844 블롭 / KZG 상수
=========================

블롭 크기, 점 인코딩 크기, 버전 해시 접두사 등 프로토콜 전반에서
공유되는 고정 값들을 정의한다.

  블롭 = 4096개의 필드 원소 × 32바이트 = 131072바이트
  커밋먼트 / 증명 = 압축 G1 점 48바이트
  신뢰 설정 = G1 점 4096개 (τ⁰..τ⁴⁰⁹⁵) + G2 점 2개 (τ⁰, τ¹)
"""

from py_ecc.optimized_bls12_381 import curve_order


# ─────────────────────────────────────────────────────────────────────
# 블롭 파라미터
# ─────────────────────────────────────────────────────────────────────

FIELD_ELEMENTS_PER_BLOB = 4096
BYTES_PER_FIELD_ELEMENT = 32
# 페이로드 패킹 시 필드 원소당 실제 데이터 바이트 (첫 바이트는 항상 0)
USABLE_BYTES_PER_FIELD_ELEMENT = 31
BYTES_PER_BLOB = FIELD_ELEMENTS_PER_BLOB * BYTES_PER_FIELD_ELEMENT

# BLS12-381 스칼라 필드 위수 r
BLS_MODULUS = curve_order


# ─────────────────────────────────────────────────────────────────────
# 점 인코딩
# ─────────────────────────────────────────────────────────────────────

BYTES_PER_G1_POINT = 48
BYTES_PER_G2_POINT = 96
BYTES_PER_COMMITMENT = BYTES_PER_G1_POINT
BYTES_PER_PROOF = BYTES_PER_G1_POINT

# 신뢰 설정 버퍼 크기
SETUP_G1_POINTS = FIELD_ELEMENTS_PER_BLOB
SETUP_G2_POINTS = 2
SETUP_G1_BYTES = SETUP_G1_POINTS * BYTES_PER_G1_POINT   # 196608
SETUP_G2_BYTES = SETUP_G2_POINTS * BYTES_PER_G2_POINT   # 192

# 압축된 무한원점: c_flag=1, b_flag=1, 나머지 0
G1_POINT_AT_INFINITY = b"\xc0" + b"\x00" * (BYTES_PER_G1_POINT - 1)


# ─────────────────────────────────────────────────────────────────────
# 버전 해시 / Fiat-Shamir
# ─────────────────────────────────────────────────────────────────────

VERSIONED_HASH_VERSION_KZG = 0x01
BYTES_PER_VERSIONED_HASH = 32

FIAT_SHAMIR_PROTOCOL_DOMAIN = b"FSBLOBVERIFY_V1_"
