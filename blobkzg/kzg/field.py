"""
기반 모듈: 유한체(Finite Field) 및 BLS12-381 타원곡선 연산
==========================================================

이 모듈은 블롭 KZG 엔진 전체에서 사용되는 기본 대수적 도구를 정의한다.

**유한체 FR**:
  BLS12-381 곡선의 스칼라 필드 (scalar field). 블롭의 각 32바이트 청크는
  이 필드의 원소 하나로 해석된다.
  - 위수 r = 0x73eda753...00000001 (≈ 2^255)

**타원곡선 연산**:
  KZG 커밋먼트와 검증을 위한 G1, G2 그룹 연산 및 페어링.
  점 연산과 페어링은 py_ecc.optimized_bls12_381에 위임하며,
  점은 사영 좌표 (x, y, z) 튜플로 표현된다 (무한원점: z == 0).

**점 압축 (ZCash 형식)**:
  - G1: 48바이트, 첫 바이트 상위 3비트가 (c_flag, b_flag, a_flag)
  - G2: 96바이트, (x 허수부 ‖ x 실수부)

사용 예시:
    >>> from blobkzg.kzg.field import FR, G1, ec_mul, g1_to_bytes
    >>> P = ec_mul(G1, FR(5))   # 5·G1
    >>> len(g1_to_bytes(P))     # 48
"""

from py_ecc.fields import bls12_381_FQ as FQ
from py_ecc.fields import optimized_bls12_381_FQ12 as FQ12
from py_ecc import optimized_bls12_381 as bls12_381
from py_ecc.bls.point_compression import (
    compress_G1,
    compress_G2,
    decompress_G1,
    decompress_G2,
)

from blobkzg.kzg.constants import BYTES_PER_G1_POINT, BYTES_PER_G2_POINT


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """BLS12-381 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ는 생성 시 값을 조용히 mod 축소하므로, 외부 입력은
    반드시 blob.bytes_to_field_element 등으로 범위를 먼저 검사한 뒤
    FR로 감싸야 한다.

    예시:
        >>> x = FR(3)
        >>> x * x          # FR(9)
        >>> FR(1) / FR(3)  # 3의 모듈러 역원
    """
    field_modulus = bls12_381.curve_order


# 곡선 위수 (스칼라 필드 크기)
CURVE_ORDER = bls12_381.curve_order


# ─────────────────────────────────────────────────────────────────────
# 타원곡선 상수 및 연산
# ─────────────────────────────────────────────────────────────────────

# G1 / G2 그룹 생성자
G1 = bls12_381.G1
G2 = bls12_381.G2

# G1 무한원점 (항등원)
Z1 = bls12_381.Z1


def ec_mul(point, scalar):
    """타원곡선 스칼라 곱셈: scalar · point.

    Args:
        point: G1 또는 G2 위의 점
        scalar: 정수 또는 FR 원소

    Returns:
        scalar · point (같은 그룹의 점)
    """
    if isinstance(scalar, FR):
        scalar = int(scalar)
    return bls12_381.multiply(point, scalar % CURVE_ORDER)


def ec_add(p1, p2):
    """타원곡선 점 덧셈: p1 + p2."""
    return bls12_381.add(p1, p2)


def ec_neg(point):
    """타원곡선 점의 역원: -point."""
    return bls12_381.neg(point)


def ec_sub(p1, p2):
    return bls12_381.add(p1, bls12_381.neg(p2))


def ec_eq(p1, p2):
    """사영 좌표 점의 동등성 비교.

    사영 좌표는 표현이 유일하지 않으므로 튜플 == 비교를 쓰면 안 된다.
    """
    return bls12_381.eq(p1, p2)


def is_inf(point):
    """무한원점(항등원) 여부."""
    return bls12_381.is_inf(point)


def is_in_subgroup(point):
    """위수 r 부분군 소속 검사: r·P == O."""
    return bls12_381.is_inf(bls12_381.multiply(point, CURVE_ORDER))


def g1_lincomb(points, scalars):
    """G1 다중 스칼라 곱셈 (MSM): Σᵢ sᵢ · Pᵢ.

    계수가 0인 항은 건너뛴다. 모든 계수가 0이면 무한원점을 반환한다.

    Args:
        points: G1 점 시퀀스
        scalars: FR 원소 시퀀스 (points보다 짧을 수 있음)

    Returns:
        G1 점
    """
    result = Z1
    for point, scalar in zip(points, scalars):
        s = int(scalar)
        if s == 0:
            continue
        result = bls12_381.add(result, bls12_381.multiply(point, s))
    return result


# ─────────────────────────────────────────────────────────────────────
# 페어링
# ─────────────────────────────────────────────────────────────────────

def pairing_check(pairs):
    """Πᵢ e(Pᵢ, Qᵢ) == 1 인지 확인한다.

    각 쌍의 밀러 루프(Miller loop) 결과를 곱한 뒤 최종 거듭제곱을
    한 번만 수행하므로, 두 페어링을 따로 계산해 비교하는 것보다 빠르다.

    Args:
        pairs: [(G1 점, G2 점), ...]

    Returns:
        bool
    """
    acc = FQ12.one()
    for g1_point, g2_point in pairs:
        acc = acc * bls12_381.pairing(g2_point, g1_point, final_exponentiate=False)
    return bls12_381.final_exponentiate(acc) == FQ12.one()


# ─────────────────────────────────────────────────────────────────────
# 점 직렬화 (압축 형식)
# ─────────────────────────────────────────────────────────────────────

def g1_to_bytes(point):
    """G1 점 → 48바이트 압축 표현."""
    return int(compress_G1(point)).to_bytes(BYTES_PER_G1_POINT, "big")


def bytes_to_g1(data):
    """48바이트 압축 표현 → G1 점.

    곡선 위의 점인지만 확인한다. 부분군 검사가 필요하면
    is_in_subgroup을 따로 호출한다.

    Raises:
        ValueError: 길이가 틀리거나 플래그/좌표가 올바르지 않을 때
    """
    data = bytes(data)
    if len(data) != BYTES_PER_G1_POINT:
        raise ValueError(
            f"G1 point must be {BYTES_PER_G1_POINT} bytes, got {len(data)}"
        )
    return decompress_G1(int.from_bytes(data, "big"))


def g2_to_bytes(point):
    """G2 점 → 96바이트 압축 표현 (z1 ‖ z2)."""
    z1, z2 = compress_G2(point)
    half = BYTES_PER_G2_POINT // 2
    return int(z1).to_bytes(half, "big") + int(z2).to_bytes(half, "big")


def bytes_to_g2(data):
    """96바이트 압축 표현 → G2 점.

    Raises:
        ValueError: 길이가 틀리거나 점이 곡선 위에 없을 때
    """
    data = bytes(data)
    if len(data) != BYTES_PER_G2_POINT:
        raise ValueError(
            f"G2 point must be {BYTES_PER_G2_POINT} bytes, got {len(data)}"
        )
    half = BYTES_PER_G2_POINT // 2
    z1 = int.from_bytes(data[:half], "big")
    z2 = int.from_bytes(data[half:], "big")
    return decompress_G2((z1, z2))
