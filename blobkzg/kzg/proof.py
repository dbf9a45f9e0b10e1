"""
KZG 열기 증명 (Opening Proof) 엔진
===================================

"p(z) = y" 임을 커밋먼트만으로 검증할 수 있게 하는 증명을 만들고 검증한다.

**열기 증명 생성**:
  1. y = p(z)  (Horner 평가)
  2. 몫 다항식 q(x) = (p(x) - y) / (x - z)  (조립제법, 나머지는 0)
  3. 증명 π = Σᵢ qᵢ · [τⁱ]₁ = q(τ)·G1

**검증 (페어링)**:
  e(C - y·G1, H) == e(π, τH - z·H)

  두 페어링을 따로 계산하지 않고
  e(C - y·G1, H) · e(-π, τH - z·H) == 1 을 한 번의 최종 거듭제곱으로 확인한다.

  검증은 순수한 술어(predicate)이다. 길이가 틀린 점, 곡선 밖의 점,
  부분군 밖의 점, 범위를 벗어난 스칼라 등 잘못된 입력은 예외 대신
  False를 반환한다. 로드되지 않은 SRS(SetupNotLoaded)만 예외로 전달된다.

**블롭 증명**:
  평가 점을 Fiat-Shamir 챌린지 z = H(블롭, 커밋먼트)로 고정한 열기 증명.
  캐시 재검증에서 블롭과 커밋먼트의 일치를 확인하는 데 사용된다.

사용 예시:
    >>> engine = ProofEngine(manager)
    >>> proof, value = engine.open(blob, 10)
    >>> engine.verify(commitment, 10, value, proof)  # True
"""

import logging

from blobkzg.kzg.blob import blob_to_polynomial, scalar_to_field_element
from blobkzg.kzg.constants import BYTES_PER_G1_POINT
from blobkzg.kzg.errors import InvalidCommitment
from blobkzg.kzg.field import (
    FR,
    bytes_to_g1,
    ec_mul,
    ec_neg,
    ec_sub,
    g1_lincomb,
    g1_to_bytes,
    is_in_subgroup,
    is_inf,
    pairing_check,
)
from blobkzg.kzg.transcript import compute_challenge

log = logging.getLogger(__name__)


def create_witness(poly, point, setup):
    """열기 증명을 생성한다.

    Args:
        poly: 열어볼 다항식 p(x)
        point: 평가 점 z (FR 원소)
        setup: TrustedSetup

    Returns:
        tuple: (G1 점 π, FR y = p(z))
    """
    if not isinstance(point, FR):
        point = FR(point)

    # y = p(z)
    y = poly.evaluate(point)

    # q(x) = (p(x) - y) / (x - z)
    quotient, remainder = (poly - y).divide_by_linear(point)

    # 나머지가 0이어야 함 (p(z) = y이므로)
    if remainder != FR(0):
        raise ValueError("opening proof failed: non-zero remainder")

    return g1_lincomb(setup.g1_powers, quotient.coeffs), y


def verify_opening(commitment, proof, point, evaluation, setup):
    """KZG 열기 증명을 검증한다 (점 단위).

    검증 방정식:
        e(C - y·G1, H) == e(π, τH - z·H)

    한쪽 페어링 인자가 무한원점이면 해당 페어링은 1이다.
    비퇴화성에 의해 e(A, B) == 1 ⟺ A == O 또는 B == O 이므로,
    이 경우는 페어링 없이 판정한다.

    Args:
        commitment: 커밋먼트 C (G1 점)
        proof: 열기 증명 π (G1 점)
        point: 평가 점 z (FR)
        evaluation: 주장하는 평가값 y (FR)
        setup: TrustedSetup

    Returns:
        bool
    """
    g1_gen = setup.g1_powers[0]
    h, tau_h = setup.g2_powers

    # C - y·G1
    c_minus_y = ec_sub(commitment, ec_mul(g1_gen, evaluation))
    # τH - z·H = [τ - z]₂
    tau_minus_z = ec_sub(tau_h, ec_mul(h, point))

    lhs_is_one = is_inf(c_minus_y)
    rhs_is_one = is_inf(proof) or is_inf(tau_minus_z)
    if lhs_is_one or rhs_is_one:
        return lhs_is_one and rhs_is_one

    return pairing_check([(c_minus_y, h), (ec_neg(proof), tau_minus_z)])


def _parse_g1(data):
    """검증 입력용 G1 파싱: 타입, 길이, 곡선, 부분군을 모두 확인한다."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"expected bytes, got {type(data).__name__}")
    if len(data) != BYTES_PER_G1_POINT:
        raise ValueError(f"expected {BYTES_PER_G1_POINT} bytes, got {len(data)}")
    point = bytes_to_g1(data)
    if not is_in_subgroup(point):
        raise ValueError("point is not in the G1 subgroup")
    return point


class ProofEngine:
    """TrustedSetupManager에 묶인 증명/검증 엔진."""

    def __init__(self, manager):
        self.manager = manager

    def open(self, blob, z):
        """블롭 다항식을 z에서 연다.

        Args:
            blob: 131072바이트 블롭
            z: 평가 점 (정수, 0 ≤ z < r)

        Returns:
            tuple: (48바이트 증명, int 평가값 y)

        Raises:
            SetupNotLoaded, InvalidBlobSize, InvalidFieldElement
        """
        setup = self.manager.setup
        point = scalar_to_field_element(z)
        poly = blob_to_polynomial(blob)
        proof, value = create_witness(poly, point, setup)
        return g1_to_bytes(proof), int(value)

    def verify(self, commitment, z, value, proof):
        """(커밋먼트, z, 값, 증명) 튜플을 검증한다.

        Returns:
            bool: 잘못된 입력이면 예외 대신 False

        Raises:
            SetupNotLoaded: SRS가 로드되지 않았을 때
        """
        setup = self.manager.setup
        try:
            commitment_pt = _parse_g1(commitment)
            proof_pt = _parse_g1(proof)
            point = scalar_to_field_element(z)
            evaluation = scalar_to_field_element(value)
        except (ValueError, TypeError) as e:
            log.debug("rejecting malformed verification input: %s", e)
            return False
        return verify_opening(commitment_pt, proof_pt, point, evaluation, setup)

    def compute_blob_proof(self, blob, commitment):
        """Fiat-Shamir 챌린지에서의 블롭 증명을 계산한다.

        Args:
            blob: 131072바이트 블롭
            commitment: 이 블롭의 48바이트 커밋먼트

        Returns:
            48바이트 증명

        Raises:
            SetupNotLoaded, InvalidBlobSize, InvalidFieldElement
            InvalidCommitment: 커밋먼트가 올바른 G1 점이 아닐 때
        """
        setup = self.manager.setup
        poly = blob_to_polynomial(blob)
        try:
            bytes_to_g1(commitment)
        except ValueError as e:
            raise InvalidCommitment(f"invalid commitment: {e}") from e
        z = compute_challenge(bytes(blob), bytes(commitment))
        proof, _ = create_witness(poly, z, setup)
        return g1_to_bytes(proof)

    def verify_blob_proof(self, blob, commitment, proof):
        """블롭 증명을 검증한다. 잘못된 입력이면 False.

        Raises:
            SetupNotLoaded
        """
        setup = self.manager.setup
        try:
            poly = blob_to_polynomial(blob)
            commitment_pt = _parse_g1(commitment)
            proof_pt = _parse_g1(proof)
        except (ValueError, TypeError) as e:
            log.debug("rejecting malformed blob proof input: %s", e)
            return False
        z = compute_challenge(bytes(blob), bytes(commitment))
        y = poly.evaluate(z)
        return verify_opening(commitment_pt, proof_pt, z, y, setup)
