"""
KZG 커밋먼트 엔진
==================

블롭을 48바이트 압축 G1 점(커밋먼트)으로 변환한다.

**KZG 커밋먼트란?**
  다항식 p(x)에 대한 간결한 "지문"을 타원곡선 점으로 만든 것이다.
  - 커밋먼트: C = p(τ)·G1 = Σᵢ aᵢ · [τⁱ]₁
  - 바인딩(binding): 서로 다른 블롭은 (압도적 확률로) 서로 다른 커밋먼트를 가짐

  τ를 모르는 상태에서 SRS의 G1 powers에 계수를 곱해 선형결합하면
  p(τ)·G1을 계산할 수 있다. 크기 4096의 다중 스칼라 곱셈(MSM)이다.

**결정론성**:
  같은 블롭과 같은 SRS는 항상 바이트 단위로 동일한 커밋먼트를 만든다.
  영 블롭은 무한원점의 압축 표현 (0xc0 ‖ 00×47)이 된다.

사용 예시:
    >>> engine = CommitmentEngine(manager)
    >>> commitment = engine.commit(blob)   # 48 bytes
"""

from blobkzg.kzg.blob import blob_to_polynomial
from blobkzg.kzg.field import g1_lincomb, g1_to_bytes


def commit(poly, setup):
    """다항식을 KZG 커밋한다 (G1 점 반환).

    C = Σ cᵢ · [τⁱ]₁

    Args:
        poly: 커밋할 다항식 (Polynomial)
        setup: TrustedSetup

    Returns:
        G1 점 (사영 좌표)

    Raises:
        ValueError: 다항식 차수가 SRS 최대 차수를 초과할 때
    """
    if poly.degree > setup.max_degree:
        raise ValueError(
            f"polynomial degree {poly.degree} exceeds setup max degree {setup.max_degree}"
        )
    return g1_lincomb(setup.g1_powers, poly.coeffs)


def blob_to_commitment(blob, setup):
    """블롭을 검증하고 48바이트 압축 커밋먼트를 반환한다.

    Raises:
        InvalidBlobSize, InvalidFieldElement
    """
    return g1_to_bytes(commit(blob_to_polynomial(blob), setup))


class CommitmentEngine:
    """TrustedSetupManager에 묶인 커밋먼트 엔진.

    매 호출마다 manager.setup을 읽으므로 로드 전 호출은
    SetupNotLoaded를 발생시킨다.
    """

    def __init__(self, manager):
        self.manager = manager

    def commit(self, blob):
        """블롭 → 48바이트 커밋먼트.

        Raises:
            SetupNotLoaded, InvalidBlobSize, InvalidFieldElement
        """
        setup = self.manager.setup
        return blob_to_commitment(blob, setup)
