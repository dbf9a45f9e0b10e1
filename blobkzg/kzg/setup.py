"""
신뢰 설정 (Trusted Setup / SRS) 관리
=====================================

KZG 커밋먼트와 검증에 필요한 공개 파라미터(Structured Reference String)를
보관한다.

**SRS란?**
  비밀 값 τ ("toxic waste")의 거듭제곱을 두 그룹의 점으로 공개한 것이다.

  SRS = {
      G1 powers: [G1, τ·G1, τ²·G1, ..., τ⁴⁰⁹⁵·G1]   (4096개, 각 48바이트)
      G2 powers: [G2, τ·G2]                        (2개, 각 96바이트)
  }

  블롭 다항식은 계수(monomial) 형태이므로 G1 powers도 단항식 기저
  τ⁰..τ⁴⁰⁹⁵ 순서여야 한다 (Lagrange 기저 SRS와는 호환되지 않음).

**TrustedSetupManager**:
  프로세스에서 한 번 로드하고 여러 번 읽는 소유 객체.
  로드가 끝난 SRS는 불변(튜플)이므로 여러 스레드가 동기화 없이 읽을 수 있다.
  진행 중인 commit/open/verify와 동시에 load를 다시 호출하는 것은
  호출자가 직접 직렬화해야 한다 (quiesce-then-swap).

사용 예시:
    >>> manager = TrustedSetupManager()
    >>> manager.load_from_bytes(g1_bytes, g2_bytes)
    >>> manager.setup.g1_powers[0]  # G1 생성자
"""

import logging

from blobkzg.kzg.constants import (
    BYTES_PER_G1_POINT,
    BYTES_PER_G2_POINT,
    SETUP_G1_BYTES,
    SETUP_G1_POINTS,
    SETUP_G2_BYTES,
    SETUP_G2_POINTS,
)
from blobkzg.kzg.errors import InvalidSetup, InvalidSetupSize, SetupNotLoaded
from blobkzg.kzg.field import (
    G1,
    G2,
    FR,
    bytes_to_g1,
    bytes_to_g2,
    ec_eq,
    ec_mul,
    g1_to_bytes,
    g2_to_bytes,
    is_in_subgroup,
)

log = logging.getLogger(__name__)

# 모의(mock) 설정의 τ. 공개된 값이므로 누구나 거짓 증명을 만들 수 있다.
MOCK_TAU = 12345


class TrustedSetup:
    """불변 SRS 컨테이너.

    속성:
        g1_powers: (G1, τ·G1, ..., τ⁴⁰⁹⁵·G1) 튜플
        g2_powers: (G2, τ·G2) 튜플
    """

    def __init__(self, g1_powers, g2_powers):
        g1_powers = tuple(g1_powers)
        g2_powers = tuple(g2_powers)
        if len(g1_powers) != SETUP_G1_POINTS:
            raise InvalidSetupSize(
                f"Expected {SETUP_G1_POINTS} G1 points, got {len(g1_powers)}"
            )
        if len(g2_powers) != SETUP_G2_POINTS:
            raise InvalidSetupSize(
                f"Expected {SETUP_G2_POINTS} G2 points, got {len(g2_powers)}"
            )
        self.g1_powers = g1_powers
        self.g2_powers = g2_powers

    @property
    def max_degree(self):
        """커밋할 수 있는 최대 다항식 차수 (4095)."""
        return len(self.g1_powers) - 1

    @classmethod
    def from_bytes(cls, g1_bytes, g2_bytes):
        """연접된 압축 점 버퍼로부터 SRS를 복원한다.

        크기는 점을 하나라도 디코딩하기 전에 검사한다.

        Args:
            g1_bytes: 4096 × 48 = 196608바이트
            g2_bytes: 2 × 96 = 192바이트

        Raises:
            InvalidSetupSize: 버퍼 크기가 다를 때
            InvalidSetup: 점 디코딩 실패, 생성자 불일치, 부분군 밖의 G2 점
        """
        if len(g1_bytes) != SETUP_G1_BYTES:
            raise InvalidSetupSize(
                f"Expected {SETUP_G1_BYTES} G1 bytes, got {len(g1_bytes)}"
            )
        if len(g2_bytes) != SETUP_G2_BYTES:
            raise InvalidSetupSize(
                f"Expected {SETUP_G2_BYTES} G2 bytes, got {len(g2_bytes)}"
            )

        g1_bytes = bytes(g1_bytes)
        g2_bytes = bytes(g2_bytes)
        g1_powers = [
            _decode_point(bytes_to_g1, g1_bytes, i, BYTES_PER_G1_POINT, "G1")
            for i in range(SETUP_G1_POINTS)
        ]
        g2_powers = [
            _decode_point(bytes_to_g2, g2_bytes, i, BYTES_PER_G2_POINT, "G2")
            for i in range(SETUP_G2_POINTS)
        ]

        setup = cls(g1_powers, g2_powers)
        setup.validate()
        return setup

    @classmethod
    def from_text(cls, g1_text, g2_text):
        """한 줄에 하나씩 16진수 압축 점을 적은 텍스트로부터 SRS를 복원한다.

        빈 줄은 무시하며 "0x" 접두사는 선택이다.

        Raises:
            InvalidSetupSize: 줄 수가 4096 / 2가 아닐 때
            InvalidSetup: 16진수 해석 또는 점 디코딩 실패
        """
        g1_lines = [line.strip() for line in g1_text.strip().splitlines() if line.strip()]
        g2_lines = [line.strip() for line in g2_text.strip().splitlines() if line.strip()]

        if len(g1_lines) != SETUP_G1_POINTS:
            raise InvalidSetupSize(
                f"Expected {SETUP_G1_POINTS} G1 points, got {len(g1_lines)}"
            )
        if len(g2_lines) != SETUP_G2_POINTS:
            raise InvalidSetupSize(
                f"Expected {SETUP_G2_POINTS} G2 points, got {len(g2_lines)}"
            )

        try:
            g1_bytes = b"".join(_unhex(line) for line in g1_lines)
            g2_bytes = b"".join(_unhex(line) for line in g2_lines)
        except ValueError as e:
            raise InvalidSetup(f"Invalid hex in trusted setup text: {e}") from e
        return cls.from_bytes(g1_bytes, g2_bytes)

    @classmethod
    def insecure_mock(cls, tau=MOCK_TAU):
        """테스트 전용 모의 SRS를 생성한다.

        경고:
            τ가 공개되어 있으므로 암호학적으로 안전하지 않다.
            프로덕션에서는 절대 사용하지 말 것. 설정(config) 경로에서는
            이 함수에 도달할 수 없다.

        τⁱ·G1을 매번 새로 계산하지 않고 이전 점에 τ를 곱해 누적한다.
        τ가 작으므로 4096개 점 생성이 빠르다.
        """
        tau = int(tau) % FR.field_modulus
        g1_powers = [G1]
        for _ in range(SETUP_G1_POINTS - 1):
            g1_powers.append(ec_mul(g1_powers[-1], tau))
        g2_powers = [G2, ec_mul(G2, tau)]
        return cls(g1_powers, g2_powers)

    def validate(self):
        """첫 원소가 생성자인지, τ·G2가 올바른 부분군에 있는지 검사한다."""
        if not ec_eq(self.g1_powers[0], G1):
            raise InvalidSetup("First G1 power must be generator")
        if not ec_eq(self.g2_powers[0], G2):
            raise InvalidSetup("First G2 power must be generator")
        if not is_in_subgroup(self.g2_powers[1]):
            raise InvalidSetup("tau*G2 is not in the prime-order subgroup")

    def to_bytes(self):
        """(g1_bytes, g2_bytes) 바이너리 레이아웃으로 직렬화한다."""
        g1_bytes = b"".join(g1_to_bytes(p) for p in self.g1_powers)
        g2_bytes = b"".join(g2_to_bytes(p) for p in self.g2_powers)
        return g1_bytes, g2_bytes

    def to_text(self):
        """(g1_text, g2_text) 한 줄당 점 하나의 16진수 텍스트로 직렬화한다."""
        g1_text = "\n".join(g1_to_bytes(p).hex() for p in self.g1_powers) + "\n"
        g2_text = "\n".join(g2_to_bytes(p).hex() for p in self.g2_powers) + "\n"
        return g1_text, g2_text


def _unhex(line):
    if line.startswith(("0x", "0X")):
        line = line[2:]
    return bytes.fromhex(line)


def _decode_point(decode, buf, i, size, group):
    try:
        return decode(buf[i * size:(i + 1) * size])
    except ValueError as e:
        raise InvalidSetup(f"Invalid {group} point at index {i}: {e}") from e


class TrustedSetupManager:
    """프로세스 전체에서 공유하는 SRS의 소유자.

    엔진(CommitmentEngine, ProofEngine)은 이 객체를 전달받아
    매 호출마다 `setup` 속성으로 현재 SRS를 읽는다.

    로드 실패 시 기존 상태는 변경되지 않는다.
    """

    def __init__(self, setup=None):
        self._setup = setup

    @property
    def is_loaded(self):
        return self._setup is not None

    @property
    def setup(self):
        """현재 SRS.

        Raises:
            SetupNotLoaded: 아직 로드되지 않았을 때
        """
        setup = self._setup
        if setup is None:
            raise SetupNotLoaded("Trusted setup not loaded")
        return setup

    def load(self, setup):
        """SRS를 교체한다."""
        if not isinstance(setup, TrustedSetup):
            setup = TrustedSetup(*setup)
        self._setup = setup
        log.info("trusted setup loaded (%d G1, %d G2 points)",
                 len(setup.g1_powers), len(setup.g2_powers))
        return setup

    def load_from_bytes(self, g1_bytes, g2_bytes):
        """미리 읽어 둔 바이너리 버퍼로부터 SRS를 로드한다.

        Raises:
            InvalidSetupSize: 크기가 196608 / 192바이트가 아닐 때 (디코딩 전)
            InvalidSetup: 점이 올바르지 않을 때
        """
        return self.load(TrustedSetup.from_bytes(g1_bytes, g2_bytes))

    def load_from_text(self, g1_text, g2_text):
        """16진수 텍스트(한 줄당 점 하나)로부터 SRS를 로드한다."""
        return self.load(TrustedSetup.from_text(g1_text, g2_text))

    def load_from_mock(self):
        """테스트 전용 모의 SRS를 로드한다.

        경고:
            τ = 12345가 공개된 안전하지 않은 설정이다. 테스트 외에는 사용 금지.
        """
        log.warning("loading INSECURE mock trusted setup (tau is public)")
        return self.load(TrustedSetup.insecure_mock())

    def unload(self):
        self._setup = None
        log.info("trusted setup unloaded")
