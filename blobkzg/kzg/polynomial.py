"""
블롭 다항식 (계수 형태)
========================

블롭의 4096개 필드 원소 {a₀ … a₄₀₉₅}를 단항식 기저의 계수로 해석한다.

  p(x) = a₀ + a₁·x + a₂·x² + ... + a₄₀₉₅·x⁴⁰⁹⁵

청크 i는 xⁱ의 계수이며, SRS의 G1 powers [τⁱ]₁과 같은 순서로 짝지어진다.

**지원 연산**:
  - 덧셈/뺄셈 (다항식 또는 상수), 스칼라곱, 부호 반전
  - Horner 평가: p(z)
  - 일차식 (x - z)로의 조립제법(synthetic division)

**조립제법 (divide_by_linear)**:
  열기 증명의 몫 q(x) = (p(x) - y) / (x - z)를 O(n)에 계산한다.
  y = p(z)이면 나머지는 0이다 (인수정리).

사용 예시:
    >>> p = Polynomial([1, 2, 3])          # 1 + 2x + 3x²
    >>> p.evaluate(2)                      # FR(17)
    >>> q, r = (p - 17).divide_by_linear(2)
    >>> r                                  # FR(0)
"""

from itertools import zip_longest

from blobkzg.kzg.field import FR

_ZERO = FR(0)


def _as_fr(value):
    return value if isinstance(value, FR) else FR(value)


class Polynomial:
    """FR 계수 리스트로 표현한 다항식.

    coeffs[i]가 xⁱ의 계수이다. 최고차의 0 계수는 생성 시 잘라내며,
    영 다항식은 [FR(0)] 하나로 표현한다.
    """

    def __init__(self, coeffs=None):
        """
        Args:
            coeffs: FR 원소 또는 정수의 시퀀스. 비어 있거나 None이면 영 다항식.
        """
        self.coeffs = [_as_fr(c) for c in (coeffs or ())] or [_ZERO]
        self._trim()

    def _trim(self):
        # [5, 0, 0] → [5]
        while len(self.coeffs) > 1 and self.coeffs[-1] == _ZERO:
            del self.coeffs[-1]

    @property
    def degree(self):
        """최고차 항의 차수 (영 다항식은 0)."""
        return len(self.coeffs) - 1

    def is_zero(self):
        return self.degree == 0 and self.coeffs[0] == _ZERO

    def evaluate(self, point):
        """p(point)를 Horner 방식으로 계산한다.

        p(z) = a₀ + z·(a₁ + z·(a₂ + ... + z·aₙ))

        Args:
            point: 평가 점 z (FR 원소 또는 정수)

        Returns:
            FR
        """
        z = _as_fr(point)
        acc = _ZERO
        for c in self.coeffs[::-1]:
            acc = acc * z + c
        return acc

    def divide_by_linear(self, point):
        """p(x) = q(x)·(x - z) + r 을 만족하는 (q, r)을 구한다.

        최고차 계수부터 내려오며 누적값 bᵢ = aᵢ₊₁ + z·bᵢ₊₁ 을 몫의 계수로
        기록한다. 마지막 누적값 a₀ + z·b₀ 가 나머지 r = p(z)이다.

        Args:
            point: 근 z (FR 원소 또는 정수)

        Returns:
            tuple: (몫 Polynomial, 나머지 FR)

        예시:
            >>> Polynomial([-1, 0, 1]).divide_by_linear(1)   # x² - 1
            # 몫 x + 1, 나머지 0
        """
        z = _as_fr(point)
        if self.degree == 0:
            return Polynomial(), self.coeffs[0]

        n = self.degree
        quotient = [_ZERO] * n
        acc = _ZERO
        for i in range(n, 0, -1):
            acc = self.coeffs[i] + acc * z
            quotient[i - 1] = acc
        return Polynomial(quotient), self.coeffs[0] + acc * z

    # ---- 산술 -------------------------------------------------------------

    @staticmethod
    def _coerce(other):
        if isinstance(other, Polynomial):
            return other
        if isinstance(other, (int, FR)):
            return Polynomial([other])
        return None

    def _combine(self, other, op):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        pairs = zip_longest(self.coeffs, other.coeffs, fillvalue=_ZERO)
        return Polynomial([op(a, b) for a, b in pairs])

    def __add__(self, other):
        return self._combine(other, lambda a, b: a + b)

    __radd__ = __add__

    def __sub__(self, other):
        return self._combine(other, lambda a, b: a - b)

    def __neg__(self):
        return Polynomial([-c for c in self.coeffs])

    def __mul__(self, scalar):
        """상수배 p(x)·s."""
        if isinstance(scalar, bool) or not isinstance(scalar, (int, FR)):
            return NotImplemented
        s = _as_fr(scalar)
        return Polynomial([c * s for c in self.coeffs])

    __rmul__ = __mul__

    def __eq__(self, other):
        other = self._coerce(other)
        return other is not None and self.coeffs == other.coeffs

    def __len__(self):
        return len(self.coeffs)

    def __repr__(self):
        terms = []
        for i, c in enumerate(self.coeffs):
            if c == _ZERO:
                continue
            power = "" if i == 0 else ("*x" if i == 1 else f"*x^{i}")
            terms.append(f"{int(c)}{power}")
        return "Poly({})".format(" + ".join(terms) or "0")
