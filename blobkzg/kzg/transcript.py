"""
Fiat-Shamir 챌린지
===================

블롭 증명(blob proof)의 평가 점 z를 (블롭, 커밋먼트)로부터 결정론적으로
도출한다.

**Fiat-Shamir 변환**:
  검증자가 보내야 할 무작위 챌린지를 지금까지의 메시지 해시로 대신한다.
  증명자와 검증자가 같은 순서로 같은 데이터를 해싱하면 같은 z를 얻는다.

  z = SHA-256(도메인 ‖ 차수(16바이트) ‖ 블롭 ‖ 커밋먼트) mod r

사용 예시:
    >>> t = Transcript()
    >>> t.append_bytes(blob)
    >>> t.append_bytes(commitment)
    >>> z = t.challenge_scalar()
"""

import hashlib

from blobkzg.kzg.constants import FIAT_SHAMIR_PROTOCOL_DOMAIN, FIELD_ELEMENTS_PER_BLOB
from blobkzg.kzg.field import FR, CURVE_ORDER


class Transcript:
    """SHA-256 기반 Fiat-Shamir 트랜스크립트.

    속성:
        state: 현재까지 누적된 해시 입력 바이트열
    """

    def __init__(self, label=FIAT_SHAMIR_PROTOCOL_DOMAIN):
        """트랜스크립트를 초기화한다.

        Args:
            label: 프로토콜 도메인 분리용 레이블
        """
        self.state = bytearray()
        self.state.extend(label)

    def append_u128(self, value):
        """정수를 16바이트 빅엔디안으로 추가한다."""
        self.state.extend(int(value).to_bytes(16, "big"))

    def append_bytes(self, data):
        self.state.extend(data)

    def challenge_scalar(self):
        """현재 상태를 SHA-256으로 해싱하여 FR 원소를 도출한다."""
        h = hashlib.sha256(bytes(self.state)).digest()
        return FR(int.from_bytes(h, "big") % CURVE_ORDER)


def compute_challenge(blob, commitment):
    """블롭 증명의 평가 점 z를 계산한다.

    Args:
        blob: 131072바이트 블롭
        commitment: 48바이트 커밋먼트

    Returns:
        FR: 챌린지 z
    """
    t = Transcript()
    t.append_u128(FIELD_ELEMENTS_PER_BLOB)
    t.append_bytes(blob)
    t.append_bytes(commitment)
    return t.challenge_scalar()
