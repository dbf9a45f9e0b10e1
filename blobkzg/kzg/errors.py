"""
blobkzg 예외 계층
==================

모든 구조적/입력 검증 오류는 KZGError의 하위 클래스로 즉시 호출자에게
전달된다. 각 예외는 API 계층에서 사용할 수 있는 안정적인 `code` 문자열을
가진다.

검증 실패(verify → False)와 캐시 미스(MISS)는 예외가 아니라 값이다.

사용 예시:
    >>> from blobkzg.kzg.errors import InvalidBlobSize
    >>> raise InvalidBlobSize("expected 131072 bytes, got 10")
"""


class KZGError(ValueError):
    """blobkzg 오류의 기본 클래스.

    ValueError를 상속하므로 잘못된 입력을 ValueError로 처리하는
    기존 호출자 코드와도 호환된다.
    """

    code = "KZG_ERROR"

    def __init__(self, message="", *, data=None):
        super().__init__(message)
        self.message = message
        self.data = dict(data) if data else {}

    def to_dict(self):
        return {"code": self.code, "message": self.message, "data": self.data or None}


class InvalidBlobSize(KZGError):
    """블롭 길이가 131072바이트가 아니다."""

    code = "INVALID_BLOB_SIZE"


class InvalidFieldElement(KZGError):
    """32바이트 청크 또는 스칼라가 필드 위수 이상이거나 음수다."""

    code = "INVALID_FIELD_ELEMENT"


class SetupNotLoaded(KZGError):
    """신뢰 설정이 로드되기 전에 커밋/증명/검증이 호출되었다."""

    code = "NO_TRUSTED_SETUP"


class InvalidSetupSize(KZGError):
    """G1/G2 버퍼(또는 텍스트 줄 수)가 기대한 크기와 다르다."""

    code = "INVALID_SETUP_SIZE"


class InvalidSetup(KZGError):
    """신뢰 설정 점을 디코딩할 수 없거나 생성자가 일치하지 않는다."""

    code = "INVALID_SETUP"


class EnvironmentUnsupported(KZGError):
    """파일 시스템이 없는 인터프리터에서 경로 기반 로딩을 시도했다."""

    code = "ENVIRONMENT_UNSUPPORTED"


class InvalidCommitment(KZGError):
    code = "INVALID_COMMITMENT"


class DataTooLarge(KZGError):
    """페이로드가 한 블롭에 담을 수 있는 크기를 초과한다."""

    code = "DATA_TOO_LARGE"


class CodecError(KZGError):
    code = "CODEC_ERROR"
