"""
Ledger 예외 정의

- LedgerValidationError: 입력 검증 실패 (변경 전에 발생)
- NotFoundError: 대상 없음
- FeedError: 은행 피드 조회/디코딩 실패
"""


class LedgerError(Exception):
    """Ledger 기본 예외"""

    pass


class LedgerValidationError(LedgerError):
    """입력 검증 실패

    금액 파싱 실패, 빈 카테고리, 중복 카테고리 이름 등.
    어떤 변경도 일어나기 전에 발생.
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(LedgerError):
    """대상 거래/카테고리를 찾을 수 없음"""

    pass


class FeedError(LedgerError):
    """은행 피드 실패

    Args:
        message: 에러 메시지
        retryable: 재시도 가능 여부 (타임아웃, 429, 5xx)
    """

    def __init__(self, message: str, retryable: bool = False):
        super().__init__(message)
        self.retryable = retryable


class FeedTimeoutError(FeedError):
    """은행 피드 타임아웃 (항상 재시도 가능)"""

    def __init__(self, message: str):
        super().__init__(message, retryable=True)
