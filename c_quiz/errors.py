"""
errors.py — 퀴즈 세션 예외 계층

  QuizError
   ├─ CatalogError
   │   ├─ CatalogLoadError     : 문제 리소스 읽기 실패 (세션 종료)
   │   └─ CatalogFormatError   : 문제 리소스 형식 오류 (세션 종료)
   ├─ ComplianceBlocked        : 전체화면 아님 → 문제 화면 차단 (재시도 가능)
   ├─ SubmissionError          : 답안 제출 실패 (active 로 복귀, 재시도 가능)
   ├─ SessionStateError        : 현재 단계에서 허용되지 않는 호출
   ├─ InvariantViolation       : 내부 불변식 위반 (커서 범위, 모르는 보기 키 등)
   └─ ScoringAPIError          : 응시 여부/결과 조회 실패
"""

from typing import Optional


class QuizError(Exception):
    """퀴즈 세션에서 발생하는 모든 예외의 기반 클래스."""


class CatalogError(QuizError):
    pass


class CatalogLoadError(CatalogError):
    pass


class CatalogFormatError(CatalogError):
    pass


class ComplianceBlocked(QuizError):
    def __init__(self, message: str = "Please enable fullscreen to continue the quiz."):
        super().__init__(message)


class SubmissionError(QuizError):
    """
    제출 실패. 서버가 보낸 메시지가 있으면 그대로 담는다.

    Attributes:
        status_code: HTTP 상태 코드 (전송 자체가 실패했으면 None)
    """

    def __init__(self, message: str = "Submission failed", status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SessionStateError(QuizError):
    pass


class InvariantViolation(QuizError):
    pass


class ScoringAPIError(QuizError):
    """상태/결과 조회 실패 (퀴즈 세션 밖, 로그인/결과 화면용)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
