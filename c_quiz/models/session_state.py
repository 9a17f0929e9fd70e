"""
models/session_state.py

퀴즈 세션 단계(phase)와 제출 답안지(와이어 페이로드) 모델.
Pydantic BaseModel 기반 — 직렬화는 camelCase 별칭(by_alias=True)으로 한다.
UI 코드 없음.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field

from c_quiz.models.question_model import QuestionId


class QuizPhase(str, Enum):
    """
    세션 단계.

    loading → blocked ⇄ active → submitting → done
    failed : 문제 리소스 로드 실패 (종료)
    closed : 응시 포기 (종료)
    """

    LOADING = "loading"
    BLOCKED = "blocked"
    ACTIVE = "active"
    SUBMITTING = "submitting"
    DONE = "done"
    FAILED = "failed"
    CLOSED = "closed"


class AnswerRecord(BaseModel):
    """제출 답안 한 건. isCorrect 는 클라이언트 계산값(참고용)."""

    question_id: QuestionId = Field(
        ...,
        alias="questionId",
        description="문제 id"
    )
    selected_option: str = Field(
        ...,
        alias="selectedOption",
        description="선택한 보기 키, 미응답이면 'Not Answered'"
    )
    is_correct: bool = Field(
        ...,
        alias="isCorrect",
        description="선택 키 == 정답 키"
    )

    model_config = {"populate_by_name": True, "frozen": True}


class SubmissionPayload(BaseModel):
    """
    POST /api/quiz/submit 본문.

    Attributes:
        student_id: 응시자 학번
        answers:    문제 목록 순서 그대로, 문제마다 정확히 한 건
    """

    student_id: str = Field(
        ...,
        alias="studentId",
        min_length=1,
        description="응시자 학번"
    )
    answers: List[AnswerRecord] = Field(
        default_factory=list,
        description="문제 순서대로 정렬된 답안 레코드"
    )

    model_config = {"populate_by_name": True, "frozen": True}

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
