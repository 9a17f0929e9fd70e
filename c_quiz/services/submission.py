"""
services/submission.py

답안지 → 제출 페이로드 변환 및 제출 처리.
Public API:
  - build_payload(student_id, catalog, answers) -> SubmissionPayload : 순수 함수
  - SubmissionCoordinator.submit(...)                                 : 제출 1회 + 인계

isCorrect 는 클라이언트 계산값(참고용)이고 최종 채점은 서버가 한다.
"""

import logging
from typing import Callable, Mapping, Optional

from config import NOT_ANSWERED
from c_quiz.models.question_model import Catalog, QuestionId
from c_quiz.models.session_state import AnswerRecord, SubmissionPayload
from c_quiz.services.scoring_client import ScoringClient

logger = logging.getLogger(__name__)


def build_payload(
    student_id: str,
    catalog: Catalog,
    answers: Mapping[QuestionId, str],
) -> SubmissionPayload:
    """
    문제 순서대로 문제당 정확히 한 건의 AnswerRecord 를 만든다.

    정답 판정 기준: answers.get(question.id) == question.correct_answer
    응답하지 않은 문제는 'Not Answered' + 오답.
    """
    records = []
    for q in catalog.questions:
        selected = answers.get(q.id)
        records.append(
            AnswerRecord(
                question_id=q.id,
                selected_option=selected if selected is not None else NOT_ANSWERED,
                is_correct=bool(q.correct_answer) and selected == q.correct_answer,
            )
        )
    return SubmissionPayload(student_id=student_id, answers=records)


class SubmissionCoordinator:
    """
    제출 확인 1회당 정확히 1번 POST 한다 (자동 재시도 없음).

    성공 시:
      1. 전체화면 해제 (best-effort, 실패 무시)
      2. on_complete(student_id) 호출 → 결과 화면으로 인계
    실패 시 SubmissionError 를 그대로 올려 세션이 active 로 되돌아가게 한다.
    """

    def __init__(
        self,
        client: ScoringClient,
        release_fullscreen: Optional[Callable[[], None]] = None,
        on_complete: Optional[Callable[[str], None]] = None,
    ):
        self.client = client
        self.release_fullscreen = release_fullscreen
        self.on_complete = on_complete

    def submit(
        self,
        student_id: str,
        catalog: Catalog,
        answers: Mapping[QuestionId, str],
    ) -> SubmissionPayload:
        payload = build_payload(student_id, catalog, answers)
        answered = sum(1 for r in payload.answers if r.selected_option != NOT_ANSWERED)
        logger.info(f"답안 제출 시도 - {student_id}: {answered}/{len(payload.answers)} 응답")

        self.client.submit(payload)

        if self.release_fullscreen is not None:
            try:
                self.release_fullscreen()
            except Exception as e:
                logger.debug(f"전체화면 해제 실패 (무시): {e}")

        if self.on_complete is not None:
            self.on_complete(student_id)
        return payload
