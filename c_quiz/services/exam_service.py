"""
services/exam_service.py

서버 측 채점 로직 (클라이언트가 보낸 isCorrect 는 무시하고 다시 채점).
순수 Python 함수로 구성. HTTP/전역 상태 없음.
"""

from typing import Dict, List, Sequence

from config import NOT_ANSWERED
from c_quiz.models.question_model import Catalog
from c_quiz.models.session_state import AnswerRecord


def grade_answers(
    catalog: Catalog,
    answers: Sequence[AnswerRecord],
) -> List[Dict[str, object]]:
    """
    제출 답안을 문제 목록 기준으로 채점한다.

    정답 판정 기준: selectedOption == question.correct_answer
    제출에서 빠진 문제는 'Not Answered' 로 채운다.

    Returns:
        문제 순서대로 [{"questionId", "selectedOption", "isCorrect", "correctAnswer"}, ...]

    Raises:
        ValueError: 모르는 문제 id, 중복 제출 레코드, 보기에 없는 선택 키
    """
    selected: Dict[object, str] = {}
    for record in answers:
        q = catalog.get(record.question_id)
        if q is None:
            raise ValueError(f"Unknown question id: {record.question_id}")
        if record.question_id in selected:
            raise ValueError(f"Duplicate answer for question: {record.question_id}")
        if record.selected_option != NOT_ANSWERED and not q.has_option(record.selected_option):
            raise ValueError(
                f"Invalid option '{record.selected_option}' for question {record.question_id}"
            )
        selected[record.question_id] = record.selected_option

    graded = []
    for q in catalog.questions:
        choice = selected.get(q.id, NOT_ANSWERED)
        graded.append({
            "questionId": q.id,
            "selectedOption": choice,
            "isCorrect": bool(q.correct_answer) and choice == q.correct_answer,
            "correctAnswer": q.correct_answer,
        })
    return graded


def calculate_score(graded: Sequence[Dict[str, object]]) -> int:
    """정답 개수 (결과 화면은 '점수 / 문항 수' 로 표시)."""
    return sum(1 for g in graded if g["isCorrect"])
