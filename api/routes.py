"""
api/routes.py — 채점 서버 FastAPI 엔드포인트
"""

import logging

from fastapi import APIRouter, HTTPException, Request

from c_quiz.models.question_model import Catalog
from c_quiz.models.session_state import SubmissionPayload
from c_quiz.services.exam_service import calculate_score, grade_answers
from c_quiz.services.identity import is_valid_student_id
from api.store import AttemptStore

router = APIRouter()
logger = logging.getLogger(__name__)


# ── 헬퍼 ─────────────────────────────────────────────────────────────────────

def _catalog(request: Request) -> Catalog:
    return request.app.state.catalog


def _store(request: Request) -> AttemptStore:
    return request.app.state.store


def _check_student_id(student_id: str) -> None:
    if not is_valid_student_id(student_id):
        raise HTTPException(status_code=400, detail="Invalid Student ID format")


# ── 엔드포인트 ───────────────────────────────────────────────────────────────

@router.get("/api/quiz/status/{student_id}")
async def quiz_status(student_id: str, request: Request):
    _check_student_id(student_id)
    return {
        "studentId": student_id,
        "attempted": _store(request).has_attempted(student_id),
    }


@router.post("/api/quiz/submit")
async def submit_quiz(body: SubmissionPayload, request: Request):
    _check_student_id(body.student_id)
    store = _store(request)
    if store.has_attempted(body.student_id):
        raise HTTPException(status_code=409, detail="Quiz already attempted")

    try:
        graded = grade_answers(_catalog(request), body.answers)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    score = calculate_score(graded)
    if not store.record(body.student_id, score, graded):
        # 동시에 들어온 두 번째 제출
        raise HTTPException(status_code=409, detail="Quiz already attempted")

    logger.info(f"제출 기록 - {body.student_id}: {score}/{len(graded)}")
    return {"message": "Submission recorded", "score": score, "total": len(graded)}


@router.get("/api/quiz/answers/{student_id}")
async def quiz_answers(student_id: str, request: Request):
    _check_student_id(student_id)
    attempt = _store(request).get(student_id)
    if attempt is None:
        raise HTTPException(status_code=404, detail="No submission found for this student")
    return {
        "studentId": attempt["studentId"],
        "score": attempt["score"],
        "total": attempt["total"],
        "answers": attempt["answers"],
    }
