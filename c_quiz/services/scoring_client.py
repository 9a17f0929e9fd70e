"""
services/scoring_client.py — 원격 채점 서버 HTTP 클라이언트

  GET  /api/quiz/status/{studentId}   응시 여부
  POST /api/quiz/submit               답안 제출
  GET  /api/quiz/answers/{studentId}  채점 결과
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from config import REQUEST_TIMEOUT, SCORING_API_URL
from c_quiz.errors import ScoringAPIError, SubmissionError
from c_quiz.models.session_state import SubmissionPayload

logger = logging.getLogger(__name__)


def _error_message(r: Any, default: str) -> str:
    """서버 응답 본문에서 message(또는 FastAPI detail)를 꺼낸다."""
    try:
        body = r.json()
    except ValueError:
        return default
    if isinstance(body, dict):
        msg = body.get("message") or body.get("detail")
        if isinstance(msg, str) and msg.strip():
            return msg
    return default


def _is_success(r: Any) -> bool:
    return 200 <= r.status_code < 300


def _json_object(r: Any, message: str) -> Dict[str, Any]:
    """2xx 응답 본문은 JSON 객체여야 한다. 아니면 ScoringAPIError."""
    try:
        body = r.json()
    except ValueError as e:
        raise ScoringAPIError(message, r.status_code) from e
    if not isinstance(body, dict):
        raise ScoringAPIError(message, r.status_code)
    return body


class ScoringClient:
    """
    채점 서버 클라이언트.

    http 에는 requests.Session 호환 객체(get/post)를 넘길 수 있다.
    테스트에서는 FastAPI TestClient 를 그대로 넘긴다.
    """

    def __init__(
        self,
        *,
        api_base_url: str = SCORING_API_URL,
        timeout_seconds: float = REQUEST_TIMEOUT,
        http: Optional[Any] = None,
    ) -> None:
        self.api_base_url = api_base_url.rstrip("/")
        self.timeout_seconds = float(timeout_seconds)
        self.http = http if http is not None else requests.Session()

    def get_status(self, student_id: str) -> Dict[str, Any]:
        url = f"{self.api_base_url}/api/quiz/status/{student_id}"
        try:
            r = self.http.get(url, timeout=self.timeout_seconds)
        except requests.RequestException as e:
            raise ScoringAPIError(f"Failed to check status: {e}") from e
        if not _is_success(r):
            raise ScoringAPIError(_error_message(r, "Failed to check status"), r.status_code)
        return _json_object(r, "Failed to check status")

    def submit(self, payload: SubmissionPayload) -> Dict[str, Any]:
        """
        답안 제출 1회. 재시도하지 않는다.

        Raises:
            SubmissionError: 전송 실패 또는 2xx 가 아닌 응답
        """
        url = f"{self.api_base_url}/api/quiz/submit"
        try:
            r = self.http.post(url, json=payload.to_wire(), timeout=self.timeout_seconds)
        except requests.RequestException as e:
            raise SubmissionError(f"Submission failed: {e}") from e
        if not _is_success(r):
            logger.error(f"답안 제출 실패 - HTTP {r.status_code}")
            raise SubmissionError(_error_message(r, "Submission failed"), r.status_code)
        logger.info(f"답안 제출 완료 - {payload.student_id} ({len(payload.answers)}문항)")
        try:
            return r.json()
        except ValueError:
            return {}

    def get_results(self, student_id: str) -> Dict[str, Any]:
        url = f"{self.api_base_url}/api/quiz/answers/{student_id}"
        try:
            r = self.http.get(url, timeout=self.timeout_seconds)
        except requests.RequestException as e:
            raise ScoringAPIError(f"Failed to load results: {e}") from e
        if not _is_success(r):
            raise ScoringAPIError(_error_message(r, "Failed to load results"), r.status_code)
        return _json_object(r, "Failed to load results")
