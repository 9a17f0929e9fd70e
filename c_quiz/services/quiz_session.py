"""
services/quiz_session.py

퀴즈 세션 상태 기계.

  loading ─(문제 로드)→ blocked ⇄ active ─(제출 확인)→ submitting → done
      └─(로드 실패)→ failed                         └─(제출 실패)→ active

- phase 는 저장하지 않고 (문제 목록, 로드 오류, 전체화면, 제출 중, 완료, 포기) 로부터 계산
- 문제 풀이 조작(select_option / go_next / go_prev / request_submit)은 active 에서만 허용
- 제출이 시작되면 전체화면 변화는 무시
- 새로고침 시 진행 상황은 보존하지 않는다 (세션 객체는 화면마다 새로 생성)
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from c_quiz.errors import (
    CatalogError,
    ComplianceBlocked,
    InvariantViolation,
    SessionStateError,
)
from c_quiz.models.question_model import Catalog, Question, QuestionId
from c_quiz.models.session_state import QuizPhase, SubmissionPayload
from c_quiz.services.catalog_loader import load_catalog
from c_quiz.services.lockdown_guard import LockdownGuard, LockdownPlatform, Teardown
from c_quiz.services.scoring_client import ScoringClient
from c_quiz.services.submission import SubmissionCoordinator, build_payload

logger = logging.getLogger(__name__)


class QuizSession:
    """
    응시자 한 명의 퀴즈 세션.

    Attributes:
        student_id: 응시자 학번
        cursor:     현재 문제 인덱스 (0-based, 0 <= cursor < len(catalog))
        answers:    답안지 (읽기 전용 뷰). {question.id: 선택한 보기 키}
    """

    def __init__(self, student_id: str, coordinator: SubmissionCoordinator):
        self.student_id = student_id
        self._coordinator = coordinator

        self._catalog: Optional[Catalog] = None
        self._catalog_error: Optional[CatalogError] = None
        self._compliant = False
        self._cursor = 0
        self._answers: Dict[QuestionId, str] = {}

        self._submitting = False
        self._done = False
        self._closed = False
        self._submit_lock = threading.Lock()

        self._guard: Optional[LockdownGuard] = None
        self._teardown: Optional[Teardown] = None

    # ── 상태 조회 ──────────────────────────────────────────────────────────

    @property
    def phase(self) -> QuizPhase:
        if self._closed:
            return QuizPhase.CLOSED
        if self._catalog_error is not None:
            return QuizPhase.FAILED
        if self._done:
            return QuizPhase.DONE
        if self._submitting:
            return QuizPhase.SUBMITTING
        if self._catalog is None:
            return QuizPhase.LOADING
        if not self._compliant:
            return QuizPhase.BLOCKED
        return QuizPhase.ACTIVE

    @property
    def catalog(self) -> Optional[Catalog]:
        return self._catalog

    @property
    def catalog_error(self) -> Optional[CatalogError]:
        return self._catalog_error

    @property
    def compliant(self) -> bool:
        return self._compliant

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def answers(self) -> Mapping[QuestionId, str]:
        return MappingProxyType(self._answers)

    @property
    def total(self) -> int:
        return len(self._catalog) if self._catalog is not None else 0

    @property
    def current_question(self) -> Optional[Question]:
        if self._catalog is None:
            return None
        return self._catalog[self._cursor]

    @property
    def is_first(self) -> bool:
        return self._cursor == 0

    @property
    def is_last(self) -> bool:
        return self._catalog is not None and self._cursor == len(self._catalog) - 1

    @property
    def lockdown(self) -> Optional[LockdownGuard]:
        return self._guard

    # ── 초기화 (로더 / 잠금 결과 반영) ─────────────────────────────────────

    def attach_lockdown(self, guard: LockdownGuard, teardown: Teardown) -> None:
        self._guard = guard
        self._teardown = teardown
        self.set_compliance(guard.compliant)

    def attach_catalog(self, catalog: Catalog) -> None:
        if self._catalog is not None:
            raise SessionStateError("catalog is loaded only once per session")
        if self._closed or self._catalog_error is not None:
            raise SessionStateError(f"session already ended ({self.phase.value})")
        self._catalog = catalog
        self._cursor = 0
        self.check_invariants()

    def fail_catalog(self, error: CatalogError) -> None:
        """문제 로드 실패 → failed (세션 종료, 잠금 해제)."""
        self._catalog_error = error
        self._end()

    def set_compliance(self, compliant: bool) -> None:
        if self._submitting or self._done or self._closed or self._catalog_error is not None:
            return
        before = self.phase
        self._compliant = bool(compliant)
        after = self.phase
        if before != after:
            logger.info(f"세션 상태 변경: {before.value} → {after.value}")

    def retry_fullscreen(self) -> bool:
        """차단 화면의 재시도 버튼."""
        if self._guard is None:
            return False
        self._guard.retry()
        return self._compliant

    # ── 문제 풀이 ──────────────────────────────────────────────────────────

    def _require_active(self) -> None:
        phase = self.phase
        if phase is QuizPhase.ACTIVE:
            return
        if phase is QuizPhase.BLOCKED:
            raise ComplianceBlocked()
        raise SessionStateError(f"operation not allowed while {phase.value}")

    def select_option(self, key: str) -> None:
        """현재 문제에 보기 key 를 기록 (이전 선택 덮어쓰기)."""
        self._require_active()
        question = self.current_question
        if not question.has_option(key):
            raise InvariantViolation(
                f"unknown option key {key!r} for question {question.id!r}"
            )
        self._answers[question.id] = key
        self.check_invariants()

    def go_next(self) -> None:
        self._require_active()
        if self._cursor < len(self._catalog) - 1:
            self._cursor += 1
        self.check_invariants()

    def go_prev(self) -> None:
        self._require_active()
        if self._cursor > 0:
            self._cursor -= 1
        self.check_invariants()

    # ── 제출 ──────────────────────────────────────────────────────────────

    def payload(self) -> SubmissionPayload:
        """현재 답안지로 만든 제출 페이로드 (매번 새로 계산)."""
        if self._catalog is None:
            raise SessionStateError("catalog not loaded")
        return build_payload(self.student_id, self._catalog, self._answers)

    def request_submit(self, confirm: Callable[[], bool]) -> bool:
        """
        마지막 문제에서 제출.

        Args:
            confirm: 예/아니오 확인. False 면 아무것도 바꾸지 않는다.

        Returns:
            True  : 제출 성공 (done)
            False : 취소했거나 이미 제출 중/완료라 무시됨

        Raises:
            SubmissionError: 제출 실패. 세션은 active 로 돌아가고 답안지는 유지된다.
        """
        if self._submitting or self._done:
            logger.info("이미 제출 중이거나 제출 완료된 세션, 중복 제출 무시")
            return False
        self._require_active()
        if not self.is_last:
            raise InvariantViolation("submit is only available at the last question")

        if not confirm():
            return False

        if not self._submit_lock.acquire(blocking=False):
            logger.info("제출 진행 중, 중복 제출 무시")
            return False
        try:
            if self._submitting or self._done:
                return False
            self._submitting = True
            logger.info(f"세션 상태 변경: active → submitting ({self.student_id})")
            try:
                self._coordinator.submit(self.student_id, self._catalog, dict(self._answers))
            except Exception as e:
                self._rollback(e)
                raise

            self._done = True
            self._submitting = False
            self._end()
            logger.info(f"세션 상태 변경: submitting → done ({self.student_id})")
            return True
        finally:
            self._submit_lock.release()

    def _rollback(self, error: Exception) -> None:
        logger.error(f"답안 제출 실패, active 로 복귀: {error}")
        self._submitting = False
        # 제출 중 무시했던 전체화면 변화를 다시 맞춘다
        if self._guard is not None:
            self._compliant = self._guard.compliant

    # ── 종료 ──────────────────────────────────────────────────────────────

    def close(self) -> None:
        """응시 포기. 이미 끝난 세션이면 아무것도 하지 않는다."""
        if self._done or self._closed:
            return
        self._closed = True
        self._end()
        logger.info(f"세션 종료 (포기): {self.student_id}")

    def _end(self) -> None:
        teardown, self._teardown = self._teardown, None
        if teardown is not None:
            teardown()

    # ── 불변식 ─────────────────────────────────────────────────────────────

    def check_invariants(self) -> None:
        if self._catalog is None:
            if self._answers:
                raise InvariantViolation("answers recorded before catalog load")
            return
        if not 0 <= self._cursor < len(self._catalog):
            raise InvariantViolation(
                f"cursor {self._cursor} out of range [0, {len(self._catalog)})"
            )
        known = set(self._catalog.question_ids)
        stale = [qid for qid in self._answers if qid not in known]
        if stale:
            raise InvariantViolation(f"answers for unknown question ids: {stale!r}")


def open_session(
    student_id: str,
    *,
    catalog_source: str,
    platform: LockdownPlatform,
    client: ScoringClient,
    on_complete: Optional[Callable[[str], None]] = None,
    http: Optional[Any] = None,
) -> QuizSession:
    """
    세션 시작: 잠금 획득(전체화면 요청) + 문제 로드.

    전체화면 요청은 플랫폼에서 비동기로 끝나므로 로드와 겹쳐 진행되고,
    세션은 두 결과(문제 목록 + 전체화면)가 모두 있어야 active 가 된다.
    문제 로드 실패는 예외로 올리지 않고 failed 단계로 기록한다.
    """
    guard = LockdownGuard(platform)
    coordinator = SubmissionCoordinator(
        client,
        release_fullscreen=guard.release_fullscreen,
        on_complete=on_complete,
    )
    session = QuizSession(student_id, coordinator)
    guard.on_change = session.set_compliance
    session.attach_lockdown(guard, guard.enter())

    try:
        catalog = load_catalog(catalog_source, http=http)
    except CatalogError as e:
        logger.error(f"문제 로드 실패 → 세션 종료: {e}")
        session.fail_catalog(e)
    else:
        session.attach_catalog(catalog)
    return session
