"""
views/quiz_view.py — 퀴즈 풀기 화면

레이아웃:
  - 잠금 컴포넌트 (화면에 보이지 않음, 차단 상태에서만 전체화면 버튼 표시)
  - 현재 문제 카드 + 이전/다음 + 마지막 문제에서 제출

상태 관리:
  - st.session_state.quiz_session   (QuizSession, 화면 진입 시 1회 생성)
  - st.session_state.quiz_platform  (StreamlitLockdownPlatform)
  - 답안은 radio 위젯 → quiz_session.select_option 으로 기록
"""

from __future__ import annotations

import logging
from typing import Optional

import streamlit as st

from config import QUESTIONS_SOURCE
from c_quiz.errors import SubmissionError
from c_quiz.models.session_state import QuizPhase
from c_quiz.services.quiz_session import QuizSession, open_session
from c_quiz.services.scoring_client import ScoringClient
from c_quiz.views.components import question_card as qcard
from c_quiz.views.components.lockdown import StreamlitLockdownPlatform

logger = logging.getLogger(__name__)

_STATE_KEYS = ["quiz_session", "quiz_platform", "confirm_submit", "submit_error"]


def _on_complete(student_id: str) -> None:
    """제출 성공 → 결과 화면으로 인계 (rerun 은 호출한 쪽에서)."""
    logger.info(f"퀴즈 완료, 결과 화면으로 이동: {student_id}")
    st.session_state.page = "result"


def _start_session(student_id: str) -> QuizSession:
    platform = StreamlitLockdownPlatform()
    session = open_session(
        student_id,
        catalog_source=QUESTIONS_SOURCE,
        platform=platform,
        client=ScoringClient(),
        on_complete=_on_complete,
    )
    st.session_state.quiz_platform = platform
    st.session_state.quiz_session = session
    return session


def end_session() -> None:
    """화면을 떠날 때 호출 — 끝나지 않은 세션은 포기 처리(잠금 해제)하고 상태 정리."""
    session: Optional[QuizSession] = st.session_state.get("quiz_session")
    platform: Optional[StreamlitLockdownPlatform] = st.session_state.get("quiz_platform")
    if session is not None:
        session.close()
    if platform is not None:
        # 마지막 렌더: 브라우저 쪽 리스너 제거 + 전체화면 해제
        platform.render()
    for key in _STATE_KEYS:
        if key in st.session_state:
            del st.session_state[key]
    radio_keys = [k for k in st.session_state if str(k).startswith("radio_")]
    for k in radio_keys:
        del st.session_state[k]


def _submit(session: QuizSession) -> None:
    st.session_state["confirm_submit"] = False
    try:
        submitted = session.request_submit(confirm=lambda: True)
    except SubmissionError as e:
        st.session_state["submit_error"] = e.message
        st.rerun()
    if submitted:
        st.rerun()


def _render_blocked(session: QuizSession) -> None:
    st.markdown(
        """
        <div class="fullscreen-warning">
            <h2>Fullscreen Required</h2>
            <p>Please enable fullscreen to continue the quiz.</p>
        </div>
        """,
        unsafe_allow_html=True,
    )
    # 잠금 컴포넌트의 버튼이 실제 요청을 보낸다. 이 버튼은 요청을 다시 예약한다.
    if st.button("Retry", key="fs_retry"):
        session.retry_fullscreen()
        st.rerun()


def _render_submit_controls(session: QuizSession) -> None:
    if st.session_state.get("confirm_submit"):
        st.warning("Are you sure you want to submit?")
        col_yes, col_no = st.columns(2)
        with col_yes:
            if st.button("Submit", key="confirm_yes", type="primary", use_container_width=True):
                _submit(session)
        with col_no:
            if st.button("Cancel", key="confirm_no", use_container_width=True):
                st.session_state["confirm_submit"] = False
                st.rerun()
        return

    if st.button("Submit Quiz", key="submit_last", type="primary", use_container_width=True):
        st.session_state["confirm_submit"] = True
        st.rerun()


def render() -> None:
    """퀴즈 화면 렌더링."""

    # ── 세션 가드 ──────────────────────────────────────────────────────────
    student_id = st.session_state.get("student_id")
    if not student_id:
        st.warning("No student ID. Please log in first.")
        if st.button("Back to login", type="primary"):
            st.session_state.page = "login"
            st.rerun()
        return

    session: Optional[QuizSession] = st.session_state.get("quiz_session")
    if session is None:
        session = _start_session(student_id)
    platform: StreamlitLockdownPlatform = st.session_state.quiz_platform

    platform.render(show_prompt=session.phase is QuizPhase.BLOCKED)
    phase = session.phase

    # ── 차단 / 오류 화면 ───────────────────────────────────────────────────
    if phase is QuizPhase.FAILED:
        st.error(f"Error: {session.catalog_error}")
        return
    if phase is QuizPhase.CLOSED:
        st.info("This quiz session has ended.")
        return
    if phase is QuizPhase.LOADING:
        st.info("Loading questions...")
        return
    if phase is QuizPhase.DONE:
        st.session_state.page = "result"
        st.rerun()
    if phase is QuizPhase.BLOCKED:
        _render_blocked(session)
        return

    # ── 제출 실패 알림 (닫기 가능) ─────────────────────────────────────────
    if st.session_state.get("submit_error"):
        st.error(f"Error submitting quiz: {st.session_state['submit_error']}")
        if st.button("Dismiss", key="dismiss_error"):
            st.session_state["submit_error"] = None
            st.rerun()

    # ── 문제 카드 ─────────────────────────────────────────────────────────
    question = session.current_question
    saved = session.answers.get(question.id)
    selected = qcard.render(
        question=question,
        question_number=session.cursor + 1,
        total=session.total,
        student_id=student_id,
        saved_answer=saved,
    )
    if selected is not None and selected != saved:
        session.select_option(selected)

    # ── 이전 / 다음 네비게이션 ────────────────────────────────────────────
    st.markdown("<br>", unsafe_allow_html=True)
    nav_left, nav_center, nav_right = st.columns([1, 2, 1])

    with nav_left:
        if not session.is_first:
            if st.button("Previous", key="prev_btn", use_container_width=True):
                session.go_prev()
                st.rerun()

    with nav_center:
        st.markdown(
            f"<p style='text-align:center; font-size:0.85rem; color:#9ca3af; "
            f"padding-top:8px;'>{len(session.answers)} / {session.total} answered</p>",
            unsafe_allow_html=True,
        )

    with nav_right:
        if session.is_last:
            _render_submit_controls(session)
        elif st.button("Next", key="next_btn", type="primary", use_container_width=True):
            session.go_next()
            st.rerun()
