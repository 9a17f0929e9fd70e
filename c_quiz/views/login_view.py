"""
views/login_view.py — 로그인 / 시작 화면

기능:
  - 학번 입력 + 형식 검증 ('n' + 숫자 6자리)
  - 채점 서버에 응시 여부 조회
  - 미응시 → 퀴즈 화면, 응시 완료 → 결과 화면
"""

from __future__ import annotations

import logging

import streamlit as st

from c_quiz.errors import ScoringAPIError
from c_quiz.services.identity import validate_student_id
from c_quiz.services.scoring_client import ScoringClient

logger = logging.getLogger(__name__)


def _login(raw_id: str) -> None:
    try:
        student_id = validate_student_id(raw_id)
    except ValueError as e:
        st.session_state.login_error = str(e)
        return

    with st.spinner("Checking..."):
        try:
            status = ScoringClient().get_status(student_id)
        except ScoringAPIError as e:
            st.session_state.login_error = e.message or "Something went wrong"
            return

    st.session_state.login_error = ""
    st.session_state.student_id = student_id
    st.session_state.page = "result" if status.get("attempted") else "quiz"
    logger.info(f"로그인 - {student_id} (응시 여부: {bool(status.get('attempted'))})")
    st.rerun()


def render() -> None:
    """로그인 화면 렌더링."""

    _, col, _ = st.columns([1, 2.2, 1])

    with col:
        st.markdown('<div class="cbt-card">', unsafe_allow_html=True)
        st.markdown('<p class="cbt-title">Welcome</p>', unsafe_allow_html=True)
        st.markdown(
            "<p style='text-align:center; color:#6b7280; margin-bottom:24px;'>"
            "Enter your Student ID to begin the assessment.</p>",
            unsafe_allow_html=True,
        )

        with st.form("login_form", clear_on_submit=False):
            raw_id = st.text_input(
                "Student ID",
                placeholder="Student ID",
                label_visibility="collapsed",
            )
            submitted = st.form_submit_button(
                "Start Quiz", type="primary", use_container_width=True
            )

        if submitted:
            _login(raw_id)

        if st.session_state.get("login_error"):
            st.error(st.session_state.login_error)

        st.markdown("</div>", unsafe_allow_html=True)
