"""
views/result_view.py — 결과 화면

표시 내용:
  - 점수 (정답 수 / 문항 수)
  - 문제별 리뷰: 정답 보기, 내가 고른 오답 보기, '(Your Answer)' 표시
  - 로그아웃 버튼
채점은 서버 결과를 그대로 보여준다 (읽기 전용).
"""

from __future__ import annotations

import html
from typing import Dict

import streamlit as st

from config import QUESTIONS_SOURCE
from c_quiz.errors import CatalogError, ScoringAPIError
from c_quiz.models.question_model import Question
from c_quiz.services.catalog_loader import load_catalog
from c_quiz.services.scoring_client import ScoringClient
from c_quiz.views.components.question_card import render_code


def _logout() -> None:
    for key in ["student_id", "login_error"]:
        if key in st.session_state:
            del st.session_state[key]
    st.session_state.page = "login"


def _render_question_review(idx: int, q: Question, user_answer: Dict) -> None:
    selected_key = user_answer.get("selectedOption")
    is_correct = bool(user_answer.get("isCorrect"))

    st.markdown(
        f"<h3 style='font-size:1.05rem; font-weight:600; color:#1a1a2e;'>"
        f"<span style='color:#9ca3af; margin-right:1rem;'>{idx}.</span>"
        f"{html.escape(q.question)}</h3>",
        unsafe_allow_html=True,
    )
    render_code(q)

    for key, text in q.options.items():
        # 정답 키는 correct_answer 하나로 통일
        if key == q.correct_answer:
            css = "option-row correct"
        elif key == selected_key and not is_correct:
            css = "option-row incorrect"
        else:
            css = "option-row"
        mine = " <span class='your-answer'>(Your Answer)</span>" if key == selected_key else ""
        st.markdown(
            f"<div class='{css}'><b>{html.escape(key)}.</b> {html.escape(text)}{mine}</div>",
            unsafe_allow_html=True,
        )
    st.markdown('<hr class="cbt-divider">', unsafe_allow_html=True)


def render() -> None:
    """결과 화면 렌더링."""

    # ── 세션 가드 ──────────────────────────────────────────────────────────
    student_id = st.session_state.get("student_id")
    if not student_id:
        st.warning("No result information.")
        if st.button("Back to login", type="primary"):
            _logout()
            st.rerun()
        return

    with st.spinner("Loading results..."):
        try:
            data = ScoringClient().get_results(student_id)
            catalog = load_catalog(QUESTIONS_SOURCE)
        except (ScoringAPIError, CatalogError) as e:
            st.error(str(e))
            return

    user_answers = {a.get("questionId"): a for a in data.get("answers", [])}

    # ── 결과 카드 ─────────────────────────────────────────────────────────
    _, col, _ = st.columns([0.8, 2.5, 0.8])
    with col:
        st.markdown('<div class="cbt-card">', unsafe_allow_html=True)
        st.markdown('<p class="cbt-title">Quiz Completed</p>', unsafe_allow_html=True)
        st.markdown(
            f"<p style='text-align:center; color:#6b7280;'>Thank you, {html.escape(student_id)}. "
            f"Your submission has been recorded.</p>",
            unsafe_allow_html=True,
        )
        st.markdown(
            f"<p class='score-big'>Score: {data.get('score', 0)} / {len(catalog)}</p>",
            unsafe_allow_html=True,
        )
        st.button("Log out", key="logout_btn", on_click=_logout, use_container_width=True)
        st.markdown("</div>", unsafe_allow_html=True)

    st.markdown("<br>", unsafe_allow_html=True)

    # ── 문제별 리뷰 ──────────────────────────────────────────────────────
    for idx, q in enumerate(catalog.questions, start=1):
        _render_question_review(idx, q, user_answers.get(q.id, {}))
