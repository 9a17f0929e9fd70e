"""
views/components/question_card.py

단일 문제(Question)를 카드 형태로 렌더링하고
사용자가 고른 보기 키를 반환하는 컴포넌트.
"""

from __future__ import annotations

import html
from typing import Optional

import streamlit as st

from c_quiz.models.question_model import Question
from c_quiz.services.code_format import format_code


def render_code(question: Question) -> None:
    """코드 스니펫이 있을 때만 코드 블록을 그린다."""
    if question.code:
        st.code(format_code(question.code), language="c")


def render(
    question: Question,
    question_number: int,
    total: int,
    student_id: str,
    saved_answer: Optional[str] = None,
) -> Optional[str]:
    """
    문제 카드를 렌더링하고 사용자가 선택한 보기 키를 반환한다.

    Args:
        question:        렌더링할 Question 객체
        question_number: 전체 문제 중 몇 번째 문제인지 (1-based 표시용)
        total:           전체 문제 수
        student_id:      헤더에 표시할 학번
        saved_answer:    이미 저장된 이전 선택 키 (없으면 None)

    Returns:
        선택된 보기 키, 아무것도 선택하지 않은 경우 None
    """

    # ── 문제 헤더 ──────────────────────────────────────────────────────────
    st.markdown(
        f"""
        <div style="display:flex; justify-content:space-between; margin-bottom:12px;
                    font-size:0.85rem; color:#9ca3af;">
            <span class="question-number-badge">Question {question_number} of {total}</span>
            <span>Student: {html.escape(student_id)}</span>
        </div>
        """,
        unsafe_allow_html=True,
    )

    # ── 문제 본문 ──────────────────────────────────────────────────────────
    prompt = html.escape(question.question).replace("\n", "<br>")
    st.markdown(
        f'<div class="question-card"><p class="question-text">{prompt}</p></div>',
        unsafe_allow_html=True,
    )

    render_code(question)

    # ── 보기 선택 (Radio) ─────────────────────────────────────────────────
    keys = list(question.options)
    if not keys:
        st.info("No options available for this question.")
        return None

    radio_key = f"radio_{question.id}"

    # 위젯 키가 없을 때만 saved_answer로 초기화 (재렌더 시 기존 값 유지)
    if radio_key not in st.session_state and saved_answer in question.options:
        st.session_state[radio_key] = saved_answer

    current_val = st.session_state.get(radio_key, saved_answer)
    default_index = keys.index(current_val) if current_val in question.options else None

    return st.radio(
        "Choose an option",
        options=keys,
        index=default_index,
        key=radio_key,
        format_func=lambda k: f"{k}. {question.options[k]}",
        label_visibility="collapsed",
    )
