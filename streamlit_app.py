"""
streamlit_app.py — 퀴즈 화면 진입점 (streamlit run streamlit_app.py)

화면 전환: login → quiz → result
           login → result (이미 응시한 학번)
"""

import logging
import os
import sys

_BASE_DIR = os.path.dirname(os.path.abspath(__file__))
if _BASE_DIR not in sys.path:
    sys.path.insert(0, _BASE_DIR)

import streamlit as st

from c_quiz.log_config import setup_logging
from c_quiz.views import login_view, quiz_view, result_view

# 퀴즈 화면 프로세스도 launch.log 에 기록
setup_logging()

logger = logging.getLogger(__name__)

_CSS = """
<style>
.cbt-card { background:#ffffff; border-radius:16px; padding:24px 28px; }
.cbt-title { text-align:center; font-size:1.6rem; font-weight:700; color:#1a1a2e; }
.cbt-divider { border:none; border-top:1px solid #e5eaf2; margin:16px 0; }
.question-card { background:#ffffff; border-radius:12px; padding:18px 22px;
                 border:1px solid #e5eaf2; margin-bottom:16px; }
.question-text { font-size:1.05rem; font-weight:600; color:#1a1a2e; line-height:1.7; margin:0; }
.fullscreen-warning { text-align:center; padding:48px 16px; }
.score-big { text-align:center; font-size:1.3rem; font-weight:700; color:#4a7fcb; }
.option-row { padding:8px 12px; border-radius:8px; margin-bottom:6px; opacity:0.6;
              border:1px solid #e5eaf2; }
.option-row.correct { opacity:1; background:#d1fae5; border-color:#10b981; }
.option-row.incorrect { opacity:1; background:#fee2e2; border-color:#ef4444; }
.your-answer { float:right; font-size:0.8rem; color:#6b7280; }
</style>
"""

_PAGES = {
    "login": login_view.render,
    "quiz": quiz_view.render,
    "result": result_view.render,
}


def main() -> None:
    st.set_page_config(page_title="C Quiz", page_icon="📝", layout="wide")
    st.markdown(_CSS, unsafe_allow_html=True)

    if "page" not in st.session_state:
        st.session_state.page = "login"

    # 퀴즈 화면을 벗어나면 세션 종료 (잠금 해제, 답안 폐기)
    if st.session_state.page != "quiz" and "quiz_session" in st.session_state:
        quiz_view.end_session()

    _PAGES.get(st.session_state.page, login_view.render)()


main()
