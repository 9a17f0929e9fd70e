"""
views/components/lockdown.py

LockdownPlatform 의 Streamlit 구현.

브라우저 쪽은 lockdown_frontend/index.html 양방향 컴포넌트가 담당한다:
  - Python 쪽에 리스너가 등록돼 있는 동안 호스트 페이지에
    fullscreenchange / contextmenu / beforeunload 리스너 설치
  - document.fullscreenElement 여부를 컴포넌트 값(bool)으로 보고
  - 차단 화면에서 '전체화면' 버튼 표시 (사용자 클릭이 있어야 요청이 허용됨)
Python 쪽은 보고된 값이 바뀔 때마다 fullscreenchange 핸들러를 호출한다.
"""

from __future__ import annotations

import os
from collections import defaultdict
from functools import lru_cache
from typing import Any, Dict, List, Optional

from c_quiz.services.lockdown_guard import (
    BEFORE_UNLOAD,
    CONTEXT_MENU,
    FULLSCREEN_CHANGE,
    BrowserEvent,
    EventHandler,
)

_FRONTEND_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "lockdown_frontend")


@lru_cache(maxsize=1)
def _component():
    # 스크립트 실행 중에만 선언 (import 시점에는 Streamlit 런타임이 없을 수 있음)
    import streamlit.components.v1 as components

    return components.declare_component("c_quiz_lockdown", path=_FRONTEND_DIR)


class StreamlitLockdownPlatform:
    def __init__(self) -> None:
        self._listeners: Dict[str, List[EventHandler]] = defaultdict(list)
        self._fullscreen = False
        self._request_nonce = 0
        self._exit_requested = False

    # ── LockdownPlatform ───────────────────────────────────────────────────

    def request_fullscreen(self) -> None:
        # 다음 렌더에서 브라우저가 요청을 시도한다 (결과는 fullscreenchange 로 도착)
        self._request_nonce += 1
        self._exit_requested = False

    def exit_fullscreen(self) -> None:
        self._exit_requested = True

    def is_fullscreen(self) -> bool:
        return self._fullscreen

    def add_listener(self, event: str, handler: EventHandler) -> None:
        self._listeners[event].append(handler)

    def remove_listener(self, event: str, handler: EventHandler) -> None:
        if handler in self._listeners[event]:
            self._listeners[event].remove(handler)

    # ── Streamlit 연동 ─────────────────────────────────────────────────────

    def has_listeners(self, event: str) -> bool:
        return bool(self._listeners[event])

    def dispatch(self, event_type: str) -> BrowserEvent:
        event = BrowserEvent(event_type)
        for handler in list(self._listeners[event_type]):
            handler(event)
        return event

    def component_args(self, show_prompt: bool = False) -> Dict[str, Any]:
        return {
            "watch_fullscreen": self.has_listeners(FULLSCREEN_CHANGE),
            "block_context_menu": self.has_listeners(CONTEXT_MENU),
            "warn_on_leave": self.has_listeners(BEFORE_UNLOAD),
            "request_nonce": self._request_nonce,
            "exit_fullscreen": self._exit_requested,
            "show_prompt": show_prompt,
        }

    def sync(self, value: Optional[Any]) -> bool:
        """컴포넌트가 보고한 전체화면 값을 반영. 값이 바뀌었으면 True."""
        if value is None:
            return False
        fullscreen = bool(value)
        if fullscreen == self._fullscreen:
            return False
        self._fullscreen = fullscreen
        self.dispatch(FULLSCREEN_CHANGE)
        return True

    def render(self, show_prompt: bool = False, key: str = "lockdown") -> bool:
        value = _component()(**self.component_args(show_prompt), key=key, default=None)
        return self.sync(value)
