"""
services/lockdown_guard.py

시험 환경 잠금 (전체화면 요청 + 우클릭 차단 + 페이지 이탈 경고).

enter() 로 잠금을 획득하면 해제 함수(teardown)를 돌려준다.
세션이 끝나는 모든 경로(제출 성공, 포기, 문제 로드 실패)에서 teardown 을 호출해
리스너가 다음 화면으로 새지 않게 한다.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)

FULLSCREEN_CHANGE = "fullscreenchange"
CONTEXT_MENU = "contextmenu"
BEFORE_UNLOAD = "beforeunload"

Teardown = Callable[[], None]
EventHandler = Callable[["BrowserEvent"], None]


class BrowserEvent:
    """플랫폼이 핸들러에 넘기는 이벤트 (DOM Event 의 최소 부분집합)."""

    def __init__(self, type: str):
        self.type = type
        self.default_prevented = False
        self.return_value: Optional[str] = None

    def prevent_default(self) -> None:
        self.default_prevented = True


class LockdownPlatform(Protocol):
    """브라우저 전체화면/이벤트 API 추상화."""

    def request_fullscreen(self) -> None: ...

    def exit_fullscreen(self) -> None: ...

    def is_fullscreen(self) -> bool: ...

    def add_listener(self, event: str, handler: EventHandler) -> None: ...

    def remove_listener(self, event: str, handler: EventHandler) -> None: ...


def _block_context_menu(event: BrowserEvent) -> None:
    event.prevent_default()


def _warn_before_unload(event: BrowserEvent) -> None:
    # 빈 문자열 returnValue → 브라우저 기본 확인창
    event.prevent_default()
    event.return_value = ""


class LockdownGuard:
    """
    전체화면 준수 여부(compliant)를 관리한다.

    compliant 는 저장값이 아니라 fullscreenchange 알림마다
    platform.is_fullscreen() 으로 다시 계산한다.
    """

    def __init__(
        self,
        platform: LockdownPlatform,
        on_change: Optional[Callable[[bool], None]] = None,
    ):
        self._platform = platform
        self.on_change = on_change
        self._compliant = False
        self._entered = False
        self._released = False

    @property
    def compliant(self) -> bool:
        return self._compliant

    @property
    def active(self) -> bool:
        return self._entered and not self._released

    def enter(self) -> Teardown:
        """잠금 획득. 반환된 teardown 은 여러 번 호출해도 안전하다."""
        if self._entered:
            raise RuntimeError("lockdown already entered")
        self._entered = True

        self._platform.add_listener(FULLSCREEN_CHANGE, self._handle_fullscreen_change)
        self._platform.add_listener(CONTEXT_MENU, _block_context_menu)
        self._platform.add_listener(BEFORE_UNLOAD, _warn_before_unload)

        self._request_fullscreen()
        self._recompute()
        return self._teardown

    def retry(self) -> bool:
        """차단 화면의 '전체화면 다시 시도' 동작."""
        if not self.active:
            return False
        self._request_fullscreen()
        self._recompute()
        return self._compliant

    def _request_fullscreen(self) -> None:
        try:
            self._platform.request_fullscreen()
        except Exception as e:
            # 거부/미지원은 조용히 실패 → compliant 는 False 유지
            logger.warning(f"전체화면 요청 실패: {e}")

    def _handle_fullscreen_change(self, event: BrowserEvent) -> None:
        self._recompute()

    def _recompute(self) -> None:
        try:
            compliant = bool(self._platform.is_fullscreen())
        except Exception as e:
            logger.warning(f"전체화면 상태 확인 실패: {e}")
            compliant = False
        if compliant == self._compliant:
            return
        self._compliant = compliant
        logger.info(f"전체화면 상태 변경: {'ON' if compliant else 'OFF'}")
        if self.on_change is not None:
            self.on_change(compliant)

    def _teardown(self) -> None:
        if self._released:
            return
        self._released = True

        self._platform.remove_listener(FULLSCREEN_CHANGE, self._handle_fullscreen_change)
        self._platform.remove_listener(CONTEXT_MENU, _block_context_menu)
        self._platform.remove_listener(BEFORE_UNLOAD, _warn_before_unload)

        self.release_fullscreen()
        self._compliant = False

    def release_fullscreen(self) -> None:
        """전체화면 해제 (best-effort, 실패는 무시)."""
        try:
            if self._platform.is_fullscreen():
                self._platform.exit_fullscreen()
        except Exception as e:
            logger.debug(f"전체화면 해제 실패 (무시): {e}")
