"""
Unit Tests for the environment lockdown guard and its Streamlit platform
"""

import pytest

from c_quiz.services.lockdown_guard import (
    BEFORE_UNLOAD,
    CONTEXT_MENU,
    FULLSCREEN_CHANGE,
    LockdownGuard,
)
from c_quiz.views.components.lockdown import StreamlitLockdownPlatform
from tests.fakes import FakePlatform


class TestLockdownGuard:
    """Tests for LockdownGuard over the in-memory platform."""

    def test_enter_when_granted_then_compliant_and_listeners_installed(self, platform):
        guard = LockdownGuard(platform)
        guard.enter()
        assert guard.compliant is True
        assert platform.requests == 1
        assert {e for e, hs in platform.listeners.items() if hs} == {
            FULLSCREEN_CHANGE, CONTEXT_MENU, BEFORE_UNLOAD,
        }

    def test_enter_when_denied_then_not_compliant_and_no_raise(self):
        platform = FakePlatform(grant=False)
        guard = LockdownGuard(platform)
        guard.enter()
        assert guard.compliant is False
        assert platform.listener_count() == 3

    def test_enter_when_api_unavailable_then_not_compliant(self):
        guard = LockdownGuard(FakePlatform(available=False))
        guard.enter()
        assert guard.compliant is False

    def test_enter_when_called_twice_then_raises(self, platform):
        guard = LockdownGuard(platform)
        guard.enter()
        with pytest.raises(RuntimeError):
            guard.enter()

    def test_fullscreen_change_when_toggled_then_on_change_reports(self, platform):
        changes = []
        guard = LockdownGuard(platform, on_change=changes.append)
        guard.enter()
        platform.set_fullscreen(False)
        platform.set_fullscreen(True)
        assert changes == [True, False, True]

    def test_context_menu_when_fired_then_prevented(self, platform):
        LockdownGuard(platform).enter()
        event = platform.fire(CONTEXT_MENU)
        assert event.default_prevented is True

    def test_before_unload_when_fired_then_prompt_requested(self, platform):
        LockdownGuard(platform).enter()
        event = platform.fire(BEFORE_UNLOAD)
        assert event.default_prevented is True
        assert event.return_value == ""

    def test_teardown_when_called_then_listeners_removed_and_fullscreen_released(self, platform):
        guard = LockdownGuard(platform)
        teardown = guard.enter()
        teardown()
        assert platform.listener_count() == 0
        assert platform.fullscreen is False
        assert guard.compliant is False
        assert platform.fire(CONTEXT_MENU).default_prevented is False

    def test_teardown_when_called_twice_then_idempotent(self, platform):
        teardown = LockdownGuard(platform).enter()
        teardown()
        teardown()
        assert platform.exits == 1

    def test_retry_when_granted_later_then_compliant(self):
        platform = FakePlatform(grant=False)
        guard = LockdownGuard(platform)
        guard.enter()
        platform.grant = True
        assert guard.retry() is True
        assert platform.requests == 2

    def test_retry_when_torn_down_then_no_request(self, platform):
        guard = LockdownGuard(platform)
        guard.enter()()
        assert guard.retry() is False
        assert platform.requests == 1

    def test_release_fullscreen_when_exit_fails_then_swallowed(self, platform):
        guard = LockdownGuard(platform)
        guard.enter()

        def _boom():
            raise RuntimeError("exitFullscreen rejected")

        platform.exit_fullscreen = _boom
        guard.release_fullscreen()


class TestStreamlitLockdownPlatform:
    """Tests for the Streamlit platform adapter without a browser."""

    def test_sync_when_component_reports_fullscreen_then_guard_compliant(self):
        platform = StreamlitLockdownPlatform()
        guard = LockdownGuard(platform)
        guard.enter()
        assert guard.compliant is False

        assert platform.sync(True) is True
        assert guard.compliant is True

        assert platform.sync(True) is False
        platform.sync(False)
        assert guard.compliant is False

    def test_sync_when_no_value_yet_then_ignored(self):
        platform = StreamlitLockdownPlatform()
        assert platform.sync(None) is False
        assert platform.is_fullscreen() is False

    def test_component_args_when_entered_then_deterrents_enabled(self):
        platform = StreamlitLockdownPlatform()
        teardown = LockdownGuard(platform).enter()
        args = platform.component_args(show_prompt=True)
        assert args["watch_fullscreen"] and args["block_context_menu"] and args["warn_on_leave"]
        assert args["request_nonce"] == 1
        assert args["show_prompt"] is True

        teardown()
        args = platform.component_args()
        assert not (args["watch_fullscreen"] or args["block_context_menu"] or args["warn_on_leave"])

    def test_request_when_retried_then_nonce_increments(self):
        platform = StreamlitLockdownPlatform()
        guard = LockdownGuard(platform)
        guard.enter()
        guard.retry()
        assert platform.component_args()["request_nonce"] == 2

    def test_release_when_fullscreen_then_exit_requested(self):
        platform = StreamlitLockdownPlatform()
        guard = LockdownGuard(platform)
        guard.enter()
        platform.sync(True)
        guard.release_fullscreen()
        assert platform.component_args()["exit_fullscreen"] is True
