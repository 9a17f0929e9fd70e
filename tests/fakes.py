"""Test doubles for the lockdown platform and the scoring client."""

from collections import defaultdict

from c_quiz.errors import SubmissionError
from c_quiz.services.lockdown_guard import FULLSCREEN_CHANGE, BrowserEvent


class FakePlatform:
    """In-memory LockdownPlatform: fullscreen changes dispatch synchronously."""

    def __init__(self, grant: bool = True, available: bool = True):
        self.grant = grant
        self.available = available
        self.fullscreen = False
        self.listeners = defaultdict(list)
        self.requests = 0
        self.exits = 0

    def request_fullscreen(self):
        self.requests += 1
        if not self.available:
            raise RuntimeError("Fullscreen API unavailable")
        if not self.grant:
            raise PermissionError("Permissions check failed")
        self.set_fullscreen(True)

    def exit_fullscreen(self):
        self.exits += 1
        self.set_fullscreen(False)

    def is_fullscreen(self):
        return self.fullscreen

    def add_listener(self, event, handler):
        self.listeners[event].append(handler)

    def remove_listener(self, event, handler):
        if handler in self.listeners[event]:
            self.listeners[event].remove(handler)

    def fire(self, event_type):
        event = BrowserEvent(event_type)
        for handler in list(self.listeners[event_type]):
            handler(event)
        return event

    def listener_count(self):
        return sum(len(v) for v in self.listeners.values())

    # user presses Esc / re-enters fullscreen
    def set_fullscreen(self, value):
        if value != self.fullscreen:
            self.fullscreen = value
            self.fire(FULLSCREEN_CHANGE)


class FakeScoringClient:
    """Records submitted payloads; fails with the configured SubmissionError."""

    def __init__(self, error: SubmissionError = None):
        self.error = error
        self.payloads = []
        self.on_submit = None

    def submit(self, payload):
        self.payloads.append(payload)
        if self.on_submit is not None:
            self.on_submit(payload)
        if self.error is not None:
            raise self.error
        return {"message": "Submission recorded"}


