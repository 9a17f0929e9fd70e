"""
api/store.py — 응시 기록 인메모리 저장소

학번(소문자 정규화)별로 한 번의 응시만 기록한다.
재시작하면 기록은 사라진다 (참고용 채점 서버).
"""

import threading
import time
from typing import Any, Dict, Optional

from c_quiz.services.identity import normalize_student_id


class AttemptStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._attempts: Dict[str, Dict[str, Any]] = {}

    def has_attempted(self, student_id: str) -> bool:
        with self._lock:
            return normalize_student_id(student_id) in self._attempts

    def record(self, student_id: str, score: int, answers: list) -> bool:
        """응시 기록 저장. 이미 기록이 있으면 저장하지 않고 False."""
        sid = normalize_student_id(student_id)
        with self._lock:
            if sid in self._attempts:
                return False
            self._attempts[sid] = {
                "studentId": student_id,
                "score": score,
                "total": len(answers),
                "answers": answers,
                "submitted_at": time.time(),
            }
            return True

    def get(self, student_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            attempt = self._attempts.get(normalize_student_id(student_id))
            return dict(attempt) if attempt is not None else None

    def reset(self) -> None:
        with self._lock:
            self._attempts.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._attempts)
