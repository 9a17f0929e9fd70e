"""
services/identity.py

응시자 학번 형식 검증. 인증은 하지 않는다 (형식만 확인).
"""

import re

from config import STUDENT_ID_PATTERN

_STUDENT_ID_RE = re.compile(STUDENT_ID_PATTERN)


def validate_student_id(student_id: str) -> str:
    """
    학번을 검증하고 앞뒤 공백을 제거한 값을 반환한다.

    Raises:
        ValueError: 비어 있거나 'n' + 숫자 6자리 형식이 아닐 때
                    (메시지는 화면에 그대로 노출된다)
    """
    value = (student_id or "").strip()
    if not value:
        raise ValueError("Please enter a Student ID")
    if not _STUDENT_ID_RE.match(value):
        raise ValueError('Invalid format. Use "n" followed by 6 digits (e.g., n200094).')
    return value


def is_valid_student_id(student_id: str) -> bool:
    return bool(_STUDENT_ID_RE.match((student_id or "").strip()))


def normalize_student_id(student_id: str) -> str:
    """저장소 키용 정규화 (N200094 와 n200094 는 같은 응시자)."""
    return student_id.strip().lower()
