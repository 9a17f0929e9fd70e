"""
services/catalog_loader.py

문제 리소스(questions.json) 로더.
Public API:
  - load_catalog(source, http=None) -> Catalog : 리소스 1회 읽기 + 검증
  - parse_catalog(data) -> Catalog             : 디코드된 JSON 검증

설계 원칙:
- 세션당 한 번만 호출, 재시도 없음 (실패 = 세션 종료)
- 전송 실패는 CatalogLoadError, 형식 오류는 CatalogFormatError
"""

import json
import logging
from typing import Any, Optional

import requests
from pydantic import ValidationError

from config import REQUEST_TIMEOUT
from c_quiz.errors import CatalogFormatError, CatalogLoadError
from c_quiz.models.question_model import Catalog

logger = logging.getLogger(__name__)

QUESTIONS_FIELD = "questions"


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _read_url(url: str, http: Optional[Any]) -> Any:
    client = http if http is not None else requests
    try:
        r = client.get(url, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as e:
        raise CatalogLoadError(f"Failed to fetch questions: {e}") from e
    if not 200 <= r.status_code < 300:
        raise CatalogLoadError(f"Failed to fetch questions (HTTP {r.status_code})")
    try:
        return r.json()
    except ValueError as e:
        raise CatalogLoadError("Failed to fetch questions: response is not JSON") from e


def _read_file(path: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise CatalogLoadError(f"Failed to fetch questions: {e}") from e
    except ValueError as e:
        raise CatalogLoadError(f"Failed to fetch questions: {path} is not valid JSON") from e


def parse_catalog(data: Any) -> Catalog:
    """
    디코드된 리소스 → Catalog.

    Raises:
        CatalogFormatError: questions 필드가 없거나 리스트가 아니거나,
                            비어 있거나, 문제 하나라도 검증에 실패한 경우
    """
    if not isinstance(data, dict):
        raise CatalogFormatError("Invalid questions format")

    raw = data.get(QUESTIONS_FIELD)
    if not isinstance(raw, list):
        raise CatalogFormatError("Invalid questions format")
    if not raw:
        raise CatalogFormatError("Invalid questions format: no questions")

    try:
        return Catalog(questions=raw)
    except ValidationError as e:
        logger.error(f"문제 리소스 검증 실패: {e}")
        raise CatalogFormatError(f"Invalid questions format: {e.error_count()} error(s)") from e


def load_catalog(source: str, http: Optional[Any] = None) -> Catalog:
    """
    문제 리소스를 한 번 읽어 Catalog 로 반환.

    Args:
        source: 로컬 JSON 경로 또는 http(s) URL
        http:   requests 호환 세션 (get(url, timeout=...)). None 이면 requests 모듈 사용.
    """
    logger.info(f"문제 리소스 로드: {source}")
    data = _read_url(source, http) if _is_url(source) else _read_file(source)
    catalog = parse_catalog(data)
    logger.info(f"문제 {len(catalog)}개 로드 완료")
    return catalog
