"""
log_config.py — 로깅 설정 (채점 서버 launcher 와 퀴즈 화면 프로세스 공용)

두 프로세스 모두 같은 launch.log 파일 + 콘솔에 기록한다.
"""

import logging
import sys

from config import LOG_FILE

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'


def setup_logging(log_file: str = LOG_FILE) -> None:
    """
    루트 로거에 파일 + 콘솔 핸들러 설정.
    이미 핸들러가 있으면 아무것도 하지 않는다 (Streamlit 은 스크립트를 매번 다시 실행).
    """
    if logging.getLogger().handlers:
        return
    try:
        logging.basicConfig(
            level=logging.INFO,
            format=LOG_FORMAT,
            handlers=[
                logging.FileHandler(log_file, encoding='utf-8'),
                logging.StreamHandler(sys.stdout)
            ]
        )
    except PermissionError:
        # 로그 파일 점유 시 콘솔 출력만 사용
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
