"""
main.py — C Quiz 실행 진입점 (채점 서버 + 퀴즈 화면)
"""

import os
import socket
import subprocess
import sys
import time
import threading
import logging
import traceback
import webbrowser

# ── 패키지 경로 설정 (반드시 최상단) ──────────────────────────────────────────
_BASE_DIR = os.path.dirname(os.path.abspath(__file__))
if _BASE_DIR not in sys.path:
    sys.path.insert(0, _BASE_DIR)

from config import BASE_DIR, DEFAULT_HOST, API_PORT, UI_PORT
from c_quiz.log_config import setup_logging

# ── 로깅 설정 ────────────────────────────────────────────────────────────────
setup_logging()

logger = logging.getLogger(__name__)

# ── 서버 및 네트워크 유틸 ───────────────────────────────────────────────────

def _wait_for_server(port: int, timeout: float = 15.0) -> bool:
    deadline = time.time() + timeout
    while time.time() < deadline:
        try:
            with socket.create_connection((DEFAULT_HOST, port), timeout=0.5):
                return True
        except OSError:
            time.sleep(0.1)
    return False

def _start_api_server(port: int) -> None:
    try:
        import uvicorn
        from api.app import create_app
        logger.info(f"채점 서버 시작 - Port: {port}")
        app = create_app()
        uvicorn.run(app, host=DEFAULT_HOST, port=port, log_level="error")
    except Exception:
        logger.error(f"채점 서버 오류 발생:\n{traceback.format_exc()}")

def _start_ui(port: int) -> subprocess.Popen:
    cmd = [
        sys.executable, "-m", "streamlit", "run",
        os.path.join(BASE_DIR, "streamlit_app.py"),
        "--server.port", str(port),
        "--server.address", DEFAULT_HOST,
        "--server.headless", "true",
    ]
    logger.info(f"퀴즈 화면 시작 - Port: {port}")
    return subprocess.Popen(cmd, cwd=BASE_DIR)

# ── 메인 실행 ────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    logger.info("=== C Quiz Application Started ===")
    os.chdir(BASE_DIR)

    server_thread = threading.Thread(target=_start_api_server, args=(API_PORT,), daemon=True)
    server_thread.start()

    if not _wait_for_server(API_PORT):
        logger.error("채점 서버 시작 제한 시간을 초과했습니다. 포트 사용 여부를 확인해 보세요.")
        sys.exit(1)

    ui_proc = _start_ui(UI_PORT)
    if _wait_for_server(UI_PORT, timeout=30.0):
        logger.info("서버 준비 완료. 브라우저를 엽니다.")
        webbrowser.open(f"http://{DEFAULT_HOST}:{UI_PORT}")

        # 메인 스레드 유지
        try:
            ui_proc.wait()
        except KeyboardInterrupt:
            logger.info("사용자에 의해 종료되었습니다.")
        finally:
            ui_proc.terminate()
    else:
        logger.error("퀴즈 화면 시작 제한 시간을 초과했습니다.")
        ui_proc.terminate()
        sys.exit(1)
