import os

# 기본 디렉토리 설정
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# 경로 설정
STATIC_DIR = os.path.join(BASE_DIR, "static")
QUESTIONS_FILE = os.path.join(STATIC_DIR, "questions.json")
LOG_FILE = os.path.join(BASE_DIR, "launch.log")

# 서버 설정
DEFAULT_HOST = os.getenv("HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))
UI_PORT = int(os.getenv("UI_PORT", "8501"))

# 채점 서버 설정 (원격 채점 서비스 주소)
SCORING_API_URL = os.getenv("SCORING_API_URL", f"http://{DEFAULT_HOST}:{API_PORT}")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "15"))

# 문제 리소스 (로컬 JSON 경로 또는 http(s) URL)
QUESTIONS_SOURCE = os.getenv("QUESTIONS_SOURCE", QUESTIONS_FILE)

# 응시자 / 답안 설정
STUDENT_ID_PATTERN = r"^[nN]\d{6}$"
NOT_ANSWERED = "Not Answered"
