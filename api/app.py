"""
api/app.py — 채점 서버 FastAPI 앱 인스턴스 + 오류 응답 형식 + static 파일 서빙
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import QUESTIONS_FILE, STATIC_DIR
from c_quiz.services.catalog_loader import load_catalog
from api.routes import router
from api.store import AttemptStore

logger = logging.getLogger(__name__)


def create_app(catalog_path: Optional[str] = None) -> FastAPI:
    app = FastAPI(title="C Quiz Scoring API", docs_url=None, redoc_url=None)

    # 채점 기준 문제 목록 (서버 시작 시 1회 로드, 실패하면 서버를 띄우지 않는다)
    catalog_path = catalog_path or QUESTIONS_FILE
    app.state.catalog = load_catalog(catalog_path)
    app.state.catalog_path = catalog_path
    app.state.store = AttemptStore()
    logger.info(f"채점 서버 준비 - 문제 {len(app.state.catalog)}개")

    # CORS (Streamlit 등 다른 출처의 화면에서 호출)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 오류 응답은 {"message": ...} 형식
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=422, content={"message": "Invalid request body"})

    app.include_router(router)

    # static 파일 마운트
    if os.path.isdir(STATIC_DIR):
        app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    # 문제 리소스
    @app.get("/questions.json")
    async def serve_questions():
        return FileResponse(app.state.catalog_path, media_type="application/json")

    return app
