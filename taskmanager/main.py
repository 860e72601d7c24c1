# taskmanager/main.py
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import text

from taskmanager.core.config import get_settings
from taskmanager.core.logging_config import setup_logging
from taskmanager.db.migrations import run_migrations
from taskmanager.db.session import session_scope
from taskmanager.routers import task
from taskmanager.services.error_translator import register_error_handlers

settings = get_settings()

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.run_migrations:
        run_migrations()
    else:
        logger.info("RUN_MIGRATIONS disabled; assuming schema is current")
    yield


app = FastAPI(
    title="Task Manager API",
    version=settings.app_version,
    lifespan=lifespan,
)

# 오류 변환 미들웨어가 CORS 안쪽에 오도록 먼저 등록
register_error_handlers(app)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 라우터 등록
app.include_router(task.router)


@app.get("/health")
def health_app():
    return {"ok": True}


@app.get("/health/db")
def health_db():
    try:
        with session_scope() as s:
            s.exec(text("SELECT 1"))
        return {"ok": True}
    except Exception:
        logger.exception("DB health check failed")
        raise HTTPException(status_code=500, detail="Database connection failed")


def run() -> None:
    uvicorn.run(
        "taskmanager.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
