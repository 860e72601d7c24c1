import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# 앱 모듈 임포트 전에 테스트용 환경 고정
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RUN_MIGRATIONS"] = "false"

from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session  # noqa: E402

from taskmanager.db.session import build_engine, create_all_tables, get_session  # noqa: E402
from taskmanager.repositories.task_repository import TaskRepository  # noqa: E402
from taskmanager.services.sanitizer import Sanitizer  # noqa: E402
from taskmanager.services.task_service import TaskService  # noqa: E402


@pytest.fixture
def engine():
    eng = build_engine("sqlite://")
    create_all_tables(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture
def repository(db):
    return TaskRepository(db)


@pytest.fixture
def service(repository):
    return TaskService(repository=repository, sanitizer=Sanitizer())


@pytest.fixture
def app():
    from taskmanager.main import app as fastapi_app

    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app, engine):
    def _session_override():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = _session_override
    return TestClient(app)
