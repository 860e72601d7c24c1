from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from taskmanager.core.errors import DuplicateTaskError
from taskmanager.models.task import Task

log = logging.getLogger(__name__)

ACTIVE_TITLE_INDEX = "uq_tasks_active_title"


class TaskRepository:
    """Persistence gateway for Task rows. Each write is committed on its own."""

    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> List[Task]:
        return list(self.db.exec(select(Task)).all())

    def find_by_id(self, task_id: int) -> Optional[Task]:
        return self.db.get(Task, task_id)

    def exists_active_by_title(self, title: str) -> bool:
        stmt = (
            select(Task.id)
            .where(Task.header == title)
            .where(Task.completed == False)  # noqa: E712
            .limit(1)
        )
        return self.db.exec(stmt).first() is not None

    def save(self, task: Task) -> Task:
        self.db.add(task)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if _is_active_title_violation(exc):
                log.info("Active title conflict on save: %r", task.header)
                raise DuplicateTaskError() from exc
            raise
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(task)
        return task

    def delete(self, task: Task) -> None:
        self.db.delete(task)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise


def _is_active_title_violation(exc: IntegrityError) -> bool:
    text = str(exc.orig)
    # postgres는 인덱스명, sqlite는 컬럼명으로 보고함
    return ACTIVE_TITLE_INDEX in text or "tasks.title" in text
