from __future__ import annotations

import logging
from typing import List

from taskmanager.core.errors import (
    DuplicateTaskError,
    RequestValidationFailed,
    TaskNotFoundError,
)
from taskmanager.mappers import task_mapper
from taskmanager.models.task import Task
from taskmanager.repositories.task_repository import TaskRepository
from taskmanager.schemas.task import TaskRequest, TaskResponse, check_task_request
from taskmanager.services.sanitizer import Sanitizer

log = logging.getLogger(__name__)


class TaskService:
    """
    Orchestrates task CRUD: sanitize -> validate -> business rule -> repository -> mapper.
    Holds no per-request state besides its collaborators.
    """

    def __init__(self, repository: TaskRepository, sanitizer: Sanitizer):
        self.repository = repository
        self.sanitizer = sanitizer

    def list_all(self) -> List[TaskResponse]:
        return [task_mapper.to_response(t) for t in self.repository.find_all()]

    def get_by_id(self, task_id: int) -> TaskResponse:
        return task_mapper.to_response(self._get_or_raise(task_id))

    def create(self, request: TaskRequest) -> TaskResponse:
        request = self._prepare(request)

        # 정제된 제목 기준으로 중복 검사 (완료된 태스크는 제외)
        if self.repository.exists_active_by_title(request.title):
            raise DuplicateTaskError()

        saved = self.repository.save(task_mapper.to_entity(request))
        log.info("Task created: id=%s", saved.id)
        return task_mapper.to_response(saved)

    def update(self, task_id: int, request: TaskRequest) -> TaskResponse:
        request = self._prepare(request)
        task = self._get_or_raise(task_id)

        task.header = request.title
        task.description = request.description
        task.completed = request.completed

        saved = self.repository.save(task)
        log.info("Task updated: id=%s", saved.id)
        return task_mapper.to_response(saved)

    def delete(self, task_id: int) -> None:
        task = self._get_or_raise(task_id)
        self.repository.delete(task)
        log.info("Task deleted: id=%s", task_id)

    def _get_or_raise(self, task_id: int) -> Task:
        task = self.repository.find_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def _prepare(self, request: TaskRequest) -> TaskRequest:
        """Sanitize free-text fields, then re-check constraints on the cleaned values."""
        cleaned = request.model_copy(
            update={
                "title": self.sanitizer.sanitize(request.title),
                "description": self.sanitizer.sanitize(request.description),
            }
        )
        errors = check_task_request(
            cleaned.title, cleaned.description, getattr(cleaned, "completed", None)
        )
        if errors:
            raise RequestValidationFailed(errors)
        return cleaned
