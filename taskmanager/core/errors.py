"""Domain errors raised by the task service and translated at the HTTP boundary."""
from __future__ import annotations

from typing import Dict


class TaskManagerError(Exception):
    """Base class for every anticipated failure."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TaskNotFoundError(TaskManagerError):
    def __init__(self, task_id: int):
        super().__init__(f"Task with ID {task_id} not found")
        self.task_id = task_id


class DuplicateTaskError(TaskManagerError):
    def __init__(self, message: str = "You already have an active task with this title!"):
        super().__init__(message)


class MalformedInputError(TaskManagerError):
    pass


class RequestValidationFailed(TaskManagerError):
    """One or more request fields broke a constraint; `errors` maps field -> message."""

    def __init__(
        self,
        errors: Dict[str, str],
        message: str = "Validation failed for one or more fields",
    ):
        super().__init__(message)
        self.errors = dict(errors)
