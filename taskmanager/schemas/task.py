from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskmanager.models.task import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
)

TITLE_REQUIRED = "Title is required"
TITLE_LENGTH = (
    f"Title must be between {TITLE_MIN_LENGTH} and {TITLE_MAX_LENGTH} characters"
)
DESCRIPTION_LENGTH = f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters"
COMPLETED_REQUIRED = "Completion status must be specified"

CompletionStatus = Literal["DONE", "PENDING"]


class TaskRequest(BaseModel):
    """POST/PUT body. No id (DB assigns it), no completionStatus (server computes it)."""

    title: str = Field(..., min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    # 기본값 없음: 누락되면 400
    completed: bool

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError(TITLE_REQUIRED)
        return v


class TaskResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    description: Optional[str] = None
    completed: bool
    completion_status: CompletionStatus = Field(alias="completionStatus")


class ErrorResponse(BaseModel):
    status: int
    error: str
    message: str
    errors: Optional[Dict[str, str]] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def check_task_request(
    title: Optional[str],
    description: Optional[str],
    completed: Optional[bool],
) -> Dict[str, str]:
    """Re-check TaskRequest constraints on already-built values; returns field -> message."""
    errors: Dict[str, str] = {}

    if title is None or not title.strip():
        errors["title"] = TITLE_REQUIRED
    elif not TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH:
        errors["title"] = TITLE_LENGTH

    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        errors["description"] = DESCRIPTION_LENGTH

    if completed is None:
        errors["completed"] = COMPLETED_REQUIRED

    return errors
