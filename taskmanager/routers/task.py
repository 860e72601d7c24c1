# taskmanager/routers/task.py
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status
from sqlmodel import Session

from taskmanager.core.config import get_settings
from taskmanager.db.session import get_session
from taskmanager.repositories.task_repository import TaskRepository
from taskmanager.schemas.task import TaskRequest, TaskResponse
from taskmanager.services.sanitizer import Sanitizer
from taskmanager.services.task_service import TaskService

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])

# BIGINT 범위 밖 id는 DB까지 가기 전에 400
MAX_TASK_ID = 2**63 - 1
TaskId = Annotated[int, Path(ge=1, le=MAX_TASK_ID)]


def get_task_service(db: Session = Depends(get_session)) -> TaskService:
    """Request-scoped composition root: one session, one repository, one service."""
    sanitizer = Sanitizer(fail_closed=get_settings().sanitizer_fail_closed)
    return TaskService(repository=TaskRepository(db), sanitizer=sanitizer)


@router.get("", response_model=list[TaskResponse])
def get_all_tasks(service: TaskService = Depends(get_task_service)):
    return service.list_all()


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: TaskId, service: TaskService = Depends(get_task_service)):
    return service.get_by_id(task_id)


@router.post("", response_model=TaskResponse)
def create_task(payload: TaskRequest, service: TaskService = Depends(get_task_service)):
    return service.create(payload)


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: TaskId,
    payload: TaskRequest,
    service: TaskService = Depends(get_task_service),
):
    return service.update(task_id, payload)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: TaskId, service: TaskService = Depends(get_task_service)):
    service.delete(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
