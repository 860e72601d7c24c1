from taskmanager.models.task import Task
from taskmanager.schemas.task import CompletionStatus, TaskRequest, TaskResponse


def completion_status(completed: bool) -> CompletionStatus:
    return "DONE" if completed else "PENDING"


def to_response(task: Task) -> TaskResponse:
    # header (storage) -> title (wire)
    return TaskResponse(
        id=task.id,
        title=task.header,
        description=task.description,
        completed=task.completed,
        completion_status=completion_status(task.completed),
    )


def to_entity(request: TaskRequest) -> Task:
    # id는 DB가 부여
    return Task(
        header=request.title,
        description=request.description,
        completed=request.completed,
    )
