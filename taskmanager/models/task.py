from typing import Optional

from sqlalchemy import Boolean, Column, Index, String, false
from sqlmodel import Field, SQLModel

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    # 컬럼명은 "title", 파이썬 속성명은 header
    header: str = Field(
        sa_column=Column("title", String(TITLE_MAX_LENGTH), nullable=False)
    )
    description: Optional[str] = Field(
        default=None,
        sa_column=Column(String(DESCRIPTION_MAX_LENGTH), nullable=True),
    )
    completed: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, server_default=false()),
    )


# At most one active (not completed) task per title.
Index(
    "uq_tasks_active_title",
    Task.header,
    unique=True,
    postgresql_where=Task.completed == false(),
    sqlite_where=Task.completed == false(),
)
