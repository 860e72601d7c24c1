"""create_tasks_table

Revision ID: 3f1c2a7d9b10
Revises: 
Create Date: 2026-10-17 10:02:31.118204

"""
from alembic import op
import sqlalchemy as sa



revision = '3f1c2a7d9b10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "tasks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("completed", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    # Only one active (completed = false) task per title.
    op.create_index(
        "uq_tasks_active_title",
        "tasks",
        ["title"],
        unique=True,
        postgresql_where=sa.text("completed = false"),
        sqlite_where=sa.text("completed = 0"),
    )


def downgrade() -> None:
    op.drop_index("uq_tasks_active_title", table_name="tasks")
    op.drop_table("tasks")
