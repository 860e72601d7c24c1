"""Centralized SQLModel imports to ensure metadata is populated."""

from taskmanager.models import task as _task  # noqa: F401
