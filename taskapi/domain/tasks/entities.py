# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Task records and the typed query/statistics values built around them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskSortField(StrEnum):
    """Closed set of sortable task attributes, named as they appear on the wire."""

    TITLE = "title"
    COMPLETED = "completed"
    PRIORITY = "priority"
    DUE_DATE = "dueDate"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


@dataclass(slots=True, frozen=True)
class Task:
    id: str
    title: str
    description: str
    completed: bool
    priority: TaskPriority
    due_date: datetime | None
    created_at: datetime
    updated_at: datetime

    def is_overdue(self, now: datetime) -> bool:
        """A task is overdue when it has a due date in the past and is still open."""

        if self.due_date is None or self.completed:
            return False
        return self.due_date < now


@dataclass(slots=True, frozen=True)
class NewTask:
    title: str
    description: str = ""
    completed: bool = False
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None


@dataclass(slots=True, frozen=True)
class TaskFilter:
    """Absent (``None``) attributes impose no constraint."""

    completed: bool | None = None
    priority: TaskPriority | None = None

    def is_empty(self) -> bool:
        return self.completed is None and self.priority is None


@dataclass(slots=True, frozen=True)
class TaskSort:
    key: TaskSortField = TaskSortField.CREATED_AT
    order: SortOrder = SortOrder.DESC


@dataclass(slots=True, frozen=True)
class TaskQuery:
    filter: TaskFilter = field(default_factory=TaskFilter)
    sort: TaskSort = field(default_factory=TaskSort)


@dataclass(slots=True, frozen=True)
class TaskStats:
    total: int = 0
    completed: int = 0
    pending: int = 0
    high_priority: int = 0
    overdue: int = 0

    @property
    def completion_percentage(self) -> int:
        if self.total <= 0:
            return 0
        # round half up, integer-only
        return (self.completed * 200 + self.total) // (self.total * 2)

    def as_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "completed": self.completed,
            "pending": self.pending,
            "highPriority": self.high_priority,
            "overdue": self.overdue,
            "completionPercentage": self.completion_percentage,
        }
