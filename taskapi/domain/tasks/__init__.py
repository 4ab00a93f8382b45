# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import (
    NewTask,
    SortOrder,
    Task,
    TaskFilter,
    TaskPriority,
    TaskQuery,
    TaskSort,
    TaskSortField,
    TaskStats,
)
from .exceptions import TaskNotFoundError
from .repositories import TaskRepository

__all__ = [
    "NewTask",
    "SortOrder",
    "Task",
    "TaskFilter",
    "TaskNotFoundError",
    "TaskPriority",
    "TaskQuery",
    "TaskRepository",
    "TaskSort",
    "TaskSortField",
    "TaskStats",
]
