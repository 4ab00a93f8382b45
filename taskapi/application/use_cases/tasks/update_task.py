# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from taskapi.domain.tasks import Task, TaskNotFoundError, TaskRepository
from taskapi.shared.logging import logger

UPDATABLE_FIELDS = frozenset({"title", "description", "completed", "priority", "due_date"})


class UpdateTaskUseCase:
    def __init__(self, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, task_id: str, changes: Mapping[str, Any]) -> Task:
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        task = self._tasks.update(task_id, changes)
        if task is None:
            raise TaskNotFoundError()
        logger.info(f"task.update: task_id={task_id} fields={sorted(changes)}")
        return task


__all__ = ["UPDATABLE_FIELDS", "UpdateTaskUseCase"]
