# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskapi.domain.tasks import Task, TaskNotFoundError, TaskRepository
from taskapi.shared.logging import logger


class DeleteTaskUseCase:
    def __init__(self, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, task_id: str) -> Task:
        task = self._tasks.delete(task_id)
        if task is None:
            raise TaskNotFoundError()
        logger.info(f"task.delete: task_id={task_id}")
        return task


__all__ = ["DeleteTaskUseCase"]
