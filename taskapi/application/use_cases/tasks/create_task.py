# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskapi.domain.tasks import NewTask, Task, TaskRepository
from taskapi.shared.logging import logger


class CreateTaskUseCase:
    def __init__(self, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, new_task: NewTask) -> Task:
        task = self._tasks.add(new_task)
        logger.info(f"task.create: task_id={task.id} priority={task.priority}")
        return task


__all__ = ["CreateTaskUseCase"]
