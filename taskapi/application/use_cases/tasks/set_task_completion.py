# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskapi.domain.tasks import Task, TaskNotFoundError, TaskRepository


class SetTaskCompletionUseCase:
    """Mark a task completed or pending; refreshes updated_at either way."""

    def __init__(self, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, task_id: str, completed: bool) -> Task:
        task = self._tasks.update(task_id, {"completed": completed})
        if task is None:
            raise TaskNotFoundError()
        return task


__all__ = ["SetTaskCompletionUseCase"]
