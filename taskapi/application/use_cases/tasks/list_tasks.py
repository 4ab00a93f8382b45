# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from taskapi.domain.tasks import Task, TaskQuery, TaskRepository


class ListTasksUseCase:
    def __init__(self, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, query: TaskQuery) -> Sequence[Task]:
        return self._tasks.list(query)


__all__ = ["ListTasksUseCase"]
