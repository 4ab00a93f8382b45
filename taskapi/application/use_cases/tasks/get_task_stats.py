# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from taskapi.domain.tasks import TaskRepository, TaskStats


def _utcnow() -> datetime:
    return datetime.now(UTC)


class GetTaskStatsUseCase:
    def __init__(
        self,
        tasks: TaskRepository,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._tasks = tasks
        self._clock = clock

    def execute(self) -> TaskStats:
        return self._tasks.stats(self._clock())


__all__ = ["GetTaskStatsUseCase"]
