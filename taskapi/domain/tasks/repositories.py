# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any, Protocol

from .entities import NewTask, Task, TaskQuery, TaskStats


class TaskRepository(Protocol):
    def add(self, task: NewTask) -> Task: ...
    def get(self, task_id: str) -> Task | None: ...
    def list(self, query: TaskQuery) -> Sequence[Task]: ...
    def update(self, task_id: str, changes: Mapping[str, Any]) -> Task | None: ...
    def delete(self, task_id: str) -> Task | None: ...
    def stats(self, now: datetime) -> TaskStats: ...
