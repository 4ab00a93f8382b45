# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from taskapi.domain.tasks import (
    SortOrder,
    TaskFilter,
    TaskPriority,
    TaskQuery,
    TaskSort,
    TaskSortField,
)


def build_task_query(params: Mapping[str, Any]) -> TaskQuery:
    """Translate validated query parameters into a filter and a sort.

    Keys that are absent (or ``None``) add no predicate. ``sortBy`` and
    ``order`` fall back to newest-first.
    """

    completed = params.get("completed")
    priority = params.get("priority")

    task_filter = TaskFilter(
        completed=bool(completed) if completed is not None else None,
        priority=TaskPriority(priority) if priority is not None else None,
    )

    sort_by = params.get("sortBy") or params.get("sort_by")
    order = params.get("order")
    task_sort = TaskSort(
        key=TaskSortField(sort_by) if sort_by else TaskSortField.CREATED_AT,
        order=SortOrder(order) if order else SortOrder.DESC,
    )

    return TaskQuery(filter=task_filter, sort=task_sort)


__all__ = ["build_task_query"]
