from __future__ import annotations

from taskapi.application.services.task_query import build_task_query
from taskapi.domain.tasks import SortOrder, TaskPriority, TaskSortField


def test_absent_keys_impose_no_constraint() -> None:
    query = build_task_query({})

    assert query.filter.is_empty()
    assert query.sort.key is TaskSortField.CREATED_AT
    assert query.sort.order is SortOrder.DESC


def test_completed_false_is_a_real_predicate() -> None:
    query = build_task_query({"completed": False})

    assert query.filter.completed is False
    assert query.filter.priority is None


def test_filters_and_sort_combine() -> None:
    query = build_task_query(
        {"completed": True, "priority": "high", "sortBy": "dueDate", "order": "asc"}
    )

    assert query.filter.completed is True
    assert query.filter.priority is TaskPriority.HIGH
    assert query.sort.key is TaskSortField.DUE_DATE
    assert query.sort.order is SortOrder.ASC
