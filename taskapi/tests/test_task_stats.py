from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from taskapi.application.use_cases.tasks import GetTaskStatsUseCase
from taskapi.domain.tasks import NewTask, TaskPriority, TaskQuery, TaskStats
from taskapi.infrastructure.db import SessionLocal
from taskapi.infrastructure.repositories.tasks import SqlAlchemyTaskRepository

NOW = datetime(2030, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture()
def repository() -> SqlAlchemyTaskRepository:
    return SqlAlchemyTaskRepository(SessionLocal)


@pytest.mark.parametrize(
    ("completed", "total", "expected"),
    [(0, 0, 0), (1, 3, 33), (2, 3, 67), (1, 8, 13), (1, 200, 1), (5, 5, 100)],
)
def test_completion_percentage_rounds_half_up(completed: int, total: int, expected: int) -> None:
    stats = TaskStats(total=total, completed=completed, pending=total - completed)

    assert stats.completion_percentage == expected


def test_empty_collection_has_zero_stats(repository: SqlAlchemyTaskRepository) -> None:
    stats = GetTaskStatsUseCase(repository, clock=lambda: NOW).execute()

    assert stats.as_dict() == {
        "total": 0,
        "completed": 0,
        "pending": 0,
        "highPriority": 0,
        "overdue": 0,
        "completionPercentage": 0,
    }


def test_stats_counts(repository: SqlAlchemyTaskRepository) -> None:
    repository.add(NewTask(title="done", completed=True, due_date=NOW - timedelta(days=3)))
    repository.add(NewTask(title="late", priority=TaskPriority.HIGH, due_date=NOW - timedelta(days=1)))
    repository.add(NewTask(title="later", due_date=NOW + timedelta(days=1)))

    stats = GetTaskStatsUseCase(repository, clock=lambda: NOW).execute()

    assert stats.total == 3
    assert stats.completed == 1
    assert stats.pending == 2
    assert stats.high_priority == 1
    # a completed task is never overdue
    assert stats.overdue == 1
    assert stats.completion_percentage == 33

    listed = repository.list(TaskQuery())
    assert stats.overdue == sum(task.is_overdue(NOW) for task in listed)
