# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import case, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from taskapi.domain.tasks import (
    NewTask,
    SortOrder,
    TaskFilter,
    TaskPriority,
    TaskQuery,
    TaskRepository,
    TaskSortField,
    TaskStats,
)
from taskapi.domain.tasks import Task as DomainTask
from taskapi.infrastructure.db.models import Task, as_utc
from taskapi.infrastructure.unit_of_work import unit_of_work_scope

_SORT_COLUMNS: dict[TaskSortField, InstrumentedAttribute[Any]] = {
    TaskSortField.TITLE: Task.title,
    TaskSortField.COMPLETED: Task.completed,
    TaskSortField.PRIORITY: Task.priority,
    TaskSortField.DUE_DATE: Task.due_date,
    TaskSortField.CREATED_AT: Task.created_at,
    TaskSortField.UPDATED_AT: Task.updated_at,
}


def _to_domain(row: Task) -> DomainTask:
    return DomainTask(
        id=row.id,
        title=row.title,
        description=row.description or "",
        completed=bool(row.completed),
        priority=TaskPriority(row.priority),
        due_date=as_utc(row.due_date),
        created_at=as_utc(row.created_at),  # type: ignore[arg-type]
        updated_at=as_utc(row.updated_at),  # type: ignore[arg-type]
    )


def _predicates(task_filter: TaskFilter) -> list[Any]:
    predicates: list[Any] = []
    if task_filter.completed is not None:
        predicates.append(Task.completed.is_(task_filter.completed))
    if task_filter.priority is not None:
        predicates.append(Task.priority == task_filter.priority.value)
    return predicates


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._session_factory = session_factory
        self._clock = clock

    def add(self, task: NewTask) -> DomainTask:
        now = self._clock()
        with unit_of_work_scope(self._session_factory) as session:
            row = Task(
                title=task.title,
                description=task.description,
                completed=task.completed,
                priority=TaskPriority(task.priority).value,
                due_date=task.due_date,
                created_at=now,
                updated_at=now,
            )
            session.add(row)
            session.flush()
            return _to_domain(row)

    def get(self, task_id: str) -> DomainTask | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Task, task_id)
            return _to_domain(row) if row else None

    def list(self, query: TaskQuery) -> Sequence[DomainTask]:
        column = _SORT_COLUMNS[query.sort.key]
        ordering = column.asc() if query.sort.order is SortOrder.ASC else column.desc()
        statement = select(Task).where(*_predicates(query.filter)).order_by(ordering)

        with unit_of_work_scope(self._session_factory) as session:
            rows = session.scalars(statement).all()
            return [_to_domain(row) for row in rows]

    def update(self, task_id: str, changes: Mapping[str, Any]) -> DomainTask | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Task, task_id)
            if row is None:
                return None

            for name, value in changes.items():
                if name == "priority":
                    value = TaskPriority(value).value
                setattr(row, name, value)
            # refreshed on every mutation, even when nothing actually changed
            row.updated_at = max(self._clock(), as_utc(row.created_at))  # type: ignore[type-var]
            session.flush()
            return _to_domain(row)

    def delete(self, task_id: str) -> DomainTask | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Task, task_id)
            if row is None:
                return None
            task = _to_domain(row)
            session.delete(row)
            return task

    def stats(self, now: datetime) -> TaskStats:
        """All counts come from one aggregate query over the table."""

        now = now.astimezone(UTC)
        overdue = (
            Task.due_date.is_not(None) & (Task.due_date < now) & Task.completed.is_(False)
        )
        statement = select(
            func.count(Task.id),
            func.sum(case((Task.completed.is_(True), 1), else_=0)),
            func.sum(case((Task.completed.is_(False), 1), else_=0)),
            func.sum(case((Task.priority == TaskPriority.HIGH.value, 1), else_=0)),
            func.sum(case((overdue, 1), else_=0)),
        )

        with unit_of_work_scope(self._session_factory) as session:
            total, completed, pending, high_priority, overdue_count = session.execute(
                statement
            ).one()

        # SUM over an empty table is NULL
        return TaskStats(
            total=int(total or 0),
            completed=int(completed or 0),
            pending=int(pending or 0),
            high_priority=int(high_priority or 0),
            overdue=int(overdue_count or 0),
        )


__all__ = ["SqlAlchemyTaskRepository"]
