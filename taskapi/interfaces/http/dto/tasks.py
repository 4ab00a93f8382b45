# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from taskapi.domain.tasks import NewTask, SortOrder, Task, TaskPriority, TaskSortField

TitleStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
DescriptionStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]


def parse_due_date(value: Any) -> datetime | None:
    """Accept null, an ISO-8601 timestamp or a bare ``YYYY-MM-DD`` date.

    Date-only values mean midnight UTC; timestamps without an offset are UTC.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            raise ValueError(
                "dueDate must be a valid ISO-8601 date (YYYY-MM-DDTHH:mm:ss.sssZ)"
            ) from None
    else:
        raise ValueError("dueDate must be an ISO-8601 string or null")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


DueDate = Annotated[datetime | None, BeforeValidator(parse_due_date)]


class TaskCreateDTO(BaseModel):
    title: TitleStr
    description: DescriptionStr = ""
    completed: bool = False
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: DueDate = Field(None, alias="dueDate")

    model_config = ConfigDict(extra="ignore", validate_by_name=True)

    def to_new_task(self) -> NewTask:
        return NewTask(
            title=self.title,
            description=self.description,
            completed=self.completed,
            priority=self.priority,
            due_date=self.due_date,
        )


class TaskUpdateDTO(BaseModel):
    """Partial update; only the fields actually sent are applied."""

    title: TitleStr | None = None
    description: DescriptionStr | None = None
    completed: bool | None = None
    priority: TaskPriority | None = None
    due_date: DueDate = Field(None, alias="dueDate")

    model_config = ConfigDict(extra="ignore", validate_by_name=True)

    @field_validator("title", "description", "completed", "priority", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field may not be null")
        return value

    @model_validator(mode="after")
    def _require_any_field(self) -> "TaskUpdateDTO":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided to update")
        return self

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class TaskQueryDTO(BaseModel):
    completed: bool | None = None
    priority: TaskPriority | None = None
    sort_by: TaskSortField = Field(TaskSortField.CREATED_AT, alias="sortBy")
    order: SortOrder = SortOrder.DESC

    model_config = ConfigDict(extra="forbid")


class TaskDTO(BaseModel):
    id: str
    title: str
    description: str
    completed: bool
    priority: TaskPriority
    due_date: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, validate_by_name=True
    )

    @classmethod
    def serialize(cls, task: Task) -> dict[str, Any]:
        return cls.model_validate(task).model_dump(mode="json", by_alias=True)
