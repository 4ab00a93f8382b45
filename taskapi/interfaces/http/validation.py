# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Named rule sets applied to raw request input.

Every rule set is a pydantic model. Validation collects all failures at
once and reports them as ``{"field", "message"}`` pairs; unknown body
fields are dropped, unknown query keys are rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from taskapi.domain.identifiers import require_valid_id
from taskapi.shared.errors import ValidationError
from taskapi.shared.errors.validation import format_pydantic_errors

from .dto import (
    LoginRequestDTO,
    RegisterRequestDTO,
    TaskCreateDTO,
    TaskQueryDTO,
    TaskUpdateDTO,
)

_M = TypeVar("_M", bound=BaseModel)

RULE_SETS: dict[str, type[BaseModel]] = {
    "task_create": TaskCreateDTO,
    "task_update": TaskUpdateDTO,
    "task_query": TaskQueryDTO,
    "user_register": RegisterRequestDTO,
    "user_login": LoginRequestDTO,
}

_FAILURE_MESSAGES = {
    "task_create": "Task data is not valid",
    "task_update": "Task update is not valid",
    "task_query": "Query parameters are not valid",
    "user_register": "Registration data is not valid",
    "user_login": "Login data is not valid",
}


@dataclass(slots=True, frozen=True)
class ValidationOutcome:
    value: BaseModel | None = None
    errors: tuple[dict[str, str], ...] = ()

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.errors


def _schema_for(rule_set: str) -> type[BaseModel]:
    try:
        return RULE_SETS[rule_set]
    except KeyError:
        raise ValueError(f"Unknown rule set: {rule_set}") from None


def validate(rule_set: str, raw: Any) -> ValidationOutcome:
    schema = _schema_for(rule_set)
    try:
        value = schema.model_validate(raw if raw is not None else {})
    except PydanticValidationError as exc:
        return ValidationOutcome(errors=tuple(format_pydantic_errors(exc)))
    return ValidationOutcome(value=value)


def validated(rule_set: str, raw: Any, expected: type[_M]) -> _M:
    """Validate ``raw`` or raise :class:`ValidationError` with every failure."""

    outcome = validate(rule_set, raw)
    if not outcome.ok:
        raise ValidationError(_FAILURE_MESSAGES[rule_set], details=list(outcome.errors))
    value = outcome.value
    if not isinstance(value, expected):
        raise TypeError(f"Rule set {rule_set} does not produce {expected.__name__}")
    return value


def require_object_id(value: str) -> str:
    return require_valid_id(value)


__all__ = [
    "RULE_SETS",
    "ValidationOutcome",
    "require_object_id",
    "validate",
    "validated",
]
