# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from flask import Blueprint, Response, jsonify, request

from taskapi.application.services.task_query import build_task_query
from taskapi.application.use_cases.tasks import (
    CreateTaskUseCase,
    DeleteTaskUseCase,
    GetTaskStatsUseCase,
    GetTaskUseCase,
    ListTasksUseCase,
    SetTaskCompletionUseCase,
    UpdateTaskUseCase,
)
from taskapi.interfaces.http.auth import Authenticator, identity_key
from taskapi.interfaces.http.dto import TaskCreateDTO, TaskDTO, TaskQueryDTO, TaskUpdateDTO
from taskapi.interfaces.http.validation import require_object_id, validated
from taskapi.shared.middleware.rate_limit import RateLimiter


class TaskController:
    def __init__(
        self,
        *,
        authenticator: Authenticator,
        rate_limiter: RateLimiter,
        list_tasks: ListTasksUseCase,
        get_task: GetTaskUseCase,
        create_task: CreateTaskUseCase,
        update_task: UpdateTaskUseCase,
        set_completion: SetTaskCompletionUseCase,
        delete_task: DeleteTaskUseCase,
        get_stats: GetTaskStatsUseCase,
    ) -> None:
        self._authenticator = authenticator
        self._rate_limiter = rate_limiter
        self._list_tasks = list_tasks
        self._get_task = get_task
        self._create_task = create_task
        self._update_task = update_task
        self._set_completion = set_completion
        self._delete_task = delete_task
        self._get_stats = get_stats

    def list_tasks(self) -> Response:
        params = validated("task_query", request.args.to_dict(), TaskQueryDTO)
        query = build_task_query(params.model_dump(by_alias=True, exclude_none=True))
        data = [TaskDTO.serialize(task) for task in self._list_tasks.execute(query)]
        return jsonify({"count": len(data), "data": data})

    def stats(self) -> Response:
        return jsonify({"data": self._get_stats.execute().as_dict()})

    def get_task(self, task_id: str) -> Response:
        task = self._get_task.execute(require_object_id(task_id))
        return jsonify({"data": TaskDTO.serialize(task)})

    def create_task(self) -> tuple[Response, int]:
        dto = validated("task_create", request.get_json(silent=True), TaskCreateDTO)
        task = self._create_task.execute(dto.to_new_task())
        return jsonify({"message": "Task created", "data": TaskDTO.serialize(task)}), 201

    def update_task(self, task_id: str) -> Response:
        # id first: a malformed id is reported even when the body is invalid too
        task_id = require_object_id(task_id)
        dto = validated("task_update", request.get_json(silent=True), TaskUpdateDTO)
        task = self._update_task.execute(task_id, dto.changes())
        return jsonify({"message": "Task updated", "data": TaskDTO.serialize(task)})

    def mark_completed(self, task_id: str) -> Response:
        task = self._set_completion.execute(require_object_id(task_id), True)
        return jsonify({"message": "Task marked as completed", "data": TaskDTO.serialize(task)})

    def mark_pending(self, task_id: str) -> Response:
        task = self._set_completion.execute(require_object_id(task_id), False)
        return jsonify({"message": "Task marked as pending", "data": TaskDTO.serialize(task)})

    def delete_task(self, task_id: str) -> Response:
        self._delete_task.execute(require_object_id(task_id))
        return jsonify({"message": "Task deleted"})

    def _protect(self, view: Callable[..., Any]) -> Callable[..., Any]:
        # authenticate first so the limiter can key on the user id
        return self._authenticator.required(self._rate_limiter.limit_by(identity_key)(view))

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("tasks", __name__, url_prefix="/api/tasks")
        protect = self._protect
        bp.add_url_rule("", view_func=protect(self.list_tasks), methods=["GET"])
        bp.add_url_rule("", view_func=protect(self.create_task), methods=["POST"])
        bp.add_url_rule("/stats", view_func=protect(self.stats), methods=["GET"])
        bp.add_url_rule("/<task_id>", view_func=protect(self.get_task), methods=["GET"])
        bp.add_url_rule("/<task_id>", view_func=protect(self.update_task), methods=["PUT"])
        bp.add_url_rule("/<task_id>", view_func=protect(self.delete_task), methods=["DELETE"])
        bp.add_url_rule(
            "/<task_id>/complete", view_func=protect(self.mark_completed), methods=["PATCH"]
        )
        bp.add_url_rule(
            "/<task_id>/pending", view_func=protect(self.mark_pending), methods=["PATCH"]
        )
        return bp
