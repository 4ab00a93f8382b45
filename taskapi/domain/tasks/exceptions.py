# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskapi.shared.errors import NotFoundError


class TaskNotFoundError(NotFoundError):
    message = "No task exists with the provided id"
