# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .auth import LoginRequestDTO, RegisterRequestDTO, UserDTO
from .tasks import TaskCreateDTO, TaskDTO, TaskQueryDTO, TaskUpdateDTO

__all__ = [
    "LoginRequestDTO",
    "RegisterRequestDTO",
    "TaskCreateDTO",
    "TaskDTO",
    "TaskQueryDTO",
    "TaskUpdateDTO",
    "UserDTO",
]
