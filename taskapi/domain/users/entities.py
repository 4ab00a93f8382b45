# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: str
    username: str
    email: str
    password_hash: str = field(repr=False)
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True, frozen=True)
class NewUser:

    username: str
    email: str
    password_hash: str = field(repr=False)
