# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Opaque record identifiers: 12 random bytes rendered as 24 hex characters."""

from __future__ import annotations

import re
import secrets

from taskapi.shared.errors import MalformedIdError

_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


def new_id() -> str:
    return secrets.token_hex(12)


def is_valid_id(value: object) -> bool:
    return isinstance(value, str) and _ID_PATTERN.fullmatch(value) is not None


def require_valid_id(value: object) -> str:
    if not is_valid_id(value):
        raise MalformedIdError(value)
    return str(value).lower()


__all__ = ["is_valid_id", "new_id", "require_valid_id"]
