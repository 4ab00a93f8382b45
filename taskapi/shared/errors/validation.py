# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError


def format_pydantic_errors(exc: PydanticValidationError) -> list[dict[str, str]]:
    errors_list = []

    for error in exc.errors():
        loc = error.get("loc", ())
        field_path = ".".join(str(part) for part in loc if part is not None)
        message = error.get("msg", "Invalid value")
        # pydantic prefixes messages raised from validators
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]

        errors_list.append({"field": field_path or "body", "message": message})

    return errors_list


__all__ = ["format_pydantic_errors"]
