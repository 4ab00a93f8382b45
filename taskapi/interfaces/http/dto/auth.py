from __future__ import annotations

import re
from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from taskapi.domain.users import User

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[a-zA-Z]{2,}$")


class RegisterRequestDTO(BaseModel):
    username: Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=30)]
    email: Annotated[
        str, StringConstraints(strip_whitespace=True, to_lower=True, min_length=3, max_length=254)
    ]
    password: str = Field(min_length=6, max_length=128)

    model_config = ConfigDict(extra="ignore")

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        if not USERNAME_PATTERN.match(value):
            raise PydanticCustomError(
                "username_invalid_chars",
                "Username may only contain letters, digits and underscores",
                {"pattern": USERNAME_PATTERN.pattern},
            )
        return value

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value):
            raise PydanticCustomError("email_invalid", "Email format is not valid", {})
        return value


class LoginRequestDTO(BaseModel):
    # username or email
    username: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=254)]
    password: str = Field(min_length=1, max_length=128)

    model_config = ConfigDict(extra="ignore")


class UserDTO(BaseModel):
    id: str
    username: str
    email: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, validate_by_name=True
    )

    @classmethod
    def serialize(cls, user: User) -> dict[str, Any]:
        return cls.model_validate(user).model_dump(mode="json", by_alias=True)
