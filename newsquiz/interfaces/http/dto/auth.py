from __future__ import annotations

import re

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

_USERNAME_RE = re.compile(r"^[A-Za-z0-9_.\-]+$")


class _CredentialsDTO(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=False)

    username: str = Field(min_length=3, max_length=64)
    secret: str = Field(
        min_length=1,
        max_length=128,
        validation_alias=AliasChoices("secret", "password"),
    )

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        if not _USERNAME_RE.match(value):
            raise PydanticCustomError(
                "username_invalid_chars",
                "Username may contain only letters, digits, '_', '.' and '-'",
                {"pattern": _USERNAME_RE.pattern},
            )
        return value


class RegisterRequestDTO(_CredentialsDTO):
    pass


class LoginRequestDTO(_CredentialsDTO):
    pass


class LoginResponseDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token: str
    player_id: int = Field(serialization_alias="playerId")
    username: str
    points: int


class SuccessDTO(BaseModel):
    success: bool = True
