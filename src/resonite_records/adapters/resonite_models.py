"""Pydantic models for Resonite API payloads."""

import re
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from resonite_records.domain.profile import UserProfile
from resonite_records.domain.records import Record

# .NET emits up to seven fractional digits; datetime holds six.
_EXCESS_FRACTION = re.compile(r"(\.\d{6})\d+")


class RecordPayload(BaseModel):
    """Record object from the records listing."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    path: str = ""
    last_modification_time: datetime = Field(alias="lastModificationTime")
    tags: list[str] | None = None

    @field_validator("last_modification_time", mode="before")
    @classmethod
    def _truncate_fraction(cls, value: object) -> object:
        if isinstance(value, str):
            return _EXCESS_FRACTION.sub(r"\1", value, count=1)
        return value

    @field_validator("name", "path", mode="before")
    @classmethod
    def _null_as_empty(cls, value: object) -> object:
        return "" if value is None else value

    def to_record(self) -> Record:
        """Convert the payload into a domain record."""
        timestamp = self.last_modification_time
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=UTC)
        return Record(
            id=self.id,
            name=self.name,
            path=self.path,
            last_modification_time=timestamp,
            tags=tuple(self.tags or ()),
        )


class UserInfoPayload(BaseModel):
    """User object returned by the users endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    username: str = ""
    profile: UserProfile | None = None


class PasswordAuthentication(BaseModel):
    """Password authentication block of a login request."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(default="password", alias="$type")
    password: str = Field(repr=False)


class LoginRequest(BaseModel):
    """Body of a user session request."""

    model_config = ConfigDict(populate_by_name=True)

    username: str
    authentication: PasswordAuthentication
    secret_machine_id: str = Field(alias="secretMachineId", repr=False)
    remember_me: bool = Field(default=False, alias="rememberMe")


class AuthEntity(BaseModel):
    """Session entity issued by the user sessions endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId", min_length=1)
    token: str = Field(min_length=1, repr=False)


class AuthResponse(BaseModel):
    """Wrapper returned by the user sessions endpoint."""

    entity: AuthEntity
