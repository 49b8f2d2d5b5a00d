"""Authentication models for the remote HR API token login."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserInfo(BaseModel):
    id: int | str | None = None
    username: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    model_config = {"extra": "allow"}


class ConsoleSession(BaseModel):
    """Token and user profile returned by a successful login."""

    token: str
    user: UserInfo = Field(default_factory=UserInfo)

    @property
    def auth_header(self) -> dict[str, str]:
        return {"Authorization": f"Token {self.token}"}

    @classmethod
    def from_login_response(cls, data: dict[str, Any]) -> ConsoleSession:
        return cls(token=data["token"], user=UserInfo(**(data.get("user") or {})))
