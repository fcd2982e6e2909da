"""Pydantic schemas for the account API.

Learn: Request fields are Optional so a missing field reaches the
service and comes back as VALIDATION_ERROR in the usual envelope,
instead of FastAPI's default 422. Wrong types still fail parsing and
are mapped to VALIDATION_ERROR by the error handlers.

Response bodies are camelCase on the wire (userId, accessToken, ...)
via an alias generator; Python code uses snake_case.
"""

import uuid
from datetime import datetime
from typing import Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Envelope(BaseModel, Generic[T]):
    """Success envelope: {"status": "ok", "data": ...}."""
    status: Literal["ok"] = "ok"
    data: T


# ─── Requests ───────────────────────────────────────────

class SignupRequest(BaseModel):
    email: Optional[str] = Field(None, max_length=320)
    password: Optional[str] = None
    name: Optional[str] = Field(None, max_length=200)


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


# ─── Responses ──────────────────────────────────────────

class SignupData(_CamelModel):
    user_id: str


class TokenData(_CamelModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int


class UserRead(_CamelModel):
    """Public projection of an account — never includes the hash."""
    id: uuid.UUID
    email: str
    name: str
    created_at: datetime

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class ProfileData(BaseModel):
    user: UserRead


class HealthData(BaseModel):
    server: str
    version: str
    database: str
    state: str
