from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class LoginRequest(BaseModel):
    username: str
    password: str


class UserCreate(BaseModel):
    username: str | None = None
    password: str | None = None
    role: str = "reporter"
    branch: str | None = None


class UserRead(BaseModel):
    id: str
    username: str
    email: str
    role: str
    branch: str
    created_at: datetime

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
