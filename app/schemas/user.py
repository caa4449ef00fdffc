"""Pydantic schemas for accounts, stats and progress."""
from datetime import datetime

from pydantic import Field

from app.schemas.base import MAX_INT32, CamelSchema


class RegisterSchema(CamelSchema):
    username: str
    password: str
    email: str | None = None


class LoginSchema(CamelSchema):
    username: str
    password: str


class UserOutSchema(CamelSchema):
    id: int
    username: str
    email: str | None = None
    total_score: int
    hearts: int
    streak: int
    level: int
    xp: int
    rank_points: int
    tier: str


class UserEnvelopeSchema(CamelSchema):
    success: bool = True
    user: UserOutSchema


class LoginOutSchema(UserEnvelopeSchema):
    token: str


class UpdateStatsSchema(CamelSchema):
    user_id: int | None = None
    total_score: int | None = Field(default=None, ge=0, le=MAX_INT32)
    hearts: int | None = Field(default=None, ge=0, le=MAX_INT32)
    streak: int | None = Field(default=None, ge=0, le=MAX_INT32)
    level: int | None = Field(default=None, ge=1, le=MAX_INT32)
    xp: int | None = Field(default=None, ge=0, le=MAX_INT32)


class ProgressInSchema(CamelSchema):
    user_id: int | None = None
    question_id: str = Field(min_length=1, max_length=100)
    correct: bool


class ProgressOutSchema(CamelSchema):
    question_id: str
    correct: bool
    attempts: int
    last_attempted: datetime | None = None


class ProgressEnvelopeSchema(CamelSchema):
    success: bool = True
    progress: ProgressOutSchema


class ProgressListOutSchema(CamelSchema):
    success: bool = True
    progress: list[ProgressOutSchema]
