"""Pydantic schemas for the password reset flow."""
from app.schemas.base import CamelSchema


class PasswordResetRequestSchema(CamelSchema):
    email: str | None = None


class ResetPasswordSchema(CamelSchema):
    token: str | None = None
    password: str | None = None


class MessageOutSchema(CamelSchema):
    success: bool = True
    message: str
