"""Auth routes: register, login, current user, password reset."""
from typing import Annotated

from fastapi import APIRouter, Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import AuthenticationError
from app.core.security import create_session_token, verify_session_token
from app.db.session import get_db
from app.email.service import get_email_service
from app.models.user import User
from app.schemas.auth import MessageOutSchema, PasswordResetRequestSchema, ResetPasswordSchema
from app.schemas.user import LoginOutSchema, LoginSchema, RegisterSchema, UserEnvelopeSchema, UserOutSchema
from app.services.password_reset import request_password_reset, reset_password
from app.services.users import authenticate, register_user, user_to_dict

router = APIRouter(prefix="/api", tags=["auth"])


async def get_current_user(
    db: Annotated[AsyncSession, Depends(get_db)],
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """Resolve `Authorization: Bearer <session token>` to a user."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer":
        raise AuthenticationError("Not authenticated")
    user_id = verify_session_token(token.strip())
    if user_id is None:
        raise AuthenticationError("Not authenticated")
    user = await db.get(User, user_id)
    if user is None:
        raise AuthenticationError("Not authenticated")
    return user


@router.post("/register", response_model=UserEnvelopeSchema, status_code=201)
async def register(
    body: RegisterSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    user = await register_user(db, body.username, body.password, body.email)
    return UserEnvelopeSchema(user=UserOutSchema(**user_to_dict(user)))


@router.post("/login", response_model=LoginOutSchema)
async def login(
    body: LoginSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Check credentials and hand back a signed session token."""
    user = await authenticate(db, body.username, body.password)
    return LoginOutSchema(user=UserOutSchema(**user_to_dict(user)), token=create_session_token(user.id))


@router.get("/me", response_model=UserEnvelopeSchema)
async def me(current_user: Annotated[User, Depends(get_current_user)]):
    return UserEnvelopeSchema(user=UserOutSchema(**user_to_dict(current_user)))


@router.post("/request-password-reset", response_model=MessageOutSchema)
async def request_reset(
    body: PasswordResetRequestSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Always answers with the same message so accounts cannot be enumerated."""
    message = await request_password_reset(db, body.email, get_email_service())
    return MessageOutSchema(message=message)


@router.post("/reset-password", response_model=MessageOutSchema)
async def reset(
    body: ResetPasswordSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    message = await reset_password(db, body.token, body.password, get_email_service())
    return MessageOutSchema(message=message)
