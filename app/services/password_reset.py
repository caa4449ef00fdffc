"""Password reset: token issuance, email delivery and redemption."""
from datetime import datetime, timedelta, timezone

import structlog
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.errors import InternalError, ValidationError
from app.core.security import generate_reset_token, hash_password, hash_reset_token
from app.email.service import EmailService
from app.models.password_reset import PasswordResetToken
from app.models.user import User
from app.services.users import normalize_email, validate_password

logger = structlog.get_logger(__name__)

# Same text whether or not the account exists
RESET_REQUESTED_MESSAGE = "If an account with that email exists, a password reset link has been sent."
RESET_COMPLETE_MESSAGE = "Password has been reset successfully."
INVALID_TOKEN_MESSAGE = "Invalid or expired reset token"


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


async def create_reset_token(db: AsyncSession, user_id: int) -> str:
    """Replace any existing tokens for the user with a fresh one; return the raw token."""
    settings = get_settings()
    raw_token, token_hash = generate_reset_token()

    await db.execute(delete(PasswordResetToken).where(PasswordResetToken.user_id == user_id))
    db.add(
        PasswordResetToken(
            user_id=user_id,
            token_hash=token_hash,
            expires_at=datetime.now(timezone.utc) + timedelta(minutes=settings.password_reset_token_ttl_minutes),
        )
    )
    await db.commit()
    return raw_token


async def request_password_reset(db: AsyncSession, email: str | None, email_service: EmailService) -> str:
    """Issue a token and mail a reset link if the email is known.

    Always returns the same message; delivery failures are logged, not reported.
    """
    email_norm = normalize_email(email)
    if not email_norm:
        return RESET_REQUESTED_MESSAGE

    try:
        result = await db.execute(select(User).where(User.email == email_norm))
        user = result.scalar_one_or_none()
        if user is None:
            logger.info("password_reset_unknown_email")
            return RESET_REQUESTED_MESSAGE
        raw_token = await create_reset_token(db, user.id)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("password_reset_token_failed", error=str(exc), exc_info=exc)
        raise InternalError() from exc

    settings = get_settings()
    reset_url = f"{settings.frontend_base_url}/reset-password?token={raw_token}"
    try:
        sent = await email_service.send_template(
            to=user.email,
            template_name="password_reset",
            context={
                "reset_url": reset_url,
                "username": user.username,
                "expires_minutes": str(settings.password_reset_token_ttl_minutes),
            },
        )
        if not sent:
            logger.warning("password_reset_email_not_sent", user_id=user.id)
    except Exception:
        logger.exception("password_reset_email_failed", user_id=user.id)

    logger.info("password_reset_requested", user_id=user.id)
    return RESET_REQUESTED_MESSAGE


async def reset_password(
    db: AsyncSession,
    raw_token: str | None,
    new_password: str | None,
    email_service: EmailService | None = None,
) -> str:
    """Redeem a reset token: set the new password and delete the token."""
    if not raw_token:
        raise ValidationError(INVALID_TOKEN_MESSAGE)
    pwd = validate_password(new_password)

    result = await db.execute(
        select(PasswordResetToken).where(PasswordResetToken.token_hash == hash_reset_token(raw_token))
    )
    token = result.scalar_one_or_none()
    if token is None or _as_utc(token.expires_at) < datetime.now(timezone.utc):
        raise ValidationError(INVALID_TOKEN_MESSAGE)

    user = await db.get(User, token.user_id)
    if user is None:
        raise ValidationError(INVALID_TOKEN_MESSAGE)

    try:
        user.hashed_password = hash_password(pwd)
        await db.delete(token)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("password_reset_failed", user_id=user.id, error=str(exc), exc_info=exc)
        raise InternalError() from exc

    logger.info("password_reset_completed", user_id=user.id)

    if email_service is not None and user.email:
        try:
            await email_service.send_template(
                to=user.email,
                template_name="password_changed",
                context={"username": user.username},
            )
        except Exception:
            logger.exception("password_changed_email_failed", user_id=user.id)

    return RESET_COMPLETE_MESSAGE
