"""Account registration, login, stats and per-question progress."""
import re
from datetime import datetime, timezone

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.errors import AuthenticationError, ConflictError, InternalError, NotFoundError, ValidationError
from app.core.security import BCRYPT_MAX_BYTES, hash_password, verify_password
from app.models.progress import UserProgress
from app.models.user import User
from app.services.ranking import tier_of

logger = structlog.get_logger(__name__)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50

STATS_FIELDS = ("total_score", "hearts", "streak", "level", "xp")


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def validate_password(password: str | None) -> str:
    pwd = password or ""
    if len(pwd) < get_settings().password_min_length:
        raise ValidationError("Password is too short")
    if len(pwd.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValidationError("Password is too long")
    return pwd


def user_to_dict(user: User) -> dict:
    rank_points = user.rank_points or 0
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "total_score": user.total_score,
        "hearts": user.hearts,
        "streak": user.streak,
        "level": user.level,
        "xp": user.xp,
        "rank_points": rank_points,
        "tier": tier_of(rank_points).name,
    }


async def get_user(db: AsyncSession, user_id: int | None) -> User:
    if user_id is None:
        raise ValidationError("User ID is required")
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


async def register_user(db: AsyncSession, username: str, password: str, email: str | None = None) -> User:
    """Create a user; duplicate usernames (or emails) are a conflict."""
    username = (username or "").strip()
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        raise ValidationError("Username must be 3-50 characters")
    pwd = validate_password(password)

    email_norm = normalize_email(email) or None
    if email_norm and not EMAIL_RE.match(email_norm):
        raise ValidationError("Invalid email address")

    result = await db.execute(select(User.id).where(User.username == username))
    if result.first() is not None:
        raise ConflictError("Username already exists")
    if email_norm:
        result = await db.execute(select(User.id).where(User.email == email_norm))
        if result.first() is not None:
            raise ConflictError("Email already registered")

    user = User(username=username, email=email_norm, hashed_password=hash_password(pwd))
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as exc:
        # lost a race with a concurrent registration
        await db.rollback()
        raise ConflictError("Username already exists") from exc
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("register_failed", username=username, error=str(exc), exc_info=exc)
        raise InternalError() from exc
    await db.refresh(user)

    logger.info("user_registered", user_id=user.id)
    return user


async def authenticate(db: AsyncSession, username: str, password: str) -> User:
    result = await db.execute(select(User).where(User.username == (username or "").strip()))
    user = result.scalar_one_or_none()
    if user is None or not verify_password(password or "", user.hashed_password):
        raise AuthenticationError("Invalid username or password")
    return user


async def update_stats(db: AsyncSession, user_id: int | None, **stats: int | None) -> User:
    """Overwrite the given stats fields; fields passed as None are left alone."""
    user = await get_user(db, user_id)
    for field in STATS_FIELDS:
        value = stats.get(field)
        if value is not None:
            setattr(user, field, value)
    await db.commit()
    await db.refresh(user)
    return user


async def record_progress(db: AsyncSession, user_id: int | None, question_id: str, correct: bool) -> UserProgress:
    """Upsert one question attempt: bump attempts, keep the latest result."""
    await get_user(db, user_id)

    result = await db.execute(
        select(UserProgress).where(
            UserProgress.user_id == user_id,
            UserProgress.question_id == question_id,
        )
    )
    progress = result.scalar_one_or_none()
    if progress is None:
        progress = UserProgress(user_id=user_id, question_id=question_id, attempts=0)
        db.add(progress)

    progress.attempts = (progress.attempts or 0) + 1
    progress.correct = correct
    progress.last_attempted = datetime.now(timezone.utc)

    await db.commit()
    await db.refresh(progress)
    return progress


async def list_progress(db: AsyncSession, user_id: int) -> list[UserProgress]:
    await get_user(db, user_id)
    result = await db.execute(
        select(UserProgress).where(UserProgress.user_id == user_id).order_by(UserProgress.question_id)
    )
    return list(result.scalars().all())


def progress_to_dict(progress: UserProgress) -> dict:
    return {
        "question_id": progress.question_id,
        "correct": progress.correct,
        "attempts": progress.attempts,
        "last_attempted": progress.last_attempted,
    }
