"""Rank tiers, ranked-test submission and leaderboard queries."""
import math
from dataclasses import dataclass

import structlog
from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import InternalError, NotFoundError, ValidationError
from app.models.ranked_test import RANKED_TEST_QUESTION_COUNT, RankedTest
from app.models.user import User

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RankTier:
    name: str
    threshold: int


# Ascending by threshold
RANK_TIERS: tuple[RankTier, ...] = (
    RankTier("Bronze", 0),
    RankTier("Silver", 100),
    RankTier("Gold", 250),
    RankTier("Platinum", 500),
    RankTier("Diamond", 1000),
)


def _coerce_points(points) -> float:
    """Negative, NaN, None and non-numeric input all count as 0."""
    try:
        value = float(points)
    except OverflowError:
        # ints beyond float range
        return math.inf if points > 0 else 0.0
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(value) or value < 0:
        return 0.0
    return value


def tier_of(points) -> RankTier:
    """Return the highest tier whose threshold the points meet; the lowest tier otherwise."""
    value = _coerce_points(points)
    for tier in reversed(RANK_TIERS):
        if value >= tier.threshold:
            return tier
    return RANK_TIERS[0]


def next_tier(points) -> RankTier | None:
    """Return the tier after the current one, or None at the top."""
    current = tier_of(points)
    index = RANK_TIERS.index(current)
    if index + 1 < len(RANK_TIERS):
        return RANK_TIERS[index + 1]
    return None


async def get_rank_points(db: AsyncSession, user_id: int) -> int:
    result = await db.execute(select(User.rank_points).where(User.id == user_id))
    row = result.one_or_none()
    if row is None:
        raise NotFoundError("User not found")
    return row[0] or 0


async def submit_ranked_result(
    db: AsyncSession,
    user_id: int | None,
    score: int,
    accuracy: int,
    total_points: int,
) -> int:
    """Overwrite the user's rank points and append a history row, atomically.

    total_points is the client's cumulative total; it replaces the stored value
    as-is (last writer wins).
    """
    if user_id is None:
        raise ValidationError("User ID is required")

    try:
        result = await db.execute(
            update(User).where(User.id == user_id).values(rank_points=total_points)
        )
        if result.rowcount == 0:
            await db.rollback()
            raise NotFoundError("User not found")

        db.add(
            RankedTest(
                user_id=user_id,
                score=score,
                accuracy=accuracy,
                questions_count=RANKED_TEST_QUESTION_COUNT,
            )
        )
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("ranked_submit_failed", user_id=user_id, error=str(exc), exc_info=exc)
        raise InternalError() from exc

    logger.info("ranked_submitted", user_id=user_id, score=score, accuracy=accuracy, rank_points=total_points)
    return total_points


async def get_leaderboard(db: AsyncSession, limit: int) -> list[dict]:
    """Top `limit` users with points, highest first; ties broken by id ascending."""
    points = func.coalesce(User.rank_points, 0)
    try:
        result = await db.execute(
            select(User.id, User.username, points.label("rank_points"))
            .where(points > 0)
            .order_by(points.desc(), User.id.asc())
            .limit(limit)
        )
    except SQLAlchemyError as exc:
        logger.error("leaderboard_query_failed", error=str(exc), exc_info=exc)
        raise InternalError() from exc
    return [
        {"id": user_id, "username": username, "rank_points": rank_points}
        for (user_id, username, rank_points) in result.all()
    ]
