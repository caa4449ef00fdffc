"""API routes: rank, leaderboard, ranked questions, ranked submissions."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.session import get_db
from app.schemas.ranking import (
    LeaderboardEntrySchema,
    LeaderboardOutSchema,
    QuestionSchema,
    RankedQuestionsOutSchema,
    RankedQuestionsRequestSchema,
    RankOutSchema,
    SubmitRankedOutSchema,
    SubmitRankedSchema,
)
from app.services.questions import LEVEL_NAMES, map_difficulty, question_to_dict, select_ranked_questions
from app.services.ranking import get_leaderboard, get_rank_points, next_tier, submit_ranked_result, tier_of

router = APIRouter(prefix="/api", tags=["ranked"])


@router.get("/rank/{user_id}", response_model=RankOutSchema)
async def get_rank(
    user_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Current rank points and tier for one user."""
    points = await get_rank_points(db, user_id)
    upcoming = next_tier(points)
    return RankOutSchema(
        rank_points=points,
        tier=tier_of(points).name,
        next_tier=upcoming.name if upcoming else None,
        points_to_next_tier=upcoming.threshold - points if upcoming else None,
    )


@router.get("/leaderboard", response_model=LeaderboardOutSchema)
async def leaderboard(db: Annotated[AsyncSession, Depends(get_db)]):
    """Top users by rank points."""
    rows = await get_leaderboard(db, limit=get_settings().leaderboard_size)
    return LeaderboardOutSchema(leaderboard=[LeaderboardEntrySchema(**row) for row in rows])


@router.post("/ranked-questions", response_model=RankedQuestionsOutSchema)
async def ranked_questions(
    body: RankedQuestionsRequestSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Questions for a ranked test at the requested difficulty.

    success=false means the store cannot fill a full test; clients fall back
    to their local bank.
    """
    count = get_settings().ranked_question_count
    difficulty = LEVEL_NAMES[map_difficulty(body.difficulty)]
    questions = await select_ranked_questions(db, body.user_id, body.difficulty, count)
    if len(questions) < count:
        return RankedQuestionsOutSchema(
            success=False,
            difficulty=difficulty,
            message="Not enough questions available for this difficulty",
        )
    return RankedQuestionsOutSchema(
        difficulty=difficulty,
        questions=[QuestionSchema(**question_to_dict(q)) for q in questions],
    )


@router.post("/submit-ranked", response_model=SubmitRankedOutSchema)
async def submit_ranked(
    body: SubmitRankedSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Store the client's new cumulative rank points and log the test."""
    updated = await submit_ranked_result(
        db,
        user_id=body.user_id,
        score=body.score,
        accuracy=body.accuracy,
        total_points=body.total_points,
    )
    return SubmitRankedOutSchema(updated_points=updated, tier=tier_of(updated).name)
