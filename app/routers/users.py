"""User routes: profile stats and per-question progress."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.user import (
    ProgressEnvelopeSchema,
    ProgressInSchema,
    ProgressListOutSchema,
    ProgressOutSchema,
    UpdateStatsSchema,
    UserEnvelopeSchema,
    UserOutSchema,
)
from app.services.users import (
    get_user,
    list_progress,
    progress_to_dict,
    record_progress,
    update_stats,
    user_to_dict,
)

router = APIRouter(prefix="/api", tags=["users"])


@router.get("/user/{user_id}", response_model=UserEnvelopeSchema)
async def get_profile(
    user_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    user = await get_user(db, user_id)
    return UserEnvelopeSchema(user=UserOutSchema(**user_to_dict(user)))


@router.post("/update-stats", response_model=UserEnvelopeSchema)
async def post_stats(
    body: UpdateStatsSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Overwrite the stats fields present in the body."""
    user = await update_stats(
        db,
        body.user_id,
        total_score=body.total_score,
        hearts=body.hearts,
        streak=body.streak,
        level=body.level,
        xp=body.xp,
    )
    return UserEnvelopeSchema(user=UserOutSchema(**user_to_dict(user)))


@router.post("/progress", response_model=ProgressEnvelopeSchema)
async def post_progress(
    body: ProgressInSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Record one answered question."""
    progress = await record_progress(db, body.user_id, body.question_id, body.correct)
    return ProgressEnvelopeSchema(progress=ProgressOutSchema(**progress_to_dict(progress)))


@router.get("/progress/{user_id}", response_model=ProgressListOutSchema)
async def get_progress(
    user_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    rows = await list_progress(db, user_id)
    return ProgressListOutSchema(progress=[ProgressOutSchema(**progress_to_dict(row)) for row in rows])
