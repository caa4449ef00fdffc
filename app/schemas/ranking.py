"""Pydantic schemas for rank, leaderboard and ranked tests."""
from pydantic import Field

from app.schemas.base import MAX_INT32, CamelSchema


class RankOutSchema(CamelSchema):
    success: bool = True
    rank_points: int
    tier: str
    next_tier: str | None = None
    points_to_next_tier: int | None = None


class LeaderboardEntrySchema(CamelSchema):
    id: int
    username: str
    rank_points: int


class LeaderboardOutSchema(CamelSchema):
    success: bool = True
    leaderboard: list[LeaderboardEntrySchema]


class RankedQuestionsRequestSchema(CamelSchema):
    user_id: int | None = None
    difficulty: str | None = None


class QuestionSchema(CamelSchema):
    id: str
    difficulty: str
    topic: str
    question: str
    options: list[str]
    answer: int  # 0-based index into options
    explanation: str = ""


class RankedQuestionsOutSchema(CamelSchema):
    success: bool = True
    difficulty: str
    questions: list[QuestionSchema] = []
    message: str | None = None


class SubmitRankedSchema(CamelSchema):
    user_id: int | None = None
    score: int = Field(ge=0, le=MAX_INT32)
    accuracy: int = Field(ge=0, le=100)
    total_points: int = Field(ge=0, le=MAX_INT32)


class SubmitRankedOutSchema(CamelSchema):
    success: bool = True
    message: str = "Ranked test results submitted successfully"
    updated_points: int
    tier: str
