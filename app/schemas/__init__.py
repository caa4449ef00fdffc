from app.schemas.auth import MessageOutSchema, PasswordResetRequestSchema, ResetPasswordSchema
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
from app.schemas.user import (
    LoginOutSchema,
    LoginSchema,
    ProgressEnvelopeSchema,
    ProgressInSchema,
    ProgressListOutSchema,
    ProgressOutSchema,
    RegisterSchema,
    UpdateStatsSchema,
    UserEnvelopeSchema,
    UserOutSchema,
)

__all__ = [
    "LeaderboardEntrySchema",
    "LeaderboardOutSchema",
    "LoginOutSchema",
    "LoginSchema",
    "MessageOutSchema",
    "PasswordResetRequestSchema",
    "ProgressEnvelopeSchema",
    "ProgressInSchema",
    "ProgressListOutSchema",
    "ProgressOutSchema",
    "QuestionSchema",
    "RankOutSchema",
    "RankedQuestionsOutSchema",
    "RankedQuestionsRequestSchema",
    "RegisterSchema",
    "ResetPasswordSchema",
    "SubmitRankedOutSchema",
    "SubmitRankedSchema",
    "UpdateStatsSchema",
    "UserEnvelopeSchema",
    "UserOutSchema",
]
