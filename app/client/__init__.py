from app.client.api import TriviaAPIError, TriviaClient
from app.client.bank import LocalQuestionBank, Question
from app.client.controller import RankedResult, RankedTestController
from app.client.ramp import Difficulty, DifficultyRamp
from app.client.session import QuizSession

__all__ = [
    "Difficulty",
    "DifficultyRamp",
    "LocalQuestionBank",
    "Question",
    "QuizSession",
    "RankedResult",
    "RankedTestController",
    "TriviaAPIError",
    "TriviaClient",
]
