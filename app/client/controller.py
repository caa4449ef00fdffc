"""Ranked test flow: get questions (server first, local bank second), then submit."""
import random
from dataclasses import dataclass

import structlog

from app.client.api import TriviaClient
from app.client.bank import LocalQuestionBank
from app.client.ramp import Difficulty
from app.client.session import QuizSession

logger = structlog.get_logger(__name__)

RANKED_QUESTION_COUNT = 10


@dataclass(frozen=True)
class RankedResult:
    score: int
    accuracy: int
    total_points: int
    updated_points: int


class RankedTestController:
    def __init__(
        self,
        api: TriviaClient,
        bank: LocalQuestionBank,
        question_count: int = RANKED_QUESTION_COUNT,
        rng: random.Random | None = None,
    ):
        self.api = api
        self.bank = bank
        self.question_count = question_count
        self.rng = rng or random.Random()

    def start(self, user_id: int, difficulty: str | Difficulty = Difficulty.MEDIUM, topics: set[str] | None = None) -> QuizSession:
        level = difficulty if isinstance(difficulty, Difficulty) else Difficulty.parse(difficulty)
        questions = self.api.fetch_ranked_questions(user_id, level)
        source = "server"
        if not questions or len(questions) < self.question_count:
            questions = self.bank.pick(level, self.question_count, topics=topics, rng=self.rng)
            source = "local"
        logger.info("ranked_test_started", user_id=user_id, difficulty=level.value, source=source)
        return QuizSession(
            questions=list(questions)[: self.question_count],
            difficulty=level,
            selected_topics=set(topics or ()),
            source=source,
        )

    def finish(self, user_id: int, session: QuizSession) -> RankedResult:
        """Submit the new cumulative total: current rank points plus this test's score."""
        current = self.api.get_rank(user_id)
        total = current + session.score
        updated = self.api.submit_ranked(user_id, session.score, session.accuracy, total)
        return RankedResult(score=session.score, accuracy=session.accuracy, total_points=total, updated_points=updated)
