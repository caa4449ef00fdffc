"""Tests for the local question bank and quiz session state."""
import random

import pytest

from app.client.bank import LocalQuestionBank, Question
from app.client.ramp import Difficulty
from app.client.session import POINTS_PER_CORRECT, QuizFinishedError, QuizSession
from app.core.config import APP_DIR

BANK_PATH = APP_DIR / "data" / "questions.json"


def _question(qid: str, difficulty: Difficulty, topic: str = "basics", answer: int = 0) -> Question:
    return Question(id=qid, difficulty=difficulty, topic=topic, question=qid, options=("a", "b"), answer=answer)


@pytest.fixture
def bank() -> LocalQuestionBank:
    return LocalQuestionBank.from_file(BANK_PATH)


class TestLocalQuestionBank:
    def test_loads_all_partitions(self, bank):
        assert len(bank) == 36
        for level in Difficulty:
            assert len(bank.partitions[level]) == 12

    def test_pick_from_one_difficulty(self, bank):
        picked = bank.pick(Difficulty.HARD, 10, rng=random.Random(3))
        assert len(picked) == 10
        assert len({q.id for q in picked}) == 10
        assert all(q.difficulty is Difficulty.HARD for q in picked)

    def test_short_partition_is_topped_up(self):
        small = LocalQuestionBank.from_questions(
            [_question(f"e{i}", Difficulty.EASY) for i in range(3)]
            + [_question(f"m{i}", Difficulty.MEDIUM) for i in range(10)]
        )
        picked = small.pick(Difficulty.EASY, 10, rng=random.Random(0))
        assert len(picked) == 10
        assert {q.id for q in picked if q.difficulty is Difficulty.EASY} == {"e0", "e1", "e2"}

    def test_topic_filter(self, bank):
        picked = bank.pick(Difficulty.EASY, 2, topics={"strings"}, rng=random.Random(0))
        assert {q.topic for q in picked} == {"strings"}

    def test_narrow_topic_filter_still_fills_set(self, bank):
        picked = bank.pick(Difficulty.EASY, 10, topics={"strings"}, rng=random.Random(0))
        assert len(picked) == 10

    def test_same_seed_same_pick(self, bank):
        first = [q.id for q in bank.pick(Difficulty.MEDIUM, 10, rng=random.Random(5))]
        second = [q.id for q in bank.pick(Difficulty.MEDIUM, 10, rng=random.Random(5))]
        assert first == second


class TestQuizSession:
    def test_scoring_and_accuracy(self):
        session = QuizSession(
            questions=[
                _question("q1", Difficulty.EASY, answer=0),
                _question("q2", Difficulty.HARD, answer=1),
                _question("q3", Difficulty.MEDIUM, answer=0),
                _question("q4", Difficulty.MEDIUM, answer=0),
            ]
        )
        assert session.answer(0) is True
        assert session.answer(1) is True
        assert session.answer(1) is False
        assert session.answer(0) is True

        assert session.finished
        assert session.score == POINTS_PER_CORRECT[Difficulty.EASY] + POINTS_PER_CORRECT[Difficulty.HARD] + POINTS_PER_CORRECT[Difficulty.MEDIUM]
        assert session.correct_count == 3
        assert session.accuracy == 75

    def test_current_question_advances(self):
        session = QuizSession(questions=[_question("q1", Difficulty.EASY), _question("q2", Difficulty.EASY)])
        assert session.current_question.id == "q1"
        session.answer(1)
        assert session.current_question.id == "q2"

    def test_answer_after_finish_raises(self):
        session = QuizSession(questions=[_question("q1", Difficulty.EASY)])
        session.answer(0)
        assert session.current_question is None
        with pytest.raises(QuizFinishedError):
            session.answer(0)

    def test_ramp_follows_answers(self):
        session = QuizSession(questions=[_question(f"q{i}", Difficulty.MEDIUM) for i in range(3)])
        session.answer(1)
        session.answer(1)
        assert session.ramp.current is Difficulty.EASY

    def test_sessions_do_not_share_state(self):
        first = QuizSession(questions=[_question("q1", Difficulty.EASY)])
        second = QuizSession(questions=[_question("q1", Difficulty.EASY)])
        first.answer(0)
        assert second.answers == []
        assert second.ramp.answered == 0
