"""Tests for difficulty mapping and adaptive question selection."""
import random

import pytest
from sqlalchemy import select

from app.core.errors import NotFoundError, ValidationError
from app.models.progress import UserProgress
from app.models.question import Question
from app.services.questions import map_difficulty, question_to_dict, select_ranked_questions


class TestMapDifficulty:
    @pytest.mark.parametrize(
        ("label", "level"),
        [("easy", 1), ("EASY", 1), ("Medium", 2), ("hard", 3), (" Hard ", 3), ("extreme", 2), ("", 2), (None, 2), (3, 2)],
    )
    def test_mapping(self, label, level):
        assert map_difficulty(label) == level


async def _level_ids(db, level: int) -> list[str]:
    result = await db.execute(select(Question.id).where(Question.level == level).order_by(Question.id))
    return list(result.scalars().all())


class TestSelectRankedQuestions:
    async def test_fresh_user_gets_unseen_questions_at_level(self, db_session, make_user):
        user = await make_user("fresh")
        questions = await select_ranked_questions(db_session, user.id, "hard", 10, rng=random.Random(1))
        assert len(questions) == 10
        assert {q.level for q in questions} == {3}
        assert len({q.id for q in questions}) == 10

    async def test_unseen_preferred_then_missed(self, db_session, make_user):
        user = await make_user("veteran")
        ids = await _level_ids(db_session, 1)
        # 12 easy questions: 4 answered right, 6 missed, 2 unseen
        for qid in ids[:4]:
            db_session.add(UserProgress(user_id=user.id, question_id=qid, correct=True, attempts=1))
        for qid in ids[4:10]:
            db_session.add(UserProgress(user_id=user.id, question_id=qid, correct=False, attempts=1))
        await db_session.commit()

        questions = await select_ranked_questions(db_session, user.id, "easy", 10, rng=random.Random(7))
        picked = [q.id for q in questions]
        assert len(picked) == 10
        assert set(picked[:2]) == set(ids[10:])
        assert set(picked[2:8]) == set(ids[4:10])
        assert set(picked[8:]) <= set(ids[:4])

    async def test_short_level_returns_fewer(self, db_session, make_user):
        user = await make_user("greedy")
        questions = await select_ranked_questions(db_session, user.id, "medium", 50)
        assert len(questions) == len(await _level_ids(db_session, 2))

    async def test_unknown_user(self, db_session):
        with pytest.raises(NotFoundError):
            await select_ranked_questions(db_session, 4242, "easy", 10)

    async def test_missing_user_id(self, db_session):
        with pytest.raises(ValidationError):
            await select_ranked_questions(db_session, None, "easy", 10)

    async def test_question_to_dict_shape(self, db_session):
        question = await db_session.get(Question, "py-easy-003")
        data = question_to_dict(question)
        assert data["difficulty"] == "easy"
        assert data["options"][data["answer"]] == "5"
