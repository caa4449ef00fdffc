"""Adaptive selection of ranked-test questions from the question store."""
import json
import random

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError, ValidationError
from app.models.progress import UserProgress
from app.models.question import Question
from app.models.user import User

DIFFICULTY_LEVELS = {"easy": 1, "medium": 2, "hard": 3}
LEVEL_NAMES = {level: name for name, level in DIFFICULTY_LEVELS.items()}
DEFAULT_LEVEL = DIFFICULTY_LEVELS["medium"]


def map_difficulty(label: str | None) -> int:
    """easy/medium/hard (any case) -> 1/2/3; anything else is medium."""
    if not isinstance(label, str):
        return DEFAULT_LEVEL
    return DIFFICULTY_LEVELS.get(label.strip().lower(), DEFAULT_LEVEL)


def question_to_dict(question: Question) -> dict:
    return {
        "id": question.id,
        "difficulty": LEVEL_NAMES.get(question.level, "medium"),
        "topic": question.topic,
        "question": question.prompt,
        "options": json.loads(question.options_json),
        "answer": question.answer_index,
        "explanation": question.explanation,
    }


async def select_ranked_questions(
    db: AsyncSession,
    user_id: int | None,
    difficulty: str | None,
    count: int,
    rng: random.Random | None = None,
) -> list[Question]:
    """Pick `count` questions at the mapped level.

    Unseen questions come first; when they run out the set is filled with
    previously-missed questions, then with other seen ones. Returns fewer than
    `count` only when the level itself holds fewer questions.
    """
    if user_id is None:
        raise ValidationError("User ID is required")
    rng = rng or random.Random()

    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")

    level = map_difficulty(difficulty)
    result = await db.execute(select(Question).where(Question.level == level).order_by(Question.id))
    pool = list(result.scalars().all())

    result = await db.execute(
        select(UserProgress.question_id, UserProgress.correct).where(UserProgress.user_id == user_id)
    )
    seen = {question_id: correct for (question_id, correct) in result.all()}

    unseen = [q for q in pool if q.id not in seen]
    if len(unseen) >= count:
        return rng.sample(unseen, count)

    missed = [q for q in pool if q.id in seen and not seen[q.id]]
    answered = [q for q in pool if seen.get(q.id)]
    rng.shuffle(unseen)
    rng.shuffle(missed)
    rng.shuffle(answered)
    return (unseen + missed + answered)[:count]
