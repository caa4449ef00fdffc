"""Seed the question store from the bundled JSON bank (idempotent)."""
import json
from pathlib import Path

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.question import Question
from app.services.questions import DIFFICULTY_LEVELS

logger = structlog.get_logger(__name__)


def load_question_rows(path: str | Path) -> list[dict]:
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)


async def seed_questions(db: AsyncSession, path: str | Path) -> int:
    """Insert bank questions that are not stored yet; return how many were added."""
    rows = load_question_rows(path)
    result = await db.execute(select(Question.id))
    existing = set(result.scalars().all())

    added = 0
    for row in rows:
        if row["id"] in existing:
            continue
        db.add(
            Question(
                id=row["id"],
                level=DIFFICULTY_LEVELS[row["difficulty"]],
                topic=row["topic"],
                prompt=row["question"],
                options_json=json.dumps(row["options"]),
                answer_index=row["answer"],
                explanation=row.get("explanation", ""),
            )
        )
        added += 1

    if added:
        await db.commit()
    logger.info("questions_seeded", added=added, total=len(rows))
    return added
