"""Local in-memory question bank used when the server cannot supply a ranked test."""
import json
import random
from dataclasses import dataclass, field
from pathlib import Path

from app.client.ramp import Difficulty


@dataclass(frozen=True)
class Question:
    id: str
    difficulty: Difficulty
    topic: str
    question: str
    options: tuple[str, ...]
    answer: int
    explanation: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Question":
        return cls(
            id=str(data["id"]),
            difficulty=Difficulty.parse(data.get("difficulty")),
            topic=data.get("topic", ""),
            question=data["question"],
            options=tuple(data["options"]),
            answer=int(data["answer"]),
            explanation=data.get("explanation", ""),
        )

    def is_correct(self, choice: int) -> bool:
        return choice == self.answer


@dataclass
class LocalQuestionBank:
    partitions: dict[Difficulty, list[Question]] = field(default_factory=dict)

    @classmethod
    def from_questions(cls, questions: list[Question]) -> "LocalQuestionBank":
        bank = cls({level: [] for level in Difficulty})
        for q in questions:
            bank.partitions[q.difficulty].append(q)
        return bank

    @classmethod
    def from_file(cls, path: str | Path) -> "LocalQuestionBank":
        with open(path, encoding="utf-8") as fh:
            return cls.from_questions([Question.from_dict(row) for row in json.load(fh)])

    def __len__(self) -> int:
        return sum(len(qs) for qs in self.partitions.values())

    def pick(
        self,
        difficulty: Difficulty,
        count: int,
        topics: set[str] | None = None,
        rng: random.Random | None = None,
    ) -> list[Question]:
        """Uniform sample without replacement from one difficulty.

        When that partition (after topic filtering) is too small the set is
        topped up from the other difficulties, so a full set comes back as long
        as the bank holds `count` questions overall.
        """
        rng = rng or random.Random()

        def eligible(level: Difficulty) -> list[Question]:
            qs = self.partitions.get(level, [])
            if topics:
                qs = [q for q in qs if q.topic in topics]
            return qs

        primary = eligible(difficulty)
        if len(primary) >= count:
            return rng.sample(primary, count)

        others = [q for level in Difficulty if level != difficulty for q in eligible(level)]
        if topics and len(primary) + len(others) < count:
            # topic filter too narrow; ignore it rather than return a short set
            return self.pick(difficulty, count, rng=rng)
        chosen = list(primary)
        rng.shuffle(chosen)
        chosen.extend(rng.sample(others, min(count - len(chosen), len(others))))
        return chosen
