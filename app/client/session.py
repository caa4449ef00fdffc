"""Explicit quiz state: questions, position, score and the difficulty ramp."""
from dataclasses import dataclass, field

from app.client.bank import Question
from app.client.ramp import Difficulty, DifficultyRamp

POINTS_PER_CORRECT = {
    Difficulty.EASY: 5,
    Difficulty.MEDIUM: 10,
    Difficulty.HARD: 15,
}


@dataclass
class AnswerRecord:
    question_id: str
    choice: int
    correct: bool


class QuizFinishedError(RuntimeError):
    pass


@dataclass
class QuizSession:
    questions: list[Question]
    difficulty: Difficulty = Difficulty.MEDIUM
    selected_topics: set[str] = field(default_factory=set)
    source: str = "server"  # server | local
    index: int = 0
    score: int = 0
    answers: list[AnswerRecord] = field(default_factory=list)
    ramp: DifficultyRamp = field(default_factory=DifficultyRamp)

    @property
    def finished(self) -> bool:
        return self.index >= len(self.questions)

    @property
    def current_question(self) -> Question | None:
        return None if self.finished else self.questions[self.index]

    @property
    def correct_count(self) -> int:
        return sum(1 for a in self.answers if a.correct)

    @property
    def accuracy(self) -> int:
        """Whole-number percentage of correct answers (0-100)."""
        if not self.answers:
            return 0
        return round(self.correct_count * 100 / len(self.answers))

    def answer(self, choice: int) -> bool:
        """Answer the current question and advance; returns whether it was right."""
        question = self.current_question
        if question is None:
            raise QuizFinishedError("All questions have been answered")

        correct = question.is_correct(choice)
        self.answers.append(AnswerRecord(question.id, choice, correct))
        if correct:
            self.score += POINTS_PER_CORRECT[question.difficulty]
        self.ramp.record(correct)
        self.index += 1
        return correct
