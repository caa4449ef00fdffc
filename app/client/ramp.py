"""Client-side difficulty ramp driven by running accuracy (advisory only)."""
import enum

ESCALATE_AT = 0.7
DEESCALATE_AT = 0.3
DEESCALATE_MIN_ANSWERED = 2


class Difficulty(str, enum.Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, label: str | None) -> "Difficulty":
        """Case-insensitive; unknown labels are MEDIUM."""
        try:
            return cls((label or "").strip().lower())
        except ValueError:
            return cls.MEDIUM


class DifficultyRamp:
    """Starts at MEDIUM; re-evaluated after every answer.

    accuracy >= 0.7 moves to HARD, accuracy <= 0.3 (with at least two answers)
    moves to EASY, anything in between keeps the current level.
    """

    def __init__(self, start: Difficulty = Difficulty.MEDIUM):
        self.current = start
        self.answered = 0
        self.correct = 0

    @property
    def accuracy(self) -> float:
        return self.correct / self.answered if self.answered else 0.0

    def record(self, correct: bool) -> Difficulty:
        self.answered += 1
        if correct:
            self.correct += 1

        if self.accuracy >= ESCALATE_AT:
            self.current = Difficulty.HARD
        elif self.accuracy <= DEESCALATE_AT and self.answered >= DEESCALATE_MIN_ANSWERED:
            self.current = Difficulty.EASY
        return self.current
