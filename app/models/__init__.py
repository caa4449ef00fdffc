from app.models.user import User
from app.models.progress import UserProgress
from app.models.ranked_test import RankedTest
from app.models.password_reset import PasswordResetToken
from app.models.question import Question

__all__ = ["User", "UserProgress", "RankedTest", "PasswordResetToken", "Question"]
