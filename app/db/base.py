"""SQLAlchemy declarative base and model imports for Alembic."""
from app.db.session import Base, get_engine

# Import all models so Alembic can see them
from app.models.password_reset import PasswordResetToken  # noqa: F401
from app.models.progress import UserProgress  # noqa: F401
from app.models.question import Question  # noqa: F401
from app.models.ranked_test import RankedTest  # noqa: F401
from app.models.user import User  # noqa: F401

__all__ = ["Base", "User", "UserProgress", "RankedTest", "PasswordResetToken", "Question", "create_tables"]


async def create_tables() -> None:
    """Create any missing tables (dev/test convenience; production uses Alembic)."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
