"""Question model: one trivia question with difficulty level and options (JSON)."""
from sqlalchemy import Column, Integer, String, Text

from app.db.session import Base

# options stored as a JSON string so SQLite and PostgreSQL share one column type


class Question(Base):
    __tablename__ = "questions"

    id = Column(String(100), primary_key=True)  # e.g. py-easy-001
    level = Column(Integer, nullable=False, index=True)  # 1 easy, 2 medium, 3 hard
    topic = Column(String(64), nullable=False)
    prompt = Column(Text, nullable=False)
    options_json = Column(Text, nullable=False)
    answer_index = Column(Integer, nullable=False)  # 0-based index into options
    explanation = Column(Text, nullable=False, default="")
