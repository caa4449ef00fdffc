"""User model: account identity plus cumulative quiz stats."""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.db.session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(100), unique=True, nullable=True, index=True)
    hashed_password = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)

    total_score = Column(Integer, nullable=False, default=0)
    hearts = Column(Integer, nullable=False, default=3)
    streak = Column(Integer, nullable=False, default=0)
    level = Column(Integer, nullable=False, default=1)
    xp = Column(Integer, nullable=False, default=0)
    # Overwritten with the client's cumulative total on every ranked submission
    rank_points = Column(Integer, nullable=True, default=0)

    progress = relationship("UserProgress", back_populates="user", uselist=True)
    ranked_tests = relationship("RankedTest", back_populates="user", order_by="RankedTest.id")
