from app.services.ranking import get_leaderboard, submit_ranked_result, tier_of
from app.services.seeding import seed_questions

__all__ = ["get_leaderboard", "submit_ranked_result", "tier_of", "seed_questions"]
