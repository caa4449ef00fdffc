"""HTTP client for the PyTrivia API (httpx)."""
import httpx
import structlog

from app.client.bank import Question
from app.client.ramp import Difficulty

logger = structlog.get_logger(__name__)


class TriviaAPIError(Exception):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class TriviaClient:
    def __init__(self, base_url: str = "http://localhost:8000", client: httpx.Client | None = None, timeout: float = 10.0):
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "TriviaClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, url: str, **kwargs) -> dict:
        response = self._client.request(method, url, **kwargs)
        try:
            data = response.json()
        except ValueError:
            data = {}
        if response.is_error:
            raise TriviaAPIError(response.status_code, data.get("message", response.reason_phrase))
        return data

    def get_rank(self, user_id: int) -> int:
        return int(self._request("GET", f"/api/rank/{user_id}")["rankPoints"])

    def get_leaderboard(self) -> list[dict]:
        return self._request("GET", "/api/leaderboard")["leaderboard"]

    def fetch_ranked_questions(self, user_id: int, difficulty: Difficulty) -> list[Question] | None:
        """Server-picked questions, or None when the server cannot provide them."""
        try:
            data = self._request(
                "POST", "/api/ranked-questions", json={"userId": user_id, "difficulty": difficulty.value}
            )
        except (httpx.HTTPError, TriviaAPIError) as exc:
            logger.warning("ranked_questions_unavailable", user_id=user_id, error=str(exc))
            return None
        if not data.get("success") or not data.get("questions"):
            logger.info("ranked_questions_unavailable", user_id=user_id, reason=data.get("message"))
            return None
        return [Question.from_dict(row) for row in data["questions"]]

    def submit_ranked(self, user_id: int, score: int, accuracy: int, total_points: int) -> int:
        data = self._request(
            "POST",
            "/api/submit-ranked",
            json={"userId": user_id, "score": score, "accuracy": accuracy, "totalPoints": total_points},
        )
        return int(data["updatedPoints"])
