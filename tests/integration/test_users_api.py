"""Integration tests for profile stats and question progress."""
import pytest
from httpx import AsyncClient


class TestProfile:
    async def test_get_user(self, client: AsyncClient, make_user):
        user = await make_user("ada", rank_points=120)
        response = await client.get(f"/api/user/{user.id}")
        assert response.status_code == 200
        data = response.json()["user"]
        assert data["rankPoints"] == 120
        assert data["tier"] == "Silver"

    async def test_unknown_user_404(self, client: AsyncClient):
        assert (await client.get("/api/user/404")).status_code == 404

    async def test_update_stats_overwrites_given_fields(self, client: AsyncClient, make_user):
        user = await make_user("ada")
        response = await client.post(
            "/api/update-stats",
            json={"userId": user.id, "totalScore": 340, "xp": 90, "hearts": 1},
        )
        assert response.status_code == 200
        data = response.json()["user"]
        assert (data["totalScore"], data["xp"], data["hearts"]) == (340, 90, 1)
        assert data["streak"] == 0
        assert data["level"] == 1

    async def test_update_stats_requires_user_id(self, client: AsyncClient):
        response = await client.post("/api/update-stats", json={"xp": 5})
        assert response.status_code == 400

    @pytest.mark.parametrize("field", ["totalScore", "hearts", "streak", "level", "xp"])
    async def test_update_stats_rejects_out_of_range_400(self, client: AsyncClient, make_user, field):
        user = await make_user("ada")
        response = await client.post("/api/update-stats", json={"userId": user.id, field: 2**70})
        assert response.status_code == 400
        assert response.json()["success"] is False

        data = (await client.get(f"/api/user/{user.id}")).json()["user"]
        assert data["level"] == 1

    async def test_update_stats_does_not_touch_rank_points(self, client: AsyncClient, make_user):
        user = await make_user("ada", rank_points=77)
        await client.post("/api/update-stats", json={"userId": user.id, "rankPoints": 5000, "xp": 1})
        assert (await client.get(f"/api/rank/{user.id}")).json()["rankPoints"] == 77


class TestProgress:
    async def test_records_attempts_and_latest_result(self, client: AsyncClient, make_user):
        user = await make_user("ada")
        first = await client.post("/api/progress", json={"userId": user.id, "questionId": "py-easy-001", "correct": False})
        assert first.status_code == 200
        assert first.json()["progress"]["attempts"] == 1

        second = await client.post("/api/progress", json={"userId": user.id, "questionId": "py-easy-001", "correct": True})
        progress = second.json()["progress"]
        assert progress["attempts"] == 2
        assert progress["correct"] is True
        assert progress["questionId"] == "py-easy-001"

    async def test_list_progress(self, client: AsyncClient, make_user):
        user = await make_user("ada")
        for qid in ("py-hard-002", "py-easy-004"):
            await client.post("/api/progress", json={"userId": user.id, "questionId": qid, "correct": True})

        response = await client.get(f"/api/progress/{user.id}")
        assert response.status_code == 200
        assert [row["questionId"] for row in response.json()["progress"]] == ["py-easy-004", "py-hard-002"]

    async def test_progress_unknown_user_404(self, client: AsyncClient):
        response = await client.post("/api/progress", json={"userId": 999, "questionId": "py-easy-001", "correct": True})
        assert response.status_code == 404

    async def test_seen_questions_are_avoided(self, client: AsyncClient, make_user):
        user = await make_user("ada")
        seen = {f"py-hard-{i:03d}" for i in range(1, 3)}
        for qid in seen:
            await client.post("/api/progress", json={"userId": user.id, "questionId": qid, "correct": True})

        data = (await client.post("/api/ranked-questions", json={"userId": user.id, "difficulty": "hard"})).json()
        assert seen.isdisjoint(q["id"] for q in data["questions"])


class TestHealth:
    async def test_health(self, client: AsyncClient):
        assert (await client.get("/health")).json() == {"status": "ok"}
