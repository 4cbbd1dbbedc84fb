"""User stats endpoint tests: reads, leaderboards and authenticated updates."""

from datetime import timedelta

from httpx import AsyncClient
from pydantic import TypeAdapter

from tests.conftest import register

duration = TypeAdapter(timedelta)


async def put_score(client: AsyncClient, user_id: int, points: int) -> dict:
    response = await client.put(f"/userInfo/{user_id}/score", json={"newScore": points})
    assert response.status_code == 200, response.text
    return response.json()


class TestUserInfo:
    async def test_unknown_user_is_404(self, client: AsyncClient):
        response = await client.get("/userInfo/999")
        assert response.status_code == 404
        assert response.json()["detail"] == "User not found."

    async def test_non_integer_id_is_422(self, client: AsyncClient):
        response = await client.get("/userInfo/abc")
        assert response.status_code == 422

    async def test_created_at_is_utc(self, client: AsyncClient, registered_user: dict):
        response = await client.get(f"/userInfo/{registered_user['userId']}")
        assert response.json()["createdAt"].endswith("Z")


class TestScore:
    async def test_score_accumulates_and_tracks_max(self, authed_client: AsyncClient, registered_user: dict):
        user_id = registered_user["userId"]
        await put_score(authed_client, user_id, 100)
        assert await put_score(authed_client, user_id, -20) == {"userId": user_id, "score": 80}

        info = (await authed_client.get(f"/userInfo/{user_id}")).json()
        assert info["score"] == 80
        assert info["maxScore"] == 100

        assert (await put_score(authed_client, user_id, 50))["score"] == 130
        info = (await authed_client.get(f"/userInfo/{user_id}")).json()
        assert info["maxScore"] == 130
        assert info["monthMaxScore"] != "noScore"

        assert (await put_score(authed_client, user_id, -10))["score"] == 120
        info = (await authed_client.get(f"/userInfo/{user_id}")).json()
        assert info["maxScore"] == 130

    async def test_score_can_go_negative_without_touching_max(self, authed_client: AsyncClient, registered_user: dict):
        user_id = registered_user["userId"]
        assert (await put_score(authed_client, user_id, -5))["score"] == -5
        info = (await authed_client.get(f"/userInfo/{user_id}")).json()
        assert info["maxScore"] == 0
        assert info["monthMaxScore"] == "noScore"

    async def test_unknown_user_is_404(self, authed_client: AsyncClient):
        response = await authed_client.put("/userInfo/999/score", json={"newScore": 1})
        assert response.status_code == 404

    async def test_missing_body_field_is_422(self, authed_client: AsyncClient, registered_user: dict):
        response = await authed_client.put(f"/userInfo/{registered_user['userId']}/score", json={})
        assert response.status_code == 422


class TestStreak:
    async def test_streak_sets_and_tracks_all_time(self, authed_client: AsyncClient, registered_user: dict):
        user_id = registered_user["userId"]
        response = await authed_client.put(f"/userInfo/{user_id}/streak", json={"newStreak": 5})
        assert response.status_code == 200
        assert response.json() == {"userId": user_id, "streak": 5}

        await authed_client.put(f"/userInfo/{user_id}/streak", json={"newStreak": 2})
        info = (await authed_client.get(f"/userInfo/{user_id}")).json()
        assert info["streak"] == 2
        assert info["allTimeStreak"] == 5

    async def test_negative_streak_is_422(self, authed_client: AsyncClient, registered_user: dict):
        response = await authed_client.put(
            f"/userInfo/{registered_user['userId']}/streak", json={"newStreak": -1}
        )
        assert response.status_code == 422


class TestTimeMeasured:
    async def test_time_measured_tracks_max(self, authed_client: AsyncClient, registered_user: dict):
        user_id = registered_user["userId"]
        response = await authed_client.put(
            f"/userInfo/{user_id}/timeMeasured", json={"newTimeMeasured": "01:30:00"}
        )
        assert response.status_code == 200
        assert duration.validate_python(response.json()["timeMeasured"]) == timedelta(hours=1, minutes=30)

        await authed_client.put(f"/userInfo/{user_id}/timeMeasured", json={"newTimeMeasured": "PT20M"})
        info = (await authed_client.get(f"/userInfo/{user_id}")).json()
        assert duration.validate_python(info["timeMeasured"]) == timedelta(minutes=20)
        assert duration.validate_python(info["maxTime"]) == timedelta(hours=1, minutes=30)
        assert info["monthMaxTime"] != "noRecord"

    async def test_all_time_measured_is_set(self, authed_client: AsyncClient, registered_user: dict):
        user_id = registered_user["userId"]
        response = await authed_client.put(
            f"/userInfo/{user_id}/allTimeMeasured", json={"newAllTimeMeasured": "PT10H"}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["userId"] == user_id
        assert duration.validate_python(body["allTimeMeasured"]) == timedelta(hours=10)

    async def test_negative_duration_is_422(self, authed_client: AsyncClient, registered_user: dict):
        response = await authed_client.put(
            f"/userInfo/{registered_user['userId']}/timeMeasured", json={"newTimeMeasured": -3600}
        )
        assert response.status_code == 422


class TestAuthRequired:
    async def test_put_without_token_is_rejected(self, client: AsyncClient, registered_user: dict):
        response = await client.put(f"/userInfo/{registered_user['userId']}/score", json={"newScore": 1})
        assert response.status_code in (401, 403)

    async def test_put_with_garbage_token_is_401(self, client: AsyncClient, registered_user: dict):
        response = await client.put(
            f"/userInfo/{registered_user['userId']}/streak",
            json={"newStreak": 1},
            headers={"Authorization": "Bearer not-a-jwt"},
        )
        assert response.status_code == 401

    async def test_reads_do_not_need_token(self, client: AsyncClient, registered_user: dict):
        response = await client.get(f"/userInfo/{registered_user['userId']}")
        assert response.status_code == 200


class TestLeaderboards:
    async def test_empty_leaderboard_is_404(self, client: AsyncClient):
        response = await client.get("/userInfo/score")
        assert response.status_code == 404
        assert response.json()["detail"] == "No users found."

    async def test_ordered_by_score_descending(self, client: AsyncClient):
        alice = await register(client)
        bob = await register(client, username="bob", email="bob@example.com")
        carol = await register(client, username="carol", email="carol@example.com")
        client.headers["Authorization"] = f"Bearer {alice['token']}"
        await put_score(client, alice["userId"], 10)
        await put_score(client, bob["userId"], 30)
        await put_score(client, carol["userId"], 20)

        response = await client.get("/userInfo/score")
        assert response.status_code == 200
        assert [u["username"] for u in response.json()] == ["bob", "carol", "alice"]

    async def test_max_score_board_uses_best_ever(self, client: AsyncClient):
        alice = await register(client)
        bob = await register(client, username="bob", email="bob@example.com")
        client.headers["Authorization"] = f"Bearer {alice['token']}"
        await put_score(client, alice["userId"], 50)
        await put_score(client, alice["userId"], -45)
        await put_score(client, bob["userId"], 20)

        by_score = [u["username"] for u in (await client.get("/userInfo/score")).json()]
        by_max = [u["username"] for u in (await client.get("/userInfo/maxScore")).json()]
        assert by_score == ["bob", "alice"]
        assert by_max == ["alice", "bob"]

    async def test_streak_boards(self, client: AsyncClient):
        alice = await register(client)
        bob = await register(client, username="bob", email="bob@example.com")
        client.headers["Authorization"] = f"Bearer {alice['token']}"
        await client.put(f"/userInfo/{alice['userId']}/streak", json={"newStreak": 9})
        await client.put(f"/userInfo/{alice['userId']}/streak", json={"newStreak": 1})
        await client.put(f"/userInfo/{bob['userId']}/streak", json={"newStreak": 4})

        by_streak = [u["username"] for u in (await client.get("/userInfo/streak")).json()]
        by_all_time = [u["username"] for u in (await client.get("/userInfo/allTimeStreak")).json()]
        assert by_streak == ["bob", "alice"]
        assert by_all_time == ["alice", "bob"]

    async def test_ties_go_to_older_account(self, client: AsyncClient):
        await register(client)
        await register(client, username="bob", email="bob@example.com")
        response = await client.get("/userInfo/score")
        assert [u["username"] for u in response.json()] == ["alice", "bob"]

    async def test_leaderboard_rows_hide_private_fields(self, client: AsyncClient, registered_user: dict):
        row = (await client.get("/userInfo/maxScore")).json()[0]
        assert row["userId"] == registered_user["userId"]
        assert "email" not in row
        assert "passwordHash" not in row
