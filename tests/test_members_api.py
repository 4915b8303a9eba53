"""회원 API 테스트.

Member API tests — CRUD, team change, username lookup, dynamic search,
and statistics endpoints.
"""

from httpx import AsyncClient

URL = "/api/v1/members"


class TestMemberCreate:
    """회원 생성 테스트."""

    async def test_create_with_team(self, client: AsyncClient, teams):
        res = await client.post(URL, json={
            "username": "member9",
            "age": 19,
            "team_id": teams["teamA"].id,
        })
        assert res.status_code == 201
        data = res.json()
        assert data["username"] == "member9"
        assert data["team_id"] == teams["teamA"].id
        assert data["team_name"] == "teamA"

    async def test_create_without_team(self, client: AsyncClient):
        res = await client.post(URL, json={"username": "solo"})
        assert res.status_code == 201
        data = res.json()
        assert data["age"] == 0
        assert data["team_id"] is None

    async def test_create_with_missing_team(self, client: AsyncClient):
        """존재하지 않는 팀으로 생성 시 400."""
        res = await client.post(URL, json={"username": "x", "team_id": 999})
        assert res.status_code == 400

    async def test_create_negative_age(self, client: AsyncClient):
        res = await client.post(URL, json={"username": "x", "age": -1})
        assert res.status_code == 422


class TestMemberReadUpdateDelete:
    """회원 조회/수정/삭제 테스트."""

    async def test_get_member(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/{members[2].id}")
        assert res.status_code == 200
        assert res.json()["team_name"] == "teamB"

    async def test_get_member_not_found(self, client: AsyncClient):
        res = await client.get(f"{URL}/999")
        assert res.status_code == 404

    async def test_update_age(self, client: AsyncClient, members):
        """보낸 필드만 수정된다."""
        res = await client.patch(f"{URL}/{members[0].id}", json={"age": 11})
        assert res.status_code == 200
        data = res.json()
        assert data["age"] == 11
        assert data["username"] == "member1"
        assert data["team_name"] == "teamA"

    async def test_update_age_null_rejected(self, client: AsyncClient, members):
        """나이를 null로 보내면 422, 기존 값은 유지된다."""
        res = await client.patch(f"{URL}/{members[0].id}", json={"age": None})
        assert res.status_code == 422

        res = await client.get(f"{URL}/{members[0].id}")
        assert res.json()["age"] == 10

    async def test_update_username_only(self, client: AsyncClient, members):
        """나이를 생략하면 나이는 그대로."""
        res = await client.patch(f"{URL}/{members[1].id}", json={"username": "renamed"})
        assert res.status_code == 200
        assert res.json()["username"] == "renamed"
        assert res.json()["age"] == 20

    async def test_update_not_found(self, client: AsyncClient):
        res = await client.patch(f"{URL}/999", json={"age": 1})
        assert res.status_code == 404

    async def test_change_team(self, client: AsyncClient, teams, members):
        res = await client.put(
            f"{URL}/{members[0].id}/team", json={"team_id": teams["teamB"].id}
        )
        assert res.status_code == 200
        assert res.json()["team_name"] == "teamB"

        res = await client.get(f"/api/v1/teams/{teams['teamB'].id}")
        assert [m["username"] for m in res.json()["members"]] == ["member1", "member3", "member4"]

        res = await client.get(f"/api/v1/teams/{teams['teamA'].id}")
        assert [m["username"] for m in res.json()["members"]] == ["member2"]

    async def test_change_team_missing_team(self, client: AsyncClient, members):
        res = await client.put(f"{URL}/{members[0].id}/team", json={"team_id": 999})
        assert res.status_code == 400

    async def test_delete_member(self, client: AsyncClient, members):
        res = await client.delete(f"{URL}/{members[3].id}")
        assert res.status_code == 204

        res = await client.get(f"{URL}/{members[3].id}")
        assert res.status_code == 404


class TestMemberLookup:
    """회원명 조회 테스트."""

    async def test_lookup(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/lookup", params={"username": "member2"})
        assert res.status_code == 200
        assert res.json()["age"] == 20

    async def test_lookup_not_found(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/lookup", params={"username": "ghost"})
        assert res.status_code == 404

    async def test_lookup_not_unique(self, client: AsyncClient, members):
        """같은 이름의 회원이 여럿이면 409."""
        await client.post(URL, json={"username": "member2", "age": 22})
        res = await client.get(f"{URL}/lookup", params={"username": "member2"})
        assert res.status_code == 409

    async def test_by_username_list(self, client: AsyncClient, members):
        await client.post(URL, json={"username": "member2", "age": 22})
        res = await client.get(f"{URL}/by-username/member2")
        assert res.status_code == 200
        assert [m["age"] for m in res.json()] == [20, 22]

    async def test_by_username_empty(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/by-username/ghost")
        assert res.json() == []


class TestMemberSearch:
    """동적 조건 검색 테스트."""

    async def test_search_all(self, client: AsyncClient, members):
        res = await client.get(URL)
        assert res.status_code == 200
        assert len(res.json()) == 4

    async def test_search_by_team(self, client: AsyncClient, members):
        res = await client.get(URL, params={"team_name": "teamB"})
        assert [m["username"] for m in res.json()] == ["member3", "member4"]

    async def test_search_age_range(self, client: AsyncClient, members):
        res = await client.get(URL, params={"age_goe": 20, "age_loe": 30})
        assert [m["age"] for m in res.json()] == [20, 30]

    async def test_blank_username_ignored(self, client: AsyncClient, members):
        res = await client.get(URL, params={"username": " "})
        assert len(res.json()) == 4

    async def test_search_row_shape(self, client: AsyncClient, teams, members):
        res = await client.get(URL, params={"username": "member1"})
        assert res.json() == [{
            "member_id": members[0].id,
            "username": "member1",
            "age": 10,
            "team_id": teams["teamA"].id,
            "team_name": "teamA",
        }]


class TestMemberStatistics:
    """통계 엔드포인트 테스트."""

    async def test_statistics(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/statistics")
        assert res.status_code == 200
        assert res.json() == {
            "count": 4,
            "age_sum": 100,
            "age_avg": 25.0,
            "age_max": 40,
            "age_min": 10,
        }

    async def test_age_bands(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/age-bands")
        assert [b["band"] for b in res.json()] == ["0-20", "0-20", "21-30", "other"]
