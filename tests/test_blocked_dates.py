"""차단 날짜 API 테스트.

Blocked date API tests — Blocking single dates and ranges, skipping dates
already blocked, unblocking, and the calendar lookups shared by every role.
"""

from httpx import AsyncClient

from tests.conftest import auth_header

URL = "/api/v1/admin/blocked-dates"
CALENDAR_URL = "/api/v1/calendar"


class TestBlockDates:
    """날짜 차단 테스트."""

    async def test_block_range(self, client: AsyncClient, admin_token):
        """2024-06-10 ~ 2024-06-12 차단 → 3개 생성."""
        res = await client.post(URL, json={
            "start_date": "2024-06-10",
            "end_date": "2024-06-12",
            "reason": "manutenção",
        }, headers=auth_header(admin_token))
        assert res.status_code == 201
        data = res.json()
        assert [b["date"] for b in data["created"]] == ["2024-06-10", "2024-06-11", "2024-06-12"]
        assert all(b["reason"] == "manutenção" for b in data["created"])
        assert data["skipped"] == []

    async def test_block_single_date(self, client: AsyncClient, admin_token):
        res = await client.post(URL, json={"start_date": "2024-12-25"}, headers=auth_header(admin_token))
        assert res.status_code == 201
        created = res.json()["created"]
        assert len(created) == 1
        assert created[0]["reason"] is None

    async def test_already_blocked_dates_skipped(self, client: AsyncClient, admin_token):
        """이미 차단된 날짜는 건너뜀."""
        await client.post(URL, json={"start_date": "2024-06-11"}, headers=auth_header(admin_token))
        res = await client.post(URL, json={
            "start_date": "2024-06-10",
            "end_date": "2024-06-12",
        }, headers=auth_header(admin_token))
        assert res.status_code == 201
        assert [b["date"] for b in res.json()["created"]] == ["2024-06-10", "2024-06-12"]
        assert res.json()["skipped"] == ["2024-06-11"]

    async def test_end_before_start(self, client: AsyncClient, admin_token):
        res = await client.post(URL, json={
            "start_date": "2024-06-12",
            "end_date": "2024-06-10",
        }, headers=auth_header(admin_token))
        assert res.status_code == 422

    async def test_range_too_long(self, client: AsyncClient, admin_token):
        """최대 기간 초과 시 400, 아무 날짜도 차단되지 않음."""
        res = await client.post(URL, json={
            "start_date": "2024-01-01",
            "end_date": "9999-12-31",
        }, headers=auth_header(admin_token))
        assert res.status_code == 400

        res = await client.get(URL, headers=auth_header(admin_token))
        assert res.json() == []

    async def test_full_year_range_accepted(self, client: AsyncClient, admin_token):
        """윤년 전체(366일)는 허용."""
        res = await client.post(URL, json={
            "start_date": "2024-01-01",
            "end_date": "2024-12-31",
        }, headers=auth_header(admin_token))
        assert res.status_code == 201
        assert len(res.json()["created"]) == 366

    async def test_store_forbidden(self, client: AsyncClient, store_token):
        """매장 권한으로 차단 시 403."""
        res = await client.post(URL, json={"start_date": "2024-06-10"}, headers=auth_header(store_token))
        assert res.status_code == 403


class TestUnblockAndList:
    """차단 해제 및 조회 테스트."""

    async def test_list_in_range(self, client: AsyncClient, admin_token):
        await client.post(URL, json={
            "start_date": "2024-06-10",
            "end_date": "2024-06-14",
        }, headers=auth_header(admin_token))

        res = await client.get(URL, params={"start": "2024-06-11", "end": "2024-06-12"}, headers=auth_header(admin_token))
        assert res.status_code == 200
        assert [b["date"] for b in res.json()] == ["2024-06-11", "2024-06-12"]

    async def test_unblock(self, client: AsyncClient, admin_token):
        await client.post(URL, json={"start_date": "2024-06-10"}, headers=auth_header(admin_token))

        res = await client.delete(f"{URL}/2024-06-10", headers=auth_header(admin_token))
        assert res.status_code == 204

        res = await client.get(URL, headers=auth_header(admin_token))
        assert res.json() == []

    async def test_unblock_not_blocked(self, client: AsyncClient, admin_token):
        res = await client.delete(f"{URL}/2024-06-10", headers=auth_header(admin_token))
        assert res.status_code == 404

    async def test_calendar_visible_to_employee(self, client: AsyncClient, admin_token, employee_token):
        """직원도 차단 날짜를 조회할 수 있음."""
        await client.post(URL, json={
            "start_date": "2024-06-10",
            "end_date": "2024-06-12",
            "reason": "manutenção",
        }, headers=auth_header(admin_token))

        res = await client.get(f"{CALENDAR_URL}/blocked-dates", headers=auth_header(employee_token))
        assert res.status_code == 200
        assert len(res.json()) == 3

        res = await client.get(f"{CALENDAR_URL}/dates/2024-06-11", headers=auth_header(employee_token))
        assert res.json() == {"date": "2024-06-11", "is_blocked": True, "reason": "manutenção"}

        res = await client.get(f"{CALENDAR_URL}/dates/2024-06-13", headers=auth_header(employee_token))
        assert res.json()["is_blocked"] is False

    async def test_calendar_requires_auth(self, client: AsyncClient):
        res = await client.get(f"{CALENDAR_URL}/blocked-dates")
        assert res.status_code == 401
