"""수령 예약 API 테스트 — 예약, 확인, 취소, 조회.

Pickup API tests — Scheduling with quota/blocked-date/capacity checks,
store confirmation and cancellation by token, and the listings of every role.
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy import select

from app.models.store import Store, StoreCapacity
from app.repositories.store_capacity_repository import store_capacity_repository
from tests.conftest import auth_header, future_date, make_token, make_user

EMPLOYEE_URL = "/api/v1/employee/pickups"
STORE_URL = "/api/v1/store/pickups"
ADMIN_URL = "/api/v1/admin/pickups"


async def schedule(client: AsyncClient, token: str, store_id, day, quantity: int = 1, **extra):
    return await client.post(EMPLOYEE_URL, json={
        "store_id": str(store_id),
        "scheduled_date": str(day),
        "quantity": quantity,
        **extra,
    }, headers=auth_header(token))


async def capacity_row(db, store_id, day) -> StoreCapacity | None:
    row = await store_capacity_repository.get_for_date(db, store_id, day)
    if row is not None:
        await db.refresh(row)
    return row


@pytest_asyncio.fixture
async def scheduled(client: AsyncClient, employee_token, store) -> dict:
    """수량 2로 예약된 수령 (A pickup of quantity 2, one week ahead)."""
    res = await schedule(client, employee_token, store.id, future_date(), quantity=2)
    assert res.status_code == 201
    return res.json()


# ===== Scheduling =====

class TestSchedulePickup:
    """수령 예약 테스트."""

    async def test_schedule_updates_quota_and_capacity(self, client: AsyncClient, db, employee_token, employee, store):
        """한도 6, 수용량 10/예약 3 에서 수량 2 예약 → 사용량 2, 예약 4."""
        day = future_date()
        db.add(StoreCapacity(store_id=store.id, date=day, max_capacity=10, used_capacity=3))
        await db.flush()

        res = await schedule(client, employee_token, store.id, day, quantity=2, observations="  caixa grande ")
        assert res.status_code == 201
        data = res.json()
        assert data["status"] == "scheduled"
        assert data["quantity"] == 2
        assert data["observations"] == "caixa grande"
        assert data["store_name"] == "Loja Teste"
        assert data["employee_name"] == "Maria Silva"
        assert len(data["token"]) == 10

        await db.refresh(employee)
        assert employee.current_month_pickups == 2
        row = await capacity_row(db, store.id, day)
        assert row.used_capacity == 4

    async def test_first_booking_creates_row_pinned_to_default(self, client: AsyncClient, db, employee_token, store):
        """첫 예약은 매장 기본값으로 행 생성."""
        day = future_date()
        res = await schedule(client, employee_token, store.id, day)
        assert res.status_code == 201

        row = await capacity_row(db, store.id, day)
        assert row.used_capacity == 1
        assert row.max_capacity == 10

    async def test_capacity_counts_bookings_not_quantity(self, client: AsyncClient, db, employee_token, store):
        """수용량은 수량이 아닌 예약 건수 기준."""
        day = future_date()
        await schedule(client, employee_token, store.id, day, quantity=3)

        row = await capacity_row(db, store.id, day)
        assert row.used_capacity == 1

    async def test_tokens_are_unique(self, client: AsyncClient, employee_token, store):
        first = await schedule(client, employee_token, store.id, future_date())
        second = await schedule(client, employee_token, store.id, future_date())
        assert first.json()["token"] != second.json()["token"]

    async def test_quota_exceeded(self, client: AsyncClient, db, employee_token, employee, store):
        """한도 초과 시 400, 아무것도 변경되지 않음."""
        employee.current_month_pickups = 5
        await db.flush()
        day = future_date()

        res = await schedule(client, employee_token, store.id, day, quantity=2)
        assert res.status_code == 400
        assert "Limite mensal excedido" in res.json()["detail"]

        await db.refresh(employee)
        assert employee.current_month_pickups == 5
        assert await capacity_row(db, store.id, day) is None

    async def test_quota_exactly_reached(self, client: AsyncClient, db, employee_token, employee, store):
        employee.current_month_pickups = 4
        await db.flush()

        res = await schedule(client, employee_token, store.id, future_date(), quantity=2)
        assert res.status_code == 201
        await db.refresh(employee)
        assert employee.current_month_pickups == 6

    async def test_stale_month_resets_before_booking(self, client: AsyncClient, db, employee_token, employee, store):
        """지난 달 사용량은 예약 시 초기화."""
        employee.current_month_pickups = 6
        employee.last_reset_month = "2000-01"
        await db.flush()

        res = await schedule(client, employee_token, store.id, future_date(), quantity=2)
        assert res.status_code == 201
        await db.refresh(employee)
        assert employee.current_month_pickups == 2

    async def test_capacity_exhausted(self, client: AsyncClient, db, employee_token, employee, store):
        day = future_date()
        db.add(StoreCapacity(store_id=store.id, date=day, max_capacity=None, used_capacity=10))
        await db.flush()

        res = await schedule(client, employee_token, store.id, day)
        assert res.status_code == 400
        assert res.json()["detail"] == "Não há vagas disponíveis nesta loja para esta data"

        await db.refresh(employee)
        assert employee.current_month_pickups == 0

    async def test_capacity_override_zero(self, client: AsyncClient, db, employee_token, store):
        day = future_date()
        db.add(StoreCapacity(store_id=store.id, date=day, max_capacity=0, used_capacity=0))
        await db.flush()

        res = await schedule(client, employee_token, store.id, day)
        assert res.status_code == 400

    async def test_last_slot(self, client: AsyncClient, db, employee_token, store):
        """마지막 한 자리는 예약 가능, 그 다음은 불가."""
        day = future_date()
        db.add(StoreCapacity(store_id=store.id, date=day, max_capacity=2, used_capacity=1))
        await db.flush()

        assert (await schedule(client, employee_token, store.id, day)).status_code == 201
        assert (await schedule(client, employee_token, store.id, day)).status_code == 400

    async def test_blocked_date(self, client: AsyncClient, admin_token, employee_token, store):
        """차단 날짜 범위 3일 모두 예약 거부."""
        start = future_date(10)
        end = future_date(12)
        res = await client.post("/api/v1/admin/blocked-dates", json={
            "start_date": str(start),
            "end_date": str(end),
            "reason": "manutenção",
        }, headers=auth_header(admin_token))
        assert len(res.json()["created"]) == 3

        for offset in (10, 11, 12):
            res = await schedule(client, employee_token, store.id, future_date(offset))
            assert res.status_code == 400
            assert res.json()["detail"] == "Esta data está bloqueada para agendamentos"

        assert (await schedule(client, employee_token, store.id, future_date(13))).status_code == 201

    async def test_past_date_rejected(self, client: AsyncClient, employee_token, store):
        res = await schedule(client, employee_token, store.id, future_date(-1))
        assert res.status_code == 400

    async def test_unknown_store(self, client: AsyncClient, employee_token):
        res = await schedule(client, employee_token, "00000000-0000-0000-0000-000000000000", future_date())
        assert res.status_code == 404

    async def test_malformed_store_id(self, client: AsyncClient, employee_token):
        res = await schedule(client, employee_token, "not-a-uuid", future_date())
        assert res.status_code == 404

    async def test_zero_quantity_rejected(self, client: AsyncClient, employee_token, store):
        res = await schedule(client, employee_token, store.id, future_date(), quantity=0)
        assert res.status_code == 422

    async def test_store_cannot_schedule(self, client: AsyncClient, store_token, store):
        """매장 역할은 예약 불가 (403)."""
        res = await schedule(client, store_token, store.id, future_date())
        assert res.status_code == 403


# ===== Confirm =====

class TestConfirmPickup:
    """수령 확인 테스트."""

    async def test_confirm(self, client: AsyncClient, db, store_token, employee, scheduled):
        """확인해도 한도와 수용량은 그대로."""
        res = await client.post(f"{STORE_URL}/confirm", json={"token": scheduled["token"]}, headers=auth_header(store_token))
        assert res.status_code == 200
        data = res.json()
        assert data["status"] == "completed"
        assert data["completed_at"] is not None

        await db.refresh(employee)
        assert employee.current_month_pickups == 2

    async def test_confirm_normalizes_token(self, client: AsyncClient, store_token, scheduled):
        token = f"  {scheduled['token'].lower()} "
        res = await client.post(f"{STORE_URL}/confirm", json={"token": token}, headers=auth_header(store_token))
        assert res.status_code == 200

    async def test_second_confirm_fails(self, client: AsyncClient, store_token, scheduled):
        """같은 토큰 두 번째 확인은 400."""
        await client.post(f"{STORE_URL}/confirm", json={"token": scheduled["token"]}, headers=auth_header(store_token))
        res = await client.post(f"{STORE_URL}/confirm", json={"token": scheduled["token"]}, headers=auth_header(store_token))
        assert res.status_code == 400
        assert res.json()["detail"] == "Este agendamento já foi retirado"

    async def test_unknown_token(self, client: AsyncClient, store_token, store):
        res = await client.post(f"{STORE_URL}/confirm", json={"token": "ZZZZZZZZZZ"}, headers=auth_header(store_token))
        assert res.status_code == 404

    async def test_token_of_other_store(self, client: AsyncClient, db, employee_token, other_store):
        """다른 매장의 토큰은 찾을 수 없음."""
        res = await schedule(client, employee_token, other_store.id, future_date())
        token = res.json()["token"]

        norte_user = await make_user(db, "norte@test.com", "store", "Norte123!")
        other_store.user_id = norte_user.id
        sul_user = await make_user(db, "sul@test.com", "store", "Sul12345!")
        db.add(Store(user_id=sul_user.id, name="Loja Sul", address="Rua S", max_daily_capacity=10))
        await db.flush()

        res = await client.post(
            f"{STORE_URL}/confirm",
            json={"token": token},
            headers=auth_header(make_token(sul_user, "store")),
        )
        assert res.status_code == 404

        res = await client.post(
            f"{STORE_URL}/confirm",
            json={"token": token},
            headers=auth_header(make_token(norte_user, "store")),
        )
        assert res.status_code == 200

    async def test_employee_cannot_confirm(self, client: AsyncClient, employee_token, scheduled):
        res = await client.post(f"{STORE_URL}/confirm", json={"token": scheduled["token"]}, headers=auth_header(employee_token))
        assert res.status_code == 403


# ===== Cancel =====

class TestCancelPickup:
    """예약 취소 테스트."""

    async def test_cancel_round_trip(self, client: AsyncClient, db, store_token, employee, store, scheduled):
        """예약 후 취소하면 한도와 수용량이 원래대로."""
        res = await client.post(f"{STORE_URL}/cancel", json={
            "token": scheduled["token"],
            "reason": "Funcionário não compareceu",
        }, headers=auth_header(store_token))
        assert res.status_code == 200
        data = res.json()
        assert data["status"] == "cancelled"
        assert data["cancellation_reason"] == "Funcionário não compareceu"
        assert data["cancelled_at"] is not None

        await db.refresh(employee)
        assert employee.current_month_pickups == 0
        row = await capacity_row(db, store.id, future_date())
        assert row.used_capacity == 0

    async def test_cancel_requires_reason(self, client: AsyncClient, store_token, scheduled):
        res = await client.post(f"{STORE_URL}/cancel", json={"token": scheduled["token"]}, headers=auth_header(store_token))
        assert res.status_code == 400
        assert res.json()["detail"] == "Informe o motivo do cancelamento"

    async def test_cancel_blank_reason(self, client: AsyncClient, store_token, scheduled):
        res = await client.post(f"{STORE_URL}/cancel", json={
            "token": scheduled["token"],
            "reason": "   ",
        }, headers=auth_header(store_token))
        assert res.status_code == 400

    async def test_cancel_completed_fails(self, client: AsyncClient, db, store_token, employee, scheduled):
        """수령 완료된 예약은 취소 불가, 한도 변화 없음."""
        await client.post(f"{STORE_URL}/confirm", json={"token": scheduled["token"]}, headers=auth_header(store_token))
        res = await client.post(f"{STORE_URL}/cancel", json={
            "token": scheduled["token"],
            "reason": "tarde demais",
        }, headers=auth_header(store_token))
        assert res.status_code == 400

        await db.refresh(employee)
        assert employee.current_month_pickups == 2

    async def test_cancel_twice_fails(self, client: AsyncClient, store_token, scheduled):
        body = {"token": scheduled["token"], "reason": "motivo"}
        await client.post(f"{STORE_URL}/cancel", json=body, headers=auth_header(store_token))
        res = await client.post(f"{STORE_URL}/cancel", json=body, headers=auth_header(store_token))
        assert res.status_code == 400
        assert res.json()["detail"] == "Este agendamento já foi cancelado"

    async def test_confirm_cancelled_fails(self, client: AsyncClient, store_token, scheduled):
        await client.post(f"{STORE_URL}/cancel", json={
            "token": scheduled["token"],
            "reason": "motivo",
        }, headers=auth_header(store_token))
        res = await client.post(f"{STORE_URL}/confirm", json={"token": scheduled["token"]}, headers=auth_header(store_token))
        assert res.status_code == 400

    async def test_cancel_frees_slot_for_rebooking(self, client: AsyncClient, db, employee_token, store_token, store):
        day = future_date()
        db.add(StoreCapacity(store_id=store.id, date=day, max_capacity=1, used_capacity=0))
        await db.flush()

        first = await schedule(client, employee_token, store.id, day)
        assert (await schedule(client, employee_token, store.id, day)).status_code == 400

        await client.post(f"{STORE_URL}/cancel", json={
            "token": first.json()["token"],
            "reason": "motivo",
        }, headers=auth_header(store_token))
        assert (await schedule(client, employee_token, store.id, day)).status_code == 201


@pytest.fixture
def _preloaded_token_fixture(request, token_fixture):
    """Resolve the parametrized (async) token fixture before the test's event loop runs."""
    return request.getfixturevalue(token_fixture)


# ===== Listings =====

class TestPickupListings:
    """예약 조회 테스트."""

    async def test_employee_lists_own_pickups(self, client: AsyncClient, employee_token, scheduled):
        res = await client.get(EMPLOYEE_URL, headers=auth_header(employee_token))
        assert res.status_code == 200
        assert [p["token"] for p in res.json()] == [scheduled["token"]]

        res = await client.get(EMPLOYEE_URL, params={"status": "completed"}, headers=auth_header(employee_token))
        assert res.json() == []

    @pytest.mark.parametrize("url,token_fixture", [
        (EMPLOYEE_URL, "employee_token"),
        (STORE_URL, "store_token"),
        (ADMIN_URL, "admin_token"),
    ])
    @pytest.mark.usefixtures("_preloaded_token_fixture")
    async def test_unknown_status_filter_rejected(self, client: AsyncClient, request, url, token_fixture):
        """알 수 없는 상태 필터는 422."""
        token = request.getfixturevalue(token_fixture)
        res = await client.get(url, params={"status": "foo"}, headers=auth_header(token))
        assert res.status_code == 422

    async def test_store_lists_by_date(self, client: AsyncClient, store_token, scheduled):
        res = await client.get(STORE_URL, params={"date": scheduled["scheduled_date"]}, headers=auth_header(store_token))
        assert res.status_code == 200
        assert len(res.json()) == 1

        res = await client.get(STORE_URL, params={"date": str(future_date(20))}, headers=auth_header(store_token))
        assert res.json() == []

    async def test_store_get_by_token(self, client: AsyncClient, store_token, scheduled):
        res = await client.get(f"{STORE_URL}/token/{scheduled['token']}", headers=auth_header(store_token))
        assert res.status_code == 200
        assert res.json()["id"] == scheduled["id"]

    async def test_store_get_unknown_token(self, client: AsyncClient, store_token):
        res = await client.get(f"{STORE_URL}/token/NOPE123456", headers=auth_header(store_token))
        assert res.status_code == 404

    async def test_store_day_summary(self, client: AsyncClient, store_token, scheduled):
        res = await client.get(
            "/api/v1/store/dashboard/summary",
            params={"date": scheduled["scheduled_date"]},
            headers=auth_header(store_token),
        )
        assert res.status_code == 200
        data = res.json()
        assert data["scheduled"] == 1
        assert data["used_capacity"] == 1
        assert data["available_capacity"] == 9

    async def test_employee_sees_stores_and_availability(self, client: AsyncClient, employee_token, store, scheduled):
        res = await client.get(f"{EMPLOYEE_URL}/stores", headers=auth_header(employee_token))
        assert [s["name"] for s in res.json()] == ["Loja Teste"]

        res = await client.get(
            f"{EMPLOYEE_URL}/stores/{store.id}/availability/{scheduled['scheduled_date']}",
            headers=auth_header(employee_token),
        )
        assert res.status_code == 200
        assert res.json()["available_capacity"] == 9

    async def test_admin_paginated_list(self, client: AsyncClient, admin_token, employee_token, store):
        for _ in range(3):
            await schedule(client, employee_token, store.id, future_date())

        res = await client.get(ADMIN_URL, params={"per_page": 2}, headers=auth_header(admin_token))
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 3
        assert len(data["items"]) == 2

        res = await client.get(ADMIN_URL, params={"status": "cancelled"}, headers=auth_header(admin_token))
        assert res.json()["total"] == 0

    async def test_admin_dashboard(self, client: AsyncClient, admin_token, store_token, employee_token, store):
        first = await schedule(client, employee_token, store.id, future_date(), quantity=2)
        second = await schedule(client, employee_token, store.id, future_date(), quantity=1)
        await client.post(f"{STORE_URL}/confirm", json={"token": first.json()["token"]}, headers=auth_header(store_token))
        await client.post(f"{STORE_URL}/cancel", json={
            "token": second.json()["token"],
            "reason": "motivo",
        }, headers=auth_header(store_token))

        res = await client.get("/api/v1/admin/dashboard/stats", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json() == {
            "total_employees": 1,
            "total_stores": 1,
            "products_picked_up": 2,
            "scheduled_pickups": 0,
            "completed_pickups": 1,
            "cancelled_pickups": 1,
        }


class TestEmployeeDeletion:
    """직원 삭제 시 예약 수용량 해제."""

    async def test_delete_employee_releases_capacity(self, client: AsyncClient, db, admin_token, employee, store, scheduled):
        res = await client.delete(f"/api/v1/admin/employees/{employee.id}", headers=auth_header(admin_token))
        assert res.status_code == 204

        rows = (await db.execute(select(StoreCapacity).where(StoreCapacity.store_id == store.id))).scalars().all()
        for row in rows:
            await db.refresh(row)
        assert [r.used_capacity for r in rows] == [0]


@pytest.mark.parametrize("token_format,length", [("numeric", 6), ("alphanumeric", 10)])
async def test_token_format_setting(client: AsyncClient, monkeypatch, employee_token, store, token_format, length):
    """설정된 토큰 형식으로 발급."""
    from app.config import settings
    monkeypatch.setattr(settings, "PICKUP_TOKEN_FORMAT", token_format)

    res = await schedule(client, employee_token, store.id, future_date())
    assert res.status_code == 201
    assert len(res.json()["token"]) == length
