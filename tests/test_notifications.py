"""푸시 알림 테스트 — 구독 저장 및 엣지 함수 호출.

Push notification tests — Subscription upsert through the API, and the
edge-function dispatch captured with ``httpx.MockTransport``. Dispatch
failures must never affect the pickup transition that triggered them.
"""

import json
from datetime import date

import httpx
import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from app.config import settings
from app.models.notification import PushSubscription
from app.services.notification_service import notification_service
from tests.conftest import auth_header, future_date

PUSH_URL = "/api/v1/push"
FUNCTIONS_URL = "https://push.test/functions/v1"


@pytest.fixture
def captured(monkeypatch) -> list[httpx.Request]:
    """엣지 함수 호출을 기록하는 목 전송 계층 (Mock transport recording requests)."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"ok": True})

    monkeypatch.setattr(settings, "PUSH_FUNCTIONS_URL", FUNCTIONS_URL)
    monkeypatch.setattr(settings, "PUSH_FUNCTIONS_KEY", "service-key")
    notification_service._transport = httpx.MockTransport(handler)
    return requests


def _subscription(endpoint: str = "https://fcm.test/send/abc", **keys) -> dict:
    return {
        "endpoint": endpoint,
        "keys": {"p256dh": "BNcRdreALRFXTkOOUHK1EtK2wtaz5Ry4YfYCA_0QTpQtUbVlUls0VJXg7A8u-Ts1XbjhazAkj7I99e8QcYP7DkM", "auth": "tBHItJI5svbpez7KI4CCXg", **keys},
    }


class TestPushSubscription:
    """푸시 구독 저장 테스트."""

    async def test_save_subscription(self, client: AsyncClient, employee_token):
        res = await client.post(f"{PUSH_URL}/subscriptions", json=_subscription(), headers=auth_header(employee_token))
        assert res.status_code == 201
        assert res.json()["role"] == "employee"
        assert res.json()["endpoint"] == "https://fcm.test/send/abc"

    async def test_resubscribe_updates_in_place(self, client: AsyncClient, db, store_token):
        """같은 엔드포인트 재구독은 한 행만 유지."""
        first = await client.post(f"{PUSH_URL}/subscriptions", json=_subscription(), headers=auth_header(store_token))
        second = await client.post(
            f"{PUSH_URL}/subscriptions",
            json=_subscription(auth="novo-segredo"),
            headers=auth_header(store_token),
        )
        assert first.json()["id"] == second.json()["id"]

        count = (await db.execute(select(func.count()).select_from(PushSubscription))).scalar()
        assert count == 1
        row = (await db.execute(select(PushSubscription))).scalar_one()
        await db.refresh(row)
        assert row.auth == "novo-segredo"

    async def test_missing_keys(self, client: AsyncClient, employee_token):
        """키 누락 시 400."""
        res = await client.post(f"{PUSH_URL}/subscriptions", json={
            "endpoint": "https://fcm.test/send/abc",
        }, headers=auth_header(employee_token))
        assert res.status_code == 400
        assert res.json()["detail"] == "Dados de inscrição inválidos"

    async def test_empty_auth_key(self, client: AsyncClient, employee_token):
        res = await client.post(
            f"{PUSH_URL}/subscriptions",
            json=_subscription(auth=""),
            headers=auth_header(employee_token),
        )
        assert res.status_code == 400

    async def test_requires_auth(self, client: AsyncClient):
        res = await client.post(f"{PUSH_URL}/subscriptions", json=_subscription())
        assert res.status_code == 401

    async def test_vapid_public_key(self, client: AsyncClient, monkeypatch):
        monkeypatch.setattr(settings, "VAPID_PUBLIC_KEY", "BPublicKey")
        res = await client.get(f"{PUSH_URL}/vapid-public-key")
        assert res.status_code == 200
        assert res.json() == {"public_key": "BPublicKey"}


class TestDispatch:
    """엣지 함수 호출 테스트."""

    async def test_notify_store_payload(self, captured):
        ok = await notification_service.notify_store_pickup(
            "3f1c4ad2-1111-4a9e-8c3e-0e2f4b6d8a10", "AB12CD34EF", date(2030, 1, 15), 2, "Maria Silva"
        )
        assert ok is True
        request = captured[0]
        assert str(request.url) == f"{FUNCTIONS_URL}/notify-store-pickup"
        assert request.headers["Authorization"] == "Bearer service-key"
        assert json.loads(request.content) == {
            "storeId": "3f1c4ad2-1111-4a9e-8c3e-0e2f4b6d8a10",
            "pickupToken": "AB12CD34EF",
            "pickupDate": "2030-01-15",
            "quantity": 2,
            "employeeName": "Maria Silva",
        }

    async def test_notify_employee_reason_only_when_given(self, captured):
        await notification_service.notify_employee_pickup(
            "e1", "completed", "AB12CD34EF", "Loja Teste", date(2030, 1, 15)
        )
        await notification_service.notify_employee_pickup(
            "e1", "cancelled", "AB12CD34EF", "Loja Teste", date(2030, 1, 15), "Fechado"
        )
        first, second = (json.loads(r.content) for r in captured)
        assert "reason" not in first
        assert second["reason"] == "Fechado"
        assert second["status"] == "cancelled"

    async def test_disabled_without_url(self):
        """URL 미설정 시 호출하지 않음."""
        ok = await notification_service.notify_store_pickup("s1", "T", date(2030, 1, 15), 1, "X")
        assert ok is False

    async def test_error_status_returns_false(self, monkeypatch):
        monkeypatch.setattr(settings, "PUSH_FUNCTIONS_URL", FUNCTIONS_URL)
        notification_service._transport = httpx.MockTransport(lambda request: httpx.Response(500, text="boom"))
        ok = await notification_service.notify_store_pickup("s1", "T", date(2030, 1, 15), 1, "X")
        assert ok is False

    async def test_transport_error_returns_false(self, monkeypatch):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        monkeypatch.setattr(settings, "PUSH_FUNCTIONS_URL", FUNCTIONS_URL)
        notification_service._transport = httpx.MockTransport(handler)
        ok = await notification_service.notify_store_pickup("s1", "T", date(2030, 1, 15), 1, "X")
        assert ok is False


class TestDispatchFromLifecycle:
    """예약/확인/취소 후 알림 발송 테스트."""

    async def test_schedule_notifies_store(self, client: AsyncClient, captured, employee_token, store):
        res = await client.post("/api/v1/employee/pickups", json={
            "store_id": str(store.id),
            "scheduled_date": str(future_date()),
            "quantity": 2,
        }, headers=auth_header(employee_token))
        assert res.status_code == 201

        assert len(captured) == 1
        body = json.loads(captured[0].content)
        assert body["storeId"] == str(store.id)
        assert body["pickupToken"] == res.json()["token"]
        assert body["employeeName"] == "Maria Silva"

    async def test_confirm_and_cancel_notify_employee(
        self, client: AsyncClient, captured, employee, employee_token, store_token, store
    ):
        tokens = []
        for _ in range(2):
            res = await client.post("/api/v1/employee/pickups", json={
                "store_id": str(store.id),
                "scheduled_date": str(future_date()),
            }, headers=auth_header(employee_token))
            tokens.append(res.json()["token"])

        await client.post("/api/v1/store/pickups/confirm", json={"token": tokens[0]}, headers=auth_header(store_token))
        await client.post("/api/v1/store/pickups/cancel", json={
            "token": tokens[1],
            "reason": "Loja fechada",
        }, headers=auth_header(store_token))

        employee_calls = [json.loads(r.content) for r in captured if r.url.path.endswith("notify-employee-pickup")]
        assert [c["status"] for c in employee_calls] == ["completed", "cancelled"]
        assert employee_calls[0]["employeeId"] == str(employee.id)
        assert employee_calls[1]["reason"] == "Loja fechada"

    async def test_dispatch_failure_does_not_fail_booking(self, client: AsyncClient, db, monkeypatch, employee, employee_token, store):
        """알림 실패는 예약에 영향 없음."""
        monkeypatch.setattr(settings, "PUSH_FUNCTIONS_URL", FUNCTIONS_URL)
        notification_service._transport = httpx.MockTransport(lambda request: httpx.Response(503))

        res = await client.post("/api/v1/employee/pickups", json={
            "store_id": str(store.id),
            "scheduled_date": str(future_date()),
        }, headers=auth_header(employee_token))
        assert res.status_code == 201

        await db.refresh(employee)
        assert employee.current_month_pickups == 1
