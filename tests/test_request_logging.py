"""요청 로깅 미들웨어 테스트.

Request logging middleware tests — Sensitive fields and pickup tokens are
masked before a request is logged.
"""

import logging

from httpx import AsyncClient

from app.middleware.axiom_logging import _mask_dict, _mask_path


class TestMasking:
    """민감 정보 마스킹 테스트."""

    def test_mask_sensitive_keys(self):
        masked = _mask_dict({
            "email": "a@test.com",
            "password": "Segredo1!",
            "cpf": "123.456.789-00",
            "token": "AB12CD34EF",
            "keys": {"p256dh": "xyz", "auth": "abc"},
        })
        assert masked["email"] == "a@test.com"
        assert masked["password"] == "***"
        assert masked["cpf"] == "***"
        assert masked["token"] == "***"
        assert masked["keys"] == {"p256dh": "***", "auth": "***"}

    def test_mask_nested_lists(self):
        masked = _mask_dict({"items": [{"refresh_token": "x", "name": "ok"}]})
        assert masked == {"items": [{"refresh_token": "***", "name": "ok"}]}

    def test_mask_token_in_path(self):
        assert _mask_path("/api/v1/store/pickups/token/AB12CD34EF") == "/api/v1/store/pickups/token/***"
        assert _mask_path("/api/v1/store/pickups") == "/api/v1/store/pickups"


class TestRequestLog:
    """요청 로그 출력 테스트."""

    async def test_error_request_logged_with_masked_path(self, client: AsyncClient, caplog):
        caplog.set_level(logging.INFO, logger="app.request")

        res = await client.get("/api/v1/store/pickups/token/AB12CD34EF")
        assert res.status_code == 401

        records = [r for r in caplog.records if r.name == "app.request"]
        assert records
        message = records[-1].getMessage()
        assert "AB12CD34EF" not in message
        assert "/token/***" in message
        assert records[-1].levelno == logging.WARNING

    async def test_health_not_logged(self, client: AsyncClient, caplog):
        caplog.set_level(logging.INFO, logger="app.request")

        res = await client.get("/health")
        assert res.json() == {"status": "ok"}
        assert not [r for r in caplog.records if r.name == "app.request"]
