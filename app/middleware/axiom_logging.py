"""API 요청 로깅 미들웨어 — Axiom 전송, 미설정 시 콘솔 로그.

API request logging middleware.
Captures method, path, params, request body, status code, duration and
error reason for every request. Events go to Axiom when AXIOM_API_TOKEN and
AXIOM_DATASET are set, and to the ``app.request`` logger otherwise.
Sensitive fields (passwords, JWTs, pickup tokens, CPF) are masked, and pickup
tokens embedded in the URL path are replaced before logging.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.utils.logger import get_logger

logger = get_logger("app.request")

# 마스킹 대상 필드 패턴: Fields to mask in request/response bodies
_SENSITIVE_KEYS = re.compile(
    r"(password|secret|token|authorization|api_key|p256dh|auth|cpf|credential)",
    re.IGNORECASE,
)

# URL 경로 내 수령 토큰: Pickup token embedded in a path such as /pickups/token/ABC123
_PATH_TOKEN = re.compile(r"(/token/)[^/]+")

# 로깅 제외 경로: Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


def _mask_dict(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else _mask_dict(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask_dict(item, depth + 1) for item in data[:20]]
    return data


def _mask_path(path: str) -> str:
    return _PATH_TOKEN.sub(r"\1***", path)


def _truncate(value: Any, max_len: int = 2000) -> Any:
    """로그 크기 제한 — Truncate large values to prevent oversized logs."""
    if isinstance(value, str) and len(value) > max_len:
        return value[:max_len] + "...(truncated)"
    return value


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 로깅하는 미들웨어.

    Middleware that logs every API request and response, to Axiom when
    configured and to the console logger otherwise.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    def _emit(self, event: dict[str, Any]) -> None:
        if self._client is None:
            level: int = logging.INFO
            if event["status_code"] >= 500:
                level = logging.ERROR
            elif event["status_code"] >= 400:
                level = logging.WARNING
            logger.log(
                level,
                "%s %s -> %s (%sms)%s",
                event["method"],
                event["path"],
                event["status_code"],
                event["duration_ms"],
                f" error={event['error']}" if event.get("error") else "",
            )
            return
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception as exc:
            # 로깅 실패가 요청 처리에 영향주지 않도록: never break a request on log failure
            logger.warning("Axiom ingest failed: %s", exc)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.time()

        method = request.method
        path = _mask_path(request.url.path)
        query_params = dict(request.query_params) if request.query_params else None

        # Request body 읽기: Read request body (only for methods with body)
        request_body: Any = None
        if method in ("POST", "PUT", "PATCH"):
            try:
                body_bytes = await request.body()
                if body_bytes:
                    request_body = _truncate(_mask_dict(json.loads(body_bytes)))
            except (json.JSONDecodeError, UnicodeDecodeError):
                request_body = "(non-json body)"

        error_detail: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출: Extract error detail from error responses
            if status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")

                try:
                    error_data = json.loads(resp_body)
                    error_detail = str(error_data.get("detail", error_data))[:500]
                except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
                    error_detail = resp_body.decode("utf-8", errors="replace")[:500]

                # 소비한 body를 다시 응답으로 반환: Re-wrap consumed body
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event: dict[str, Any] = {
                "method": method,
                "path": path,
                "status_code": status_code,
                "duration_ms": round((time.time() - start_time) * 1000, 2),
            }
            if query_params:
                event["query_params"] = _mask_dict(query_params)
            if request_body is not None:
                event["request_body"] = request_body
            if error_detail:
                event["error"] = error_detail
            self._emit(event)

        return response
