"""수령 예약 관련 Pydantic 요청/응답 스키마 정의.

Pickup schedule Pydantic request/response schema definitions.
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

# 조회 필터로 허용되는 예약 상태 (Pickup statuses accepted as a listing filter)
PickupStatus = Literal["scheduled", "completed", "cancelled", "pending"]


class PickupCreate(BaseModel):
    """수령 예약 생성 요청 스키마 (직원).

    Employee pickup scheduling request.

    Attributes:
        store_id: 매장 UUID (Target store)
        scheduled_date: 수령 날짜 (Pickup date)
        quantity: 수량, 1 이상 (Quantity, at least 1)
        observations: 메모, 선택 (Optional free-text notes)
    """

    store_id: str  # 매장 UUID 문자열 (Store UUID)
    scheduled_date: date  # 수령 날짜 (Pickup date)
    quantity: int = Field(default=1, ge=1)  # 수량 (Quantity)
    observations: str | None = None  # 메모 (Observations)


class PickupConfirmRequest(BaseModel):
    """수령 확인 요청 스키마 (매장) — Store confirms by token."""

    token: str = Field(min_length=1)  # 수령 토큰 (Pickup token)


class PickupCancelRequest(BaseModel):
    """수령 취소 요청 스키마 (매장) — Store cancels by token with a reason."""

    token: str = Field(min_length=1)  # 수령 토큰 (Pickup token)
    reason: str = ""  # 취소 사유: 공백 불가, 서비스에서 검증 (Required, checked by the service)


class PickupResponse(BaseModel):
    """수령 예약 응답 스키마.

    Attributes:
        id: 예약 UUID (Pickup identifier)
        employee_id: 직원 UUID
        employee_name: 직원 이름 (Employee name)
        store_id: 매장 UUID
        store_name: 매장 이름 (Store name)
        scheduled_date: 수령 날짜 (Pickup date)
        quantity: 수량 (Quantity)
        observations: 메모 (Observations)
        token: 수령 토큰 (Pickup token)
        status: 상태 (scheduled / completed / cancelled)
        created_at: 생성 일시
        completed_at: 수령 완료 일시
        cancelled_at: 취소 일시
        cancellation_reason: 취소 사유
    """

    id: str  # 예약 UUID 문자열 (Pickup UUID as string)
    employee_id: str  # 직원 UUID 문자열
    employee_name: str = ""  # 직원 이름 (Employee name)
    store_id: str  # 매장 UUID 문자열
    store_name: str = ""  # 매장 이름 (Store name)
    scheduled_date: date  # 수령 날짜 (Pickup date)
    quantity: int  # 수량 (Quantity)
    observations: str | None = None  # 메모 (Observations)
    token: str  # 수령 토큰 (Pickup token)
    status: str  # 상태 (Status)
    created_at: datetime  # 생성 일시 UTC
    completed_at: datetime | None = None  # 수령 완료 일시
    cancelled_at: datetime | None = None  # 취소 일시
    cancellation_reason: str | None = None  # 취소 사유


class StoreDaySummary(BaseModel):
    """매장 일별 요약 (Per-day summary for the store dashboard).

    Attributes:
        date: 대상 날짜
        scheduled: 대기 중 예약 수 (Scheduled, not yet picked up)
        completed: 수령 완료 수 (Completed)
        cancelled: 취소 수 (Cancelled)
        effective_capacity: 유효 수용량 (Effective capacity)
        used_capacity: 예약 건수 (Booked count)
        available_capacity: 남은 수용량 (Available capacity)
        is_blocked: 차단 날짜 여부
    """

    date: date
    scheduled: int = 0
    completed: int = 0
    cancelled: int = 0
    effective_capacity: int
    used_capacity: int
    available_capacity: int
    is_blocked: bool = False
