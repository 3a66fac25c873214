"""매장 및 수용량 관련 Pydantic 요청/응답 스키마 정의.

Store and capacity Pydantic request/response schema definitions.
"""

from datetime import date, datetime
from pydantic import BaseModel, Field, model_validator


class StoreCreate(BaseModel):
    """매장 생성 요청 스키마.

    Store creation request. ``login_email`` and ``login_password`` create the
    store's login account and must be given together.

    Attributes:
        name: 매장 이름 (Store name)
        address: 매장 주소 (Store address)
        max_daily_capacity: 기본 일일 수용량, 생략 시 설정값 (Default daily capacity)
        login_email: 매장 로그인 이메일, 선택 (Optional login e-mail)
        login_password: 매장 로그인 비밀번호, 선택 (Optional login password)
    """

    name: str = Field(min_length=1, max_length=255)  # 매장 이름 (Store name)
    address: str = Field(min_length=1)  # 매장 주소 (Address)
    max_daily_capacity: int | None = Field(default=None, ge=0)  # 기본 일일 수용량
    login_email: str | None = None  # 로그인 이메일 (Login e-mail)
    login_password: str | None = None  # 로그인 비밀번호 (Login password)

    @model_validator(mode="after")
    def check_login_pair(self) -> "StoreCreate":
        """로그인 이메일/비밀번호는 함께 입력 (E-mail and password go together)."""
        if bool(self.login_email) != bool(self.login_password):
            raise ValueError("login_email and login_password must be provided together")
        return self


class StoreUpdate(BaseModel):
    """매장 수정 요청 스키마 (부분 업데이트, partial update)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    address: str | None = Field(default=None, min_length=1)
    max_daily_capacity: int | None = Field(default=None, ge=0)


class StoreResponse(BaseModel):
    """매장 응답 스키마.

    Attributes:
        id: 매장 UUID (Store identifier)
        user_id: 로그인 계정 UUID, 없으면 None (Login account, if any)
        name: 매장 이름 (Store name)
        address: 매장 주소 (Address)
        max_daily_capacity: 기본 일일 수용량 (Default daily capacity)
        created_at: 생성 일시 (Creation timestamp)
    """

    id: str  # 매장 UUID 문자열 (Store UUID as string)
    user_id: str | None  # 계정 UUID 문자열 (User UUID as string)
    name: str  # 매장 이름 (Store name)
    address: str  # 매장 주소 (Address)
    max_daily_capacity: int  # 기본 일일 수용량 (Default daily capacity)
    created_at: datetime  # 생성 일시 UTC (Creation timestamp)


class CapacityOverrideRequest(BaseModel):
    """날짜별 수용량 재정의 요청 (None clears the override)."""

    max_capacity: int | None = Field(default=None, ge=0)  # 재정의 값 (Override value)


class CapacityResponse(BaseModel):
    """매장 일자별 수용량 응답 스키마.

    Attributes:
        store_id: 매장 UUID
        date: 대상 날짜 (Target date)
        max_capacity: 재정의 값 (Override, None means store default)
        effective_capacity: 유효 수용량 (Override or store default)
        used_capacity: 예약 건수 (Booked count)
        available_capacity: 남은 수용량 (Effective minus booked, may be negative)
        is_blocked: 차단 날짜 여부 (Whether the date is blocked)
    """

    store_id: str  # 매장 UUID 문자열
    date: date  # 대상 날짜
    max_capacity: int | None  # 재정의 값 (Override)
    effective_capacity: int  # 유효 수용량 (Effective capacity)
    used_capacity: int  # 예약 건수 (Booked count)
    available_capacity: int  # 남은 수용량 (Available)
    is_blocked: bool = False  # 차단 날짜 여부 (Blocked date)
