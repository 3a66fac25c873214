"""직원 관련 Pydantic 요청/응답 스키마 정의.

Employee-related Pydantic request/response schema definitions.
"""

from datetime import datetime
from pydantic import BaseModel, Field


class EmployeeCreate(BaseModel):
    """직원 생성 요청 스키마.

    Employee creation request. The login account is created with the default
    password and must change it on first login.

    Attributes:
        name: 이름 (Full name)
        email: 이메일 — 로그인 ID (Login e-mail)
        cpf: CPF 번호 (Brazilian taxpayer id)
        monthly_limit: 월간 수령 한도, 생략 시 기본값 (Monthly limit, defaults from settings)
    """

    name: str = Field(min_length=1, max_length=255)  # 이름 (Full name)
    email: str = Field(min_length=3, max_length=255)  # 로그인 이메일 (Login e-mail)
    cpf: str = Field(min_length=11, max_length=14)  # CPF 번호 (CPF)
    monthly_limit: int | None = Field(default=None, ge=0)  # 월간 한도 (Monthly limit)


class EmployeeUpdate(BaseModel):
    """직원 수정 요청 스키마 (부분 업데이트, partial update)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, min_length=3, max_length=255)
    cpf: str | None = Field(default=None, min_length=11, max_length=14)
    monthly_limit: int | None = Field(default=None, ge=0)


class EmployeeResponse(BaseModel):
    """직원 응답 스키마.

    Employee response. ``current_month_pickups`` and ``remaining_quota`` are
    reported for the present month, so a stale counter reads as 0.

    Attributes:
        id: 직원 UUID (Employee identifier)
        user_id: 로그인 계정 UUID (Login account identifier)
        name: 이름 (Full name)
        email: 이메일 (E-mail)
        cpf: CPF 번호 (CPF)
        monthly_limit: 월간 한도 (Monthly limit)
        current_month_pickups: 이번 달 사용량 (Quantity used this month)
        remaining_quota: 남은 한도 (Remaining quantity this month)
        last_reset_month: 마지막 초기화 월 (Last reset month)
        created_at: 생성 일시 (Creation timestamp)
    """

    id: str  # 직원 UUID 문자열 (Employee UUID as string)
    user_id: str  # 계정 UUID 문자열 (User UUID as string)
    name: str  # 이름 (Full name)
    email: str  # 이메일 (E-mail)
    cpf: str  # CPF 번호 (CPF)
    monthly_limit: int  # 월간 한도 (Monthly limit)
    current_month_pickups: int  # 이번 달 사용량 (Used this month)
    remaining_quota: int  # 남은 한도 (Remaining this month)
    last_reset_month: str | None  # 마지막 초기화 월 "YYYY-MM"
    created_at: datetime  # 생성 일시 UTC (Creation timestamp)


class ResetMonthlyResponse(BaseModel):
    """월간 한도 초기화 결과 (Result of the monthly reset sweep)."""

    month: str  # 현재 월 키 (Present month key)
    reset_count: int  # 초기화된 직원 수 (Employees reset)
