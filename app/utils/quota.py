"""직원 월간 수령 한도 계산 모듈 — DB 접근 없는 순수 함수.

Employee monthly pickup quota rules, free of any storage access.
Months are ``YYYY-MM`` strings computed in the configured APP_TIMEZONE, so the
month boundary follows the stores' local calendar rather than UTC.
"""

from datetime import date, datetime
from typing import NamedTuple
from zoneinfo import ZoneInfo

from app.config import settings


class QuotaState(NamedTuple):
    """월간 사용량 상태 (Quota counter and the month it belongs to)."""

    current_month_pickups: int
    last_reset_month: str


def month_key(day: date) -> str:
    """날짜를 "YYYY-MM" 문자열로 변환 (Format a date as its month key)."""
    return f"{day.year:04d}-{day.month:02d}"


def today() -> date:
    """APP_TIMEZONE 기준 오늘 날짜 (Today in the configured timezone)."""
    return datetime.now(ZoneInfo(settings.APP_TIMEZONE)).date()


def current_month(day: date | None = None) -> str:
    """현재 월 키를 반환합니다 (Month key for ``day``, default today in APP_TIMEZONE)."""
    return month_key(day if day is not None else today())


def needs_reset(last_reset_month: str | None, month: str) -> bool:
    return last_reset_month != month


def effective_pickups(current: int, last_reset_month: str | None, month: str) -> int:
    """초기화를 반영한 이번 달 사용량 (Counter with a stale month treated as 0)."""
    if needs_reset(last_reset_month, month):
        return 0
    return current


def apply_pickup_delta(
    current: int,
    last_reset_month: str | None,
    quantity: int,
    month: str,
) -> QuotaState:
    """사용량에 quantity를 적용합니다.

    Apply ``quantity`` to the monthly counter. A stale month resets the counter
    to 0 and stamps ``month`` before applying; the result is floored at 0.

    Args:
        current: 저장된 사용량 (Stored current_month_pickups)
        last_reset_month: 저장된 초기화 월 (Stored last_reset_month)
        quantity: 변화량, 예약 시 양수 / 취소 시 음수
                  (Positive on schedule, negative on cancel)
        month: 현재 월 키 (Present month key)

    Returns:
        QuotaState: 적용 후 상태 (New counter and reset month)
    """
    base: int = effective_pickups(current, last_reset_month, month)
    return QuotaState(max(0, base + quantity), month)


def remaining_quota(monthly_limit: int, current: int, last_reset_month: str | None, month: str) -> int:
    """남은 한도 (Remaining quantity allowed this month, never negative)."""
    return max(0, monthly_limit - effective_pickups(current, last_reset_month, month))


def exceeds_quota(
    monthly_limit: int,
    current: int,
    last_reset_month: str | None,
    quantity: int,
    month: str,
) -> bool:
    """요청 수량이 한도를 초과하는지 (True when current + quantity > monthly_limit)."""
    return effective_pickups(current, last_reset_month, month) + quantity > monthly_limit
