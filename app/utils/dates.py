"""날짜 범위 및 차단 날짜 헬퍼 모듈.

Date range helpers used by blocked-date management and calendar views.
"""

from collections.abc import Iterable, Iterator
from datetime import date, timedelta


def iter_date_range(start: date, end: date) -> Iterator[date]:
    """start 부터 end 까지 (양 끝 포함) 하루씩 (Each day from start to end inclusive)."""
    day: date = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def expand_date_range(start: date, end: date) -> list[date]:
    """날짜 범위를 일별 목록으로 확장합니다.

    Expand an inclusive date range into one entry per day.

    Raises:
        ValueError: end 가 start 보다 이전일 때 (When end precedes start)
    """
    if end < start:
        raise ValueError("end date precedes start date")
    return list(iter_date_range(start, end))


def is_date_blocked(day: date, blocked: Iterable[date]) -> bool:
    return day in set(blocked)
