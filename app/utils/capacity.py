"""매장 일자별 수용량 계산 모듈 — DB 접근 없는 순수 함수.

Store per-date capacity rules, free of any storage access.
Functions accept the store default capacity and an optional override row
(anything exposing ``max_capacity`` and ``used_capacity``, ORM rows included).

Rules:
    - effective = override.max_capacity 가 있으면 그 값, 없으면 매장 기본값
    - available = effective - used (행이 없으면 used = 0)
    - adjust: 행이 있으면 max(0, used + delta), 없으면 기본값 + max(0, delta)
"""

import uuid
from dataclasses import dataclass
from datetime import date
from typing import Protocol


class CapacityRow(Protocol):
    """수용량 행 인터페이스 (Shape shared by StoreCapacity and CapacitySnapshot)."""

    max_capacity: int | None
    used_capacity: int


@dataclass(frozen=True)
class CapacitySnapshot:
    """수용량 스냅샷 — adjust_capacity 의 결과.

    Capacity snapshot for one (store, date) after an adjustment.

    Attributes:
        store_id: 매장 ID
        date: 대상 날짜
        max_capacity: 재정의 값, 없으면 None (Override, None falls back to default)
        used_capacity: 예약 건수 (Booked count, never negative)
        created: 새 행 여부 (True when no row existed before)
    """

    store_id: uuid.UUID
    date: date
    max_capacity: int | None
    used_capacity: int
    created: bool = False


def effective_capacity(default_capacity: int, override: CapacityRow | None) -> int:
    """해당 날짜의 유효 수용량 (Override capacity when set, else the store default)."""
    if override is not None and override.max_capacity is not None:
        return override.max_capacity
    return default_capacity


def booked_count(override: CapacityRow | None) -> int:
    """해당 날짜의 예약 건수 (0 when no row exists)."""
    if override is None:
        return 0
    return override.used_capacity


def available_capacity(default_capacity: int, override: CapacityRow | None) -> int:
    """남은 수용량을 계산합니다.

    Compute remaining capacity for a date. The result can be negative when
    bookings were forced past a capacity that was later lowered.

    Args:
        default_capacity: 매장 기본 일일 수용량 (Store max_daily_capacity)
        override: 날짜별 행, 없으면 None (Per-date row or None)

    Returns:
        int: effective - booked
    """
    return effective_capacity(default_capacity, override) - booked_count(override)


def adjust_capacity(
    store_id: uuid.UUID,
    target_date: date,
    default_capacity: int,
    override: CapacityRow | None,
    delta: int,
) -> CapacitySnapshot:
    """예약 건수에 delta를 적용한 새 스냅샷을 반환합니다.

    Apply ``delta`` to the booked count for (store, date). An existing row
    keeps its override and has its count floored at 0. A missing row becomes a
    new snapshot pinned to the store default with ``max(0, delta)`` bookings.

    Args:
        store_id: 매장 ID
        target_date: 대상 날짜
        default_capacity: 매장 기본 수용량 (Store default, used for new rows)
        override: 기존 행, 없으면 None (Existing row or None)
        delta: 변화량, 예약 +1 / 취소 -1 (+1 on schedule, -1 on cancel)

    Returns:
        CapacitySnapshot: 적용 후 상태 (State after the adjustment)
    """
    if override is not None:
        return CapacitySnapshot(
            store_id=store_id,
            date=target_date,
            max_capacity=override.max_capacity,
            used_capacity=max(0, override.used_capacity + delta),
        )
    return CapacitySnapshot(
        store_id=store_id,
        date=target_date,
        max_capacity=default_capacity,
        used_capacity=max(0, delta),
        created=True,
    )
