"""직원 월간 한도 계산 테스트.

Monthly quota rule tests — Stale-month reset, deltas and limit checks.
"""

from datetime import date

from app.utils.quota import (
    QuotaState,
    apply_pickup_delta,
    current_month,
    effective_pickups,
    exceeds_quota,
    month_key,
    needs_reset,
    remaining_quota,
)


class TestMonthKey:
    """월 키 테스트."""

    def test_month_key_is_zero_padded(self):
        assert month_key(date(2024, 3, 5)) == "2024-03"

    def test_current_month_of_given_day(self):
        assert current_month(date(2024, 12, 31)) == "2024-12"

    def test_current_month_default_format(self):
        month = current_month()
        assert len(month) == 7
        assert month[4] == "-"


class TestReset:
    """월 초기화 테스트."""

    def test_same_month_needs_no_reset(self):
        assert needs_reset("2024-06", "2024-06") is False

    def test_other_month_needs_reset(self):
        assert needs_reset("2024-05", "2024-06") is True

    def test_never_reset_needs_reset(self):
        assert needs_reset(None, "2024-06") is True

    def test_stale_counter_reads_as_zero(self):
        assert effective_pickups(5, "2024-05", "2024-06") == 0
        assert effective_pickups(5, "2024-06", "2024-06") == 5


class TestApplyDelta:
    """사용량 변화 적용 테스트."""

    def test_schedule_adds_quantity(self):
        assert apply_pickup_delta(0, "2024-06", 2, "2024-06") == QuotaState(2, "2024-06")

    def test_stale_month_resets_before_applying(self):
        assert apply_pickup_delta(4, "2024-05", 1, "2024-06") == QuotaState(1, "2024-06")

    def test_cancel_restores_quantity(self):
        assert apply_pickup_delta(3, "2024-06", -2, "2024-06") == QuotaState(1, "2024-06")

    def test_cancel_after_reset_floors_at_zero(self):
        """지난 달 예약 취소는 음수를 만들지 않음."""
        assert apply_pickup_delta(4, "2024-05", -2, "2024-06") == QuotaState(0, "2024-06")


class TestLimit:
    """한도 검사 테스트."""

    def test_within_limit(self):
        assert exceeds_quota(6, 2, "2024-06", 2, "2024-06") is False

    def test_exactly_at_limit_is_allowed(self):
        assert exceeds_quota(6, 4, "2024-06", 2, "2024-06") is False

    def test_over_limit(self):
        assert exceeds_quota(2, 1, "2024-06", 2, "2024-06") is True

    def test_stale_month_frees_quota(self):
        assert exceeds_quota(2, 2, "2024-05", 2, "2024-06") is False

    def test_remaining_quota(self):
        assert remaining_quota(6, 2, "2024-06", "2024-06") == 4
        assert remaining_quota(6, 2, "2024-05", "2024-06") == 6

    def test_remaining_quota_never_negative(self):
        """한도를 줄여 사용량보다 작아져도 0."""
        assert remaining_quota(1, 3, "2024-06", "2024-06") == 0
