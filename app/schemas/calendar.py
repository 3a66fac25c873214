"""차단 날짜 관련 Pydantic 요청/응답 스키마 정의.

Blocked date Pydantic request/response schema definitions.
"""

from datetime import date, datetime
from pydantic import BaseModel, model_validator


class BlockedDateCreate(BaseModel):
    """날짜 차단 요청 스키마.

    Block a single date (``end_date`` omitted) or an inclusive range.

    Attributes:
        start_date: 시작 날짜 (First blocked date)
        end_date: 종료 날짜, 선택 (Last blocked date, inclusive)
        reason: 사유, 선택 (Optional reason)
    """

    start_date: date  # 시작 날짜 (Start date)
    end_date: date | None = None  # 종료 날짜: 포함 (End date, inclusive)
    reason: str | None = None  # 사유 (Reason)

    @model_validator(mode="after")
    def check_range(self) -> "BlockedDateCreate":
        """종료 날짜는 시작 날짜 이후여야 함 (End must not precede start)."""
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class BlockedDateResponse(BaseModel):
    """차단 날짜 응답 스키마."""

    id: str  # 차단 UUID 문자열
    date: date  # 차단 날짜 (Blocked date)
    reason: str | None  # 사유 (Reason)
    created_at: datetime  # 생성 일시 UTC


class BlockDatesResult(BaseModel):
    """날짜 차단 결과 — 새로 생성된 행과 이미 차단되어 건너뛴 날짜.

    Result of a block request: rows created and dates skipped because they
    were already blocked.
    """

    created: list[BlockedDateResponse]  # 새로 차단된 날짜 (Newly blocked)
    skipped: list[date]  # 이미 차단된 날짜 (Already blocked)


class DateStatusResponse(BaseModel):
    """날짜 차단 여부 조회 응답 (Blocked status of one date)."""

    date: date
    is_blocked: bool
    reason: str | None = None
