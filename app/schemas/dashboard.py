"""대시보드 관련 Pydantic 응답 스키마 정의.

Dashboard response schema definitions.
"""

from pydantic import BaseModel


class AdminDashboardStats(BaseModel):
    """관리자 대시보드 통계.

    Attributes:
        total_employees: 전체 직원 수 (Employees)
        total_stores: 전체 매장 수 (Stores)
        products_picked_up: 수령 완료 총 수량 (Quantity over completed pickups)
        scheduled_pickups: 대기 중 예약 수 (Pickups still scheduled)
        completed_pickups: 수령 완료 예약 수 (Completed pickups)
        cancelled_pickups: 취소된 예약 수 (Cancelled pickups)
    """

    total_employees: int
    total_stores: int
    products_picked_up: int
    scheduled_pickups: int
    completed_pickups: int
    cancelled_pickups: int
