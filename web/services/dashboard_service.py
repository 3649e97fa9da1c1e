"""
Dashboard 서비스

직원 / 급여 / 지출 / 분개 목록을 모아 리포트 함수에 전달.
"""

import logging

from core.ledger.engine import LedgerEngine
from core.ledger.reports import (
    ActivityItem,
    DashboardSummary,
    MonthlyRow,
    StaffSummary,
    activity_log,
    dashboard_summary,
    monthly_breakdown,
    staff_summary,
)
from core.ledger.staff import StaffRegistry
from core.types import Identity

logger = logging.getLogger(__name__)


class DashboardService:
    """Dashboard 서비스

    요청마다 저장소에서 전체 목록을 다시 읽어 계산 (캐시 없음).

    Args:
        engine: Ledger Engine
        registry: Staff Registry (engine과 같은 저장소)
    """

    def __init__(self, engine: LedgerEngine, registry: StaffRegistry):
        self.engine = engine
        self.registry = registry

    async def get_summary(self, identity: Identity) -> DashboardSummary:
        """대시보드 합계"""
        return dashboard_summary(
            staff=await self.registry.list_staff(identity),
            payments=await self.engine.list_payments(identity),
            expenses=await self.engine.list_expenses(identity),
            entries=await self.engine.list_entries(identity),
        )

    async def get_activity(self, identity: Identity, limit: int | None = None) -> list[ActivityItem]:
        """급여 + 지출 통합 로그"""
        return activity_log(
            payments=await self.engine.list_payments(identity),
            expenses=await self.engine.list_expenses(identity),
            staff=await self.registry.list_staff(identity),
            limit=limit,
        )

    async def get_monthly(self, identity: Identity, year: int) -> list[MonthlyRow]:
        """연간 월별 집계"""
        return monthly_breakdown(await self.engine.list_entries(identity), year)

    async def get_staff_summary(self, identity: Identity, staff_id: str) -> StaffSummary:
        """직원별 지급 요약

        Raises:
            NotFound: 직원이 없는 경우
        """
        staff = await self.registry.get_staff(identity, staff_id)
        payments = await self.engine.list_payments(identity, staff_id=staff.id)
        return staff_summary(staff, payments)
