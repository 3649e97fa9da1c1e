"""
Dashboard 라우트

대시보드 합계, 활동 로그, 연간 월별 집계
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from core.ledger.engine import LedgerEngine
from core.ledger.staff import StaffRegistry
from core.types import Identity
from web.dependencies import get_engine, get_identity, get_registry
from web.models.responses import (
    ActivityResponse,
    DashboardResponse,
    MonthlyBreakdownResponse,
    MonthlyRowResponse,
)
from web.services.dashboard_service import DashboardService

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    identity: Identity = Depends(get_identity),
    engine: LedgerEngine = Depends(get_engine),
    registry: StaffRegistry = Depends(get_registry),
) -> DashboardResponse:
    """대시보드 합계 (잔액, 수입/지출, 급여/미지급, 지출, 직원 수)"""
    summary = await DashboardService(engine, registry).get_summary(identity)
    return DashboardResponse(**summary.to_dict(), durable=engine.is_durable)


@router.get("/activity", response_model=list[ActivityResponse])
async def get_activity(
    limit: int | None = Query(default=None, ge=1, le=500, description="최대 건수"),
    identity: Identity = Depends(get_identity),
    engine: LedgerEngine = Depends(get_engine),
    registry: StaffRegistry = Depends(get_registry),
) -> list[ActivityResponse]:
    """급여 + 지출 통합 로그 (날짜 최신순)"""
    items = await DashboardService(engine, registry).get_activity(identity, limit=limit)
    return [ActivityResponse.from_item(item) for item in items]


@router.get("/monthly", response_model=MonthlyBreakdownResponse)
async def get_monthly(
    year: int | None = Query(default=None, description="연도 (기본: 올해)"),
    identity: Identity = Depends(get_identity),
    engine: LedgerEngine = Depends(get_engine),
    registry: StaffRegistry = Depends(get_registry),
) -> MonthlyBreakdownResponse:
    """연간 월별 수입/지출/순액 (1~12월)"""
    target_year = year or date.today().year
    rows = await DashboardService(engine, registry).get_monthly(identity, target_year)
    return MonthlyBreakdownResponse(
        year=target_year,
        months=[MonthlyRowResponse.from_row(row) for row in rows],
    )
