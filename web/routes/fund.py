"""
Fund 라우트

현금 장부: 분개 목록, 수금/반환 기록, 잔액, 월별 집계, 정합 검사
"""

from datetime import date

from fastapi import APIRouter, Depends, Path, Query

from core.ledger.engine import LedgerEngine
from core.ledger.reconciler import LedgerReconciler
from core.ledger.reports import kind_totals
from core.types import Identity
from web.dependencies import get_engine, get_identity, get_reconciler
from web.models.requests import ManualEntryRequest, ManualEntryUpdateRequest
from web.models.responses import (
    BalanceResponse,
    DeleteResponse,
    LedgerEntryResponse,
    PeriodResponse,
    ReconcileResponse,
)

router = APIRouter(prefix="/api/fund", tags=["Fund"])


@router.get("/entries", response_model=list[LedgerEntryResponse])
async def list_entries(
    identity: Identity = Depends(get_identity),
    engine: LedgerEngine = Depends(get_engine),
) -> list[LedgerEntryResponse]:
    """분개 목록 (날짜 최신순)"""
    return [LedgerEntryResponse.from_entry(e) for e in await engine.list_entries(identity)]


@router.post("/entries", response_model=LedgerEntryResponse, status_code=201)
async def create_entry(
    request: ManualEntryRequest,
    identity: Identity = Depends(get_identity),
    engine: LedgerEngine = Depends(get_engine),
) -> LedgerEntryResponse:
    """수금(INFLOW) / 반환(RETURN) 기록"""
    entry = await engine.record_manual_entry(
        identity, request.kind, request.amount, request.date, request.description
    )
    return LedgerEntryResponse.from_entry(entry)


@router.put("/entries/{entry_id}", response_model=LedgerEntryResponse)
async def update_entry(
    request: ManualEntryUpdateRequest,
    entry_id: str = Path(..., description="분개 ID"),
    identity: Identity = Depends(get_identity),
    engine: LedgerEngine = Depends(get_engine),
) -> LedgerEntryResponse:
    """수금/반환 수정 (파생 분개는 403)"""
    entry = await engine.update_manual_entry(
        identity, entry_id, request.amount, request.date, request.description
    )
    return LedgerEntryResponse.from_entry(entry)


@router.delete("/entries/{entry_id}", response_model=DeleteResponse)
async def delete_entry(
    entry_id: str = Path(..., description="분개 ID"),
    identity: Identity = Depends(get_identity),
    engine: LedgerEngine = Depends(get_engine),
) -> DeleteResponse:
    """수금/반환 삭제 (파생 분개는 403)"""
    await engine.delete_manual_entry(identity, entry_id)
    return DeleteResponse(id=entry_id)


@router.get("/balance", response_model=BalanceResponse)
async def get_balance(
    identity: Identity = Depends(get_identity),
    engine: LedgerEngine = Depends(get_engine),
) -> BalanceResponse:
    """현재 잔액 (요청마다 전체 분개에서 다시 계산)"""
    entries = await engine.list_entries(identity)
    return BalanceResponse(
        balance=str(engine.compute_balance(entries)),
        totals={kind.value: str(total) for kind, total in kind_totals(entries).items()},
        durable=engine.is_durable,
    )


@router.get("/period", response_model=PeriodResponse)
async def get_period(
    year: int | None = Query(default=None, description="연도 (기본: 올해)"),
    month: int | None = Query(default=None, ge=1, le=12, description="월 (기본: 이번 달)"),
    identity: Identity = Depends(get_identity),
    engine: LedgerEngine = Depends(get_engine),
) -> PeriodResponse:
    """월별 수입/지출/순액"""
    today = date.today()
    target_year = year or today.year
    target_month = month or today.month

    aggregate = await engine.get_period_aggregate(identity, target_year, target_month)
    return PeriodResponse(
        year=target_year,
        month=target_month,
        inflow=str(aggregate.inflow),
        outflow=str(aggregate.outflow),
        net=str(aggregate.net),
    )


@router.post("/reconcile", response_model=ReconcileResponse)
async def reconcile(
    repair: bool = Query(default=False, description="True면 불일치 복구"),
    identity: Identity = Depends(get_identity),
    reconciler: LedgerReconciler = Depends(get_reconciler),
) -> ReconcileResponse:
    """원본 ↔ 파생 분개 정합 검사 (repair=true면 복구)"""
    if repair:
        report = await reconciler.repair(identity)
    else:
        report = await reconciler.scan(identity)
    return ReconcileResponse(**report.to_dict())
