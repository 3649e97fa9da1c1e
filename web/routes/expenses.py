"""
Expenses 라우트

시장(바자르) 지출 기록/삭제/조회
"""

from fastapi import APIRouter, Depends, Path

from core.ledger.engine import LedgerEngine
from core.types import Identity
from web.dependencies import get_engine, get_identity
from web.models.requests import ExpenseCreateRequest
from web.models.responses import (
    DeleteResponse,
    ExpenseCreatedResponse,
    ExpenseResponse,
    LedgerEntryResponse,
)

router = APIRouter(prefix="/api/expenses", tags=["Expenses"])


@router.get("", response_model=list[ExpenseResponse])
async def list_expenses(
    identity: Identity = Depends(get_identity),
    engine: LedgerEngine = Depends(get_engine),
) -> list[ExpenseResponse]:
    """지출 목록 (날짜 최신순)"""
    return [ExpenseResponse.from_expense(e) for e in await engine.list_expenses(identity)]


@router.post("", response_model=ExpenseCreatedResponse, status_code=201)
async def create_expense(
    request: ExpenseCreateRequest,
    identity: Identity = Depends(get_identity),
    engine: LedgerEngine = Depends(get_engine),
) -> ExpenseCreatedResponse:
    """지출 기록 (EXPENSE_OUTFLOW 분개 함께 생성)"""
    expense, entry = await engine.record_expense(
        identity, request.description, request.amount, request.date
    )
    return ExpenseCreatedResponse(
        expense=ExpenseResponse.from_expense(expense),
        entry=LedgerEntryResponse.from_entry(entry),
    )


@router.delete("/{expense_id}", response_model=DeleteResponse)
async def delete_expense(
    expense_id: str = Path(..., description="지출 ID"),
    identity: Identity = Depends(get_identity),
    engine: LedgerEngine = Depends(get_engine),
) -> DeleteResponse:
    """지출 삭제 (연결된 분개 함께 삭제)"""
    await engine.delete_expense(identity, expense_id)
    return DeleteResponse(id=expense_id)
