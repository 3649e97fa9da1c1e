"""
Payments 라우트

급여 지급 기록/수정/삭제/조회
"""

from fastapi import APIRouter, Depends, Path, Query

from core.ledger.engine import LedgerEngine
from core.types import Identity
from web.dependencies import get_engine, get_identity
from web.models.requests import PaymentCreateRequest, PaymentUpdateRequest
from web.models.responses import (
    DeleteResponse,
    LedgerEntryResponse,
    PaymentCreatedResponse,
    PaymentResponse,
)

router = APIRouter(prefix="/api/payments", tags=["Payments"])


@router.get("", response_model=list[PaymentResponse])
async def list_payments(
    staff_id: str | None = Query(default=None, description="직원 ID 필터"),
    identity: Identity = Depends(get_identity),
    engine: LedgerEngine = Depends(get_engine),
) -> list[PaymentResponse]:
    """급여 기록 목록 (날짜 최신순)"""
    payments = await engine.list_payments(identity, staff_id=staff_id)
    return [PaymentResponse.from_payment(p) for p in payments]


@router.post("", response_model=PaymentCreatedResponse, status_code=201)
async def create_payment(
    request: PaymentCreateRequest,
    identity: Identity = Depends(get_identity),
    engine: LedgerEngine = Depends(get_engine),
) -> PaymentCreatedResponse:
    """급여 지급 기록

    같은 직원/같은 날짜 기록이 있으면 409 (existing_id로 기존 기록 안내).
    """
    payment, entry = await engine.record_payment(
        identity,
        request.staff_id,
        request.date,
        request.amount_paid,
        days_covered=request.days_covered,
    )
    return PaymentCreatedResponse(
        payment=PaymentResponse.from_payment(payment),
        entry=LedgerEntryResponse.from_entry(entry),
    )


@router.put("/{payment_id}", response_model=PaymentResponse)
async def update_payment(
    request: PaymentUpdateRequest,
    payment_id: str = Path(..., description="급여 기록 ID"),
    identity: Identity = Depends(get_identity),
    engine: LedgerEngine = Depends(get_engine),
) -> PaymentResponse:
    """급여 기록 수정 (연결된 분개 함께 갱신)"""
    payment = await engine.update_payment(
        identity,
        payment_id,
        request.amount_paid,
        request.date,
        days_covered=request.days_covered,
    )
    return PaymentResponse.from_payment(payment)


@router.delete("/{payment_id}", response_model=DeleteResponse)
async def delete_payment(
    payment_id: str = Path(..., description="급여 기록 ID"),
    identity: Identity = Depends(get_identity),
    engine: LedgerEngine = Depends(get_engine),
) -> DeleteResponse:
    """급여 기록 삭제 (연결된 분개 함께 삭제)"""
    await engine.delete_payment(identity, payment_id)
    return DeleteResponse(id=payment_id)
