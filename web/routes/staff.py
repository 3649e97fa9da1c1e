"""
Staff 라우트

직원 등록/수정/삭제/조회 및 직원별 지급 요약
"""

from fastapi import APIRouter, Depends, Path

from core.ledger.engine import LedgerEngine
from core.ledger.staff import StaffRegistry
from core.types import Identity
from web.dependencies import get_engine, get_identity, get_registry
from web.models.requests import StaffCreateRequest, StaffUpdateRequest
from web.models.responses import (
    DeleteResponse,
    PaymentResponse,
    StaffResponse,
    StaffSummaryResponse,
)
from web.services.dashboard_service import DashboardService

router = APIRouter(prefix="/api/staff", tags=["Staff"])


@router.get("", response_model=list[StaffResponse])
async def list_staff(
    identity: Identity = Depends(get_identity),
    registry: StaffRegistry = Depends(get_registry),
) -> list[StaffResponse]:
    """직원 목록 (등록순)"""
    return [StaffResponse.from_staff(s) for s in await registry.list_staff(identity)]


@router.post("", response_model=StaffResponse, status_code=201)
async def create_staff(
    request: StaffCreateRequest,
    identity: Identity = Depends(get_identity),
    registry: StaffRegistry = Depends(get_registry),
) -> StaffResponse:
    """직원 등록 (daily_rate 또는 monthly_salary)"""
    staff = await registry.register_staff(
        identity,
        request.name,
        daily_rate=request.daily_rate,
        days_worked=request.days_worked,
        monthly_salary=request.monthly_salary,
    )
    return StaffResponse.from_staff(staff)


@router.get("/{staff_id}", response_model=StaffResponse)
async def get_staff(
    staff_id: str = Path(..., description="직원 ID"),
    identity: Identity = Depends(get_identity),
    registry: StaffRegistry = Depends(get_registry),
) -> StaffResponse:
    """직원 단건 조회"""
    return StaffResponse.from_staff(await registry.get_staff(identity, staff_id))


@router.put("/{staff_id}", response_model=StaffResponse)
async def update_staff(
    request: StaffUpdateRequest,
    staff_id: str = Path(..., description="직원 ID"),
    identity: Identity = Depends(get_identity),
    registry: StaffRegistry = Depends(get_registry),
) -> StaffResponse:
    """직원 수정 (지정한 필드만)"""
    staff = await registry.update_staff(
        identity,
        staff_id,
        name=request.name,
        daily_rate=request.daily_rate,
        days_worked=request.days_worked,
    )
    return StaffResponse.from_staff(staff)


@router.delete("/{staff_id}", response_model=DeleteResponse)
async def delete_staff(
    staff_id: str = Path(..., description="직원 ID"),
    identity: Identity = Depends(get_identity),
    registry: StaffRegistry = Depends(get_registry),
) -> DeleteResponse:
    """직원 삭제 (정책에 따라 급여 기록/분개 함께 삭제 또는 403)"""
    cascaded = await registry.delete_staff(identity, staff_id)
    return DeleteResponse(id=staff_id, cascaded=cascaded)


@router.get("/{staff_id}/summary", response_model=StaffSummaryResponse)
async def get_staff_summary(
    staff_id: str = Path(..., description="직원 ID"),
    identity: Identity = Depends(get_identity),
    engine: LedgerEngine = Depends(get_engine),
    registry: StaffRegistry = Depends(get_registry),
) -> StaffSummaryResponse:
    """직원별 지급 요약 (총 지급액, 미지급액, 지급 이력)"""
    summary = await DashboardService(engine, registry).get_staff_summary(identity, staff_id)
    return StaffSummaryResponse(
        staff=StaffResponse.from_staff(summary.staff),
        total_paid=str(summary.total_paid),
        total_due=str(summary.total_due),
        status=summary.status.value,
        monthly_salary=str(summary.monthly_salary),
        payments=[PaymentResponse.from_payment(p) for p in summary.payments],
    )
