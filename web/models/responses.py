"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화.
금액은 정밀도 유지를 위해 문자열로 응답.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from core.domain.models import Expense, LedgerEntry, Payment, Staff
from core.ledger.reports import ActivityItem, MonthlyRow
from core.types import Identity


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    version: str = Field(..., description="API 버전")
    timestamp: datetime = Field(..., description="응답 시간 (UTC)")


class ErrorResponse(BaseModel):
    """오류 응답"""

    error: str = Field(..., description="오류 코드 (DUPLICATE_ENTRY 등)")
    detail: str = Field(..., description="오류 메시지")
    existing_id: str | None = Field(default=None, description="중복 시 기존 기록 ID")


# =============================================================================
# 인증
# =============================================================================


class IdentityResponse(BaseModel):
    """현재 사용자"""

    id: str = Field(..., description="Identity ID")
    display_name: str = Field(..., description="표시 이름")
    is_guest: bool = Field(..., description="게스트(데모) 여부")
    durable: bool = Field(..., description="기록이 세션 종료 후에도 유지되는지")

    @classmethod
    def from_identity(cls, identity: Identity) -> "IdentityResponse":
        return cls(
            id=identity.id,
            display_name=identity.display_name,
            is_guest=identity.is_guest,
            durable=not identity.is_guest,
        )


class TokenResponse(BaseModel):
    """로그인 응답"""

    access_token: str = Field(..., description="Bearer 토큰")
    token_type: str = Field(default="bearer", description="토큰 타입")
    expires_at: datetime = Field(..., description="만료 시각 (UTC)")
    identity: IdentityResponse


# =============================================================================
# 직원 / 급여 / 지출
# =============================================================================


class StaffResponse(BaseModel):
    """직원 응답"""

    id: str
    name: str
    daily_rate: str = Field(..., description="일급")
    days_worked: int = Field(..., description="근무 일수")
    created_at: datetime

    @classmethod
    def from_staff(cls, staff: Staff) -> "StaffResponse":
        return cls(
            id=staff.id,
            name=staff.name,
            daily_rate=str(staff.daily_rate),
            days_worked=staff.days_worked,
            created_at=staff.created_at,
        )


class PaymentResponse(BaseModel):
    """급여 기록 응답"""

    id: str
    staff_id: str
    date: str = Field(..., description="지급일 (YYYY-MM-DD)")
    amount_paid: str
    days_covered: int
    expected_amount: str
    due_amount: str = Field(..., description="미지급액 (음수면 초과 지급)")
    status: str = Field(..., description="Due / Extra / Settled")

    @classmethod
    def from_payment(cls, payment: Payment) -> "PaymentResponse":
        return cls(
            id=payment.id,
            staff_id=payment.staff_id,
            date=payment.date.isoformat(),
            amount_paid=str(payment.amount_paid),
            days_covered=payment.days_covered,
            expected_amount=str(payment.expected_amount),
            due_amount=str(payment.due_amount),
            status=payment.status.value,
        )


class ExpenseResponse(BaseModel):
    """지출 응답"""

    id: str
    description: str
    amount: str
    date: str

    @classmethod
    def from_expense(cls, expense: Expense) -> "ExpenseResponse":
        return cls(
            id=expense.id,
            description=expense.description,
            amount=str(expense.amount),
            date=expense.date.isoformat(),
        )


class LedgerEntryResponse(BaseModel):
    """분개 응답"""

    id: str
    kind: str = Field(..., description="INFLOW / SALARY_OUTFLOW / EXPENSE_OUTFLOW / RETURN")
    amount: str
    date: str
    description: str
    reference_id: str | None = Field(default=None, description="원본 Payment/Expense ID")
    is_derived: bool = Field(..., description="원본에서 파생된 분개 (직접 수정 불가)")

    @classmethod
    def from_entry(cls, entry: LedgerEntry) -> "LedgerEntryResponse":
        return cls(
            id=entry.id,
            kind=entry.kind.value,
            amount=str(entry.amount),
            date=entry.date.isoformat(),
            description=entry.description,
            reference_id=entry.reference_id,
            is_derived=entry.is_derived,
        )


class PaymentCreatedResponse(BaseModel):
    """급여 기록 생성 응답 (파생 분개 포함)"""

    payment: PaymentResponse
    entry: LedgerEntryResponse


class ExpenseCreatedResponse(BaseModel):
    """지출 기록 생성 응답 (파생 분개 포함)"""

    expense: ExpenseResponse
    entry: LedgerEntryResponse


class DeleteResponse(BaseModel):
    """삭제 응답"""

    id: str
    deleted: bool = True
    cascaded: int = Field(default=0, description="함께 삭제된 급여 기록 수")


# =============================================================================
# 잔액 / 리포트
# =============================================================================


class BalanceResponse(BaseModel):
    """잔액 응답"""

    balance: str = Field(..., description="현재 잔액 (음수 가능)")
    totals: dict[str, str] = Field(default_factory=dict, description="분개 종류별 합계")
    durable: bool = Field(..., description="영속 저장소 여부")


class PeriodResponse(BaseModel):
    """월별 집계 응답"""

    year: int
    month: int
    inflow: str
    outflow: str
    net: str


class StaffSummaryResponse(BaseModel):
    """직원별 지급 요약"""

    staff: StaffResponse
    total_paid: str
    total_due: str
    status: str
    monthly_salary: str
    payments: list[PaymentResponse] = Field(default_factory=list)


class DashboardResponse(BaseModel):
    """대시보드 응답"""

    balance: str
    total_inflow: str
    total_outflow: str
    total_salary_paid: str
    total_due: str
    total_expenses: str
    staff_count: int
    durable: bool = Field(..., description="영속 저장소 여부 (게스트는 false)")


class ActivityResponse(BaseModel):
    """활동 로그 1건"""

    kind: str = Field(..., description="payment / expense")
    record_id: str
    date: str
    amount: str
    label: str = Field(..., description="직원 이름 또는 지출 내용")
    status: str | None = None

    @classmethod
    def from_item(cls, item: ActivityItem) -> "ActivityResponse":
        return cls(**item.to_dict())


class MonthlyRowResponse(BaseModel):
    """월별 집계 1행"""

    month: int
    inflow: str
    outflow: str
    net: str

    @classmethod
    def from_row(cls, row: MonthlyRow) -> "MonthlyRowResponse":
        return cls(**row.to_dict())


class MonthlyBreakdownResponse(BaseModel):
    """연간 월별 집계"""

    year: int
    months: list[MonthlyRowResponse]


class ReconcileResponse(BaseModel):
    """정합 검사/복구 결과"""

    is_clean: bool
    repaired: bool
    orphan_entries: int
    missing_entries: int
    mismatches: int
    duplicate_entries: int
    drifts: list[dict[str, Any]] = Field(default_factory=list)
