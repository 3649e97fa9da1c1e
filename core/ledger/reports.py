"""
Ledger 리포트

대시보드 / 직원별 이력 / 활동 로그 / 월별 집계.
모두 레코드 목록에 대한 순수 함수 (저장소 접근 없음).
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

import pandas as pd

from core.constants import ZERO, Defaults
from core.domain.models import Expense, LedgerEntry, Payment, Staff, classify_due
from core.ledger.balance import fold_entries
from core.ledger.types import INFLOW_KINDS
from core.types import DueStatus, LedgerKind


# =============================================================================
# 결과 타입
# =============================================================================


@dataclass(frozen=True)
class StaffSummary:
    """직원 1명의 지급 요약"""

    staff: Staff
    total_paid: Decimal
    total_due: Decimal
    status: DueStatus
    payments: list[Payment] = field(default_factory=list)

    @property
    def monthly_salary(self) -> Decimal:
        """일급 × 30일"""
        return self.staff.daily_rate * Defaults.DAYS_PER_MONTH

    def to_dict(self) -> dict[str, Any]:
        return {
            "staff": self.staff.to_dict(),
            "total_paid": str(self.total_paid),
            "total_due": str(self.total_due),
            "status": self.status.value,
            "monthly_salary": str(self.monthly_salary),
            "payments": [p.to_dict() for p in self.payments],
        }


@dataclass(frozen=True)
class DashboardSummary:
    """대시보드 합계"""

    balance: Decimal
    total_inflow: Decimal
    total_outflow: Decimal
    total_salary_paid: Decimal
    total_due: Decimal
    total_expenses: Decimal
    staff_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "balance": str(self.balance),
            "total_inflow": str(self.total_inflow),
            "total_outflow": str(self.total_outflow),
            "total_salary_paid": str(self.total_salary_paid),
            "total_due": str(self.total_due),
            "total_expenses": str(self.total_expenses),
            "staff_count": self.staff_count,
        }


@dataclass(frozen=True)
class ActivityItem:
    """활동 로그 1건 (급여 또는 지출)"""

    kind: str  # "payment" | "expense"
    record_id: str
    date: date
    amount: Decimal
    label: str
    status: DueStatus | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "record_id": self.record_id,
            "date": self.date.isoformat(),
            "amount": str(self.amount),
            "label": self.label,
            "status": self.status.value if self.status else None,
        }


@dataclass(frozen=True)
class MonthlyRow:
    """월별 집계 1행"""

    month: int
    inflow: Decimal
    outflow: Decimal
    net: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "inflow": str(self.inflow),
            "outflow": str(self.outflow),
            "net": str(self.net),
        }


# =============================================================================
# 리포트 함수
# =============================================================================


def staff_summary(staff: Staff, payments: Iterable[Payment]) -> StaffSummary:
    """직원별 지급 요약

    Args:
        staff: 대상 직원
        payments: 급여 기록 (다른 직원 기록이 섞여 있어도 됨)

    Returns:
        StaffSummary (지급 이력은 최신순)
    """
    own = [p for p in payments if p.staff_id == staff.id]
    total_paid = sum((p.amount_paid for p in own), ZERO)
    total_due = sum((p.due_amount for p in own), ZERO)

    return StaffSummary(
        staff=staff,
        total_paid=total_paid,
        total_due=total_due,
        status=classify_due(total_due),
        payments=sorted(own, key=lambda p: p.date, reverse=True),
    )


def dashboard_summary(
    staff: list[Staff],
    payments: list[Payment],
    expenses: list[Expense],
    entries: list[LedgerEntry],
) -> DashboardSummary:
    """대시보드 합계

    잔액과 수입/지출 합계는 분개 기준, 급여/미지급/지출 합계는 원본 기록 기준.
    """
    totals = fold_entries(entries)

    return DashboardSummary(
        balance=totals.net,
        total_inflow=totals.inflow,
        total_outflow=totals.outflow,
        total_salary_paid=sum((p.amount_paid for p in payments), ZERO),
        total_due=sum((p.due_amount for p in payments), ZERO),
        total_expenses=sum((e.amount for e in expenses), ZERO),
        staff_count=len(staff),
    )


def activity_log(
    payments: Iterable[Payment],
    expenses: Iterable[Expense],
    staff: Iterable[Staff],
    limit: int | None = None,
) -> list[ActivityItem]:
    """급여 + 지출 통합 로그 (날짜 최신순)

    삭제된 직원의 급여는 "Unknown"으로 표시.
    """
    names = {s.id: s.name for s in staff}

    items = [
        ActivityItem(
            kind="payment",
            record_id=p.id,
            date=p.date,
            amount=p.amount_paid,
            label=names.get(p.staff_id, "Unknown"),
            status=p.status,
        )
        for p in payments
    ]
    items.extend(
        ActivityItem(
            kind="expense",
            record_id=e.id,
            date=e.date,
            amount=e.amount,
            label=e.description,
        )
        for e in expenses
    )

    items.sort(key=lambda item: item.date, reverse=True)
    return items[:limit] if limit is not None else items


def monthly_breakdown(entries: Iterable[LedgerEntry], year: int) -> list[MonthlyRow]:
    """연간 월별 수입/지출/순액 (1~12월 전체, 기록 없는 달은 0)

    Args:
        entries: 분개 목록
        year: 대상 연도

    Returns:
        12개 MonthlyRow
    """
    frame = pd.DataFrame(
        [
            {
                "month": e.date.month,
                "direction": "inflow" if e.kind in INFLOW_KINDS else "outflow",
                "amount": e.amount,
            }
            for e in entries
            if e.date.year == year
        ],
        columns=["month", "direction", "amount"],
    )

    totals: dict[tuple[int, str], Decimal] = {}
    if not frame.empty:
        # Decimal 정밀도 유지를 위해 object 열을 파이썬 합으로 집계
        grouped = frame.groupby(["month", "direction"])["amount"].agg(
            lambda s: sum(s, ZERO)
        )
        totals = {(int(m), str(d)): v for (m, d), v in grouped.items()}

    rows = []
    for month in range(1, 13):
        inflow = totals.get((month, "inflow"), ZERO)
        outflow = totals.get((month, "outflow"), ZERO)
        rows.append(MonthlyRow(month=month, inflow=inflow, outflow=outflow, net=inflow - outflow))
    return rows


def kind_totals(entries: Iterable[LedgerEntry]) -> dict[LedgerKind, Decimal]:
    """분개 종류별 합계"""
    totals = {kind: ZERO for kind in LedgerKind}
    for entry in entries:
        totals[entry.kind] += entry.amount
    return totals
