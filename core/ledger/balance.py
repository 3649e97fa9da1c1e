"""
잔액 계산

분개 집합에 대한 순수 fold. 누적 잔액을 따로 저장하지 않고
항상 전체 분개 집합에서 다시 계산 (동시 삭제 후 불일치 방지).
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from core.constants import ZERO
from core.domain.models import LedgerEntry
from core.ledger.types import INFLOW_KINDS, OUTFLOW_KINDS
from core.utils.dates import in_month


@dataclass(frozen=True)
class PeriodAggregate:
    """기간 집계 (수입 / 지출 / 순액)"""

    inflow: Decimal
    outflow: Decimal
    net: Decimal

    def to_dict(self) -> dict[str, str]:
        return {
            "inflow": str(self.inflow),
            "outflow": str(self.outflow),
            "net": str(self.net),
        }


def fold_entries(entries: Iterable[LedgerEntry]) -> PeriodAggregate:
    """분개 종류별로 수입/지출 합산

    INFLOW → inflow, SALARY_OUTFLOW / EXPENSE_OUTFLOW / RETURN → outflow
    """
    inflow = ZERO
    outflow = ZERO
    for entry in entries:
        if entry.kind in INFLOW_KINDS:
            inflow += entry.amount
        elif entry.kind in OUTFLOW_KINDS:
            outflow += entry.amount
    return PeriodAggregate(inflow=inflow, outflow=outflow, net=inflow - outflow)


def compute_balance(entries: Iterable[LedgerEntry]) -> Decimal:
    """현재 잔액 (Σ INFLOW − Σ 지출 종류)

    순서와 무관한 순수 함수.

    Args:
        entries: 한 소유자의 전체 분개

    Returns:
        잔액 (음수 가능)
    """
    return fold_entries(entries).net


def compute_period_aggregate(
    entries: Iterable[LedgerEntry],
    year: int,
    month: int,
) -> PeriodAggregate:
    """월별 집계

    타임스탬프 범위가 아니라 달력 날짜(연/월)로 필터링.

    Args:
        entries: 분개 목록
        year: 연도
        month: 월 (1~12)

    Returns:
        PeriodAggregate(inflow, outflow, net)

    Raises:
        ValueError: month가 1~12 범위 밖인 경우
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month는 1~12 사이여야 합니다: {month}")

    return fold_entries(e for e in entries if in_month(e.date, year, month))
