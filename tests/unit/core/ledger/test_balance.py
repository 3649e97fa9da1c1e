"""
core/ledger/balance.py 테스트

잔액은 순서와 무관한 순수 fold, 월별 집계는 달력 날짜 기준
"""

import random
from datetime import date
from decimal import Decimal

import pytest

from core.domain.models import LedgerEntry
from core.ledger.balance import (
    PeriodAggregate,
    compute_balance,
    compute_period_aggregate,
    fold_entries,
)
from core.types import LedgerKind


def _entry(kind: LedgerKind, amount: str, day: date) -> LedgerEntry:
    return LedgerEntry(
        id=f"{kind.value}-{amount}-{day}",
        owner_id="u1",
        kind=kind,
        amount=Decimal(amount),
        date=day,
        description="",
    )


@pytest.fixture
def january_entries() -> list[LedgerEntry]:
    """1/1 수금 10000, 1/10 급여 500, 2/1 지출 300"""
    return [
        _entry(LedgerKind.INFLOW, "10000", date(2025, 1, 1)),
        _entry(LedgerKind.SALARY_OUTFLOW, "500", date(2025, 1, 10)),
        _entry(LedgerKind.EXPENSE_OUTFLOW, "300", date(2025, 2, 1)),
    ]


class TestComputeBalance:
    """compute_balance 테스트"""

    def test_empty(self) -> None:
        assert compute_balance([]) == Decimal("0")

    def test_inflow_minus_outflows(self) -> None:
        entries = [
            _entry(LedgerKind.INFLOW, "10000", date(2025, 1, 1)),
            _entry(LedgerKind.SALARY_OUTFLOW, "500", date(2025, 1, 10)),
            _entry(LedgerKind.EXPENSE_OUTFLOW, "850.50", date(2025, 1, 11)),
            _entry(LedgerKind.RETURN, "2000", date(2025, 1, 31)),
        ]
        assert compute_balance(entries) == Decimal("6649.50")

    def test_may_be_negative(self) -> None:
        """수금 없이 급여만 → 음수"""
        assert compute_balance([_entry(LedgerKind.SALARY_OUTFLOW, "500", date(2025, 1, 10))]) == Decimal("-500")

    def test_order_independent(self, january_entries: list[LedgerEntry]) -> None:
        expected = compute_balance(january_entries)
        shuffled = list(january_entries)
        random.Random(7).shuffle(shuffled)

        assert compute_balance(shuffled) == expected
        assert compute_balance(reversed(january_entries)) == expected

    def test_accepts_generator(self, january_entries: list[LedgerEntry]) -> None:
        assert compute_balance(e for e in january_entries) == Decimal("9200")


class TestPeriodAggregate:
    """compute_period_aggregate 테스트"""

    def test_january(self, january_entries: list[LedgerEntry]) -> None:
        aggregate = compute_period_aggregate(january_entries, 2025, 1)

        assert aggregate == PeriodAggregate(
            inflow=Decimal("10000"),
            outflow=Decimal("500"),
            net=Decimal("9500"),
        )

    def test_february(self, january_entries: list[LedgerEntry]) -> None:
        aggregate = compute_period_aggregate(january_entries, 2025, 2)
        assert aggregate.outflow == Decimal("300")
        assert aggregate.net == Decimal("-300")

    def test_other_year_empty(self, january_entries: list[LedgerEntry]) -> None:
        aggregate = compute_period_aggregate(january_entries, 2024, 1)
        assert aggregate == PeriodAggregate(Decimal("0"), Decimal("0"), Decimal("0"))

    @pytest.mark.parametrize("month", [0, 13])
    def test_invalid_month(self, january_entries: list[LedgerEntry], month: int) -> None:
        with pytest.raises(ValueError):
            compute_period_aggregate(january_entries, 2025, month)

    def test_to_dict(self) -> None:
        aggregate = PeriodAggregate(Decimal("1"), Decimal("2"), Decimal("-1"))
        assert aggregate.to_dict() == {"inflow": "1", "outflow": "2", "net": "-1"}

    def test_fold_counts_return_as_outflow(self) -> None:
        totals = fold_entries([_entry(LedgerKind.RETURN, "70", date(2025, 1, 2))])
        assert totals.outflow == Decimal("70")
