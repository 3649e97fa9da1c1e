"""
core/ledger/reports.py 테스트
"""

from datetime import date
from decimal import Decimal

import pytest

from core.domain.models import Expense, LedgerEntry, Payment, Staff
from core.ledger.reports import (
    activity_log,
    dashboard_summary,
    kind_totals,
    monthly_breakdown,
    staff_summary,
)
from core.types import DueStatus, LedgerKind


@pytest.fixture
def rahim() -> Staff:
    return Staff(id="s1", owner_id="u1", name="Rahim", daily_rate=Decimal("600"))


@pytest.fixture
def karim() -> Staff:
    return Staff(id="s2", owner_id="u1", name="Karim", daily_rate=Decimal("500"))


@pytest.fixture
def payments(rahim: Staff, karim: Staff) -> list[Payment]:
    return [
        Payment.create("u1", rahim, date(2025, 1, 10), Decimal("500"), payment_id="p1"),
        Payment.create("u1", rahim, date(2025, 1, 12), Decimal("700"), payment_id="p2"),
        Payment.create("u1", karim, date(2025, 1, 11), Decimal("500"), payment_id="p3"),
    ]


@pytest.fixture
def expenses() -> list[Expense]:
    return [Expense(id="x1", owner_id="u1", description="Rice", amount=Decimal("300"), date=date(2025, 1, 11))]


def _entry(kind: LedgerKind, amount: str, day: date) -> LedgerEntry:
    return LedgerEntry(id=f"{kind.value}{day}", owner_id="u1", kind=kind, amount=Decimal(amount), date=day, description="")


class TestStaffSummary:
    """staff_summary 테스트"""

    def test_totals_and_history(self, rahim: Staff, payments: list[Payment]) -> None:
        summary = staff_summary(rahim, payments)

        assert summary.total_paid == Decimal("1200")
        assert summary.total_due == Decimal("0")  # 100 + (-100)
        assert summary.status is DueStatus.SETTLED
        assert [p.id for p in summary.payments] == ["p2", "p1"]
        assert summary.monthly_salary == Decimal("18000")

    def test_no_payments(self, karim: Staff) -> None:
        summary = staff_summary(karim, [])

        assert summary.total_paid == Decimal("0")
        assert summary.status is DueStatus.SETTLED
        assert summary.to_dict()["payments"] == []


class TestDashboardSummary:
    """dashboard_summary 테스트"""

    def test_totals(
        self, rahim: Staff, karim: Staff, payments: list[Payment], expenses: list[Expense]
    ) -> None:
        entries = [
            _entry(LedgerKind.INFLOW, "10000", date(2025, 1, 1)),
            _entry(LedgerKind.SALARY_OUTFLOW, "1700", date(2025, 1, 12)),
            _entry(LedgerKind.EXPENSE_OUTFLOW, "300", date(2025, 1, 11)),
        ]

        summary = dashboard_summary([rahim, karim], payments, expenses, entries)

        assert summary.balance == Decimal("8000")
        assert summary.total_inflow == Decimal("10000")
        assert summary.total_outflow == Decimal("2000")
        assert summary.total_salary_paid == Decimal("1700")
        assert summary.total_due == Decimal("0")
        assert summary.total_expenses == Decimal("300")
        assert summary.staff_count == 2
        assert summary.to_dict()["balance"] == "8000"

    def test_empty(self) -> None:
        summary = dashboard_summary([], [], [], [])
        assert summary.balance == Decimal("0")
        assert summary.staff_count == 0


class TestActivityLog:
    """activity_log 테스트"""

    def test_combined_newest_first(
        self, rahim: Staff, karim: Staff, payments: list[Payment], expenses: list[Expense]
    ) -> None:
        items = activity_log(payments, expenses, [rahim, karim])

        assert [i.date.day for i in items] == [12, 11, 11, 10]
        assert {i.kind for i in items} == {"payment", "expense"}
        assert items[0].label == "Rahim"
        assert items[0].status is DueStatus.EXTRA

    def test_deleted_staff_label(self, payments: list[Payment]) -> None:
        items = activity_log(payments, [], [])
        assert {i.label for i in items} == {"Unknown"}

    def test_limit(self, rahim: Staff, payments: list[Payment], expenses: list[Expense]) -> None:
        assert len(activity_log(payments, expenses, [rahim], limit=2)) == 2

    def test_expense_item_has_no_status(self, expenses: list[Expense]) -> None:
        item = activity_log([], expenses, [])[0]
        assert item.status is None
        assert item.to_dict()["status"] is None


class TestMonthlyBreakdown:
    """monthly_breakdown 테스트 (pandas 집계)"""

    def test_twelve_months(self) -> None:
        entries = [
            _entry(LedgerKind.INFLOW, "10000", date(2025, 1, 1)),
            _entry(LedgerKind.SALARY_OUTFLOW, "500", date(2025, 1, 10)),
            _entry(LedgerKind.RETURN, "2000", date(2025, 1, 31)),
            _entry(LedgerKind.EXPENSE_OUTFLOW, "300.25", date(2025, 3, 5)),
            _entry(LedgerKind.INFLOW, "999", date(2024, 1, 1)),
        ]

        rows = monthly_breakdown(entries, 2025)

        assert [r.month for r in rows] == list(range(1, 13))
        assert rows[0].inflow == Decimal("10000")
        assert rows[0].outflow == Decimal("2500")
        assert rows[0].net == Decimal("7500")
        assert rows[1].net == Decimal("0")
        assert rows[2].outflow == Decimal("300.25")
        assert isinstance(rows[2].outflow, Decimal)

    def test_empty_year(self) -> None:
        rows = monthly_breakdown([], 2025)

        assert len(rows) == 12
        assert all(r.inflow == 0 and r.outflow == 0 for r in rows)


def test_kind_totals() -> None:
    entries = [
        _entry(LedgerKind.INFLOW, "10", date(2025, 1, 1)),
        _entry(LedgerKind.RETURN, "3", date(2025, 1, 2)),
    ]

    totals = kind_totals(entries)

    assert totals[LedgerKind.INFLOW] == Decimal("10")
    assert totals[LedgerKind.RETURN] == Decimal("3")
    assert totals[LedgerKind.SALARY_OUTFLOW] == Decimal("0")
