"""
core/ledger/entry_builder.py 테스트
"""

from datetime import date
from decimal import Decimal

import pytest

from core.domain.errors import Forbidden
from core.domain.models import Expense, Payment, Staff
from core.ledger.entry_builder import LedgerEntryBuilder
from core.types import LedgerKind


@pytest.fixture
def builder() -> LedgerEntryBuilder:
    return LedgerEntryBuilder()


@pytest.fixture
def payment() -> Payment:
    staff = Staff(id="s1", owner_id="u1", name="Rahim", daily_rate=Decimal("600"))
    return Payment.create("u1", staff, date(2025, 1, 10), Decimal("500"), payment_id="p1")


class TestFromPayment:
    """급여 → SALARY_OUTFLOW"""

    def test_amount_is_amount_paid(self, builder: LedgerEntryBuilder, payment: Payment) -> None:
        """분개 금액은 expected가 아니라 실제 지급액"""
        entry = builder.from_payment(payment, "Rahim")

        assert entry.kind is LedgerKind.SALARY_OUTFLOW
        assert entry.amount == Decimal("500")
        assert entry.date == date(2025, 1, 10)
        assert entry.reference_id == "p1"
        assert entry.owner_id == "u1"
        assert entry.description == "Salary to Rahim"

    def test_unknown_staff_name(self, builder: LedgerEntryBuilder, payment: Payment) -> None:
        assert builder.from_payment(payment).description == "Salary to Staff"

    def test_explicit_entry_id(self, builder: LedgerEntryBuilder, payment: Payment) -> None:
        assert builder.from_payment(payment, entry_id="e1").id == "e1"


class TestFromExpense:
    """지출 → EXPENSE_OUTFLOW"""

    def test_expense_entry(self, builder: LedgerEntryBuilder) -> None:
        expense = Expense(id="x1", owner_id="u1", description="Rice", amount=Decimal("850"), date=date(2025, 1, 3))

        entry = builder.from_expense(expense)

        assert entry.kind is LedgerKind.EXPENSE_OUTFLOW
        assert entry.amount == Decimal("850")
        assert entry.reference_id == "x1"
        assert entry.description == "Bazar: Rice"


class TestManual:
    """수동 분개"""

    def test_inflow_default_description(self, builder: LedgerEntryBuilder) -> None:
        entry = builder.manual("u1", LedgerKind.INFLOW, Decimal("10000"), date(2025, 1, 1))

        assert entry.description == "Fund Collection"
        assert entry.reference_id is None

    def test_return_default_description(self, builder: LedgerEntryBuilder) -> None:
        entry = builder.manual("u1", LedgerKind.RETURN, Decimal("1"), date(2025, 1, 1), "   ")
        assert entry.description == "Return to Collector"

    def test_custom_description_trimmed(self, builder: LedgerEntryBuilder) -> None:
        entry = builder.manual("u1", LedgerKind.INFLOW, Decimal("1"), date(2025, 1, 1), "  From owner ")
        assert entry.description == "From owner"

    @pytest.mark.parametrize("kind", [LedgerKind.SALARY_OUTFLOW, LedgerKind.EXPENSE_OUTFLOW])
    def test_derived_kind_forbidden(self, builder: LedgerEntryBuilder, kind: LedgerKind) -> None:
        with pytest.raises(Forbidden):
            builder.manual("u1", kind, Decimal("1"), date(2025, 1, 1))


def test_staff_names() -> None:
    staff = [
        Staff(id="s1", owner_id="u1", name="A", daily_rate=Decimal("1")),
        Staff(id="s2", owner_id="u1", name="B", daily_rate=Decimal("1")),
    ]
    assert LedgerEntryBuilder.staff_names(staff) == {"s1": "A", "s2": "B"}
