"""
core/domain/models.py 테스트

Payment의 expected/due 계산, 상태 분류, dict 직렬화 형식 확인
"""

from datetime import date
from decimal import Decimal

import pytest

from core.domain.models import (
    Expense,
    LedgerEntry,
    Payment,
    Staff,
    classify_due,
    new_id,
)
from core.types import DueStatus, LedgerKind


@pytest.fixture
def staff() -> Staff:
    return Staff(id="s1", owner_id="u1", name="Rahim", daily_rate=Decimal("600"))


class TestClassifyDue:
    """classify_due 테스트"""

    @pytest.mark.parametrize(
        "due, status",
        [
            (Decimal("100"), DueStatus.DUE),
            (Decimal("-50"), DueStatus.EXTRA),
            (Decimal("0"), DueStatus.SETTLED),
        ],
    )
    def test_sign(self, due: Decimal, status: DueStatus) -> None:
        assert classify_due(due) is status


class TestPaymentCreate:
    """Payment.create 테스트"""

    def test_underpaid(self, staff: Staff) -> None:
        """600 × 1일, 500 지급 → due 100"""
        payment = Payment.create("u1", staff, date(2025, 1, 10), Decimal("500"))

        assert payment.expected_amount == Decimal("600")
        assert payment.due_amount == Decimal("100")
        assert payment.status is DueStatus.DUE

    def test_multi_day_overpaid(self, staff: Staff) -> None:
        """600 × 2일, 1500 지급 → due -300 (Extra)"""
        payment = Payment.create("u1", staff, date(2025, 1, 10), Decimal("1500"), days_covered=2)

        assert payment.expected_amount == Decimal("1200")
        assert payment.due_amount == Decimal("-300")
        assert payment.status is DueStatus.EXTRA

    def test_settled(self, staff: Staff) -> None:
        payment = Payment.create("u1", staff, date(2025, 1, 10), Decimal("600"))
        assert payment.status is DueStatus.SETTLED

    def test_explicit_id(self, staff: Staff) -> None:
        payment = Payment.create("u1", staff, date(2025, 1, 10), Decimal("1"), payment_id="p1")
        assert payment.id == "p1"
        assert payment.staff_id == "s1"


class TestSerialization:
    """to_dict / from_dict 형식"""

    def test_payment_dict_uses_strings(self, staff: Staff) -> None:
        """Decimal은 문자열, 날짜는 YYYY-MM-DD"""
        data = Payment.create("u1", staff, date(2025, 1, 10), Decimal("500"), payment_id="p1").to_dict()

        assert data["date"] == "2025-01-10"
        assert data["amount_paid"] == "500"
        assert data["due_amount"] == "100"
        assert data["owner_id"] == "u1"
        assert Payment.from_dict(data).due_amount == Decimal("100")

    def test_staff_from_dict_defaults(self) -> None:
        """days_worked / created_at 누락 허용"""
        staff = Staff.from_dict(
            {"id": "s1", "owner_id": "u1", "name": "A", "daily_rate": "600"}
        )

        assert staff.days_worked == 0
        assert staff.created_at.tzinfo is not None

    def test_staff_round_trip_keeps_timestamp(self, staff: Staff) -> None:
        assert Staff.from_dict(staff.to_dict()).created_at == staff.created_at

    def test_ledger_entry_kind_as_string(self) -> None:
        entry = LedgerEntry(
            id="e1",
            owner_id="u1",
            kind=LedgerKind.RETURN,
            amount=Decimal("2000"),
            date=date(2025, 1, 31),
            description="Return to Collector",
        )
        data = entry.to_dict()

        assert data["kind"] == "RETURN"
        assert data["reference_id"] is None
        assert LedgerEntry.from_dict(data).kind is LedgerKind.RETURN

    def test_expense_from_dict_missing_description(self) -> None:
        expense = Expense.from_dict(
            {"id": "x1", "owner_id": "u1", "amount": "90.5", "date": "2025-01-02"}
        )
        assert expense.description == ""
        assert expense.amount == Decimal("90.5")


class TestLedgerEntry:
    """LedgerEntry 속성"""

    @pytest.mark.parametrize(
        "kind, signed",
        [
            (LedgerKind.INFLOW, Decimal("100")),
            (LedgerKind.SALARY_OUTFLOW, Decimal("-100")),
            (LedgerKind.EXPENSE_OUTFLOW, Decimal("-100")),
            (LedgerKind.RETURN, Decimal("-100")),
        ],
    )
    def test_signed_amount(self, kind: LedgerKind, signed: Decimal) -> None:
        entry = LedgerEntry("e", "u", kind, Decimal("100"), date(2025, 1, 1), "")
        assert entry.signed_amount == signed


def test_new_id_unique() -> None:
    assert len({new_id() for _ in range(100)}) == 100
