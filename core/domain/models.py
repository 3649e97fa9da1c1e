"""
도메인 레코드 모델

Staff, Payment, Expense, LedgerEntry 정의.
Record Store에는 to_dict() 결과(JSON 호환 dict)로 저장됨:
- Decimal → 문자열
- 날짜 → "YYYY-MM-DD"
- 타임스탬프 → ISO-8601 (UTC)
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import uuid4

from core.types import DueStatus, LedgerKind
from core.utils.dates import now_utc, parse_date, parse_timestamp


def new_id() -> str:
    """레코드 ID 생성 (불투명 문자열)"""
    return str(uuid4())


def classify_due(due_amount: Decimal) -> DueStatus:
    """due 부호로 상태 분류

    due > 0 → Due, due < 0 → Extra, due == 0 → Settled
    """
    if due_amount > 0:
        return DueStatus.DUE
    if due_amount < 0:
        return DueStatus.EXTRA
    return DueStatus.SETTLED


@dataclass
class Staff:
    """급여를 받는 직원"""

    id: str
    owner_id: str
    name: str
    daily_rate: Decimal
    days_worked: int = 0
    created_at: datetime = field(default_factory=now_utc)

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "name": self.name,
            "daily_rate": str(self.daily_rate),
            "days_worked": self.days_worked,
            "created_at": self.created_at.isoformat(),
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Staff":
        """딕셔너리에서 생성 (역직렬화용)"""
        return Staff(
            id=data["id"],
            owner_id=data["owner_id"],
            name=data["name"],
            daily_rate=Decimal(str(data["daily_rate"])),
            days_worked=int(data.get("days_worked", 0)),
            created_at=parse_timestamp(data["created_at"]) if data.get("created_at") else now_utc(),
        )


@dataclass
class Payment:
    """직원 1명에 대한 1일자 급여 지급

    expected_amount = daily_rate × days_covered
    due_amount = expected_amount - amount_paid (음수면 초과 지급)
    """

    id: str
    owner_id: str
    staff_id: str
    date: date
    amount_paid: Decimal
    days_covered: int
    expected_amount: Decimal
    due_amount: Decimal

    @staticmethod
    def create(
        owner_id: str,
        staff: Staff,
        day: date,
        amount_paid: Decimal,
        days_covered: int = 1,
        payment_id: str | None = None,
    ) -> "Payment":
        """새 Payment 생성 (expected/due 계산 포함)"""
        expected = staff.daily_rate * days_covered
        return Payment(
            id=payment_id or new_id(),
            owner_id=owner_id,
            staff_id=staff.id,
            date=day,
            amount_paid=amount_paid,
            days_covered=days_covered,
            expected_amount=expected,
            due_amount=expected - amount_paid,
        )

    @property
    def status(self) -> DueStatus:
        """지급 상태 (Due / Extra / Settled)"""
        return classify_due(self.due_amount)

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "staff_id": self.staff_id,
            "date": self.date.isoformat(),
            "amount_paid": str(self.amount_paid),
            "days_covered": self.days_covered,
            "expected_amount": str(self.expected_amount),
            "due_amount": str(self.due_amount),
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Payment":
        """딕셔너리에서 생성 (역직렬화용)"""
        return Payment(
            id=data["id"],
            owner_id=data["owner_id"],
            staff_id=data["staff_id"],
            date=parse_date(data["date"]),
            amount_paid=Decimal(str(data["amount_paid"])),
            days_covered=int(data.get("days_covered", 1)),
            expected_amount=Decimal(str(data["expected_amount"])),
            due_amount=Decimal(str(data["due_amount"])),
        )


@dataclass
class Expense:
    """시장(바자르) / 운영 지출 - 직원과 무관"""

    id: str
    owner_id: str
    description: str
    amount: Decimal
    date: date

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "description": self.description,
            "amount": str(self.amount),
            "date": self.date.isoformat(),
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Expense":
        return Expense(
            id=data["id"],
            owner_id=data["owner_id"],
            description=data.get("description", ""),
            amount=Decimal(str(data["amount"])),
            date=parse_date(data["date"]),
        )


@dataclass
class LedgerEntry:
    """잔액 계산의 기준이 되는 분개

    SALARY_OUTFLOW / EXPENSE_OUTFLOW는 reference_id로 원본을 가리키며
    원본 삭제로만 제거 가능.
    """

    id: str
    owner_id: str
    kind: LedgerKind
    amount: Decimal
    date: date
    description: str
    reference_id: str | None = None

    @property
    def is_derived(self) -> bool:
        """Payment/Expense에서 파생된 분개인지"""
        return self.kind.is_derived

    @property
    def signed_amount(self) -> Decimal:
        """잔액 기여분 (INFLOW는 +, 나머지는 -)"""
        return self.amount if self.kind.is_inflow else -self.amount

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "kind": self.kind.value,
            "amount": str(self.amount),
            "date": self.date.isoformat(),
            "description": self.description,
            "reference_id": self.reference_id,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "LedgerEntry":
        return LedgerEntry(
            id=data["id"],
            owner_id=data["owner_id"],
            kind=LedgerKind(data["kind"]),
            amount=Decimal(str(data["amount"])),
            date=parse_date(data["date"]),
            description=data.get("description", ""),
            reference_id=data.get("reference_id"),
        )
