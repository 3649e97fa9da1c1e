"""
분개 생성기

Payment / Expense / 수동 입력을 LedgerEntry로 변환
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from core.domain.errors import Forbidden
from core.domain.models import Expense, LedgerEntry, Payment, Staff, new_id
from core.ledger.types import (
    DEFAULT_DESCRIPTIONS,
    EXPENSE_DESCRIPTION_PREFIX,
    MANUAL_KINDS,
    SALARY_DESCRIPTION_PREFIX,
)
from core.types import LedgerKind

logger = logging.getLogger(__name__)


class LedgerEntryBuilder:
    """원본 레코드를 분개로 변환

    파생 분개는 원본과 1:1 (reference_id = 원본 ID).
    수동 분개는 INFLOW / RETURN만 허용.
    """

    def from_payment(
        self,
        payment: Payment,
        staff_name: str | None = None,
        entry_id: str | None = None,
    ) -> LedgerEntry:
        """급여 지급 → SALARY_OUTFLOW 분개

        amount = amount_paid (expected가 아님)
        """
        name = staff_name or "Staff"
        return LedgerEntry(
            id=entry_id or new_id(),
            owner_id=payment.owner_id,
            kind=LedgerKind.SALARY_OUTFLOW,
            amount=payment.amount_paid,
            date=payment.date,
            description=f"{SALARY_DESCRIPTION_PREFIX} {name}",
            reference_id=payment.id,
        )

    def from_expense(self, expense: Expense, entry_id: str | None = None) -> LedgerEntry:
        """시장 지출 → EXPENSE_OUTFLOW 분개"""
        return LedgerEntry(
            id=entry_id or new_id(),
            owner_id=expense.owner_id,
            kind=LedgerKind.EXPENSE_OUTFLOW,
            amount=expense.amount,
            date=expense.date,
            description=f"{EXPENSE_DESCRIPTION_PREFIX} {expense.description}",
            reference_id=expense.id,
        )

    def manual(
        self,
        owner_id: str,
        kind: LedgerKind,
        amount: Decimal,
        day: date,
        description: str = "",
        entry_id: str | None = None,
    ) -> LedgerEntry:
        """수금/반환 수동 분개

        Raises:
            Forbidden: 파생 종류(SALARY_OUTFLOW, EXPENSE_OUTFLOW)를 요청한 경우
        """
        if kind not in MANUAL_KINDS:
            raise Forbidden(f"{kind.value} 분개는 직접 생성할 수 없습니다")

        return LedgerEntry(
            id=entry_id or new_id(),
            owner_id=owner_id,
            kind=kind,
            amount=amount,
            date=day,
            description=self.default_description(kind, description),
            reference_id=None,
        )

    @staticmethod
    def default_description(kind: LedgerKind, description: str | None) -> str:
        """빈 설명이면 종류별 기본 문구로 대체"""
        text = (description or "").strip()
        if text:
            return text
        return DEFAULT_DESCRIPTIONS.get(kind, kind.value)

    @staticmethod
    def staff_names(staff: list[Staff]) -> dict[str, str]:
        """staff_id → 이름 매핑 (설명 문구 생성용)"""
        return {s.id: s.name for s in staff}
