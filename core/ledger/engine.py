"""
Ledger Engine

급여 지급 / 시장 지출 / 수금·반환을 기록하고 잔액을 계산.

모든 연산은 소유자 Identity를 명시적으로 전달받으며 (전역 인증 상태 없음),
도메인 레코드와 파생 분개는 하나의 TransactionalWrite로 함께 반영됨.
잔액은 캐시하지 않고 항상 현재 분개 전체에서 다시 계산.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from core.constants import ZERO, Collections
from core.domain.errors import (
    DuplicateEntry,
    Forbidden,
    InsufficientFunds,
    InvalidInput,
    NotFound,
)
from core.domain.models import Expense, LedgerEntry, Payment, Staff, new_id
from core.ledger.balance import PeriodAggregate, compute_balance, compute_period_aggregate
from core.ledger.entry_builder import LedgerEntryBuilder
from core.storage.transaction import RecordMissingError, TransactionalWrite, apply_write
from core.types import Identity, LedgerKind
from core.utils.dates import parse_date
from core.utils.money import parse_amount, parse_days

if TYPE_CHECKING:
    from adapters.interfaces import IRecordStore, Unsubscribe

logger = logging.getLogger(__name__)


BalanceCallback = Callable[[list[LedgerEntry], Decimal], Awaitable[None]]


def _parse_day(value: Any) -> date:
    try:
        return parse_date(value)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"날짜 형식이 아닙니다: {value!r}") from e


def _parse_kind(value: LedgerKind | str) -> LedgerKind:
    try:
        return LedgerKind(value)
    except ValueError as e:
        raise InvalidInput(f"알 수 없는 분개 종류: {value!r}") from e


class LedgerEngine:
    """Ledger Engine

    한 소유자의 분개 집합을 관리하고 잔액/기간 집계를 제공.

    Args:
        store: Record Store (영속 또는 휘발 - 엔진은 구분하지 않음)
        block_insufficient_funds: True면 잔액을 음수로 만드는 지출 차단

    사용 예시:
    ```python
    engine = LedgerEngine(store)
    payment, entry = await engine.record_payment(
        identity, staff_id, "2025-01-10", "500", days_covered=1
    )
    balance = await engine.get_balance(identity)
    ```
    """

    def __init__(
        self,
        store: IRecordStore,
        block_insufficient_funds: bool = False,
    ):
        self.store = store
        self.block_insufficient_funds = block_insufficient_funds
        self.builder = LedgerEntryBuilder()

    @property
    def is_durable(self) -> bool:
        """연결된 저장소가 세션 종료 후에도 유지되는지"""
        return self.store.is_durable

    # 순수 계산 (재노출)
    compute_balance = staticmethod(compute_balance)
    compute_period_aggregate = staticmethod(compute_period_aggregate)

    # =========================================================================
    # 급여 지급
    # =========================================================================

    async def record_payment(
        self,
        identity: Identity,
        staff_id: str,
        day: date | str,
        amount_paid: Any,
        days_covered: Any = 1,
    ) -> tuple[Payment, LedgerEntry]:
        """급여 지급 기록

        Payment와 SALARY_OUTFLOW 분개를 함께 생성.

        Args:
            identity: 소유자
            staff_id: 직원 ID
            day: 지급일 (달력 날짜)
            amount_paid: 지급액 (0 이상)
            days_covered: 지급 대상 일수 (1 이상)

        Returns:
            (Payment, LedgerEntry)

        Raises:
            InvalidAmount: 금액 음수/숫자 아님, 일수 1 미만
            NotFound: 직원이 없는 경우
            DuplicateEntry: 같은 직원/같은 날짜의 기록이 이미 있는 경우
            InsufficientFunds: 잔액 부족 (정책 활성 시)
        """
        amount = parse_amount(amount_paid, "amount_paid")
        days = parse_days(days_covered)
        pay_date = _parse_day(day)

        staff = await self._load_staff(identity, staff_id)

        existing = await self._find_payment(identity, staff.id, pay_date)
        if existing is not None:
            raise DuplicateEntry(
                f"{staff.name}: {pay_date.isoformat()} 급여 기록이 이미 있습니다",
                existing_id=existing.id,
            )

        await self._ensure_funds(identity, -amount)

        payment = Payment.create(identity.id, staff, pay_date, amount, days)
        entry = self.builder.from_payment(payment, staff.name)

        await self._commit(
            TransactionalWrite()
            .put(Collections.PAYMENTS, payment.id, payment.to_dict())
            .put(Collections.LEDGER, entry.id, entry.to_dict()),
        )

        logger.info(
            f"급여 기록: staff={staff.id}, date={pay_date}, paid={amount}, "
            f"expected={payment.expected_amount}, due={payment.due_amount}"
        )
        return payment, entry

    async def update_payment(
        self,
        identity: Identity,
        payment_id: str,
        amount_paid: Any,
        day: date | str,
        days_covered: Any = None,
    ) -> Payment:
        """급여 기록 수정

        expected/due를 다시 계산하고 연결된 분개의 금액/날짜도 함께 갱신.
        days_covered가 None이면 기존 값 유지.

        Raises:
            NotFound: 기록이 없는 경우
            DuplicateEntry: 변경한 날짜에 같은 직원의 다른 기록이 있는 경우
        """
        amount = parse_amount(amount_paid, "amount_paid")
        pay_date = _parse_day(day)

        payment = await self._load_payment(identity, payment_id)
        days = payment.days_covered if days_covered is None else parse_days(days_covered)

        if pay_date != payment.date:
            other = await self._find_payment(identity, payment.staff_id, pay_date)
            if other is not None and other.id != payment.id:
                raise DuplicateEntry(
                    f"{pay_date.isoformat()} 급여 기록이 이미 있습니다",
                    existing_id=other.id,
                )

        staff = await self._get_staff(identity, payment.staff_id)
        if staff is not None:
            rate = staff.daily_rate
        else:
            # 직원이 삭제된 기록은 기존 단가 유지
            rate = payment.expected_amount / payment.days_covered

        await self._ensure_funds(identity, payment.amount_paid - amount)

        expected = rate * days
        payment.amount_paid = amount
        payment.date = pay_date
        payment.days_covered = days
        payment.expected_amount = expected
        payment.due_amount = expected - amount

        write = TransactionalWrite().put(Collections.PAYMENTS, payment.id, payment.to_dict())

        entry = await self._entry_for_reference(identity, payment.id)
        if entry is not None:
            write.update(
                Collections.LEDGER,
                entry.id,
                {"amount": str(amount), "date": pay_date.isoformat()},
            )
        else:
            logger.warning(f"연결된 분개 없음, 재생성: payment={payment.id}")
            entry = self.builder.from_payment(payment, staff.name if staff else None)
            write.put(Collections.LEDGER, entry.id, entry.to_dict())

        await self._commit(write)

        logger.info(f"급여 수정: payment={payment.id}, paid={amount}, date={pay_date}")
        return payment

    async def delete_payment(self, identity: Identity, payment_id: str) -> None:
        """급여 기록 삭제 (연결된 분개 포함)

        Raises:
            NotFound: 기록이 없는 경우 (두 번째 호출 포함)
        """
        payment = await self._load_payment(identity, payment_id)

        write = TransactionalWrite().delete(Collections.PAYMENTS, payment.id)
        entry = await self._entry_for_reference(identity, payment.id)
        if entry is not None:
            write.delete(Collections.LEDGER, entry.id)

        await self._commit(write)
        logger.info(f"급여 삭제: payment={payment.id}")

    # =========================================================================
    # 시장 지출
    # =========================================================================

    async def record_expense(
        self,
        identity: Identity,
        description: str,
        amount: Any,
        day: date | str,
    ) -> tuple[Expense, LedgerEntry]:
        """시장(바자르) 지출 기록

        Expense와 EXPENSE_OUTFLOW 분개를 함께 생성.

        Raises:
            InvalidAmount: 금액 음수/숫자 아님
            InsufficientFunds: 잔액 부족 (정책 활성 시)
        """
        value = parse_amount(amount)
        spend_date = _parse_day(day)

        await self._ensure_funds(identity, -value)

        expense = Expense(
            id=new_id(),
            owner_id=identity.id,
            description=(description or "").strip(),
            amount=value,
            date=spend_date,
        )
        entry = self.builder.from_expense(expense)

        await self._commit(
            TransactionalWrite()
            .put(Collections.EXPENSES, expense.id, expense.to_dict())
            .put(Collections.LEDGER, entry.id, entry.to_dict()),
        )

        logger.info(f"지출 기록: expense={expense.id}, amount={value}, date={spend_date}")
        return expense, entry

    async def delete_expense(self, identity: Identity, expense_id: str) -> None:
        """지출 삭제 (연결된 분개 포함)"""
        expense = await self._load_expense(identity, expense_id)

        write = TransactionalWrite().delete(Collections.EXPENSES, expense.id)
        entry = await self._entry_for_reference(identity, expense.id)
        if entry is not None:
            write.delete(Collections.LEDGER, entry.id)

        await self._commit(write)
        logger.info(f"지출 삭제: expense={expense.id}")

    # =========================================================================
    # 수동 분개 (수금 / 반환)
    # =========================================================================

    async def record_manual_entry(
        self,
        identity: Identity,
        kind: LedgerKind | str,
        amount: Any,
        day: date | str,
        description: str = "",
    ) -> LedgerEntry:
        """수금(INFLOW) / 반환(RETURN) 기록

        설명이 비어 있으면 종류별 기본 문구 사용.

        Raises:
            Forbidden: 파생 종류를 요청한 경우
            InvalidAmount: 금액 음수/숫자 아님
        """
        kind = _parse_kind(kind)
        value = parse_amount(amount)
        entry = self.builder.manual(identity.id, kind, value, _parse_day(day), description)

        await self._ensure_funds(identity, entry.signed_amount)
        await self.store.put(Collections.LEDGER, entry.id, entry.to_dict())

        logger.info(f"수동 분개 기록: {kind.value} {value} ({entry.description})")
        return entry

    async def update_manual_entry(
        self,
        identity: Identity,
        entry_id: str,
        amount: Any,
        day: date | str,
        description: str = "",
    ) -> LedgerEntry:
        """수동 분개 수정

        Raises:
            NotFound: 분개가 없는 경우
            Forbidden: 파생 분개(SALARY_OUTFLOW / EXPENSE_OUTFLOW)인 경우
        """
        value = parse_amount(amount)
        entry_date = _parse_day(day)
        entry = await self._load_manual_entry(identity, entry_id)

        old_signed = entry.signed_amount
        entry.amount = value
        entry.date = entry_date
        entry.description = self.builder.default_description(entry.kind, description)

        await self._ensure_funds(identity, entry.signed_amount - old_signed)
        await self._commit(
            TransactionalWrite().update(
                Collections.LEDGER,
                entry.id,
                {
                    "amount": str(entry.amount),
                    "date": entry.date.isoformat(),
                    "description": entry.description,
                },
            )
        )

        logger.info(f"수동 분개 수정: entry={entry.id}, amount={value}")
        return entry

    async def delete_manual_entry(self, identity: Identity, entry_id: str) -> None:
        """수동 분개 삭제

        Raises:
            NotFound: 분개가 없는 경우
            Forbidden: 파생 분개인 경우 (원본 Payment/Expense를 삭제해야 함)
        """
        entry = await self._load_manual_entry(identity, entry_id)

        await self._ensure_funds(identity, -entry.signed_amount)
        if not await self.store.delete(Collections.LEDGER, entry.id):
            raise NotFound(f"분개를 찾을 수 없습니다: {entry_id}")

        logger.info(f"수동 분개 삭제: entry={entry.id}")

    # =========================================================================
    # 조회 / 잔액
    # =========================================================================

    async def list_entries(self, identity: Identity) -> list[LedgerEntry]:
        """분개 목록 (날짜 최신순)"""
        records = await self.store.query(Collections.LEDGER, identity.id)
        entries = [LedgerEntry.from_dict(r) for r in records]
        return sorted(entries, key=lambda e: e.date, reverse=True)

    async def list_payments(
        self,
        identity: Identity,
        staff_id: str | None = None,
    ) -> list[Payment]:
        """급여 기록 목록 (날짜 최신순)"""
        records = await self.store.query(Collections.PAYMENTS, identity.id)
        payments = [Payment.from_dict(r) for r in records]
        if staff_id is not None:
            payments = [p for p in payments if p.staff_id == staff_id]
        return sorted(payments, key=lambda p: p.date, reverse=True)

    async def list_expenses(self, identity: Identity) -> list[Expense]:
        """지출 목록 (날짜 최신순)"""
        records = await self.store.query(Collections.EXPENSES, identity.id)
        expenses = [Expense.from_dict(r) for r in records]
        return sorted(expenses, key=lambda e: e.date, reverse=True)

    async def get_balance(self, identity: Identity) -> Decimal:
        """현재 잔액 (전체 분개에서 다시 계산)"""
        return compute_balance(await self.list_entries(identity))

    async def get_period_aggregate(
        self,
        identity: Identity,
        year: int,
        month: int,
    ) -> PeriodAggregate:
        """월별 수입/지출/순액"""
        return compute_period_aggregate(await self.list_entries(identity), year, month)

    async def watch_balance(
        self,
        identity: Identity,
        callback: BalanceCallback,
    ) -> Unsubscribe:
        """분개 변경 구독

        구독 즉시 1회, 이후 분개가 바뀔 때마다 (분개 목록, 잔액)을 전달.

        Returns:
            구독 해제 함수
        """

        async def on_change(records: list[dict[str, Any]]) -> None:
            entries = [LedgerEntry.from_dict(r) for r in records]
            await callback(entries, compute_balance(entries))

        return await self.store.subscribe(Collections.LEDGER, identity.id, on_change)

    # =========================================================================
    # 내부 헬퍼
    # =========================================================================

    async def _commit(self, write: TransactionalWrite) -> None:
        """연결된 쓰기 반영 (그 사이 삭제된 레코드는 NotFound로 변환)"""
        try:
            await apply_write(self.store, write)
        except RecordMissingError as e:
            raise NotFound(f"기록을 찾을 수 없습니다: {e.collection}/{e.record_id}") from e

    async def _ensure_funds(self, identity: Identity, balance_delta: Decimal) -> None:
        """잔액 부족 검사 (정책 활성 시, 잔액을 줄이는 변경에만 적용)"""
        if not self.block_insufficient_funds or balance_delta >= ZERO:
            return

        balance = await self.get_balance(identity)
        if balance + balance_delta < ZERO:
            raise InsufficientFunds(
                f"잔액 부족: 현재 {balance}, 변경 {balance_delta}",
                balance=balance,
                amount=-balance_delta,
            )

    async def _get_owned(
        self,
        identity: Identity,
        collection: str,
        record_id: str,
    ) -> dict[str, Any] | None:
        """소유자 범위 단건 조회 (다른 소유자 레코드는 없는 것으로 취급)"""
        record = await self.store.get(collection, record_id)
        if record is None or record.get("owner_id") != identity.id:
            return None
        return record

    async def _get_staff(self, identity: Identity, staff_id: str) -> Staff | None:
        record = await self._get_owned(identity, Collections.STAFF, staff_id)
        return Staff.from_dict(record) if record else None

    async def _load_staff(self, identity: Identity, staff_id: str) -> Staff:
        staff = await self._get_staff(identity, staff_id)
        if staff is None:
            raise NotFound(f"직원을 찾을 수 없습니다: {staff_id}")
        return staff

    async def _load_payment(self, identity: Identity, payment_id: str) -> Payment:
        record = await self._get_owned(identity, Collections.PAYMENTS, payment_id)
        if record is None:
            raise NotFound(f"급여 기록을 찾을 수 없습니다: {payment_id}")
        return Payment.from_dict(record)

    async def _load_expense(self, identity: Identity, expense_id: str) -> Expense:
        record = await self._get_owned(identity, Collections.EXPENSES, expense_id)
        if record is None:
            raise NotFound(f"지출 기록을 찾을 수 없습니다: {expense_id}")
        return Expense.from_dict(record)

    async def _load_manual_entry(self, identity: Identity, entry_id: str) -> LedgerEntry:
        record = await self._get_owned(identity, Collections.LEDGER, entry_id)
        if record is None:
            raise NotFound(f"분개를 찾을 수 없습니다: {entry_id}")

        entry = LedgerEntry.from_dict(record)
        if entry.is_derived:
            raise Forbidden(
                f"{entry.kind.value} 분개는 원본 기록을 통해서만 변경할 수 있습니다"
            )
        return entry

    async def _find_payment(
        self,
        identity: Identity,
        staff_id: str,
        pay_date: date,
    ) -> Payment | None:
        for record in await self.store.query(Collections.PAYMENTS, identity.id):
            payment = Payment.from_dict(record)
            if payment.staff_id == staff_id and payment.date == pay_date:
                return payment
        return None

    async def _entry_for_reference(
        self,
        identity: Identity,
        reference_id: str,
    ) -> LedgerEntry | None:
        for record in await self.store.query(Collections.LEDGER, identity.id):
            if record.get("reference_id") == reference_id:
                return LedgerEntry.from_dict(record)
        return None
