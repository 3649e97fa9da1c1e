"""
잔액 재계산 일관성 테스트

임의의 기록/삭제 순서를 재생하면서, 엔진 밖에서 따로 누적한 합계
(Σ INFLOW − Σ 급여/지출/반환)와 get_balance가 매 단계 일치하는지 확인.
인메모리 / SQLite 저장소 모두 검증.
"""

import random
from decimal import Decimal

import pytest

from adapters.db.record_store import SQLiteRecordStore
from adapters.interfaces import IRecordStore
from adapters.memory.record_store import InMemoryRecordStore
from core.constants import ZERO
from core.domain.errors import DuplicateEntry
from core.ledger.engine import LedgerEngine
from core.ledger.staff import StaffRegistry
from core.types import Identity, LedgerKind

OPERATIONS = [
    "record_payment",
    "delete_payment",
    "record_expense",
    "delete_expense",
    "record_manual_entry",
    "delete_manual_entry",
]


def _amount(rng: random.Random) -> Decimal:
    return Decimal(rng.randint(0, 200_000)) / 100


def _day(rng: random.Random) -> str:
    return f"2025-{rng.randint(1, 3):02d}-{rng.randint(1, 28):02d}"


async def _replay(store: IRecordStore, identity: Identity, seed: int, steps: int) -> None:
    """seed로 정해진 연산 순서를 재생하며 매 단계 잔액 비교"""
    rng = random.Random(seed)
    engine = LedgerEngine(store)
    registry = StaffRegistry(store)
    staff_ids = [
        (await registry.register_staff(identity, name, daily_rate="600")).id
        for name in ("Rahim", "Karim")
    ]

    # 엔진과 무관하게 유지하는 기대 상태: 레코드 ID → 잔액에 미치는 부호 있는 금액
    payments: dict[str, Decimal] = {}
    payment_keys: dict[tuple[str, str], str] = {}
    expenses: dict[str, Decimal] = {}
    manual: dict[str, Decimal] = {}

    for step in range(steps):
        op = rng.choice(OPERATIONS)

        if op == "record_payment":
            staff_id = rng.choice(staff_ids)
            day = _day(rng)
            amount = _amount(rng)
            if (staff_id, day) in payment_keys:
                with pytest.raises(DuplicateEntry):
                    await engine.record_payment(identity, staff_id, day, amount)
            else:
                payment, _ = await engine.record_payment(identity, staff_id, day, amount)
                payments[payment.id] = -amount
                payment_keys[(staff_id, day)] = payment.id

        elif op == "delete_payment" and payments:
            payment_id = rng.choice(sorted(payments))
            await engine.delete_payment(identity, payment_id)
            del payments[payment_id]
            key = next(k for k, v in payment_keys.items() if v == payment_id)
            del payment_keys[key]

        elif op == "record_expense":
            amount = _amount(rng)
            expense, _ = await engine.record_expense(identity, f"item {step}", amount, _day(rng))
            expenses[expense.id] = -amount

        elif op == "delete_expense" and expenses:
            expense_id = rng.choice(sorted(expenses))
            await engine.delete_expense(identity, expense_id)
            del expenses[expense_id]

        elif op == "record_manual_entry":
            kind = rng.choice([LedgerKind.INFLOW, LedgerKind.RETURN])
            amount = _amount(rng)
            entry = await engine.record_manual_entry(identity, kind, amount, _day(rng))
            manual[entry.id] = amount if kind is LedgerKind.INFLOW else -amount

        elif op == "delete_manual_entry" and manual:
            entry_id = rng.choice(sorted(manual))
            await engine.delete_manual_entry(identity, entry_id)
            del manual[entry_id]

        expected = sum(
            [*payments.values(), *expenses.values(), *manual.values()], ZERO
        )
        assert await engine.get_balance(identity) == expected, f"seed={seed} step={step} op={op}"

        entries = await engine.list_entries(identity)
        assert len(entries) == len(payments) + len(expenses) + len(manual)


class TestBalanceReplay:
    """임의 연산 순서 재생 후 잔액 = 기대 합계"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("seed", [1, 7, 42, 2025])
    async def test_memory_store(self, identity: Identity, seed: int) -> None:
        await _replay(InMemoryRecordStore(), identity, seed, steps=80)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("seed", [3, 99])
    async def test_sqlite_store(
        self, sqlite_store: SQLiteRecordStore, identity: Identity, seed: int
    ) -> None:
        await _replay(sqlite_store, identity, seed, steps=50)

    @pytest.mark.asyncio
    async def test_owners_do_not_mix(
        self, identity: Identity, other_identity: Identity
    ) -> None:
        """같은 저장소에서 다른 소유자의 재생이 서로의 잔액에 영향 없음"""
        store = InMemoryRecordStore()

        await _replay(store, identity, seed=5, steps=40)
        balance = await LedgerEngine(store).get_balance(identity)
        await _replay(store, other_identity, seed=6, steps=40)

        assert await LedgerEngine(store).get_balance(identity) == balance
