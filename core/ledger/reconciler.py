"""
Ledger Reconciler

원본 레코드(Payment/Expense)와 파생 분개 사이의 불일치 감지 및 복구.

원자적 다중 쓰기를 지원하지 않는 저장소에서 PartialWriteError가 발생했거나
다른 세션이 동시에 삭제한 경우 남는 불일치를 정리:
- orphan_entry: 원본이 없는 파생 분개 → 삭제
- missing_entry: 분개가 없는 원본 → 분개 재생성
- mismatch: 금액/날짜가 원본과 다른 분개 → 원본 기준으로 맞춤
- duplicate_entry: 같은 원본을 가리키는 두 번째 이후 파생 분개 → 삭제

수동 분개(INFLOW / RETURN)는 대상이 아님.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from core.constants import Collections
from core.domain.models import Expense, LedgerEntry, Payment, Staff
from core.ledger.entry_builder import LedgerEntryBuilder
from core.storage.transaction import TransactionalWrite, apply_write
from core.types import Identity, LedgerKind

if TYPE_CHECKING:
    from adapters.interfaces import IRecordStore

logger = logging.getLogger(__name__)


@dataclass
class DriftInfo:
    """불일치 1건"""

    drift_kind: str  # orphan_entry, missing_entry, mismatch, duplicate_entry
    record_id: str
    expected: dict[str, Any]
    actual: dict[str, Any]
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "drift_kind": self.drift_kind,
            "record_id": self.record_id,
            "expected": self.expected,
            "actual": self.actual,
            "description": self.description,
        }


@dataclass
class ReconcileReport:
    """정합 검사 결과"""

    drifts: list[DriftInfo] = field(default_factory=list)
    repaired: bool = False

    @property
    def is_clean(self) -> bool:
        return not self.drifts

    def count(self, drift_kind: str) -> int:
        return sum(1 for d in self.drifts if d.drift_kind == drift_kind)

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_clean": self.is_clean,
            "repaired": self.repaired,
            "orphan_entries": self.count("orphan_entry"),
            "missing_entries": self.count("missing_entry"),
            "mismatches": self.count("mismatch"),
            "duplicate_entries": self.count("duplicate_entry"),
            "drifts": [d.to_dict() for d in self.drifts],
        }


class LedgerReconciler:
    """원본 ↔ 파생 분개 정합 검사/복구

    Args:
        store: Record Store

    사용 예시:
    ```python
    reconciler = LedgerReconciler(store)
    report = await reconciler.scan(identity)
    if not report.is_clean:
        await reconciler.repair(identity)
    ```
    """

    def __init__(self, store: IRecordStore):
        self.store = store
        self.builder = LedgerEntryBuilder()

    async def scan(self, identity: Identity) -> ReconcileReport:
        """불일치 감지 (저장소 변경 없음)"""
        report, _ = await self._detect(identity)

        if report.is_clean:
            logger.debug(f"정합 검사 통과: owner={identity.id}")
        else:
            logger.warning(
                f"정합 불일치 감지: owner={identity.id}, "
                f"orphan={report.count('orphan_entry')}, "
                f"missing={report.count('missing_entry')}, "
                f"mismatch={report.count('mismatch')}, "
                f"duplicate={report.count('duplicate_entry')}"
            )
        return report

    async def repair(self, identity: Identity) -> ReconcileReport:
        """불일치 복구

        Returns:
            복구 전 감지된 불일치 목록 (repaired=True)
        """
        report, write = await self._detect(identity)
        if report.is_clean:
            return report

        await apply_write(self.store, write)
        report.repaired = True

        logger.info(f"정합 복구 완료: owner={identity.id}, {len(write)}건 반영")
        return report

    # -------------------------------------------------------------------------
    # 감지
    # -------------------------------------------------------------------------

    async def _detect(self, identity: Identity) -> tuple[ReconcileReport, TransactionalWrite]:
        owner = identity.id
        payments = {
            r["id"]: Payment.from_dict(r)
            for r in await self.store.query(Collections.PAYMENTS, owner)
        }
        expenses = {
            r["id"]: Expense.from_dict(r)
            for r in await self.store.query(Collections.EXPENSES, owner)
        }
        staff = [Staff.from_dict(r) for r in await self.store.query(Collections.STAFF, owner)]
        names = self.builder.staff_names(staff)

        entries = [LedgerEntry.from_dict(r) for r in await self.store.query(Collections.LEDGER, owner)]
        derived = [e for e in entries if e.is_derived]

        report = ReconcileReport()
        write = TransactionalWrite()
        linked: set[str] = set()

        for entry in derived:
            source = self._source_for(entry, payments, expenses)
            if source is None:
                report.drifts.append(DriftInfo(
                    drift_kind="orphan_entry",
                    record_id=entry.id,
                    expected={},
                    actual={"kind": entry.kind.value, "reference_id": entry.reference_id},
                    description=f"원본 없는 분개: {entry.description}",
                ))
                write.delete(Collections.LEDGER, entry.id)
                continue

            if source.id in linked:
                # 엔진은 조회 순서상 첫 분개만 갱신하므로 나머지는 중복
                report.drifts.append(DriftInfo(
                    drift_kind="duplicate_entry",
                    record_id=entry.id,
                    expected={},
                    actual={"kind": entry.kind.value, "reference_id": entry.reference_id},
                    description=f"같은 원본의 중복 분개: {entry.description}",
                ))
                write.delete(Collections.LEDGER, entry.id)
                continue

            linked.add(source.id)
            amount = source.amount_paid if isinstance(source, Payment) else source.amount
            if entry.amount != amount or entry.date != source.date:
                report.drifts.append(DriftInfo(
                    drift_kind="mismatch",
                    record_id=entry.id,
                    expected={"amount": str(amount), "date": source.date.isoformat()},
                    actual={"amount": str(entry.amount), "date": entry.date.isoformat()},
                    description=f"분개와 원본 불일치: {entry.description}",
                ))
                write.update(
                    Collections.LEDGER,
                    entry.id,
                    {"amount": str(amount), "date": source.date.isoformat()},
                )

        for payment in payments.values():
            if payment.id not in linked:
                entry = self.builder.from_payment(payment, names.get(payment.staff_id))
                report.drifts.append(self._missing(payment.id, entry))
                write.put(Collections.LEDGER, entry.id, entry.to_dict())

        for expense in expenses.values():
            if expense.id not in linked:
                entry = self.builder.from_expense(expense)
                report.drifts.append(self._missing(expense.id, entry))
                write.put(Collections.LEDGER, entry.id, entry.to_dict())

        return report, write

    @staticmethod
    def _source_for(
        entry: LedgerEntry,
        payments: dict[str, Payment],
        expenses: dict[str, Expense],
    ) -> Payment | Expense | None:
        if entry.kind is LedgerKind.SALARY_OUTFLOW:
            return payments.get(entry.reference_id or "")
        return expenses.get(entry.reference_id or "")

    @staticmethod
    def _missing(source_id: str, entry: LedgerEntry) -> DriftInfo:
        return DriftInfo(
            drift_kind="missing_entry",
            record_id=source_id,
            expected={"kind": entry.kind.value, "amount": str(entry.amount)},
            actual={},
            description=f"분개 없는 원본: {entry.description}",
        )
