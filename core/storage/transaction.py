"""
TransactionalWrite - 연결된 레코드 쓰기 묶음

도메인 레코드(Payment/Expense)와 파생 분개를 하나의 논리 트랜잭션으로 묶음.
- 원자적 다중 쓰기를 지원하는 저장소: store.commit()으로 한 번에 반영
- 지원하지 않는 저장소: 추가된 순서대로(도메인 레코드 → 분개) 순차 반영,
  첫 단계 이후 실패 시 PartialWriteError
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from core.domain.errors import PartialWriteError
from core.types import WriteOp

if TYPE_CHECKING:
    from adapters.interfaces import IRecordStore

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Record Store 오류 기본 클래스"""

    pass


class RecordMissingError(StoreError, KeyError):
    """update 대상 레코드가 없음"""

    def __init__(self, collection: str, record_id: str):
        super().__init__(f"{collection}/{record_id}")
        self.collection = collection
        self.record_id = record_id


@dataclass(frozen=True)
class WriteStep:
    """쓰기 단계 1개"""

    op: WriteOp
    collection: str
    record_id: str
    data: dict[str, Any] | None = None

    def describe(self) -> str:
        return f"{self.op.value} {self.collection}/{self.record_id}"


@dataclass
class TransactionalWrite:
    """쓰기 단계 묶음

    사용 예시:
    ```python
    write = (
        TransactionalWrite()
        .put("payments", payment.id, payment.to_dict())
        .put("ledger", entry.id, entry.to_dict())
    )
    await apply_write(store, write)
    ```
    """

    steps: list[WriteStep] = field(default_factory=list)

    def put(self, collection: str, record_id: str, record: dict[str, Any]) -> "TransactionalWrite":
        self.steps.append(WriteStep(WriteOp.PUT, collection, record_id, dict(record)))
        return self

    def update(self, collection: str, record_id: str, fields: dict[str, Any]) -> "TransactionalWrite":
        self.steps.append(WriteStep(WriteOp.UPDATE, collection, record_id, dict(fields)))
        return self

    def delete(self, collection: str, record_id: str) -> "TransactionalWrite":
        self.steps.append(WriteStep(WriteOp.DELETE, collection, record_id))
        return self

    @property
    def collections(self) -> set[str]:
        """영향받는 컬렉션 (구독자 알림용)"""
        return {step.collection for step in self.steps}

    def __len__(self) -> int:
        return len(self.steps)


async def apply_step(store: IRecordStore, step: WriteStep) -> None:
    """단계 1개를 저장소에 반영"""
    if step.op is WriteOp.PUT:
        await store.put(step.collection, step.record_id, step.data or {})
    elif step.op is WriteOp.UPDATE:
        await store.update(step.collection, step.record_id, step.data or {})
    else:
        await store.delete(step.collection, step.record_id)


async def apply_write(store: IRecordStore, write: TransactionalWrite) -> None:
    """TransactionalWrite 반영

    Args:
        store: Record Store
        write: 반영할 쓰기 묶음

    Raises:
        PartialWriteError: 순차 반영 중 첫 단계 이후에서 실패한 경우
        Exception: 원자적 커밋 실패 또는 첫 단계 실패 (아무것도 반영되지 않음)
    """
    if not write.steps:
        return

    if store.supports_atomic_writes:
        await store.commit(write)
        return

    applied: list[WriteStep] = []
    for step in write.steps:
        try:
            await apply_step(store, step)
        except Exception as e:
            if not applied:
                raise
            logger.error(
                f"부분 쓰기 발생: 반영={[s.describe() for s in applied]}, "
                f"실패={step.describe()}: {e}"
            )
            raise PartialWriteError(
                f"연결된 쓰기 중 일부만 반영되었습니다 (실패: {step.describe()})",
                applied=applied,
                failed=step,
            ) from e
        applied.append(step)
