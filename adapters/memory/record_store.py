"""
인메모리 Record Store

게스트(데모) 세션용 휘발성 저장소.
IRecordStore Protocol 준수. 프로세스 종료 또는 게스트 로그아웃 시 레코드 소멸.
"""

import asyncio
import copy
import logging
from typing import Any

from adapters.interfaces import RecordCallback, Unsubscribe
from adapters.subscriptions import SubscriptionHub
from core.storage.transaction import RecordMissingError, TransactionalWrite
from core.types import WriteOp

logger = logging.getLogger(__name__)


class InMemoryRecordStore:
    """인메모리 Record Store

    dict 기반. commit()은 복사본에 모든 단계를 적용해 본 뒤
    성공했을 때만 교체하므로 전부 또는 전무.

    사용 예시:
    ```python
    store = InMemoryRecordStore()
    await store.put("staff", "s1", {"id": "s1", "owner_id": "guest-1", ...})

    # 게스트 로그아웃 시
    await store.purge_owner("guest-1")
    ```
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._hub = SubscriptionHub()
        self._lock = asyncio.Lock()

    @property
    def is_durable(self) -> bool:
        return False

    @property
    def supports_atomic_writes(self) -> bool:
        return True

    # -------------------------------------------------------------------------
    # 쓰기
    # -------------------------------------------------------------------------

    async def put(self, collection: str, record_id: str, record: dict[str, Any]) -> None:
        async with self._lock:
            self._collections.setdefault(collection, {})[record_id] = copy.deepcopy(record)
        await self._notify(collection, {record.get("owner_id")})

    async def update(self, collection: str, record_id: str, fields: dict[str, Any]) -> None:
        async with self._lock:
            current = self._collections.get(collection, {}).get(record_id)
            if current is None:
                raise RecordMissingError(collection, record_id)
            current.update(copy.deepcopy(fields))
            owner_id = current.get("owner_id")
        await self._notify(collection, {owner_id})

    async def delete(self, collection: str, record_id: str) -> bool:
        async with self._lock:
            removed = self._collections.get(collection, {}).pop(record_id, None)
        if removed is None:
            return False
        await self._notify(collection, {removed.get("owner_id")})
        return True

    async def commit(self, write: TransactionalWrite) -> None:
        """모든 단계를 원자적으로 반영"""
        touched: dict[str, set[Any]] = {}

        async with self._lock:
            staged = {
                name: {rid: dict(rec) for rid, rec in self._collections.get(name, {}).items()}
                for name in write.collections
            }

            for step in write.steps:
                records = staged[step.collection]
                owners = touched.setdefault(step.collection, set())

                if step.op is WriteOp.PUT:
                    records[step.record_id] = copy.deepcopy(step.data or {})
                    owners.add(records[step.record_id].get("owner_id"))
                elif step.op is WriteOp.UPDATE:
                    current = records.get(step.record_id)
                    if current is None:
                        raise RecordMissingError(step.collection, step.record_id)
                    current.update(copy.deepcopy(step.data or {}))
                    owners.add(current.get("owner_id"))
                else:
                    removed = records.pop(step.record_id, None)
                    if removed is not None:
                        owners.add(removed.get("owner_id"))

            self._collections.update(staged)

        for collection, owners in touched.items():
            await self._notify(collection, owners)

    async def purge_owner(self, owner_id: str) -> int:
        """소유자의 모든 레코드 삭제 (게스트 세션 종료)

        Returns:
            삭제된 레코드 수
        """
        removed = 0
        affected: list[str] = []

        async with self._lock:
            for name, records in self._collections.items():
                ids = [rid for rid, rec in records.items() if rec.get("owner_id") == owner_id]
                for rid in ids:
                    del records[rid]
                if ids:
                    removed += len(ids)
                    affected.append(name)

        for name in affected:
            await self._notify(name, {owner_id})

        logger.info(f"게스트 레코드 삭제: owner={owner_id}, count={removed}")
        return removed

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------

    async def get(self, collection: str, record_id: str) -> dict[str, Any] | None:
        record = self._collections.get(collection, {}).get(record_id)
        return copy.deepcopy(record) if record is not None else None

    async def query(self, collection: str, owner_id: str) -> list[dict[str, Any]]:
        return [
            copy.deepcopy(rec)
            for rec in self._collections.get(collection, {}).values()
            if rec.get("owner_id") == owner_id
        ]

    async def subscribe(
        self,
        collection: str,
        owner_id: str,
        callback: RecordCallback,
    ) -> Unsubscribe:
        unsubscribe = self._hub.add(collection, owner_id, callback)
        await callback(await self.query(collection, owner_id))
        return unsubscribe

    async def _notify(self, collection: str, owner_ids: set[Any]) -> None:
        for owner_id in owner_ids:
            if owner_id and self._hub.has_subscribers(collection, owner_id):
                await self._hub.publish(
                    collection, owner_id, await self.query(collection, owner_id)
                )

    # -------------------------------------------------------------------------
    # 테스트 헬퍼
    # -------------------------------------------------------------------------

    def count(self, collection: str | None = None) -> int:
        """저장된 레코드 수"""
        if collection is not None:
            return len(self._collections.get(collection, {}))
        return sum(len(records) for records in self._collections.values())

    def clear(self) -> None:
        """모든 레코드 초기화"""
        self._collections.clear()
