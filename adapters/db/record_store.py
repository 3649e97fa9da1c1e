"""
SQLite Record Store

영속 Record Store. records 문서 테이블에 JSON으로 저장.
IRecordStore Protocol 준수.
"""

import json
import logging
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from adapters.interfaces import RecordCallback, Unsubscribe
from adapters.subscriptions import SubscriptionHub
from core.storage.transaction import RecordMissingError, TransactionalWrite, WriteStep
from core.types import WriteOp

logger = logging.getLogger(__name__)


def _dumps(record: dict[str, Any]) -> str:
    return json.dumps(record, ensure_ascii=False, sort_keys=True)


class SQLiteRecordStore:
    """SQLite Record Store

    commit()은 하나의 DB 트랜잭션으로 모든 단계를 반영 (실패 시 롤백).

    Args:
        db: 연결된 SQLiteAdapter (init_schema 완료 상태)

    사용 예시:
    ```python
    async with SQLiteAdapter(db_path) as db:
        await init_schema(db)
        store = SQLiteRecordStore(db)
        await store.put("staff", staff.id, staff.to_dict())
    ```
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self._hub = SubscriptionHub()

    @property
    def is_durable(self) -> bool:
        return True

    @property
    def supports_atomic_writes(self) -> bool:
        return True

    # -------------------------------------------------------------------------
    # 쓰기
    # -------------------------------------------------------------------------

    async def put(self, collection: str, record_id: str, record: dict[str, Any]) -> None:
        async with self.db.transaction():
            owner_id = await self._put(collection, record_id, record)
        await self._notify(collection, {owner_id})

    async def update(self, collection: str, record_id: str, fields: dict[str, Any]) -> None:
        async with self.db.transaction():
            owner_id = await self._update(collection, record_id, fields)
        await self._notify(collection, {owner_id})

    async def delete(self, collection: str, record_id: str) -> bool:
        async with self.db.transaction():
            owner_id = await self._delete(collection, record_id)
        if owner_id is None:
            return False
        await self._notify(collection, {owner_id})
        return True

    async def commit(self, write: TransactionalWrite) -> None:
        """모든 단계를 하나의 트랜잭션으로 반영"""
        touched: dict[str, set[str]] = {}

        async with self.db.transaction():
            for step in write.steps:
                owner_id = await self._apply(step)
                if owner_id is not None:
                    touched.setdefault(step.collection, set()).add(owner_id)

        logger.debug(f"TransactionalWrite 커밋: {[s.describe() for s in write.steps]}")

        for collection, owners in touched.items():
            await self._notify(collection, owners)

    async def _apply(self, step: WriteStep) -> str | None:
        if step.op is WriteOp.PUT:
            return await self._put(step.collection, step.record_id, step.data or {})
        if step.op is WriteOp.UPDATE:
            return await self._update(step.collection, step.record_id, step.data or {})
        return await self._delete(step.collection, step.record_id)

    async def _put(self, collection: str, record_id: str, record: dict[str, Any]) -> str:
        owner_id = record.get("owner_id")
        if not owner_id:
            raise ValueError(f"owner_id 없는 레코드는 저장할 수 없습니다: {collection}/{record_id}")

        await self.db.execute(
            """
            INSERT INTO records (collection, record_id, owner_id, data_json)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(collection, record_id) DO UPDATE SET
                owner_id = excluded.owner_id,
                data_json = excluded.data_json,
                updated_at = datetime('now')
            """,
            (collection, record_id, owner_id, _dumps(record)),
        )
        return owner_id

    async def _update(self, collection: str, record_id: str, fields: dict[str, Any]) -> str:
        row = await self.db.fetchone(
            "SELECT data_json FROM records WHERE collection = ? AND record_id = ?",
            (collection, record_id),
        )
        if row is None:
            raise RecordMissingError(collection, record_id)

        record = json.loads(row[0])
        record.update(fields)

        await self.db.execute(
            """
            UPDATE records
            SET data_json = ?, owner_id = ?, updated_at = datetime('now')
            WHERE collection = ? AND record_id = ?
            """,
            (_dumps(record), record["owner_id"], collection, record_id),
        )
        return record["owner_id"]

    async def _delete(self, collection: str, record_id: str) -> str | None:
        row = await self.db.fetchone(
            "SELECT owner_id FROM records WHERE collection = ? AND record_id = ?",
            (collection, record_id),
        )
        if row is None:
            return None

        await self.db.execute(
            "DELETE FROM records WHERE collection = ? AND record_id = ?",
            (collection, record_id),
        )
        return row[0]

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------

    async def get(self, collection: str, record_id: str) -> dict[str, Any] | None:
        row = await self.db.fetchone(
            "SELECT data_json FROM records WHERE collection = ? AND record_id = ?",
            (collection, record_id),
        )
        return json.loads(row[0]) if row else None

    async def query(self, collection: str, owner_id: str) -> list[dict[str, Any]]:
        rows = await self.db.fetchall(
            """
            SELECT data_json FROM records
            WHERE collection = ? AND owner_id = ?
            ORDER BY created_at, record_id
            """,
            (collection, owner_id),
        )
        return [json.loads(row[0]) for row in rows]

    async def subscribe(
        self,
        collection: str,
        owner_id: str,
        callback: RecordCallback,
    ) -> Unsubscribe:
        unsubscribe = self._hub.add(collection, owner_id, callback)
        await callback(await self.query(collection, owner_id))
        return unsubscribe

    async def _notify(self, collection: str, owner_ids: set[str]) -> None:
        for owner_id in owner_ids:
            if self._hub.has_subscribers(collection, owner_id):
                await self._hub.publish(
                    collection, owner_id, await self.query(collection, owner_id)
                )
