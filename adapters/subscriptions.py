"""
구독 허브

Record Store 구현체가 공유하는 변경 알림 관리.
(collection, owner_id) 단위로 콜백을 보관하고, 변경 시 현재 레코드 전체를 전달.
"""

import logging
from typing import Any

from adapters.interfaces import RecordCallback, Unsubscribe

logger = logging.getLogger(__name__)


class SubscriptionHub:
    """구독 콜백 관리자

    콜백 예외는 로그만 남기고 다른 구독자 알림은 계속 진행
    (이미 커밋된 쓰기를 실패로 돌리지 않음).
    """

    def __init__(self) -> None:
        self._callbacks: dict[tuple[str, str], list[RecordCallback]] = {}

    def add(self, collection: str, owner_id: str, callback: RecordCallback) -> Unsubscribe:
        """콜백 등록

        Returns:
            구독 해제 함수 (여러 번 호출해도 안전)
        """
        key = (collection, owner_id)
        self._callbacks.setdefault(key, []).append(callback)

        def unsubscribe() -> None:
            callbacks = self._callbacks.get(key)
            if callbacks and callback in callbacks:
                callbacks.remove(callback)
                if not callbacks:
                    del self._callbacks[key]

        return unsubscribe

    def has_subscribers(self, collection: str, owner_id: str) -> bool:
        return bool(self._callbacks.get((collection, owner_id)))

    def subscriber_count(self, collection: str | None = None) -> int:
        """구독자 수 (collection 지정 시 해당 컬렉션만)"""
        return sum(
            len(callbacks)
            for (coll, _), callbacks in self._callbacks.items()
            if collection is None or coll == collection
        )

    async def publish(
        self,
        collection: str,
        owner_id: str,
        records: list[dict[str, Any]],
    ) -> None:
        """구독자에게 현재 레코드 전체 전달"""
        for callback in list(self._callbacks.get((collection, owner_id), [])):
            try:
                await callback(records)
            except Exception:
                logger.exception(
                    f"구독 콜백 실패: collection={collection}, owner={owner_id}"
                )
