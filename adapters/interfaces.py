"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 구현체 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from typing import TYPE_CHECKING, Any, Awaitable, Callable, Protocol, runtime_checkable

from core.types import Identity

if TYPE_CHECKING:
    from core.storage.transaction import TransactionalWrite


# 구독 콜백: 소유자의 현재 레코드 전체 목록을 전달받음
RecordCallback = Callable[[list[dict[str, Any]]], Awaitable[None]]
Unsubscribe = Callable[[], None]


@runtime_checkable
class IRecordStore(Protocol):
    """레코드 저장소 인터페이스

    컬렉션/ID 단위 문서 저장소. 레코드는 JSON 호환 dict이며
    반드시 "owner_id" 필드를 가짐.

    영속(SQLite) / 휘발(인메모리 게스트) 두 구현체가 있으며
    Ledger Engine은 어느 쪽인지 분기하지 않음.
    """

    @property
    def is_durable(self) -> bool:
        """세션 종료 후에도 레코드가 유지되는지"""
        ...

    @property
    def supports_atomic_writes(self) -> bool:
        """commit()으로 다중 레코드 원자적 쓰기를 지원하는지"""
        ...

    # -------------------------------------------------------------------------
    # 쓰기 (ID 기준 멱등)
    # -------------------------------------------------------------------------

    async def put(self, collection: str, record_id: str, record: dict[str, Any]) -> None:
        """레코드 생성/덮어쓰기"""
        ...

    async def update(self, collection: str, record_id: str, fields: dict[str, Any]) -> None:
        """일부 필드 갱신

        Raises:
            RecordMissingError: 레코드가 없는 경우
        """
        ...

    async def delete(self, collection: str, record_id: str) -> bool:
        """레코드 삭제

        Returns:
            삭제 여부 (없던 레코드면 False)
        """
        ...

    async def commit(self, write: "TransactionalWrite") -> None:
        """여러 단계를 한 번에 반영 (전부 또는 전무)"""
        ...

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------

    async def get(self, collection: str, record_id: str) -> dict[str, Any] | None:
        """단건 조회"""
        ...

    async def query(self, collection: str, owner_id: str) -> list[dict[str, Any]]:
        """소유자 기준 전체 조회"""
        ...

    async def subscribe(
        self,
        collection: str,
        owner_id: str,
        callback: RecordCallback,
    ) -> Unsubscribe:
        """변경 구독

        구독 즉시 1회, 이후 해당 컬렉션이 바뀔 때마다 소유자의
        현재 레코드 전체를 콜백으로 전달 (at-least-once).

        Returns:
            구독 해제 함수
        """
        ...


@runtime_checkable
class IIdentityProvider(Protocol):
    """신원 제공자 인터페이스

    토큰을 명시적으로 전달받아 Identity를 돌려줌 (전역 인증 상태 없음).
    """

    async def current_identity(self, token: str) -> Identity:
        """토큰의 Identity 조회

        Raises:
            AuthenticationError: 토큰이 잘못되었거나 만료/로그아웃된 경우
        """
        ...

    async def sign_out(self, token: str) -> Identity:
        """로그아웃 (토큰 무효화)

        Returns:
            로그아웃한 Identity
        """
        ...
