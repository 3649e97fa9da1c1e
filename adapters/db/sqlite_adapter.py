"""
SQLite 어댑터

WAL 모드로 SQLite 연결 관리.
Web 프로세스의 여러 요청이 같은 DB 파일에 접근 가능하도록 설정.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite

logger = logging.getLogger(__name__)


async def create_connection(db_path: Path | str) -> aiosqlite.Connection:
    """SQLite 연결 생성 (WAL 모드)

    Args:
        db_path: DB 파일 경로

    Returns:
        aiosqlite 연결 객체
    """
    db_path_str = str(db_path)

    # 디렉토리가 없으면 생성
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path_str)

    await conn.execute("PRAGMA journal_mode=WAL")
    await conn.execute("PRAGMA busy_timeout=30000")  # 30초 대기

    logger.info(f"SQLite 연결 생성: {db_path_str}")

    return conn


class SQLiteAdapter:
    """SQLite 어댑터

    트랜잭션 컨텍스트 매니저 제공.

    Args:
        db_path: DB 파일 경로

    사용 예시:
    ```python
    async with SQLiteAdapter(db_path) as adapter:
        async with adapter.transaction():
            await adapter.execute("INSERT INTO ...")
    ```
    """

    def __init__(self, db_path: Path | str):
        self.db_path = Path(db_path)
        self._conn: aiosqlite.Connection | None = None
        # 연결 하나를 공유하므로 트랜잭션은 한 번에 하나씩
        self._tx_lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        """연결 상태 확인"""
        return self._conn is not None

    async def connect(self) -> None:
        if self._conn is not None:
            return
        self._conn = await create_connection(self.db_path)

    async def close(self) -> None:
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            logger.info("SQLite 연결 종료")

    async def execute(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> aiosqlite.Cursor:
        """SQL 실행"""
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        if parameters:
            return await self._conn.execute(sql, parameters)
        return await self._conn.execute(sql)

    async def fetchone(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> tuple[Any, ...] | None:
        """단일 행 조회"""
        cursor = await self.execute(sql, parameters)
        return await cursor.fetchone()

    async def fetchall(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> list[tuple[Any, ...]]:
        """전체 행 조회"""
        cursor = await self.execute(sql, parameters)
        return list(await cursor.fetchall())

    async def commit(self) -> None:
        if self._conn is not None:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn is not None:
            await self._conn.rollback()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """트랜잭션 컨텍스트 매니저

        성공 시 자동 커밋, 예외 시 자동 롤백.
        시작부터 커밋/롤백까지 잠금을 유지하여 동시 요청의 쓰기가
        다른 트랜잭션의 COMMIT에 섞여 들어가지 않게 함.
        """
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        async with self._tx_lock:
            try:
                yield self._conn
                await self._conn.commit()
            except Exception:
                await self._conn.rollback()
                raise

    async def table_exists(self, table_name: str) -> bool:
        """테이블 존재 여부 확인"""
        result = await self.fetchone(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
            (table_name,),
        )
        return result is not None

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "SQLiteAdapter":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


async def init_schema(adapter: SQLiteAdapter) -> None:
    """스키마 초기화 (테이블 생성)

    모든 컬렉션(staff, payments, expenses, ledger)은 records 문서 테이블 하나에
    (collection, record_id) 키로 저장. owner_id는 소유자 필터용으로 별도 컬럼 유지.

    Args:
        adapter: 연결된 SQLiteAdapter
    """
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS records (
            collection   TEXT NOT NULL,
            record_id    TEXT NOT NULL,
            owner_id     TEXT NOT NULL,
            data_json    TEXT NOT NULL,

            created_at   TEXT NOT NULL DEFAULT (datetime('now')),
            updated_at   TEXT NOT NULL DEFAULT (datetime('now')),

            PRIMARY KEY (collection, record_id)
        )
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_records_owner
        ON records(collection, owner_id)
    """)

    await adapter.commit()

    logger.info("스키마 초기화 완료")
